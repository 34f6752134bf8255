"""Account lifecycle: registration, login, password and email verification flows."""

import logging
import math
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from cocktails.exceptions import ApiError
from cocktails.models import Cocktail, Favorite, Follow
from cocktails.repos import UserRepo
from cocktails.services.email import EmailDeliveryError, EmailService, verification_url
from cocktails.services.realtime import realtime_service
from cocktails.tokens import (
    RESET_TOKEN_TTL,
    VERIFICATION_TOKEN_TTL,
    create_expiring_token_pair,
    generate_token,
    hash_token,
)

User = get_user_model()
logger = logging.getLogger(__name__)

RESEND_COOLDOWN = timedelta(seconds=30)
VERIFICATION_REUSE_WINDOW = timedelta(minutes=2)

GENERIC_RESET_MESSAGE = "If that email exists, a reset link has been sent."
GENERIC_VERIFY_MESSAGE = "If that email exists, a verification link has been sent."


class AccountService:
    """Encapsulate the auth flows so views stay thin."""

    def __init__(self, email_service=None, realtime=None, user_repo=None):
        self.email = email_service or EmailService()
        self.realtime = realtime or realtime_service
        self.users = user_repo or UserRepo()

    def _find_by_email(self, email):
        return self.users.get_by_email(email)

    def _issue_verification(self, user):
        """
        Store a fresh verification hash and mail the raw token.

        A still-valid token (double submit) is kept and nothing is sent.
        """
        if (
            user.email_verification_token
            and user.email_verification_expire
            and timezone.now() + VERIFICATION_REUSE_WINDOW < user.email_verification_expire
        ):
            return None
        pair = create_expiring_token_pair(VERIFICATION_TOKEN_TTL)
        user.email_verification_token = pair.hashed
        user.email_verification_expire = pair.expire
        user.save(update_fields=["email_verification_token", "email_verification_expire", "updated_at"])
        self.email.send_verification_email(user, pair.raw)
        return pair.raw

    def register(self, data):
        """Create the account, mail verification + welcome, announce the new member."""
        email = data["email"]
        username = data["username"]
        if User.objects.filter(Q(email__iexact=email) | Q(username__iexact=username)).exists():
            raise ApiError(400, "User already exists", "USER_EXISTS")

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=username,
                    email=email,
                    password=data["password"],
                    name=data.get("name", ""),
                    country=(data.get("country") or "").upper(),
                    is_verified=settings.AUTO_VERIFY_USERS,
                )
                if not user.is_verified:
                    self._issue_verification(user)
        except EmailDeliveryError:
            raise ApiError(500, "Could not send verification email", "EMAIL_FAILED")

        # welcome mail is a courtesy, the account is usable without it
        try:
            self.email.send_welcome_email(user)
        except EmailDeliveryError:
            logger.warning("Welcome email to %s failed", user.email)

        self.realtime.broadcast_new_member(user)
        logger.info("Registered user %s", user.username)
        return user, generate_token(user.pk)

    def login(self, email, password):
        """Return (user, token, needs_verification) or raise 401."""
        user = self._find_by_email(email)
        if user is None or not user.is_active or not user.check_password(password):
            raise ApiError(401, "Invalid credentials", "INVALID_CREDENTIALS")
        user.last_login = timezone.now()
        user.save(update_fields=["last_login"])
        return user, generate_token(user.pk), not user.is_verified

    def update_password(self, user, current_password, new_password):
        if not user.check_password(current_password):
            raise ApiError(401, "Password is incorrect", "PASSWORD_INCORRECT")
        user.set_password(new_password)
        user.save(update_fields=["password", "updated_at"])
        logger.info("Password changed for %s", user.username)
        return generate_token(user.pk)

    def forgot_password(self, email):
        """Mail a one-hour reset link; the response never reveals whether the email exists."""
        user = self._find_by_email(email)
        if user is None:
            return GENERIC_RESET_MESSAGE
        pair = create_expiring_token_pair(RESET_TOKEN_TTL)
        user.reset_password_token = pair.hashed
        user.reset_password_expire = pair.expire
        user.save(update_fields=["reset_password_token", "reset_password_expire", "updated_at"])
        try:
            self.email.send_password_reset_email(user, pair.raw)
        except EmailDeliveryError:
            raise ApiError(500, "Could not send password reset email", "EMAIL_FAILED")
        return GENERIC_RESET_MESSAGE

    def reset_password(self, raw_token, new_password):
        user = User.objects.filter(
            reset_password_token=hash_token(raw_token),
            reset_password_expire__gt=timezone.now(),
        ).first()
        if user is None:
            raise ApiError(400, "Invalid or expired token", "TOKEN_INVALID")
        user.set_password(new_password)
        user.reset_password_token = ""
        user.reset_password_expire = None
        user.save()
        logger.info("Password reset for %s", user.username)
        return user

    def verify_email(self, raw_token):
        user = User.objects.filter(
            email_verification_token=hash_token(raw_token),
            email_verification_expire__gt=timezone.now(),
        ).first()
        if user is None:
            raise ApiError(400, "Invalid or expired verification token", "TOKEN_INVALID")
        user.is_verified = True
        user.email_verification_token = ""
        user.email_verification_expire = None
        user.save()
        return user

    def resend_verification(self, email):
        """
        Mail a new verification link, at most once per cooldown window.

        Returns response meta. When the provider fails the link itself is
        returned so the user is not stuck.
        """
        user = self._find_by_email(email)
        if user is None:
            logger.info("Resend verification for unknown email %s", email)
            return {"message": GENERIC_VERIFY_MESSAGE}
        if user.is_verified:
            return {"message": "Email already verified"}

        now = timezone.now()
        if user.last_verification_resend and now - user.last_verification_resend < RESEND_COOLDOWN:
            elapsed = (now - user.last_verification_resend).total_seconds()
            remaining = max(1, math.ceil(RESEND_COOLDOWN.total_seconds() - elapsed))
            logger.info("Resend verification rate limited for %s (%ss left)", user.email, remaining)
            raise ApiError(
                429,
                f"Please wait {remaining} seconds before requesting another verification email.",
                "RATE_LIMIT",
                retryAfterSeconds=remaining,
            )

        pair = create_expiring_token_pair(VERIFICATION_TOKEN_TTL)
        user.email_verification_token = pair.hashed
        user.email_verification_expire = pair.expire
        user.last_verification_resend = now
        user.save(update_fields=[
            "email_verification_token",
            "email_verification_expire",
            "last_verification_resend",
            "updated_at",
        ])
        try:
            self.email.send_verification_email(user, pair.raw)
        except EmailDeliveryError as exc:
            logger.error("Resend verification to %s failed: %s", user.email, exc)
            return {
                "message": "Verification token generated. Please check email service configuration.",
                "verifyUrl": verification_url(pair.raw),
            }
        logger.info("Resent verification email to %s", user.email)
        return {"message": "Verification email sent successfully"}

    def delete_account(self, user, password):
        """Remove the user and their content after password confirmation."""
        if not user.check_password(password):
            raise ApiError(401, "Incorrect password. Account deletion cancelled.", "PASSWORD_INCORRECT")

        name, email, username = user.display_name, user.email, user.username
        with transaction.atomic():
            Cocktail.objects.filter(created_by=user).delete()
            Follow.objects.filter(Q(follower=user) | Q(following=user)).delete()
            Favorite.objects.filter(user=user).delete()
            user.delete()

        try:
            self.email.send_account_deletion_email(name, email)
        except EmailDeliveryError:
            logger.warning("Account deletion email to %s failed", email)

        logger.info("User account deleted: %s (%s)", email, username)
