from datetime import timedelta
from unittest.mock import MagicMock, patch

from django.core import mail
from django.test import override_settings
from django.utils import timezone

from cocktails.exceptions import ApiError
from cocktails.models import Cocktail, Favorite, Follow, User
from cocktails.services.accounts import GENERIC_RESET_MESSAGE, GENERIC_VERIFY_MESSAGE, AccountService
from cocktails.services.email import EmailDeliveryError
from cocktails.tests.helpers import DEFAULT_PASSWORD, BartendersTestCase, make_cocktail, make_user
from cocktails.tokens import create_expiring_token_pair, decode_token, hash_token


def _registration(**overrides):
    data = {
        "username": "newbartender",
        "email": "new@example.org",
        "password": DEFAULT_PASSWORD,
        "name": "New Bartender",
        "country": "gb",
    }
    data.update(overrides)
    return data


class RegisterTests(BartendersTestCase):
    def setUp(self):
        super().setUp()
        self.realtime = MagicMock()
        self.service = AccountService(realtime=self.realtime)

    def test_register_creates_unverified_user_and_mails(self):
        user, token = self.service.register(_registration())
        self.assertEqual(decode_token(token)["id"], user.pk)
        self.assertFalse(user.is_verified)
        self.assertEqual(user.country, "GB")
        self.assertEqual(len(user.email_verification_token), 64)
        self.assertEqual([m.subject for m in mail.outbox], [
            "Verify your email - BartendersHub",
            "Welcome to BartendersHub!",
        ])
        self.realtime.broadcast_new_member.assert_called_once_with(user)

    @override_settings(AUTO_VERIFY_USERS=True)
    def test_auto_verify_skips_verification_mail(self):
        user, _ = self.service.register(_registration())
        self.assertTrue(user.is_verified)
        self.assertEqual([m.subject for m in mail.outbox], ["Welcome to BartendersHub!"])

    def test_duplicate_email_or_username_rejected(self):
        make_user(username="taken", email="taken@example.org")
        for data in (_registration(email="TAKEN@example.org"), _registration(username="Taken")):
            with self.assertRaises(ApiError) as ctx:
                self.service.register(data)
            self.assertEqual(ctx.exception.code, "USER_EXISTS")

    def test_verification_mail_failure_rolls_back(self):
        email_service = MagicMock()
        email_service.send_verification_email.side_effect = EmailDeliveryError("down")
        service = AccountService(email_service=email_service, realtime=self.realtime)
        with self.assertRaises(ApiError) as ctx:
            service.register(_registration())
        self.assertEqual((ctx.exception.status, ctx.exception.code), (500, "EMAIL_FAILED"))
        self.assertFalse(User.objects.filter(username="newbartender").exists())
        self.realtime.broadcast_new_member.assert_not_called()

    def test_welcome_mail_failure_is_tolerated(self):
        email_service = MagicMock()
        email_service.send_welcome_email.side_effect = EmailDeliveryError("down")
        service = AccountService(email_service=email_service, realtime=self.realtime)
        with self.assertLogs("cocktails.services.accounts", level="WARNING"):
            user, _ = service.register(_registration())
        self.assertTrue(User.objects.filter(pk=user.pk).exists())


class LoginTests(BartendersTestCase):
    def setUp(self):
        super().setUp()
        self.service = AccountService(realtime=MagicMock())
        self.user = make_user(email="jane@example.org")

    def test_login_is_case_insensitive_on_email(self):
        user, token, needs_verification = self.service.login("JANE@example.org", DEFAULT_PASSWORD)
        self.assertEqual(user, self.user)
        self.assertFalse(needs_verification)
        self.assertIsNotNone(User.objects.get(pk=user.pk).last_login)

    def test_unverified_login_succeeds_with_flag(self):
        make_user(email="fresh@example.org", is_verified=False)
        _, _, needs_verification = self.service.login("fresh@example.org", DEFAULT_PASSWORD)
        self.assertTrue(needs_verification)

    def test_bad_credentials(self):
        for email, password in (("jane@example.org", "wrong"), ("nobody@example.org", DEFAULT_PASSWORD)):
            with self.assertRaises(ApiError) as ctx:
                self.service.login(email, password)
            self.assertEqual(ctx.exception.status, 401)

    def test_update_password(self):
        self.service.update_password(self.user, DEFAULT_PASSWORD, "NewPassword123!")
        self.assertTrue(User.objects.get(pk=self.user.pk).check_password("NewPassword123!"))
        with self.assertRaises(ApiError):
            self.service.update_password(self.user, "wrong", "Another123!")


class PasswordResetTests(BartendersTestCase):
    def setUp(self):
        super().setUp()
        self.service = AccountService(realtime=MagicMock())
        self.user = make_user(email="jane@example.org")

    def test_forgot_password_is_generic(self):
        self.assertEqual(self.service.forgot_password("nobody@example.org"), GENERIC_RESET_MESSAGE)
        self.assertEqual(mail.outbox, [])
        self.assertEqual(self.service.forgot_password("jane@example.org"), GENERIC_RESET_MESSAGE)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn("/reset-password/", mail.outbox[0].body)

    def test_reset_with_valid_token(self):
        pair = create_expiring_token_pair(timedelta(hours=1))
        User.objects.filter(pk=self.user.pk).update(
            reset_password_token=pair.hashed, reset_password_expire=pair.expire,
        )
        self.service.reset_password(pair.raw, "Brandnew123!")
        user = User.objects.get(pk=self.user.pk)
        self.assertTrue(user.check_password("Brandnew123!"))
        self.assertEqual(user.reset_password_token, "")
        self.assertIsNone(user.reset_password_expire)

    def test_expired_reset_token(self):
        User.objects.filter(pk=self.user.pk).update(
            reset_password_token=hash_token("raw"),
            reset_password_expire=timezone.now() - timedelta(minutes=1),
        )
        with self.assertRaises(ApiError) as ctx:
            self.service.reset_password("raw", "Brandnew123!")
        self.assertEqual(ctx.exception.code, "TOKEN_INVALID")

    def test_forgot_password_email_failure(self):
        email_service = MagicMock()
        email_service.send_password_reset_email.side_effect = EmailDeliveryError("down")
        service = AccountService(email_service=email_service, realtime=MagicMock())
        with self.assertRaises(ApiError) as ctx:
            service.forgot_password("jane@example.org")
        self.assertEqual(ctx.exception.status, 500)


class VerificationTests(BartendersTestCase):
    def setUp(self):
        super().setUp()
        self.service = AccountService(realtime=MagicMock())
        self.user = make_user(email="fresh@example.org", is_verified=False)

    def test_verify_email(self):
        pair = create_expiring_token_pair(timedelta(hours=24))
        User.objects.filter(pk=self.user.pk).update(
            email_verification_token=pair.hashed, email_verification_expire=pair.expire,
        )
        user = self.service.verify_email(pair.raw)
        self.assertTrue(user.is_verified)
        self.assertEqual(user.email_verification_token, "")
        with self.assertRaises(ApiError):
            self.service.verify_email(pair.raw)

    def test_resend_then_rate_limited(self):
        result = self.service.resend_verification("fresh@example.org")
        self.assertEqual(result, {"message": "Verification email sent successfully"})
        self.assertEqual(len(mail.outbox), 1)

        with self.assertRaises(ApiError) as ctx:
            self.service.resend_verification("fresh@example.org")
        self.assertEqual((ctx.exception.status, ctx.exception.code), (429, "RATE_LIMIT"))
        self.assertTrue(1 <= ctx.exception.extra["retryAfterSeconds"] <= 30)

    def test_resend_after_cooldown(self):
        User.objects.filter(pk=self.user.pk).update(
            last_verification_resend=timezone.now() - timedelta(seconds=31),
        )
        self.service.resend_verification("fresh@example.org")
        self.assertEqual(len(mail.outbox), 1)

    def test_resend_unknown_and_verified(self):
        self.assertEqual(self.service.resend_verification("nobody@example.org"), {"message": GENERIC_VERIFY_MESSAGE})
        make_user(email="done@example.org")
        self.assertEqual(self.service.resend_verification("done@example.org"), {"message": "Email already verified"})
        self.assertEqual(mail.outbox, [])

    def test_resend_failure_returns_link(self):
        email_service = MagicMock()
        email_service.send_verification_email.side_effect = EmailDeliveryError("down")
        service = AccountService(email_service=email_service, realtime=MagicMock())
        result = service.resend_verification("fresh@example.org")
        self.assertIn("/verify-email/", result["verifyUrl"])


class DeleteAccountTests(BartendersTestCase):
    def setUp(self):
        super().setUp()
        self.service = AccountService(realtime=MagicMock())
        self.user = make_user(email="leaving@example.org", name="Leaving User")
        self.other = make_user()
        self.cocktail = make_cocktail(created_by=self.user)
        Follow.objects.create(follower=self.user, following=self.other)
        Follow.objects.create(follower=self.other, following=self.user)
        Favorite.objects.create(user=self.user, cocktail=make_cocktail(created_by=self.other))

    def test_wrong_password_keeps_account(self):
        with self.assertRaises(ApiError):
            self.service.delete_account(self.user, "wrong")
        self.assertTrue(User.objects.filter(pk=self.user.pk).exists())

    @patch("cocktails.services.media.delete_image")
    def test_delete_removes_owned_content(self, delete_image):
        user_id = self.user.pk
        self.service.delete_account(self.user, DEFAULT_PASSWORD)
        self.assertFalse(User.objects.filter(email="leaving@example.org").exists())
        self.assertFalse(Cocktail.objects.filter(created_by_id=user_id).exists())
        self.assertEqual(Follow.objects.count(), 0)
        self.assertEqual(Favorite.objects.count(), 0)
        self.assertEqual(mail.outbox[-1].subject, "Account Deleted - BartendersHub")
        self.assertEqual(mail.outbox[-1].to, ["leaving@example.org"])
        delete_image.assert_not_called()
