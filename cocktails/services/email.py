"""Transactional email over SendGrid's v3 API or Django's SMTP backend."""

import logging
import smtplib

import requests
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)

SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"

PROVIDER_SENDGRID = "sendgrid"
PROVIDER_SMTP = "smtp"
PROVIDER_DISABLED = "disabled"


class EmailDeliveryError(Exception):
    """Raised when the configured provider rejects or fails a send."""


def get_frontend_url():
    """Base URL of the web client used in mailed links."""
    if not settings.DEBUG:
        return (
            settings.FRONTEND_URL_PROD
            or settings.FRONTEND_URL
            or settings.DEFAULT_PROD_FRONTEND_URL
        ).rstrip("/")
    return (settings.FRONTEND_URL or settings.DEFAULT_FRONTEND_URL).rstrip("/")


def verification_url(raw_token):
    return f"{get_frontend_url()}/verify-email/{raw_token}"


def reset_url(raw_token):
    return f"{get_frontend_url()}/reset-password/{raw_token}"


def resolve_provider():
    """Pick the provider from configuration, falling back to SMTP."""
    service = (settings.EMAIL_SERVICE or PROVIDER_SMTP).lower()
    if settings.EMAIL_DISABLE or service in ("none", PROVIDER_DISABLED):
        return PROVIDER_DISABLED
    if service == PROVIDER_SENDGRID:
        if settings.SENDGRID_API_KEY:
            return PROVIDER_SENDGRID
        logger.warning("SENDGRID_API_KEY not configured, falling back to SMTP")
    return PROVIDER_SMTP


class EmailService:
    """Send plain and templated emails through the configured provider."""

    def __init__(self, provider=None):
        self.provider = provider or resolve_provider()

    @property
    def enabled(self):
        return self.provider != PROVIDER_DISABLED

    def send_email(self, to, subject, html, text=None):
        """Send one message; provider errors are logged and re-raised."""
        text = text or strip_tags(html)
        if not self.enabled:
            logger.debug("[email:disabled] to=%s subject=%s", to, subject[:60])
            return False
        try:
            if self.provider == PROVIDER_SENDGRID:
                self._send_sendgrid(to, subject, html, text)
            else:
                self._send_smtp(to, subject, html, text)
        except EmailDeliveryError as exc:
            logger.error("Failed to send email to %s via %s: %s", to, self.provider, exc)
            raise
        logger.info("Email sent via %s to %s", self.provider, to)
        return True

    def _send_sendgrid(self, to, subject, html, text):
        payload = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": settings.EMAIL_FROM, "name": settings.EMAIL_FROM_NAME},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": text},
                {"type": "text/html", "value": html},
            ],
        }
        headers = {"Authorization": f"Bearer {settings.SENDGRID_API_KEY}"}
        try:
            response = requests.post(
                SENDGRID_SEND_URL,
                json=payload,
                headers=headers,
                timeout=settings.EMAIL_TIMEOUT,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise EmailDeliveryError(str(exc)) from exc

    def _send_smtp(self, to, subject, html, text):
        message = EmailMultiAlternatives(
            subject=subject,
            body=text,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[to],
        )
        message.attach_alternative(html, "text/html")
        try:
            message.send(fail_silently=False)
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailDeliveryError(str(exc)) from exc

    def _send_template(self, to, subject, template, context):
        html = render_to_string(f"emails/{template}.html", context)
        return self.send_email(to, subject, html)

    def send_verification_email(self, user, raw_token):
        url = verification_url(raw_token)
        sent = self._send_template(
            user.email,
            "Verify your email - BartendersHub",
            "verification",
            {"name": user.display_name, "verify_url": url},
        )
        logger.info("Verification email sent to %s", user.email)
        return sent

    def send_welcome_email(self, user):
        return self._send_template(
            user.email,
            "Welcome to BartendersHub!",
            "welcome",
            {"name": user.display_name, "username": user.username},
        )

    def send_password_reset_email(self, user, raw_token):
        return self._send_template(
            user.email,
            "Password Reset Request - BartendersHub",
            "password_reset",
            {"name": user.display_name, "reset_url": reset_url(raw_token)},
        )

    def send_account_deletion_email(self, name, email):
        """Takes plain values since the user row is already gone."""
        return self._send_template(
            email,
            "Account Deleted - BartendersHub",
            "account_deletion",
            {"name": name, "deleted_on": timezone.now().strftime("%B %d, %Y")},
        )
