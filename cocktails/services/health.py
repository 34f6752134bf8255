"""Runtime diagnostics shared by /api/health and the healthcheck command."""

import logging
import smtplib
import time

import cloudinary.exceptions
from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError, connection
from django.utils import timezone

from cocktails.services import media
from cocktails.services.cache import cache_metrics
from cocktails.services.email import PROVIDER_DISABLED, PROVIDER_SENDGRID, resolve_provider

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = (
    "JWT_SECRET",
    "CLOUDINARY_CLOUD_NAME",
    "CLOUDINARY_API_KEY",
    "CLOUDINARY_API_SECRET",
)

CRITICAL_CHECKS = ("environment", "database", "cloudinary")


def check_env():
    missing = [name for name in REQUIRED_SETTINGS if not getattr(settings, name, "")]
    if settings.JWT_SECRET == settings.DEV_JWT_SECRET:
        missing.insert(0, "JWT_SECRET")
    return {"ok": not missing, "missing": missing}


def check_database():
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as exc:
        return {"ok": False, "state": "disconnected", "error": str(exc)}
    return {"ok": True, "state": "connected", "vendor": connection.vendor}


def check_cloudinary():
    if not media.is_configured():
        return {"ok": False, "error": "Cloudinary env incomplete"}
    try:
        status = media.ping().get("status")
    except cloudinary.exceptions.Error as exc:
        return {"ok": False, "error": str(exc)}
    return {"ok": status == "ok", "rawStatus": status}


def check_cache():
    ping_key = "healthcheck:ping"
    cache.set(ping_key, "pong", timeout=5)
    ok = cache.get(ping_key) == "pong"
    return {"ok": ok, "backend": settings.CACHES["default"]["BACKEND"].rsplit(".", 1)[-1]}


def check_email():
    provider = resolve_provider()
    if provider == PROVIDER_DISABLED:
        return {"ok": True, "skipped": True, "reason": "Email disabled"}
    if provider == PROVIDER_SENDGRID:
        return {"ok": True, "skipped": True, "reason": "SendGrid is checked on send"}
    if not settings.EMAIL_HOST:
        return {"ok": True, "skipped": True, "reason": "Email host not configured"}
    try:
        server = smtplib.SMTP(settings.EMAIL_HOST, settings.EMAIL_PORT, timeout=settings.EMAIL_TIMEOUT)
        server.quit()
    except (OSError, smtplib.SMTPException) as exc:
        return {"ok": False, "error": str(exc)}
    return {"ok": True}


def _timed(check):
    start = time.perf_counter()
    result = check()
    return result, round((time.perf_counter() - start) * 1000, 2)


def run_checks(include_external=True):
    """
    Run every diagnostic and return the summary dict.

    `include_external=False` skips the Cloudinary and SMTP round trips.
    """
    checks = {
        "environment": check_env,
        "database": check_database,
        "cache": check_cache,
    }
    if include_external:
        checks["cloudinary"] = check_cloudinary
        checks["email"] = check_email

    summary = {"timestamp": timezone.now().isoformat()}
    timings = {}
    for name, check in checks.items():
        summary[name], timings[name] = _timed(check)
    summary["timingsMs"] = timings
    summary["ok"] = all(summary[name]["ok"] for name in CRITICAL_CHECKS if name in summary)
    if not summary["ok"]:
        failing = [name for name in CRITICAL_CHECKS if name in summary and not summary[name]["ok"]]
        logger.warning("Health check failed: %s", ", ".join(failing))
    return summary


def api_status():
    """Lightweight payload for the public health endpoint."""
    return {
        "message": "BartendersHub API is running!",
        "timestamp": timezone.now().isoformat(),
        "cache": cache_metrics(),
        "database": check_database()["state"],
    }
