"""Environment validation run by `manage.py check` and at server start."""

from django.conf import settings
from django.core.checks import Error, Tags, Warning, register

MIN_JWT_SECRET_LENGTH = 32


def _level():
    # misconfiguration only blocks startup in production
    return Warning if settings.DEBUG or settings.TESTING else Error


@register(Tags.security, deploy=False)
def check_jwt_secret(app_configs, **kwargs):
    level = _level()
    if settings.JWT_SECRET == settings.DEV_JWT_SECRET:
        return [level(
            "JWT_SECRET is not set; the development secret is in use.",
            hint="Set JWT_SECRET to a random string of at least 32 characters.",
            id="cocktails.E001",
        )]
    if len(settings.JWT_SECRET) < MIN_JWT_SECRET_LENGTH:
        return [level(
            f"JWT_SECRET is shorter than {MIN_JWT_SECRET_LENGTH} characters.",
            id="cocktails.E002",
        )]
    return []


@register()
def check_cloudinary(app_configs, **kwargs):
    missing = [
        name for name in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET")
        if not getattr(settings, name, "")
    ]
    if not missing:
        return []
    return [_level()(
        f"Missing Cloudinary configuration: {', '.join(missing)}",
        hint="Image uploads fail until these are set.",
        id="cocktails.E003",
    )]
