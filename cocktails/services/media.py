"""Cloudinary image hosting for cocktail photos and avatars."""

import logging
import os

import cloudinary
import cloudinary.api
import cloudinary.exceptions
import cloudinary.uploader
from django.conf import settings

from cocktails.exceptions import ApiError

logger = logging.getLogger(__name__)

COCKTAIL_FOLDER = "bartendershub/cocktails"
AVATAR_FOLDER = "bartendershub/avatars"

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/webp"}
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}


def configure():
    """Push credentials from settings into the cloudinary SDK."""
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )


def is_configured():
    return all([
        settings.CLOUDINARY_CLOUD_NAME,
        settings.CLOUDINARY_API_KEY,
        settings.CLOUDINARY_API_SECRET,
    ])


def validate_image_file(upload, max_size=None):
    """Reject anything that is not a JPEG, PNG or WebP within the size cap."""
    max_size = settings.MAX_FILE_SIZE if max_size is None else max_size
    extension = os.path.splitext(upload.name or "")[1].lower()
    content_type = (getattr(upload, "content_type", "") or "").lower()
    if content_type not in ALLOWED_CONTENT_TYPES or extension not in ALLOWED_EXTENSIONS:
        raise ApiError(400, "Only JPEG, PNG and WebP images are allowed", "INVALID_FILE_TYPE")
    if upload.size > max_size:
        raise ApiError(
            413,
            f"File too large. Maximum size is {max_size // 1_000_000}MB",
            "FILE_TOO_LARGE",
            maxBytes=max_size,
        )


def _upload(upload, **options):
    configure()
    try:
        result = cloudinary.uploader.upload(upload, quality="auto:best", **options)
    except cloudinary.exceptions.Error as exc:
        logger.error("Cloudinary upload to %s failed: %s", options.get("folder"), exc)
        raise ApiError(400, "Error uploading image", "UPLOAD_FAILED", detail=str(exc))
    return {"url": result["secure_url"], "publicId": result["public_id"]}


def upload_image(upload):
    """Upload a cocktail photo, bounded to 800x600."""
    validate_image_file(upload)
    return _upload(upload, folder=COCKTAIL_FOLDER, width=800, height=600, crop="limit")


def upload_avatar(upload):
    """Upload an avatar, cropped to a 200x200 face-centred square."""
    validate_image_file(upload, max_size=settings.MAX_AVATAR_SIZE)
    return _upload(upload, folder=AVATAR_FOLDER, width=200, height=200, crop="fill", gravity="face")


def delete_image(public_id):
    """Best-effort delete; failures are logged and reported as False."""
    if not public_id:
        return False
    configure()
    try:
        cloudinary.uploader.destroy(public_id)
    except cloudinary.exceptions.Error as exc:
        logger.error("Error deleting image %s from cloudinary: %s", public_id, exc)
        return False
    return True


def ping():
    """Round-trip the admin API; raises when credentials are wrong."""
    configure()
    return cloudinary.api.ping()
