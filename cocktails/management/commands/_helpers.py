"""Shared helpers for the maintenance commands."""

import re

from django.contrib.auth import get_user_model
from django.core.management.base import CommandError

User = get_user_model()


def get_user_by_email_or_error(email):
    """Fetch a user by email (case-insensitive) or raise a friendly CommandError."""
    user = User.objects.filter(email__iexact=(email or "").strip()).first()
    if user is None:
        raise CommandError(f"User with email '{email}' not found")
    return user


def create_username(first_name, last_name, suffix=""):
    """Build a username matching the 3-20 char [A-Za-z0-9_] rule."""
    base = re.sub(r"[^a-z0-9_]", "", f"{first_name}_{last_name}".lower())
    return f"{base[:20 - len(str(suffix))]}{suffix}" or f"user{suffix}"


def create_email(first_name, last_name, suffix=""):
    local = re.sub(r"[^a-z0-9.]", "", f"{first_name}.{last_name}".lower())
    return f"{local}{suffix}@example.org"
