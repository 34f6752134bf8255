"""Seeding of the classic cocktail library under a dedicated system account."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Max

from cocktails.data.classic_cocktails import CLASSIC_COCKTAILS, PLACEHOLDER_IMAGE
from cocktails.models import Cocktail
from cocktails.services.cache import invalidate_cocktail_cache

User = get_user_model()
logger = logging.getLogger(__name__)

SYSTEM_EMAIL = "system@classics.local"
SYSTEM_USERNAME = "classiclibrary"
SYSTEM_NAME = "Classic Library"


def get_system_user():
    return User.objects.filter(email=SYSTEM_EMAIL).first()


def ensure_system_user():
    """Return the system user, creating it verified and admin on first use."""
    user = get_system_user()
    if user is not None:
        return user
    user = User.objects.create_user(
        username=SYSTEM_USERNAME,
        email=SYSTEM_EMAIL,
        password=None,
        name=SYSTEM_NAME,
        is_verified=True,
        is_admin=True,
    )
    logger.info("Created system user %s", SYSTEM_EMAIL)
    return user


@transaction.atomic
def seed_classics(entries=None):
    """
    Upsert every classic by case-insensitive name.

    Returns {"inserted": n, "updated": m}.
    """
    system_user = ensure_system_user()
    inserted = updated = 0
    for entry in entries if entries is not None else CLASSIC_COCKTAILS:
        values = dict(entry)
        values.update(
            created_by=system_user,
            category="classics",
            is_approved=True,
            is_system=True,
            image_url=PLACEHOLDER_IMAGE["url"],
            image_public_id=PLACEHOLDER_IMAGE["publicId"],
        )
        existing = Cocktail.objects.filter(name__iexact=entry["name"]).first()
        if existing is None:
            Cocktail.objects.create(**values)
            inserted += 1
            continue
        for field, value in values.items():
            setattr(existing, field, value)
        existing.save()
        updated += 1

    invalidate_cocktail_cache()
    logger.info("Seeded classics: %s inserted, %s updated", inserted, updated)
    return {"inserted": inserted, "updated": updated}


def seed_status():
    system_user = get_system_user()
    classics = Cocktail.objects.filter(is_system=True)
    if system_user is not None:
        classics = classics.filter(created_by=system_user)
    latest = classics.aggregate(latest=Max("updated_at"))["latest"]
    return {
        "systemUser": {
            "id": str(system_user.pk),
            "email": system_user.email,
            "isAdmin": system_user.is_admin,
        } if system_user else None,
        "count": classics.count(),
        "names": sorted(classics.values_list("name", flat=True)),
        "latestUpdatedAt": latest.isoformat() if latest else None,
    }
