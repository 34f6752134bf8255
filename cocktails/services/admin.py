"""Administrative moderation actions; every mutation leaves an audit entry."""

import logging
import uuid

from django.contrib.auth import get_user_model
from django.db import transaction

from cocktails.exceptions import ApiError
from cocktails.models import AuditLog, Cocktail, Comment, Follow, Like, Rating
from cocktails.services import classics, media
from cocktails.services.cache import cache_metrics, invalidate_cocktail_cache
from cocktails.services.realtime import realtime_service

User = get_user_model()
logger = logging.getLogger(__name__)

USER_BULK_ACTIONS = ("verify", "promote", "demote")
COCKTAIL_BULK_ACTIONS = ("approve", "unapprove", "feature", "unfeature", "delete")


def _user_ids(raw_ids):
    return [int(value) for value in raw_ids if str(value).isdigit()]


def _delete_images(public_ids):
    for public_id in public_ids:
        media.delete_image(public_id)


def _cocktail_ids(raw_ids):
    ids = []
    for value in raw_ids:
        try:
            ids.append(uuid.UUID(str(value)))
        except ValueError:
            continue
    return ids


class AdminService:
    """Moderation operations performed on behalf of `actor`."""

    def __init__(self, actor, realtime=None):
        self.actor = actor
        self.realtime = realtime or realtime_service

    def _audit(self, action, target_type, target_id, reason="", **meta):
        entry = AuditLog.objects.create(
            actor=self.actor,
            action=action,
            target_type=target_type,
            target_id=str(target_id),
            reason=reason or "",
            meta=meta,
        )
        logger.info("Admin %s: %s %s:%s", self.actor.username, action, target_type, target_id)
        return entry

    def _get_user(self, user_id):
        user = User.objects.filter(pk=user_id).first()
        if user is None:
            raise ApiError(404, "User not found", "NOT_FOUND")
        return user

    def _get_cocktail(self, cocktail_id):
        cocktail = Cocktail.objects.filter(pk=cocktail_id).first()
        if cocktail is None:
            raise ApiError(404, "Cocktail not found", "NOT_FOUND")
        return cocktail

    # users

    @transaction.atomic
    def promote(self, user_id, reason=""):
        user = self._get_user(user_id)
        if not user.is_admin:
            user.is_admin = True
            user.save(update_fields=["is_admin", "updated_at"])
        self._audit("user.promote", "user", user.pk, reason)
        return user

    @transaction.atomic
    def demote(self, user_id, reason=""):
        user = self._get_user(user_id)
        if user.pk == self.actor.pk:
            raise ApiError(400, "You cannot demote yourself", "SELF_DEMOTE")
        if user.is_admin:
            user.is_admin = False
            user.save(update_fields=["is_admin", "updated_at"])
        self._audit("user.demote", "user", user.pk, reason)
        return user

    @transaction.atomic
    def verify(self, user_id, reason=""):
        user = self._get_user(user_id)
        if not user.is_verified:
            user.is_verified = True
            user.email_verification_token = ""
            user.email_verification_expire = None
            user.save(update_fields=[
                "is_verified",
                "email_verification_token",
                "email_verification_expire",
                "updated_at",
            ])
        self._audit("user.verify", "user", user.pk, reason)
        return user

    @transaction.atomic
    def bulk_users(self, ids, action, reason=""):
        """Apply one action to many users; returns {"matched", "modified"}."""
        if action not in USER_BULK_ACTIONS:
            raise ApiError(400, f"Unsupported user action: {action}", "INVALID_ACTION")
        qs = User.objects.filter(pk__in=_user_ids(ids))
        matched = qs.count()
        if action == "verify":
            modified = qs.filter(is_verified=False).update(is_verified=True)
        elif action == "promote":
            modified = qs.filter(is_admin=False).update(is_admin=True)
        else:
            modified = qs.exclude(pk=self.actor.pk).filter(is_admin=True).update(is_admin=False)
        self._audit(f"user.bulk.{action}", "user", "bulk", reason, ids=[str(i) for i in ids], modified=modified)
        return {"matched": matched, "modified": modified}

    # cocktails

    def _set_cocktail_flag(self, cocktail_id, field, value, action, reason):
        cocktail = self._get_cocktail(cocktail_id)
        if getattr(cocktail, field) != value:
            setattr(cocktail, field, value)
            cocktail.save(update_fields=[field, "updated_at"])
        self._audit(action, "cocktail", cocktail.pk, reason)
        return cocktail

    @transaction.atomic
    def approve(self, cocktail_id, reason=""):
        return self._set_cocktail_flag(cocktail_id, "is_approved", True, "cocktail.approve", reason)

    @transaction.atomic
    def feature(self, cocktail_id, reason=""):
        return self._set_cocktail_flag(cocktail_id, "is_featured", True, "cocktail.feature", reason)

    @transaction.atomic
    def unfeature(self, cocktail_id, reason=""):
        return self._set_cocktail_flag(cocktail_id, "is_featured", False, "cocktail.unfeature", reason)

    @transaction.atomic
    def bulk_cocktails(self, ids, action, reason=""):
        if action not in COCKTAIL_BULK_ACTIONS:
            raise ApiError(400, f"Unsupported cocktail action: {action}", "INVALID_ACTION")
        qs = Cocktail.objects.filter(pk__in=_cocktail_ids(ids))
        matched = qs.count()
        if action == "delete":
            public_ids = list(qs.values_list("image_public_id", flat=True))
            qs.delete()
            modified = matched
            transaction.on_commit(lambda: _delete_images(public_ids))
        else:
            field, value = {
                "approve": ("is_approved", True),
                "unapprove": ("is_approved", False),
                "feature": ("is_featured", True),
                "unfeature": ("is_featured", False),
            }[action]
            modified = qs.exclude(**{field: value}).update(**{field: value})
        # queryset.update() bypasses post_save
        invalidate_cocktail_cache()
        self._audit(f"cocktail.bulk.{action}", "cocktail", "bulk", reason, ids=[str(i) for i in ids], modified=modified)
        return {"matched": matched, "modified": modified}

    # maintenance

    def seed_classics(self):
        result = classics.seed_classics()
        self._audit("classics.seed", "system", "classics", **result)
        return result

    def seed_status(self):
        return classics.seed_status()

    def invalidate_cache(self):
        invalidate_cocktail_cache()
        self._audit("cache.invalidate", "system", "cocktails")
        return cache_metrics()

    def metrics(self):
        return {
            "users": User.objects.count(),
            "verifiedUsers": User.objects.filter(is_verified=True).count(),
            "admins": User.objects.filter(is_admin=True).count(),
            "cocktails": Cocktail.objects.count(),
            "approvedCocktails": Cocktail.objects.filter(is_approved=True).count(),
            "pendingCocktails": Cocktail.objects.filter(is_approved=False).count(),
            "featuredCocktails": Cocktail.objects.filter(is_featured=True).count(),
            "likes": Like.objects.count(),
            "ratings": Rating.objects.count(),
            "comments": Comment.objects.count(),
            "follows": Follow.objects.count(),
            "cache": cache_metrics(),
            "realtime": self.realtime.get_stats(),
        }

    def audit_log(self, action=None, target_type=None):
        qs = AuditLog.objects.select_related("actor")
        if action:
            qs = qs.filter(action=action)
        if target_type:
            qs = qs.filter(target_type=target_type)
        return qs
