"""Service helpers for cocktail listing, lifecycle and engagement."""

import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F

from cocktails.exceptions import ApiError
from cocktails.models import Cocktail, Comment, Like, Rating
from cocktails.repos import CocktailRepo
from cocktails.repos.cocktail_repo import SORT_ORDERINGS, encode_cursor, ordering_for
from cocktails.services import media
from cocktails.services.cache import invalidate_cocktail_cache
from cocktails.utils.http import page_meta

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = (
    "name",
    "description",
    "ingredients",
    "instructions",
    "prep_time",
    "servings",
    "glass_type",
    "garnish",
    "category",
    "tags",
    "alcohol_content",
    "flavor",
)


class CocktailService:
    """Encapsulate cocktail listing, lifecycle and engagement operations."""

    def __init__(self, repo=None):
        self.repo = repo or CocktailRepo()

    def fetch(self, cocktail_id, viewer=None):
        """Return a cocktail; unapproved ones are only visible to owner and admins."""
        try:
            cocktail = self.repo.queryset().get(pk=cocktail_id)
        except (Cocktail.DoesNotExist, ValueError, ValidationError):
            raise ApiError(404, "Cocktail not found", "NOT_FOUND")
        if not cocktail.is_approved and not self._can_manage(cocktail, viewer):
            raise ApiError(404, "Cocktail not found", "NOT_FOUND")
        return cocktail

    def _can_manage(self, cocktail, user):
        if user is None or not getattr(user, "is_authenticated", False):
            return False
        return cocktail.created_by_id == user.pk or user.is_admin

    def list_page(self, *, page=1, limit=10, cursor=None, sort_by=None, **filters):
        """
        Return (cocktails, meta) for the public listing.

        Offset pages carry count/total/page/pages. Newest-first listings
        also return a `cursor` for the next page; when a cursor is passed
        in, keyset paging is used and the offset fields are omitted.
        """
        qs = self.repo.list_for_listing(sort_by=sort_by, **filters)
        newest_first = ordering_for(sort_by) == SORT_ORDERINGS["newest"]

        if cursor and newest_first:
            rows = list(self.repo.after_cursor(qs, cursor)[: limit + 1])
            has_more = len(rows) > limit
            rows = rows[:limit]
            return rows, {
                "count": len(rows),
                "cursor": encode_cursor(rows[-1]) if has_more else None,
            }

        total = qs.count()
        start = (page - 1) * limit
        rows = list(qs[start:start + limit + 1])
        has_more = len(rows) > limit
        rows = rows[:limit]
        meta = page_meta(total, page, limit, len(rows))
        meta["cursor"] = encode_cursor(rows[-1]) if has_more and newest_first else None
        return rows, meta

    def record_view(self, cocktail):
        """Increment the view counter atomically; views never decrease."""
        Cocktail.objects.filter(pk=cocktail.pk).update(views=F("views") + 1)
        cocktail.refresh_from_db(fields=["views"])
        invalidate_cocktail_cache()
        return cocktail.views

    def _resolve_image(self, validated_data, image_file):
        if image_file is not None:
            return media.upload_image(image_file)
        return validated_data.get("image")

    @transaction.atomic
    def create(self, user, validated_data, image_file=None):
        """Create a cocktail owned by `user`; an image file or reference is required."""
        image = self._resolve_image(validated_data, image_file)
        if not image:
            raise ApiError(400, "Image is required", "IMAGE_REQUIRED")
        cocktail = Cocktail.objects.create(
            created_by=user,
            image_url=image["url"],
            image_public_id=image["publicId"],
            **{field: validated_data[field] for field in WRITABLE_FIELDS if field in validated_data},
        )
        logger.info("Cocktail %s created by %s", cocktail.pk, user.username)
        return cocktail

    @transaction.atomic
    def update(self, cocktail, validated_data, image_file=None):
        """Apply changed fields; a new image replaces (and deletes) the old one."""
        for field in WRITABLE_FIELDS:
            if field in validated_data:
                setattr(cocktail, field, validated_data[field])

        image = self._resolve_image(validated_data, image_file)
        if image and image["publicId"] != cocktail.image_public_id:
            previous = cocktail.image_public_id
            cocktail.image_url = image["url"]
            cocktail.image_public_id = image["publicId"]
            # the old asset stays until the row points at the new one
            transaction.on_commit(lambda: media.delete_image(previous))

        cocktail.save()
        return cocktail

    @transaction.atomic
    def delete(self, cocktail, actor):
        public_id = cocktail.image_public_id
        cocktail_id = cocktail.pk
        cocktail.delete()
        transaction.on_commit(lambda: media.delete_image(public_id))
        logger.info("Cocktail %s deleted by %s", cocktail_id, actor.username)

    @transaction.atomic
    def toggle_like(self, cocktail, user):
        existing = Like.objects.filter(user=user, cocktail=cocktail)
        if existing.exists():
            existing.delete()
            is_liked = False
        else:
            Like.objects.create(user=user, cocktail=cocktail)
            is_liked = True
        cocktail.refresh_counters()
        return {"isLiked": is_liked, "likesCount": cocktail.likes_count}

    @transaction.atomic
    def add_comment(self, cocktail, user, text):
        comment = Comment.objects.create(cocktail=cocktail, user=user, text=text)
        cocktail.refresh_counters()
        return comment

    @transaction.atomic
    def rate(self, cocktail, user, value):
        """Create or replace the user's rating and refresh the aggregate."""
        Rating.objects.update_or_create(user=user, cocktail=cocktail, defaults={"rating": value})
        cocktail.refresh_rating_stats()
        return {
            "averageRating": cocktail.average_rating,
            "ratingsCount": cocktail.ratings_count,
            "userRating": value,
        }
