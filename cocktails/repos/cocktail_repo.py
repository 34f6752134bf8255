"""Repository helpers for listing and sorting cocktails."""

import base64
import binascii
import uuid
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from django.db.models import Q, QuerySet

from cocktails.db_accessor import DB_Accessor
from cocktails.models import Cocktail

SORT_ORDERINGS: Dict[str, Sequence[str]] = {
    "newest": ("-created_at", "-id"),
    "views": ("-views", "-created_at", "-id"),
    "rating": ("-average_rating", "-created_at", "-id"),
    "likes": ("-likes_count", "-created_at", "-id"),
}


def ordering_for(sort_by: Optional[str]) -> Sequence[str]:
    """Unknown or missing sort keys fall back to newest first."""
    return SORT_ORDERINGS.get(sort_by or "newest", SORT_ORDERINGS["newest"])


def encode_cursor(cocktail: Cocktail) -> str:
    raw = f"{cocktail.created_at.isoformat()}|{cocktail.id}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str):
    """Return (created_at, id) from a cursor, or None when it is malformed."""
    try:
        raw = base64.b64decode(cursor.encode("ascii"), validate=True).decode("utf-8")
        created_at_str, id_str = raw.split("|", 1)
        return datetime.fromisoformat(created_at_str), uuid.UUID(id_str)
    except (ValueError, UnicodeError, binascii.Error):
        return None


class CocktailRepo(DB_Accessor):
    """Repository for Cocktail queries (public listing, per-author, keyset paging)."""

    def __init__(self) -> None:
        super().__init__(Cocktail)

    def queryset(self) -> QuerySet:
        return self.model.objects.select_related("created_by")

    def approved(self) -> QuerySet:
        return self.queryset().filter(is_approved=True)

    def list_for_listing(
        self,
        *,
        category: Optional[str] = None,
        alcohol_content: Optional[str] = None,
        created_by: Optional[Any] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> QuerySet:
        """Approved cocktails filtered and ordered for the public listing."""
        filters: Dict[str, Any] = {}
        if category:
            filters["category"] = category
        if alcohol_content:
            filters["alcohol_content"] = alcohol_content
        if created_by:
            if not str(created_by).isdigit():
                return self.model.objects.none()
            filters["created_by_id"] = created_by

        qs = self.approved().filter(**filters)
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(description__icontains=search))
        return qs.order_by(*ordering_for(sort_by))

    def after_cursor(self, qs: QuerySet, cursor: Optional[str]) -> QuerySet:
        """Apply newest-first keyset pagination; malformed cursors are ignored."""
        decoded = decode_cursor(cursor) if cursor else None
        if decoded is None:
            return qs
        created_at, last_id = decoded
        return qs.filter(Q(created_at__lt=created_at) | Q(created_at=created_at, id__lt=last_id))

    def list_for_user(self, user_id, *, limit: Optional[int] = None) -> QuerySet:
        """Approved cocktails by one author, newest first."""
        qs = self.approved().filter(created_by_id=user_id).order_by("-created_at", "-id")
        return qs[:limit] if limit is not None else qs
