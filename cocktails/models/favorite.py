"""
Favorite model

One row per (user, cocktail) the user saved. The pair is unique, so a
cocktail can only appear once in a user's favorites. Listing is newest
first, which the (user, -created_at) index serves.
"""

from django.conf import settings
from django.db import models


class Favorite(models.Model):
    """A cocktail saved by a user."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="favorites",
    )
    cocktail = models.ForeignKey(
        "cocktails.Cocktail",
        on_delete=models.CASCADE,
        related_name="favorited_by",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "cocktail"],
                name="uniq_favorite_user_cocktail",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="favorite_user_recent_idx"),
        ]

    def __str__(self) -> str:
        return f"Favorite(user={self.user_id}, cocktail={self.cocktail_id})"
