"""Model representing a user's like on a cocktail."""

from django.conf import settings
from django.db import models


class Like(models.Model):
    """User like on a cocktail."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='likes'
    )

    cocktail = models.ForeignKey(
        'cocktails.Cocktail',
        on_delete=models.CASCADE,
        related_name='likes'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Enforce one like per user/cocktail pair."""
        constraints = [
            models.UniqueConstraint(fields=['user', 'cocktail'], name='uniq_like_user_cocktail'),
        ]

    def __str__(self):
        """Readable representation for admin/debugging."""
        return f"{self.user_id} likes {self.cocktail_id}"
