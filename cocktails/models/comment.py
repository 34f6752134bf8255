"""Model for user comments on cocktails."""

import uuid

from django.conf import settings
from django.db import models


class Comment(models.Model):
    """User-authored comment on a cocktail."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    cocktail = models.ForeignKey(
        'cocktails.Cocktail',
        on_delete=models.CASCADE,
        related_name='comments'
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='comments'
    )

    # text (1-500)
    text = models.TextField(max_length=500)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['cocktail', 'created_at'], name='comment_cocktail_idx'),
        ]

    def __str__(self):
        """Readable identifier for admin/debugging."""
        return f"Comment by {self.user_id} on {self.cocktail_id}"
