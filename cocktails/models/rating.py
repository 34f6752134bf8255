"""Model for a user's 1-5 star rating of a cocktail."""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q


class Rating(models.Model):
    """One rating per user per cocktail; re-rating updates the row."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='ratings'
    )
    cocktail = models.ForeignKey(
        'cocktails.Cocktail',
        on_delete=models.CASCADE,
        related_name='ratings'
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['user', 'cocktail'], name='uniq_rating_user_cocktail'),
            models.CheckConstraint(
                condition=Q(rating__gte=1) & Q(rating__lte=5),
                name='chk_rating_range',
            ),
        ]

    def __str__(self):
        return f"{self.user_id} rated {self.cocktail_id}: {self.rating}"
