"""Cocktail recipe model with denormalised engagement counters."""

import math
import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Avg, Count

CATEGORY_CHOICES = [
    ("signature", "Signature"),
    ("classics", "Classics"),
    ("seasonal", "Seasonal"),
    ("tropical", "Tropical"),
    ("winter", "Winter"),
    ("summer", "Summer"),
]

ALCOHOL_CONTENT_CHOICES = [
    ("low", "Low"),
    ("medium", "Medium"),
    ("high", "High"),
    ("non-alcoholic", "Non-alcoholic"),
]

FLAVOR_CHOICES = [
    ("sweet", "Sweet"),
    ("sour", "Sour"),
    ("bitter", "Bitter"),
    ("savory", "Savory"),
    ("spicy", "Spicy"),
    ("fruity", "Fruity"),
    ("herbal", "Herbal"),
]


def round_rating(value):
    """Round a mean rating to one decimal, halves going up."""
    if not value:
        return 0.0
    return math.floor(float(value) * 10 + 0.5) / 10


class Cocktail(models.Model):
    """
    A cocktail recipe.

    `ingredients` is a list of {name, amount, unit, optional} dicts and
    `instructions` a list of {step, description} dicts ordered by step.
    Likes, ratings and comments live in their own tables; the *_count and
    average_rating columns mirror them so listings can sort without joins.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=100)
    description = models.TextField(max_length=500)
    ingredients = models.JSONField(default=list)
    instructions = models.JSONField(default=list)
    prep_time = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    servings = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    glass_type = models.CharField(max_length=100)
    garnish = models.CharField(max_length=200, blank=True, default="")

    image_url = models.URLField(max_length=500)
    image_public_id = models.CharField(max_length=255)

    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default="signature")
    tags = models.JSONField(default=list, blank=True)
    alcohol_content = models.CharField(max_length=20, choices=ALCOHOL_CONTENT_CHOICES, default="medium")
    flavor = models.CharField(max_length=20, choices=FLAVOR_CHOICES, default="sweet")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cocktails",
    )

    is_approved = models.BooleanField(default=False)
    is_featured = models.BooleanField(default=False)
    is_system = models.BooleanField(default=False, help_text="Seeded classic owned by the system user")

    views = models.PositiveIntegerField(default=0)
    likes_count = models.PositiveIntegerField(default=0)
    average_rating = models.FloatField(default=0)
    ratings_count = models.PositiveIntegerField(default=0)
    comments_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["category"], name="cocktail_category_idx"),
            models.Index(fields=["created_by", "-created_at"], name="cocktail_author_recent_idx"),
            models.Index(fields=["is_approved", "-created_at"], name="cocktail_approved_recent_idx"),
            models.Index(fields=["category", "is_approved"], name="cocktail_cat_approved_idx"),
            models.Index(fields=["-views", "is_approved", "-created_at"], name="cocktail_views_idx"),
            models.Index(fields=["-average_rating", "-created_at"], name="cocktail_rating_idx"),
            models.Index(fields=["-likes_count", "-created_at"], name="cocktail_likes_idx"),
            models.Index(fields=["is_featured"], name="cocktail_featured_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def image(self):
        return {"url": self.image_url, "publicId": self.image_public_id}

    def refresh_rating_stats(self, save=True):
        """Recompute average_rating and ratings_count from the Rating rows."""
        stats = self.ratings.aggregate(avg=Avg("rating"), total=Count("id"))
        self.average_rating = round_rating(stats["avg"])
        self.ratings_count = stats["total"] or 0
        if save:
            self.save(update_fields=["average_rating", "ratings_count", "updated_at"])
        return self.average_rating

    def refresh_counters(self, save=True):
        """Recompute likes and comments counters from their tables."""
        self.likes_count = self.likes.count()
        self.comments_count = self.comments.count()
        if save:
            self.save(update_fields=["likes_count", "comments_count", "updated_at"])
