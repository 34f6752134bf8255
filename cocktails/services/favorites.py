"""Service helpers for a user's favorite cocktails."""

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from cocktails.db_accessor import DB_Accessor
from cocktails.exceptions import ApiError
from cocktails.models import Cocktail, Favorite


class FavoriteService:
    """Encapsulate favorite listing and mutation for one user."""

    def __init__(self, user, favorite_model=Favorite):
        self.user = user
        self.favorite_model = favorite_model
        self.accessor = DB_Accessor(favorite_model)

    def list_qs(self):
        """Return the user's favorites, newest first, with cocktails loaded."""
        return (
            self.favorite_model.objects.filter(user=self.user)
            .select_related("cocktail", "cocktail__created_by")
            .order_by("-created_at", "-id")
        )

    def page(self, *, page, limit):
        return self.accessor.paginate(self.list_qs(), page=page, limit=limit)

    def _fetch_cocktail(self, cocktail_id):
        try:
            return Cocktail.objects.get(pk=cocktail_id)
        except (Cocktail.DoesNotExist, ValueError, ValidationError):
            raise ApiError(404, "Cocktail not found", "NOT_FOUND")

    def is_favorite(self, cocktail_id):
        return self.favorite_model.objects.filter(user=self.user, cocktail_id=cocktail_id).exists()

    def add(self, cocktail_id):
        """Add a favorite; a second add of the same cocktail is a 400."""
        cocktail = self._fetch_cocktail(cocktail_id)
        if self.is_favorite(cocktail.pk):
            raise ApiError(400, "Cocktail already in favorites", "ALREADY_FAVORITE")
        try:
            with transaction.atomic():
                return self.favorite_model.objects.create(user=self.user, cocktail=cocktail)
        except IntegrityError:
            raise ApiError(400, "Cocktail already in favorites", "ALREADY_FAVORITE")

    def remove(self, cocktail_id):
        deleted = self.accessor.delete(user=self.user, cocktail_id=cocktail_id)
        if not deleted:
            raise ApiError(404, "Favorite not found", "NOT_FOUND")
        return True
