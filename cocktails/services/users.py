"""Service helpers for the member directory and profile editing."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from cocktails.exceptions import ApiError
from cocktails.repos import CocktailRepo, UserRepo
from cocktails.services import media

User = get_user_model()
logger = logging.getLogger(__name__)

PROFILE_COCKTAIL_LIMIT = 6


class UserService:
    """Encapsulate user lookups and profile updates."""

    def __init__(self, user_repo=None, cocktail_repo=None):
        self.users = user_repo or UserRepo()
        self.cocktails = cocktail_repo or CocktailRepo()

    def fetch(self, user_id, viewer=None):
        """Fetch a user with counts or raise a 404 ApiError."""
        try:
            return self.users.get_by_id(user_id, viewer=viewer)
        except (User.DoesNotExist, ValueError):
            raise ApiError(404, "User not found", "NOT_FOUND")

    def directory_page(self, *, page, limit, verified=None, search=None, sort_by=None, viewer=None):
        qs = self.users.list_for_directory(verified=verified, search=search, sort_by=sort_by, viewer=viewer)
        return self.users.paginate(qs, page=page, limit=limit)

    def profile_with_cocktails(self, user_id, viewer=None):
        """Return the profile plus its most recent approved cocktails."""
        user = self.fetch(user_id, viewer=viewer)
        recent = list(self.cocktails.list_for_user(user.pk, limit=PROFILE_COCKTAIL_LIMIT))
        return user, recent

    def cocktails_page(self, user_id, *, page, limit):
        user = self.fetch(user_id)
        return self.cocktails.paginate(self.cocktails.list_for_user(user.pk), page=page, limit=limit)

    @transaction.atomic
    def update_profile(self, user, validated_data, avatar_file=None):
        """Apply profile fields and, when given, replace the avatar."""
        for field, value in validated_data.items():
            setattr(user, field, value)

        if avatar_file is not None:
            previous_public_id = user.avatar_public_id if user.has_custom_avatar else ""
            uploaded = media.upload_avatar(avatar_file)
            user.avatar = uploaded["url"]
            user.avatar_public_id = uploaded["publicId"]
            if previous_public_id:
                transaction.on_commit(lambda: media.delete_image(previous_public_id))

        user.save()
        logger.info("Profile updated for %s", user.username)
        return self.fetch(user.pk)
