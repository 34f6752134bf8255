import logging

from django.db import transaction

from cocktails.exceptions import ApiError
from cocktails.models import Follow

logger = logging.getLogger(__name__)


class FollowService:
    def __init__(self, actor):
        self.actor = actor

    def _check_target(self, target):
        if target is None:
            raise ApiError(404, "User not found", "NOT_FOUND")
        if self.actor.pk == target.pk:
            raise ApiError(400, "You cannot follow yourself", "SELF_FOLLOW")

    def is_following(self, target):
        return Follow.objects.filter(follower=self.actor, following=target).exists()

    @transaction.atomic
    def follow_user(self, target):
        self._check_target(target)
        _, created = Follow.objects.get_or_create(follower=self.actor, following=target)
        if created:
            logger.info("%s followed %s", self.actor.username, target.username)
        return True

    @transaction.atomic
    def unfollow(self, target):
        self._check_target(target)
        deleted, _ = Follow.objects.filter(follower=self.actor, following=target).delete()
        if deleted:
            logger.info("%s unfollowed %s", self.actor.username, target.username)
        return False

    @transaction.atomic
    def toggle_follow(self, target):
        """Follow or unfollow `target`; returns the new state and follower count."""
        self._check_target(target)
        if self.is_following(target):
            is_following = self.unfollow(target)
        else:
            is_following = self.follow_user(target)
        return {
            "isFollowing": is_following,
            "followersCount": Follow.objects.filter(following=target).count(),
        }
