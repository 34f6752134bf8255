"""Read-only helpers for follower/following listings."""

from cocktails.db_accessor import DB_Accessor
from cocktails.models import Follow


class FollowReadService:
    """Paginated follower/following queries, newest follow first."""

    def __init__(self, follow_model=Follow):
        self.follow_model = follow_model
        self.accessor = DB_Accessor(follow_model)

    def followers_qs(self, user_id):
        """Return follow rows pointing at the given user."""
        return (
            self.follow_model.objects.filter(following_id=user_id)
            .select_related("follower")
            .order_by("-created_at", "-id")
        )

    def following_qs(self, user_id):
        """Return follow rows created by the given user."""
        return (
            self.follow_model.objects.filter(follower_id=user_id)
            .select_related("following")
            .order_by("-created_at", "-id")
        )

    def followers_page(self, user_id, *, page, limit):
        rows, total = self.accessor.paginate(self.followers_qs(user_id), page=page, limit=limit)
        return [row.follower for row in rows], total

    def following_page(self, user_id, *, page, limit):
        rows, total = self.accessor.paginate(self.following_qs(user_id), page=page, limit=limit)
        return [row.following for row in rows], total
