"""Repository helpers for user lookups with derived counts."""

from typing import Optional

from django.db.models import Count, Exists, OuterRef, Q, QuerySet

from cocktails.db_accessor import DB_Accessor
from cocktails.models import Follow, User

USER_SORTS = {
    "newest": ("-date_joined", "-id"),
    "cocktails": ("-cocktails_count", "-date_joined", "-id"),
    "followers": ("-followers_count", "-date_joined", "-id"),
}


class UserRepo(DB_Accessor):
    """Repository for user queries annotated with cocktail/follower/following counts."""

    def __init__(self) -> None:
        super().__init__(User)

    def queryset(self, viewer=None) -> QuerySet:
        """
        Users with their counts; when `viewer` is signed in each row also
        carries `is_following` so listings need no per-row lookup.
        """
        qs = self.model.objects.annotate(
            cocktails_count=Count("cocktails", distinct=True),
            followers_count=Count("follower_relations", distinct=True),
            following_count=Count("following_relations", distinct=True),
        )
        if viewer is None or not viewer.is_authenticated:
            return qs
        return qs.annotate(
            is_following=Exists(Follow.objects.filter(follower=viewer.pk, following=OuterRef("pk")))
        )

    def get_by_id(self, user_id, viewer=None) -> User:
        """Return a user by id with counts attached."""
        return self.queryset(viewer).get(id=user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.model.objects.filter(email__iexact=(email or "").strip()).first()

    def list_for_directory(
        self,
        *,
        verified: Optional[bool] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        viewer=None,
    ) -> QuerySet:
        """Users for the community directory, filtered and sorted."""
        qs = self.queryset(viewer)
        if verified is not None:
            qs = qs.filter(is_verified=verified)
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(username__icontains=search))
        return qs.order_by(*USER_SORTS.get(sort_by or "newest", USER_SORTS["newest"]))
