from types import SimpleNamespace

from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from cocktails.models import Follow
from cocktails.repos import UserRepo
from cocktails.serializers import UserSerializer
from cocktails.tests.helpers import make_user


class UserRepoTests(TestCase):
    def setUp(self):
        self.repo = UserRepo()
        self.viewer = make_user(username="viewer")
        self.followed = make_user(username="followed")
        self.stranger = make_user(username="stranger")
        Follow.objects.create(follower=self.viewer, following=self.followed)

    def test_get_by_email_is_case_insensitive(self):
        self.assertEqual(self.repo.get_by_email("  FOLLOWED@example.org "), self.followed)
        self.assertIsNone(self.repo.get_by_email("nobody@example.org"))
        self.assertIsNone(self.repo.get_by_email(None))

    def test_directory_rows_carry_follow_state(self):
        users = {u.username: u for u in self.repo.list_for_directory(viewer=self.viewer)}
        self.assertTrue(users["followed"].is_following)
        self.assertFalse(users["stranger"].is_following)

    def test_anonymous_viewer_has_no_follow_state(self):
        user = self.repo.get_by_id(self.followed.pk, viewer=AnonymousUser())
        self.assertFalse(hasattr(user, "is_following"))

    def test_serializing_directory_needs_no_extra_queries(self):
        users = list(self.repo.list_for_directory(viewer=self.viewer))
        request = SimpleNamespace(user=self.viewer)
        with self.assertNumQueries(0):
            data = UserSerializer(users, many=True, context={"request": request}).data
        following = {row["username"]: row["isFollowing"] for row in data}
        self.assertEqual(following, {"viewer": False, "followed": True, "stranger": False})
