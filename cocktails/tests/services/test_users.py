from unittest.mock import patch

from django.db import DatabaseError

from cocktails.exceptions import ApiError
from cocktails.models import Follow, User
from cocktails.services.users import PROFILE_COCKTAIL_LIMIT, UserService
from cocktails.tests.helpers import BartendersTestCase, make_cocktail, make_user


class UserServiceTests(BartendersTestCase):
    def setUp(self):
        super().setUp()
        self.service = UserService()
        self.user = make_user(username="mixer", name="Mix Master")

    def test_fetch_attaches_counts(self):
        make_cocktail(created_by=self.user)
        Follow.objects.create(follower=make_user(), following=self.user)
        user = self.service.fetch(self.user.pk)
        self.assertEqual((user.cocktails_count, user.followers_count, user.following_count), (1, 1, 0))

    def test_fetch_missing(self):
        with self.assertRaises(ApiError) as ctx:
            self.service.fetch(999999)
        self.assertEqual(ctx.exception.status, 404)

    def test_directory_filters(self):
        make_user(username="unverified", is_verified=False)
        users, total = self.service.directory_page(page=1, limit=10, verified=True)
        self.assertEqual([u.username for u in users], ["mixer"])
        users, total = self.service.directory_page(page=1, limit=10, search="master")
        self.assertEqual(total, 1)

    def test_directory_sort_by_followers(self):
        popular = make_user(username="popular")
        Follow.objects.create(follower=self.user, following=popular)
        users, _ = self.service.directory_page(page=1, limit=10, sort_by="followers")
        self.assertEqual(users[0], popular)

    def test_profile_shows_recent_approved_cocktails(self):
        for i in range(PROFILE_COCKTAIL_LIMIT + 1):
            make_cocktail(created_by=self.user, name=f"Drink {i}")
        make_cocktail(created_by=self.user, name="Hidden", is_approved=False)
        _, recent = self.service.profile_with_cocktails(self.user.pk)
        self.assertEqual(len(recent), PROFILE_COCKTAIL_LIMIT)
        self.assertNotIn("Hidden", [c.name for c in recent])

    @patch("cocktails.services.users.media")
    def test_avatar_upload_replaces_previous(self, media):
        self.user.avatar = "https://res.cloudinary.com/demo/old.jpg"
        self.user.avatar_public_id = "avatars/old"
        self.user.save()
        media.upload_avatar.return_value = {"url": "https://res.cloudinary.com/demo/new.jpg", "publicId": "avatars/new"}
        with self.captureOnCommitCallbacks(execute=True):
            user = self.service.update_profile(self.user, {"bio": "Stirred, not shaken"}, avatar_file=object())
        self.assertEqual((user.bio, user.avatar_public_id), ("Stirred, not shaken", "avatars/new"))
        media.delete_image.assert_called_once_with("avatars/old")

    @patch("cocktails.services.users.media")
    def test_failed_profile_save_keeps_old_avatar(self, media):
        self.user.avatar = "https://res.cloudinary.com/demo/old.jpg"
        self.user.avatar_public_id = "avatars/old"
        self.user.save()
        media.upload_avatar.return_value = {"url": "https://res.cloudinary.com/demo/new.jpg", "publicId": "avatars/new"}
        with patch.object(User, "save", side_effect=DatabaseError("write failed")):
            with self.captureOnCommitCallbacks(execute=True):
                with self.assertRaises(DatabaseError):
                    self.service.update_profile(self.user, {}, avatar_file=object())
        media.delete_image.assert_not_called()
        self.assertEqual(User.objects.get(pk=self.user.pk).avatar_public_id, "avatars/old")
