from datetime import timedelta
from unittest.mock import patch

from django.db import DatabaseError
from django.utils import timezone

from cocktails.exceptions import ApiError
from cocktails.models import Cocktail, Like, Rating
from cocktails.repos.cocktail_repo import decode_cursor, encode_cursor
from cocktails.services.cache import get_listing, set_listing
from cocktails.services.cocktails import CocktailService
from cocktails.tests.helpers import BartendersTestCase, make_cocktail, make_user


class CocktailListingTests(BartendersTestCase):
    def setUp(self):
        super().setUp()
        self.service = CocktailService()
        self.author = make_user(username="author")
        now = timezone.now()
        self.old = make_cocktail(created_by=self.author, name="Old", views=50, likes_count=1, average_rating=4.0)
        self.mid = make_cocktail(created_by=self.author, name="Mid", views=50, likes_count=3, average_rating=4.5)
        self.new = make_cocktail(created_by=self.author, name="New", views=5, likes_count=3, average_rating=3.0)
        for offset, cocktail in enumerate((self.old, self.mid, self.new)):
            Cocktail.objects.filter(pk=cocktail.pk).update(created_at=now - timedelta(hours=3 - offset))
        self.pending = make_cocktail(created_by=self.author, name="Pending", is_approved=False)

    def names(self, rows):
        return [c.name for c in rows]

    def test_default_is_newest_first_and_hides_pending(self):
        rows, meta = self.service.list_page()
        self.assertEqual(self.names(rows), ["New", "Mid", "Old"])
        self.assertEqual(meta, {"count": 3, "total": 3, "page": 1, "pages": 1, "cursor": None})

    def test_views_sort_breaks_ties_by_newest(self):
        rows, _ = self.service.list_page(sort_by="views")
        self.assertEqual(self.names(rows), ["Mid", "Old", "New"])

    def test_likes_sort_breaks_ties_by_newest(self):
        rows, _ = self.service.list_page(sort_by="likes")
        self.assertEqual(self.names(rows), ["New", "Mid", "Old"])

    def test_rating_sort(self):
        rows, _ = self.service.list_page(sort_by="rating")
        self.assertEqual(self.names(rows), ["Mid", "Old", "New"])

    def test_unknown_sort_falls_back_to_newest(self):
        rows, _ = self.service.list_page(sort_by="bogus")
        self.assertEqual(self.names(rows), ["New", "Mid", "Old"])

    def test_search_matches_name_and_description(self):
        Cocktail.objects.filter(pk=self.old.pk).update(description="Smoky mezcal stir")
        rows, _ = self.service.list_page(search="mezcal")
        self.assertEqual(self.names(rows), ["Old"])
        rows, _ = self.service.list_page(search="mid")
        self.assertEqual(self.names(rows), ["Mid"])

    def test_created_by_filter(self):
        make_cocktail(name="Someone Else")
        rows, meta = self.service.list_page(created_by=str(self.author.pk))
        self.assertEqual(meta["total"], 3)
        rows, meta = self.service.list_page(created_by="not-an-id")
        self.assertEqual(rows, [])

    def test_offset_pages_hand_out_a_cursor(self):
        rows, meta = self.service.list_page(limit=2)
        self.assertEqual(self.names(rows), ["New", "Mid"])
        self.assertEqual(meta["pages"], 2)
        self.assertIsNotNone(meta["cursor"])

        rows, meta = self.service.list_page(limit=2, cursor=meta["cursor"])
        self.assertEqual(self.names(rows), ["Old"])
        self.assertEqual(meta, {"count": 1, "cursor": None})

    def test_non_newest_sort_has_no_cursor(self):
        _, meta = self.service.list_page(limit=1, sort_by="views")
        self.assertIsNone(meta["cursor"])

    def test_malformed_cursor_restarts_from_top(self):
        rows, _ = self.service.list_page(limit=2, cursor="%%%not-base64")
        self.assertEqual(self.names(rows), ["New", "Mid"])

    def test_cursor_round_trip(self):
        self.new.refresh_from_db()
        created_at, cocktail_id = decode_cursor(encode_cursor(self.new))
        self.assertEqual(cocktail_id, self.new.pk)
        self.assertEqual(created_at, self.new.created_at)


class CocktailVisibilityTests(BartendersTestCase):
    def setUp(self):
        super().setUp()
        self.service = CocktailService()
        self.owner = make_user(username="owner")
        self.pending = make_cocktail(created_by=self.owner, is_approved=False)

    def test_pending_hidden_from_strangers(self):
        with self.assertRaises(ApiError) as ctx:
            self.service.fetch(self.pending.pk, viewer=make_user())
        self.assertEqual(ctx.exception.status, 404)

    def test_pending_visible_to_owner_and_admin(self):
        self.assertEqual(self.service.fetch(self.pending.pk, viewer=self.owner), self.pending)
        self.assertEqual(self.service.fetch(self.pending.pk, viewer=make_user(is_admin=True)), self.pending)

    def test_unknown_id_is_404(self):
        with self.assertRaises(ApiError):
            self.service.fetch("not-a-uuid")


class CocktailLifecycleTests(BartendersTestCase):
    def setUp(self):
        super().setUp()
        self.service = CocktailService()
        self.user = make_user()

    def data(self, **overrides):
        data = {
            "name": "Paper Plane",
            "description": "Equal parts",
            "ingredients": [{"name": "Bourbon", "amount": "0.75", "unit": "oz"}],
            "instructions": [{"step": 1, "description": "Shake"}],
            "prep_time": 2,
            "glass_type": "coupe",
            "image": {"url": "https://res.cloudinary.com/demo/plane.jpg", "publicId": "plane"},
        }
        data.update(overrides)
        return data

    def test_create_is_pending_with_zero_counters(self):
        cocktail = self.service.create(self.user, self.data())
        self.assertFalse(cocktail.is_approved)
        self.assertEqual((cocktail.views, cocktail.likes_count, cocktail.average_rating), (0, 0, 0))
        self.assertEqual(cocktail.image_public_id, "plane")

    def test_create_requires_an_image(self):
        data = self.data()
        del data["image"]
        with self.assertRaises(ApiError) as ctx:
            self.service.create(self.user, data)
        self.assertEqual(ctx.exception.code, "IMAGE_REQUIRED")

    @patch("cocktails.services.cocktails.media.upload_image")
    def test_create_uploads_file(self, upload_image):
        upload_image.return_value = {"url": "https://res.cloudinary.com/demo/new.jpg", "publicId": "new"}
        cocktail = self.service.create(self.user, self.data(image=None), image_file=object())
        self.assertEqual(cocktail.image_public_id, "new")

    @patch("cocktails.services.cocktails.media.delete_image")
    def test_update_with_new_image_deletes_old(self, delete_image):
        cocktail = self.service.create(self.user, self.data())
        with self.captureOnCommitCallbacks(execute=True):
            self.service.update(cocktail, {
                "name": "Paper Jet",
                "image": {"url": "https://res.cloudinary.com/demo/jet.jpg", "publicId": "jet"},
            })
        cocktail.refresh_from_db()
        self.assertEqual((cocktail.name, cocktail.image_public_id), ("Paper Jet", "jet"))
        delete_image.assert_called_once_with("plane")

    @patch("cocktails.services.cocktails.media.delete_image")
    def test_update_without_image_keeps_it(self, delete_image):
        cocktail = self.service.create(self.user, self.data())
        self.service.update(cocktail, {"garnish": "Lemon"})
        delete_image.assert_not_called()
        self.assertEqual(cocktail.image_public_id, "plane")

    @patch("cocktails.services.cocktails.media.delete_image")
    def test_delete_removes_image(self, delete_image):
        cocktail = make_cocktail(created_by=self.user)
        with self.captureOnCommitCallbacks(execute=True):
            self.service.delete(cocktail, self.user)
        self.assertFalse(Cocktail.objects.exists())
        delete_image.assert_called_once_with("bartendershub/cocktails/sample")

    @patch("cocktails.services.cocktails.media.delete_image")
    def test_failed_update_keeps_old_image(self, delete_image):
        cocktail = make_cocktail(created_by=self.user)
        with patch.object(Cocktail, "save", side_effect=DatabaseError("write failed")):
            with self.captureOnCommitCallbacks(execute=True):
                with self.assertRaises(DatabaseError):
                    self.service.update(cocktail, {
                        "image": {"url": "https://res.cloudinary.com/demo/new.jpg", "publicId": "new"},
                    })
        cocktail.refresh_from_db()
        self.assertEqual(cocktail.image_public_id, "bartendershub/cocktails/sample")
        delete_image.assert_not_called()

    @patch("cocktails.services.cocktails.media.delete_image")
    def test_old_image_deleted_only_on_commit(self, delete_image):
        cocktail = make_cocktail(created_by=self.user)
        with self.captureOnCommitCallbacks() as callbacks:
            self.service.update(cocktail, {
                "image": {"url": "https://res.cloudinary.com/demo/new.jpg", "publicId": "new"},
            })
            delete_image.assert_not_called()
        self.assertEqual(len(callbacks), 1)
        callbacks[0]()
        delete_image.assert_called_once_with("bartendershub/cocktails/sample")


class CocktailEngagementTests(BartendersTestCase):
    def setUp(self):
        super().setUp()
        self.service = CocktailService()
        self.cocktail = make_cocktail()
        self.user = make_user()

    def test_record_view_increments_and_invalidates(self):
        set_listing({"page": 1}, {"data": [], "meta": {}})
        self.assertEqual(self.service.record_view(self.cocktail), 1)
        self.assertEqual(self.service.record_view(self.cocktail), 2)
        self.assertIsNone(get_listing({"page": 1}))

    def test_toggle_like(self):
        self.assertEqual(self.service.toggle_like(self.cocktail, self.user), {"isLiked": True, "likesCount": 1})
        self.assertEqual(self.service.toggle_like(self.cocktail, self.user), {"isLiked": False, "likesCount": 0})
        self.assertFalse(Like.objects.exists())

    def test_add_comment_updates_count(self):
        comment = self.service.add_comment(self.cocktail, self.user, "Lovely")
        self.assertEqual(comment.text, "Lovely")
        self.assertEqual(self.cocktail.comments_count, 1)

    def test_rating_replaces_previous(self):
        self.service.rate(self.cocktail, self.user, 2)
        other = make_user()
        self.service.rate(self.cocktail, other, 5)
        result = self.service.rate(self.cocktail, self.user, 4)
        self.assertEqual(result, {"averageRating": 4.5, "ratingsCount": 2, "userRating": 4})
        self.assertEqual(Rating.objects.count(), 2)
