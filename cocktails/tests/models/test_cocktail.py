from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import TestCase

from cocktails.models import Comment, Like, Rating
from cocktails.models.cocktail import round_rating
from cocktails.tests.helpers import make_cocktail, make_user


class CocktailModelTestCase(TestCase):
    def setUp(self):
        self.author = make_user(username='author')
        self.cocktail = make_cocktail(created_by=self.author)

    def test_defaults(self):
        self.assertEqual(self.cocktail.category, 'signature')
        self.assertEqual(self.cocktail.alcohol_content, 'medium')
        self.assertEqual(self.cocktail.flavor, 'sweet')
        self.assertEqual(self.cocktail.views, 0)
        self.assertEqual(self.cocktail.average_rating, 0)

    def test_image_property(self):
        self.assertEqual(self.cocktail.image, {
            'url': self.cocktail.image_url,
            'publicId': self.cocktail.image_public_id,
        })

    def test_invalid_category_is_rejected(self):
        self.cocktail.category = 'breakfast'
        with self.assertRaises(ValidationError):
            self.cocktail.full_clean()

    def test_prep_time_must_be_positive(self):
        self.cocktail.prep_time = 0
        with self.assertRaises(ValidationError):
            self.cocktail.full_clean()

    def test_refresh_rating_stats_rounds_to_one_decimal(self):
        for value in (5, 4, 4):
            Rating.objects.create(user=make_user(), cocktail=self.cocktail, rating=value)
        self.cocktail.refresh_rating_stats()
        self.cocktail.refresh_from_db()
        self.assertEqual(self.cocktail.average_rating, 4.3)
        self.assertEqual(self.cocktail.ratings_count, 3)

    def test_refresh_rating_stats_without_ratings_is_zero(self):
        self.assertEqual(self.cocktail.refresh_rating_stats(), 0.0)
        self.assertEqual(self.cocktail.ratings_count, 0)

    def test_refresh_counters(self):
        fan = make_user()
        Like.objects.create(user=fan, cocktail=self.cocktail)
        Comment.objects.create(user=fan, cocktail=self.cocktail, text='Lovely')
        self.cocktail.refresh_counters()
        self.cocktail.refresh_from_db()
        self.assertEqual(self.cocktail.likes_count, 1)
        self.assertEqual(self.cocktail.comments_count, 1)

    def test_round_rating_rounds_halves_up(self):
        self.assertEqual(round_rating(4.25), 4.3)
        self.assertEqual(round_rating(4.24), 4.2)
        self.assertEqual(round_rating(None), 0.0)

    def test_rating_out_of_range_violates_constraint(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Rating.objects.create(user=make_user(), cocktail=self.cocktail, rating=6)

    def test_deleting_author_removes_cocktail(self):
        self.author.delete()
        self.assertFalse(type(self.cocktail).objects.filter(pk=self.cocktail.pk).exists())
