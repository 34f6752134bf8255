"""Management command to seed the database with sample bartenders, cocktails and engagement."""

from random import choice, randint, sample

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import IntegrityError, transaction
from faker import Faker

from cocktails.data.classic_cocktails import CLASSIC_COCKTAILS, PLACEHOLDER_IMAGE
from cocktails.models import Cocktail, Comment, Follow, Like, Rating
from cocktails.models.cocktail import ALCOHOL_CONTENT_CHOICES, FLAVOR_CHOICES
from cocktails.services.cache import invalidate_cocktail_cache

from ._helpers import create_email, create_username

User = get_user_model()

SEED_CATEGORIES = ["signature", "seasonal", "tropical", "winter", "summer"]
GLASSES = ["coupe", "rocks", "highball", "collins", "nick-and-nora", "hurricane"]
SPIRITS = ["Gin", "White Rum", "Aged Rum", "Bourbon", "Rye Whiskey", "Mezcal", "Blanco Tequila", "Vodka"]
MODIFIERS = ["Sweet Vermouth", "Campari", "Aperol", "Orange Liqueur", "Maraschino", "Chartreuse"]
CITRUS = ["Fresh Lime Juice", "Fresh Lemon Juice", "Grapefruit Juice"]
SWEETENERS = ["Simple Syrup (1:1)", "Honey Syrup", "Demerara Syrup", "Orgeat"]
TAGS = ["shaken", "stirred", "sour", "bitter", "tiki", "highball", "aperitif", "dessert", "party"]
COMMENTS = [
    "Made this last night, huge hit.",
    "Swapped the syrup for honey, even better.",
    "Great balance, not too sweet.",
    "Needs a touch more citrus for me.",
    "Adding this to the bar menu!",
]


class Command(BaseCommand):
    """Create sample users, follows, cocktails, likes, ratings and comments."""
    USER_COUNT = 30
    DEFAULT_PASSWORD = 'Password123!'
    help = 'Seeds the database with sample data'

    def add_arguments(self, parser):
        parser.add_argument('--users', type=int, default=self.USER_COUNT)
        parser.add_argument('--cocktails-per-user', type=int, default=2)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.faker = Faker('en_GB')

    def handle(self, *args, **options):
        users = self.create_users(options['users'])
        self.seed_follows(users, follow_k=5)
        cocktails = self.seed_cocktails(users, per_user=options['cocktails_per_user'])
        self.seed_engagement(users, cocktails)
        invalidate_cocktail_cache()
        self.stdout.write(self.style.SUCCESS("Seeding complete"))

    def create_users(self, target):
        created = []
        attempts = 0
        while len(created) < target and attempts < target * 5:
            attempts += 1
            user = self.try_create_user()
            if user is not None:
                created.append(user)
        self.stdout.write(f"Created {len(created)} users")
        return created

    def try_create_user(self):
        """Create a random verified user; duplicate usernames/emails are skipped."""
        first_name = self.faker.first_name()
        last_name = self.faker.last_name()
        suffix = randint(1, 999)
        try:
            with transaction.atomic():
                return User.objects.create_user(
                    username=create_username(first_name, last_name, suffix),
                    email=create_email(first_name, last_name, suffix),
                    password=self.DEFAULT_PASSWORD,
                    name=f"{first_name} {last_name}",
                    bio=self.faker.sentence(nb_words=12),
                    speciality=choice(["Tiki", "Classics", "Molecular", "Low-ABV", "Agave"]),
                    location=self.faker.city(),
                    country=self.faker.country_code(),
                    is_verified=True,
                )
        except IntegrityError:
            return None

    def seed_follows(self, users, follow_k=5):
        if len(users) < 2:
            return
        k = min(follow_k, len(users) - 1)
        rows = []
        for follower in users:
            pool = [user for user in users if user.pk != follower.pk]
            rows.extend(Follow(follower=follower, following=target) for target in sample(pool, k))
        Follow.objects.bulk_create(rows, ignore_conflicts=True, batch_size=500)

    def _build_cocktail(self, author):
        spirit = choice(SPIRITS)
        ingredients = [
            {"name": spirit, "amount": "2", "unit": "oz"},
            {"name": choice(MODIFIERS), "amount": "0.5", "unit": "oz"},
            {"name": choice(CITRUS), "amount": "0.75", "unit": "oz"},
            {"name": choice(SWEETENERS), "amount": "0.5", "unit": "oz", "optional": randint(0, 3) == 0},
        ]
        instructions = [
            {"step": 1, "description": "Add all ingredients to a shaker with ice."},
            {"step": 2, "description": "Shake hard for 10-12 seconds."},
            {"step": 3, "description": f"Double strain into a chilled {choice(GLASSES)} glass."},
        ]
        return Cocktail(
            created_by=author,
            name=f"{self.faker.color_name()} {spirit.split()[-1]} {choice(['Smash', 'Sour', 'Fizz', 'Swizzle', 'Flip'])}"[:100],
            description=self.faker.paragraph(nb_sentences=2)[:500],
            ingredients=ingredients,
            instructions=instructions,
            prep_time=randint(2, 10),
            servings=1,
            glass_type=choice(GLASSES),
            garnish=choice(["Lime wheel", "Orange twist", "Mint sprig", "Cherry", ""]),
            image_url=PLACEHOLDER_IMAGE["url"],
            image_public_id=PLACEHOLDER_IMAGE["publicId"],
            category=choice(SEED_CATEGORIES),
            tags=sample(TAGS, randint(1, 3)),
            alcohol_content=choice(ALCOHOL_CONTENT_CHOICES)[0],
            flavor=choice(FLAVOR_CHOICES)[0],
            is_approved=randint(0, 9) > 0,
            views=randint(0, 500),
        )

    def seed_cocktails(self, users, per_user=2):
        rows = [self._build_cocktail(author) for author in users for _ in range(per_user)]
        cocktails = Cocktail.objects.bulk_create(rows, batch_size=500)
        self.stdout.write(f"Created {len(cocktails)} cocktails (classics available: {len(CLASSIC_COCKTAILS)})")
        return cocktails

    def seed_engagement(self, users, cocktails, max_likes=10, max_comments=3):
        likes, ratings, comments = [], [], []
        for cocktail in cocktails:
            fans = sample(users, min(len(users), randint(0, max_likes)))
            likes.extend(Like(user=user, cocktail=cocktail) for user in fans)
            ratings.extend(Rating(user=user, cocktail=cocktail, rating=randint(3, 5)) for user in fans)
            for user in sample(users, min(len(users), randint(0, max_comments))):
                comments.append(Comment(user=user, cocktail=cocktail, text=choice(COMMENTS)))
        with transaction.atomic():
            Like.objects.bulk_create(likes, ignore_conflicts=True, batch_size=1000)
            Rating.objects.bulk_create(ratings, ignore_conflicts=True, batch_size=1000)
            Comment.objects.bulk_create(comments, batch_size=1000)
            # bulk_create skips the counters, recompute them per cocktail
            for cocktail in cocktails:
                cocktail.refresh_counters(save=False)
                cocktail.refresh_rating_stats(save=False)
            Cocktail.objects.bulk_update(
                cocktails,
                ["likes_count", "comments_count", "average_rating", "ratings_count"],
                batch_size=500,
            )
