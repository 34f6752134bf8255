import uuid

from django.core.cache import cache
from django.test import TestCase
from rest_framework.test import APITestCase

from cocktails.models import Cocktail, User
from cocktails.services.cache import reset_metrics
from cocktails.tokens import generate_token

DEFAULT_PASSWORD = "Password123!"


def make_user(**kwargs):
    username = kwargs.pop("username", f"bartender_{uuid.uuid4().hex[:6]}")
    email = kwargs.pop("email", f"{username.lower()}@example.org")
    password = kwargs.pop("password", DEFAULT_PASSWORD)
    kwargs.setdefault("is_verified", True)
    return User.objects.create_user(
        username=username,
        email=email,
        password=password,
        name=kwargs.pop("name", "Jane Doe"),
        **kwargs,
    )


def make_cocktail(*, created_by=None, name="Test Sour", **extra):
    """
    creates and returns an approved cocktail. pass is_approved=False for a pending one.
    """
    if created_by is None:
        created_by = make_user()
    extra.setdefault("is_approved", True)
    return Cocktail.objects.create(
        created_by=created_by,
        name=name,
        description=extra.pop("description", "Bright and sharp"),
        ingredients=extra.pop("ingredients", [{"name": "Gin", "amount": "2", "unit": "oz"}]),
        instructions=extra.pop("instructions", [{"step": 1, "description": "Shake with ice"}]),
        prep_time=extra.pop("prep_time", 3),
        glass_type=extra.pop("glass_type", "coupe"),
        image_url=extra.pop("image_url", "https://res.cloudinary.com/demo/image/upload/sample.jpg"),
        image_public_id=extra.pop("image_public_id", "bartendershub/cocktails/sample"),
        **extra,
    )


def cocktail_payload(**overrides):
    payload = {
        "name": "Garden Gimlet",
        "description": "Gin, lime and cucumber",
        "ingredients": [
            {"name": "Gin", "amount": "2", "unit": "oz"},
            {"name": "Lime Juice", "amount": "0.75", "unit": "oz"},
        ],
        "instructions": [
            {"step": 2, "description": "Strain into a coupe"},
            {"step": 1, "description": "Shake with ice"},
        ],
        "prepTime": 4,
        "glassType": "coupe",
        "image": {"url": "https://res.cloudinary.com/demo/image/upload/gimlet.jpg", "publicId": "bartendershub/cocktails/gimlet"},
    }
    payload.update(overrides)
    return payload


class CacheClearingMixin:
    """Listing cache and its metrics live outside the test transaction."""

    def setUp(self):
        super().setUp()
        cache.clear()
        reset_metrics()


class BartendersTestCase(CacheClearingMixin, TestCase):
    pass


class ApiTestCase(CacheClearingMixin, APITestCase):
    """Shared setup for API view tests."""

    def authenticate(self, user):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {generate_token(user.pk)}")

    def logout(self):
        self.client.credentials()
