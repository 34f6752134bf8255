"""Custom user model with bartender profile metadata and avatar helpers."""

from django.contrib.auth.models import AbstractUser, UserManager
from django.core.validators import MaxLengthValidator, RegexValidator
from django.db import models
from libgravatar import Gravatar

DEFAULT_AVATAR_URL = "https://res.cloudinary.com/bartendershub/image/upload/v1/default-avatar.jpg"


def default_preferences():
    """Preferences stored for every new account."""
    return {"emailNotifications": True, "profileVisibility": "public"}


class BartenderManager(UserManager):
    """User manager that normalises emails to lower case."""

    def _create_user(self, username, email, password, **extra_fields):
        email = (email or "").strip().lower()
        return super()._create_user(username, email, password, **extra_fields)

    def get_by_email(self, email):
        """Return the user owning an email address, case-insensitively."""
        return self.get(email__iexact=(email or "").strip())


class User(AbstractUser):
    """Model for authentication plus the public bartender profile."""

    username = models.CharField(
        max_length=20,
        unique=True,
        validators=[RegexValidator(
            regex=r'^[a-zA-Z0-9_]{3,20}$',
            message='Username must be 3-20 letters, numbers, or underscores'
        )]
    )
    name = models.CharField(max_length=50, blank=True, default="")
    email = models.EmailField(unique=True, blank=False)
    avatar = models.URLField(max_length=500, blank=True, default=DEFAULT_AVATAR_URL)
    avatar_public_id = models.CharField(max_length=255, blank=True, default="")
    bio = models.TextField(
        max_length=500,
        blank=True,
        default="",
        validators=[MaxLengthValidator(500)]
    )
    speciality = models.CharField(max_length=100, blank=True, default="")
    location = models.CharField(max_length=100, blank=True, default="")
    country = models.CharField(max_length=2, blank=True, default="", help_text="ISO 3166 alpha-2 code")
    is_verified = models.BooleanField(default=False)
    is_admin = models.BooleanField(default=False)
    badges = models.JSONField(default=list, blank=True)
    social_links = models.JSONField(default=dict, blank=True)
    preferences = models.JSONField(default=default_preferences, blank=True)

    # only SHA-256 hashes of mailed tokens are stored
    email_verification_token = models.CharField(max_length=64, blank=True, default="")
    email_verification_expire = models.DateTimeField(null=True, blank=True)
    reset_password_token = models.CharField(max_length=64, blank=True, default="")
    reset_password_expire = models.DateTimeField(null=True, blank=True)
    last_verification_resend = models.DateTimeField(null=True, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    objects = BartenderManager()

    class Meta:
        """Newest members first."""
        ordering = ['-date_joined', '-id']
        indexes = [
            models.Index(fields=['-date_joined'], name='user_date_joined_idx'),
        ]

    def __str__(self):
        return self.username

    @property
    def display_name(self):
        """Name shown in emails and toasts."""
        return self.name or self.username

    def gravatar(self, size=120):
        """Return gravatar URL for the user's email."""
        gravatar_object = Gravatar(self.email)
        return gravatar_object.get_image(size=size, default='mp')

    def avatar_or_gravatar(self, size=120):
        """Return uploaded avatar URL, falling back to gravatar for the default avatar."""
        if self.avatar and self.avatar != DEFAULT_AVATAR_URL:
            return self.avatar
        return self.gravatar(size=size)

    @property
    def has_custom_avatar(self):
        return bool(self.avatar_public_id) and self.avatar != DEFAULT_AVATAR_URL

    def save(self, *args, **kwargs):
        """Normalise email and country before persisting."""
        self.email = (self.email or "").strip().lower()
        self.country = (self.country or "").strip().upper()
        super().save(*args, **kwargs)
