from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from cocktails.services.cache import invalidate_cocktail_cache
from cocktails.services.classics import SYSTEM_EMAIL

User = get_user_model()


class Command(BaseCommand):
    """
    Remove seeded sample data.

    Deletes every user that is neither staff, an admin nor the classics
    system user; their cocktails, follows and engagement cascade with them.
    """

    help = 'Removes seeded sample data'

    def handle(self, *args, **options):
        sample_users = User.objects.filter(is_staff=False, is_admin=False).exclude(email=SYSTEM_EMAIL)
        with transaction.atomic():
            deleted_count, _ = sample_users.delete()
        invalidate_cocktail_cache()
        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted_count} sample rows (users and related data)."))
