from django.core.management.base import BaseCommand

from cocktails.services.classics import seed_classics, seed_status


class Command(BaseCommand):
    """Upsert the classic cocktail library under the system user."""

    help = 'Seeds (or refreshes) the classic cocktails library'

    def handle(self, *args, **options):
        result = seed_classics()
        status = seed_status()
        self.stdout.write(self.style.SUCCESS(
            f"Classics seeded: {result['inserted']} inserted, {result['updated']} updated "
            f"({status['count']} total)"
        ))
