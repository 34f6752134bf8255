from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from cocktails.services.classics import SYSTEM_EMAIL

User = get_user_model()


class Command(BaseCommand):
    """
    Make PRIMARY_ADMIN_EMAIL the only human admin.

    The primary account is promoted and verified; every other admin except
    the classics system user is demoted.
    """

    help = 'Ensures only the primary admin (and the system user) hold admin rights'

    def add_arguments(self, parser):
        parser.add_argument('--email', help='Override PRIMARY_ADMIN_EMAIL')
        parser.add_argument('--dry-run', action='store_true')

    def handle(self, *args, **options):
        email = (options.get('email') or settings.PRIMARY_ADMIN_EMAIL or '').strip().lower()
        if not email:
            raise CommandError('PRIMARY_ADMIN_EMAIL is not configured')
        primary = User.objects.filter(email__iexact=email).first()
        if primary is None:
            raise CommandError(f"Primary admin '{email}' does not exist")

        others = User.objects.filter(is_admin=True).exclude(pk=primary.pk).exclude(email=SYSTEM_EMAIL)
        demoted = sorted(others.values_list('email', flat=True))
        if options['dry_run']:
            self.stdout.write(f"Would promote {primary.email} and demote: {', '.join(demoted) or 'nobody'}")
            return

        with transaction.atomic():
            User.objects.filter(pk=primary.pk).update(is_admin=True, is_verified=True)
            others.update(is_admin=False)
        self.stdout.write(self.style.SUCCESS(
            f"Primary admin {primary.email} enforced; demoted {len(demoted)} other admin(s)"
        ))
