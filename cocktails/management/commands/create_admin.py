from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from cocktails.validators import PASSWORD_HELP, password_is_strong

User = get_user_model()


class Command(BaseCommand):
    """Create an admin account, or promote an existing one."""

    help = 'Creates or promotes an admin user'

    def add_arguments(self, parser):
        parser.add_argument('--email', required=True)
        parser.add_argument('--username')
        parser.add_argument('--password')
        parser.add_argument('--name', default='Admin')

    @transaction.atomic
    def handle(self, *args, **options):
        email = options['email'].strip().lower()
        user = User.objects.filter(email__iexact=email).first()
        if user is not None:
            user.is_admin = True
            user.is_verified = True
            user.save(update_fields=['is_admin', 'is_verified', 'updated_at'])
            self.stdout.write(self.style.SUCCESS(f"Promoted existing user {user.username} to admin"))
            return

        username = options.get('username')
        password = options.get('password')
        if not username or not password:
            raise CommandError('--username and --password are required to create a new admin')
        if not password_is_strong(password):
            raise CommandError(PASSWORD_HELP)
        user = User.objects.create_user(
            username=username,
            email=email,
            password=password,
            name=options['name'],
            is_admin=True,
            is_verified=True,
        )
        self.stdout.write(self.style.SUCCESS(f"Created admin {user.username} <{user.email}>"))
