from django.core.management.base import BaseCommand

from ._helpers import get_user_by_email_or_error


class Command(BaseCommand):
    """Mark a user's email as verified without the mailed link."""

    help = 'Marks the given user as email-verified'

    def add_arguments(self, parser):
        parser.add_argument('email')

    def handle(self, *args, **options):
        user = get_user_by_email_or_error(options['email'])
        if user.is_verified:
            self.stdout.write(f"{user.email} is already verified")
            return
        user.is_verified = True
        user.email_verification_token = ''
        user.email_verification_expire = None
        user.save(update_fields=['is_verified', 'email_verification_token', 'email_verification_expire', 'updated_at'])
        self.stdout.write(self.style.SUCCESS(f"Verified {user.email}"))
