from django.core.management.base import BaseCommand, CommandError

from cocktails.services.email import EmailDeliveryError, EmailService


class Command(BaseCommand):
    """Send a one-off message through the configured provider."""

    help = 'Sends a test email to verify the email provider configuration'

    def add_arguments(self, parser):
        parser.add_argument('to')
        parser.add_argument('--subject', default='BartendersHub test email')

    def handle(self, *args, **options):
        service = EmailService()
        if not service.enabled:
            raise CommandError('Email sending is disabled (EMAIL_SERVICE=none or EMAIL_DISABLE=true)')
        html = (
            '<h1>BartendersHub</h1>'
            f'<p>This is a test email sent through the <strong>{service.provider}</strong> provider.</p>'
        )
        try:
            service.send_email(options['to'], options['subject'], html)
        except EmailDeliveryError as exc:
            raise CommandError(f"Send failed: {exc}") from exc
        self.stdout.write(self.style.SUCCESS(f"Test email sent to {options['to']} via {service.provider}"))
