import json

from django.core.management.base import BaseCommand

from cocktails.services.health import run_checks


def _line(result):
    if result.get('skipped'):
        return 'SKIPPED'
    if result['ok']:
        return 'OK'
    if result.get('missing'):
        return f"Missing: {','.join(result['missing'])}"
    return f"FAIL ({result.get('error') or result.get('state') or result.get('rawStatus')})"


class Command(BaseCommand):
    """
    Runtime diagnostics for env, database, Cloudinary, cache and email.

    Exits 0 when the env, database and Cloudinary checks pass, else 1.
    """

    help = 'Checks environment, database, Cloudinary, cache and email connectivity'

    def add_arguments(self, parser):
        parser.add_argument('--json', action='store_true', help='Print the summary as JSON')

    def handle(self, *args, **options):
        summary = run_checks()
        if options['json']:
            self.stdout.write(json.dumps(summary, indent=2))
        else:
            self.stdout.write('BartendersHub Health Check')
            self.stdout.write('=' * 32)
            for label, key in (
                ('Env vars', 'environment'),
                ('Database', 'database'),
                ('Cloudinary', 'cloudinary'),
                ('Cache', 'cache'),
                ('Email', 'email'),
            ):
                self.stdout.write(f"{label + ':':<15}{_line(summary[key])}")
            self.stdout.write(f"{'Timings (ms):':<15}{summary['timingsMs']}")
            self.stdout.write('=' * 32)
            if summary['ok']:
                self.stdout.write(self.style.SUCCESS('ALL CRITICAL CHECKS PASSED'))
            else:
                self.stdout.write(self.style.ERROR('ONE OR MORE CRITICAL CHECKS FAILED'))
        if not summary['ok']:
            raise SystemExit(1)
