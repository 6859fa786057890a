"""
Django Management Command to generate monthly salaries

Usage: python manage.py generate_monthly_salaries
       python manage.py generate_monthly_salaries --month 1 --year 2025
"""

from django.core.management.base import BaseCommand, CommandError

from PayrollSystem.exceptions import PayrollError
from PayrollSystem.services import generate_monthly_salaries
from PayrollSystem.utils import month_label


class Command(BaseCommand):
    help = 'Create PENDING salaries for all active employees for one month (defaults to the current UTC month)'

    def add_arguments(self, parser):
        parser.add_argument('--month', type=int, help='Month (1-12)')
        parser.add_argument('--year', type=int, help='Year, e.g. 2025')

    def handle(self, *args, **options):
        try:
            result = generate_monthly_salaries(month=options['month'], year=options['year'])
        except PayrollError as e:
            raise CommandError(e.message)

        summary = result['summary']
        period = f"{month_label(result['month'])} {result['year']}"

        for skipped in result['details']['skipped']:
            self.stdout.write(f"  Skipped {skipped['employeeName']}: {skipped['reason']}")
        for error in result['details']['errors']:
            self.stdout.write(self.style.ERROR(f"  Failed {error['employeeName']}: {error['error']}"))

        self.stdout.write(self.style.SUCCESS(
            f"{period}: {summary['created']} created, {summary['skipped']} skipped, "
            f"{summary['errors']} errors ({summary['totalEmployees']} active employees)"
        ))
