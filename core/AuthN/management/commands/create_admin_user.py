"""
Django Management Command to bootstrap a dashboard login

Usage: python manage.py create_admin_user --email admin@example.com --password secret
       python manage.py create_admin_user --email acc@example.com --password secret --role accountant
       python manage.py create_admin_user ... --force (to reset the password of an existing user)
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from AuthN.models import BaseUserModel


class Command(BaseCommand):
    help = 'Create an admin (or accountant) user for the payroll dashboard'

    def add_arguments(self, parser):
        parser.add_argument('--email', required=True, help='Login email')
        parser.add_argument('--password', required=True, help='Login password')
        parser.add_argument('--name', default='', help='Display name')
        parser.add_argument(
            '--role',
            default=BaseUserModel.ROLE_ADMIN,
            choices=[BaseUserModel.ROLE_ADMIN, BaseUserModel.ROLE_ACCOUNTANT],
            help='Role to assign (default: admin)',
        )
        parser.add_argument(
            '--force',
            action='store_true',
            help='Reset password and role if the user already exists',
        )

    def handle(self, *args, **options):
        email = options['email'].strip().lower()
        role = options['role']

        with transaction.atomic():
            existing = BaseUserModel.objects.filter(email=email).first()
            if existing:
                if not options['force']:
                    raise CommandError(f'User already exists: {email}. Use --force to reset it.')
                existing.set_password(options['password'])
                existing.role = role
                existing.is_staff = role == BaseUserModel.ROLE_ADMIN
                if options['name']:
                    existing.name = options['name']
                existing.save()
                self.stdout.write(self.style.WARNING(f'Updated existing user: {email} ({role})'))
                return

            if role == BaseUserModel.ROLE_ADMIN:
                BaseUserModel.objects.create_superuser(email, options['password'], name=options['name'])
            else:
                BaseUserModel.objects.create_user(email, options['password'], name=options['name'], role=role)

        self.stdout.write(self.style.SUCCESS(f'Successfully created {role} user: {email}'))
