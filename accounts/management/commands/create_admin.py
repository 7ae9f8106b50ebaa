import os

from django.core.management.base import BaseCommand

from accounts.models import User
from accounts.roles import ADMIN


class Command(BaseCommand):
    help = 'Create the first admin account if none exists'

    def add_arguments(self, parser):
        parser.add_argument('--email', default=os.environ.get('PADELBOOK_ADMIN_EMAIL', 'admin@padelbook.local'))
        parser.add_argument('--name', default='System Admin')
        parser.add_argument('--password', default=os.environ.get('PADELBOOK_ADMIN_PASSWORD', 'admin123'))

    def handle(self, *args, **options):
        if User.objects.filter(role=ADMIN).exists():
            self.stdout.write(self.style.WARNING('Admin user already exists'))
            return

        User.objects.create_superuser(
            email=options['email'],
            full_name=options['name'],
            password=options['password'],
        )

        self.stdout.write(self.style.SUCCESS('Admin user created successfully!'))
        self.stdout.write(f"Email: {options['email']}")
