from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from notifications.models import ChangeEvent


class Command(BaseCommand):
    help = 'Delete change events older than the retention window'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=getattr(settings, 'PADELBOOK_CHANGE_RETENTION_DAYS', 7),
            help='Keep events from this many most recent days',
        )

    def handle(self, *args, **options):
        cutoff = timezone.now() - timedelta(days=options['days'])
        deleted, _ = ChangeEvent.objects.filter(created_at__lt=cutoff).delete()
        self.stdout.write(self.style.SUCCESS(f'Deleted {deleted} change events older than {cutoff:%Y-%m-%d %H:%M}.'))
