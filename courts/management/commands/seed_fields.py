from django.core.management.base import BaseCommand

from courts.models import Field
from siteconfig.models import SiteSettings

SAMPLE_FIELDS = (
    ('Court 1 - Indoor', 'Panoramic glass indoor court', 200000),
    ('Court 2 - Indoor', 'Indoor court with LED lighting', 200000),
    ('Court 3 - Outdoor', 'Outdoor court, open air', 150000),
)


class Command(BaseCommand):
    help = 'Create sample fields and the site settings row for local use'

    def add_arguments(self, parser):
        parser.add_argument('--whatsapp', default='', help='Admin WhatsApp number to store in the settings')

    def handle(self, *args, **options):
        settings = SiteSettings.load()
        if options['whatsapp']:
            settings.whatsapp_number = options['whatsapp']
            settings.save()

        created = 0
        for name, description, price in SAMPLE_FIELDS:
            _, was_created = Field.objects.get_or_create(
                name=name,
                defaults={'description': description, 'price_per_hour': price},
            )
            if was_created:
                created += 1
                self.stdout.write(f'Created field {name}')

        self.stdout.write(self.style.SUCCESS(f'Done. {created} fields created.'))
