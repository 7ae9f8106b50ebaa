from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='SiteSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('site_name', models.CharField(default='Padel Booking', max_length=100)),
                ('site_logo_url', models.URLField(blank=True, max_length=500)),
                ('hero_banner_url', models.URLField(blank=True, max_length=500)),
                ('whatsapp_number', models.CharField(blank=True, max_length=20)),
                ('qris_image_url', models.URLField(blank=True, max_length=500)),
                ('payment_instructions', models.TextField(blank=True)),
                ('webhook_url', models.URLField(blank=True, max_length=500)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'site settings',
                'verbose_name_plural': 'site settings',
            },
        ),
    ]
