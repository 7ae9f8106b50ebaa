from django.db import models


class SiteSettings(models.Model):
    """The single row of site-wide settings."""

    SINGLETON_ID = 1

    site_name = models.CharField(max_length=100, default='Padel Booking')
    site_logo_url = models.URLField(max_length=500, blank=True)
    hero_banner_url = models.URLField(max_length=500, blank=True)
    whatsapp_number = models.CharField(max_length=20, blank=True)
    qris_image_url = models.URLField(max_length=500, blank=True)
    payment_instructions = models.TextField(blank=True)
    webhook_url = models.URLField(max_length=500, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'site settings'
        verbose_name_plural = 'site settings'

    def __str__(self):
        return self.site_name

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_ID
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        settings, _ = cls.objects.get_or_create(pk=cls.SINGLETON_ID)
        return settings
