from django.contrib import admin

from .models import SiteSettings


@admin.register(SiteSettings)
class SiteSettingsAdmin(admin.ModelAdmin):
    list_display = ('site_name', 'whatsapp_number', 'webhook_url', 'updated_at')

    def has_add_permission(self, request):
        return not SiteSettings.objects.exists()
