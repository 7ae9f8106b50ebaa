from django.contrib import admin

from .models import ChangeEvent


@admin.register(ChangeEvent)
class ChangeEventAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'table', 'action', 'object_id')
    list_filter = ('table', 'action')
    readonly_fields = ('created_at',)
