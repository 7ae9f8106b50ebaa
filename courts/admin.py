from django.contrib import admin

from .models import Field


@admin.register(Field)
class FieldAdmin(admin.ModelAdmin):
    list_display = (
        'id',
        'name',
        'price_per_hour',
        'is_active',
        'created_at',
    )
    search_fields = ('name',)
    list_filter = ('is_active',)
