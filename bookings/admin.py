from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        'id',
        'customer_name',
        'customer_phone',
        'field',
        'booking_date',
        'start_time',
        'end_time',
        'total_amount',
        'status',
    )

    search_fields = (
        'customer_name',
        'customer_phone',
        'customer_email',
        'field__name',
    )

    list_filter = ('status', 'field')

    date_hierarchy = 'booking_date'
