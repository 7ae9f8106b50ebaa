import uuid
from datetime import date, datetime

from django.conf import settings
from django.db import models


class Booking(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_PAID = 'paid'
    STATUS_CANCELED = 'canceled'
    STATUS = (
        (STATUS_PENDING, 'Pending'),
        (STATUS_PAID, 'Paid'),
        (STATUS_CANCELED, 'Canceled'),
    )
    DURATIONS = (1, 2, 3, 4)
    DURATION_CHOICES = [(hours, f'{hours} hour' if hours == 1 else f'{hours} hours') for hours in DURATIONS]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # PROTECT: deleting a field never takes its bookings with it
    field = models.ForeignKey('courts.Field', on_delete=models.PROTECT, related_name='bookings')
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='bookings',
    )

    booking_date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()

    customer_name = models.CharField(max_length=100)
    customer_phone = models.CharField(max_length=20)
    customer_email = models.EmailField(blank=True)
    notes = models.TextField(blank=True)

    status = models.CharField(max_length=10, choices=STATUS, default=STATUS_PENDING)
    total_amount = models.PositiveIntegerField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-booking_date', '-start_time']
        indexes = [
            models.Index(fields=['field', 'booking_date'], name='booking_field_date_idx'),
        ]

    def __str__(self):
        return f"Booking {self.id} - {self.customer_name}"

    @property
    def duration_hours(self):
        start = datetime.combine(date.min, self.start_time)
        end = datetime.combine(date.min, self.end_time)
        return int((end - start).total_seconds() // 3600)

    def as_payload(self):
        return {
            'id': str(self.id),
            'field': self.field.name,
            'booking_date': self.booking_date.isoformat(),
            'start_time': self.start_time.strftime('%H:%M'),
            'end_time': self.end_time.strftime('%H:%M'),
            'customer_name': self.customer_name,
            'customer_phone': self.customer_phone,
            'customer_email': self.customer_email,
            'status': self.status,
            'total_amount': self.total_amount,
            'notes': self.notes,
        }
