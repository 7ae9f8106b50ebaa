import logging
from datetime import date, datetime, timedelta

from django.db import transaction

from siteconfig.integrations import notify_webhook

from .models import Booking

logger = logging.getLogger(__name__)


class BookingError(ValueError):
    """A booking request that cannot be written as given."""


def calculate_end_time(start_time, duration_hours):
    start = datetime.combine(date.min, start_time)
    end = start + timedelta(hours=duration_hours)
    if end.date() != start.date():
        raise BookingError('A booking has to end on the same day it starts.')
    return end.time()


def calculate_total(field, duration_hours):
    return field.price_per_hour * duration_hours


def submit_booking(field, booking_date, start_time, duration_hours, customer_name, customer_phone,
                   customer_email=None, notes=None, customer=None):
    """Insert one pending booking.

    The slot is not re-checked here and nothing stops a second booking for
    the same field, date and start time from being written as well.
    """
    customer_name = (customer_name or '').strip()
    customer_phone = (customer_phone or '').strip()

    required = (
        ('field', field),
        ('date', booking_date),
        ('start time', start_time),
        ('customer name', customer_name),
        ('phone number', customer_phone),
    )
    missing = [label for label, value in required if not value]
    if missing:
        raise BookingError('Please fill in: ' + ', '.join(missing) + '.')

    if duration_hours not in Booking.DURATIONS:
        raise BookingError(f'Duration must be one of {", ".join(map(str, Booking.DURATIONS))} hours.')

    end_time = calculate_end_time(start_time, duration_hours)

    booking = Booking.objects.create(
        field=field,
        customer=customer,
        booking_date=booking_date,
        start_time=start_time,
        end_time=end_time,
        customer_name=customer_name,
        customer_phone=customer_phone,
        customer_email=customer_email or '',
        notes=notes or '',
        status=Booking.STATUS_PENDING,
        total_amount=calculate_total(field, duration_hours),
    )
    logger.info(
        'Booking %s created for field %s on %s %s-%s',
        booking.id, field.pk, booking_date, start_time.strftime('%H:%M'), end_time.strftime('%H:%M'),
    )

    payload = booking.as_payload()
    transaction.on_commit(lambda: notify_webhook('booking.created', payload))
    return booking


def update_booking_status(booking, new_status, actor=None):
    """Set any status on any booking; there are no forbidden transitions."""
    if new_status not in dict(Booking.STATUS):
        raise BookingError(f'Unknown booking status: {new_status}')

    previous = booking.status
    booking.status = new_status
    booking.save(update_fields=['status'])
    logger.info(
        'Booking %s status %s -> %s by %s',
        booking.id, previous, new_status, getattr(actor, 'pk', None),
    )

    payload = booking.as_payload()
    transaction.on_commit(lambda: notify_webhook('booking.status_changed', payload))
    return booking
