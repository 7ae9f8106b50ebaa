"""Which hourly start slots of a field are still free on a given date.

A slot is taken when a booking that is not canceled starts at exactly that
time on the same field and date. A multi-hour booking only takes its own
start slot; the hours it runs into stay listed as available.
"""

import logging
from datetime import time

from django.conf import settings
from django.db import DatabaseError

from .models import Booking

logger = logging.getLogger(__name__)


class AvailabilityUnavailable(Exception):
    """Existing bookings could not be read, so availability is unknown."""


def time_slots():
    """Hourly start times from the first to the last slot hour, inclusive."""
    first = getattr(settings, 'PADELBOOK_FIRST_SLOT_HOUR', 7)
    last = getattr(settings, 'PADELBOOK_LAST_SLOT_HOUR', 22)
    return [time(hour, 0) for hour in range(first, last + 1)]


def booked_start_times(field, booking_date):
    """Start times of the non-canceled bookings for ``field`` on ``booking_date``."""
    try:
        return set(
            Booking.objects
            .filter(field=field, booking_date=booking_date)
            .exclude(status=Booking.STATUS_CANCELED)
            .values_list('start_time', flat=True)
        )
    except DatabaseError as exc:
        logger.error('Could not read bookings for field %s on %s: %s', getattr(field, 'pk', field), booking_date, exc)
        raise AvailabilityUnavailable('Existing bookings could not be loaded.') from exc


def available_slots(field, booking_date, candidates=None):
    if candidates is None:
        candidates = time_slots()
    taken = booked_start_times(field, booking_date)
    return [slot for slot in candidates if slot not in taken]


def slot_board(field, booking_date):
    """``(slot, is_available)`` pairs for every slot of the day."""
    taken = booked_start_times(field, booking_date)
    return [(slot, slot not in taken) for slot in time_slots()]
