"""Read-side summaries for the kasir and admin dashboards."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List

from django.contrib.auth import get_user_model
from django.db.models import Count, F, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from bookings.models import Booking
from courts.models import Field

DAILY = 'daily'
MONTHLY = 'monthly'
PERIOD_CHOICES = ((DAILY, 'Daily'), (MONTHLY, 'Monthly'))


@dataclass
class PeriodTotal:
    period: date
    total_revenue: int
    total_bookings: int


@dataclass
class FinancialReport:
    period_type: str
    start: date
    rows: List[PeriodTotal] = field(default_factory=list)

    @property
    def total_revenue(self):
        return sum(row.total_revenue for row in self.rows)

    @property
    def total_bookings(self):
        return sum(row.total_bookings for row in self.rows)

    @property
    def average_revenue(self):
        return self.total_revenue / len(self.rows) if self.rows else 0


def report_start(period_type, today):
    if period_type == DAILY:
        return today - timedelta(days=30)
    # first day of the same month one year back
    return date(today.year - 1, today.month, 1)


def financial_report(period_type=DAILY, today=None):
    """Paid bookings grouped per day (last 30 days) or per month (last 12 months)."""
    if period_type not in (DAILY, MONTHLY):
        raise ValueError(f'Unknown report period: {period_type}')

    today = today or timezone.localdate()
    start = report_start(period_type, today)
    bucket = F('booking_date') if period_type == DAILY else TruncMonth('booking_date')

    rows = (
        Booking.objects
        .filter(status=Booking.STATUS_PAID, booking_date__gte=start)
        .annotate(period=bucket)
        .values('period')
        .annotate(total_revenue=Sum('total_amount'), total_bookings=Count('id'))
        .order_by('period')
    )
    return FinancialReport(
        period_type=period_type,
        start=start,
        rows=[PeriodTotal(**row) for row in rows],
    )


def paid_revenue_by_day(days=7, today=None):
    today = today or timezone.localdate()
    start = today - timedelta(days=days - 1)

    totals = dict(
        Booking.objects
        .filter(status=Booking.STATUS_PAID, booking_date__gte=start, booking_date__lte=today)
        .values('booking_date')
        .annotate(total=Sum('total_amount'))
        .values_list('booking_date', 'total')
    )
    return [
        (start + timedelta(days=offset), totals.get(start + timedelta(days=offset), 0))
        for offset in range(days)
    ]


def kasir_summary(today=None):
    today = today or timezone.localdate()
    bookings = Booking.objects.all()
    return {
        'total_bookings': bookings.count(),
        'pending_bookings': bookings.filter(status=Booking.STATUS_PENDING).count(),
        'today_bookings': bookings.filter(booking_date=today).count(),
        'total_amount': bookings.filter(status=Booking.STATUS_PAID).aggregate(total=Sum('total_amount'))['total'] or 0,
    }


def admin_summary():
    paid = Booking.objects.filter(status=Booking.STATUS_PAID)
    return {
        'total_users': get_user_model().objects.count(),
        'total_revenue': paid.aggregate(total=Sum('total_amount'))['total'] or 0,
        'total_bookings': Booking.objects.count(),
        'active_fields': Field.objects.filter(is_active=True).count(),
    }
