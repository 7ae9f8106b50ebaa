import logging
from datetime import date

from django.contrib import messages
from django.db import DatabaseError
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from accounts.permissions import role_required
from articles.models import Article
from courts.models import Field
from notifications.models import ChangeEvent
from siteconfig.integrations import DEFAULT_PAYMENT_INSTRUCTIONS, whatsapp_confirmation_url
from siteconfig.models import SiteSettings

from .availability import AvailabilityUnavailable, slot_board, time_slots
from .forms import BookingForm
from .models import Booking
from .services import BookingError, submit_booking, update_booking_status

logger = logging.getLogger(__name__)


def home(request):
    fields = Field.objects.filter(is_active=True)
    articles = Article.objects.filter(is_published=True).order_by('-created_at')[:3]
    return render(request, 'storefront/home.html', {
        'fields': fields,
        'articles': articles,
    })


def _selected_field_and_date(request, fields):
    params = request.POST if request.method == 'POST' else request.GET

    field = None
    field_id = params.get('field')
    if field_id:
        field = next((f for f in fields if str(f.pk) == field_id), None)
    if field is None and fields:
        field = fields[0]

    try:
        selected_date = date.fromisoformat(params.get('booking_date', ''))
    except ValueError:
        selected_date = timezone.localdate()

    return field, selected_date


def booking(request):
    fields = list(Field.objects.filter(is_active=True))
    field, selected_date = _selected_field_and_date(request, fields)

    if request.method == 'POST':
        form = BookingForm(request.POST)
        if form.is_valid():
            customer = request.user if request.user.is_authenticated else None
            try:
                new_booking = submit_booking(customer=customer, **form.cleaned_data)
            except BookingError as exc:
                messages.error(request, str(exc))
            except DatabaseError:
                logger.exception('Failed to create booking')
                messages.error(request, 'Failed to create booking. Please try again.')
            else:
                messages.success(request, 'Booking created. Please complete the payment.')
                return redirect('payment', booking_id=new_booking.id)
        else:
            messages.error(request, 'Please complete all required booking details.')
    else:
        form = BookingForm(initial={
            'field': field,
            'booking_date': selected_date,
            'duration_hours': 1,
        })

    board = []
    if field is not None:
        try:
            board = slot_board(field, selected_date)
        except AvailabilityUnavailable:
            messages.error(request, 'Booked slots could not be loaded. Please try again.')
            board = [(slot, None) for slot in time_slots()]

    return render(request, 'bookings/booking.html', {
        'form': form,
        'fields': fields,
        'selected_field': field,
        'selected_date': selected_date,
        'slot_board': board,
        'selected_start': form['start_time'].value(),
        'customer_fields': [form[name] for name in ('customer_name', 'customer_phone', 'customer_email', 'notes')],
    })


def payment(request, booking_id):
    try:
        booking_obj = Booking.objects.select_related('field').get(id=booking_id)
    except Booking.DoesNotExist:
        messages.error(request, 'Failed to load booking.')
        return redirect('booking')

    site_settings = SiteSettings.load()

    return render(request, 'bookings/payment.html', {
        'booking': booking_obj,
        'whatsapp_url': whatsapp_confirmation_url(booking_obj, site_settings),
        'payment_instructions': site_settings.payment_instructions or DEFAULT_PAYMENT_INSTRUCTIONS,
    })


@role_required('my_bookings')
def my_bookings(request):
    bookings = Booking.objects.filter(customer=request.user).select_related('field')
    return render(request, 'bookings/my_bookings.html', {'bookings': bookings})


@role_required('manage_bookings')
def manage_bookings(request):
    status_filter = request.GET.get('status', 'all')
    bookings = Booking.objects.select_related('field')
    if status_filter in dict(Booking.STATUS):
        bookings = bookings.filter(status=status_filter)
    else:
        status_filter = 'all'

    return render(request, 'bookings/manage_bookings.html', {
        'bookings': bookings,
        'status_filter': status_filter,
        'status_choices': Booking.STATUS,
        'last_change_id': ChangeEvent.objects.order_by('-id').values_list('id', flat=True).first() or 0,
    })


@require_POST
@role_required('manage_bookings')
def change_booking_status(request, booking_id):
    booking_obj = get_object_or_404(Booking, id=booking_id)

    try:
        update_booking_status(booking_obj, request.POST.get('status', ''), actor=request.user)
    except BookingError as exc:
        messages.error(request, str(exc))
    except DatabaseError:
        logger.exception('Failed to update status of booking %s', booking_id)
        messages.error(request, 'Failed to update booking status.')
    else:
        messages.success(request, 'Booking status updated.')

    next_url = request.POST.get('next')
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        return redirect(next_url)
    return redirect('manage_bookings')
