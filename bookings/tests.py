from datetime import date, time, timedelta
from unittest import mock

from django.contrib.messages import get_messages
from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from accounts.models import User
from courts.models import Field
from siteconfig.models import SiteSettings

from .availability import AvailabilityUnavailable, available_slots, slot_board, time_slots
from .forms import BookingForm
from .models import Booking
from .services import BookingError, calculate_end_time, submit_booking, update_booking_status


def make_booking(field, booking_date, start_time, status=Booking.STATUS_PENDING, hours=1, **extra):
    values = {
        'field': field,
        'booking_date': booking_date,
        'start_time': start_time,
        'end_time': calculate_end_time(start_time, hours),
        'customer_name': 'Budi',
        'customer_phone': '081234567890',
        'status': status,
        'total_amount': field.price_per_hour * hours,
    }
    values.update(extra)
    return Booking.objects.create(**values)


class AvailabilityTests(TestCase):
    def setUp(self):
        self.field = Field.objects.create(name='Court 1', price_per_hour=200000)
        self.day = date(2026, 3, 14)

    def test_time_slots_are_hourly_from_seven_to_twenty_two(self):
        slots = time_slots()

        self.assertEqual(len(slots), 16)
        self.assertEqual(slots[0], time(7, 0))
        self.assertEqual(slots[-1], time(22, 0))

    def test_booked_start_time_is_the_only_slot_excluded(self):
        make_booking(self.field, self.day, time(10, 0))

        slots = available_slots(self.field, self.day)

        self.assertNotIn(time(10, 0), slots)
        self.assertEqual(slots, [slot for slot in time_slots() if slot != time(10, 0)])

    def test_canceled_booking_does_not_take_its_slot(self):
        make_booking(self.field, self.day, time(10, 0), status=Booking.STATUS_CANCELED)

        self.assertEqual(available_slots(self.field, self.day), time_slots())

    def test_paid_booking_takes_its_slot(self):
        make_booking(self.field, self.day, time(18, 0), status=Booking.STATUS_PAID)

        self.assertNotIn(time(18, 0), available_slots(self.field, self.day))

    def test_multi_hour_booking_only_takes_its_start_slot(self):
        make_booking(self.field, self.day, time(10, 0), hours=3)

        slots = available_slots(self.field, self.day)

        self.assertNotIn(time(10, 0), slots)
        self.assertIn(time(11, 0), slots)
        self.assertIn(time(12, 0), slots)

    def test_bookings_on_other_fields_and_dates_are_ignored(self):
        other_field = Field.objects.create(name='Court 2', price_per_hour=150000)
        make_booking(other_field, self.day, time(10, 0))
        make_booking(self.field, self.day + timedelta(days=1), time(10, 0))

        self.assertEqual(available_slots(self.field, self.day), time_slots())

    def test_candidates_keep_their_order(self):
        make_booking(self.field, self.day, time(9, 0))
        candidates = [time(12, 0), time(9, 0), time(8, 0)]

        self.assertEqual(available_slots(self.field, self.day, candidates), [time(12, 0), time(8, 0)])

    def test_slot_board_marks_each_slot(self):
        make_booking(self.field, self.day, time(7, 0))

        board = dict(slot_board(self.field, self.day))

        self.assertFalse(board[time(7, 0)])
        self.assertTrue(board[time(8, 0)])

    def test_read_failure_is_reported_instead_of_returning_free_slots(self):
        with mock.patch.object(Booking.objects, 'filter', side_effect=DatabaseError('connection lost')):
            with self.assertRaises(AvailabilityUnavailable):
                available_slots(self.field, self.day)


class BookingSubmissionTests(TestCase):
    def setUp(self):
        self.field = Field.objects.create(name='Court 1', price_per_hour=200000)
        self.day = date(2026, 3, 14)

    def submit(self, **overrides):
        values = {
            'field': self.field,
            'booking_date': self.day,
            'start_time': time(14, 0),
            'duration_hours': 2,
            'customer_name': 'Budi',
            'customer_phone': '081234567890',
        }
        values.update(overrides)
        return submit_booking(**values)

    def test_end_time_and_total_follow_duration(self):
        booking = self.submit()

        self.assertEqual(booking.end_time, time(16, 0))
        self.assertEqual(booking.total_amount, 400000)
        self.assertEqual(booking.status, Booking.STATUS_PENDING)
        self.assertEqual(booking.duration_hours, 2)

    def test_same_slot_can_be_submitted_twice(self):
        # No uniqueness constraint yet; both writes go through.
        first = self.submit()
        second = self.submit(customer_name='Sari')

        self.assertNotEqual(first.pk, second.pk)
        self.assertEqual(
            Booking.objects.filter(field=self.field, booking_date=self.day, start_time=time(14, 0)).count(),
            2,
        )

    def test_missing_name_blocks_submission(self):
        with self.assertRaises(BookingError):
            self.submit(customer_name='   ')

        self.assertFalse(Booking.objects.exists())

    def test_missing_phone_blocks_submission(self):
        with self.assertRaises(BookingError):
            self.submit(customer_phone='')

        self.assertFalse(Booking.objects.exists())

    def test_duration_outside_allowed_values_is_rejected(self):
        with self.assertRaises(BookingError):
            self.submit(duration_hours=5)

        self.assertFalse(Booking.objects.exists())

    def test_booking_cannot_run_past_midnight(self):
        with self.assertRaises(BookingError):
            self.submit(start_time=time(22, 0), duration_hours=3)

    def test_optional_fields_are_stored_blank(self):
        booking = self.submit(customer_email=None, notes=None)

        self.assertEqual(booking.customer_email, '')
        self.assertEqual(booking.notes, '')

    def test_created_booking_is_sent_to_webhook(self):
        site = SiteSettings.load()
        site.webhook_url = 'https://hooks.example.com/padel'
        site.save()

        with mock.patch('siteconfig.integrations.requests.post') as post:
            with self.captureOnCommitCallbacks(execute=True):
                booking = self.submit()

        post.assert_called_once()
        body = post.call_args.kwargs['json']
        self.assertEqual(body['event'], 'booking.created')
        self.assertEqual(body['data']['id'], str(booking.id))
        self.assertEqual(body['data']['end_time'], '16:00')


class BookingStatusTests(TestCase):
    def setUp(self):
        self.field = Field.objects.create(name='Court 1', price_per_hour=200000)
        self.booking = make_booking(self.field, date(2026, 3, 14), time(10, 0))

    def test_every_status_can_follow_every_other(self):
        statuses = [value for value, _ in Booking.STATUS]

        for current in statuses:
            for target in statuses:
                self.booking.status = current
                self.booking.save()

                update_booking_status(self.booking, target)

                self.booking.refresh_from_db()
                self.assertEqual(self.booking.status, target)

    def test_unknown_status_is_rejected(self):
        with self.assertRaises(BookingError):
            update_booking_status(self.booking, 'refunded')

        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.STATUS_PENDING)


class BookingFormTests(TestCase):
    def setUp(self):
        self.field = Field.objects.create(name='Court 1', price_per_hour=200000)
        self.tomorrow = timezone.localdate() + timedelta(days=1)

    def data(self, **overrides):
        values = {
            'field': self.field.pk,
            'booking_date': self.tomorrow.isoformat(),
            'start_time': '14:00',
            'duration_hours': '2',
            'customer_name': 'Budi',
            'customer_phone': '081234567890',
        }
        values.update(overrides)
        return values

    def test_valid_form_coerces_time_and_duration(self):
        form = BookingForm(self.data())

        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['start_time'], time(14, 0))
        self.assertEqual(form.cleaned_data['duration_hours'], 2)

    def test_past_date_is_rejected(self):
        yesterday = timezone.localdate() - timedelta(days=1)
        form = BookingForm(self.data(booking_date=yesterday.isoformat()))

        self.assertFalse(form.is_valid())
        self.assertIn('booking_date', form.errors)

    def test_booking_past_closing_hour_is_rejected(self):
        form = BookingForm(self.data(start_time='21:00', duration_hours='3'))

        self.assertFalse(form.is_valid())

    def test_start_time_outside_schedule_is_rejected(self):
        form = BookingForm(self.data(start_time='06:00'))

        self.assertFalse(form.is_valid())
        self.assertIn('start_time', form.errors)

    def test_inactive_field_is_not_offered(self):
        closed = Field.objects.create(name='Closed Court', price_per_hour=100000, is_active=False)
        form = BookingForm(self.data(field=closed.pk))

        self.assertFalse(form.is_valid())
        self.assertIn('field', form.errors)


class BookingViewTests(TestCase):
    def setUp(self):
        self.field = Field.objects.create(name='Court 1', price_per_hour=200000)
        self.tomorrow = timezone.localdate() + timedelta(days=1)

    def post_data(self, **overrides):
        values = {
            'field': self.field.pk,
            'booking_date': self.tomorrow.isoformat(),
            'start_time': '10:00',
            'duration_hours': '1',
            'customer_name': 'Budi',
            'customer_phone': '081234567890',
        }
        values.update(overrides)
        return values

    def test_home_lists_active_fields(self):
        Field.objects.create(name='Hidden Court', price_per_hour=100000, is_active=False)

        response = self.client.get(reverse('home'))

        self.assertContains(response, 'Court 1')
        self.assertNotContains(response, 'Hidden Court')

    def test_booking_page_marks_taken_slot(self):
        make_booking(self.field, self.tomorrow, time(10, 0))

        response = self.client.get(reverse('booking'), {
            'field': self.field.pk,
            'booking_date': self.tomorrow.isoformat(),
        })

        board = dict(response.context['slot_board'])
        self.assertIs(board[time(10, 0)], False)
        self.assertIs(board[time(11, 0)], True)

    def test_booking_page_asks_for_retry_when_bookings_cannot_be_read(self):
        with mock.patch('bookings.views.slot_board', side_effect=AvailabilityUnavailable('down')):
            response = self.client.get(reverse('booking'))

        self.assertContains(response, 'Booked slots could not be loaded. Please try again.')
        self.assertTrue(all(available is None for _, available in response.context['slot_board']))

    def test_submitting_redirects_to_payment(self):
        response = self.client.post(reverse('booking'), self.post_data())

        booking = Booking.objects.get()
        self.assertRedirects(response, reverse('payment', args=[booking.id]))
        self.assertIsNone(booking.customer)

    def test_signed_in_customer_is_linked_to_booking(self):
        user = User.objects.create_user(email='budi@example.com', full_name='Budi', password='password123')
        self.client.force_login(user)

        self.client.post(reverse('booking'), self.post_data())

        self.assertEqual(Booking.objects.get().customer, user)

    def test_incomplete_form_is_not_submitted(self):
        response = self.client.post(reverse('booking'), self.post_data(customer_phone=''))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Please complete all required booking details.')
        self.assertFalse(Booking.objects.exists())

    def test_database_failure_on_submit_is_reported(self):
        with mock.patch('bookings.views.submit_booking', side_effect=DatabaseError('write failed')):
            response = self.client.post(reverse('booking'), self.post_data())

        self.assertContains(response, 'Failed to create booking. Please try again.')

    def test_payment_page_shows_whatsapp_link(self):
        site = SiteSettings.load()
        site.whatsapp_number = '+62 812-3456-7890'
        site.save()
        booking = make_booking(self.field, self.tomorrow, time(10, 0))

        response = self.client.get(reverse('payment', args=[booking.id]))

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.context['whatsapp_url'].startswith('https://wa.me/6281234567890?text='))

    def test_payment_page_without_whatsapp_number(self):
        booking = make_booking(self.field, self.tomorrow, time(10, 0))

        response = self.client.get(reverse('payment', args=[booking.id]))

        self.assertIsNone(response.context['whatsapp_url'])
        self.assertContains(response, 'The admin WhatsApp number is not available yet.')

    def test_unknown_booking_redirects_to_booking_page(self):
        response = self.client.get(reverse('payment', args=['6f1c2f9e-0000-4000-8000-000000000000']))

        self.assertRedirects(response, reverse('booking'))
        messages = [str(message) for message in get_messages(response.wsgi_request)]
        self.assertIn('Failed to load booking.', messages)


class BookingManagementViewTests(TestCase):
    def setUp(self):
        self.field = Field.objects.create(name='Court 1', price_per_hour=200000)
        self.booking = make_booking(self.field, date(2026, 3, 14), time(10, 0))
        self.customer = User.objects.create_user(email='user@example.com', full_name='User', password='password123')
        self.kasir = User.objects.create_user(
            email='kasir@example.com', full_name='Kasir', password='password123', role='kasir',
        )

    def test_anonymous_visitor_is_sent_to_login(self):
        response = self.client.get(reverse('manage_bookings'))

        self.assertRedirects(
            response,
            f"{reverse('login')}?next={reverse('manage_bookings')}",
            fetch_redirect_response=False,
        )

    def test_customer_cannot_manage_bookings(self):
        self.client.force_login(self.customer)

        response = self.client.get(reverse('manage_bookings'))

        self.assertRedirects(response, reverse('unauthorized'), target_status_code=403)

    def test_kasir_sees_filtered_list(self):
        make_booking(self.field, date(2026, 3, 15), time(11, 0), status=Booking.STATUS_PAID)
        self.client.force_login(self.kasir)

        response = self.client.get(reverse('manage_bookings'), {'status': 'paid'})

        self.assertEqual(response.context['status_filter'], 'paid')
        self.assertEqual([b.status for b in response.context['bookings']], ['paid'])

    def test_unknown_filter_shows_everything(self):
        self.client.force_login(self.kasir)

        response = self.client.get(reverse('manage_bookings'), {'status': 'bogus'})

        self.assertEqual(response.context['status_filter'], 'all')
        self.assertEqual(len(response.context['bookings']), 1)

    def test_kasir_changes_status(self):
        self.client.force_login(self.kasir)

        response = self.client.post(
            reverse('change_booking_status', args=[self.booking.id]),
            {'status': Booking.STATUS_CANCELED},
        )

        self.assertRedirects(response, reverse('manage_bookings'))
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.STATUS_CANCELED)

    def test_status_change_requires_post(self):
        self.client.force_login(self.kasir)

        response = self.client.get(reverse('change_booking_status', args=[self.booking.id]))

        self.assertEqual(response.status_code, 405)

    def test_my_bookings_only_lists_own_bookings(self):
        own = make_booking(self.field, date(2026, 3, 16), time(9, 0), customer=self.customer)
        self.client.force_login(self.customer)

        response = self.client.get(reverse('my_bookings'))

        self.assertEqual(list(response.context['bookings']), [own])
