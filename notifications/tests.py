from datetime import date, time, timedelta
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.db import DatabaseError, transaction
from django.test import SimpleTestCase, TestCase
from django.urls import reverse
from django.utils import timezone

from accounts.models import User
from bookings.models import Booking
from courts.models import Field

from .feed import ALL_TABLES, Change, ChangeFeed
from .models import ChangeEvent


class ChangeFeedTests(SimpleTestCase):
    def setUp(self):
        self.feed = ChangeFeed()
        self.received = []

    def test_subscriber_gets_changes_for_its_table(self):
        self.feed.subscribe('bookings', self.received.append)

        self.feed.publish(Change('bookings', 'insert', '1'))
        self.feed.publish(Change('fields', 'insert', '2'))

        self.assertEqual(self.received, [Change('bookings', 'insert', '1')])

    def test_wildcard_subscriber_gets_everything(self):
        self.feed.subscribe(ALL_TABLES, self.received.append)

        self.feed.publish(Change('bookings', 'update', '1'))
        self.feed.publish(Change('articles', 'delete', '2'))

        self.assertEqual([change.table for change in self.received], ['bookings', 'articles'])

    def test_unsubscribe_stops_delivery(self):
        subscription = self.feed.subscribe('bookings', self.received.append)
        subscription.unsubscribe()
        subscription.unsubscribe()

        self.assertEqual(self.feed.publish(Change('bookings', 'insert', '1')), 0)
        self.assertEqual(self.received, [])

    def test_failing_listener_does_not_stop_others(self):
        def broken(change):
            raise RuntimeError('boom')

        self.feed.subscribe('bookings', broken)
        self.feed.subscribe('bookings', self.received.append)

        with self.assertLogs('notifications.feed', level='ERROR'):
            delivered = self.feed.publish(Change('bookings', 'insert', '1'))

        self.assertEqual(delivered, 2)
        self.assertEqual(len(self.received), 1)

    def test_database_error_reaches_the_writer(self):
        def failing_write(change):
            raise DatabaseError('disk full')

        self.feed.subscribe('bookings', failing_write)

        with self.assertRaises(DatabaseError):
            self.feed.publish(Change('bookings', 'insert', '1'))


class ChangeRecordingTests(TestCase):
    def setUp(self):
        self.field = Field.objects.create(name='Court 1', price_per_hour=200000)

    def test_writes_are_recorded(self):
        booking = Booking.objects.create(
            field=self.field,
            booking_date=date(2026, 3, 14),
            start_time=time(10, 0),
            end_time=time(11, 0),
            customer_name='Budi',
            customer_phone='081234567890',
            total_amount=200000,
        )
        booking.status = Booking.STATUS_PAID
        booking.save()
        booking_id = str(booking.pk)
        booking.delete()

        events = list(ChangeEvent.objects.filter(table='bookings').values_list('action', 'object_id'))
        self.assertEqual(events, [('insert', booking_id), ('update', booking_id), ('delete', booking_id)])

    def test_field_changes_use_their_own_table(self):
        self.assertTrue(ChangeEvent.objects.filter(table='fields', action='insert', object_id=str(self.field.pk)).exists())

    def test_failed_event_write_rolls_back_the_change(self):
        with mock.patch.object(ChangeEvent.objects, 'create', side_effect=DatabaseError('disk full')):
            with self.assertRaises(DatabaseError):
                with transaction.atomic():
                    Field.objects.create(name='Court 2', price_per_hour=150000)

        self.assertFalse(Field.objects.filter(name='Court 2').exists())


class ChangesEndpointTests(TestCase):
    def setUp(self):
        self.kasir = User.objects.create_user(
            email='kasir@example.com', full_name='Kasir', password='password123', role='kasir',
        )
        self.first = Field.objects.create(name='Court 1', price_per_hour=200000)
        self.second = Field.objects.create(name='Court 2', price_per_hour=150000)

    def test_requires_login(self):
        response = self.client.get(reverse('changes'))

        self.assertEqual(response.status_code, 302)

    def test_customer_cannot_read_the_feed(self):
        customer = User.objects.create_user(email='user@example.com', full_name='User', password='password123')
        self.client.force_login(customer)

        response = self.client.get(reverse('changes'), {'table': 'bookings'})

        self.assertRedirects(response, reverse('unauthorized'), target_status_code=403)

    def test_returns_events_after_since(self):
        self.client.force_login(self.kasir)
        first_event = ChangeEvent.objects.get(table='fields', object_id=str(self.first.pk))

        response = self.client.get(reverse('changes'), {'since': first_event.id, 'table': 'fields'})

        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual([event['object_id'] for event in data['events']], [str(self.second.pk)])
        self.assertEqual(data['last_id'], data['events'][-1]['id'])

    def test_nothing_new_keeps_since(self):
        self.client.force_login(self.kasir)
        last = ChangeEvent.objects.order_by('-id').first().id

        data = self.client.get(reverse('changes'), {'since': last}).json()

        self.assertEqual(data['events'], [])
        self.assertEqual(data['last_id'], last)

    def test_invalid_since(self):
        self.client.force_login(self.kasir)

        response = self.client.get(reverse('changes'), {'since': 'yesterday'})

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()['success'])


class PruneChangesCommandTests(TestCase):
    def test_old_events_are_deleted(self):
        old = ChangeEvent.objects.create(table='bookings', action='insert', object_id='1')
        recent = ChangeEvent.objects.create(table='bookings', action='update', object_id='1')
        ChangeEvent.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=10))

        call_command('prune_changes', days=7, stdout=StringIO())

        self.assertEqual(list(ChangeEvent.objects.values_list('pk', flat=True)), [recent.pk])

    def test_default_window_keeps_recent_events(self):
        ChangeEvent.objects.create(table='fields', action='insert', object_id='1')

        call_command('prune_changes', stdout=StringIO())

        self.assertEqual(ChangeEvent.objects.count(), 1)
