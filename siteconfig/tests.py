from datetime import date, time
from unittest import mock
from urllib.parse import unquote

import requests
from django.test import TestCase
from django.urls import reverse

from accounts.models import User
from bookings.models import Booking
from courts.models import Field

from .integrations import notify_webhook, whatsapp_confirmation_url
from .models import SiteSettings
from .templatetags.site_extras import rupiah


class SiteSettingsModelTests(TestCase):
    def test_load_creates_single_row(self):
        first = SiteSettings.load()
        second = SiteSettings.load()

        self.assertEqual(first.pk, second.pk)
        self.assertEqual(SiteSettings.objects.count(), 1)
        self.assertEqual(first.site_name, 'Padel Booking')

    def test_saving_a_new_instance_overwrites_the_row(self):
        SiteSettings.load()
        SiteSettings(site_name='Other').save()

        self.assertEqual(SiteSettings.objects.count(), 1)
        self.assertEqual(SiteSettings.load().site_name, 'Other')


class RupiahFilterTests(TestCase):
    def test_formats_thousands_with_dots(self):
        self.assertEqual(rupiah(150000), 'Rp 150.000')
        self.assertEqual(rupiah(1250000), 'Rp 1.250.000')

    def test_empty_amount(self):
        self.assertEqual(rupiah(None), 'Rp 0')


class WhatsAppLinkTests(TestCase):
    def setUp(self):
        field = Field.objects.create(name='Court 1', price_per_hour=200000)
        self.booking = Booking.objects.create(
            field=field,
            booking_date=date(2026, 3, 14),
            start_time=time(14, 0),
            end_time=time(16, 0),
            customer_name='Budi',
            customer_phone='081234567890',
            total_amount=400000,
        )
        self.site = SiteSettings.load()

    def test_no_number_means_no_link(self):
        self.assertIsNone(whatsapp_confirmation_url(self.booking, self.site))

    def test_link_carries_booking_details(self):
        self.site.whatsapp_number = '+62 812-3456-7890'

        url = whatsapp_confirmation_url(self.booking, self.site)

        self.assertTrue(url.startswith('https://wa.me/6281234567890?text='))
        message = unquote(url.split('?text=', 1)[1])
        self.assertIn('Name: Budi', message)
        self.assertIn('Field: Court 1', message)
        self.assertIn('Time: 14:00 - 16:00', message)
        self.assertIn('Total: Rp 400.000', message)


class WebhookTests(TestCase):
    def test_no_url_configured(self):
        with mock.patch('siteconfig.integrations.requests.post') as post:
            self.assertFalse(notify_webhook('booking.created', {'id': '1'}))

        post.assert_not_called()

    def test_posts_event_and_data(self):
        site = SiteSettings.load()
        site.webhook_url = 'https://hooks.example.com/padel'
        site.save()

        with mock.patch('siteconfig.integrations.requests.post') as post:
            self.assertTrue(notify_webhook('booking.created', {'id': '1'}))

        post.assert_called_once_with(
            'https://hooks.example.com/padel',
            json={'event': 'booking.created', 'data': {'id': '1'}},
            timeout=5,
        )

    def test_delivery_failure_is_swallowed(self):
        site = SiteSettings.load()
        site.webhook_url = 'https://hooks.example.com/padel'
        site.save()

        with mock.patch('siteconfig.integrations.requests.post', side_effect=requests.ConnectionError('refused')):
            with self.assertLogs('siteconfig.integrations', level='WARNING'):
                self.assertFalse(notify_webhook('booking.created', {'id': '1'}))


class SiteSettingsViewTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            email='admin@example.com', full_name='Admin', password='password123', role='admin',
        )
        self.kasir = User.objects.create_user(
            email='kasir@example.com', full_name='Kasir', password='password123', role='kasir',
        )

    def test_admin_saves_settings(self):
        self.client.force_login(self.admin)

        response = self.client.post(reverse('site_settings'), {
            'site_name': 'Jakarta Padel',
            'whatsapp_number': '6281234567890',
            'payment_instructions': 'Pay by QRIS.',
        })

        self.assertRedirects(response, reverse('site_settings'))
        site = SiteSettings.load()
        self.assertEqual(site.site_name, 'Jakarta Padel')
        self.assertEqual(site.whatsapp_number, '6281234567890')

    def test_kasir_is_turned_away(self):
        self.client.force_login(self.kasir)

        response = self.client.get(reverse('site_settings'))

        self.assertRedirects(response, reverse('unauthorized'), target_status_code=403)
