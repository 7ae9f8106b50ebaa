from datetime import date, time
from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse

from accounts.models import User
from bookings.models import Booking
from siteconfig.models import SiteSettings

from .models import Field


class FieldManagementTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            email='admin@example.com', full_name='Admin', password='password123', role='admin',
        )
        self.client.force_login(self.admin)
        self.field = Field.objects.create(name='Court 1', price_per_hour=200000)

    def test_create_field(self):
        response = self.client.post(reverse('field_create'), {
            'name': 'Court 2',
            'description': 'Outdoor',
            'price_per_hour': 150000,
            'is_active': 'on',
        })

        self.assertRedirects(response, reverse('field_list'))
        self.assertTrue(Field.objects.filter(name='Court 2', price_per_hour=150000, is_active=True).exists())

    def test_free_court_is_rejected(self):
        response = self.client.post(reverse('field_create'), {
            'name': 'Court 2',
            'price_per_hour': 0,
        })

        self.assertEqual(response.status_code, 200)
        self.assertIn('price_per_hour', response.context['form'].errors)
        self.assertFalse(Field.objects.filter(name='Court 2').exists())

    def test_edit_field(self):
        response = self.client.post(reverse('field_edit', args=[self.field.pk]), {
            'name': 'Court 1',
            'price_per_hour': 250000,
        })

        self.assertRedirects(response, reverse('field_list'))
        self.field.refresh_from_db()
        self.assertEqual(self.field.price_per_hour, 250000)
        self.assertFalse(self.field.is_active)

    def test_delete_unused_field(self):
        response = self.client.post(reverse('field_delete', args=[self.field.pk]))

        self.assertRedirects(response, reverse('field_list'))
        self.assertFalse(Field.objects.exists())

    def test_field_with_bookings_is_kept(self):
        Booking.objects.create(
            field=self.field,
            booking_date=date(2026, 3, 14),
            start_time=time(10, 0),
            end_time=time(11, 0),
            customer_name='Budi',
            customer_phone='081234567890',
            total_amount=200000,
        )

        response = self.client.post(reverse('field_delete', args=[self.field.pk]), follow=True)

        self.assertTrue(Field.objects.filter(pk=self.field.pk).exists())
        self.assertContains(response, 'cannot be deleted')

    def test_kasir_cannot_manage_fields(self):
        kasir = User.objects.create_user(
            email='kasir@example.com', full_name='Kasir', password='password123', role='kasir',
        )
        self.client.force_login(kasir)

        response = self.client.post(reverse('field_delete', args=[self.field.pk]))

        self.assertRedirects(response, reverse('unauthorized'), target_status_code=403)
        self.assertTrue(Field.objects.exists())


class SeedFieldsCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command('seed_fields', whatsapp='6281234567890', stdout=StringIO())
        call_command('seed_fields', stdout=StringIO())

        self.assertEqual(Field.objects.count(), 3)
        self.assertEqual(SiteSettings.load().whatsapp_number, '6281234567890')
