from datetime import date, time, timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from accounts.models import User
from accounts.permissions import nav_items_for
from accounts.roles import ADMIN, KASIR, USER
from bookings.models import Booking
from courts.models import Field

from . import reports


class ReportTestMixin:
    def setUp(self):
        self.field = Field.objects.create(name='Court 1', price_per_hour=100000)

    def book(self, booking_date, status=Booking.STATUS_PAID, hours=1, start=time(10, 0)):
        return Booking.objects.create(
            field=self.field,
            booking_date=booking_date,
            start_time=start,
            end_time=time(start.hour + hours, 0),
            customer_name='Budi',
            customer_phone='081234567890',
            status=status,
            total_amount=self.field.price_per_hour * hours,
        )


class FinancialReportTests(ReportTestMixin, TestCase):
    def test_daily_report_counts_paid_bookings_of_last_30_days(self):
        today = date(2026, 3, 31)
        self.book(date(2026, 3, 30), hours=2)
        self.book(date(2026, 3, 30), start=time(14, 0))
        self.book(date(2026, 3, 2))
        self.book(date(2026, 3, 30), status=Booking.STATUS_PENDING)
        self.book(date(2026, 2, 1))

        report = reports.financial_report(reports.DAILY, today=today)

        self.assertEqual(report.start, date(2026, 3, 1))
        self.assertEqual(
            [(row.period, row.total_revenue, row.total_bookings) for row in report.rows],
            [(date(2026, 3, 2), 100000, 1), (date(2026, 3, 30), 300000, 2)],
        )
        self.assertEqual(report.total_revenue, 400000)
        self.assertEqual(report.total_bookings, 3)
        self.assertEqual(report.average_revenue, 200000)

    def test_monthly_report_groups_by_month(self):
        today = date(2026, 3, 15)
        self.book(date(2025, 2, 28))
        self.book(date(2025, 3, 1))
        self.book(date(2026, 1, 5))
        self.book(date(2026, 1, 20), hours=3)

        report = reports.financial_report(reports.MONTHLY, today=today)

        self.assertEqual(report.start, date(2025, 3, 1))
        self.assertEqual([row.total_revenue for row in report.rows], [100000, 400000])
        self.assertEqual([row.total_bookings for row in report.rows], [1, 2])

    def test_empty_report(self):
        report = reports.financial_report(reports.DAILY)

        self.assertEqual(report.rows, [])
        self.assertEqual(report.average_revenue, 0)

    def test_unknown_period(self):
        with self.assertRaises(ValueError):
            reports.financial_report('weekly')


class SummaryTests(ReportTestMixin, TestCase):
    def test_kasir_summary(self):
        today = date(2026, 3, 14)
        self.book(today)
        self.book(today, status=Booking.STATUS_PENDING, start=time(12, 0))
        self.book(today - timedelta(days=1), status=Booking.STATUS_CANCELED)

        summary = reports.kasir_summary(today=today)

        self.assertEqual(summary, {
            'total_bookings': 3,
            'pending_bookings': 1,
            'today_bookings': 2,
            'total_amount': 100000,
        })

    def test_admin_summary(self):
        User.objects.create_user(email='a@example.com', full_name='A', password='password123')
        Field.objects.create(name='Closed', price_per_hour=1, is_active=False)
        self.book(date(2026, 3, 14), hours=2)
        self.book(date(2026, 3, 14), status=Booking.STATUS_PENDING, start=time(13, 0))

        summary = reports.admin_summary()

        self.assertEqual(summary['total_users'], 1)
        self.assertEqual(summary['total_revenue'], 200000)
        self.assertEqual(summary['total_bookings'], 2)
        self.assertEqual(summary['active_fields'], 1)

    def test_revenue_by_day_fills_gaps(self):
        today = date(2026, 3, 14)
        self.book(today - timedelta(days=2))

        days = reports.paid_revenue_by_day(days=7, today=today)

        self.assertEqual(len(days), 7)
        self.assertEqual(days[0][0], today - timedelta(days=6))
        self.assertEqual(days[-1], (today, 0))
        self.assertEqual(dict(days)[today - timedelta(days=2)], 100000)


class DashboardViewTests(ReportTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.user = User.objects.create_user(email='user@example.com', full_name='User', password='password123')
        self.kasir = User.objects.create_user(
            email='kasir@example.com', full_name='Kasir', password='password123', role=KASIR,
        )
        self.admin = User.objects.create_user(
            email='admin@example.com', full_name='Admin', password='password123', role=ADMIN,
        )

    def test_dashboard_redirects_by_role(self):
        for user, target in ((self.user, 'user_dashboard'), (self.kasir, 'kasir_dashboard'), (self.admin, 'admin_dashboard')):
            self.client.force_login(user)

            response = self.client.get(reverse('dashboard'))

            self.assertRedirects(response, reverse(target))

    def test_kasir_cannot_open_admin_dashboard(self):
        self.client.force_login(self.kasir)

        response = self.client.get(reverse('admin_dashboard'))

        self.assertRedirects(response, reverse('unauthorized'), target_status_code=403)

    def test_sidebar_matches_role(self):
        self.client.force_login(self.kasir)

        response = self.client.get(reverse('kasir_dashboard'))

        url_names = [item['url_name'] for item in response.context['nav_items']]
        self.assertIn('manage_bookings', url_names)
        self.assertNotIn('user_list', url_names)

    def test_admin_changes_role(self):
        self.client.force_login(self.admin)

        response = self.client.post(reverse('change_user_role', args=[self.user.pk]), {'role': KASIR})

        self.assertRedirects(response, reverse('user_list'))
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, KASIR)

    def test_admin_cannot_demote_self(self):
        self.client.force_login(self.admin)

        self.client.post(reverse('change_user_role', args=[self.admin.pk]), {'role': USER})

        self.admin.refresh_from_db()
        self.assertEqual(self.admin.role, ADMIN)

    def test_invalid_role_is_rejected(self):
        self.client.force_login(self.admin)

        self.client.post(reverse('change_user_role', args=[self.user.pk]), {'role': 'owner'})

        self.user.refresh_from_db()
        self.assertEqual(self.user.role, USER)

    def test_financial_report_page(self):
        self.book(timezone.localdate())
        self.client.force_login(self.admin)

        response = self.client.get(reverse('financial_report'), {'period': 'monthly'})

        self.assertEqual(response.context['report'].period_type, reports.MONTHLY)
        self.assertEqual(response.context['report'].total_revenue, 100000)

    def test_csv_export(self):
        today = timezone.localdate()
        self.book(today, hours=2)
        self.client.force_login(self.admin)

        response = self.client.get(reverse('export_financial_report'), {'period': 'daily'})

        self.assertEqual(response['Content-Type'], 'text/csv')
        self.assertIn('attachment;', response['Content-Disposition'])
        lines = response.content.decode().splitlines()
        self.assertEqual(lines[0], 'Period,Total Revenue,Bookings')
        self.assertEqual(lines[1], f'{today:%Y-%m-%d},200000,1')


class SiteWalkthroughTests(ReportTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.book(timezone.localdate())
        self.accounts = {
            role: User.objects.create_user(
                email=f'{role}@example.com', full_name=role.title(), password='password123', role=role,
            )
            for role in (USER, KASIR, ADMIN)
        }

    def test_anonymous_visitor(self):
        self.assertEqual(self.client.get('/').status_code, 200)
        self.assertEqual(self.client.get('/booking/').status_code, 200)

        response = self.client.get('/dashboard/')

        self.assertRedirects(response, f"{reverse('login')}?next=/dashboard/")

    def test_every_role_reaches_its_pages(self):
        for role, account in self.accounts.items():
            with self.subTest(role=role):
                self.client.force_login(account)

                self.assertEqual(self.client.get('/').status_code, 200)
                self.assertEqual(self.client.get('/booking/').status_code, 200)

                response = self.client.get('/dashboard/', follow=True)
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.redirect_chain[-1][0], reverse(f'{role}_dashboard'))
                for item in nav_items_for(role):
                    self.assertContains(response, item['label'])

                for item in nav_items_for(role):
                    page = self.client.get(reverse(item['url_name']), follow=True)
                    self.assertEqual(page.status_code, 200, item['url_name'])
                    self.assertNotIn(reverse('unauthorized'), [url for url, _ in page.redirect_chain])

                self.client.logout()
