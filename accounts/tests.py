from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse

from .models import User
from .permissions import is_authorized, nav_items_for
from .roles import ADMIN, KASIR, USER
from .session import SESSION_KEY, SessionContext


class PermissionTableTests(TestCase):
    def test_user_tags(self):
        self.assertTrue(is_authorized(USER, 'my_bookings'))
        self.assertFalse(is_authorized(USER, 'manage_bookings'))
        self.assertFalse(is_authorized(USER, 'finance'))
        self.assertFalse(is_authorized(USER, 'changes'))
        self.assertTrue(is_authorized(KASIR, 'changes'))

    def test_kasir_extends_user(self):
        self.assertTrue(is_authorized(KASIR, 'my_bookings'))
        self.assertTrue(is_authorized(KASIR, 'manage_bookings'))
        self.assertTrue(is_authorized(KASIR, 'articles'))
        self.assertFalse(is_authorized(KASIR, 'fields'))

    def test_admin_has_every_tag(self):
        for tag in ('manage_bookings', 'articles', 'fields', 'users', 'finance', 'settings'):
            self.assertTrue(is_authorized(ADMIN, tag), tag)

    def test_unknown_role_has_nothing(self):
        self.assertFalse(is_authorized('guest', 'dashboard'))
        self.assertEqual(nav_items_for('guest'), [])

    def test_nav_items_follow_the_table(self):
        user_nav = [item['url_name'] for item in nav_items_for(USER)]
        admin_nav = [item['url_name'] for item in nav_items_for(ADMIN)]

        self.assertEqual(user_nav, ['dashboard', 'my_bookings', 'profile'])
        self.assertIn('financial_report', admin_nav)
        self.assertIn('site_settings', admin_nav)


class RegistrationTests(TestCase):
    def test_register_always_creates_plain_user(self):
        response = self.client.post(reverse('register'), {
            'full_name': 'Sari',
            'email': 'sari@example.com',
            'phone_number': '081234567890',
            'password': 'str0ng-pass!',
            'password_confirm': 'str0ng-pass!',
            'role': ADMIN,
        })

        self.assertRedirects(response, reverse('login'))
        user = User.objects.get(email='sari@example.com')
        self.assertEqual(user.role, USER)
        self.assertTrue(user.check_password('str0ng-pass!'))

    def test_mismatched_passwords_are_rejected(self):
        response = self.client.post(reverse('register'), {
            'full_name': 'Sari',
            'email': 'sari@example.com',
            'password': 'str0ng-pass!',
            'password_confirm': 'other-pass!',
        })

        self.assertEqual(response.status_code, 200)
        self.assertFalse(User.objects.exists())


class SessionContextTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            email='kasir@example.com',
            full_name='Kasir Satu',
            password='password123',
            role=KASIR,
        )

    def login(self, **extra):
        data = {'email': 'kasir@example.com', 'password': 'password123'}
        data.update(extra)
        return self.client.post(reverse('login'), data)

    def test_login_stores_context_in_session(self):
        response = self.login()

        self.assertRedirects(response, reverse('dashboard'), fetch_redirect_response=False)
        context = SessionContext.from_session(self.client.session[SESSION_KEY])
        self.assertEqual(context, SessionContext(self.user.pk, 'kasir@example.com', 'Kasir Satu', KASIR))

    def test_login_follows_safe_next(self):
        response = self.login(next=reverse('manage_bookings'))

        self.assertRedirects(response, reverse('manage_bookings'), fetch_redirect_response=False)

    def test_login_ignores_external_next(self):
        response = self.login(next='https://evil.example.com/')

        self.assertRedirects(response, reverse('dashboard'), fetch_redirect_response=False)

    def test_wrong_password(self):
        response = self.login(password='nope')

        self.assertContains(response, 'Invalid credentials.')
        self.assertNotIn(SESSION_KEY, self.client.session)

    def test_logout_drops_context(self):
        self.login()

        response = self.client.get(reverse('logout'))

        self.assertRedirects(response, reverse('login'))
        self.assertNotIn(SESSION_KEY, self.client.session)

    def test_role_change_is_picked_up_on_next_request(self):
        self.login()
        self.user.role = USER
        self.user.save()

        response = self.client.get(reverse('manage_bookings'))

        self.assertRedirects(response, reverse('unauthorized'), target_status_code=403)
        self.assertEqual(self.client.session[SESSION_KEY]['role'], USER)

    def test_from_session_rejects_malformed_data(self):
        self.assertIsNone(SessionContext.from_session({'user_id': 1}))


class ProfileTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email='budi@example.com', full_name='Budi', password='password123')
        self.client.force_login(self.user)

    def test_update_profile_refreshes_context(self):
        response = self.client.post(reverse('profile'), {
            'action': 'profile',
            'full_name': 'Budi Santoso',
            'phone_number': '0811111111',
        })

        self.assertRedirects(response, reverse('profile'))
        self.user.refresh_from_db()
        self.assertEqual(self.user.full_name, 'Budi Santoso')
        self.assertEqual(self.client.session[SESSION_KEY]['full_name'], 'Budi Santoso')

    def test_change_password(self):
        response = self.client.post(reverse('profile'), {
            'action': 'password',
            'new_password1': 'an0ther-Secret',
            'new_password2': 'an0ther-Secret',
        })

        self.assertRedirects(response, reverse('profile'))
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('an0ther-Secret'))

    def test_password_confirmation_must_match(self):
        response = self.client.post(reverse('profile'), {
            'action': 'password',
            'new_password1': 'an0ther-Secret',
            'new_password2': 'different-Secret',
        })

        self.assertContains(response, 'Failed to change password.')
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('password123'))


class CreateAdminCommandTests(TestCase):
    def test_creates_admin_once(self):
        call_command('create_admin', email='boss@example.com', password='secret-pass', stdout=StringIO())
        call_command('create_admin', email='other@example.com', password='secret-pass', stdout=StringIO())

        admins = User.objects.filter(role=ADMIN)
        self.assertEqual(admins.count(), 1)
        self.assertTrue(admins.get().is_superuser)
