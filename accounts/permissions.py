"""Role permission table and the view decorator built on it.

Every role maps to the set of resource tags it may open. Views, the
dashboard sidebar and templates all ask :func:`is_authorized` instead of
comparing role strings inline.
"""

from functools import wraps

from django.contrib import messages
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect

from .roles import ADMIN, KASIR, USER

_USER_TAGS = frozenset({'dashboard', 'user_dashboard', 'my_bookings', 'profile'})
_KASIR_TAGS = _USER_TAGS | {'kasir_dashboard', 'manage_bookings', 'articles', 'changes'}
_ADMIN_TAGS = _KASIR_TAGS | {'admin_dashboard', 'fields', 'users', 'finance', 'settings'}

ROLE_PERMISSIONS = {
    USER: _USER_TAGS,
    KASIR: frozenset(_KASIR_TAGS),
    ADMIN: frozenset(_ADMIN_TAGS),
}

# (tag, label, url name) in sidebar order
NAV_ITEMS = (
    ('dashboard', 'Dashboard', 'dashboard'),
    ('my_bookings', 'My Bookings', 'my_bookings'),
    ('manage_bookings', 'Manage Bookings', 'manage_bookings'),
    ('articles', 'Articles', 'article_list'),
    ('fields', 'Fields', 'field_list'),
    ('users', 'Users', 'user_list'),
    ('finance', 'Financial Report', 'financial_report'),
    ('settings', 'Settings', 'site_settings'),
    ('profile', 'Profile', 'profile'),
)


def is_authorized(role, tag):
    return tag in ROLE_PERMISSIONS.get(role, frozenset())


def nav_items_for(role):
    return [
        {'tag': tag, 'label': label, 'url_name': url_name}
        for tag, label, url_name in NAV_ITEMS
        if is_authorized(role, tag)
    ]


def role_required(tag):
    """Gate a view on a resource tag.

    Anonymous visitors go to the login page with ``next`` set; signed-in
    users whose role lacks the tag go to the unauthorized page.
    """

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return redirect_to_login(request.get_full_path())

            context = getattr(request, 'session_context', None)
            if context is None or not context.can(tag):
                messages.error(request, 'Access denied.')
                return redirect('unauthorized')

            return view_func(request, *args, **kwargs)

        return _wrapped

    return decorator
