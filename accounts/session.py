from dataclasses import asdict, dataclass

from django.contrib.auth import login, logout

from .permissions import is_authorized

SESSION_KEY = '_padelbook_context'


@dataclass(frozen=True)
class SessionContext:
    """Who is signed in for this browser session, and with which role."""

    user_id: int
    email: str
    full_name: str
    role: str

    @classmethod
    def from_user(cls, user):
        return cls(
            user_id=user.pk,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
        )

    @classmethod
    def from_session(cls, data):
        try:
            return cls(**data)
        except TypeError:
            return None

    def to_session(self):
        return asdict(self)

    def can(self, tag):
        return is_authorized(self.role, tag)


def store_context(request, user):
    context = SessionContext.from_user(user)
    request.session[SESSION_KEY] = context.to_session()
    request.session_context = context
    return context


def start_session(request, user):
    login(request, user)
    return store_context(request, user)


def end_session(request):
    # logout() flushes the whole session, stored context included
    logout(request)
    request.session_context = None


def load_context(request):
    """Re-hydrate the context stored at login for the current request.

    Sessions opened outside :func:`start_session` (Django admin login,
    ``force_login`` in tests) and sessions whose user changed role since
    login get a fresh context.
    """
    user = request.user
    if not user.is_authenticated:
        return None

    data = request.session.get(SESSION_KEY)
    context = SessionContext.from_session(data) if data else None
    if context is None or context.user_id != user.pk or context.role != user.role:
        context = store_context(request, user)
    return context
