from .session import load_context


class SessionContextMiddleware:
    """Attach ``request.session_context`` for the views and templates."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.session_context = load_context(request)
        return self.get_response(request)
