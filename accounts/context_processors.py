from .permissions import nav_items_for


def session_context(request):
    context = getattr(request, 'session_context', None)
    return {
        'session_context': context,
        'nav_items': nav_items_for(context.role) if context else [],
    }
