from django.http import JsonResponse

from accounts.permissions import role_required

from .models import ChangeEvent


@role_required('changes')
def changes(request):
    """Change events newer than ``since``, optionally for one ``table``."""
    try:
        since = int(request.GET.get('since', 0))
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid since'}, status=400)

    events = ChangeEvent.objects.filter(id__gt=since)
    table = request.GET.get('table')
    if table:
        events = events.filter(table=table)
    events = list(events[:100])

    last_id = events[-1].id if events else since
    return JsonResponse({
        'success': True,
        'events': [event.as_dict() for event in events],
        'last_id': last_id,
    })
