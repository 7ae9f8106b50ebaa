import logging

from django.contrib import messages
from django.db import DatabaseError
from django.db.models import ProtectedError
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.permissions import role_required

from .forms import FieldForm
from .models import Field

logger = logging.getLogger(__name__)


@role_required('fields')
def field_list(request):
    fields = Field.objects.all()
    return render(request, 'courts/field_list.html', {'fields': fields})


@role_required('fields')
def field_create(request):
    if request.method == 'POST':
        form = FieldForm(request.POST)
        if form.is_valid():
            try:
                field = form.save()
            except DatabaseError:
                logger.exception('Failed to create field')
                messages.error(request, 'Failed to add field.')
            else:
                messages.success(request, f'Field "{field.name}" added successfully.')
                return redirect('field_list')
    else:
        form = FieldForm()

    return render(request, 'courts/field_form.html', {'form': form, 'field': None})


@role_required('fields')
def field_edit(request, field_id):
    field = get_object_or_404(Field, id=field_id)

    if request.method == 'POST':
        form = FieldForm(request.POST, instance=field)
        if form.is_valid():
            try:
                form.save()
            except DatabaseError:
                logger.exception('Failed to update field %s', field_id)
                messages.error(request, 'Failed to update field.')
            else:
                messages.success(request, f'Field "{field.name}" updated successfully.')
                return redirect('field_list')
    else:
        form = FieldForm(instance=field)

    return render(request, 'courts/field_form.html', {'form': form, 'field': field})


@require_POST
@role_required('fields')
def field_delete(request, field_id):
    field = get_object_or_404(Field, id=field_id)
    name = field.name

    try:
        field.delete()
    except ProtectedError:
        messages.error(request, f'Field "{name}" has bookings and cannot be deleted. Deactivate it instead.')
    except DatabaseError:
        logger.exception('Failed to delete field %s', field_id)
        messages.error(request, 'Failed to delete field.')
    else:
        messages.success(request, f'Field "{name}" deleted.')

    return redirect('field_list')
