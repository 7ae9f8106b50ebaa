import csv
import io
import logging

from django.contrib import messages
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_POST

from accounts.forms import RoleForm
from accounts.permissions import role_required
from accounts.roles import ADMIN, KASIR
from bookings.models import Booking

from . import reports

logger = logging.getLogger(__name__)

User = get_user_model()


@role_required('dashboard')
def dashboard_home(request):
    role = request.session_context.role

    if role == ADMIN:
        return redirect('admin_dashboard')
    elif role == KASIR:
        return redirect('kasir_dashboard')

    return redirect('user_dashboard')


@role_required('user_dashboard')
def user_dashboard(request):
    recent_bookings = Booking.objects.filter(customer=request.user).select_related('field')[:5]
    return render(request, 'dashboard/user_home.html', {'recent_bookings': recent_bookings})


@role_required('kasir_dashboard')
def kasir_dashboard(request):
    recent_bookings = Booking.objects.select_related('field').order_by('-created_at')[:5]
    return render(request, 'dashboard/kasir_home.html', {
        'stats': reports.kasir_summary(),
        'recent_bookings': recent_bookings,
    })


@role_required('admin_dashboard')
def admin_dashboard(request):
    return render(request, 'dashboard/admin_home.html', {
        'stats': reports.admin_summary(),
        'daily_revenue': reports.paid_revenue_by_day(days=7),
    })


@role_required('users')
def user_list(request):
    return render(request, 'dashboard/users.html', {
        'users': User.objects.all(),
        'role_choices': User.ROLE_CHOICES,
    })


@require_POST
@role_required('users')
def change_user_role(request, user_id):
    user = get_object_or_404(User, id=user_id)
    form = RoleForm(request.POST)

    if not form.is_valid():
        messages.error(request, 'Invalid role.')
    elif user.pk == request.user.pk and form.cleaned_data['role'] != ADMIN:
        messages.error(request, 'You cannot remove your own admin role.')
    else:
        user.role = form.cleaned_data['role']
        try:
            user.save(update_fields=['role'])
        except DatabaseError:
            logger.exception('Failed to change role of user %s', user_id)
            messages.error(request, 'Failed to change role.')
        else:
            logger.info('User %s role set to %s by %s', user.pk, user.role, request.user.pk)
            messages.success(request, f'{user.full_name} is now {user.get_role_display()}.')

    return redirect('user_list')


def _period_from(request):
    period = request.GET.get('period', reports.DAILY)
    return period if period in dict(reports.PERIOD_CHOICES) else reports.DAILY


@role_required('finance')
def financial_report(request):
    try:
        report = reports.financial_report(_period_from(request))
    except DatabaseError:
        logger.exception('Failed to load financial report')
        messages.error(request, 'Failed to load financial data.')
        report = None

    return render(request, 'dashboard/finance.html', {
        'report': report,
        'period_choices': reports.PERIOD_CHOICES,
    })


@role_required('finance')
def export_financial_report(request):
    report = reports.financial_report(_period_from(request))

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(['Period', 'Total Revenue', 'Bookings'])
    for row in report.rows:
        label = row.period.strftime('%Y-%m-%d' if report.period_type == reports.DAILY else '%Y-%m')
        writer.writerow([label, row.total_revenue, row.total_bookings])

    filename = f'financial-report-{report.period_type}-{timezone.localdate():%Y-%m-%d}.csv'
    resp = HttpResponse(output.getvalue(), content_type='text/csv')
    resp['Content-Disposition'] = f'attachment; filename="{filename}"'
    return resp
