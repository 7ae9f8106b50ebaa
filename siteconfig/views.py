import logging

from django.contrib import messages
from django.db import DatabaseError
from django.shortcuts import redirect, render

from accounts.permissions import role_required

from .forms import SiteSettingsForm
from .models import SiteSettings

logger = logging.getLogger(__name__)


@role_required('settings')
def site_settings(request):
    instance = SiteSettings.load()

    if request.method == 'POST':
        form = SiteSettingsForm(request.POST, instance=instance)
        if form.is_valid():
            try:
                form.save()
            except DatabaseError:
                logger.exception('Failed to save site settings')
                messages.error(request, 'Failed to save settings.')
            else:
                messages.success(request, 'Settings saved.')
                return redirect('site_settings')
    else:
        form = SiteSettingsForm(instance=instance)

    return render(request, 'siteconfig/settings_form.html', {'form': form})
