import logging

from django.contrib import messages
from django.contrib.auth import authenticate, update_session_auth_hash
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme

from .forms import PasswordUpdateForm, ProfileForm, UserLoginForm, UserRegistrationForm
from .permissions import role_required
from .session import end_session, start_session, store_context

logger = logging.getLogger(__name__)


def register(request):
    if request.user.is_authenticated:
        return redirect('dashboard')

    if request.method == 'POST':
        form = UserRegistrationForm(request.POST)
        if form.is_valid():
            user = form.save()
            logger.info('Registered user %s', user.pk)
            messages.success(request, 'Registration successful! You can now log in.')
            return redirect('login')
    else:
        form = UserRegistrationForm()

    return render(request, 'accounts/register.html', {'form': form})


def login_view(request):
    if request.user.is_authenticated:
        return redirect('dashboard')

    next_url = request.POST.get('next') or request.GET.get('next') or ''

    if request.method == 'POST':
        form = UserLoginForm(request.POST)
        if form.is_valid():
            user = authenticate(
                request,
                username=form.cleaned_data['email'],
                password=form.cleaned_data['password'],
            )

            if user is not None:
                context = start_session(request, user)
                messages.success(request, f'Welcome back, {context.full_name}!')

                if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                    return redirect(next_url)
                return redirect('dashboard')

            messages.error(request, 'Invalid credentials.')
    else:
        form = UserLoginForm()

    return render(request, 'accounts/login.html', {'form': form, 'next': next_url})


def logout_view(request):
    end_session(request)
    messages.info(request, 'You have been logged out.')
    return redirect('login')


def unauthorized(request):
    return render(request, 'accounts/unauthorized.html', status=403)


@role_required('profile')
def profile(request):
    user = request.user
    profile_form = ProfileForm(instance=user)
    password_form = PasswordUpdateForm(user)

    if request.method == 'POST':
        if request.POST.get('action') == 'password':
            password_form = PasswordUpdateForm(user, request.POST)
            if password_form.is_valid():
                password_form.save()
                update_session_auth_hash(request, user)
                messages.success(request, 'Password changed successfully.')
                return redirect('profile')
            messages.error(request, 'Failed to change password.')
        else:
            profile_form = ProfileForm(request.POST, instance=user)
            if profile_form.is_valid():
                profile_form.save()
                store_context(request, user)
                messages.success(request, 'Profile updated successfully.')
                return redirect('profile')
            messages.error(request, 'Failed to update profile.')

    return render(request, 'accounts/profile.html', {
        'profile_form': profile_form,
        'password_form': password_form,
    })
