"""
==============================================================================
ACCOUNTS APP - VIEWS
==============================================================================
Views for authentication, email verification and the user dashboard.

JSON API (consumed by the browser client):
    - api_signup / api_login / api_logout
    - api_verify_otp / api_resend_otp
    - api_me: Current user, also hands out the CSRF cookie
    - api_profile / api_bank_details: Dashboard edits (PATCH)

Pages:
    - user_login, user_logout, signup, verify_email
    - dashboard: Tabs for profile, bank details, uploads and purchases
    - profile_update, bank_details_update: Dashboard form targets

Author: LusionBeatz Development Team
==============================================================================
"""

import logging

from django.contrib import messages
from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme, urlencode
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from core.forms import SampleUploadForm
from core.http import BadRequest, first_form_error, form_error_response, json_error, parse_json_body
from core.models import Order, Sample
from .decorators import api_login_required
from .forms import (
    BankDetailsForm, LoginForm, ProfileForm, ResendOTPForm, SignupForm,
    VerifyOTPForm, bank_details_from_payload,
)
from .models import CustomUser
from .services import VerificationError, issue_otp, resend_otp, serialize_user, verify_otp

logger = logging.getLogger('lusionbeatz.accounts')

DASHBOARD_TABS = ['profile', 'bank', 'upload', 'my-uploads', 'purchases', 'activity']


def verify_url(email):
    return f"{reverse('accounts:verify')}?{urlencode({'email': email})}"


def authenticate_by_email(request, email, password):
    """Look the user up by email, then authenticate with their username."""
    user = CustomUser.objects.filter(email__iexact=email).first()
    if user is None:
        return None
    return authenticate(request, username=user.username, password=password)


# =============================================================================
# JSON API
# =============================================================================

@require_POST
def api_signup(request):
    """
    Create an unverified account and mail the verification code.

    A duplicate email answers 400 "Email already registered" so the client
    can offer to resend the code instead.
    """
    try:
        payload = parse_json_body(request)
    except BadRequest as exc:
        return json_error(exc.message, exc.status)

    form = SignupForm(payload)
    if not form.is_valid():
        return form_error_response(form)

    user = form.save()
    issue_otp(user)
    logger.info('New signup: user %s', user.pk)
    return JsonResponse({
        'message': 'Account created. Please check your email for the OTP code.',
        'email': user.email,
    }, status=201)


@require_POST
def api_verify_otp(request):
    try:
        payload = parse_json_body(request)
    except BadRequest as exc:
        return json_error(exc.message, exc.status)

    form = VerifyOTPForm(payload)
    if not form.is_valid():
        return form_error_response(form)

    try:
        user = verify_otp(form.cleaned_data['email'], form.cleaned_data['otp'])
    except VerificationError as exc:
        return json_error(str(exc), status=400)

    return JsonResponse({'message': 'Email verified', 'user': serialize_user(user)})


@require_POST
def api_resend_otp(request):
    try:
        payload = parse_json_body(request)
    except BadRequest as exc:
        return json_error(exc.message, exc.status)

    form = ResendOTPForm(payload)
    if not form.is_valid():
        return form_error_response(form)

    try:
        resend_otp(form.cleaned_data['email'])
    except VerificationError as exc:
        return json_error(str(exc), status=400)

    return JsonResponse({'message': 'OTP sent'})


@require_POST
def api_login(request):
    """
    Log in with email and password.

    401 for wrong credentials, 403 while the email is unverified.
    """
    try:
        payload = parse_json_body(request)
    except BadRequest as exc:
        return json_error(exc.message, exc.status)

    form = LoginForm(payload)
    if not form.is_valid():
        return form_error_response(form)

    user = authenticate_by_email(
        request, form.cleaned_data['email'], form.cleaned_data['password']
    )
    if user is None:
        return json_error('Invalid email or password', status=401)
    if not user.is_verified:
        return json_error('Please verify your email before logging in', status=403)

    login(request, user)
    logger.info('User %s logged in', user.pk)
    return JsonResponse({'user': serialize_user(user)})


@require_POST
def api_logout(request):
    logout(request)
    return JsonResponse({'message': 'Logged out'})


@require_GET
@ensure_csrf_cookie
def api_me(request):
    """Current user, or 401 when nobody is logged in."""
    if not request.user.is_authenticated:
        return json_error('Not authenticated', status=401)
    return JsonResponse(serialize_user(request.user))


@require_http_methods(['PATCH'])
@api_login_required
def api_profile(request):
    """Update the display name. The email cannot be changed."""
    try:
        payload = parse_json_body(request)
    except BadRequest as exc:
        return json_error(exc.message, exc.status)

    form = ProfileForm({'name': payload.get('name', request.user.name)}, instance=request.user)
    if not form.is_valid():
        return form_error_response(form)

    user = form.save()
    return JsonResponse(serialize_user(user))


@require_http_methods(['PATCH'])
@api_login_required
def api_bank_details(request):
    """Update payout details; fields left out of the payload keep their value."""
    try:
        payload = parse_json_body(request)
    except BadRequest as exc:
        return json_error(exc.message, exc.status)

    profile = request.user.profile
    form = BankDetailsForm(bank_details_from_payload(payload, profile), instance=profile)
    if not form.is_valid():
        return form_error_response(form)

    form.save()
    logger.info('User %s updated bank details', request.user.pk)
    return JsonResponse(serialize_user(request.user))


# =============================================================================
# PAGES
# =============================================================================

def user_login(request):
    """
    Handle user login.

    GET: Display login form
    POST: Authenticate and redirect to the dashboard (or ``next``)
    """
    if request.user.is_authenticated:
        return redirect('accounts:dashboard')

    if request.method == 'POST':
        form = LoginForm(request.POST)

        if form.is_valid():
            email = form.cleaned_data['email']
            user = authenticate_by_email(request, email, form.cleaned_data['password'])

            if user is None:
                messages.error(request, 'Invalid email or password.')
            elif not user.is_verified:
                messages.warning(request, 'Please verify your email before logging in.')
                return redirect(verify_url(user.email))
            else:
                login(request, user)
                messages.success(request, f'Welcome back, {user.name or user.email}!')
                next_url = request.GET.get('next')
                if next_url and url_has_allowed_host_and_scheme(
                    next_url, allowed_hosts={request.get_host()}
                ):
                    return redirect(next_url)
                return redirect('accounts:dashboard')
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = LoginForm()

    return render(request, 'accounts/login.html', {
        'form': form,
        'title': 'Login',
    })


def user_logout(request):
    """Log out and go back to the home page."""
    logout(request)
    messages.success(request, 'You have been logged out successfully.')
    return redirect('core:home')


def signup(request):
    """
    Handle new user registration.

    New users are unverified until they enter the OTP mailed to them.
    """
    if request.user.is_authenticated:
        return redirect('accounts:dashboard')

    if request.method == 'POST':
        form = SignupForm(request.POST)

        if form.is_valid():
            user = form.save()
            issue_otp(user)
            messages.success(request, 'Account created! Please check your email for the OTP code.')
            return redirect(verify_url(user.email))
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = SignupForm()

    return render(request, 'accounts/signup.html', {
        'form': form,
        'title': 'Sign Up',
    })


def verify_email(request):
    """
    Enter the emailed code.

    Without an ``email`` parameter there is nothing to verify, so the user
    is sent to the login page.
    """
    email = request.POST.get('email') or request.GET.get('email')
    if not email:
        return redirect('accounts:login')

    if request.method == 'POST':
        if request.POST.get('action') == 'resend':
            try:
                resend_otp(email)
                messages.success(request, 'OTP sent! Check your email for a new verification code.')
            except VerificationError as exc:
                messages.error(request, str(exc))
            form = VerifyOTPForm(initial={'email': email})
        else:
            form = VerifyOTPForm(request.POST)
            if form.is_valid():
                try:
                    verify_otp(form.cleaned_data['email'], form.cleaned_data['otp'])
                except VerificationError as exc:
                    messages.error(request, str(exc))
                else:
                    messages.success(request, 'Email verified! You can now log in.')
                    return redirect('accounts:login')
            else:
                messages.error(request, 'Please correct the errors below.')
    else:
        form = VerifyOTPForm(initial={'email': email})

    return render(request, 'accounts/verify.html', {
        'form': form,
        'email': email,
        'title': 'Verify Email',
    })


@login_required
def dashboard(request):
    """
    User dashboard.

    Tabs: profile, bank details, upload, my uploads, purchases, activity.
    The active tab comes from ``?tab=`` (checkout lands on ``purchases``).
    """
    user = request.user
    tab = request.GET.get('tab', 'profile')
    if tab not in DASHBOARD_TABS:
        tab = 'profile'

    purchases = (
        Order.objects.filter(buyer=user)
        .prefetch_related('items')
        .order_by('-created_at')
    )
    uploads = Sample.objects.filter(creator=user).order_by('-created_at')

    context = {
        'title': 'Dashboard',
        'user': user,
        'active_tab': tab,
        'tabs': DASHBOARD_TABS,
        'profile_form': ProfileForm(instance=user),
        'bank_form': BankDetailsForm(instance=user.profile),
        'upload_form': SampleUploadForm() if user.can_upload() else None,
        'uploads': uploads,
        'purchases': purchases,
    }

    return render(request, 'accounts/dashboard.html', context)


@login_required
@require_POST
def profile_update(request):
    form = ProfileForm(request.POST, instance=request.user)
    if form.is_valid():
        form.save()
        messages.success(request, 'Profile updated successfully')
    else:
        messages.error(request, form.errors.get('name', ['Invalid name'])[0])
    return redirect(f"{reverse('accounts:dashboard')}?tab=profile")


@login_required
@require_POST
def bank_details_update(request):
    form = BankDetailsForm(request.POST, instance=request.user.profile)
    if form.is_valid():
        form.save()
        messages.success(request, 'Bank details updated successfully')
    else:
        messages.error(request, first_form_error(form))
    return redirect(f"{reverse('accounts:dashboard')}?tab=bank")

