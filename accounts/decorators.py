"""
==============================================================================
ACCOUNTS APP - ACCESS DECORATORS
==============================================================================
Role checks for views.

    - api_login_required: JSON 401 for anonymous callers
    - admin_required: JSON 401/403 unless role is 'admin'
    - admin_page_required: message + redirect for the HTML console

Author: LusionBeatz Development Team
==============================================================================
"""

from functools import wraps

from django.contrib import messages
from django.shortcuts import redirect

from core.http import json_error


def api_login_required(view_func):
    """Decorator to require an authenticated session on an API view."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return json_error('Not authenticated', status=401)
        return view_func(request, *args, **kwargs)
    return wrapper


def admin_required(view_func):
    """Decorator to require the admin role on an API view."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return json_error('Not authenticated', status=401)
        if request.user.role != 'admin':
            return json_error('Access denied. Admins only.', status=403)
        return view_func(request, *args, **kwargs)
    return wrapper


def admin_page_required(view_func):
    """Decorator to require the admin role on a page; others go home."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect('accounts:login')
        if request.user.role != 'admin':
            messages.error(request, 'Access denied. Admins only.')
            return redirect('core:home')
        return view_func(request, *args, **kwargs)
    return wrapper
