"""
==============================================================================
ACCOUNTS APP - API URL CONFIGURATION
==============================================================================
Mounted under /api/.

URL Patterns:
    - auth/signup, auth/login, auth/logout
    - auth/verify-otp, auth/resend-otp
    - auth/me
    - users/profile, users/bank-details (PATCH)

Author: LusionBeatz Development Team
==============================================================================
"""

from django.urls import path
from . import views

app_name = 'accounts_api'

urlpatterns = [
    path('auth/signup', views.api_signup, name='signup'),
    path('auth/login', views.api_login, name='login'),
    path('auth/logout', views.api_logout, name='logout'),
    path('auth/verify-otp', views.api_verify_otp, name='verify_otp'),
    path('auth/resend-otp', views.api_resend_otp, name='resend_otp'),
    path('auth/me', views.api_me, name='me'),

    path('users/profile', views.api_profile, name='profile'),
    path('users/bank-details', views.api_bank_details, name='bank_details'),
]
