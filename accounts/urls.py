"""
==============================================================================
ACCOUNTS APP - PAGE URL CONFIGURATION
==============================================================================
URL Patterns:
    - /auth/login/      : User login
    - /auth/logout/     : User logout
    - /auth/signup/     : New user registration
    - /auth/verify/     : Email OTP verification
    - /dashboard/       : User dashboard (?tab=...)

Author: LusionBeatz Development Team
==============================================================================
"""

from django.urls import path
from . import views

# App namespace for URL reversing (e.g., 'accounts:login')
app_name = 'accounts'

urlpatterns = [
    # Authentication
    path('auth/login/', views.user_login, name='login'),
    path('auth/logout/', views.user_logout, name='logout'),
    path('auth/signup/', views.signup, name='signup'),
    path('auth/verify/', views.verify_email, name='verify'),

    # Dashboard
    path('dashboard/', views.dashboard, name='dashboard'),
    path('dashboard/profile/', views.profile_update, name='profile_update'),
    path('dashboard/bank-details/', views.bank_details_update, name='bank_details_update'),
]
