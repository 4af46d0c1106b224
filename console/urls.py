"""
==============================================================================
CONSOLE APP - URL CONFIGURATION
==============================================================================
    - /console/                  : Admin console page
    - /console/<action>/         : POST target of the moderation buttons
==============================================================================
"""

from django.urls import path

from . import views

app_name = 'console'

urlpatterns = [
    path('', views.console_home, name='home'),
    path('<slug:action>/', views.console_action, name='action'),
]
