"""
Admin console JSON API, mounted at /api/admin/.
"""

from django.urls import path

from . import views

app_name = 'console_api'

urlpatterns = [
    path('users', views.api_users, name='users'),
    path('users/<int:pk>', views.api_delete_user, name='delete_user'),
    path('samples', views.api_samples, name='samples'),
    path('samples/<int:pk>', views.api_delete_sample, name='delete_sample'),
    path('orders', views.api_orders, name='orders'),
    path('stats', views.api_stats, name='stats'),

    # Moderation decisions
    path('approve-user', views.api_action, {'action': 'approve-user'}, name='approve_user'),
    path('reject-user', views.api_action, {'action': 'reject-user'}, name='reject_user'),
    path('approve-sample', views.api_action, {'action': 'approve-sample'}, name='approve_sample'),
    path('reject-sample', views.api_action, {'action': 'reject-sample'}, name='reject_sample'),
]
