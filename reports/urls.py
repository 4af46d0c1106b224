"""
==============================================================================
REPORTS APP - URL CONFIGURATION
==============================================================================
URL patterns for PDF report generation.

Author: LusionBeatz Development Team
==============================================================================
"""

from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    # Purchase receipt
    path('receipt/<int:order_id>/', views.order_receipt, name='receipt'),

    # Admin reports
    path('earnings-summary/', views.earnings_summary, name='earnings_summary'),
]
