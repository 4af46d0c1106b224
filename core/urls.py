"""
==============================================================================
CORE APP - PAGE URL CONFIGURATION
==============================================================================
URL Patterns:
    - Catalog: home, loops, one-shots
    - Cart: view, add, remove
    - Checkout: UPI payment -> UTR submission
    - Upload: dashboard upload target

Author: LusionBeatz Development Team
==============================================================================
"""

from django.urls import path
from . import views

# App namespace for URL reversing (e.g., 'core:checkout')
app_name = 'core'

urlpatterns = [
    # ==========================================================================
    # CATALOG URLS
    # ==========================================================================
    path('', views.home, name='home'),
    path('loops/', views.browse, {'sample_type': 'loop'}, name='loops'),
    path('oneshots/', views.browse, {'sample_type': 'oneshot'}, name='oneshots'),

    # ==========================================================================
    # CART & CHECKOUT URLS
    # ==========================================================================
    path('cart/', views.cart_view, name='cart'),
    path('cart/add/<int:sample_id>/', views.cart_add, name='cart_add'),
    path('cart/remove/<int:sample_id>/', views.cart_remove, name='cart_remove'),
    path('checkout/', views.checkout, name='checkout'),

    # ==========================================================================
    # UPLOAD URLS
    # ==========================================================================
    path('samples/upload/', views.sample_upload, name='sample_upload'),
]
