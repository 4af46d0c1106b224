"""
==============================================================================
CORE APP - API URL CONFIGURATION
==============================================================================
Mounted under /api/.

URL Patterns:
    - samples, samples/<id>, samples/upload, samples/my-uploads
    - cart, cart/add, cart/remove
    - orders/create, orders/my-purchases, orders/<id>/download/<sample_id>

Author: LusionBeatz Development Team
==============================================================================
"""

from django.urls import path
from . import views

app_name = 'core_api'

urlpatterns = [
    # Samples
    path('samples', views.api_sample_list, name='sample_list'),
    path('samples/upload', views.api_sample_upload, name='sample_upload'),
    path('samples/my-uploads', views.api_my_uploads, name='my_uploads'),
    path('samples/<int:pk>', views.api_sample_detail, name='sample_detail'),

    # Cart
    path('cart', views.api_cart, name='cart'),
    path('cart/add', views.api_cart_add, name='cart_add'),
    path('cart/remove', views.api_cart_remove, name='cart_remove'),

    # Orders
    path('orders/create', views.api_order_create, name='order_create'),
    path('orders/my-purchases', views.api_my_purchases, name='my_purchases'),
    path('orders/<int:pk>/download/<int:sample_id>', views.download_sample, name='download'),
]
