"""
==============================================================================
LUSIONBEATZ - ROOT URL CONFIGURATION
==============================================================================
Main URL configuration for the LusionBeatz project.

This file routes requests to the appropriate app URL configurations:
    - /             : Catalog, cart and checkout pages (core)
    - /auth/, /dashboard/ : Authentication and dashboard pages (accounts)
    - /api/         : JSON API used by the browser client
    - /api/admin/   : Admin console API
    - /console/     : Admin approval console
    - /reports/     : PDF report generation
    - /admin/       : Django admin interface

Author: LusionBeatz Development Team
==============================================================================
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

# =============================================================================
# URL PATTERNS
# =============================================================================
urlpatterns = [
    # Django Admin Interface
    path('admin/', admin.site.urls),

    # ==========================================================================
    # JSON API
    # ==========================================================================
    path('api/admin/', include('console.api_urls')),
    path('api/', include('accounts.api_urls')),
    path('api/', include('core.api_urls')),

    # ==========================================================================
    # PAGES
    # ==========================================================================
    path('console/', include('console.urls')),
    path('reports/', include('reports.urls')),
    path('', include('accounts.urls')),
    path('', include('core.urls')),
]

# =============================================================================
# MEDIA FILES IN DEVELOPMENT
# =============================================================================
# In production, uploads should be served by a web server like Nginx

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)


# =============================================================================
# CUSTOMIZE ADMIN INTERFACE
# =============================================================================
admin.site.site_header = "LusionBeatz Admin"
admin.site.site_title = "LusionBeatz Admin Portal"
admin.site.index_title = "Welcome to LusionBeatz Administration"
