"""
URL configuration for kaislaBackend project.

API routes live under /api/, uploaded product images are served from
/uploads/products/ in every environment (the catalog is public).
"""

from django.contrib import admin
from django.urls import include, path, re_path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from catalog.api.views.static_views import serve_product_image

urlpatterns = [
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # API endpoints
    path("api/", include("catalog.urls")),
    # Uploaded product images
    re_path(r"^uploads/products/(?P<path>[^/]+)$", serve_product_image, name="product-image-file"),
]
