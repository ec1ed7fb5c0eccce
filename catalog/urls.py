from django.urls import path

from .api.views import prometheus_metrics
from .api.views.product_views import ProductViewSet

app_name = "catalog"

urlpatterns = [
    path(
        "products/with-upload",
        ProductViewSet.as_view({"post": "create_with_upload"}),
        name="product-with-upload",
    ),
    path("products/home-grid", ProductViewSet.as_view({"get": "home_grid"}), name="product-home-grid"),
    # Prometheus metrics endpoint
    path("products/metrics/", prometheus_metrics.catalog_prometheus_metrics, name="catalog-metrics"),
    path(
        "products/<uuid:product_id>",
        ProductViewSet.as_view({"get": "retrieve", "delete": "destroy"}),
        name="product-detail",
    ),
]
