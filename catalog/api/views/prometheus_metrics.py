from django.http import HttpResponse
from drf_spectacular.utils import OpenApiResponse, extend_schema
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

from catalog.infra.observability.metrics import registry


@extend_schema(
    operation_id="products_metrics",
    summary="Upload pipeline metrics (Prometheus text format)",
    responses={200: OpenApiResponse(description="Prometheus exposition")},
    tags=["Catalog - Observability"],
)
@api_view(["GET"])
@permission_classes([AllowAny])
def catalog_prometheus_metrics(request):
    """
    Upload outcomes, stored image sizes and compensation counters.

    Only the catalog registry is exported; process and platform collectors
    from the default registry are left to the deployment's own exporter.
    """
    return HttpResponse(generate_latest(registry), content_type=CONTENT_TYPE_LATEST)
