import logging

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import APIException
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response

from catalog.api.serializers import (
    ErrorResponseSerializer,
    HomeGridImageSerializer,
    ProductDetailSerializer,
    ProductUploadRequestSerializer,
)
from catalog.domain.services import ErrorCodes, ProductService, service_err
from infrastructure.container import container


logger = logging.getLogger(__name__)

# Server-side failures are reported without internal detail
GENERIC_SERVER_MESSAGES = {
    ErrorCodes.STORAGE_ERROR: "Failed to store product images",
    ErrorCodes.PERSISTENCE_ERROR: "Failed to save product",
    ErrorCodes.INTERNAL_ERROR: "Internal server error",
}


class RequestBodyTooLarge(APIException):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_detail = "Request body too large"
    default_code = ErrorCodes.PAYLOAD_TOO_LARGE


class ProductViewSet(viewsets.ViewSet):
    """
    Products with image upload, detail, deletion and the home page grid.
    """

    permission_classes = [AllowAny]
    parser_classes = [MultiPartParser, FormParser]

    def get_service(self) -> ProductService:
        return container.product_service()

    def initial(self, request, *args, **kwargs):
        # Before authentication: the session CSRF check reads request.POST
        if self.action == "create_with_upload" and self._request_too_large(request):
            logger.warning(f"Rejected product upload of {request.META.get('CONTENT_LENGTH')} bytes")
            raise RequestBodyTooLarge(service_err(ErrorCodes.PAYLOAD_TOO_LARGE, "Request body too large").to_dict())
        super().initial(request, *args, **kwargs)

    def get_permissions(self):
        if self.action in ["create_with_upload", "destroy"]:
            return [IsAdminUser()]
        return super().get_permissions()

    def _base_url(self, request) -> str:
        configured = getattr(settings, "PUBLIC_BASE_URL", "")
        if configured:
            return configured.rstrip("/")
        return request.build_absolute_uri("/").rstrip("/")

    def _request_too_large(self, request) -> bool:
        limit = settings.CATALOG_UPLOADS.get("MAX_REQUEST_BYTES")
        if not limit:
            return False
        try:
            content_length = int(request.META.get("CONTENT_LENGTH") or 0)
        except (TypeError, ValueError):
            return False
        return content_length > limit

    def _error_response(self, result) -> Response:
        if result.error == ErrorCodes.VALIDATION_ERROR:
            return Response(result.to_dict(), status=status.HTTP_400_BAD_REQUEST)
        if result.error == ErrorCodes.PRODUCT_NOT_FOUND:
            return Response(result.to_dict(), status=status.HTTP_404_NOT_FOUND)

        message = GENERIC_SERVER_MESSAGES.get(result.error, GENERIC_SERVER_MESSAGES[ErrorCodes.INTERNAL_ERROR])
        return Response({"error": result.error, "message": message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    @extend_schema(
        operation_id="products_create_with_upload",
        summary="Create a product with 1-5 images (Staff only)",
        description=(
            "Accepts multipart/form-data. Images are validated before anything is written; "
            "if storing or saving fails, every file written for the request is removed."
        ),
        request={"multipart/form-data": ProductUploadRequestSerializer},
        responses={
            201: OpenApiResponse(response=ProductDetailSerializer, description="Product created successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid files or fields"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Staff access required"),
            413: OpenApiResponse(response=ErrorResponseSerializer, description="Request body too large"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Storage or database failure"),
        },
        tags=["Catalog - Products"],
    )
    def create_with_upload(self, request):
        service = self.get_service()
        result = service.create_with_images(
            request.data,
            request.FILES.getlist("images"),
            base_url=self._base_url(request),
        )

        if not result.ok:
            return self._error_response(result)

        serializer = ProductDetailSerializer(result.value, context={"request": request})
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product details",
        responses={
            200: ProductDetailSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Catalog - Products"],
    )
    def retrieve(self, request, product_id=None):
        result = self.get_service().get_product(str(product_id))

        if not result.ok:
            return self._error_response(result)

        serializer = ProductDetailSerializer(result.value, context={"request": request})
        return Response(serializer.data)

    @extend_schema(
        operation_id="products_destroy",
        summary="Delete product and its images (Staff only)",
        responses={
            204: OpenApiResponse(description="Product deleted"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Staff access required"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Catalog - Products"],
    )
    def destroy(self, request, product_id=None):
        result = self.get_service().delete_product(str(product_id))

        if not result.ok:
            return self._error_response(result)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="products_home_grid",
        summary="Images flagged for the home page",
        parameters=[
            OpenApiParameter(name="limit", type=int, description="Maximum number of images"),
        ],
        responses={
            200: HomeGridImageSerializer(many=True),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Catalog - Products"],
    )
    def home_grid(self, request):
        try:
            limit = int(request.query_params.get("limit", 0))
        except ValueError:
            limit = 0
        if limit <= 0:
            limit = None

        result = self.get_service().list_home_grid_images(limit=limit)

        if not result.ok:
            return self._error_response(result)

        serializer = HomeGridImageSerializer(result.value, many=True, context={"request": request})
        return Response(serializer.data)
