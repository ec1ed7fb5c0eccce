from .product_serializers import HomeGridImageSerializer, ProductDetailSerializer, ProductImageSerializer
from .response_serializers import ErrorResponseSerializer, ProductUploadRequestSerializer

__all__ = [
    "ProductDetailSerializer",
    "ProductImageSerializer",
    "HomeGridImageSerializer",
    "ErrorResponseSerializer",
    "ProductUploadRequestSerializer",
]
