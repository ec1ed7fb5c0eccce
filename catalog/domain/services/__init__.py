"""
Catalog Service Layer

Services:
- ProductService: product creation with image upload, detail, deletion
- UploadValidator: file count / size / type checks before any I/O
- FieldDecoder: typed decoding of multipart text fields

Usage:
    from catalog.domain.services import ProductService

    service = ProductService(storage=container.storage())
    result = service.create_with_images(request.data, request.FILES.getlist("images"))

    if result.ok:
        product = result.value
    else:
        error = result.error
"""

from .base import BaseService, ErrorCodes, ServiceResult, UploadValidationError, service_err, service_ok
from .field_decoder import FieldDecoder
from .product_service import ProductService
from .upload_validator import StagedFile, UploadValidator

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    "ErrorCodes",
    "UploadValidationError",
    "service_ok",
    "service_err",
    # Services
    "ProductService",
    "UploadValidator",
    "FieldDecoder",
    "StagedFile",
]
