"""
ProductService - product creation with image upload, detail, deletion.

create_with_images is the only write path that touches both the filesystem
and the database. Files are written only after every input check passed, and
any failure after the first write removes what this request stored, so a
failed upload never leaves orphaned images behind.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from django.conf import settings
from django.db import transaction

from catalog.domain.models import Product, ProductImage
from catalog.infra.observability.metrics import (
    image_upload_bytes,
    images_stored_total,
    product_upload_duration,
    product_uploads_total,
)
from infrastructure.container import container
from infrastructure.storage import StorageException, StorageInterface, StoredFile

from .base import BaseService, ErrorCodes, ServiceResult, UploadValidationError, service_err, service_ok
from .compensation import CompensationLog
from .field_decoder import FieldDecoder
from .upload_validator import StagedFile, UploadValidator


logger = logging.getLogger(__name__)


class ProductService(BaseService):
    """
    Service for catalog products.

    Responsibilities:
    - Create a product together with 1-5 uploaded images
    - Get product details
    - Delete a product and its stored images
    - List images flagged for the home page grid
    """

    def __init__(
        self,
        storage: Optional[StorageInterface] = None,
        validator: Optional[UploadValidator] = None,
        decoder: Optional[FieldDecoder] = None,
    ):
        """
        Initialize ProductService.

        Args:
            storage: Storage abstraction (injected via DI container)
            validator: Upload policy checks (defaults from settings)
            decoder: Form field decoder
        """
        super().__init__()
        self.storage = storage or container.storage()
        self.validator = validator or UploadValidator()
        self.decoder = decoder or FieldDecoder()

    @BaseService.log_performance
    def create_with_images(
        self,
        raw_fields: Mapping[str, Any],
        raw_files: Optional[Sequence[Any]],
        base_url: Optional[str] = None,
    ) -> ServiceResult[Product]:
        """
        Create a product from a multipart upload.

        Args:
            raw_fields: Text form fields (name, price, dimensions JSON, ...)
            raw_files: Uploaded image files in submission order
            base_url: Scheme and host for image URLs; settings.PUBLIC_BASE_URL if omitted

        Returns:
            ServiceResult with the created Product, or one of
            validation_error / storage_error / persistence_error

        Example:
            >>> result = product_service.create_with_images(
            ...     {"name": "Test Rug", "category": "rug", "price": "100"},
            ...     [front_jpeg, detail_png],
            ...     base_url="https://atelier.example",
            ... )
            >>> result.value.image_urls
            ['https://atelier.example/uploads/products/3f2c...jpg', ...]
        """
        with product_upload_duration.time():
            try:
                staged = self.validator.validate(raw_files)
                data = self.decoder.decode(raw_fields)
            except UploadValidationError as e:
                product_uploads_total.labels(outcome=ErrorCodes.VALIDATION_ERROR).inc()
                return service_err(ErrorCodes.VALIDATION_ERROR, "Invalid product upload", e.errors)

            compensation = CompensationLog(self.storage)

            stored_result = self._store_files(staged, compensation)
            if not stored_result.ok:
                product_uploads_total.labels(outcome=stored_result.error).inc()
                return stored_result

            try:
                product = self._persist(data, staged, stored_result.value, base_url)
            except Exception as e:
                self.logger.error(f"Error saving product '{data.get('name')}': {e}", exc_info=True)
                compensation.run(ErrorCodes.PERSISTENCE_ERROR)
                product_uploads_total.labels(outcome=ErrorCodes.PERSISTENCE_ERROR).inc()
                return service_err(ErrorCodes.PERSISTENCE_ERROR, "Failed to save product")

            compensation.clear()
            product_uploads_total.labels(outcome="created").inc()
            self.logger.info(f"Created product: {product.name} (id={product.id}) with {len(staged)} image(s)")

            return service_ok(product)

    def _store_files(self, staged: List[StagedFile], compensation: CompensationLog) -> ServiceResult[List[StoredFile]]:
        """Write files in submission order; on the first failure undo the ones already written."""
        stored_files = []

        for item in staged:
            try:
                stored = self.storage.save(item)
            except StorageException as e:
                self.logger.error(f"Failed to store image {item.original_filename}: {e}")
                compensation.run(ErrorCodes.STORAGE_ERROR)
                return service_err(ErrorCodes.STORAGE_ERROR, "Failed to store product images")
            except Exception as e:
                self.logger.error(f"Unexpected error storing image {item.original_filename}: {e}", exc_info=True)
                compensation.run(ErrorCodes.INTERNAL_ERROR)
                return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to store product images")

            compensation.push(stored)
            stored_files.append(stored)
            images_stored_total.inc()
            image_upload_bytes.observe(stored.size)

        return service_ok(stored_files)

    def _persist(
        self,
        data: Dict[str, Any],
        staged: List[StagedFile],
        stored_files: List[StoredFile],
        base_url: Optional[str],
    ) -> Product:
        """Insert the product and its image rows in one transaction."""
        fields = dict(data)
        show_on_home = fields.pop("show_on_home", None) or []
        base_url = base_url if base_url is not None else getattr(settings, "PUBLIC_BASE_URL", "")

        with transaction.atomic():
            product = Product.objects.create(**fields)

            for position, (item, stored) in enumerate(zip(staged, stored_files)):
                ProductImage.objects.create(
                    product=product,
                    url=stored.url(base_url),
                    storage_key=stored.key,
                    original_filename=item.original_filename[:255],
                    file_size=stored.size,
                    content_type=stored.content_type,
                    # Flags are positional; missing entries mean "not on home"
                    show_on_home=show_on_home[position] if position < len(show_on_home) else False,
                    sort_order=position,
                )

        return product

    @BaseService.log_performance
    def get_product(self, product_id: str) -> ServiceResult[Product]:
        """
        Get product details by ID.

        Args:
            product_id: Product UUID

        Returns:
            ServiceResult with Product instance (images prefetched in order)
        """
        try:
            product = Product.objects.prefetch_related("images").get(id=product_id)
            return service_ok(product)
        except Product.DoesNotExist:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")
        except Exception as e:
            self.logger.error(f"Error getting product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to load product")

    @BaseService.log_performance
    def delete_product(self, product_id: str) -> ServiceResult[bool]:
        """
        Delete a product, its image rows and, once committed, its stored files.

        File removal is best effort and runs only after the transaction
        commits, so a rolled back delete never loses images.

        Args:
            product_id: Product UUID

        Returns:
            ServiceResult with True if deleted
        """
        try:
            with transaction.atomic():
                product = Product.objects.select_for_update().get(id=product_id)
                keys = list(product.images.values_list("storage_key", flat=True))
                product_name = product.name
                product.delete()
                transaction.on_commit(lambda: self._delete_stored_files(keys))

            self.logger.info(f"Deleted product: {product_name} (id={product_id}), {len(keys)} image(s) scheduled")
            return service_ok(True)

        except Product.DoesNotExist:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")
        except Exception as e:
            self.logger.error(f"Error deleting product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.PERSISTENCE_ERROR, "Failed to delete product")

    def _delete_stored_files(self, keys: List[str]) -> None:
        for key in keys:
            if not self.storage.delete(key):
                self.logger.warning(f"Stored image {key} could not be removed after product deletion")

    @BaseService.log_performance
    def list_home_grid_images(self, limit: Optional[int] = None) -> ServiceResult[List[ProductImage]]:
        """
        List images flagged for the home page grid.

        Only images of available products are returned, newest product first
        and in gallery order within a product.

        Args:
            limit: Maximum number of images

        Returns:
            ServiceResult with list of ProductImage (product preloaded)
        """
        try:
            queryset = (
                ProductImage.objects.select_related("product")
                .filter(show_on_home=True, product__status="available")
                .order_by("-product__created_at", "sort_order")
            )
            if limit:
                queryset = queryset[:limit]
            return service_ok(list(queryset))
        except Exception as e:
            self.logger.error(f"Error listing home grid images: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to load home grid")
