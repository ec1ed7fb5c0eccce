"""
Service Container
=================

Process-wide registry handing out the storage backend and the catalog
services built on top of it. Views and the admin ask the container instead
of constructing services, so tests can swap configuration and call reset().

Usage:
    from infrastructure.container import container

    storage = container.storage()
    products = container.product_service()
"""

import logging
from typing import Optional

from .storage import StorageFactory, StorageInterface

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Lazily builds and caches the storage backend and ProductService.

    Only one instance exists per process.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._storage: Optional[StorageInterface] = None
            self._product_service = None

            self._initialized = True
            logger.info("Service container initialized")

    def storage(self, backend: Optional[str] = None) -> StorageInterface:
        """
        Get the product image storage backend.

        Args:
            backend: Backend name ('local'); INFRASTRUCTURE["STORAGE_BACKEND"] when None

        Returns:
            Cached StorageInterface implementation
        """
        if self._storage is None or backend is not None:
            self._storage = StorageFactory.create(backend)
            logger.debug(f"Created storage service: {type(self._storage).__name__}")

        return self._storage

    def product_service(self):
        """Get ProductService bound to the container's storage."""
        if self._product_service is None:
            from catalog.domain.services import ProductService

            self._product_service = ProductService(storage=self.storage())
            logger.debug("Created ProductService")
        return self._product_service

    def reset(self):
        """Drop cached instances so the next call rereads settings."""
        self._storage = None
        self._product_service = None
        logger.info("Service container reset")


container = ServiceContainer()


def get_storage() -> StorageInterface:
    """Get storage service from global container."""
    return container.storage()
