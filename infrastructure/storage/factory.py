"""
Storage Factory
===============

Factory pattern for creating storage backend instances.
Implements the Dependency Inversion Principle.
"""

import logging
from typing import Optional

from django.conf import settings

from .interface import StorageInterface
from .local_adapter import LocalStorageAdapter

logger = logging.getLogger(__name__)


class StorageFactory:
    """
    Factory for creating the product image storage backend.

    Usage:
        storage = StorageFactory.create()
    """

    BACKENDS = {
        "local": LocalStorageAdapter,
    }

    @staticmethod
    def create(backend: Optional[str] = None) -> StorageInterface:
        """
        Create a storage backend instance.

        Args:
            backend: Backend name; defaults to INFRASTRUCTURE["STORAGE_BACKEND"]

        Returns:
            StorageInterface implementation

        Raises:
            ValueError: If the backend name is unknown
        """
        if backend is None:
            backend = getattr(settings, "INFRASTRUCTURE", {}).get("STORAGE_BACKEND", "local")

        adapter_class = StorageFactory.BACKENDS.get(backend)
        if adapter_class is None:
            raise ValueError(f"Unknown storage backend: {backend}")

        logger.info(f"Creating {backend} storage backend")
        return adapter_class()

    @staticmethod
    def create_local() -> LocalStorageAdapter:
        """
        Create local filesystem storage backend explicitly.

        Returns:
            LocalStorageAdapter instance
        """
        return LocalStorageAdapter()
