"""
Storage Abstraction Layer
==========================

Provides a unified interface for product image storage (local filesystem).
"""

from .factory import StorageFactory
from .interface import StagedUpload, StorageException, StorageInterface, StoredFile
from .local_adapter import LocalStorageAdapter

__all__ = [
    "StorageInterface",
    "StagedUpload",
    "StoredFile",
    "StorageException",
    "LocalStorageAdapter",
    "StorageFactory",
]
