"""
Storage Interface
=================

Abstract base class defining the contract for product image storage.
Implementations persist staged uploads under generated names and provide a
best-effort delete used to compensate failed operations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Protocol


class StagedUpload(Protocol):
    """What a storage backend needs to know about a validated upload."""

    content_type: str
    extension: str
    size: int

    def chunks(self) -> Iterable[bytes]: ...


@dataclass
class StoredFile:
    """
    Represents a stored file with its metadata.

    Attributes:
        key: Generated file name, unique across the storage root
        path: Physical location of the bytes
        size: File size in bytes
        content_type: MIME type declared at upload time
        url_prefix: Public URL prefix the key is served under
    """

    key: str
    path: Path
    size: int
    content_type: str
    url_prefix: str = "/uploads/products/"

    def url(self, base_url: Optional[str] = None) -> str:
        """Public URL of the file: ``{base_url}{url_prefix}{key}``."""
        return f"{(base_url or '').rstrip('/')}{self.url_prefix}{self.key}"


class StorageInterface(ABC):
    """
    Abstract interface for product image storage.

    Concrete implementations:
        - LocalStorageAdapter: local filesystem under a fixed root
    """

    @abstractmethod
    def save(self, staged: StagedUpload) -> StoredFile:
        """
        Persist a validated upload under a newly generated name.

        Args:
            staged: Validated upload (content type, extension, bytes)

        Returns:
            StoredFile describing the written file

        Raises:
            StorageException: If the file could not be written
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete a stored file, best effort.

        Must never raise and must be idempotent: deleting a missing file
        counts as success.

        Args:
            key: Generated file name

        Returns:
            True if the file is absent afterwards, False otherwise
        """
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """
        Check if a file exists in storage.

        Args:
            key: Generated file name

        Returns:
            True if file exists, False otherwise
        """
        pass

    @abstractmethod
    def url(self, key: str, base_url: Optional[str] = None) -> str:
        """
        Get the public URL of a stored file.

        Args:
            key: Generated file name
            base_url: Scheme and host to prefix (e.g. "https://shop.example")

        Returns:
            URL string
        """
        pass

    @property
    @abstractmethod
    def root(self) -> Path:
        """Directory the files are written to."""
        pass


class StorageException(Exception):
    """Base exception for storage operations."""

    pass
