"""
Local Storage Adapter
=====================

Concrete implementation of StorageInterface writing to the local filesystem.
Files are named ``<uuid4 hex><extension>``; the client-supplied filename is
never used on disk.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

from django.conf import settings

from .interface import StagedUpload, StorageException, StorageInterface, StoredFile

logger = logging.getLogger(__name__)


class LocalStorageAdapter(StorageInterface):
    """
    Filesystem storage for product images.

    Configuration (in settings.py):
        CATALOG_UPLOADS["ROOT"]: Directory files are written to
        CATALOG_UPLOADS["URL_PREFIX"]: URL prefix the directory is served under
    """

    def __init__(self, root: Optional[Path] = None, url_prefix: Optional[str] = None):
        """Initialize local storage backend."""
        config = getattr(settings, "CATALOG_UPLOADS", {})
        self._root = Path(root or config.get("ROOT") or Path(settings.BASE_DIR) / "uploads" / "products")
        self.url_prefix = url_prefix or config.get("URL_PREFIX", "/uploads/products/")

    @property
    def root(self) -> Path:
        return self._root

    def ensure_root(self) -> None:
        """Create the storage root if absent. Safe to race with other writers."""
        self._root.mkdir(parents=True, exist_ok=True)

    def save(self, staged: StagedUpload) -> StoredFile:
        """
        Write a validated upload to disk under a generated name.

        Args:
            staged: Validated upload

        Returns:
            StoredFile with the generated key and physical path

        Raises:
            StorageException: If the directory or file cannot be written
        """
        key = f"{uuid.uuid4().hex}{staged.extension}"
        path = self._root / key

        try:
            self.ensure_root()
            # "x" refuses to open an existing file, a generated name is never reused
            with open(path, "xb") as destination:
                for chunk in staged.chunks():
                    destination.write(chunk)
        except OSError as e:
            logger.error(f"Failed to write file to local storage: {path}. Error: {str(e)}")
            self._discard_partial(path)
            raise StorageException(f"Local write failed: {e.strerror or str(e)}") from e

        size = path.stat().st_size
        logger.info(f"Stored file {key} ({size} bytes, {staged.content_type})")

        return StoredFile(
            key=key,
            path=path,
            size=size,
            content_type=staged.content_type,
            url_prefix=self.url_prefix,
        )

    def delete(self, key: str) -> bool:
        """
        Delete a stored file. Never raises.

        Args:
            key: Generated file name

        Returns:
            True if the file is gone afterwards (including when it never existed)
        """
        if not self._is_plain_name(key):
            logger.warning(f"Refusing to delete suspicious storage key: {key!r}")
            return False

        try:
            (self._root / key).unlink(missing_ok=True)
            logger.info(f"Deleted file from local storage: {key}")
            return True
        except OSError as e:
            logger.warning(f"Failed to delete file from local storage: {key}. Error: {str(e)}")
            return False

    def exists(self, key: str) -> bool:
        if not self._is_plain_name(key):
            return False
        return (self._root / key).is_file()

    def url(self, key: str, base_url: Optional[str] = None) -> str:
        return f"{(base_url or '').rstrip('/')}{self.url_prefix}{key}"

    @staticmethod
    def _is_plain_name(key: str) -> bool:
        return bool(key) and key not in (".", "..") and Path(key).name == key and "\\" not in key

    @staticmethod
    def _discard_partial(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove partially written file {path}: {str(e)}")
