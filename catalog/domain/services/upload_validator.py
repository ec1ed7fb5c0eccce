"""
UploadValidator - checks product image uploads before any disk I/O.

Every violation of every file is collected so the client can fix the whole
batch in one round trip. Nothing here touches the filesystem.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from django.conf import settings

from .base import UploadValidationError

logger = logging.getLogger(__name__)

DEFAULT_POLICY = {
    "MIN_FILES": 1,
    "MAX_FILES": 5,
    "MAX_FILE_SIZE": 5 * 1024 * 1024,
    "ALLOWED_CONTENT_TYPES": ["image/jpeg", "image/jpg", "image/png", "image/webp"],
}

# Extensions accepted for each declared MIME type
EXTENSIONS_BY_CONTENT_TYPE = {
    "image/jpeg": (".jpg", ".jpeg"),
    "image/jpg": (".jpg", ".jpeg"),
    "image/png": (".png",),
    "image/webp": (".webp",),
}


@dataclass
class StagedFile:
    """
    One uploaded file that passed validation, not yet written to storage.

    Attributes:
        original_filename: Client-supplied name, display only
        content_type: Declared MIME type (lower-cased)
        size: Byte size
        extension: Validated, lower-cased extension including the dot
        upload: Underlying Django UploadedFile
    """

    original_filename: str
    content_type: str
    size: int
    extension: str
    upload: Any = field(repr=False)

    def chunks(self) -> Iterable[bytes]:
        self.upload.seek(0)
        return self.upload.chunks()


def _format_size(num_bytes: int) -> str:
    if num_bytes % (1024 * 1024) == 0:
        return f"{num_bytes // (1024 * 1024)}MB"
    return f"{num_bytes / (1024 * 1024):.1f}MB"


class UploadValidator:
    """
    Validates the `images` part of a product upload.

    Policy is read from settings.CATALOG_UPLOADS and can be overridden per
    instance (tests, other upload kinds).
    """

    field_name = "images"

    def __init__(self, policy: Optional[Dict[str, Any]] = None):
        configured = getattr(settings, "CATALOG_UPLOADS", {})
        merged = {**DEFAULT_POLICY, **{k: v for k, v in configured.items() if k in DEFAULT_POLICY}}
        merged.update(policy or {})

        self.min_files = merged["MIN_FILES"]
        self.max_files = merged["MAX_FILES"]
        self.max_file_size = merged["MAX_FILE_SIZE"]
        self.allowed_content_types = {ct.lower() for ct in merged["ALLOWED_CONTENT_TYPES"]}

    def validate(self, files: Optional[Sequence[Any]]) -> List[StagedFile]:
        """
        Validate a batch of uploaded files.

        Args:
            files: Uploaded files in submission order (may be None)

        Returns:
            StagedFile descriptors in submission order

        Raises:
            UploadValidationError: With every violation under the "images" key
        """
        files = list(files or [])

        count_error = self._check_count(len(files))
        if count_error:
            logger.info(f"Upload rejected: {count_error}")
            raise UploadValidationError({self.field_name: [count_error]})

        messages: List[str] = []
        staged: List[StagedFile] = []

        for upload in files:
            name = getattr(upload, "name", None) or "unnamed"
            content_type = (getattr(upload, "content_type", None) or "").lower()
            size = getattr(upload, "size", None) or 0
            extension = os.path.splitext(name)[1].lower()

            file_errors = self._check_file(name, content_type, size, extension)
            if file_errors:
                messages.extend(file_errors)
                continue

            staged.append(
                StagedFile(
                    original_filename=name,
                    content_type=content_type,
                    size=size,
                    extension=extension,
                    upload=upload,
                )
            )

        if messages:
            logger.info(f"Upload rejected with {len(messages)} file error(s)")
            raise UploadValidationError({self.field_name: messages})

        return staged

    def _check_count(self, count: int) -> Optional[str]:
        if count < self.min_files:
            noun = "image file is" if self.min_files == 1 else "image files are"
            return f"At least {self.min_files} {noun} required"
        if count > self.max_files:
            return f"Maximum {self.max_files} files allowed, received {count}"
        return None

    def _check_file(self, name: str, content_type: str, size: int, extension: str) -> List[str]:
        errors = []

        if size > self.max_file_size:
            errors.append(f"File {name} exceeds maximum size of {_format_size(self.max_file_size)}")

        if content_type not in self.allowed_content_types:
            errors.append(f"File {name} has invalid type. Only JPEG, PNG, and WebP are allowed")
        elif extension not in EXTENSIONS_BY_CONTENT_TYPE.get(content_type, ()):
            # Heuristic only: the declared type is not sniffed from the bytes
            errors.append(f"File {name} has mismatched extension and mime type")

        return errors
