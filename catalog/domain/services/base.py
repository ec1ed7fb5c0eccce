"""
Base classes and utilities for the service layer.

This module provides the ServiceResult pattern (inspired by Rust's Result type)
and BaseService class for all catalog services.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    A result type that encapsulates success or failure from service operations.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)
        errors: Per-field messages for validation failures

    Examples:
        >>> result = service_ok(product)
        >>> if result.ok:
        ...     return Response(ProductSerializer(result.value).data, 201)

        >>> result = service_err("validation_error", "Invalid upload", {"images": ["..."]})
        >>> print(result.errors["images"])
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None
    errors: Optional[Dict[str, List[str]]] = None

    def to_dict(self) -> dict:
        """
        Convert a failed result to the API error body.

        Returns:
            Dictionary with 'error', 'message' and, for validation failures, 'errors'
        """
        if self.ok:
            return {"success": True, "data": self.value}
        body = {"error": self.error, "message": self.error_detail}
        if self.errors:
            body["errors"] = self.errors
        return body


def service_ok(value: T) -> ServiceResult[T]:
    """
    Create a successful ServiceResult.

    Args:
        value: The success value

    Returns:
        ServiceResult with ok=True and the value
    """
    return ServiceResult(ok=True, value=value)


def service_err(
    error: str, error_detail: str = "", errors: Optional[Dict[str, List[str]]] = None
) -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (e.g., "validation_error", "storage_error")
        error_detail: Human-readable error message
        errors: Optional per-field messages

    Returns:
        ServiceResult with ok=False and error information
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error, errors=errors)


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator
    """

    def __init__(self):
        """Initialize base service with logger."""
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log performance of service methods.

        Logs execution time and any errors that occur.
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000  # Convert to ms

                # Log based on result type
                if isinstance(result, ServiceResult):
                    if result.ok:
                        self.logger.info(f"{method_name} completed successfully in {elapsed_time:.2f}ms")
                    else:
                        self.logger.warning(
                            f"{method_name} failed with error '{result.error}' in {elapsed_time:.2f}ms"
                        )
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper


class ErrorCodes:
    """Standard error codes used across catalog services."""

    # Product errors
    PRODUCT_NOT_FOUND = "product_not_found"

    # Validation errors
    VALIDATION_ERROR = "validation_error"

    # Server-side failures
    STORAGE_ERROR = "storage_error"
    PERSISTENCE_ERROR = "persistence_error"
    INTERNAL_ERROR = "internal_error"

    # Request errors
    PAYLOAD_TOO_LARGE = "payload_too_large"


class UploadValidationError(Exception):
    """
    Raised when uploaded files or form fields are invalid.

    Carries every violation found, keyed by field name.
    """

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        super().__init__("; ".join(f"{field}: {', '.join(messages)}" for field, messages in errors.items()))
