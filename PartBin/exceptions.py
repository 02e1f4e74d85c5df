"""
PartBin Exception Hierarchy

All exception classes used across the PartBin code base live here so that
services, routers and the order import engine share one error vocabulary.

Architecture:
- Base exception classes for common error types
- Domain-specific exceptions that inherit from base classes
- Consistent error response structure across all domains
- Integration with BaseService error handling patterns
"""

import logging
from typing import Any, Dict, Optional, List

logger = logging.getLogger(__name__)


# =============================================================================
# Base Exception Classes
# =============================================================================


class PartBinException(Exception):
    """Base exception for all PartBin-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {"error_code": self.error_code, "message": self.message, "details": self.details}


class ValidationError(PartBinException):
    """Raised when input validation fails."""

    def __init__(
        self, message: str, field_errors: Optional[Dict[str, str]] = None, missing_fields: Optional[List[str]] = None
    ):
        super().__init__(message, error_code="VALIDATION_ERROR")
        self.field_errors = field_errors or {}
        self.missing_fields = missing_fields or []

        if field_errors or missing_fields:
            self.details.update({"field_errors": field_errors, "missing_fields": missing_fields})


class ResourceNotFoundError(PartBinException):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str, resource_type: Optional[str] = None, resource_id: Optional[str] = None):
        super().__init__(message, error_code="RESOURCE_NOT_FOUND")
        self.resource_type = resource_type
        self.resource_id = resource_id

        if resource_type or resource_id:
            self.details.update({"resource_type": resource_type, "resource_id": resource_id})


# =============================================================================
# Domain-Specific Exception Classes
# =============================================================================


# Component Management Exceptions
class ComponentNotFoundError(ResourceNotFoundError):
    """Raised when a component is not found."""

    def __init__(self, message: str, component_id: Optional[str] = None):
        super().__init__(message, resource_type="component", resource_id=component_id)


# Order Import Exceptions
class FormatError(PartBinException):
    """
    Raised when an order file cannot be turned into component records.

    The reason is a short, human readable string ("no rows found",
    "header row not found", ...) that callers display verbatim or map to a
    localized message. Always aborts the whole import.
    """

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(reason, details=details, error_code="FORMAT_ERROR")
        self.reason = reason


# =============================================================================
# Exception Mapping for BaseService Integration
# =============================================================================


def map_exception_to_base_service(exception: Exception) -> PartBinException:
    """
    Map standard exceptions to PartBin exceptions for BaseService integration.
    """
    if isinstance(exception, PartBinException):
        return exception
    elif isinstance(exception, ValueError):
        return ValidationError(str(exception))
    elif isinstance(exception, KeyError):
        return ResourceNotFoundError(f"Resource not found: {str(exception)}")
    else:
        return PartBinException(str(exception), error_code="UNKNOWN_ERROR")


# =============================================================================
# Exception Logging Helpers
# =============================================================================


def log_exception(exception: Exception, context: str = None, extra_info: Optional[Dict[str, Any]] = None):
    """
    Centralized exception logging with consistent format.

    Args:
        exception: The exception to log
        context: Additional context about where the exception occurred
        extra_info: Additional information to include in the log
    """
    if isinstance(exception, PartBinException):
        log_data = {
            "error_code": exception.error_code,
            "error_message": exception.message,  # LogRecord already owns "message"
            "details": exception.details,
            "context": context,
        }

        if extra_info:
            log_data.update(extra_info)

        logger.error(f"PartBin Error: {exception.message}", extra=log_data)
    else:
        log_data = {
            "exception_type": type(exception).__name__,
            "error_message": str(exception),
            "context": context,
        }

        if extra_info:
            log_data.update(extra_info)

        logger.error(f"Unexpected Error: {str(exception)}", extra=log_data)


def get_http_status_code(exception: Exception) -> int:
    """
    Get appropriate HTTP status code for an exception.
    """
    if isinstance(exception, (ValidationError, FormatError)):
        return 422  # Unprocessable Entity
    elif isinstance(exception, ResourceNotFoundError):
        return 404  # Not Found
    elif isinstance(exception, PartBinException):
        return 400  # Bad Request (default for application errors)
    else:
        return 500  # Internal Server Error (unexpected errors)
