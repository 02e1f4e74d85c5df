"""
Base service abstraction for consistent database session management and error handling.

Key features:
- Centralized session context manager
- Consistent error handling and logging
- Standardized transaction management
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional, TypeVar, Generic
from abc import ABC

from sqlmodel import Session
from pydantic import BaseModel

from PartBin.models.models import engine
from PartBin.exceptions import PartBinException, ValidationError, map_exception_to_base_service, log_exception

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ServiceResponse(BaseModel, Generic[T]):
    """Standardized response format for all service operations."""
    success: bool
    message: str
    data: Optional[T] = None
    errors: Optional[list[str]] = None

    @classmethod
    def success_response(cls, message: str, data: T = None) -> 'ServiceResponse[T]':
        """Create a success response."""
        return cls(success=True, message=message, data=data)

    @classmethod
    def error_response(cls, message: str, errors: list[str] = None) -> 'ServiceResponse[T]':
        """Create an error response."""
        return cls(success=False, message=message, errors=errors or [])


class BaseService(ABC):
    """
    Base service class providing centralized session management and error handling.

    Usage:
        class ComponentService(BaseService):
            def create_component(self, data):
                with self.get_session() as session:
                    component = self.component_repo.create_component(session, data)
                    return self.success_response("Component created", component.to_dict())
    """

    def __init__(self, engine_override=None):
        """
        Args:
            engine_override: Optional engine to use instead of global engine (for testing)
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.engine = engine_override if engine_override is not None else engine

    @contextmanager
    def get_session(self):
        """
        Context manager for synchronous database session management.

        Commits on success, rolls back on any exception and always closes
        the session.
        """
        session = Session(self.engine)
        try:
            self.logger.debug("Database session created")
            yield session
            session.commit()
            self.logger.debug("Database session committed successfully")
        except Exception as e:
            session.rollback()
            self.logger.error(f"Database session rolled back due to error: {e}")
            raise
        finally:
            session.close()
            self.logger.debug("Database session closed")

    def success_response(self, message: str, data: Any = None) -> ServiceResponse:
        """Create a standardized success response."""
        self.logger.info(f"Service operation successful: {message}")
        return ServiceResponse.success_response(message, data)

    def error_response(self, message: str, errors: list[str] = None) -> ServiceResponse:
        """Create a standardized error response."""
        self.logger.error(f"Service operation failed: {message}")
        if errors:
            self.logger.error(f"Additional errors: {errors}")
        return ServiceResponse.error_response(message, errors)

    def handle_exception(self, e: Exception, operation: str) -> ServiceResponse:
        """
        Centralized exception handling for service operations.

        Args:
            e: The exception that occurred
            operation: Description of the operation that failed
        """
        log_exception(e, context=f"{self.__class__.__name__}.{operation}")

        mapped_exception = map_exception_to_base_service(e)

        if isinstance(mapped_exception, PartBinException):
            return self.error_response(mapped_exception.message, [str(mapped_exception)])
        else:
            return self.error_response(
                f"An unexpected error occurred during {operation}",
                [str(e)]
            )

    def validate_required_fields(self, data: Dict[str, Any], required_fields: list[str]) -> None:
        """
        Raises:
            ValidationError: If any required fields are missing
        """
        missing_fields = []
        for field in required_fields:
            if field not in data or data[field] is None or data[field] == "":
                missing_fields.append(field)

        if missing_fields:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing_fields)}",
                missing_fields=missing_fields
            )

    def log_operation(self, operation: str, entity_type: str, entity_id: str = None):
        entity_info = f" (ID: {entity_id})" if entity_id else ""
        self.logger.info(f"Starting {operation} operation for {entity_type}{entity_info}")
