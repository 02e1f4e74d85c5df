"""
Base router infrastructure for centralized error handling and response construction.
"""

import logging
from typing import Any, Optional, Callable, TypeVar
from functools import wraps

from fastapi import HTTPException

from PartBin.exceptions import PartBinException
from PartBin.schemas.response import ResponseSchema

logger = logging.getLogger(__name__)

T = TypeVar('T')


class BaseRouter:
    """
    Base class for all routers providing centralized error handling and response construction.
    """

    @staticmethod
    def build_success_response(
        data: Any = None,
        message: str = "Operation completed successfully",
        total_components: Optional[int] = None
    ) -> ResponseSchema:
        return ResponseSchema(
            status="success",
            message=message,
            data=data,
            total_components=total_components
        )

    @staticmethod
    def handle_exception(e: Exception) -> Exception:
        """
        Convert exceptions to appropriate HTTP exceptions.

        PartBin exceptions pass through untouched so the registered exception
        handler can render their error code and details.
        """
        if isinstance(e, (HTTPException, PartBinException)):
            return e
        elif isinstance(e, ValueError):
            return HTTPException(status_code=400, detail=str(e))
        else:
            logger.error(f"Unexpected error: {str(e)}", exc_info=True)
            return HTTPException(status_code=500, detail="Internal server error")


def standard_error_handling(func: Callable) -> Callable:
    """
    Decorator that provides standardized error handling for route functions.

    Usage:
        @standard_error_handling
        async def my_route():
            return BaseRouter.build_success_response(data=result)
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            raise BaseRouter.handle_exception(e)
    return wrapper


def validate_service_response(service_response) -> Any:
    """
    Extract data from a successful service response.

    Raises:
        HTTPException: If service response indicates failure
    """
    if not service_response.success:
        if "not found" in service_response.message.lower():
            raise HTTPException(status_code=404, detail=service_response.message)
        else:
            raise HTTPException(status_code=400, detail=service_response.message)

    return service_response.data
