"""
Error handling decorators and utilities for API endpoints.

Every route is wrapped with handle_api_errors so that no exception leaves
the API without being mapped to a status code and a readable message.
"""

import inspect
import logging
from functools import wraps
from typing import Callable
from fastapi import HTTPException

from constants import HTTPStatus
from exceptions import (
    ConfigurationError,
    ValidationError,
    DatabaseError,
    ApplicationError
)

logger = logging.getLogger(__name__)


def to_http_exception(operation_name: str, error: Exception) -> HTTPException:
    """
    Map an exception raised by a route to an HTTPException.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Create order")
        error: The exception raised by the route

    Returns:
        HTTPException with status code and detail message
    """
    if isinstance(error, (ConfigurationError, ValidationError)):
        logger.warning(f"{operation_name} - Invalid request: {error.message}")
        return HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail=error.message
        )
    if isinstance(error, DatabaseError):
        logger.error(f"{operation_name} - Database error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Database operation failed: {error.message}"
        )
    if isinstance(error, ApplicationError):
        logger.error(f"{operation_name} - Application error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"{operation_name} failed: {error.message}"
        )
    logger.error(f"{operation_name} - Unexpected error: {error}", exc_info=error)
    return HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail=f"{operation_name} failed. Please check server logs or contact support."
    )


def handle_api_errors(operation_name: str):
    """
    Decorator to handle common API errors consistently across endpoints.

    Args:
        operation_name: Human-readable name of the operation (e.g., "List orders")

    Returns:
        Decorated function that handles errors uniformly

    Example:
        @router.get("/orders")
        @handle_api_errors("List orders")
        def list_orders(...):
            return service.list_orders(skip, take)
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        # Return appropriate wrapper based on whether the function is async
        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
