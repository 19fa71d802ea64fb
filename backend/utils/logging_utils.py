"""
Structured Logging Utilities

Provides utilities for adding structured context to log messages,
improving observability and debugging.
"""

import inspect
import logging
from typing import Any, Dict, Optional
from contextvars import ContextVar
from functools import wraps

from exceptions import ValidationError


# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

# Argument names copied into the log context by log_operation
CONTEXT_ARGUMENTS = ("order_id", "skip", "take")


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Order created", extra={
            "order_id": order.order_id,
            "operation": "create_order",
        })
    """

    def __init__(self, name: str):
        """
        Initialize structured logger.

        Args:
            name: Logger name (typically __name__)
        """
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Add context from ContextVar to extra dict.

        Args:
            extra: Additional context dict

        Returns:
            Merged context dict
        """
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message with structured context."""
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message with structured context."""
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message with structured context."""
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        """Log error message with structured context."""
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


def get_logging_context() -> Dict[str, Any]:
    """Return a copy of the current logging context."""
    return _logging_context.get().copy()


def set_logging_context(**kwargs):
    """
    Set logging context for the current request/operation.

    This context will be automatically included in all log messages
    within the current context (typically a request).

    Args:
        **kwargs: Key-value pairs to add to context

    Example:
        set_logging_context(request_id="abc-123", path="/api/orders")
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def _call_context(func, operation_name: str, args, kwargs) -> Dict[str, Any]:
    context: Dict[str, Any] = {"operation": operation_name}
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        return context
    for key in CONTEXT_ARGUMENTS:
        if bound.arguments.get(key) is not None:
            context[key] = bound.arguments[key]
    return context


def log_operation(operation_name: str):
    """
    Decorator to automatically log operation start/end with structured context.

    Validation failures are logged as warnings; anything else that escapes
    is logged as an error (without traceback) and re-raised.

    Args:
        operation_name: Name of the operation

    Example:
        @log_operation("delete_order")
        def delete_order(self, order_id: int) -> bool:
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            context = _call_context(func, operation_name, args, kwargs)

            logger.debug(f"Starting {operation_name}", extra=context)

            try:
                result = func(*args, **kwargs)
            except ValidationError as e:
                logger.warning(f"Rejected {operation_name}: {e.message}", extra=context)
                raise
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}: {e}", extra=context)
                raise

            logger.info(f"Completed {operation_name}", extra=context)
            return result

        return wrapper

    return decorator
