"""
Common decorators for catalog consumer services.
"""

from __future__ import annotations

import inspect
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any, Protocol, TypeVar

from aws_lambda_powertools import Logger

from core.models.errors import (
    FetchFailureError,
    NotFoundError,
    StorefrontError,
    ValidationError,
)
from core.utils.constants import ERROR_CODE_FETCH_TIMEOUT

logger = Logger(service="catalog-consumer", UTC=True)

F = TypeVar("F", bound=Callable[..., Any])


class ErrorSurface(Protocol):
    """State a consumer service exposes to the presentation layer."""

    loading: bool
    error: str | None


def get_user_friendly_message(exc: Exception) -> str:
    """
    Convert domain errors into messages fit for display.

    Preserves messages that are already user-facing and replaces
    the rest with a generic message per error type.
    """
    message = exc.message if isinstance(exc, StorefrontError) else str(exc)

    friendly_prefixes = (
        "Invalid",
        "Missing",
        "Must",
        "Cannot",
        "Unable to",
        "Product",
        "The catalog",
    )

    if message and any(message.startswith(prefix) for prefix in friendly_prefixes):
        return message

    if isinstance(exc, NotFoundError):
        return "The requested product was not found."

    if isinstance(exc, ValidationError):
        return "The provided filters are invalid. Please check your input and try again."

    if isinstance(exc, FetchFailureError) and exc.error_code == ERROR_CODE_FETCH_TIMEOUT:
        return "The catalog took too long to respond. Please try again."

    return "We couldn't load the products right now. Please try again."


def _log_error(
    message: str,
    *,
    operation: str,
    exc: Exception,
    level: str = "warning",
) -> None:
    """
    Log an error with consistent structure and full context.

    Args:
        message: Log message
        operation: Name of the decorated method
        exc: Exception that was raised
        level: Log level ('warning' or 'exception')
    """
    log_extra: dict[str, Any] = {
        "operation": operation,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if isinstance(exc, StorefrontError):
        log_extra["error_code"] = exc.error_code
        log_extra["details"] = exc.details

    if level == "exception":
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def surface_fetch_errors(func: F) -> F:
    """
    Decorator for consumer service operations that talk to the catalog.

    Provides:
    - ``loading`` set for the duration of the call
    - ``error`` cleared on entry and set to a display message when a
      StorefrontError is raised; the call then returns None and leaves
      all other state untouched
    - Structured logging of failures; unexpected errors are logged and
      re-raised

    Works on both plain and ``async`` methods.

    Example:
        class Listing:
            @surface_fetch_errors
            def load(self) -> None:
                ...
    """

    def _start(service: ErrorSurface) -> None:
        service.loading = True
        service.error = None

    def _fail(service: ErrorSurface, exc: StorefrontError) -> None:
        _log_error("Catalog operation failed", operation=func.__name__, exc=exc)
        service.error = get_user_friendly_message(exc)

    if inspect.iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(service: ErrorSurface, *args: Any, **kwargs: Any) -> Any:
            _start(service)
            try:
                return await func(service, *args, **kwargs)
            except StorefrontError as exc:
                _fail(service, exc)
                return None
            except Exception as exc:
                _log_error(
                    "Unexpected error in catalog operation",
                    operation=func.__name__,
                    exc=exc,
                    level="exception",
                )
                raise
            finally:
                service.loading = False

        return async_wrapper  # type: ignore[return-value]

    @wraps(func)
    def wrapper(service: ErrorSurface, *args: Any, **kwargs: Any) -> Any:
        _start(service)
        try:
            return func(service, *args, **kwargs)
        except StorefrontError as exc:
            _fail(service, exc)
            return None
        except Exception as exc:
            _log_error(
                "Unexpected error in catalog operation",
                operation=func.__name__,
                exc=exc,
                level="exception",
            )
            raise
        finally:
            service.loading = False

    return wrapper  # type: ignore[return-value]
