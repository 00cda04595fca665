from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

import aiohttp

from ..logging_config import log_structured_error
from .internal import (
    BotError,
    InternalError,
    NetworkError,
    NonSuccessResponse,
    WeatherFetchError,
)

T = TypeVar("T")


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The error is categorised from its type and handed to structured logging
    so repeated failures show up in the error summary.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    error_type = "unknown"
    if isinstance(error, NetworkError | OSError | ConnectionError | aiohttp.ClientError):
        error_type = "network"
    elif isinstance(error, BotError):
        error_type = "command"
    elif isinstance(error, InternalError):
        error_type = "internal"

    log_structured_error(
        error_type=error_type,
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )


async def handle_api_error(operation: Callable[[], Awaitable[T]], context: str) -> T:  # type: ignore[valid-type]
    """Run an HTTP operation and translate client errors into WeatherFetchError.

    Args:
        operation: The async HTTP operation to execute.
        context: Descriptive context for the operation (e.g., "METAR KJFK").

    Returns:
        The result of the operation if successful.

    Raises:
        WeatherFetchError: With a short, user presentable message.
    """
    try:
        return await operation()
    except WeatherFetchError as e:
        log_error(f"API operation failed in {context}", e, context=e.data or None)
        raise
    except (aiohttp.ClientError, TimeoutError, OSError) as e:
        error_context: dict[str, object] = {"operation": context, "timestamp": time.time()}
        if hasattr(e, "status"):
            error_context["http_status"] = e.status
        if hasattr(e, "request_info"):
            error_context["url"] = str(e.request_info.real_url)

        log_error(f"API operation failed in {context}", e, context=error_context)

        if isinstance(e, aiohttp.ClientResponseError):
            raise NonSuccessResponse(e.status, e.message) from e
        if isinstance(e, TimeoutError):
            raise WeatherFetchError("Request timed out") from e
        raise WeatherFetchError(f"Request failed: {type(e).__name__}") from e
