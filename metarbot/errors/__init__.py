"""Error types and error reporting helpers."""

from .handling import handle_api_error, log_error  # noqa: F401
from .internal import (  # noqa: F401
    BotError,
    DuplicateTriggerError,
    EmptyResponse,
    InternalError,
    NetworkError,
    NoChannelToPart,
    NonSuccessResponse,
    NoResponseTarget,
    PatternError,
    TransportError,
    Unconfigured,
    WeatherFetchError,
)

__all__ = [
    "BotError",
    "DuplicateTriggerError",
    "EmptyResponse",
    "InternalError",
    "NetworkError",
    "NoChannelToPart",
    "NonSuccessResponse",
    "NoResponseTarget",
    "PatternError",
    "TransportError",
    "Unconfigured",
    "WeatherFetchError",
    "handle_api_error",
    "log_error",
]
