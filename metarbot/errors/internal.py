"""Centralized internal error hierarchy.

Commands signal failures by raising one of the ``BotError`` subclasses; the
dispatcher logs them and applies no protocol action. Network and response
failures from HTTP backed commands are wrapped so raw aiohttp errors never
leak past the module that performed the request.

Classes:
  InternalError        - Base for all internal errors.
  NetworkError         - Network/IO issues.
  TransportError       - The IRC connection itself failed.
  PatternError         - Invalid owner glob pattern.
  DuplicateTriggerError - Two commands registered with the same trigger.
  BotError             - Base for command failures.
  NoResponseTarget     - No target to send the response to.
  NoChannelToPart      - Asked to part outside of a channel.
  Unconfigured         - A required configuration option is missing.
  WeatherFetchError    - Downloading a weather report failed.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors."""


class TransportError(NetworkError):
    """The IRC connection failed while reading or writing."""


class PatternError(InternalError):
    """An owner glob pattern could not be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"{reason} in pattern '{pattern}'", data={"pattern": pattern})
        self.pattern = pattern
        self.reason = reason


class DuplicateTriggerError(InternalError):
    """Two commands were registered under the same trigger word."""

    def __init__(self, trigger: str) -> None:
        super().__init__(
            f"Command trigger '{trigger}' registered more than once",
            data={"trigger": trigger},
        )
        self.trigger = trigger


class BotError(InternalError):
    """Base class for failures raised by bot commands.

    A BotError terminates at the dispatcher: it is logged and no protocol
    action is taken.
    """


class NoResponseTarget(BotError):
    def __init__(self) -> None:
        super().__init__("Ignoring message since no response target is set")


class NoChannelToPart(BotError):
    def __init__(self) -> None:
        super().__init__("Requested to part the current channel outside of a channel")


class Unconfigured(BotError):
    """A command needs a configuration option that is not set."""

    def __init__(self, option: str) -> None:
        super().__init__(
            f"Configuration option '{option}' is not set", data={"option": option}
        )
        self.option = option


class WeatherFetchError(NetworkError):
    """Downloading a weather report failed.

    The message is shown to the user verbatim, so keep it short.
    """


class EmptyResponse(WeatherFetchError):
    def __init__(self) -> None:
        super().__init__("Received empty response")


class NonSuccessResponse(WeatherFetchError):
    def __init__(self, status: int, reason: str | None = None) -> None:
        text = f"{status} {reason}" if reason else str(status)
        super().__init__(text, data={"http_status": status})
        self.status = status


__all__ = [
    "InternalError",
    "NetworkError",
    "TransportError",
    "PatternError",
    "DuplicateTriggerError",
    "BotError",
    "NoResponseTarget",
    "NoChannelToPart",
    "Unconfigured",
    "WeatherFetchError",
    "EmptyResponse",
    "NonSuccessResponse",
]
