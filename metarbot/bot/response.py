"""Responses a command can request, and the parameters it is invoked with."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..config.model import OwnerRule
from ..errors.internal import Unconfigured
from ..irc.models import Message


@dataclass(frozen=True, slots=True)
class Ignore:
    """Do nothing."""


@dataclass(frozen=True, slots=True)
class Quit:
    """Quit the server, optionally with a quit message."""

    message: str | None = None


@dataclass(frozen=True, slots=True)
class Part:
    """Leave a channel, optionally with a part message."""

    channel: str
    message: str | None = None


@dataclass(frozen=True, slots=True)
class Join:
    channel: str


@dataclass(frozen=True, slots=True)
class Privmsg:
    """Send text to a channel or nickname."""

    target: str
    text: str


@dataclass(frozen=True, slots=True)
class Notice:
    target: str
    text: str


Response = Ignore | Quit | Part | Join | Privmsg | Notice


@dataclass(frozen=True, slots=True)
class BotParameters:
    """Everything a command gets to see about one invocation.

    Attributes:
        message: The IRC message that triggered the command.
        leaders: Leader characters active for this message; empty when the
            message was sent directly to the bot.
        owners: Owner rules used to authorize privileged commands.
        args: The words following the trigger.
        options: Read-only configuration options.
    """

    message: Message
    leaders: str = ""
    owners: tuple[OwnerRule, ...] = ()
    args: tuple[str, ...] = ()
    options: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def leader(self) -> str:
        """The leader to show in usage hints, empty in direct messages."""
        return self.leaders[:1]

    def require_option(self, name: str) -> str:
        value = self.options.get(name)
        if not value:
            raise Unconfigured(name)
        return value
