"""Command handling: responses, authorization, registry and dispatch loop."""

from .applier import apply_response  # noqa: F401
from .auth import ensure_owner, is_owner, is_public, matches  # noqa: F401
from .command import BotCommand, CommandRegistry, RegistryBuilder  # noqa: F401
from .dispatcher import CommandDispatcher  # noqa: F401
from .response import (  # noqa: F401
    BotParameters,
    Ignore,
    Join,
    Notice,
    Part,
    Privmsg,
    Quit,
    Response,
)

__all__ = [
    "BotCommand",
    "BotParameters",
    "CommandDispatcher",
    "CommandRegistry",
    "Ignore",
    "Join",
    "Notice",
    "Part",
    "Privmsg",
    "Quit",
    "RegistryBuilder",
    "Response",
    "apply_response",
    "ensure_owner",
    "is_owner",
    "is_public",
    "matches",
]
