"""IRC transport package.

Contains the message models, the line parser and the single-connection
asyncio client the bot runs on.
"""

from .connection import IRCConnection  # noqa: F401
from .models import (  # noqa: F401
    Message,
    Nickname,
    Prefix,
    ServerName,
    is_channel_name,
    parse_prefix,
)
from .parser import format_line, parse_irc_message  # noqa: F401

__all__ = [
    "IRCConnection",
    "Message",
    "Nickname",
    "Prefix",
    "ServerName",
    "is_channel_name",
    "parse_prefix",
    "format_line",
    "parse_irc_message",
]
