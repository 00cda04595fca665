"""Protocol for the outbound side of the chat connection."""

from __future__ import annotations

from typing import Protocol


class ChatConnection(Protocol):
    """Outbound side of the chat connection."""

    async def quit(self, message: str | None = None) -> None:
        """Disconnect from the server."""
        ...

    async def part(self, channel: str, message: str | None = None) -> None:
        """Leave a channel."""
        ...

    async def join(self, channel: str) -> None:
        """Join a channel."""
        ...

    async def send_privmsg(self, target: str, text: str) -> None:
        """Send a message to a channel or nickname."""
        ...

    async def send_notice(self, target: str, text: str) -> None:
        """Send a notice to a channel or nickname."""
        ...
