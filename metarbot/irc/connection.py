"""Minimal asyncio IRC client: one connection, no reconnect."""

from __future__ import annotations

import asyncio
import logging
import ssl
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from ..constants import IRC_CONNECT_TIMEOUT, IRC_READ_LIMIT
from ..errors.internal import TransportError
from .models import Message
from .parser import format_line, parse_irc_message

if TYPE_CHECKING:  # pragma: no cover
    from ..config.model import BotConfig

RPL_WELCOME = "001"
ERR_NICKNAMEINUSE = "433"


class IRCConnection:
    """Owns the socket of one IRC session.

    ``messages()`` is the inbound stream consumed by the dispatcher; the
    outbound methods implement the ChatConnection protocol used to apply
    command responses.
    """

    def __init__(self, config: BotConfig):
        self.config = config
        self.nickname = config.nickname
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self.registered = False

    @property
    def connected(self) -> bool:
        return self.writer is not None and not self.writer.is_closing()

    async def connect(self) -> None:
        cfg = self.config
        ssl_context = ssl.create_default_context() if cfg.use_tls else None
        logging.info(f"🔌 Connecting to {cfg.server}:{cfg.port} tls={cfg.use_tls}")
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(
                    cfg.server, cfg.port, ssl=ssl_context, limit=IRC_READ_LIMIT
                ),
                timeout=IRC_CONNECT_TIMEOUT,
            )
        except (TimeoutError, OSError) as e:
            raise TransportError(
                f"Could not connect to {cfg.server}:{cfg.port}: {e}",
                data={"server": cfg.server, "port": cfg.port},
            ) from e

        if cfg.password:
            await self._send_line(format_line("PASS", cfg.password))
        await self._send_line(format_line("NICK", self.nickname))
        await self._send_line(format_line("USER", cfg.username, "0", "*", cfg.realname))
        logging.debug(f"Registration sent nick={self.nickname}")

    async def messages(self) -> AsyncIterator[Message]:
        """Yield parsed inbound messages until the server closes the connection.

        PING, the welcome reply and nickname collisions are handled here
        before the message is yielded.

        Raises:
            TransportError: If reading from the socket fails.
        """
        if self.reader is None:
            raise TransportError("Not connected")
        while True:
            try:
                raw = await self.reader.readline()
            except ValueError as e:
                # Over-long line; the reader already discarded it
                logging.warning(f"⚠️ Dropping over-long IRC line: {e}")
                continue
            except OSError as e:
                raise TransportError(f"Connection lost: {e}") from e
            if not raw:
                logging.warning("🔌 Server closed the connection")
                return
            line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
            if not line.strip():
                continue
            logging.debug(f"<< {line}")
            message = parse_irc_message(line)
            await self._handle_housekeeping(message)
            yield message

    async def _handle_housekeeping(self, message: Message) -> None:
        if message.command == "PING":
            await self._send_line(format_line("PONG", *message.params))
        elif message.command == RPL_WELCOME:
            self.registered = True
            logging.info(f"✅ Registered as {self.nickname}")
            for channel in self.config.channels:
                await self.join(channel)
        elif message.command == ERR_NICKNAMEINUSE and not self.registered:
            self.nickname = f"{self.nickname}_"
            logging.warning(f"⚠️ Nickname in use, retrying as {self.nickname}")
            await self._send_line(format_line("NICK", self.nickname))
        elif message.command == "ERROR":
            logging.error(f"❌ Server error: {' '.join(message.params)}")

    async def _send_line(self, line: str) -> None:
        if self.writer is None:
            raise TransportError("Not connected")
        logging.debug(f">> {line}")
        try:
            self.writer.write(f"{line}\r\n".encode())
            await self.writer.drain()
        except OSError as e:
            raise TransportError(f"Write failed: {e}") from e

    async def _send_text(self, command: str, target: str, text: str) -> None:
        for line in text.splitlines():
            if line.strip():
                await self._send_line(format_line(command, target, line))

    async def quit(self, message: str | None = None) -> None:
        await self._send_line(format_line("QUIT", message))

    async def part(self, channel: str, message: str | None = None) -> None:
        await self._send_line(format_line("PART", channel, message))

    async def join(self, channel: str) -> None:
        await self._send_line(format_line("JOIN", channel))

    async def send_privmsg(self, target: str, text: str) -> None:
        await self._send_text("PRIVMSG", target, text)

    async def send_notice(self, target: str, text: str) -> None:
        await self._send_text("NOTICE", target, text)

    async def disconnect(self) -> None:
        if self.writer:
            try:
                self.writer.close()
                await self.writer.wait_closed()
            except OSError as e:
                logging.debug(f"Error while closing IRC socket: {e}")
            finally:
                self.writer = None
                self.reader = None
        self.registered = False
        logging.info("🔌 Disconnected")
