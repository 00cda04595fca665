"""Command dispatch loop.

Reads inbound messages, starts a task for every recognised command and
applies each task's response as soon as it completes. Inbound messages and
completed tasks are serviced by one controller: each iteration waits for
whichever is ready first and handles exactly one of them.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from ..config.model import OwnerRule
from ..errors.handling import log_error
from ..errors.internal import BotError
from ..irc.models import Message
from .applier import apply_response
from .auth import is_public
from .command import CommandRegistry
from .protocols import ChatConnection
from .response import BotParameters, Response

if TYPE_CHECKING:  # pragma: no cover
    from ..config.model import BotConfig


class CommandDispatcher:
    def __init__(
        self,
        connection: ChatConnection,
        registry: CommandRegistry,
        *,
        leaders: str,
        owners: tuple[OwnerRule, ...] = (),
        options: Mapping[str, str] | None = None,
    ):
        self.connection = connection
        self.registry = registry
        self.leaders = leaders
        self.owners = tuple(owners)
        self.options: Mapping[str, str] = MappingProxyType(dict(options or {}))
        self._in_flight: set[asyncio.Task[Response]] = set()
        self._completed: asyncio.Queue[asyncio.Task[Response]] = asyncio.Queue()

    @classmethod
    def from_config(
        cls, connection: ChatConnection, registry: CommandRegistry, config: BotConfig
    ) -> CommandDispatcher:
        return cls(
            connection,
            registry,
            leaders=config.leaders,
            owners=config.owner_rules(),
            options=config.options,
        )

    @property
    def in_flight(self) -> int:
        """Number of dispatched commands whose result has not been handled yet."""
        return len(self._in_flight)

    def parse_command(self, message: Message) -> tuple[str, tuple[str, ...], str] | None:
        """Extract ``(trigger, args, leaders)`` from a message addressed to the bot.

        Channel messages must start with a leader character; direct
        messages may omit it. Returns None for anything else.
        """
        privmsg = message.privmsg()
        if privmsg is None:
            return None
        target, text = privmsg
        leader_required = is_public(target)
        has_leader = bool(text) and text[0] in self.leaders
        if leader_required and not has_leader:
            return None
        if has_leader:
            text = text[1:]
        tokens = text.split()
        if not tokens:
            return None
        leaders = self.leaders if leader_required else ""
        return tokens[0].lower(), tuple(tokens[1:]), leaders

    def dispatch(self, message: Message) -> asyncio.Task[Response] | None:
        """Start the command named by ``message``, if any.

        Never waits for the command; the returned task is tracked until its
        result has been handled by the loop.
        """
        parsed = self.parse_command(message)
        if parsed is None:
            return None
        trigger, args, leaders = parsed
        command = self.registry.get(trigger)
        if command is None:
            return None
        params = BotParameters(
            message=message,
            leaders=leaders,
            owners=self.owners,
            args=args,
            options=self.options,
        )
        logging.debug(f"Dispatching {trigger} args={list(args)} from {message.prefix}")
        task = asyncio.create_task(command.handle(params), name=f"command:{trigger}")
        self._in_flight.add(task)
        task.add_done_callback(self._completed.put_nowait)
        return task

    async def finish(self, task: asyncio.Task[Response]) -> None:
        """Handle the outcome of a completed command task."""
        self._in_flight.discard(task)
        name = task.get_name()
        if task.cancelled():
            logging.warning(f"⚠️ {name} was cancelled")
            return
        error = task.exception()
        if isinstance(error, BotError):
            logging.warning(f"⚠️ {name} failed: {error}")
            return
        if error is not None:
            log_error("Error running command", error, context={"command": name})
            return
        await apply_response(self.connection, task.result())

    async def run(self, messages: AsyncIterable[Message]) -> None:
        """Service inbound messages and completed commands until the stream ends.

        Commands still running when the stream ends are left alone.

        Raises:
            TransportError: If the inbound stream fails.
        """
        iterator = aiter(messages)
        next_message = asyncio.ensure_future(anext(iterator, None))
        next_completion = asyncio.ensure_future(self._completed.get())
        try:
            while True:
                done, _ = await asyncio.wait(
                    {next_message, next_completion},
                    return_when=asyncio.FIRST_COMPLETED,
                )
                if next_message in done:
                    message = next_message.result()
                    if message is None:
                        logging.info("📭 Inbound stream ended")
                        break
                    self.dispatch(message)
                    next_message = asyncio.ensure_future(anext(iterator, None))
                else:
                    task = next_completion.result()
                    next_completion = asyncio.ensure_future(self._completed.get())
                    await self.finish(task)
        finally:
            for waiter in (next_message, next_completion):
                if not waiter.done():
                    waiter.cancel()
            if self._in_flight:
                logging.info(f"Abandoning {len(self._in_flight)} running command(s)")
