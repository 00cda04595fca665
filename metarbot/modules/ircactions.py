"""Standard IRC actions: join, part and quit. Owners only."""

from __future__ import annotations

import aiohttp

from ..bot.auth import ensure_owner, is_public
from ..bot.command import BotCommand
from ..bot.response import BotParameters, Ignore, Join, Part, Quit, Response
from ..errors.internal import NoChannelToPart


def mk(http: aiohttp.ClientSession | None = None) -> list[BotCommand]:
    """Create the commands of this module."""
    _ = http  # no outbound HTTP here
    return [IrcJoinCommand(), IrcPartCommand(), IrcQuitCommand()]


class IrcJoinCommand(BotCommand):
    trigger = "join"

    async def handle(self, params: BotParameters) -> Response:
        if (denied := ensure_owner(self.trigger, params)) is not None:
            return denied
        if not params.args:
            return Ignore()
        return Join(params.args[0])


class IrcPartCommand(BotCommand):
    """Part the named channel, or the current one when none is given.

    Words after the channel are used as the part message.
    """

    trigger = "part"

    async def handle(self, params: BotParameters) -> Response:
        if (denied := ensure_owner(self.trigger, params)) is not None:
            return denied
        if params.args:
            channel = params.args[0]
        else:
            response_target = params.message.response_target()
            if response_target is None or not is_public(response_target):
                raise NoChannelToPart()
            channel = response_target
        comment = " ".join(params.args[1:]) or None
        return Part(channel, comment)


class IrcQuitCommand(BotCommand):
    trigger = "quit"

    async def handle(self, params: BotParameters) -> Response:
        if (denied := ensure_owner(self.trigger, params)) is not None:
            return denied
        return Quit(" ".join(params.args) or None)
