"""Command provider groups.

Each provider is a factory ``mk(http) -> list[BotCommand]``; the registry is
built once at startup from all of them.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

import aiohttp

from ..bot.command import BotCommand, CommandRegistry, RegistryBuilder
from . import ircactions, metar, weather

Provider = Callable[[aiohttp.ClientSession], list[BotCommand]]

PROVIDERS: tuple[Provider, ...] = (ircactions.mk, metar.mk, weather.mk)


def build_registry(
    http: aiohttp.ClientSession, providers: Iterable[Provider] = PROVIDERS
) -> CommandRegistry:
    builder = RegistryBuilder()
    for provider in providers:
        builder.add_group(provider(http))
    return builder.build()


__all__ = ["PROVIDERS", "Provider", "build_registry"]
