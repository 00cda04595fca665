"""Command abstraction and the trigger registry."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from ..errors.internal import DuplicateTriggerError
from .response import BotParameters, Response


class BotCommand(ABC):
    """A command the bot reacts to.

    Subclasses name a single-word ``trigger`` and implement ``handle``.
    Failures are raised as ``BotError`` subclasses.
    """

    @property
    @abstractmethod
    def trigger(self) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def handle(self, params: BotParameters) -> Response:  # pragma: no cover - interface
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} trigger={self.trigger!r}>"


class CommandRegistry(Mapping[str, BotCommand]):
    """Read-only mapping of lower-cased trigger to command."""

    def __init__(self, commands: Mapping[str, BotCommand]):
        self._commands = MappingProxyType(dict(commands))

    def __getitem__(self, trigger: str) -> BotCommand:
        return self._commands[trigger.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, trigger: object) -> bool:
        return isinstance(trigger, str) and trigger.lower() in self._commands

    def get(self, trigger: str, default: BotCommand | None = None) -> BotCommand | None:  # type: ignore[override]
        return self._commands.get(trigger.lower(), default)

    def triggers(self) -> list[str]:
        return sorted(self._commands)


class RegistryBuilder:
    """Collects command groups and produces an immutable CommandRegistry.

    Registering a trigger twice is a programming error and raises
    DuplicateTriggerError.
    """

    def __init__(self) -> None:
        self._commands: dict[str, BotCommand] = {}

    def add(self, command: BotCommand) -> RegistryBuilder:
        trigger = command.trigger.lower()
        if not trigger or any(ch.isspace() for ch in trigger):
            raise ValueError(f"Invalid trigger {command.trigger!r} for {command!r}")
        if trigger in self._commands:
            raise DuplicateTriggerError(trigger)
        self._commands[trigger] = command
        return self

    def add_group(self, commands: Iterable[BotCommand]) -> RegistryBuilder:
        for command in commands:
            self.add(command)
        return self

    def build(self) -> CommandRegistry:
        registry = CommandRegistry(self._commands)
        logging.info(f"🧩 Registered commands: {', '.join(registry.triggers())}")
        return registry
