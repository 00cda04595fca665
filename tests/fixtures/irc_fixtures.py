"""Fakes for the IRC connection and the aiohttp session."""

from __future__ import annotations

import asyncio
from typing import Any

from metarbot.irc.models import Message
from metarbot.irc.parser import parse_irc_message

OWNER_PREFIX = "alice!al@home.example.org"
STRANGER_PREFIX = "mallory!mal@evil.example.net"


def privmsg(target: str, text: str, prefix: str | None = OWNER_PREFIX) -> Message:
    """Build a parsed PRIVMSG as the server would deliver it."""
    head = f":{prefix} " if prefix else ""
    return parse_irc_message(f"{head}PRIVMSG {target} :{text}")


class FakeConnection:
    """Records outbound actions instead of writing to a socket."""

    def __init__(self, fail_on: set[str] | None = None):
        self.actions: list[tuple[Any, ...]] = []
        self.fail_on = fail_on or set()
        self.changed = asyncio.Event()

    def _record(self, *action: Any) -> None:
        if action[0] in self.fail_on:
            raise ConnectionResetError(f"{action[0]} rejected")
        self.actions.append(action)
        self.changed.set()

    async def quit(self, message: str | None = None) -> None:
        self._record("quit", message)

    async def part(self, channel: str, message: str | None = None) -> None:
        self._record("part", channel, message)

    async def join(self, channel: str) -> None:
        self._record("join", channel)

    async def send_privmsg(self, target: str, text: str) -> None:
        self._record("privmsg", target, text)

    async def send_notice(self, target: str, text: str) -> None:
        self._record("notice", target, text)

    async def wait_for_actions(self, count: int, timeout: float = 2.0) -> None:
        async def _wait() -> None:
            while len(self.actions) < count:
                self.changed.clear()
                await self.changed.wait()

        await asyncio.wait_for(_wait(), timeout)


class FakeResp:
    def __init__(self, status: int = 200, body: str = "", payload: Any = None, reason: str = "OK"):
        self.status = status
        self.reason = reason
        self._body = body
        self._payload = payload

    async def text(self) -> str:
        await asyncio.sleep(0)
        return self._body

    async def json(self, content_type: str | None = "application/json") -> Any:  # noqa: ARG002
        await asyncio.sleep(0)
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Stands in for aiohttp.ClientSession; serves queued responses."""

    def __init__(self):
        self.requests: list[tuple[str, dict[str, Any]]] = []
        self._queue: list[FakeResp | Exception] = []

    def queue(self, resp: FakeResp | Exception) -> None:
        self._queue.append(resp)

    def get(self, url: str, params=None, headers=None, timeout=None):
        self.requests.append((url, {"params": params, "headers": headers, "timeout": timeout}))
        resp = self._queue.pop(0)

        class _CM:
            async def __aenter__(self_inner):  # noqa: ANN001
                if isinstance(resp, Exception):
                    raise resp
                return resp

            async def __aexit__(self_inner, exc_type, exc, tb):  # noqa: ANN001
                return False

        return _CM()
