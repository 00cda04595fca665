"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass, field

CHANNEL_PREFIXES = "#&+!"


def is_channel_name(target: str) -> bool:
    return len(target) > 1 and target[0] in CHANNEL_PREFIXES


@dataclass(frozen=True, slots=True)
class ServerName:
    """Message prefix naming a server rather than a user."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Nickname:
    """User prefix, i.e. the ``nick!user@host`` identity of the sender."""

    nickname: str
    username: str = ""
    hostname: str = ""

    def __str__(self) -> str:
        text = self.nickname
        if self.username:
            text += f"!{self.username}"
        if self.hostname:
            text += f"@{self.hostname}"
        return text


Prefix = ServerName | Nickname


def parse_prefix(raw: str) -> Prefix:
    """Parse an IRC prefix.

    ``nick!user@host`` and its partial forms become a Nickname. A bare token
    containing a dot and no user/host separators is taken as a server name.
    """
    if "!" not in raw and "@" not in raw and "." in raw:
        return ServerName(raw)
    nick_user, _, host = raw.partition("@")
    nick, _, user = nick_user.partition("!")
    return Nickname(nick, user, host)


@dataclass(slots=True)
class Message:
    raw: str
    prefix: Prefix | None
    command: str
    params: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)

    def privmsg(self) -> tuple[str, str] | None:
        """Return ``(target, text)`` for a PRIVMSG, None for anything else."""
        if self.command != "PRIVMSG" or len(self.params) < 2:
            return None
        return self.params[0], self.params[1]

    def source_nickname(self) -> str | None:
        if isinstance(self.prefix, Nickname) and self.prefix.nickname:
            return self.prefix.nickname
        return None

    def response_target(self) -> str | None:
        """Where a reply to this message should go.

        Messages sent to a channel are answered in that channel; everything
        else is answered to the sender's nickname.
        """
        if self.command in ("PRIVMSG", "NOTICE") and self.params:
            target = self.params[0]
            if is_channel_name(target):
                return target
        return self.source_nickname()
