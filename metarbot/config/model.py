from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..constants import DEFAULT_LEADER
from ..irc.models import CHANNEL_PREFIXES


class OwnerRule(NamedTuple):
    """Glob patterns matched against the sender's (nick, user, host).

    An empty field matches anything; a rule with all fields empty is inert.
    """

    nickname: str = ""
    username: str = ""
    hostname: str = ""

    @classmethod
    def parse(cls, raw: str) -> OwnerRule:
        """Parse ``nick!user@host``; missing parts are left empty."""
        nick_user, _, host = raw.strip().partition("@")
        nick, _, user = nick_user.partition("!")
        return cls(nick, user, host)

    def is_inert(self) -> bool:
        return not (self.nickname or self.username or self.hostname)


def parse_owner_rules(raw: str | None) -> tuple[OwnerRule, ...]:
    """Parse a ``;`` separated list of owner rules."""
    if not raw:
        return ()
    return tuple(OwnerRule.parse(part) for part in raw.split(";") if part.strip())


def _normalize_channel(channel: str) -> str:
    stripped = channel.strip()
    if stripped and stripped[0] not in CHANNEL_PREFIXES:
        return f"#{stripped}"
    return stripped


class BotConfig(BaseModel):
    """Connection settings plus the free-form command options.

    Attributes:
        server: IRC server host name.
        port: IRC server port.
        use_tls: Whether to wrap the connection in TLS.
        nickname: Nickname to register with.
        username: User name sent with USER (defaults to the nickname).
        realname: Real name sent with USER.
        password: Optional server password (PASS).
        channels: Channels joined once registration completes.
        options: String options read by commands (leader, owners, API keys).
    """

    model_config = ConfigDict(frozen=True)

    server: str = Field(min_length=1)
    port: int = Field(default=6697, ge=1, le=65535)
    use_tls: bool = True
    nickname: str = Field(min_length=1, max_length=30)
    username: str = ""
    realname: str = "metarbot"
    password: str | None = None
    channels: tuple[str, ...] = ()
    options: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def default_username(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and not data.get("username"):
            data = dict(data)
            data["username"] = data.get("nickname", "")
        return data

    @field_validator("nickname", "username")
    @classmethod
    def validate_no_whitespace(cls, v: str) -> str:
        if any(ch.isspace() for ch in v):
            raise ValueError("must not contain whitespace")
        return v

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> tuple[str, ...]:
        """Strip whitespace, add a leading '#' where missing and deduplicate."""
        if not isinstance(v, list | tuple):
            raise ValueError("channels must be a list")
        validated = [_normalize_channel(c) for c in v if isinstance(c, str)]
        return tuple(dict.fromkeys(c for c in validated if c))

    @field_validator("options", mode="before")
    @classmethod
    def validate_options(cls, v: Any) -> dict[str, str]:
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise ValueError("options must be a mapping")
        return {str(k): str(val) for k, val in v.items() if val is not None}

    @property
    def leaders(self) -> str:
        """Leader characters accepted in channels, in configured order."""
        raw = "".join(self.options.get("leader", "").split())
        return "".join(dict.fromkeys(raw)) or DEFAULT_LEADER

    def owner_rules(self) -> tuple[OwnerRule, ...]:
        return parse_owner_rules(self.options.get("owners"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BotConfig:
        return cls.model_validate(dict(data))
