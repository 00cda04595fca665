"""Owner checks for privileged commands.

Owner rules are ``(nick, user, host)`` triples of shell glob patterns. An
empty field matches anything, but a rule with every field empty never
matches. Broken patterns fail closed: they are logged and treated as not
matching.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..config.model import OwnerRule
from ..errors.internal import PatternError
from ..irc.models import Nickname, Prefix, is_channel_name
from .response import Ignore, Notice, Response

if TYPE_CHECKING:  # pragma: no cover
    from .response import BotParameters


@functools.lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a shell glob into an anchored regular expression.

    Supports ``*``, ``?``, ``[abc]``, ``[a-z]`` and ``[!abc]``. A ``]``
    directly after the opening bracket (or ``[!``) is a literal member.
    ``**`` is only accepted as a whole ``/`` separated component.

    Raises:
        PatternError: On an unterminated class, a reversed range, a run of
            more than two ``*`` or a ``**`` inside a component.
    """
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "*":
            run_start = i
            while i + 1 < n and pattern[i + 1] == "*":
                i += 1
            run = i - run_start + 1
            if run > 2:
                raise PatternError(pattern, f"wildcard run of {run} '*' at {run_start}")
            if run == 2:
                bounded_left = run_start == 0 or pattern[run_start - 1] == "/"
                bounded_right = i + 1 == n or pattern[i + 1] == "/"
                if not (bounded_left and bounded_right):
                    raise PatternError(
                        pattern, f"recursive wildcard must be a whole component at {run_start}"
                    )
            out.append(".*")
        elif ch == "?":
            out.append(".")
        elif ch == "[":
            j = i + 1
            negate = j < n and pattern[j] == "!"
            if negate:
                j += 1
            start = j
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                raise PatternError(pattern, f"unterminated character class at {i}")
            members = _translate_class(pattern, pattern[start:j])
            out.append(f"[{'^' if negate else ''}{members}]")
            i = j
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("".join(out), re.DOTALL)


def _translate_class(pattern: str, body: str) -> str:
    parts: list[str] = []
    k = 0
    while k < len(body):
        if k + 2 < len(body) and body[k + 1] == "-":
            lo, hi = body[k], body[k + 2]
            if lo > hi:
                raise PatternError(pattern, f"invalid range {lo}-{hi}")
            parts.append(f"{re.escape(lo)}-{re.escape(hi)}")
            k += 3
        else:
            parts.append(re.escape(body[k]))
            k += 1
    return "".join(parts)


def matches(pattern: str, value: str) -> bool:
    """Case-sensitive glob match of ``value`` against ``pattern``."""
    try:
        regex = compile_pattern(pattern)
    except PatternError as e:
        logging.warning(f"⚠️ Failed to compile pattern '{pattern}': {e.reason}")
        return False
    return regex.fullmatch(value) is not None


def _rule_matches(rule: OwnerRule, identity: Nickname) -> bool:
    for pattern, value in zip(rule, (identity.nickname, identity.username, identity.hostname)):
        if pattern and not matches(pattern, value):
            return False
    return True


def is_owner(prefix: Prefix | None, owners: Iterable[OwnerRule]) -> bool:
    """Whether the sender identified by ``prefix`` matches any owner rule.

    Rules are checked in order and the first full match wins.
    """
    if not isinstance(prefix, Nickname):
        return False
    for rule in owners:
        if rule.is_inert():
            continue
        if _rule_matches(rule, prefix):
            return True
    return False


def ensure_owner(command: str, params: BotParameters) -> Response | None:
    """Return None if the invoker may run ``command``, else the denial response.

    Denial is a notice to the invoker, or Ignore when the message carries
    no nickname to send it to.
    """
    message = params.message
    if is_owner(message.prefix, params.owners):
        return None
    source_nickname = message.source_nickname()
    logging.info(
        f"🚫 Denied {command} for {message.prefix if message.prefix else 'unknown sender'}"
    )
    if source_nickname:
        return Notice(
            source_nickname, f"You are not authorized to use the {command} command"
        )
    return Ignore()


def is_public(target: str) -> bool:
    """True if ``target`` is a channel rather than a nickname."""
    return is_channel_name(target)
