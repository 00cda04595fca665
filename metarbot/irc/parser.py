"""IRC message parsing utilities."""

from __future__ import annotations

from .models import Message, parse_prefix

_TAG_ESCAPES = {":": ";", "s": " ", "\\": "\\", "r": "\r", "n": "\n"}


def parse_irc_message(raw_line: str) -> Message:
    tags: dict[str, str] = {}
    prefix = None
    trailing: str | None = None

    line = raw_line.rstrip("\r\n")

    if line.startswith("@"):
        tags_part, _, line = line.partition(" ")
        tags = _parse_tags(tags_part[1:])
        line = line.lstrip(" ")

    if line.startswith(":"):
        # Malformed lines may omit the space after the prefix
        remainder = line[1:]
        if " " in remainder:
            raw_prefix, line = remainder.split(" ", 1)
        else:
            raw_prefix, line = remainder, ""
        prefix = parse_prefix(raw_prefix)

    if line.startswith(":"):
        line, trailing = "", line[1:]
    elif " :" in line:
        line, trailing = line.split(" :", 1)

    parts = line.split()
    command = parts[0].upper() if parts else ""
    params = parts[1:]
    if trailing is not None:
        params.append(trailing)

    return Message(raw=raw_line, prefix=prefix, command=command, params=params, tags=tags)


def _parse_tags(raw_tags: str) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag in raw_tags.split(";"):
        if not tag:
            continue
        k, _, v = tag.partition("=")
        tags[k] = _unescape_tag_value(v)
    return tags


def _unescape_tag_value(value: str) -> str:
    if "\\" not in value:
        return value
    out: list[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == "\\" and i + 1 < len(value):
            out.append(_TAG_ESCAPES.get(value[i + 1], value[i + 1]))
            i += 2
            continue
        if ch != "\\":
            out.append(ch)
        i += 1
    return "".join(out)


def format_line(command: str, *params: str | None) -> str:
    """Build a single IRC line; the last parameter is sent as trailing.

    None parameters are skipped. CR/LF in parameters are replaced by spaces
    so a parameter can never start a second command.
    """
    args = [_strip_newlines(p) for p in params if p is not None]
    if not args:
        return command
    *middle, last = args
    return " ".join([command, *middle, f":{last}"])


def _strip_newlines(value: str) -> str:
    return value.replace("\r", " ").replace("\n", " ")
