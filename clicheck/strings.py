"""String helpers used for option names, help text and validator output."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from typing import Any

WHITESPACE = " \t\n\v\f\r"
QUOTE_CHARS = "'\"`"
_WHITESPACE_RE = re.compile(r"[ \t\n\v\f\r]")


def split(text: str, delim: str) -> list[str]:
    """Split ``text`` on ``delim``; a trailing delimiter adds no empty item.

    An empty string gives a single empty item.
    """
    if not text:
        return [""]
    parts = text.split(delim)
    if len(parts) > 1 and parts[-1] == "":
        parts.pop()
    return parts


def join(items: Iterable[Any], delim: str = ",", key: Callable[[Any], Any] | None = None) -> str:
    """Join items as strings, optionally passing each through ``key`` first."""
    convert = key if key is not None else (lambda item: item)
    return delim.join(str(convert(item)) for item in items)


def rjoin(items: Sequence[Any], delim: str = ",") -> str:
    """Join items in reverse order."""
    return delim.join(str(item) for item in reversed(items))


def ltrim(text: str, chars: str | None = None) -> str:
    """Strip whitespace, or any of ``chars``, from the left."""
    return text.lstrip(WHITESPACE if chars is None else chars)


def rtrim(text: str, chars: str | None = None) -> str:
    """Strip whitespace, or any of ``chars``, from the right."""
    return text.rstrip(WHITESPACE if chars is None else chars)


def trim(text: str, chars: str | None = None) -> str:
    """Strip whitespace, or any of ``chars``, from both ends."""
    return ltrim(rtrim(text, chars), chars)


def format_help(name: str, description: str, width: int) -> str:
    """Lay out a two-column help line: name padded to ``width``, then description."""
    name = "  " + name
    out = name.ljust(width)
    if description:
        pad = " " * width
        if len(name) >= width:
            out += "\n" + pad
        out += description.replace("\n", "\n" + pad)
    return out + "\n"


def valid_first_char(char: str) -> bool:
    """Return True if ``char`` may start an option name."""
    return (char.isascii() and char.isalnum()) or char in ("_", "?", "@")


def valid_later_char(char: str) -> bool:
    """Return True if ``char`` may appear after the first character of a name."""
    return valid_first_char(char) or char in (".", "-")


def valid_name_string(text: str) -> bool:
    """Return True if ``text`` is a valid option name."""
    if not text or not valid_first_char(text[0]):
        return False
    return all(valid_later_char(char) for char in text[1:])


def is_alpha(text: str) -> bool:
    """Return True if ``text`` holds ASCII letters only (empty counts)."""
    return all(char.isascii() and char.isalpha() for char in text)


def to_lower(text: str) -> str:
    """Return a lower-case copy of ``text``."""
    return text.lower()


def remove_underscore(text: str) -> str:
    """Return ``text`` with all underscores removed."""
    return text.replace("_", "")


def find_and_replace(text: str, old: str, new: str) -> str:
    """Replace every occurrence of ``old`` with ``new``."""
    return text.replace(old, new)


def has_default_flag_values(flags: str) -> bool:
    """Return True if a flag definition carries ``{value}`` or ``!`` markers."""
    return "{" in flags or "!" in flags


def remove_default_flag_values(flags: str) -> str:
    """Strip ``{value}`` groups and ``!`` markers from a flag definition."""
    loc = flags.find("{")
    while loc != -1:
        match = re.compile(r"[},]").search(flags, loc + 1)
        if match is not None and match.group() == "}":
            flags = flags[:loc] + flags[match.end():]
        loc = flags.find("{", loc + 1)
    return flags.replace("!", "")


def find_member(
    name: str,
    names: Sequence[str],
    ignore_case: bool = False,
    ignore_underscore: bool = False,
) -> int:
    """Return the index of ``name`` in ``names``, or -1 if absent."""

    def normalise(value: str) -> str:
        if ignore_underscore:
            value = remove_underscore(value)
        if ignore_case:
            value = to_lower(value)
        return value

    target = normalise(name)
    return next((index for index, item in enumerate(names) if normalise(item) == target), -1)


def find_and_modify(
    text: str, trigger: str, modify: Callable[[str, int], tuple[str, int]]
) -> str:
    """Call ``modify(text, pos)`` at each occurrence of ``trigger``.

    ``modify`` returns the updated text and the position to search from next.
    """
    pos = text.find(trigger)
    while pos != -1:
        text, start = modify(text, pos)
        pos = text.find(trigger, start)
    return text


def split_up(text: str) -> list[str]:
    """Split on whitespace, keeping quoted (``'``, ``"`` or backtick) runs together."""
    text = trim(text)
    output: list[str] = []
    while text:
        if text[0] in QUOTE_CHARS:
            key = text[0]
            embedded = False
            end = text.find(key, 1)
            while end != -1 and text[end - 1] == "\\":
                end = text.find(key, end + 1)
                embedded = True
            if end != -1:
                item, text = text[1:end], text[end + 1:]
            else:
                item, text = text[1:], ""
            if embedded:
                item = item.replace("\\" + key, key)
        else:
            match = _WHITESPACE_RE.search(text)
            if match is not None:
                item, text = text[: match.start()], text[match.start():]
            else:
                item, text = text, ""
        output.append(item)
        text = trim(text)
    return output


def fix_newlines(leader: str, text: str) -> str:
    """Insert ``leader`` after every newline."""
    return text.replace("\n", "\n" + leader)


def escape_detect(text: str, offset: int) -> tuple[str, int]:
    """Turn ``--opt="x"`` or ``/opt:"x"`` separators at ``offset`` into a space.

    Returns the possibly modified text and ``offset + 1``.
    """
    following = text[offset + 1] if offset + 1 < len(text) else ""
    if following and following in QUOTE_CHARS:
        region = text if offset == 0 else text[:offset]
        astart = max(region.rfind(char) for char in "-/ \"'`")
        if astart != -1:
            expected = "-" if text[offset] == "=" else "/"
            if text[astart] == expected:
                text = text[:offset] + " " + text[offset + 1:]
    return text, offset + 1


def add_quotes_if_needed(text: str) -> str:
    """Wrap ``text`` in quotes if it holds a space and is not already quoted."""
    if not text:
        return text
    if text[0] not in ("'", '"') or text[0] != text[-1]:
        double_at = text.find('"')
        single_at = text.find("'")
        absent = len(text) + 1
        double_at = absent if double_at == -1 else double_at
        single_at = absent if single_at == -1 else single_at
        quote = "'" if double_at < single_at else '"'
        if " " in text:
            text = quote + text + quote
    return text