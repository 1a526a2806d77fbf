"""Regular-expression helpers accepting a pattern string or a compiled pattern.

Replacement templates use `$1`, `$name`, `${name}` and `$$` references.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple, Union

from .values import type_name

Pattern = Union[str, "re.Pattern[str]"]

_REFERENCE = re.compile(r"\$(?:(\$)|\{([^}]+)\}|([_0-9A-Za-z]+))")


@dataclass(frozen=True)
class RegexMatch:
    """A match: its text and its UTF-8 byte offsets in the input."""

    text: str
    start: int
    end: int


class _GroupRef(NamedTuple):
    key: Union[int, str]


def _compile(pattern: Pattern) -> re.Pattern:
    if isinstance(pattern, re.Pattern):
        return pattern
    if isinstance(pattern, str):
        try:
            return re.compile(pattern)
        except re.error as exc:
            raise ValueError(f"re: invalid pattern: {exc}") from exc
    raise TypeError(f"re: expected Regex or Str pattern, got {type_name(pattern)}")


def _require_str(value: object, message: str) -> str:
    if not isinstance(value, str):
        raise TypeError(message)
    return value


def _byte_offset(text: str, index: int) -> int:
    return len(text[:index].encode("utf-8"))


def _expander(template: str):
    pieces: list = []
    last = 0
    for ref in _REFERENCE.finditer(template):
        pieces.append(template[last : ref.start()])
        if ref.group(1):
            pieces.append("$")
        else:
            name = ref.group(2) or ref.group(3)
            key = int(name) if name.isascii() and name.isdigit() else name
            pieces.append(_GroupRef(key))
        last = ref.end()
    pieces.append(template[last:])

    def group_text(m: re.Match, key) -> str:
        try:
            return m.group(key) or ""
        except IndexError:
            return ""

    def expand(m: re.Match) -> str:
        return "".join(
            group_text(m, p.key) if isinstance(p, _GroupRef) else p for p in pieces
        )

    return expand


def match(pattern: Pattern, text: str) -> RegexMatch | None:
    """Return the first match in text, or None."""
    regex = _compile(pattern)
    _require_str(text, "re.match expects Str input")
    found = regex.search(text)
    if found is None:
        return None
    return RegexMatch(
        text=found.group(0),
        start=_byte_offset(text, found.start()),
        end=_byte_offset(text, found.end()),
    )


def find_all(pattern: Pattern, text: str) -> list[str]:
    """Return the text of every non-overlapping match."""
    regex = _compile(pattern)
    _require_str(text, "re.find_all expects Str input")
    return [m.group(0) for m in regex.finditer(text)]


def replace(pattern: Pattern, replacement: str, text: str) -> str:
    """Replace the first match."""
    regex = _compile(pattern)
    _require_str(replacement, "re.replace expects Str replacement")
    _require_str(text, "re.replace expects Str input")
    return regex.sub(_expander(replacement), text, count=1)


def replace_all(pattern: Pattern, replacement: str, text: str) -> str:
    """Replace every match."""
    regex = _compile(pattern)
    _require_str(replacement, "re.replace_all expects Str replacement")
    _require_str(text, "re.replace_all expects Str input")
    return regex.sub(_expander(replacement), text)


def split(pattern: Pattern, text: str) -> list[str]:
    """Split text around matches; capture groups are not included."""
    regex = _compile(pattern)
    _require_str(text, "re.split expects Str input")
    parts = []
    last = 0
    for m in regex.finditer(text):
        parts.append(text[last : m.start()])
        last = m.end()
    parts.append(text[last:])
    return parts


def is_match(pattern: Pattern, text: str) -> bool:
    """Whether the pattern matches anywhere in text."""
    regex = _compile(pattern)
    _require_str(text, "re.is_match expects Str input")
    return regex.search(text) is not None