"""JSON text parsing and encoding of values."""

from __future__ import annotations

import json
from typing import Any

from .values import from_json, to_json


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def parse(text: str) -> Any:
    """Parse JSON text into a value; raises ValueError on malformed input."""
    if not isinstance(text, str):
        raise TypeError("json.parse expects Str")
    return from_json(json.loads(text, parse_constant=_reject_constant))


def encode(value: Any) -> str:
    """Encode a value as compact JSON text."""
    return json.dumps(to_json(value), separators=(",", ":"), ensure_ascii=False)


def encode_pretty(value: Any) -> str:
    """Encode a value as indented JSON text."""
    return json.dumps(to_json(value), indent=2, ensure_ascii=False)