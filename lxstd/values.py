"""The value model shared by the library and its conversion to and from JSON data."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


@dataclass(frozen=True)
class Err:
    """An error carried as a value rather than raised."""

    value: Any


@dataclass(frozen=True)
class Tagged:
    """A variant value: a tag with positional payload values."""

    tag: str
    values: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))


class EncodeError(ValueError):
    """Raised when a value cannot be represented as JSON."""


def type_name(value: Any) -> str:
    """Return the name of the kind of value, as used in error messages."""
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "Bool"
    if isinstance(value, int):
        return "Int"
    if isinstance(value, float):
        return "Float"
    if isinstance(value, str):
        return "Str"
    if isinstance(value, list):
        return "List"
    if isinstance(value, tuple):
        return "Tuple"
    if isinstance(value, dict):
        return "Record" if all(isinstance(k, str) for k in value) else "Map"
    if isinstance(value, Err):
        return "Err"
    if isinstance(value, Tagged):
        return "Tagged"
    if isinstance(value, re.Pattern):
        return "Regex"
    if callable(value):
        return "Func"
    return type(value).__name__


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def to_json(value: Any) -> Any:
    """Convert a value into plain JSON-compatible data."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if not I64_MIN <= value <= I64_MAX:
            raise EncodeError("json: Int too large for JSON")
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EncodeError("json: NaN/Infinity not representable in JSON")
        return value
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return [to_json(item) for item in value]
    if isinstance(value, dict):
        return {_key_text(k): to_json(v) for k, v in value.items()}
    if isinstance(value, Err):
        return {"error": to_json(value.value)}
    if isinstance(value, Tagged):
        return {"tag": value.tag, "values": [to_json(v) for v in value.values]}
    raise EncodeError(f"json: cannot encode {type_name(value)}")


def from_json(data: Any) -> Any:
    """Convert decoded JSON data into a value."""
    if data is None or isinstance(data, (bool, str, float)):
        return data
    if isinstance(data, int):
        return data if I64_MIN <= data <= I64_MAX else float(data)
    if isinstance(data, list):
        return [from_json(item) for item in data]
    if isinstance(data, dict):
        return {str(k): from_json(v) for k, v in data.items()}
    raise TypeError(f"not JSON data: {type(data).__name__}")