"""Immutable record helpers with JSON file persistence."""

from __future__ import annotations

import os
from typing import Any

from . import jsonio
from .values import type_name


def _require_key(key: Any, op: str) -> str:
    if not isinstance(key, str):
        raise TypeError(f"ctx.{op} expects Str key")
    return key


def _require_record(record: Any, op: str) -> dict:
    if not isinstance(record, dict):
        raise TypeError(f"ctx.{op} expects Record, got {type_name(record)}")
    return record


def empty() -> dict:
    """Return a new empty record."""
    return {}


def load(path: str | os.PathLike) -> Any:
    """Read a JSON file into a value."""
    with open(path, encoding="utf-8") as handle:
        contents = handle.read()
    try:
        return jsonio.parse(contents)
    except ValueError as exc:
        raise ValueError(f"ctx.load: invalid JSON: {exc}") from exc


def save(path: str | os.PathLike, record: Any) -> None:
    """Write a value to a file as indented JSON."""
    text = jsonio.encode_pretty(record)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)


def get(key: str, record: dict) -> Any:
    """Return the value stored under key, or None."""
    _require_key(key, "get")
    return _require_record(record, "get").get(key)


def with_key(key: str, value: Any, record: dict) -> dict:
    """Return a copy of record with key set to value."""
    _require_key(key, "set")
    updated = dict(_require_record(record, "set"))
    updated[key] = value
    return updated


def without_key(key: str, record: dict) -> dict:
    """Return a copy of record without key."""
    _require_key(key, "remove")
    updated = dict(_require_record(record, "remove"))
    updated.pop(key, None)
    return updated


def keys(record: dict) -> list[str]:
    """Return the record's keys in order."""
    return list(_require_record(record, "keys"))


def merge(a: dict, b: dict) -> dict:
    """Return a new record with b's fields laid over a's."""
    if not isinstance(a, dict) or not isinstance(b, dict):
        raise TypeError(
            f"ctx.merge expects two Records, got {type_name(a)} and {type_name(b)}"
        )
    return {**a, **b}