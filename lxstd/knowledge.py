"""A keyed knowledge base kept in memory and mirrored to a JSON file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Union

from . import jsonio

PathArg = Union[str, "os.PathLike[str]"]


@dataclass
class KnowledgeEntry:
    """A stored value with its metadata and the time it was stored."""

    key: str
    val: Any = None
    meta: Any = field(default_factory=dict)
    stored_at: str = ""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _record(entry: KnowledgeEntry) -> dict:
    return {
        "key": entry.key,
        "val": entry.val,
        "meta": entry.meta,
        "stored_at": entry.stored_at,
    }


def _require_key(key: Any, op: str) -> str:
    if not isinstance(key, str):
        raise TypeError(f"knowledge.{op}: key must be Str")
    return key


def _load(path: str) -> dict[str, KnowledgeEntry]:
    entries: dict[str, KnowledgeEntry] = {}
    if not os.path.exists(path):
        return entries
    with open(path, encoding="utf-8") as handle:
        content = handle.read()
    try:
        data = jsonio.parse(content)
    except ValueError as exc:
        raise ValueError(f"knowledge: JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ValueError("knowledge: expected JSON array")
    for item in data:
        if not isinstance(item, dict):
            continue
        key = item.get("key")
        key = key if isinstance(key, str) else ""
        stored_at = item.get("stored_at")
        entries[key] = KnowledgeEntry(
            key=key,
            val=item.get("val"),
            meta=item.get("meta", {}),
            stored_at=stored_at if isinstance(stored_at, str) else "",
        )
    return entries


class KnowledgeBase:
    """Entries by key; every change is written back to the file."""

    def __init__(self, path: PathArg) -> None:
        if not isinstance(path, (str, os.PathLike)):
            raise TypeError("knowledge.create expects Str path")
        self.path = os.fspath(path)
        self._entries = _load(self.path)

    def _persist(self) -> None:
        text = jsonio.encode_pretty([_record(e) for e in self._entries.values()])
        with open(self.path, "w", encoding="utf-8") as handle:
            handle.write(text)

    def store(self, key: str, val: Any, meta: Any) -> None:
        """Store a value under key, stamped with the current time."""
        _require_key(key, "store")
        self._entries[key] = KnowledgeEntry(key, val, meta, _now())
        self._persist()

    def get(self, key: str) -> Optional[KnowledgeEntry]:
        """The entry under key, or None."""
        _require_key(key, "get")
        return self._entries.get(key)

    def query(self, predicate: Callable[[KnowledgeEntry], Any]) -> list[KnowledgeEntry]:
        """Entries, in order, for which predicate returns True."""
        return [e for e in self._entries.values() if predicate(e) is True]

    def keys(self) -> list[str]:
        """All keys in insertion order."""
        return list(self._entries)

    def remove(self, key: str) -> None:
        """Drop the entry under key, if any."""
        _require_key(key, "remove")
        self._entries.pop(key, None)
        self._persist()

    def merge(self, other: KnowledgeBase) -> None:
        """Copy every entry of other into this base, overwriting equal keys."""
        if not isinstance(other, KnowledgeBase):
            raise TypeError("knowledge: expected KB")
        for key, entry in list(other._entries.items()):
            self._entries[key] = KnowledgeEntry(
                entry.key, entry.val, entry.meta, entry.stored_at
            )
        self._persist()

    def expire(self, before: str) -> None:
        """Drop entries stored earlier than the given timestamp text."""
        if not isinstance(before, str):
            raise TypeError("knowledge.expire: timestamp must be Str")
        self._entries = {
            k: e for k, e in self._entries.items() if e.stored_at >= before
        }
        self._persist()