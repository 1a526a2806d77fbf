"""A tiered memory store with keyword recall, mirrored to a JSON file.

Entries gain confidence and climb tiers when confirmed, and lose both when
contradicted. Tiers run from 0 (unverified) to 3 (settled).
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union

from . import jsonio

PathArg = Union[str, "os.PathLike[str]"]

DEFAULT_CONFIDENCE = 0.3


@dataclass
class MemoryEntry:
    """One remembered item."""

    id: str
    content: str
    tier: int = 0
    confidence: float = DEFAULT_CONFIDENCE
    tags: list[str] = field(default_factory=list)
    created_at: str = ""
    confirmed: int = 0
    contradicted: int = 0

    def to_record(self) -> dict:
        """The entry as a plain record."""
        return {
            "id": self.id,
            "content": self.content,
            "tier": self.tier,
            "confidence": self.confidence,
            "tags": list(self.tags),
            "created_at": self.created_at,
            "confirmed": self.confirmed,
            "contradicted": self.contradicted,
        }


@dataclass(frozen=True)
class ConsolidationReport:
    """How many entries a consolidation pass promoted, demoted and removed."""

    promoted: int
    demoted: int
    removed: int


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _int_or(value: Any, default: int) -> int:
    return value if _is_int(value) else default


def _float_or(value: Any, default: float) -> float:
    if isinstance(value, float) or _is_int(value):
        return float(value)
    return default


def _str_list(value: Any) -> list[str]:
    if isinstance(value, list):
        return [v for v in value if isinstance(v, str)]
    return []


def _copy(entry: MemoryEntry) -> MemoryEntry:
    return dataclasses.replace(entry, tags=list(entry.tags))


def _require_id(entry_id: Any, op: str) -> str:
    if not isinstance(entry_id, str):
        raise TypeError(f"memory.{op}: id must be Str")
    return entry_id


def _load(path: str) -> tuple[dict[str, MemoryEntry], int]:
    entries: dict[str, MemoryEntry] = {}
    if not os.path.exists(path):
        return entries, 1
    with open(path, encoding="utf-8") as handle:
        content = handle.read()
    try:
        data = jsonio.parse(content)
    except ValueError as exc:
        raise ValueError(f"memory: JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ValueError("memory: expected JSON array")
    next_id = 0
    for item in data:
        if not isinstance(item, dict):
            continue
        entry_id = item.get("id")
        entry_id = entry_id if isinstance(entry_id, str) else "0"
        if entry_id.isascii() and entry_id.isdigit():
            number = int(entry_id)
            if number >= next_id:
                next_id = number + 1
        text = item.get("content")
        created = item.get("created_at")
        entries[entry_id] = MemoryEntry(
            id=entry_id,
            content=text if isinstance(text, str) else "",
            tier=_int_or(item.get("tier"), 0),
            confidence=_float_or(item.get("confidence"), 0.0),
            tags=_str_list(item.get("tags")),
            created_at=created if isinstance(created, str) else "",
            confirmed=_int_or(item.get("confirmed"), 0),
            contradicted=_int_or(item.get("contradicted"), 0),
        )
    return entries, next_id


class MemoryStore:
    """Memory entries by id; every change is written back to the file."""

    def __init__(self, path: PathArg) -> None:
        if not isinstance(path, (str, os.PathLike)):
            raise TypeError("memory.create expects Str path")
        self.path = os.fspath(path)
        self._entries, self._next_id = _load(self.path)

    def _persist(self) -> None:
        text = jsonio.encode_pretty([e.to_record() for e in self._entries.values()])
        with open(self.path, "w", encoding="utf-8") as handle:
            handle.write(text)

    def _entry(self, entry_id: str) -> MemoryEntry:
        try:
            return self._entries[entry_id]
        except KeyError:
            raise KeyError(f"memory: entry '{entry_id}' not found") from None

    def store(
        self,
        content: str,
        tier: int = 0,
        confidence: float = DEFAULT_CONFIDENCE,
        tags: Optional[list[str]] = None,
    ) -> str:
        """Remember content and return the new entry's id."""
        if not isinstance(content, str):
            raise TypeError("memory.store: missing 'content'")
        entry_id = str(self._next_id)
        self._next_id += 1
        self._entries[entry_id] = MemoryEntry(
            id=entry_id,
            content=content,
            tier=_int_or(tier, 0),
            confidence=_float_or(confidence, DEFAULT_CONFIDENCE),
            tags=_str_list(tags),
            created_at=_now(),
        )
        self._persist()
        return entry_id

    def recall(self, query: str) -> list[MemoryEntry]:
        """Entries sharing keywords (over two bytes long) with query, best first."""
        if not isinstance(query, str):
            raise TypeError("memory.recall: query must be Str")
        keywords = [w for w in query.lower().split() if len(w.encode("utf-8")) > 2]
        scored: list[tuple[float, MemoryEntry]] = []
        for entry in self._entries.values():
            lowered = entry.content.lower()
            hits = sum(1 for kw in keywords if kw in lowered)
            if hits == 0:
                continue
            score = (
                hits / max(len(keywords), 1)
                + entry.tier * 0.1
                + entry.confidence * 0.1
            )
            scored.append((score, entry))
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [_copy(entry) for _, entry in scored]

    def promote(self, entry_id: str) -> None:
        """Record a confirmation: raise confidence and possibly the tier."""
        entry = self._entry(_require_id(entry_id, "promote"))
        entry.confirmed += 1
        entry.confidence = min(entry.confidence + 0.15, 1.0)
        if entry.confidence >= 0.7 and entry.tier < 2:
            entry.tier += 1
        elif entry.confidence >= 0.95 and entry.tier < 3:
            entry.tier = 3
        self._persist()

    def demote(self, entry_id: str) -> None:
        """Record a contradiction: lower confidence and possibly the tier."""
        entry = self._entry(_require_id(entry_id, "demote"))
        entry.contradicted += 1
        entry.confidence = max(entry.confidence - 0.2, 0.0)
        if entry.confidence < 0.3 and entry.tier > 0:
            entry.tier -= 1
        self._persist()

    def forget(self, entry_id: str) -> None:
        """Drop an entry, if present."""
        self._entries.pop(_require_id(entry_id, "forget"), None)
        self._persist()

    def consolidate(self) -> ConsolidationReport:
        """Settle tiers from confirmation counts and drop discredited entries."""
        promoted = demoted = 0
        removed: list[str] = []
        for entry_id, entry in self._entries.items():
            if entry.confirmed >= 3 and entry.tier < 3:
                entry.tier += 1
                entry.confidence = min(entry.confidence + 0.1, 1.0)
                promoted += 1
            if entry.contradicted >= 2 and entry.tier > 0:
                entry.tier -= 1
                entry.confidence = max(entry.confidence - 0.1, 0.0)
                demoted += 1
            if entry.confidence <= 0.0 and entry.contradicted > entry.confirmed:
                removed.append(entry_id)
        for entry_id in removed:
            del self._entries[entry_id]
        self._persist()
        return ConsolidationReport(promoted, demoted, len(removed))

    def tier(self, level: int) -> list[MemoryEntry]:
        """Entries at exactly the given tier."""
        if not _is_int(level):
            raise TypeError("memory.tier: level must be Int")
        return [_copy(e) for e in self._entries.values() if e.tier == level]

    def entries(self) -> list[MemoryEntry]:
        """All entries in insertion order."""
        return [_copy(e) for e in self._entries.values()]