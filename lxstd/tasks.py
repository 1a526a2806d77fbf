"""A task store with a review workflow, optionally mirrored to a JSON file.

A task moves through: todo -> in_progress -> submitted -> pending_audit ->
passed -> complete, with pending_audit -> failed -> revision -> submitted
as the rework loop.
"""

from __future__ import annotations

import itertools
import os
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Union

from . import jsonio

PathArg = Union[str, "os.PathLike[str]"]

_TASK_IDS = itertools.count(1)
_PROTECTED = frozenset({"id", "status", "created_at"})


class TaskNotFound(LookupError):
    """No task has the requested id."""


class TransitionError(ValueError):
    """The task's current status does not allow the requested move."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"tasks: cannot transition '{current}' -> '{target}'")
        self.current = current
        self.target = target


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _check_path(path: Any, message: str) -> str:
    if not isinstance(path, (str, os.PathLike)):
        raise TypeError(message)
    return os.fspath(path)


def _check_id(task_id: Any, op: str) -> str:
    if not isinstance(task_id, str):
        raise TypeError(f"tasks.{op}: id must be Str")
    return task_id


def _merge_unprotected(target: dict, fields: dict) -> None:
    for key, value in fields.items():
        if key not in _PROTECTED:
            target[key] = value


class TaskStore:
    """Tasks by id, in creation order; written to path after every change if set."""

    def __init__(self, path: Optional[PathArg] = None) -> None:
        self.path: Optional[str] = (
            None if path is None else _check_path(path, "tasks: path must be Str")
        )
        self._tasks: dict[str, dict] = {}

    def _persist(self) -> None:
        if self.path is None:
            return
        text = jsonio.encode_pretty(list(self._tasks.values()))
        with open(self.path, "w", encoding="utf-8") as handle:
            handle.write(text)

    def _task(self, task_id: str) -> dict:
        try:
            return self._tasks[task_id]
        except KeyError:
            raise TaskNotFound(f"tasks: task '{task_id}' not found") from None

    def save(self, path: PathArg) -> None:
        """Write all tasks to path and keep writing there from now on."""
        self.path = _check_path(path, "tasks.save expects Str path")
        self._persist()

    def create(
        self, title: str, parent: Any = "", tags: Optional[Iterable[Any]] = None
    ) -> str:
        """Add a task in status "todo" and return its id."""
        if not isinstance(title, str):
            raise TypeError("tasks.create: must have 'title' field")
        task_id = f"task_{next(_TASK_IDS)}"
        stamp = _now()
        self._tasks[task_id] = {
            "id": task_id,
            "title": title,
            "status": "todo",
            "parent": parent,
            "tags": [] if tags is None else list(tags),
            "notes": "",
            "output": "",
            "feedback": "",
            "result": "",
            "created_at": stamp,
            "updated_at": stamp,
        }
        self._persist()
        return task_id

    def get(self, task_id: str) -> dict:
        """A copy of the task with the given id."""
        return dict(self._task(_check_id(task_id, "get")))

    def children(self, parent: str) -> list[dict]:
        """Tasks whose parent is the given id."""
        _check_id(parent, "children")
        return [dict(t) for t in self._tasks.values() if t.get("parent") == parent]

    def all(self, status: Optional[str] = None) -> list[dict]:
        """Every task, or only those in the given status."""
        return [
            dict(t)
            for t in self._tasks.values()
            if status is None or t.get("status") == status
        ]

    def _transition(
        self,
        task_id: Any,
        sources: tuple[str, ...],
        target: str,
        fields: Any = None,
    ) -> None:
        task = self._task(_check_id(task_id, target))
        status = task.get("status")
        status = status if isinstance(status, str) else ""
        if status not in sources:
            raise TransitionError(status, target)
        updated = {**task, "status": target, "updated_at": _now()}
        if isinstance(fields, dict):
            _merge_unprotected(updated, fields)
        self._tasks[task_id] = updated
        self._persist()

    def start(self, task_id: str) -> None:
        """todo -> in_progress."""
        self._transition(task_id, ("todo",), "in_progress")

    def update(self, task_id: str, fields: dict) -> None:
        """Set fields other than id, status and created_at, keeping the status."""
        _check_id(task_id, "update")
        if not isinstance(fields, dict):
            raise TypeError("tasks.update: opts must be Record")
        updated = dict(self._task(task_id))
        _merge_unprotected(updated, fields)
        updated["updated_at"] = _now()
        self._tasks[task_id] = updated
        self._persist()

    def submit(self, task_id: str, fields: Optional[dict] = None) -> None:
        """in_progress or revision -> submitted."""
        self._transition(task_id, ("in_progress", "revision"), "submitted", fields)

    def audit(self, task_id: str) -> None:
        """submitted -> pending_audit."""
        self._transition(task_id, ("submitted",), "pending_audit")

    def approve(self, task_id: str) -> None:
        """pending_audit -> passed."""
        self._transition(task_id, ("pending_audit",), "passed")

    def fail(self, task_id: str, fields: Optional[dict] = None) -> None:
        """pending_audit -> failed."""
        self._transition(task_id, ("pending_audit",), "failed", fields)

    def revise(self, task_id: str) -> None:
        """failed -> revision."""
        self._transition(task_id, ("failed",), "revision")

    def complete(self, task_id: str, fields: Optional[dict] = None) -> None:
        """passed -> complete."""
        self._transition(task_id, ("passed",), "complete", fields)


def load(path: PathArg) -> TaskStore:
    """Read a store from a JSON array of task records; it keeps writing there."""
    target = _check_path(path, "tasks.load expects Str path")
    with open(target, encoding="utf-8") as handle:
        content = handle.read()
    try:
        data = jsonio.parse(content)
    except ValueError as exc:
        raise ValueError(f"tasks.load: JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ValueError("tasks.load: expected JSON array")
    store = TaskStore(target)
    for item in data:
        if isinstance(item, dict) and isinstance(item.get("id"), str):
            store._tasks[item["id"]] = item
    return store