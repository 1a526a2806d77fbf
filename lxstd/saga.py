"""Sagas: dependent steps run in order, undone in reverse when one fails."""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .values import Err


class SagaError(Exception):
    """The saga's steps are malformed or cannot be ordered."""


class SagaFailed(Exception):
    """A step failed; completed steps were compensated."""

    def __init__(
        self,
        failed_step: str,
        error: Any,
        compensated: list[str],
        compensation_errors: list[dict],
    ) -> None:
        super().__init__(f"saga step '{failed_step}' failed: {error}")
        self.failed_step = failed_step
        self.error = error
        self.compensated = compensated
        self.compensation_errors = compensation_errors


@dataclass(frozen=True)
class SagaDefinition:
    """A stored list of saga steps, run later with execute()."""

    steps: tuple


def _step_id(step: Any) -> Optional[str]:
    if isinstance(step, dict):
        value = step.get("id")
        if isinstance(value, str):
            return value
    return None


def _step_deps(step: Any) -> list[str]:
    if isinstance(step, dict):
        deps = step.get("depends")
        if isinstance(deps, list):
            return [d for d in deps if isinstance(d, str)]
    return []


def _next_ready(remaining: list, completed: set[str]) -> Optional[int]:
    return next(
        (
            i
            for i, step in enumerate(remaining)
            if all(d in completed for d in _step_deps(step))
        ),
        None,
    )


def _step_fn(step: Any, field: str) -> Any:
    return step.get(field) if isinstance(step, dict) else None


def _attempt(do: Callable, prev: dict, retries: int) -> tuple[bool, Any]:
    failure: Any = None
    for _ in range(retries + 1):
        try:
            outcome = do(dict(prev))
        except Exception as exc:
            failure = exc
            continue
        if isinstance(outcome, Err):
            failure = outcome.value
            continue
        return True, outcome
    return False, failure


def _compensate(
    completed: list[tuple[str, Any, Callable]], on_compensate: Optional[Callable]
) -> tuple[list[str], list[dict]]:
    compensated: list[str] = []
    errors: list[dict] = []
    for sid, result, undo in reversed(completed):
        if on_compensate is not None:
            with contextlib.suppress(Exception):
                on_compensate(sid, result)
        try:
            outcome = undo(result)
        except Exception as exc:
            errors.append({"step": sid, "error": exc})
            continue
        if isinstance(outcome, Err):
            errors.append({"step": sid, "error": outcome.value})
        else:
            compensated.append(sid)
    return compensated, errors


def _run_saga(
    steps: list,
    initial: dict,
    on_compensate: Optional[Callable],
    timeout: Optional[int],
    max_retries: int,
) -> dict:
    start = time.monotonic()
    remaining = list(steps)
    completed: list[tuple[str, Any, Callable]] = []
    results: list[tuple[str, Any]] = list(initial.items())
    completed_ids = {sid for sid, _ in results}

    while remaining:
        if timeout is not None and int(time.monotonic() - start) >= timeout:
            comp, comp_errors = _compensate(completed, on_compensate)
            raise SagaFailed("__timeout", "saga timeout exceeded", comp, comp_errors)
        idx = _next_ready(remaining, completed_ids)
        if idx is None:
            raise SagaError("saga: cycle or unmet dependencies")
        step = remaining.pop(idx)
        sid = _step_id(step) or "unknown"
        do = _step_fn(step, "do")
        if do is None:
            raise SagaError(f"saga step '{sid}' missing 'do' function")
        undo = _step_fn(step, "undo")
        if undo is None:
            raise SagaError(f"saga step '{sid}' missing 'undo' function")
        prev: dict = {}
        for key, value in results:
            prev.setdefault(key, value)
        ok, outcome = _attempt(do, prev, max_retries)
        if not ok:
            comp, comp_errors = _compensate(completed, on_compensate)
            raise SagaFailed(sid, outcome, comp, comp_errors)
        results.append((sid, outcome))
        completed.append((sid, outcome, undo))
        completed_ids.add(sid)

    final: dict = {}
    for key, value in results:
        final[key] = value
    return final


def _whole(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return None


def define(steps: list) -> SagaDefinition:
    """Store steps for a later execute()."""
    if not isinstance(steps, list):
        raise TypeError("saga.define expects List of steps")
    return SagaDefinition(tuple(steps))


def run(
    steps: list,
    on_compensate: Optional[Callable[[str, Any], Any]] = None,
    timeout: Optional[int] = None,
    max_retries: int = 0,
) -> dict:
    """Run steps; return each step's result by id, or raise SagaFailed.

    Each step is a dict with "id", "do" (called with prior results),
    "undo" (called with the step's result) and optional "depends".
    """
    if not isinstance(steps, list):
        raise TypeError("saga.run expects List of steps")
    return _run_saga(steps, {}, on_compensate, _whole(timeout), _whole(max_retries) or 0)


def execute(definition: SagaDefinition, initial: Any = None) -> dict:
    """Run a defined saga, seeding prior results with the initial record."""
    if not isinstance(definition, SagaDefinition):
        raise TypeError("saga.execute: first arg must be a saga definition")
    seed = dict(initial) if isinstance(initial, dict) else {}
    return _run_saga(list(definition.steps), seed, None, None, 0)