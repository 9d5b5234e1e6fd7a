"""
Stage trace
===========

Writer-style record of what a stage decided for each signal. Nothing is
printed. Events accumulate as data and are read back through ``Log``.
"""

from __future__ import annotations

import typing
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from .._helpers import MISSING, Missing
from .log import Log

type StageEventKind = Literal[
    "emitted",
    "suppressed",
    "comparison_failed",
    "completed",
    "failed",
    "cancelled",
    "ignored",
]

EVENT_KINDS: frozenset[str] = frozenset(
    {
        "emitted",
        "suppressed",
        "comparison_failed",
        "completed",
        "failed",
        "cancelled",
        "ignored",
    }
)


@dataclass(frozen=True, slots=True)
class StageEvent[T, E]:
    """
    One stage decision. ``value`` and ``reason`` are ``MISSING`` when the kind
    carries none, so an event about a ``None`` value stays distinguishable.
    """

    kind: StageEventKind
    value: T | Missing = MISSING
    reason: E | Missing = MISSING

    @property
    def has_value(self) -> bool:
        return not isinstance(self.value, Missing)

    @property
    def has_reason(self) -> bool:
        return not isinstance(self.reason, Missing)


@dataclass(frozen=True, slots=True)
class TracePolicy:
    """
    What a traced stage keeps.

    max_events: keep only the most recent N events (unbounded when None).
    kinds: record only these kinds (all kinds when None).
    """

    max_events: int | None = None
    kinds: frozenset[StageEventKind] | None = None

    def __post_init__(self) -> None:
        if self.max_events is not None and self.max_events < 1:
            raise ValueError("TracePolicy.max_events must be >= 1")
        if self.kinds is not None:
            kinds = frozenset(self.kinds)
            if not kinds:
                raise ValueError("TracePolicy.kinds must not be empty")
            unknown = kinds - EVENT_KINDS
            if unknown:
                raise ValueError(f"TracePolicy.kinds has unknown kinds: {sorted(unknown)}")
            object.__setattr__(self, "kinds", kinds)

    @classmethod
    def everything(cls, max_events: int | None = None) -> TracePolicy:
        """Every decision, optionally capped."""
        return cls(max_events=max_events)

    @classmethod
    def decisions(cls, max_events: int | None = None) -> TracePolicy:
        """Per-value decisions only: emitted, suppressed, comparison_failed."""
        return cls(
            max_events=max_events,
            kinds=frozenset({"emitted", "suppressed", "comparison_failed"}),
        )

    @classmethod
    def terminal(cls) -> TracePolicy:
        """How the stage ended, nothing else."""
        return cls(kinds=frozenset({"completed", "failed", "comparison_failed", "cancelled"}))

    def accepts(self, kind: StageEventKind) -> bool:
        return self.kinds is None or kind in self.kinds


class Trace[T, E]:
    """Bounded event buffer driven by a ``TracePolicy``."""

    __slots__ = ("_policy", "_events")

    def __init__(self, policy: TracePolicy | None = None) -> None:
        self._policy = policy if policy is not None else TracePolicy()
        self._events: deque[StageEvent[T, E]] = deque(maxlen=self._policy.max_events)

    @property
    def policy(self) -> TracePolicy:
        return self._policy

    def record(
        self,
        kind: StageEventKind,
        *,
        value: T | Missing = MISSING,
        reason: E | Missing = MISSING,
    ) -> None:
        if self._policy.accepts(kind):
            self._events.append(StageEvent(kind, value, reason))

    @property
    def log(self) -> Log[StageEvent[T, E]]:
        """Snapshot of the recorded events, oldest first."""
        return Log(self._events)

    def kinds(self) -> list[StageEventKind]:
        return kinds_of(self._events)

    def __len__(self) -> int:
        return len(self._events)


def kinds_of(events: Iterable[StageEvent[typing.Any, typing.Any]]) -> list[StageEventKind]:
    """Event kinds in order, handy for comparing traces."""
    return [event.kind for event in events]


__all__ = (
    "EVENT_KINDS",
    "StageEvent",
    "StageEventKind",
    "Trace",
    "TracePolicy",
    "kinds_of",
)
