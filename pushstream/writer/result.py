"""
WriterResult - collected stream outcome plus its trace
======================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from kungfu import Result

from .log import Log
from .trace import StageEvent


@dataclass(frozen=True, slots=True)
class WriterResult[T, E]:
    """
    Outcome of draining a traced stage.

    ``result`` is ``Ok(values)`` when the stream completed and ``Error(reason)``
    when it failed. ``log`` holds the decisions taken on the way, including
    those made before a failure.
    """

    result: Result[list[T], E]
    log: Log[StageEvent[T, E]]


__all__ = ("WriterResult",)
