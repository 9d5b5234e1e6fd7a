"""
Writer
======

Stage tracing as data:
- Log[A]: ordered snapshot of entries, joinable with combine
- WriterResult[T, E]: Result[list[T], E] plus the stage event log
- StageEvent / Trace / TracePolicy: what a stage records and how much
"""

from .log import Log
from .result import WriterResult
from .trace import EVENT_KINDS, StageEvent, StageEventKind, Trace, TracePolicy, kinds_of

__all__ = (
    "EVENT_KINDS",
    "Log",
    "StageEvent",
    "StageEventKind",
    "Trace",
    "TracePolicy",
    "WriterResult",
    "kinds_of",
)
