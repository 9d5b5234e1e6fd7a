"""
pushstream: asyncio push streams with adjacent-duplicate removal.

A publisher pushes values and then exactly one terminal signal
(``Completed()`` or ``Failed(reason)``). ``DedupStage`` sits between a
publisher and one subscriber and drops values that duplicate the last
emitted one, using a comparator that may fail.

Architecture:
- Comparators answer ``kungfu.Result[bool, E]`` (Ok(True) = duplicate)
- Plain constructors (remove_duplicates, remove_duplicates_by, try_remove_duplicates)
- Traced constructors record decisions into a Writer-style Log (*_w suffix)
- lift.up builds streams from values, lift.down drains them into a Result
"""

# Core types
from ._types import Callback, Comparator, ComparisonOutcome, Equivalence, NoError, Selector

# Terminal signals
from .completion import Completed, Completion, Demand, Failed

# Comparators
from . import compare
from .compare import EQUAL, NOT_EQUAL, by, by_equality, by_key, catching, comparison_failed, equal_if

# Sources
from .publisher import PassthroughSubject, Publisher, SequencePublisher, Subscriber, Subscription

# Stage
from .transform import (
    DedupStage,
    StagePhase,
    # Plain
    remove_duplicates,
    remove_duplicates_by,
    try_remove_duplicates,
    # With trace
    remove_duplicates_w,
    remove_duplicates_by_w,
    try_remove_duplicates_w,
)

# Consumers
from .sink import Recorder, Sink, attach, record

# Lift helpers
from . import lift
from .lift import collect, empty, fail, from_iterable, just, to_result, to_writer_result

# Writer
from . import writer
from .writer import Log, StageEvent, TracePolicy, WriterResult

# Errors
from ._errors import AlreadySubscribedError, NoValueError, StreamNotTerminatedError

__all__ = (
    # Types
    "Callback",
    "Comparator",
    "ComparisonOutcome",
    "Equivalence",
    "NoError",
    "Selector",
    # Signals
    "Completed",
    "Completion",
    "Demand",
    "Failed",
    # Comparators
    "compare",
    "EQUAL",
    "NOT_EQUAL",
    "by",
    "by_equality",
    "by_key",
    "catching",
    "comparison_failed",
    "equal_if",
    # Sources
    "PassthroughSubject",
    "Publisher",
    "SequencePublisher",
    "Subscriber",
    "Subscription",
    # Stage
    "DedupStage",
    "StagePhase",
    "remove_duplicates",
    "remove_duplicates_by",
    "try_remove_duplicates",
    "remove_duplicates_w",
    "remove_duplicates_by_w",
    "try_remove_duplicates_w",
    # Consumers
    "Recorder",
    "Sink",
    "attach",
    "record",
    # Lift
    "lift",
    "collect",
    "empty",
    "fail",
    "from_iterable",
    "just",
    "to_result",
    "to_writer_result",
    # Writer
    "writer",
    "Log",
    "StageEvent",
    "TracePolicy",
    "WriterResult",
    # Errors
    "AlreadySubscribedError",
    "NoValueError",
    "StreamNotTerminatedError",
)
