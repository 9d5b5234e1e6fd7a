"""
Remove-duplicates stage
=======================

Suppresses runs of adjacent duplicates. Each candidate is compared against
the last *emitted* value, never the last received one, so ``A A B B A``
becomes ``A B A``.

The comparator answers ``Ok(True)`` (duplicate), ``Ok(False)`` (emit) or
``Error(reason)``. The first ``Error`` ends the stream with
``Failed(reason)``: the value being compared is dropped and nothing after it
is processed.

Phases: UNSTARTED -> ACTIVE -> TERMINATED. TERMINATED is absorbing.
"""

from __future__ import annotations

import asyncio
import enum
from collections import deque
from collections.abc import Awaitable, Callable
from functools import partial
from typing import assert_never

from kungfu import Error, Ok

from .._errors import AlreadySubscribedError, NoValueError
from .._helpers import MISSING, Missing
from .._types import Comparator, Equivalence
from ..compare import by, by_equality
from ..completion import Completed, Completion, Demand, Failed
from ..publisher.protocol import Publisher, Subscriber, Subscription
from ..writer import Log, StageEvent, StageEventKind, Trace, TracePolicy


class StagePhase(enum.Enum):
    UNSTARTED = "unstarted"
    ACTIVE = "active"
    TERMINATED = "terminated"


class _DownstreamSubscription:
    """Handle given to the downstream. Cancelling it cancels the stage."""

    __slots__ = ("_stage",)

    def __init__(self, stage: DedupStage[object, object]) -> None:
        self._stage = stage

    def cancel(self) -> None:
        self._stage.cancel()


class DedupStage[T, E]:
    """
    Subscriber to ``upstream`` and publisher to exactly one downstream.

    on_value and on_completion run under an ``asyncio.Lock``: the
    compare / update / hand-off step is atomic, so concurrent pushes can
    never both compare against the same last value. A slow downstream holds
    the lock and therefore holds back the next push.

    A value counts as emitted once the downstream's ``on_value`` returns.
    Only then does it become ``last_accepted``.

    Signals pushed by the task that is inside the hand-off (a downstream
    callback sending into the stage's own source) are queued and handled,
    in order, right after the current hand-off. The pusher gets
    ``Demand.MORE`` without waiting.

    ``cancel()`` takes no lock, so a downstream may cancel from inside its
    own ``on_value``.

    NOTE: A comparator that raises is a bug in the comparator. The exception
          reaches whoever pushed the value. Use ``compare.catching`` to turn
          raising comparators into ``Error`` outcomes.

    NOTE: A downstream that starts *another* task to push into the source
          and awaits it from ``on_value`` still deadlocks: that task waits
          for the lock held by the awaiting one.
    """

    __slots__ = (
        "_upstream",
        "_compare",
        "_trace",
        "_lock",
        "_owner",
        "_pending",
        "_phase",
        "_last",
        "_downstream",
        "_upstream_subscription",
    )

    def __init__(
        self,
        upstream: Publisher[T, E],
        *,
        compare: Comparator[T, E],
        trace: Trace[T, E] | None = None,
    ) -> None:
        self._upstream = upstream
        self._compare = compare
        self._trace = trace
        self._lock = asyncio.Lock()
        self._owner: asyncio.Task[object] | None = None
        self._pending: deque[Callable[[], Awaitable[object]]] = deque()
        self._phase = StagePhase.UNSTARTED
        self._last: T | Missing = MISSING
        self._downstream: Subscriber[T, E] | None = None
        self._upstream_subscription: Subscription | None = None

    # State

    @property
    def phase(self) -> StagePhase:
        return self._phase

    @property
    def is_terminated(self) -> bool:
        return self._phase is StagePhase.TERMINATED

    @property
    def has_last_accepted(self) -> bool:
        return not isinstance(self._last, Missing)

    @property
    def last_accepted(self) -> T:
        """Most recently emitted value. Raises NoValueError when there is none."""
        if isinstance(self._last, Missing):
            raise NoValueError()
        return self._last

    @property
    def trace(self) -> Log[StageEvent[T, E]]:
        """Recorded decisions (empty for untraced stages)."""
        if self._trace is None:
            return Log()
        return self._trace.log

    # Downstream side

    async def subscribe(self, subscriber: Subscriber[T, E]) -> None:
        if self._downstream is not None:
            raise AlreadySubscribedError(type(self).__name__)
        self._downstream = subscriber
        handle = _DownstreamSubscription(self)
        if self.is_terminated:
            # cancelled before anyone subscribed: hand over a dead handle, never start upstream
            subscriber.on_subscribe(handle)
            return
        self._phase = StagePhase.ACTIVE
        subscriber.on_subscribe(handle)
        if self.is_terminated:
            # cancelled from within on_subscribe
            return
        await self._upstream.subscribe(self)

    def cancel(self) -> None:
        """Downstream cancellation: stop upstream, drop state, send nothing."""
        if self.is_terminated:
            return
        self._record("cancelled")
        self._stop()

    # Upstream side

    def on_subscribe(self, subscription: Subscription) -> None:
        self._upstream_subscription = subscription
        if self.is_terminated:
            self._upstream_subscription = None
            subscription.cancel()

    async def on_value(self, value: T) -> Demand:
        step = partial(self._accept, value)
        if self._in_hand_off():
            self._pending.append(step)
            return Demand.CANCEL if self.is_terminated else Demand.MORE
        demand = await self._serialized(step)
        return Demand.CANCEL if self.is_terminated else demand

    async def on_completion(self, completion: Completion[E]) -> None:
        step = partial(self._conclude, completion)
        if self._in_hand_off():
            self._pending.append(step)
            return
        await self._serialized(step)

    # Internals

    def _in_hand_off(self) -> bool:
        return self._owner is not None and self._owner is asyncio.current_task()

    async def _serialized[R](self, step: Callable[[], Awaitable[R]]) -> R:
        """Run ``step`` under the lock, then whatever the hand-off queued."""
        async with self._lock:
            self._owner = asyncio.current_task()
            try:
                outcome = await step()
                while self._pending:
                    await self._pending.popleft()()
                return outcome
            finally:
                self._owner = None
                self._pending.clear()

    async def _accept(self, value: T) -> Demand:
        if self._phase is not StagePhase.ACTIVE:
            self._record("ignored", value=value)
            return Demand.CANCEL

        if isinstance(self._last, Missing):
            return await self._emit(value)

        match self._compare(self._last, value):
            case Ok(duplicate):
                if duplicate:
                    self._record("suppressed", value=value)
                    return Demand.MORE
                return await self._emit(value)
            case Error(reason):
                self._record("comparison_failed", value=value, reason=reason)
                self._stop()
                await self._finish(Failed(reason))
                return Demand.CANCEL
            case _ as unreachable:
                assert_never(unreachable)

    async def _conclude(self, completion: Completion[E]) -> None:
        if self._phase is not StagePhase.ACTIVE:
            self._record("ignored")
            return
        match completion:
            case Completed():
                self._record("completed")
            case Failed(reason):
                self._record("failed", reason=reason)
        self._phase = StagePhase.TERMINATED
        self._last = MISSING
        self._upstream_subscription = None
        await self._finish(completion)

    async def _emit(self, value: T) -> Demand:
        downstream = self._downstream
        if downstream is None:
            raise RuntimeError("DedupStage: internal error (active without downstream)")
        self._record("emitted", value=value)
        demand = await downstream.on_value(value)
        if not self.is_terminated:
            self._last = value
        if demand is Demand.CANCEL:
            self.cancel()
        return Demand.CANCEL if self.is_terminated else Demand.MORE

    async def _finish(self, completion: Completion[E]) -> None:
        downstream = self._downstream
        if downstream is None:
            raise RuntimeError("DedupStage: internal error (finished without downstream)")
        await downstream.on_completion(completion)

    def _stop(self) -> None:
        self._phase = StagePhase.TERMINATED
        self._last = MISSING
        subscription, self._upstream_subscription = self._upstream_subscription, None
        if subscription is not None:
            subscription.cancel()

    def _record(
        self,
        kind: StageEventKind,
        *,
        value: T | Missing = MISSING,
        reason: E | Missing = MISSING,
    ) -> None:
        if self._trace is not None:
            self._trace.record(kind, value=value, reason=reason)

    def __repr__(self) -> str:
        return f"DedupStage(phase={self._phase.value}, last={self._last!r})"


# ============================================================================
# Sugar
# ============================================================================


def remove_duplicates[T, E](upstream: Publisher[T, E]) -> DedupStage[T, E]:
    """Drop values equal (``==``) to the last emitted one."""
    return DedupStage(upstream, compare=by_equality())


def remove_duplicates_by[T, E](
    upstream: Publisher[T, E],
    *,
    equivalent: Equivalence[T],
) -> DedupStage[T, E]:
    """
    Drop values the predicate calls equivalent to the last emitted one.

    Example:
        stage = remove_duplicates_by(subject, equivalent=lambda a, b: a.id == b.id)
    """
    return DedupStage(upstream, compare=by(equivalent))


def try_remove_duplicates[T, E](
    upstream: Publisher[T, E],
    *,
    compare: Comparator[T, E],
) -> DedupStage[T, E]:
    """
    Like remove_duplicates_by, but the comparator may fail.

    The first ``Error(reason)`` ends the stream with ``Failed(reason)``.
    """
    return DedupStage(upstream, compare=compare)


# ============================================================================
# Sugar with trace (writer)
# ============================================================================


def remove_duplicates_w[T, E](
    upstream: Publisher[T, E],
    *,
    policy: TracePolicy | None = None,
) -> DedupStage[T, E]:
    """remove_duplicates, recording every decision into ``stage.trace``."""
    return DedupStage(upstream, compare=by_equality(), trace=Trace(policy))


def remove_duplicates_by_w[T, E](
    upstream: Publisher[T, E],
    *,
    equivalent: Equivalence[T],
    policy: TracePolicy | None = None,
) -> DedupStage[T, E]:
    """remove_duplicates_by with trace."""
    return DedupStage(upstream, compare=by(equivalent), trace=Trace(policy))


def try_remove_duplicates_w[T, E](
    upstream: Publisher[T, E],
    *,
    compare: Comparator[T, E],
    policy: TracePolicy | None = None,
) -> DedupStage[T, E]:
    """try_remove_duplicates with trace."""
    return DedupStage(upstream, compare=compare, trace=Trace(policy))


__all__ = (
    "DedupStage",
    "StagePhase",
    "remove_duplicates",
    "remove_duplicates_by",
    "try_remove_duplicates",
    "remove_duplicates_w",
    "remove_duplicates_by_w",
    "try_remove_duplicates_w",
)
