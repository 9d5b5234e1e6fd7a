"""
Recorder
========

Terminal subscriber that keeps everything it receives. Used to observe a
stage step by step (latest value, running count) and to wait for the end.
"""

from __future__ import annotations

import asyncio

from kungfu import Error, Ok, Result

from .._errors import NoValueError, StreamNotTerminatedError
from ..completion import Completed, Completion, Demand, Failed
from ..publisher.protocol import Publisher, Subscription


class Recorder[T, E]:
    """
    Records values in arrival order plus the terminal signal.

    limit: answer ``Demand.CANCEL`` once this many values were received.

    Recording ends with the terminal signal or with cancellation (explicit or
    by reaching ``limit``). A cancelled recorder never sees a terminal signal:
    ``completion`` stays ``None`` and ``result()`` is ``Ok(values)``.
    """

    __slots__ = ("_values", "_completion", "_subscription", "_limit", "_cancelled", "_done")

    def __init__(self, *, limit: int | None = None) -> None:
        if limit is not None and limit < 1:
            raise ValueError("Recorder.limit must be >= 1")
        self._values: list[T] = []
        self._completion: Completion[E] | None = None
        self._subscription: Subscription | None = None
        self._limit = limit
        self._cancelled = False
        self._done = asyncio.Event()

    @property
    def values(self) -> list[T]:
        return list(self._values)

    @property
    def count(self) -> int:
        return len(self._values)

    @property
    def latest(self) -> T:
        """Most recently received value. Raises NoValueError before the first one."""
        if not self._values:
            raise NoValueError("No value has been received")
        return self._values[-1]

    @property
    def completion(self) -> Completion[E] | None:
        return self._completion

    @property
    def is_finished(self) -> bool:
        return self._completion is not None

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def on_subscribe(self, subscription: Subscription) -> None:
        self._subscription = subscription
        if self._cancelled:
            subscription.cancel()

    async def on_value(self, value: T) -> Demand:
        if self._cancelled or self._completion is not None:
            return Demand.CANCEL
        self._values.append(value)
        if self._limit is not None and len(self._values) >= self._limit:
            # the publisher cancels on our answer
            self._cancelled = True
            self._subscription = None
            self._done.set()
            return Demand.CANCEL
        return Demand.MORE

    async def on_completion(self, completion: Completion[E]) -> None:
        if self._completion is not None or self._cancelled:
            return
        self._completion = completion
        self._subscription = None
        self._done.set()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.cancel()
        self._done.set()

    async def wait(self, timeout: float | None = None) -> Completion[E] | None:
        """
        Block until recording ends (``asyncio.TimeoutError`` on timeout).

        Returns the terminal signal, or ``None`` when the recorder was cancelled.
        """
        if timeout is None:
            await self._done.wait()
        else:
            await asyncio.wait_for(self._done.wait(), timeout=timeout)
        return self._completion

    def result(self) -> Result[list[T], E]:
        """
        ``Ok(values)`` after ``Completed`` or cancellation, ``Error(reason)`` after ``Failed``.

        Raises StreamNotTerminatedError while the stream is still open.
        """
        match self._completion:
            case None if self._cancelled:
                return Ok(list(self._values))
            case None:
                raise StreamNotTerminatedError(len(self._values))
            case Completed():
                return Ok(list(self._values))
            case Failed(reason):
                return Error(reason)
            case _:
                raise RuntimeError(f"Recorder.result(): unexpected completion {self._completion!r}")


async def record[T, E](publisher: Publisher[T, E], *, limit: int | None = None) -> Recorder[T, E]:
    """Subscribe a fresh Recorder to ``publisher`` and return it."""
    recorder: Recorder[T, E] = Recorder(limit=limit)
    await publisher.subscribe(recorder)
    return recorder


__all__ = ("Recorder", "record")
