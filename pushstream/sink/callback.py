"""
Callback sink
=============

Terminal subscriber that hands each value and the terminal signal to
caller-supplied callbacks (sync or async).
"""

from __future__ import annotations

import inspect

from .._types import Callback
from ..completion import Completion, Demand
from ..publisher.protocol import Publisher, Subscription


class Sink[T, E]:
    """
    Subscriber built from callbacks. Keep it around to ``cancel()`` later.

    Callback exceptions are not caught: they surface at the ``send`` that
    delivered the value.
    """

    __slots__ = ("_on_value", "_on_completion", "_subscription", "_cancelled", "_finished")

    def __init__(
        self,
        on_value: Callback[T],
        on_completion: Callback[Completion[E]] | None = None,
    ) -> None:
        self._on_value = on_value
        self._on_completion = on_completion
        self._subscription: Subscription | None = None
        self._cancelled = False
        self._finished = False

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @property
    def is_finished(self) -> bool:
        return self._finished

    def on_subscribe(self, subscription: Subscription) -> None:
        self._subscription = subscription
        if self._cancelled:
            subscription.cancel()

    async def on_value(self, value: T) -> Demand:
        if self._cancelled:
            return Demand.CANCEL
        outcome = self._on_value(value)
        if inspect.isawaitable(outcome):
            await outcome
        return Demand.CANCEL if self._cancelled else Demand.MORE

    async def on_completion(self, completion: Completion[E]) -> None:
        self._finished = True
        self._subscription = None
        if self._on_completion is None:
            return
        outcome = self._on_completion(completion)
        if inspect.isawaitable(outcome):
            await outcome

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.cancel()


async def attach[T, E](
    publisher: Publisher[T, E],
    *,
    on_value: Callback[T],
    on_completion: Callback[Completion[E]] | None = None,
) -> Sink[T, E]:
    """
    Subscribe a callback sink and return it.

    Example:
        sink = await attach(stage, on_value=print, on_completion=print)
        ...
        sink.cancel()
    """
    sink: Sink[T, E] = Sink(on_value, on_completion)
    await publisher.subscribe(sink)
    return sink


__all__ = ("Sink", "attach")
