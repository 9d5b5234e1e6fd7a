"""Replaying source: every subscriber gets the same values and terminal signal."""

from __future__ import annotations

from collections.abc import Iterable

from ..completion import Completed, Completion, Demand
from .protocol import Subscriber


class _SequenceSubscription:
    __slots__ = ("cancelled",)

    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class SequencePublisher[T, E]:
    """
    Publish a fixed sequence, then ``completion``.

    Delivery happens inside ``subscribe``: it returns once the subscriber has
    seen the terminal signal, or once it cancelled.
    """

    __slots__ = ("_values", "_completion")

    def __init__(self, values: Iterable[T], completion: Completion[E] = Completed()) -> None:
        self._values: tuple[T, ...] = tuple(values)
        self._completion = completion

    @property
    def values(self) -> tuple[T, ...]:
        return self._values

    @property
    def completion(self) -> Completion[E]:
        return self._completion

    async def subscribe(self, subscriber: Subscriber[T, E]) -> None:
        subscription = _SequenceSubscription()
        subscriber.on_subscribe(subscription)
        for value in self._values:
            if subscription.cancelled:
                return
            demand = await subscriber.on_value(value)
            if demand is Demand.CANCEL:
                subscription.cancel()
                return
        if subscription.cancelled:
            return
        subscription.cancel()
        await subscriber.on_completion(self._completion)


__all__ = ("SequencePublisher",)
