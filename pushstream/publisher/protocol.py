"""
Push-stream protocols
=====================

Three roles, wired by ``Publisher.subscribe``:

- Publisher pushes values, then exactly one terminal signal
- Subscriber acknowledges each value by returning ``Demand``
- Subscription lets the subscriber stop the publisher

Back-pressure is the await: a value counts as delivered only once
``on_value`` returns.
"""

from __future__ import annotations

from typing import Protocol

from ..completion import Completion, Demand


class Subscription(Protocol):
    def cancel(self) -> None:
        """Stop delivery. Idempotent, never raises."""
        ...


class Subscriber[T, E](Protocol):
    def on_subscribe(self, subscription: Subscription) -> None:
        """Called once, before any value."""
        ...

    async def on_value(self, value: T) -> Demand:
        ...

    async def on_completion(self, completion: Completion[E]) -> None:
        """Called at most once. Nothing follows it."""
        ...


class Publisher[T, E](Protocol):
    async def subscribe(self, subscriber: Subscriber[T, E]) -> None:
        ...


__all__ = ("Publisher", "Subscriber", "Subscription")
