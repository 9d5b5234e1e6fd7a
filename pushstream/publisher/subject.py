"""
PassthroughSubject
==================

Multicast source driven from the outside: callers ``send`` values and
finish it with ``send_completion``.
"""

from __future__ import annotations

from ..completion import Completed, Completion, Demand, Failed
from .protocol import Subscriber


class _SubjectSubscription[T, E]:
    __slots__ = ("_subject", "subscriber", "cancelled")

    def __init__(
        self,
        subject: PassthroughSubject[T, E],
        subscriber: Subscriber[T, E],
        *,
        cancelled: bool = False,
    ) -> None:
        self._subject = subject
        self.subscriber = subscriber
        self.cancelled = cancelled

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        self._subject._detach(self)


class PassthroughSubject[T, E]:
    """
    Broadcasts each sent value to the current subscribers, in subscription order.

    - send() awaits every subscriber's acknowledgement before returning
    - a subscriber answering ``Demand.CANCEL`` is dropped
    - after the terminal signal every send is a no-op
    - subscribing after the end replays only the terminal signal
    """

    __slots__ = ("_subscriptions", "_terminal")

    def __init__(self) -> None:
        self._subscriptions: list[_SubjectSubscription[T, E]] = []
        self._terminal: Completion[E] | None = None

    @property
    def is_terminated(self) -> bool:
        return self._terminal is not None

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    async def subscribe(self, subscriber: Subscriber[T, E]) -> None:
        if self._terminal is not None:
            subscriber.on_subscribe(_SubjectSubscription(self, subscriber, cancelled=True))
            await subscriber.on_completion(self._terminal)
            return
        subscription = _SubjectSubscription(self, subscriber)
        self._subscriptions.append(subscription)
        subscriber.on_subscribe(subscription)

    async def send(self, value: T) -> None:
        if self._terminal is not None:
            return
        for subscription in tuple(self._subscriptions):
            if subscription.cancelled:
                continue
            demand = await subscription.subscriber.on_value(value)
            if demand is Demand.CANCEL:
                subscription.cancel()

    async def send_completion(self, completion: Completion[E] = Completed()) -> None:
        if self._terminal is not None:
            return
        self._terminal = completion
        subscriptions = tuple(self._subscriptions)
        self._subscriptions.clear()
        for subscription in subscriptions:
            if subscription.cancelled:
                continue
            subscription.cancelled = True
            await subscription.subscriber.on_completion(completion)

    async def send_failure(self, reason: E) -> None:
        """Shorthand for ``send_completion(Failed(reason))``."""
        await self.send_completion(Failed(reason))

    def _detach(self, subscription: _SubjectSubscription[T, E]) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)


__all__ = ("PassthroughSubject",)
