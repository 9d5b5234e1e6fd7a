"""
Lifting plain values into a stream.

Every constructor returns a ``SequencePublisher``: each subscriber gets the
same values followed by the same terminal signal.
"""

from __future__ import annotations

from collections.abc import Iterable

from .._types import NoError
from ..completion import Completed, Completion, Failed
from ..publisher.sequence import SequencePublisher


def just[T](*values: T) -> SequencePublisher[T, NoError]:
    """
    Stream of the given values, then ``Completed()``.

    Example:
        from pushstream import lift as L

        stage = remove_duplicates(L.up.just("onefish", "onefish", "twofish"))
    """
    return SequencePublisher(values)


def from_iterable[T, E](
    values: Iterable[T],
    *,
    then: Completion[E] = Completed(),
) -> SequencePublisher[T, E]:
    """
    Stream of ``values`` followed by ``then``.

    ``then=Failed(reason)`` models an upstream that fails after some values.

    NOTE: ``values`` is consumed once, at construction time.
    """
    return SequencePublisher(values, then)


def empty[T]() -> SequencePublisher[T, NoError]:
    """Stream that completes without values."""
    return SequencePublisher(())


def fail[E](reason: E) -> SequencePublisher[NoError, E]:
    """Stream that fails immediately with ``reason``. Dual of empty()."""
    return SequencePublisher((), Failed(reason))


__all__ = ("empty", "fail", "from_iterable", "just")
