"""
Comparator constructors
=======================

Build ``Comparator[T, E]`` values from plain equality, a bool predicate,
a key function, or a predicate that raises.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Never

from kungfu import Error

from .._types import Comparator, ComparisonOutcome, Equivalence, Selector
from .outcome import equal_if


def by_equality[T]() -> Comparator[T, Never]:
    """
    Default comparator: ``previous == candidate``.

    Never fails. Used by ``remove_duplicates``.
    """
    def compare(previous: T, candidate: T) -> ComparisonOutcome[Never]:
        return equal_if(previous == candidate)

    return compare


def by[T](equivalent: Equivalence[T]) -> Comparator[T, Never]:
    """
    Lift a plain ``(previous, candidate) -> bool`` check into a comparator.

    Example:
        compare = by(lambda a, b: a.id == b.id)
    """
    def compare(previous: T, candidate: T) -> ComparisonOutcome[Never]:
        return equal_if(equivalent(previous, candidate))

    return compare


def by_key[T, K](key: Selector[T, K]) -> Comparator[T, Never]:
    """Duplicates are values whose keys are equal."""
    def compare(previous: T, candidate: T) -> ComparisonOutcome[Never]:
        return equal_if(key(previous) == key(candidate))

    return compare


def catching[T, E](
    equivalent: Equivalence[T],
    *,
    on_error: Callable[[Exception], E],
) -> Comparator[T, E]:
    """
    Bridge a comparator that raises into one that returns ``Error``.

    Example:
        def same_id(a: Item, b: Item) -> bool:
            if a.id == 5 or b.id == 5:
                raise Boom()
            return a.id == b.id

        compare = catching(same_id, on_error=lambda exc: exc)

    NOTE: Catches all Exception subclasses. Filter in on_error, or write
          the comparator against ``comparison_failed`` directly for anything
          narrower.
    """
    def compare(previous: T, candidate: T) -> ComparisonOutcome[E]:
        try:
            flag = equivalent(previous, candidate)
        except Exception as exc:
            return Error(on_error(exc))
        return equal_if(flag)

    return compare


__all__ = ("by", "by_equality", "by_key", "catching")
