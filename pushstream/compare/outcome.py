"""
Comparison outcomes
===================

A comparator answers with a ``Result[bool, E]``:

- ``Ok(True)``: candidate duplicates the last emitted value, suppress it
- ``Ok(False)``: candidate differs, emit it
- ``Error(reason)``: comparison failed, the stream ends with ``Failed(reason)``
"""

from __future__ import annotations

from typing import Never

from kungfu import Error, Ok

from .._types import ComparisonOutcome

EQUAL: ComparisonOutcome[Never] = Ok(True)
NOT_EQUAL: ComparisonOutcome[Never] = Ok(False)


def equal_if(flag: bool) -> ComparisonOutcome[Never]:
    """``EQUAL`` when flag is truthy, ``NOT_EQUAL`` otherwise."""
    return EQUAL if flag else NOT_EQUAL


def comparison_failed[E](reason: E) -> ComparisonOutcome[E]:
    """Outcome that aborts the stream with ``reason``."""
    return Error(reason)


__all__ = ("EQUAL", "NOT_EQUAL", "comparison_failed", "equal_if")
