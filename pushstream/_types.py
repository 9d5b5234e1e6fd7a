"""
Core type definitions for pushstream.

Aliases shared by comparators, stages and sinks.
"""

from __future__ import annotations

import typing
from collections.abc import Awaitable, Callable

from kungfu import Result

# ============================================================================
# Type aliases
# ============================================================================

# Selector = function that extracts a key for comparison
type Selector[T, K] = Callable[[T], K]

# Equivalence = plain "are these duplicates?" check, cannot fail
type Equivalence[T] = Callable[[T, T], bool]

# ComparisonOutcome: Ok(True) = equal, Ok(False) = not equal, Error(reason) = failed
type ComparisonOutcome[E] = Result[bool, E]

# Comparator = (previous, candidate) -> ComparisonOutcome
type Comparator[T, E] = Callable[[T, T], ComparisonOutcome[E]]

# Callback = sync or async consumer of a value
type Callback[T] = Callable[[T], None] | Callable[[T], Awaitable[None]]

# NoError = stream or comparator that never fails
type NoError = typing.Never

__all__ = (
    "Selector",
    "Equivalence",
    "ComparisonOutcome",
    "Comparator",
    "Callback",
    "NoError",
)
