"""
Terminal signals and demand
===========================

Every stream ends with exactly one terminal signal: ``Completed()`` or
``Failed(reason)``. ``Demand`` is what a subscriber answers for each value.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Completed:
    """Stream finished normally."""


@dataclass(frozen=True, slots=True)
class Failed[E]:
    """Stream finished with a failure. ``reason`` is carried verbatim."""

    reason: E


type Completion[E] = Completed | Failed[E]


class Demand(enum.Enum):
    """Acknowledgement of a delivered value."""

    MORE = "more"
    CANCEL = "cancel"


__all__ = ("Completed", "Completion", "Demand", "Failed")
