"""
Log - ordered record of stage events
====================================
"""

from __future__ import annotations


class Log[A](list[A]):
    """
    Snapshot of trace entries, oldest first.

    ``combine`` joins two snapshots (for instance the traces of two stages run
    one after another) without touching either. ``Log()`` is its identity.
    """

    @staticmethod
    def of[T](*items: T) -> Log[T]:
        return Log[T](items)

    def combine(self, other: Log[A], /) -> Log[A]:
        return Log([*self, *other])


__all__ = ("Log",)
