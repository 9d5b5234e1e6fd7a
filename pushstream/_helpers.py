"""Internal helpers for pushstream.

Not part of the public API."""

from __future__ import annotations


class Missing:
    """Marker for "no value". ``None`` is an ordinary stream value, so it cannot play this role."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"


MISSING = Missing()


__all__ = ("MISSING", "Missing")
