"""
Lift helpers with semantic namespaces.

    from pushstream import lift as L

    source = L.up.just(1, 1, 2)            # values -> stream
    result = await L.down.to_result(stage)  # stream -> Result

- L.up.*    - build a stream from plain values
- L.down.*  - drain a stream into a Result / WriterResult
"""

from __future__ import annotations

from . import down, up
from .down import collect, to_result, to_writer_result
from .up import empty, fail, from_iterable, just

__all__ = (
    # Namespaces
    "up",
    "down",
    # Up
    "empty",
    "fail",
    "from_iterable",
    "just",
    # Down
    "collect",
    "to_result",
    "to_writer_result",
)
