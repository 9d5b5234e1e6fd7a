from __future__ import annotations

class AlreadySubscribedError(Exception):
    """Stage already feeds a downstream subscriber."""

    stage: str

    def __init__(self, stage: str) -> None:
        self.stage = stage
        super().__init__(f"{stage} already has a downstream subscriber")

class NoValueError(Exception):
    """Nothing has been accepted (stage) or received (recorder) yet."""

    def __init__(self, message: str = "No value has been accepted") -> None:
        super().__init__(message)

class StreamNotTerminatedError(Exception):
    """Result requested before the stream delivered its terminal signal."""

    count: int

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Stream still open after {count} values")

__all__ = ("AlreadySubscribedError", "NoValueError", "StreamNotTerminatedError")
