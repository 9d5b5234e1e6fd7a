from .build import by, by_equality, by_key, catching
from .outcome import EQUAL, NOT_EQUAL, comparison_failed, equal_if

__all__ = (
    # Outcomes
    "EQUAL",
    "NOT_EQUAL",
    "comparison_failed",
    "equal_if",
    # Constructors
    "by",
    "by_equality",
    "by_key",
    "catching",
)
