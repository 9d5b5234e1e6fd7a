from .dedup import (
    DedupStage,
    StagePhase,
    remove_duplicates,
    remove_duplicates_by,
    remove_duplicates_by_w,
    remove_duplicates_w,
    try_remove_duplicates,
    try_remove_duplicates_w,
)

__all__ = (
    "DedupStage",
    "StagePhase",
    # Plain
    "remove_duplicates",
    "remove_duplicates_by",
    "try_remove_duplicates",
    # With trace
    "remove_duplicates_w",
    "remove_duplicates_by_w",
    "try_remove_duplicates_w",
)
