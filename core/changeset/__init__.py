"""Apply and revert assistant-proposed file operation batches."""

from .engine import ChangeSetEngine, apply_operations, revert_change_set, snapshot_paths
from .operations import (
    DELETE_FILE,
    WRITE_FILE,
    parse_assistant_result,
    parse_operation,
    parse_operations,
)

__all__ = [
    "ChangeSetEngine",
    "apply_operations",
    "revert_change_set",
    "snapshot_paths",
    "DELETE_FILE",
    "WRITE_FILE",
    "parse_assistant_result",
    "parse_operation",
    "parse_operations",
]
