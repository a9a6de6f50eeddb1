"""Value-set diffing and reporting."""

from .engine import (
    ADDED,
    REMOVED,
    RENAMED,
    UNCHANGED,
    AttributeDiff,
    DiffRecord,
    canonicalize,
    classify_identity,
    diff_attribute,
    diff_pair,
)
from .report import format_diff_record, write_diff_records

__all__ = [
    "ADDED",
    "AttributeDiff",
    "DiffRecord",
    "REMOVED",
    "RENAMED",
    "UNCHANGED",
    "canonicalize",
    "classify_identity",
    "diff_attribute",
    "diff_pair",
    "format_diff_record",
    "write_diff_records",
]
