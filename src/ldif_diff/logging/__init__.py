"""Structured logging utilities."""

from .runlog import (
    INDEX_BUILT,
    PROGRESS,
    RUN_ABORTED,
    RUN_FINISHED,
    RUN_STARTED,
    JsonlRunLogger,
    RunEvent,
    new_run_id,
    utc_timestamp,
)

__all__ = [
    "INDEX_BUILT",
    "JsonlRunLogger",
    "PROGRESS",
    "RUN_ABORTED",
    "RUN_FINISHED",
    "RUN_STARTED",
    "RunEvent",
    "new_run_id",
    "utc_timestamp",
]
