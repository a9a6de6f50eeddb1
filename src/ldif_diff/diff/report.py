"""Line-oriented rendering of diff records."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from ldif_diff.diff.engine import ADDED, REMOVED, RENAMED, UNCHANGED, DiffRecord


def format_diff_record(record: DiffRecord) -> list[str]:
    """Render a diff record, starting with its separating blank line."""
    lines = [""]
    if record.identity == UNCHANGED:
        lines.append(f"dn: {record.orig_key}")
    elif record.identity == RENAMED:
        lines.append(f"- {record.orig_key}")
        lines.append(f"+ {record.new_key}")
    elif record.identity == REMOVED:
        lines.append(f"- {record.orig_key}")
    elif record.identity == ADDED:
        lines.append(f"+ {record.new_key}")
    else:
        raise ValueError(f"Unknown identity kind: {record.identity}")
    for attribute in record.attributes:
        for sign, value in attribute.changes:
            lines.append(f"{sign} {attribute.name}: {value}")
    return lines


def write_diff_records(records: Iterable[DiffRecord], out_stream: TextIO) -> int:
    """Write each record to ``out_stream`` and return how many were written."""
    written = 0
    for record in records:
        for line in format_diff_record(record):
            out_stream.write(f"{line}\n")
        written += 1
    return written
