"""Single-pass streaming indexer mapping DNs to byte ranges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from ldif_diff.config import ALLOWED_LINE_SEPARATOR_BYTES, DEFAULT_LINE_SEPARATOR_BYTES
from ldif_diff.errors import InvalidArgumentError, MalformedInputError
from ldif_diff.index.models import Index, IndexEntry

KEY_PREFIX = b"dn: "


@dataclass(slots=True, frozen=True)
class NoOpenRecord:
    """Indexer state between records."""


@dataclass(slots=True, frozen=True)
class OpenRecord:
    """Indexer state after a key line and before its blank line."""

    key: str
    start: int


IndexerState = NoOpenRecord | OpenRecord

_NO_OPEN_RECORD = NoOpenRecord()


def build_index(
    source: BinaryIO,
    line_separator_bytes: int = DEFAULT_LINE_SEPARATOR_BYTES,
) -> Index:
    """Index every record in ``source`` and rewind it to the origin.

    Offsets are computed as ``len(line) + line_separator_bytes`` per line, so
    ``line_separator_bytes`` must match the terminator actually used by the
    source. A repeated key overwrites its earlier entry in place.
    """
    if line_separator_bytes not in ALLOWED_LINE_SEPARATOR_BYTES:
        raise InvalidArgumentError(
            f"line_separator_bytes must be one of {ALLOWED_LINE_SEPARATOR_BYTES}."
        )
    ensure_seekable(source)

    entries: dict[str, IndexEntry] = {}
    state: IndexerState = _NO_OPEN_RECORD
    offset = 0
    for raw_line in source:
        line = _strip_terminator(raw_line)
        if line.startswith(KEY_PREFIX):
            key = _decode_key(line, offset)
            # an unterminated record stays in the index with an open length
            state = OpenRecord(key=key, start=offset)
            entries[key] = IndexEntry(key=key, start_offset=offset)
        elif not line:
            if isinstance(state, NoOpenRecord):
                raise MalformedInputError(offset)
            entries[state.key] = IndexEntry(
                key=state.key,
                start_offset=state.start,
                length=offset - state.start,
            )
            state = _NO_OPEN_RECORD
        offset += len(line) + line_separator_bytes

    source.seek(0)
    return Index(entries)


def ensure_seekable(source: BinaryIO) -> None:
    """Reject sources that cannot be rewound for random access."""
    if not source.seekable():
        raise InvalidArgumentError("Source must support random access (seek).")


def _decode_key(line: bytes, offset: int) -> str:
    try:
        return line[len(KEY_PREFIX) :].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedInputError(offset, "Key line is not valid UTF-8") from exc


def _strip_terminator(raw_line: bytes) -> bytes:
    if raw_line.endswith(b"\n"):
        raw_line = raw_line[:-1]
    if raw_line.endswith(b"\r"):
        raw_line = raw_line[:-1]
    return raw_line
