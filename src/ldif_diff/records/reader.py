"""Random-access reads of single indexed records."""

from __future__ import annotations

from typing import BinaryIO

from ldif_diff.errors import InvalidArgumentError, ParserConsistencyError, TruncatedReadError
from ldif_diff.index.models import ByteRange
from ldif_diff.records.models import Record, build_record
from ldif_diff.records.parser import RecordParser


def read_entry(
    source: BinaryIO,
    byte_range: ByteRange,
    expected_key: str,
    parser: RecordParser,
) -> Record:
    """Read exactly one record's bytes from ``source`` and parse them.

    The parsed key must equal ``expected_key``; anything else means the index
    and the source disagree.
    """
    if byte_range.length < 0:
        raise InvalidArgumentError(
            f"Length can't be negative for {expected_key}; the record was never terminated."
        )
    source.seek(byte_range.start)
    data = source.read(byte_range.length)
    if len(data) != byte_range.length:
        raise TruncatedReadError(key=expected_key, expected=byte_range.length, actual=len(data))
    parsed = parser.parse(data)
    if parsed.key != expected_key:
        raise ParserConsistencyError(expected=expected_key, actual=parsed.key)
    return build_record(parsed)
