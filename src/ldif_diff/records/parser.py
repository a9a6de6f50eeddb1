"""Record parser boundary backed by the ``ldif`` distribution."""

from __future__ import annotations

import base64
import io
from typing import Protocol

from ldif import LDIFParser

from ldif_diff.errors import RecordParseError
from ldif_diff.records.models import ParsedRecord


class RecordParser(Protocol):
    """Turns the bytes of exactly one record into a ParsedRecord."""

    def parse(self, data: bytes) -> ParsedRecord:
        """Parse one record or raise RecordParseError."""


class LdifRecordParser:
    """Strict LDIF parser for a single content record.

    Folded lines and base64 values are decoded by ``ldif``. Values that are
    not valid UTF-8 are reported as their base64 text.

    ``ldif`` trims leading and trailing whitespace from the dn and from plain
    values, so ``description: a `` and ``description: a`` parse the same. Only a
    base64 value keeps its surrounding whitespace.
    """

    def __init__(self, line_separator: bytes = b"\n") -> None:
        self._line_separator = line_separator

    def parse(self, data: bytes) -> ParsedRecord:
        parser = LDIFParser(io.BytesIO(data), line_sep=self._line_separator, strict=True)
        try:
            records = list(parser.parse())
        except ValueError as exc:
            raise RecordParseError(f"Invalid LDIF record: {exc}") from exc
        if len(records) != 1:
            raise RecordParseError(f"Expected exactly one LDIF record, found {len(records)}.")
        dn, entry = records[0]
        if not isinstance(dn, str):
            raise RecordParseError("LDIF record has no textual dn.")
        pairs: list[tuple[str, str]] = []
        for name, values in entry.items():
            for value in values:
                pairs.append((name, _value_text(value)))
        return ParsedRecord(key=dn, pairs=tuple(pairs))


def _value_text(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    return value
