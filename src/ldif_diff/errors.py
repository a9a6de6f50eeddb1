"""Error taxonomy for ldif comparison runs.

Every error is fatal at the point it is raised: a run aborts on the first
inconsistency and output already written is left as is.
"""

from __future__ import annotations


class LdifDiffError(Exception):
    """Base class for all comparison failures."""

    code = "LDIF_DIFF_ERROR"


class MalformedInputError(LdifDiffError):
    """Raised when the line at ``offset`` breaks the record framing."""

    code = "MALFORMED_INPUT"

    def __init__(
        self, offset: int, reason: str = "Blank line does not close an open record"
    ) -> None:
        super().__init__(f"{reason} (byte offset {offset}).")
        self.offset = offset


class TruncatedReadError(LdifDiffError):
    """Raised when a source holds fewer bytes than the indexed length."""

    code = "TRUNCATED_READ"

    def __init__(self, key: str, expected: int, actual: int) -> None:
        super().__init__(f"Unable to read {expected} bytes for {key}; got {actual}.")
        self.key = key
        self.expected = expected
        self.actual = actual


class ParserConsistencyError(LdifDiffError):
    """Raised when the parsed record key differs from the indexed key."""

    code = "PARSER_CONSISTENCY"

    def __init__(self, expected: str, actual: str | None) -> None:
        super().__init__(f"Entry doesn't match dn {expected}. Instead, it's {actual}.")
        self.expected = expected
        self.actual = actual


class ConsistencyError(LdifDiffError):
    """Raised when a candidate key cannot be resolved to a single pairing."""

    code = "CONSISTENCY"


class InvalidArgumentError(LdifDiffError, ValueError):
    """Raised for negative read lengths, empty diff calls, or unusable sources."""

    code = "INVALID_ARGUMENT"


class RecordParseError(LdifDiffError):
    """Raised when record bytes do not parse as a single well-formed record."""

    code = "RECORD_PARSE"


class SourceNotFoundError(LdifDiffError):
    """Raised when an input path does not exist."""

    code = "SOURCE_NOT_FOUND"

    def __init__(self, path: str) -> None:
        super().__init__(f"{path} not found")
        self.path = path
