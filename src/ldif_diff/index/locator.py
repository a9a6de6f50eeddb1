"""Key lookup against a built index, with identifier-based fallback."""

from __future__ import annotations

from ldif_diff.identifiers.base import UniqueIdentifierExtractor, extract_as_key_prefix
from ldif_diff.index.models import ByteRange, Index


def locate(index: Index, key: str) -> ByteRange | None:
    """Return the byte range indexed under exactly ``key``."""
    entry = index.get(key)
    if entry is None:
        return None
    return entry.byte_range()


def locate_by_identifier(
    index: Index,
    key: str,
    extractor: UniqueIdentifierExtractor,
) -> tuple[str, ByteRange] | None:
    """Return the first key in file order sharing ``key``'s identifier prefix.

    Later keys with the same prefix are never returned by this lookup.
    """
    prefix = extract_as_key_prefix(extractor, key)
    if prefix is None:
        return None
    for candidate, entry in index.items():
        if candidate.startswith(prefix):
            return candidate, entry.byte_range()
    return None
