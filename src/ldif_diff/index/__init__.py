"""Byte-offset indexing and lookup."""

from .indexer import (
    DEFAULT_LINE_SEPARATOR_BYTES,
    KEY_PREFIX,
    NoOpenRecord,
    OpenRecord,
    build_index,
    ensure_seekable,
)
from .locator import locate, locate_by_identifier
from .models import OPEN_LENGTH, ByteRange, Index, IndexEntry

__all__ = [
    "ByteRange",
    "DEFAULT_LINE_SEPARATOR_BYTES",
    "Index",
    "IndexEntry",
    "KEY_PREFIX",
    "NoOpenRecord",
    "OPEN_LENGTH",
    "OpenRecord",
    "build_index",
    "ensure_seekable",
    "locate",
    "locate_by_identifier",
]
