"""Typed models for byte-offset record indices."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

OPEN_LENGTH = -1


@dataclass(slots=True, frozen=True)
class ByteRange:
    """Contiguous byte span of one record inside a source."""

    start: int
    length: int


@dataclass(slots=True, frozen=True)
class IndexEntry:
    """Location of a single record, keyed by its DN."""

    key: str
    start_offset: int
    length: int = OPEN_LENGTH

    @property
    def is_closed(self) -> bool:
        """Return True once the terminating blank line has been observed."""
        return self.length != OPEN_LENGTH

    def byte_range(self) -> ByteRange:
        return ByteRange(start=self.start_offset, length=self.length)


class Index(Mapping[str, IndexEntry]):
    """Read-only key to entry mapping in first-seen file order."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, IndexEntry]) -> None:
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, key: str) -> IndexEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Index({len(self._entries)} entries)"
