"""Unique identifier extractor protocol used for rename detection."""

from __future__ import annotations

from typing import Protocol


class UniqueIdentifierExtractor(Protocol):
    """Derives a stable secondary identifier from a record key."""

    name: str

    def extract(self, key: str) -> str | None:
        """Return the identifier embedded in ``key``, or None if it has none."""

    def to_key_prefix(self, identifier: str | None) -> str | None:
        """Render an identifier as the key prefix that every matching key shares."""


def extract_as_key_prefix(extractor: UniqueIdentifierExtractor, key: str) -> str | None:
    """Return ``extractor.to_key_prefix(extractor.extract(key))``."""
    return extractor.to_key_prefix(extractor.extract(key))
