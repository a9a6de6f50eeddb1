"""Extractor that never yields an identifier, disabling rename detection."""

from __future__ import annotations


class NullExtractor:
    """Default extractor when rename detection is turned off."""

    name = "none"

    def extract(self, key: str) -> str | None:
        """Null extractor recognizes no key shape."""
        _ = key
        return None

    def to_key_prefix(self, identifier: str | None) -> str | None:
        """Null extractor renders no prefix."""
        _ = identifier
        return None
