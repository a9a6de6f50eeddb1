"""Extractor for DNs whose first RDN is ``uid=<id>``."""

from __future__ import annotations

UID_PREFIX = "uid="


class UidExtractor:
    """Extract ``<id>`` from ``uid=<id>,<rest>`` keys."""

    name = "uid"

    def extract(self, key: str) -> str | None:
        if not key.startswith(UID_PREFIX):
            return None
        end = key.find(",", len(UID_PREFIX))
        if end < 0:
            return None
        identifier = key[len(UID_PREFIX) : end]
        return identifier or None

    def to_key_prefix(self, identifier: str | None) -> str | None:
        if not identifier:
            return None
        return f"{UID_PREFIX}{identifier},"
