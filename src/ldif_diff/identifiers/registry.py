"""Extractor registry with explicit selection by name."""

from __future__ import annotations

from dataclasses import dataclass, field

from ldif_diff.identifiers.base import UniqueIdentifierExtractor


@dataclass(slots=True)
class ExtractorRegistry:
    """Ordered extractor registry keyed by extractor name."""

    _extractors: dict[str, UniqueIdentifierExtractor] = field(default_factory=dict)

    def register(self, extractor: UniqueIdentifierExtractor) -> None:
        """Register an extractor in deterministic insertion order."""
        if extractor.name in self._extractors:
            raise ValueError(f"Extractor already registered: {extractor.name}")
        self._extractors[extractor.name] = extractor

    def select(self, name: str) -> UniqueIdentifierExtractor:
        """Return the extractor registered under ``name``."""
        extractor = self._extractors.get(name)
        if extractor is None:
            raise LookupError(f"No unique identifier extractor named: {name}")
        return extractor

    def names(self) -> tuple[str, ...]:
        """Return registered extractor names in deterministic order."""
        return tuple(self._extractors.keys())
