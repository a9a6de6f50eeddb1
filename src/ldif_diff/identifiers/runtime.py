"""Runtime extractor registry construction."""

from __future__ import annotations

from ldif_diff.config import DiffConfig
from ldif_diff.identifiers.base import UniqueIdentifierExtractor
from ldif_diff.identifiers.fallback import NullExtractor
from ldif_diff.identifiers.registry import ExtractorRegistry
from ldif_diff.identifiers.uid import UidExtractor


def build_extractor_registry() -> ExtractorRegistry:
    """Build the registry of built-in extractors."""
    registry = ExtractorRegistry()
    registry.register(UidExtractor())
    registry.register(NullExtractor())
    return registry


def select_extractor(config: DiffConfig) -> UniqueIdentifierExtractor:
    """Select the extractor named by the effective config."""
    return build_extractor_registry().select(config.align.unique_identifier)
