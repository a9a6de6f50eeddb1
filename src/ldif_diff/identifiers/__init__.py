"""Unique identifier extractors for rename detection."""

from .base import UniqueIdentifierExtractor, extract_as_key_prefix
from .fallback import NullExtractor
from .registry import ExtractorRegistry
from .runtime import build_extractor_registry, select_extractor
from .uid import UidExtractor

__all__ = [
    "ExtractorRegistry",
    "NullExtractor",
    "UidExtractor",
    "UniqueIdentifierExtractor",
    "build_extractor_registry",
    "extract_as_key_prefix",
    "select_extractor",
]
