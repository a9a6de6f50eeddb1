"""Record alignment between two snapshots."""

from .engine import AlignedPair, align

__all__ = ["AlignedPair", "align"]
