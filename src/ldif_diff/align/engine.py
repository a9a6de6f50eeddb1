"""Pairing of records between two indices, with rename detection."""

from __future__ import annotations

from dataclasses import dataclass

from ldif_diff.errors import ConsistencyError
from ldif_diff.identifiers.base import UniqueIdentifierExtractor
from ldif_diff.index.locator import locate, locate_by_identifier
from ldif_diff.index.models import ByteRange, Index


@dataclass(slots=True, frozen=True)
class AlignedPair:
    """One pairing of an original record with a new record.

    At least one side is present. A rename has both keys present and
    different; an addition or removal has exactly one side.
    """

    orig_key: str | None
    new_key: str | None
    orig_range: ByteRange | None
    new_range: ByteRange | None

    @property
    def is_rename(self) -> bool:
        return (
            self.orig_key is not None
            and self.new_key is not None
            and self.orig_key != self.new_key
        )


@dataclass(slots=True)
class _Side:
    """Lookup state for one index during a single alignment run."""

    label: str
    index: Index
    other: Index
    claimed: set[str]

    def resolve(
        self, key: str, extractor: UniqueIdentifierExtractor
    ) -> tuple[str | None, ByteRange | None]:
        exact = locate(self.index, key)
        if exact is not None:
            return key, exact
        hit = locate_by_identifier(self.index, key, extractor)
        if hit is None:
            return None, None
        resolved_key, resolved_range = hit
        if resolved_key in self.claimed or resolved_key in self.other:
            raise ConsistencyError(
                f"{key} resolves by identifier to {resolved_key} in the {self.label} index, "
                f"which is already paired."
            )
        return resolved_key, resolved_range


def align(
    orig_index: Index,
    new_index: Index,
    extractor: UniqueIdentifierExtractor,
) -> list[AlignedPair]:
    """Return record pairings in ascending candidate key order.

    Candidates are the sorted union of both indices' keys. A key missing on
    one side is probed on that side by unique identifier; the first match in
    file order becomes the rename partner and is not emitted again as its own
    candidate.
    """
    orig = _Side(label="original", index=orig_index, other=new_index, claimed=set())
    new = _Side(label="new", index=new_index, other=orig_index, claimed=set())
    candidates = sorted(set(orig_index) | set(new_index))

    pairs: list[AlignedPair] = []
    for key in candidates:
        if key in orig.claimed or key in new.claimed:
            continue
        orig_key, orig_range = orig.resolve(key, extractor)
        new_key, new_range = new.resolve(key, extractor)
        if orig_range is None and new_range is None:
            raise ConsistencyError(f"Can't find {key} in either index")
        if orig_key is not None:
            orig.claimed.add(orig_key)
        if new_key is not None:
            new.claimed.add(new_key)
        pairs.append(
            AlignedPair(
                orig_key=orig_key,
                new_key=new_key,
                orig_range=orig_range,
                new_range=new_range,
            )
        )
    return pairs
