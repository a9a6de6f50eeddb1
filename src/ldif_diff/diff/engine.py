"""Deterministic per-attribute value-set diffs for aligned record pairs."""

from __future__ import annotations

from dataclasses import dataclass

from ldif_diff.align.engine import AlignedPair
from ldif_diff.errors import InvalidArgumentError
from ldif_diff.records.models import Record

UNCHANGED = "unchanged"
RENAMED = "renamed"
ADDED = "added"
REMOVED = "removed"

REMOVED_SIGN = "-"
ADDED_SIGN = "+"

CanonicalRecord = tuple[str, tuple[tuple[str, tuple[str, ...]], ...]]


@dataclass(slots=True, frozen=True)
class AttributeDiff:
    """Value changes for one attribute.

    ``changes`` interleaves removals and additions in ascending value order.
    """

    name: str
    added: tuple[str, ...]
    removed: tuple[str, ...]
    changes: tuple[tuple[str, str], ...]


@dataclass(slots=True, frozen=True)
class DiffRecord:
    """Identity header plus attribute diffs for one pairing."""

    identity: str
    orig_key: str | None
    new_key: str | None
    attributes: tuple[AttributeDiff, ...]


def canonicalize(record: Record) -> CanonicalRecord:
    """Return a sorted, hash-independent form used for equality checks.

    Attribute names are folded, so a change of name case alone is not a
    difference.
    """
    folded = record.folded_attributes()
    return (
        record.key,
        tuple((name, tuple(sorted(folded[name][1]))) for name in sorted(folded)),
    )


def classify_identity(orig_key: str | None, new_key: str | None) -> str:
    if orig_key is None and new_key is None:
        raise InvalidArgumentError("orig_key and new_key can't both be None")
    if orig_key is None:
        return ADDED
    if new_key is None:
        return REMOVED
    if orig_key == new_key:
        return UNCHANGED
    return RENAMED


def diff_attribute(
    name: str, orig_values: frozenset[str], new_values: frozenset[str]
) -> AttributeDiff | None:
    """Diff one attribute's value sets, or return None when they are equal."""
    if orig_values == new_values:
        return None
    changes: list[tuple[str, str]] = []
    for value in sorted(orig_values | new_values):
        in_orig = value in orig_values
        in_new = value in new_values
        if in_orig and not in_new:
            changes.append((REMOVED_SIGN, value))
        elif in_new and not in_orig:
            changes.append((ADDED_SIGN, value))
    return AttributeDiff(
        name=name,
        added=tuple(value for sign, value in changes if sign == ADDED_SIGN),
        removed=tuple(value for sign, value in changes if sign == REMOVED_SIGN),
        changes=tuple(changes),
    )


def diff_pair(
    pair: AlignedPair,
    orig_record: Record | None,
    new_record: Record | None,
) -> DiffRecord | None:
    """Diff one aligned pair; return None when both sides are identical."""
    if orig_record is None and new_record is None:
        raise InvalidArgumentError("orig_record and new_record can't both be None")
    if orig_record is not None and new_record is not None:
        if canonicalize(orig_record) == canonicalize(new_record):
            return None

    identity = classify_identity(pair.orig_key, pair.new_key)
    empty = Record(key="", attributes={})
    orig = orig_record or empty
    new = new_record or empty
    orig_folded = orig.folded_attributes()
    new_folded = new.folded_attributes()
    attributes: list[AttributeDiff] = []
    for folded in sorted(set(orig_folded) | set(new_folded)):
        orig_name, orig_values = orig_folded.get(folded, ("", frozenset()))
        new_name, new_values = new_folded.get(folded, ("", frozenset()))
        # orig spelling wins when both sides carry the attribute
        attribute_diff = diff_attribute(orig_name or new_name, orig_values, new_values)
        if attribute_diff is not None:
            attributes.append(attribute_diff)
    return DiffRecord(
        identity=identity,
        orig_key=pair.orig_key,
        new_key=pair.new_key,
        attributes=tuple(attributes),
    )
