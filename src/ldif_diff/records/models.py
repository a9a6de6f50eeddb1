"""Typed models for parsed directory records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


def fold_name(name: str) -> str:
    """Return the case-insensitive form of an attribute description."""
    return name.lower()


@dataclass(slots=True, frozen=True)
class ParsedRecord:
    """Raw parser output: a key and attribute/value pairs in input order."""

    key: str
    pairs: tuple[tuple[str, str], ...]


@dataclass(slots=True, frozen=True)
class Record:
    """A keyed record whose attributes map to unordered value sets.

    Attribute names are matched case-insensitively; ``attributes`` keeps the
    spelling each name was first seen with.
    """

    key: str
    attributes: Mapping[str, frozenset[str]]

    def attribute_names(self) -> tuple[str, ...]:
        return tuple(sorted(self.attributes.keys(), key=lambda name: (fold_name(name), name)))

    def values(self, name: str) -> frozenset[str]:
        folded = fold_name(name)
        for attribute, values in self.attributes.items():
            if fold_name(attribute) == folded:
                return values
        return frozenset()

    def folded_attributes(self) -> dict[str, tuple[str, frozenset[str]]]:
        """Map each folded name to its display spelling and values."""
        return {fold_name(name): (name, values) for name, values in self.attributes.items()}


def build_record(parsed: ParsedRecord) -> Record:
    """Collapse duplicate attribute values into one set per attribute.

    ``cn`` and ``CN`` in the same record are one attribute.
    """
    spellings: dict[str, str] = {}
    collected: dict[str, set[str]] = {}
    for name, value in parsed.pairs:
        folded = fold_name(name)
        spellings.setdefault(folded, name)
        collected.setdefault(folded, set()).add(value)
    return Record(
        key=parsed.key,
        attributes={spellings[folded]: frozenset(values) for folded, values in collected.items()},
    )
