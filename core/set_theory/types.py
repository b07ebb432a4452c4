"""
core/set_theory/types.py — Frozen value objects for pitch-class set theory.

All types are immutable frozen dataclasses — safe to hash, cache, and use as
dict keys. Every transformation returns a new instance.

Types:
    PitchClassSet  — an ordered pitch-class sequence with the set algebra as methods
    SetClassEntry  — one named row of the set-class reference table
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from core.set_theory import sets as algebra
from core.set_theory.arithmetic import validate_pitch_class

# ---------------------------------------------------------------------------
# PitchClassSet
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PitchClassSet:
    """An ordered sequence of pitch classes; duplicates allowed.

    Order is significant: the same type models a melodic line (a row of the
    matrix analyzer) and a sonority. Use ``members`` for the unordered view.

    Examples:
        PitchClassSet.of(0, 4, 7).transpose(2)   # (2, 6, 9)
        PitchClassSet.parse("0AB").complement()  # (1, 2, ..., 9)
    """

    pitch_classes: tuple[int, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.pitch_classes, tuple):
            object.__setattr__(self, "pitch_classes", tuple(self.pitch_classes))
        for pc in self.pitch_classes:
            validate_pitch_class(pc)

    @classmethod
    def of(cls, *pitch_classes: int) -> PitchClassSet:
        return cls(tuple(pitch_classes))

    @classmethod
    def from_iterable(cls, pitch_classes: Iterable[int]) -> PitchClassSet:
        return cls(tuple(pitch_classes))

    @classmethod
    def parse(cls, text: str) -> PitchClassSet:
        """Build from alphanumeric notation, e.g. ``"037"``."""
        return cls(algebra.parse_pitch_classes(text))

    # -- sequence protocol --------------------------------------------------

    def __len__(self) -> int:
        return len(self.pitch_classes)

    def __iter__(self) -> Iterator[int]:
        return iter(self.pitch_classes)

    def __getitem__(self, index: int) -> int:
        return self.pitch_classes[index]

    def __str__(self) -> str:
        return algebra.format_pitch_classes(self.pitch_classes)

    @property
    def members(self) -> frozenset[int]:
        """Distinct pitch classes, order and multiplicity dropped."""
        return frozenset(self.pitch_classes)

    # -- algebra ------------------------------------------------------------

    def transpose(self, n: int) -> PitchClassSet:
        return PitchClassSet(algebra.transpose(self.pitch_classes, n))

    def invert(self) -> PitchClassSet:
        return PitchClassSet(algebra.invert(self.pitch_classes))

    def complement(self) -> PitchClassSet:
        return PitchClassSet(algebra.complement(self.pitch_classes))

    def zero_form(self) -> PitchClassSet:
        return PitchClassSet(algebra.zero_form(self.pitch_classes))

    def normal_order(self) -> PitchClassSet:
        return PitchClassSet(algebra.normal_order(self.pitch_classes))

    def reduce(self) -> PitchClassSet:
        return PitchClassSet(algebra.reduce(self.pitch_classes))

    def prime_form(self) -> PitchClassSet:
        return PitchClassSet(algebra.prime_form(self.pitch_classes))

    def interval_vector(self) -> tuple[int, ...]:
        return algebra.interval_vector(self.pitch_classes)


# ---------------------------------------------------------------------------
# SetClassEntry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SetClassEntry:
    """A named set class from the reference table.

    Attributes:
        name:            Catalogue name, e.g. "3-11", "4-Z15", "5-3i".
        pitch_classes:   Canonical (already reduced) set, ascending from 0.
        interval_vector: Six interval-class counts.
        description:     Free-text label from the table.
    """

    name: str
    pitch_classes: tuple[int, ...]
    interval_vector: tuple[int, ...]
    description: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("SetClassEntry.name must not be empty")
        if len(self.interval_vector) != 6:
            raise ValueError(
                f"SetClassEntry.interval_vector must have 6 entries, got {len(self.interval_vector)}"
            )
        for pc in self.pitch_classes:
            validate_pitch_class(pc)

    @property
    def cardinality(self) -> int:
        return len(self.pitch_classes)

    def as_pitch_class_set(self) -> PitchClassSet:
        return PitchClassSet(self.pitch_classes)
