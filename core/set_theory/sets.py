"""
core/set_theory/sets.py — Pitch-class set algebra.

Pure functions over ordered pitch-class sequences. Inputs may be any
``Sequence[int]``; results are always new tuples and inputs are never
mutated. Duplicates are preserved except where an operation is defined over
distinct members (complement, interval vector).

Canonical forms
===============
normal order  — the rotation of the sorted set judged most compact by
                compare_compact(); ties keep the earlier rotation.
reduce        — zero_form(normal_order(s)).
prime form    — the more compact of reduce(s) and reduce(invert(s)).

Compactness is judged on the descending reading of each candidate: first the
span from the lowest to the highest member, then the distance from the lowest
member to each next-highest member, inward until a strict difference.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from itertools import combinations

from core.set_theory.arithmetic import (
    MODULUS,
    UNIVERSE,
    digit_from_alpha,
    digit_to_alpha,
    invert_pc,
    transpose_pc,
    validate_pitch_class,
)

# ---------------------------------------------------------------------------
# Whole-set transformations
# ---------------------------------------------------------------------------


def transpose(pcs: Sequence[int], n: int) -> tuple[int, ...]:
    """Transpose every member by ``n`` semitones (Tn).

    ``n`` may be any integer; it is reduced mod 12.

    Examples:
        >>> transpose([0, 3, 5, 6, 9], 4)
        (4, 7, 9, 10, 1)
    """
    n %= MODULUS
    return tuple(transpose_pc(pc, n) for pc in pcs)


def invert(pcs: Sequence[int]) -> tuple[int, ...]:
    """Invert every member around 0 (T0I).

    Examples:
        >>> invert([4, 7, 9, 10, 1])
        (8, 5, 3, 2, 11)
    """
    return tuple(invert_pc(pc) for pc in pcs)


def complement(pcs: Sequence[int]) -> tuple[int, ...]:
    """Return the pitch classes not in ``pcs``, ascending.

    Examples:
        >>> complement([0, 3, 5, 6, 9])
        (1, 2, 4, 7, 8, 10, 11)
    """
    members = {pc % MODULUS for pc in pcs}
    return tuple(pc for pc in UNIVERSE if pc not in members)


def zero_form(pcs: Sequence[int]) -> tuple[int, ...]:
    """Transpose so that the first member becomes 0.

    Examples:
        >>> zero_form([7, 10, 0, 1, 4])
        (0, 3, 5, 6, 9)
    """
    if not pcs:
        return ()
    first = pcs[0]
    n = 0 if first == 0 else MODULUS - first
    return transpose(pcs, n)


# ---------------------------------------------------------------------------
# Canonical forms
# ---------------------------------------------------------------------------


def compare_compact(winner: Sequence[int], candidate: Sequence[int]) -> tuple[int, ...]:
    """Return whichever of two equal-length orderings is more compact.

    Both sequences are read in reverse. Walking from the outer edge inward,
    the interval from the last reversed element (the original first) to the
    element at each index is compared mod 12. The first strict difference
    decides; the smaller interval wins. A complete tie keeps ``winner``.

    Args:
        winner:    Current best ordering.
        candidate: Ordering competing with it.

    Returns:
        The winning ordering, in its original (unreversed) reading.

    Raises:
        ValueError: If the two sequences differ in length.

    Examples:
        >>> compare_compact([1, 4, 6, 7, 10], [4, 6, 7, 10, 1])
        (4, 6, 7, 10, 1)
    """
    if len(winner) != len(candidate):
        raise ValueError(
            f"Cannot compare orderings of different lengths ({len(winner)} vs {len(candidate)})"
        )
    w = winner[::-1]
    c = candidate[::-1]
    for index in range(len(w)):
        w_interval = (w[index] - w[-1]) % MODULUS
        c_interval = (c[index] - c[-1]) % MODULUS
        if c_interval == w_interval:
            continue
        if c_interval < w_interval:
            return tuple(candidate)
        break
    return tuple(winner)


def _rotations(ordered: Sequence[int]) -> Iterator[tuple[int, ...]]:
    """Yield the len-1 non-identity rotations, each moving the head to the tail."""
    current = tuple(ordered)
    for _ in range(len(current) - 1):
        current = current[1:] + current[:1]
        yield current


def normal_order(pcs: Sequence[int]) -> tuple[int, ...]:
    """Return the most compact rotation of the sorted set.

    Sets of length 0 or 1 are returned unchanged.

    Examples:
        >>> normal_order([1, 4, 6, 7, 10])
        (4, 6, 7, 10, 1)
    """
    if len(pcs) <= 1:
        return tuple(pcs)
    winner = tuple(sorted(pcs))
    for rotation in _rotations(winner):
        winner = compare_compact(winner, rotation)
    return winner


def reduce(pcs: Sequence[int]) -> tuple[int, ...]:
    """Zero form of the normal order.

    Examples:
        >>> reduce([1, 4, 6, 7, 10])
        (0, 2, 3, 6, 9)
    """
    return zero_form(normal_order(pcs))


def prime_form(pcs: Sequence[int]) -> tuple[int, ...]:
    """Return the more compact of the set's reduced form and its mirror's.

    The result is always one of ``reduce(pcs)`` or ``reduce(invert(pcs))``.
    Sets of length 0 or 1 are returned unchanged.

    Examples:
        >>> prime_form([1, 4, 6, 7, 10])
        (0, 1, 3, 6, 9)
    """
    if len(pcs) <= 1:
        return tuple(pcs)
    return compare_compact(reduce(pcs), reduce(invert(pcs)))


def interval_vector(pcs: Sequence[int]) -> tuple[int, ...]:
    """Count interval classes 1-6 among pairs of distinct members.

    Examples:
        >>> interval_vector([0, 3, 7])
        (0, 0, 1, 1, 1, 0)
    """
    counts = [0] * 6
    distinct = sorted({pc % MODULUS for pc in pcs})
    for low, high in combinations(distinct, 2):
        distance = high - low
        interval_class = min(distance, MODULUS - distance)
        counts[interval_class - 1] += 1
    return tuple(counts)


# ---------------------------------------------------------------------------
# Alphanumeric notation
# ---------------------------------------------------------------------------


def parse_pitch_classes(text: str) -> tuple[int, ...]:
    """Parse an alphanumeric pitch-class string such as ``"047"`` or ``"0AB"``.

    Raises:
        ValueError: On unknown digits or values outside [0, 11].
    """
    return tuple(validate_pitch_class(digit_from_alpha(char)) for char in text.strip())


def format_pitch_classes(pcs: Sequence[int]) -> str:
    """Inverse of parse_pitch_classes(): ``(0, 10, 11) -> "0AB"``."""
    return "".join(digit_to_alpha(pc) for pc in pcs)
