"""
core/set_theory/permutations.py — Pairings of source sets for composition.

Used to feed material combinations into the matrix analyzer: every ordered
pair of rows, skipping pairs whose members are the same pitch classes (a row
paired with itself, or with its own retrograde or any other reordering).
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import product


def permutate_set_pairs(
    sets: Sequence[Sequence[int]],
) -> list[tuple[tuple[int, ...], tuple[int, ...]]]:
    """Return ordered pairs drawn with repetition, minus same-content pairs.

    Args:
        sets: Source rows. Order is preserved in the output.

    Returns:
        List of (first, second) tuples in itertools.product order.

    Examples:
        >>> pairs = permutate_set_pairs([[0, 1, 2], [2, 1, 0], [3, 4, 5], [5, 4, 3]])
        >>> len(pairs)
        8
        >>> pairs[0]
        ((0, 1, 2), (3, 4, 5))
    """
    rows = [tuple(s) for s in sets]
    return [(first, second) for first, second in product(rows, repeat=2) if set(first) != set(second)]
