"""
core/music_math.py — Small numeric helpers for compositional work.

Deltas between successive values, mid-riser quantization, rhythm-to-seconds
conversion, linear/exponential range mapping and bounded random values.

Design:
    - Pure functions; randomness goes through a seeded random.Random so
      results are reproducible when a seed is given.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence


def compute_deltas(values: Sequence[float]) -> list[float]:
    """Difference between each value and the one after it.

    Example:
        >>> compute_deltas([1, 5, 4, 23, 8, 6])
        [-4, 1, -19, 15, 2]
    """
    return [values[i - 1] - values[i] for i in range(1, len(values))]


def quantize(value: float, step: float = 1.0) -> int:
    """Mid-riser uniform quantization: ``floor(step * (value / step + 0.5))``.

    Example:
        >>> quantize(32.4546, 25)
        44
    """
    if step == 0:
        raise ValueError("step must be non-zero")
    return math.floor(step * (value / step + 0.5))


def convert_rhythm(rhythm: float, beat: float, tempo: float, unit_of_time: float = 60.0) -> float:
    """Duration in seconds of a rhythmic value.

    Args:
        rhythm:       Fraction of a whole note, e.g. 0.125 for an eighth.
        beat:         Fraction of a whole note that gets the beat (0.25 in 4/4).
        tempo:        Beats per ``unit_of_time``.
        unit_of_time: Seconds the tempo is measured over (60 for BPM).
    """
    if beat == 0 or tempo == 0:
        raise ValueError("beat and tempo must be non-zero")
    return (rhythm / beat) * (unit_of_time / tempo)


def rescale(
    value: float,
    old_range: tuple[float, float],
    new_range: tuple[float, float],
    base: float = 1.0,
) -> float:
    """Map ``value`` from ``old_range`` into ``new_range``.

    With ``base == 1`` the mapping is linear; any other base bends it
    exponentially. Values at or beyond either end of ``old_range`` clamp to
    the matching end of ``new_range``.

    Example:
        >>> round(rescale(30, (1, 100), (5, 95)), 3)
        31.364
        >>> round(rescale(30, (1, 100), (5, 95), base=4), 3)
        20.028
    """
    old_low, old_high = old_range
    new_low, new_high = new_range
    if old_high == old_low:
        raise ValueError("old_range must span a non-zero interval")
    if value >= old_high:
        return new_high
    if value <= old_low:
        return new_low

    position = (value - old_low) / (old_high - old_low)
    if base == 1.0:
        return (new_high - new_low) * position + new_low
    return (new_high - new_low) / (base - 1.0) * (base**position - 1.0) + new_low


def random_in_range(low: float, high: float, seed: int | None = None) -> float:
    """Uniform random value between ``low`` and ``high`` (either order).

    Args:
        seed: Random seed for reproducibility. None = non-deterministic.
    """
    if low == high:
        return low
    rng = random.Random(seed)
    return min(low, high) + rng.random() * abs(high - low)
