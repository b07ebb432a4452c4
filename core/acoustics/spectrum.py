"""
core/acoustics/spectrum.py — Frequency helpers for harmonic and tuning work.

Harmonic and subharmonic series, Tartini (combination) tones, octave and
equal-temperament frequencies, plus conversions between pitch ids, MIDI note
numbers and pitch classes.

Pitch ids
=========
A pitch id counts equal-tempered semitones from A4 (440 Hz):

    pitch id   0  →  A4, MIDI 69, pitch class 9
    pitch id   3  →  C5, MIDI 72, pitch class 0
    pitch id  -5  →  E4, MIDI 64, pitch class 4

Design:
    - Pure functions; series are returned as numpy float arrays.
    - Hearing limits are defaults, not hard limits: every series function
      takes its bound as a parameter.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from core.set_theory.arithmetic import MODULUS

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MIDDLE_A = 440.0  # Hz, the A above middle C
MIDDLE_A_MIDI = 69

MINIMUM_HUMAN_HEARING = 4.0  # Hz; felt rather than heard below ~16 Hz
MAXIMUM_HUMAN_HEARING = 22050.0  # Hz; half the 44.1 kHz sampling rate

CENTS_CONVERSION = 1200.0 / math.log10(2.0)  # ≈ 3986.31371


@dataclass(frozen=True)
class TartiniTones:
    """Combination tones produced by two simultaneous frequencies."""

    difference: float
    sum: float


def _require_positive(value: float, name: str) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------


def compute_harmonics(fundamental: float, ceiling: float = MAXIMUM_HUMAN_HEARING) -> np.ndarray:
    """Return the harmonic series of ``fundamental`` up to ``ceiling``.

    Index 0 is the fundamental itself; index k is partial k+1. Partials below
    the audible range are still included.

    Args:
        fundamental: Frequency in Hz.
        ceiling:     Highest partial kept (inclusive), in Hz.

    Returns:
        Float array of partials ``n * fundamental`` for n = 1, 2, ...

    Raises:
        ValueError: If either argument is not positive.

    Example:
        >>> compute_harmonics(440.0, ceiling=2000.0)
        array([ 440.,  880., 1320., 1760.])
    """
    _require_positive(fundamental, "fundamental")
    _require_positive(ceiling, "ceiling")
    count = math.floor(ceiling / fundamental)
    partials = np.arange(1, count + 1, dtype=np.float64) * fundamental
    return partials[partials <= ceiling]


def compute_subharmonics(fundamental: float, floor: float = MINIMUM_HUMAN_HEARING) -> np.ndarray:
    """Return the subharmonic series ``fundamental / n`` down to ``floor``.

    Raises:
        ValueError: If either argument is not positive.
    """
    _require_positive(fundamental, "fundamental")
    _require_positive(floor, "floor")
    count = math.floor(fundamental / floor)
    partials = fundamental / np.arange(1, count + 1, dtype=np.float64)
    return partials[partials >= floor]


def compute_tartini(frequency_1: float, frequency_2: float) -> TartiniTones:
    """Difference and sum tones of two frequencies."""
    return TartiniTones(
        difference=abs(frequency_1 - frequency_2),
        sum=frequency_1 + frequency_2,
    )


def compute_octave(fundamental: float, octaves: float) -> float:
    """Frequency ``octaves`` octaves above ``fundamental`` (0 = unison)."""
    return fundamental * 2.0**octaves


def equal_frequency(pitch_id: float) -> float:
    """Twelve-tone equal-temperament frequency of a pitch id (A4 = 0)."""
    return compute_octave(MIDDLE_A, pitch_id / MODULUS)


def compute_tuning(
    fundamental: float,
    ratios: Sequence[float],
    ceiling: float = MAXIMUM_HUMAN_HEARING,
) -> np.ndarray:
    """Apply tuning ratios to a fundamental.

    Args:
        fundamental: Frequency of degree 0, in Hz.
        ratios:      Frequency ratios of the following degrees, in order.
        ceiling:     Generation stops at the first degree above this.

    Returns:
        Float array starting with ``fundamental``.

    Raises:
        ValueError: If ``fundamental`` or ``ceiling`` is not positive.
    """
    _require_positive(fundamental, "fundamental")
    _require_positive(ceiling, "ceiling")
    frequencies = [float(fundamental)]
    for ratio in ratios:
        frequency = fundamental * ratio
        if frequency > ceiling:
            break
        frequencies.append(frequency)
    return np.asarray(frequencies, dtype=np.float64)


# ---------------------------------------------------------------------------
# Pitch id / MIDI / pitch class conversions
# ---------------------------------------------------------------------------


def pitch_id_to_midi(pitch_id: int) -> int:
    return MIDDLE_A_MIDI + pitch_id


def midi_to_pitch_id(midi_note: int) -> int:
    return midi_note - MIDDLE_A_MIDI


def pitch_id_to_pitch_class(pitch_id: int) -> int:
    """Pitch class of a pitch id; A is 9, so id 3 (C5) maps to 0."""
    return (pitch_id + 9) % MODULUS


def midi_to_pitch_class(midi_note: int) -> int:
    return pitch_id_to_pitch_class(midi_to_pitch_id(midi_note))
