"""
core/set_theory/arithmetic.py — Pitch-class arithmetic and digit notation.

Pitch classes are integers in [0, 11] (0 = C). Every operation here reduces
its result mod 12, so results are never negative.

Reference tables write pitch classes and interval-vector counts as single
alphanumeric digits: '0'-'9' are literal, 'A' = 10, 'B' = 11, 'C' = 12
(case-insensitive). 'C' only appears in interval vectors of the aggregate.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MODULUS: int = 12
"""Size of the pitch-class universe."""

UNIVERSE: tuple[int, ...] = tuple(range(MODULUS))
"""All twelve pitch classes in ascending order."""

_ALPHA_DIGITS: str = "0123456789ABC"

# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def transpose_pc(pc: int, n: int) -> int:
    """Transpose a single pitch class by ``n`` semitones (Tn)."""
    return (pc + n) % MODULUS


def invert_pc(pc: int) -> int:
    """Invert a single pitch class around 0 (T0I)."""
    return (MODULUS - pc) % MODULUS


def validate_pitch_class(value: int) -> int:
    """Return ``value`` unchanged if it is a valid pitch class.

    Raises:
        ValueError: If value is not an int in [0, 11].
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Pitch class must be an int, got {value!r}")
    if not (0 <= value < MODULUS):
        raise ValueError(f"Pitch class must be in [0, 11], got {value}")
    return value


# ---------------------------------------------------------------------------
# Alphanumeric digits
# ---------------------------------------------------------------------------


def digit_from_alpha(char: str) -> int:
    """Convert one alphanumeric digit to its integer value.

    Args:
        char: Single character, '0'-'9' or 'A'/'B'/'C' (any case).

    Returns:
        Integer in [0, 12].

    Raises:
        ValueError: If char is not a single recognised digit.

    Examples:
        >>> digit_from_alpha("7")
        7
        >>> digit_from_alpha("b")
        11
    """
    if len(char) != 1:
        raise ValueError(f"Expected a single digit, got {char!r}")
    index = _ALPHA_DIGITS.find(char.upper())
    if index < 0:
        raise ValueError(f"Unknown pitch-class digit {char!r}")
    return index


def digit_to_alpha(value: int) -> str:
    """Convert an integer in [0, 12] to its alphanumeric digit.

    Raises:
        ValueError: If value is outside [0, 12].
    """
    if not (0 <= value < len(_ALPHA_DIGITS)):
        raise ValueError(f"Value {value} has no single-digit form (expected 0-12)")
    return _ALPHA_DIGITS[value]
