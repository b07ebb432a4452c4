"""
core/acoustics/tuning.py — Scala (.scl) tuning files and cents/ratio conversion.

Scala format (http://www.huygens-fokker.org/scala/scl_format.html)
=================================================================
    ! comment lines start with '!'
    Description of the tuning (may be empty)
     12
    !
     104.955        ← contains '.': cents
     9/8            ← contains '/': frequency ratio
     2              ← bare integer: ratio n/1

Only the first whitespace-separated token of a pitch line is read; anything
after it is a label. The declared count must match the number of pitch lines.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path

from core.acoustics.spectrum import CENTS_CONVERSION

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


def ratio_to_cents(ratio: float) -> float:
    """Size of a frequency ratio in cents (1200 per octave)."""
    if ratio <= 0:
        raise ValueError(f"ratio must be positive, got {ratio}")
    return math.log10(ratio) * CENTS_CONVERSION


def cents_to_ratio(cents: float) -> float:
    """Frequency ratio spanning ``cents``."""
    return 10.0 ** (cents / CENTS_CONVERSION)


# ---------------------------------------------------------------------------
# Tuning
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Tuning:
    """A scale as cents above its 1/1 degree.

    Attributes:
        description: Free-text description from the file.
        cents:       One value per degree; 1/1 itself is implicit.
        source:      Where the tuning was loaded from, if anywhere.
    """

    description: str
    cents: tuple[float, ...]
    source: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.cents, tuple):
            object.__setattr__(self, "cents", tuple(self.cents))

    @property
    def ratios(self) -> tuple[float, ...]:
        """Degrees as frequency ratios, for ``compute_tuning``."""
        return tuple(cents_to_ratio(c) for c in self.cents)

    def __len__(self) -> int:
        return len(self.cents)


def _parse_pitch(token: str, where: str) -> float:
    try:
        if "." in token:
            return float(token)
        if "/" in token:
            numerator, denominator = token.split("/", 1)
            return ratio_to_cents(int(numerator) / int(denominator))
        return ratio_to_cents(int(token))
    except (ValueError, ZeroDivisionError) as exc:
        raise ValueError(f"{where}: invalid pitch {token!r}") from exc


def parse_scala(text: str, *, source: str = "<string>") -> Tuning:
    """Parse Scala file contents.

    Raises:
        ValueError: If the count line is missing or not an integer, a pitch
            cannot be parsed, or the number of pitches differs from the
            declared count.
    """
    description: str | None = None
    declared: int | None = None
    cents: list[float] = []

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if line.startswith("!"):
            continue
        where = f"{source}:{line_number}"
        if description is None:
            description = line
            continue
        if not line:
            continue
        token = line.split()[0]
        if declared is None:
            try:
                declared = int(token)
            except ValueError as exc:
                raise ValueError(f"{where}: expected the number of notes, got {token!r}") from exc
            continue
        cents.append(_parse_pitch(token, where))

    if declared is None:
        raise ValueError(f"{source}: missing description or note count")
    if declared != len(cents):
        raise ValueError(f"{source}: declares {declared} notes but lists {len(cents)}")
    return Tuning(description=description or "", cents=tuple(cents), source=source)


def load_scala(path: str | Path) -> Tuning:
    """Read a ``.scl`` file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the contents are malformed.
    """
    source = str(path)
    tuning = parse_scala(Path(path).read_text(encoding="utf-8", errors="replace"), source=source)
    logger.debug("Loaded tuning %r (%d notes) from %s", tuning.description, len(tuning), source)
    return tuning
