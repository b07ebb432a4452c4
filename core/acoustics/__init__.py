"""
core/acoustics — Frequency, harmonic-series and tuning helpers.

Public API:
    Spectrum:  compute_harmonics, compute_subharmonics, compute_tartini,
               compute_octave, equal_frequency, compute_tuning, TartiniTones
    Pitch ids: pitch_id_to_midi, midi_to_pitch_id, pitch_id_to_pitch_class,
               midi_to_pitch_class
    Tuning:    Tuning, parse_scala, load_scala, cents_to_ratio, ratio_to_cents
"""

from core.acoustics.spectrum import (
    CENTS_CONVERSION,
    MAXIMUM_HUMAN_HEARING,
    MIDDLE_A,
    MINIMUM_HUMAN_HEARING,
    TartiniTones,
    compute_harmonics,
    compute_octave,
    compute_subharmonics,
    compute_tartini,
    compute_tuning,
    equal_frequency,
    midi_to_pitch_class,
    midi_to_pitch_id,
    pitch_id_to_midi,
    pitch_id_to_pitch_class,
)
from core.acoustics.tuning import Tuning, cents_to_ratio, load_scala, parse_scala, ratio_to_cents

__all__ = [
    "CENTS_CONVERSION",
    "MAXIMUM_HUMAN_HEARING",
    "MIDDLE_A",
    "MINIMUM_HUMAN_HEARING",
    "TartiniTones",
    "compute_harmonics",
    "compute_octave",
    "compute_subharmonics",
    "compute_tartini",
    "compute_tuning",
    "equal_frequency",
    "midi_to_pitch_class",
    "midi_to_pitch_id",
    "pitch_id_to_midi",
    "pitch_id_to_pitch_class",
    "Tuning",
    "cents_to_ratio",
    "load_scala",
    "parse_scala",
    "ratio_to_cents",
]
