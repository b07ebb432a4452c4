"""
Tests for core.acoustics.spectrum.

Validates:
    - Harmonic and subharmonic series and their bounds
    - Tartini tones, octaves and equal-temperament frequencies
    - Tuning application with a ceiling
    - Pitch id / MIDI / pitch class conversions
"""

import numpy as np
import pytest

from core.acoustics.spectrum import (
    MIDDLE_A,
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


class TestHarmonics:
    def test_series_to_ceiling(self) -> None:
        partials = compute_harmonics(440.345, ceiling=26000.0)
        assert len(partials) == 59
        assert partials[0] == pytest.approx(440.345)
        assert partials[1] == pytest.approx(880.69)
        assert partials[-1] == pytest.approx(25980.355)

    def test_default_ceiling(self) -> None:
        partials = compute_harmonics(440.0)
        assert partials[-1] <= 22050.0
        assert len(partials) == 50

    def test_ceiling_inclusive(self) -> None:
        np.testing.assert_allclose(compute_harmonics(100.0, ceiling=300.0), [100.0, 200.0, 300.0])

    def test_fundamental_above_ceiling(self) -> None:
        assert len(compute_harmonics(500.0, ceiling=400.0)) == 0

    @pytest.mark.parametrize("fundamental", [0.0, -440.0])
    def test_non_positive_fundamental(self, fundamental: float) -> None:
        with pytest.raises(ValueError, match="fundamental must be positive"):
            compute_harmonics(fundamental)


class TestSubharmonics:
    def test_series_to_floor(self) -> None:
        partials = compute_subharmonics(440.345, floor=10.0)
        assert len(partials) == 44
        assert partials[1] == pytest.approx(220.1725)
        assert partials[-1] == pytest.approx(10.008, abs=1e-3)

    def test_descending(self) -> None:
        partials = compute_subharmonics(440.0)
        assert np.all(np.diff(partials) < 0)
        assert partials[-1] >= 4.0

    def test_non_positive_floor(self) -> None:
        with pytest.raises(ValueError, match="floor must be positive"):
            compute_subharmonics(440.0, floor=0.0)


class TestTonesAndTemperament:
    def test_tartini(self) -> None:
        tones = compute_tartini(440.0, 493.88)
        assert isinstance(tones, TartiniTones)
        assert tones.difference == pytest.approx(53.88)
        assert tones.sum == pytest.approx(933.88)

    def test_tartini_symmetric(self) -> None:
        forward = compute_tartini(440.0, 493.88)
        backward = compute_tartini(493.88, 440.0)
        assert backward.difference == pytest.approx(forward.difference)
        assert backward.sum == pytest.approx(forward.sum)

    def test_octave(self) -> None:
        assert compute_octave(440.0, 1) == 880.0
        assert compute_octave(440.0, -2) == 110.0
        assert compute_octave(440.0, 0) == 440.0

    def test_equal_frequency_reference(self) -> None:
        assert equal_frequency(0) == MIDDLE_A
        assert equal_frequency(12) == pytest.approx(880.0)

    def test_equal_frequency_range(self) -> None:
        frequencies = [equal_frequency(n) for n in range(-16, 17)]
        assert frequencies[0] == pytest.approx(174.61, abs=0.01)
        assert frequencies[-1] == pytest.approx(1108.73, abs=0.01)
        assert frequencies == sorted(frequencies)


class TestComputeTuning:
    def test_ratios_applied(self) -> None:
        np.testing.assert_allclose(compute_tuning(100.0, [1.5, 2.0]), [100.0, 150.0, 200.0])

    def test_stops_at_ceiling(self) -> None:
        np.testing.assert_allclose(
            compute_tuning(100.0, [1.5, 2.0, 3.0, 1.2], ceiling=250.0), [100.0, 150.0, 200.0]
        )

    def test_no_ratios(self) -> None:
        np.testing.assert_allclose(compute_tuning(261.63, []), [261.63])


class TestConversions:
    def test_pitch_id_to_midi(self) -> None:
        assert [pitch_id_to_midi(n) for n in range(-20, 21)] == list(range(49, 90))

    def test_midi_to_pitch_id(self) -> None:
        assert [midi_to_pitch_id(n) for n in range(60, 81)] == list(range(-9, 12))

    def test_pitch_id_to_pitch_class(self) -> None:
        classes = [pitch_id_to_pitch_class(n) for n in range(-12, 13)]
        assert classes[:4] == [9, 10, 11, 0]
        assert classes[12] == 9
        assert pitch_id_to_pitch_class(3) == 0

    def test_midi_to_pitch_class(self) -> None:
        classes = [midi_to_pitch_class(n) for n in range(55, 83)]
        assert classes[:6] == [7, 8, 9, 10, 11, 0]
        assert midi_to_pitch_class(60) == 0
        assert midi_to_pitch_class(69) == 9
