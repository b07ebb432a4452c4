"""
Tests for core.set_theory.sets and core.set_theory.arithmetic.

Validates:
    - Single pitch-class arithmetic stays in [0, 11]
    - Transposition, inversion, complement, zero form
    - Compact comparison tie-breaking and length checks
    - Normal order, reduce and prime form, including edge cases
    - Prime form invariance under transposition and inversion
    - Rotation invariance of normal order; inversion, complement and
      transposition undo themselves
    - Interval vectors and alphanumeric notation
"""

import pytest

from core.set_theory.arithmetic import (
    digit_from_alpha,
    digit_to_alpha,
    invert_pc,
    transpose_pc,
    validate_pitch_class,
)
from core.set_theory.sets import (
    compare_compact,
    complement,
    format_pitch_classes,
    interval_vector,
    invert,
    normal_order,
    parse_pitch_classes,
    prime_form,
    reduce,
    transpose,
    zero_form,
)

# Asymmetric sets used for invariance checks
SAMPLE_SETS = [
    [0, 4, 7],
    [1, 4, 6, 7, 10],
    [0, 1, 3, 7, 8],
    [2, 5, 7, 11],
    [0, 1, 4, 6],
    [0, 1, 2, 4, 7, 8, 9],
]


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


class TestPitchClassArithmetic:
    def test_transpose_wraps(self) -> None:
        assert transpose_pc(11, 3) == 2

    def test_transpose_negative_amount(self) -> None:
        assert transpose_pc(0, -1) == 11

    def test_invert(self) -> None:
        assert invert_pc(0) == 0
        assert invert_pc(4) == 8
        assert invert_pc(11) == 1

    def test_validate_accepts_range(self) -> None:
        assert [validate_pitch_class(pc) for pc in range(12)] == list(range(12))

    @pytest.mark.parametrize("value", [-1, 12, 3.0, True, "3"])
    def test_validate_rejects(self, value: object) -> None:
        with pytest.raises(ValueError, match="Pitch class"):
            validate_pitch_class(value)  # type: ignore[arg-type]


class TestAlphaDigits:
    def test_digits(self) -> None:
        assert digit_from_alpha("7") == 7
        assert digit_from_alpha("A") == 10
        assert digit_from_alpha("b") == 11
        assert digit_from_alpha("C") == 12

    def test_unknown_digit_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown pitch-class digit"):
            digit_from_alpha("D")

    def test_multi_character_raises(self) -> None:
        with pytest.raises(ValueError, match="single digit"):
            digit_from_alpha("10")

    def test_to_alpha(self) -> None:
        assert digit_to_alpha(10) == "A"
        assert digit_to_alpha(12) == "C"

    def test_to_alpha_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="no single-digit form"):
            digit_to_alpha(13)


# ---------------------------------------------------------------------------
# Whole-set transformations
# ---------------------------------------------------------------------------


class TestTransformations:
    def test_transpose(self) -> None:
        assert transpose([0, 3, 5, 6, 9], 4) == (4, 7, 9, 10, 1)

    def test_transpose_amount_reduced_mod_12(self) -> None:
        assert transpose([0, 3, 5, 6, 9], 16) == transpose([0, 3, 5, 6, 9], 4)
        assert transpose([0, 3, 5, 6, 9], -8) == transpose([0, 3, 5, 6, 9], 4)

    def test_transpose_keeps_order_and_duplicates(self) -> None:
        assert transpose([7, 7, 0], 5) == (0, 0, 5)

    def test_invert(self) -> None:
        assert invert([4, 7, 9, 10, 1]) == (8, 5, 3, 2, 11)

    def test_complement_ascending(self) -> None:
        assert complement([9, 6, 5, 3, 0]) == (1, 2, 4, 7, 8, 10, 11)

    def test_complement_of_empty_is_aggregate(self) -> None:
        assert complement([]) == tuple(range(12))

    def test_complement_ignores_duplicates(self) -> None:
        assert complement([0, 0, 0]) == tuple(range(1, 12))

    def test_zero_form(self) -> None:
        assert zero_form([7, 10, 0, 1, 4]) == (0, 3, 5, 6, 9)

    def test_zero_form_already_zero(self) -> None:
        assert zero_form([0, 5, 2]) == (0, 5, 2)

    def test_empty_set_is_identity(self) -> None:
        assert transpose([], 5) == ()
        assert invert([]) == ()
        assert zero_form([]) == ()
        assert normal_order([]) == ()
        assert prime_form([]) == ()

    def test_inputs_not_mutated(self) -> None:
        pcs = [10, 7, 6, 4, 1]
        transpose(pcs, 3)
        invert(pcs)
        normal_order(pcs)
        prime_form(pcs)
        assert pcs == [10, 7, 6, 4, 1]


# ---------------------------------------------------------------------------
# Canonical forms
# ---------------------------------------------------------------------------


class TestCompareCompact:
    def test_candidate_with_smaller_span_wins(self) -> None:
        assert compare_compact([1, 4, 6, 7, 10], [4, 6, 7, 10, 1]) == (4, 6, 7, 10, 1)

    def test_winner_kept_when_candidate_wider(self) -> None:
        assert compare_compact([4, 6, 7, 10, 1], [1, 4, 6, 7, 10]) == (4, 6, 7, 10, 1)

    def test_inner_interval_breaks_span_tie(self) -> None:
        # Both span 8; the 0-2-3-7-8 reading has the wider next interval.
        assert compare_compact([0, 1, 5, 6, 8], [0, 2, 3, 7, 8]) == (0, 1, 5, 6, 8)
        assert compare_compact([0, 2, 3, 7, 8], [0, 1, 5, 6, 8]) == (0, 1, 5, 6, 8)

    def test_full_tie_keeps_winner(self) -> None:
        assert compare_compact([0, 4, 8], [4, 8, 0]) == (0, 4, 8)

    def test_length_mismatch_raises(self) -> None:
        with pytest.raises(ValueError, match="different lengths"):
            compare_compact([0, 1, 2], [0, 1])


class TestNormalOrder:
    def test_normal_order(self) -> None:
        assert normal_order([1, 4, 6, 7, 10]) == (4, 6, 7, 10, 1)

    def test_unsorted_input(self) -> None:
        assert normal_order([10, 1, 7, 4, 6]) == (4, 6, 7, 10, 1)

    def test_major_triad(self) -> None:
        assert normal_order([7, 0, 4]) == (0, 4, 7)

    def test_symmetric_set_keeps_first_rotation(self) -> None:
        assert normal_order([9, 3, 6, 0]) == (0, 3, 6, 9)

    def test_single_element_unchanged(self) -> None:
        assert normal_order([7]) == (7,)

    def test_reduce(self) -> None:
        assert reduce([1, 4, 6, 7, 10]) == (0, 2, 3, 6, 9)

    def test_reduce_single_element(self) -> None:
        assert reduce([7]) == (0,)


class TestPrimeForm:
    def test_prime_form(self) -> None:
        assert prime_form([1, 4, 6, 7, 10]) == (0, 1, 3, 6, 9)

    def test_major_and_minor_triads_share_prime_form(self) -> None:
        assert prime_form([0, 4, 7]) == (0, 3, 7)
        assert prime_form([0, 3, 7]) == (0, 3, 7)

    def test_dominant_seventh(self) -> None:
        assert prime_form([7, 11, 2, 5]) == (0, 2, 5, 8)

    def test_tie_break_prefers_packing_from_the_left(self) -> None:
        assert prime_form([0, 1, 3, 7, 8]) == (0, 1, 5, 6, 8)

    def test_single_element_unchanged(self) -> None:
        assert prime_form([7]) == (7,)

    def test_result_is_reduce_of_set_or_of_inversion(self) -> None:
        for pcs in SAMPLE_SETS:
            assert prime_form(pcs) in (reduce(pcs), reduce(invert(pcs)))

    def test_invariant_under_transposition(self) -> None:
        for pcs in SAMPLE_SETS:
            expected = prime_form(pcs)
            for n in range(12):
                assert prime_form(transpose(pcs, n)) == expected

    def test_invariant_under_inversion(self) -> None:
        for pcs in SAMPLE_SETS:
            assert prime_form(invert(pcs)) == prime_form(pcs)

    def test_starts_at_zero(self) -> None:
        for pcs in SAMPLE_SETS:
            assert prime_form(pcs)[0] == 0


def _rotations(pcs: list[int]) -> list[list[int]]:
    return [pcs[i:] + pcs[:i] for i in range(len(pcs))]


class TestInvariants:
    def test_normal_order_ignores_rotation(self) -> None:
        for pcs in SAMPLE_SETS:
            expected = normal_order(pcs)
            for rotation in _rotations(pcs):
                assert normal_order(rotation) == expected

    def test_invert_is_involution(self) -> None:
        for pcs in SAMPLE_SETS:
            for rotation in _rotations(pcs):
                assert invert(invert(rotation)) == tuple(rotation)

    def test_complement_is_involution(self) -> None:
        for pcs in SAMPLE_SETS:
            for rotation in _rotations(pcs):
                assert complement(complement(rotation)) == tuple(sorted(rotation))

    def test_transpose_then_back(self) -> None:
        for pcs in SAMPLE_SETS:
            for rotation in _rotations(pcs):
                for n in range(12):
                    assert transpose(transpose(rotation, n), 12 - n) == tuple(rotation)

    def test_zero_form_starts_at_zero(self) -> None:
        for pcs in SAMPLE_SETS:
            for rotation in _rotations(pcs):
                assert zero_form(rotation)[0] == 0


# ---------------------------------------------------------------------------
# Interval vectors and notation
# ---------------------------------------------------------------------------


class TestIntervalVector:
    def test_minor_triad(self) -> None:
        assert interval_vector([0, 3, 7]) == (0, 0, 1, 1, 1, 0)

    def test_augmented_triad(self) -> None:
        assert interval_vector([0, 4, 8]) == (0, 0, 0, 3, 0, 0)

    def test_aggregate(self) -> None:
        assert interval_vector(range(12)) == (12, 12, 12, 12, 12, 6)

    def test_duplicates_ignored(self) -> None:
        assert interval_vector([0, 0, 4, 4]) == (0, 0, 0, 1, 0, 0)

    def test_transposition_invariant(self) -> None:
        assert interval_vector(transpose([1, 4, 6, 7, 10], 5)) == interval_vector([1, 4, 6, 7, 10])


class TestNotation:
    def test_parse(self) -> None:
        assert parse_pitch_classes("0ab") == (0, 10, 11)

    def test_parse_rejects_twelve(self) -> None:
        with pytest.raises(ValueError, match="Pitch class"):
            parse_pitch_classes("0C")

    def test_format(self) -> None:
        assert format_pitch_classes((0, 4, 7, 10, 11)) == "047AB"

    def test_format_then_parse(self) -> None:
        assert parse_pitch_classes(format_pitch_classes((11, 2, 10))) == (11, 2, 10)
