"""
core/set_theory/ — Pitch-class set algebra and the set-class dictionary.

Exports:
    Types:       PitchClassSet, SetClassEntry
    Arithmetic:  transpose_pc, invert_pc, digit_from_alpha, digit_to_alpha
    Algebra:     transpose, invert, complement, zero_form, compare_compact,
                 normal_order, reduce, prime_form, interval_vector
    Dictionary:  SetClassDictionary, load_set_class_dictionary,
                 SetClassNotFoundError, MalformedReferenceDataError
    Generators:  permutate_set_pairs
"""

from core.set_theory.arithmetic import digit_from_alpha, digit_to_alpha, invert_pc, transpose_pc
from core.set_theory.dictionary import (
    MalformedReferenceDataError,
    SetClassDictionary,
    SetClassNotFoundError,
    load_set_class_dictionary,
)
from core.set_theory.permutations import permutate_set_pairs
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
from core.set_theory.types import PitchClassSet, SetClassEntry

__all__ = [
    # Types
    "PitchClassSet",
    "SetClassEntry",
    # Arithmetic
    "transpose_pc",
    "invert_pc",
    "digit_from_alpha",
    "digit_to_alpha",
    # Algebra
    "transpose",
    "invert",
    "complement",
    "zero_form",
    "compare_compact",
    "normal_order",
    "reduce",
    "prime_form",
    "interval_vector",
    "parse_pitch_classes",
    "format_pitch_classes",
    # Dictionary
    "SetClassDictionary",
    "SetClassNotFoundError",
    "MalformedReferenceDataError",
    "load_set_class_dictionary",
    # Generators
    "permutate_set_pairs",
]
