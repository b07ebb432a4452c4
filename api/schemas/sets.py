"""
Pydantic schemas for the set-theory endpoints.

``POST /sets/analyze``, ``GET /set-classes`` and ``GET /set-classes/{name}``.
"""

from pydantic import BaseModel, Field, field_validator

from core.set_theory.arithmetic import validate_pitch_class
from core.set_theory.sets import format_pitch_classes
from core.set_theory.types import SetClassEntry


def _check_pitch_classes(values: list[int]) -> list[int]:
    for value in values:
        validate_pitch_class(value)
    return values


class SetAnalysisRequest(BaseModel):
    """Request body for ``POST /sets/analyze``."""

    pitch_classes: list[int] = Field(
        ...,
        max_length=64,
        description="Ordered pitch classes (0–11). Duplicates are allowed.",
    )
    transpose_by: int = Field(
        default=0,
        description="Transposition reported in ``transposed``; reduced mod 12.",
    )

    @field_validator("pitch_classes")
    @classmethod
    def pitch_classes_in_range(cls, v: list[int]) -> list[int]:
        """Reject values outside 0–11."""
        return _check_pitch_classes(v)


class SetClassOut(BaseModel):
    """One entry of the set-class reference table."""

    name: str = Field(..., description="Catalogue name, e.g. '3-11' or '3-11i'.")
    pitch_classes: list[int] = Field(..., description="Canonical set, ascending from 0.")
    notation: str = Field(..., description="Canonical set in alphanumeric digits, e.g. '037'.")
    interval_vector: list[int] = Field(..., description="Counts of interval classes 1–6.")
    cardinality: int = Field(..., description="Number of pitch classes.")
    description: str = Field(..., description="Free-text label from the table.")

    @classmethod
    def from_entry(cls, entry: SetClassEntry) -> "SetClassOut":
        return cls(
            name=entry.name,
            pitch_classes=list(entry.pitch_classes),
            notation=format_pitch_classes(entry.pitch_classes),
            interval_vector=list(entry.interval_vector),
            cardinality=entry.cardinality,
            description=entry.description,
        )


class SetAnalysisResponse(BaseModel):
    """Response body for ``POST /sets/analyze``.

    All forms except ``transposed`` are derived from the input as given.
    """

    pitch_classes: list[int] = Field(..., description="The input, unchanged.")
    transposed: list[int] = Field(..., description="Input transposed by ``transpose_by``.")
    inverted: list[int] = Field(..., description="Inversion about 0.")
    complement: list[int] = Field(..., description="Pitch classes not in the input, ascending.")
    zero_form: list[int] = Field(..., description="Input transposed so it starts on 0.")
    normal_order: list[int] = Field(..., description="Most compact rotation.")
    reduced: list[int] = Field(..., description="Zero form of the normal order.")
    prime_form: list[int] = Field(..., description="More compact of reduced set and reduced inversion.")
    interval_vector: list[int] = Field(..., description="Counts of interval classes 1–6.")
    set_class: SetClassOut | None = Field(
        default=None,
        description="Matching reference-table entry, when the input names a known class.",
    )


class SetClassListResponse(BaseModel):
    """Response body for ``GET /set-classes``."""

    count: int = Field(..., description="Number of entries returned.")
    set_classes: list[SetClassOut] = Field(..., description="Entries in table order.")
