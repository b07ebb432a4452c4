"""
Pydantic schemas for the ``/matrix/analyze`` endpoint.

The request mirrors the YAML job format so a job file can be posted as JSON
unchanged apart from ``score_range`` being flattened into two fields.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from core.matrix_analysis.types import AnalysisReport, SnapshotDetail


class GroupIn(BaseModel):
    """One voice-group."""

    rows: list[list[int]] = Field(..., min_length=1, description="Rows of pitch classes, equal length.")
    transpose_by: int = Field(default=0, description="Transposition applied to every row.")


class SearchSetIn(BaseModel):
    """A literal or named search set. Give exactly one of the two."""

    pitch_classes: list[int] | None = Field(default=None, description="Literal target sonority.")
    name: str | None = Field(default=None, description="Set-class name, e.g. '3-11'.")
    transpositions: list[int] | Literal["all"] = Field(
        default_factory=lambda: [0],
        description="Transpositions to register, or 'all' for 0–11.",
    )


class MatrixAnalyzeRequest(BaseModel):
    """Request body for ``POST /matrix/analyze``."""

    description: str = Field(default="", max_length=500, description="Free-text label.")
    groups: list[GroupIn] = Field(..., min_length=1, description="Voice-groups; group 1 stays fixed.")
    search_sets: list[SearchSetIn] = Field(default_factory=list, description="Target sonorities.")
    min_score: int = Field(default=0, ge=0, description="Lowest counted score (inclusive).")
    max_score: int | None = Field(default=None, ge=0, description="Highest counted score (inclusive).")
    report_details: bool = Field(default=False, description="Return a detail record per counted snapshot.")
    strict_pitch_classes: bool = Field(
        default=True,
        description="Reject values outside 0–11 instead of reducing them mod 12.",
    )

    def to_job_mapping(self) -> dict[str, Any]:
        """Return the request in job-file shape for ``parse_job``."""
        return {
            "description": self.description,
            "groups": [group.model_dump() for group in self.groups],
            "search_sets": [search_set.model_dump(exclude_none=True) for search_set in self.search_sets],
            "report_details": self.report_details,
            "strict_pitch_classes": self.strict_pitch_classes,
            "score_range": {"minimum": self.min_score, "maximum": self.max_score},
        }


class ScoreCount(BaseModel):
    """One histogram bucket."""

    score: int
    count: int


class SnapshotDetailOut(BaseModel):
    """One counted snapshot."""

    offsets: list[int] = Field(..., description="Right-rotation of each group.")
    rows: list[list[int]] = Field(..., description="Rows after rotation.")
    row_groups: list[int] = Field(..., description="1-based group of each row.")
    column_counts: list[int] = Field(..., description="Search sets matched per column.")
    score: int = Field(..., description="Total of column_counts.")

    @classmethod
    def from_detail(cls, detail: SnapshotDetail) -> "SnapshotDetailOut":
        return cls(
            offsets=list(detail.offsets),
            rows=[list(row) for row in detail.rows],
            row_groups=list(detail.row_groups),
            column_counts=list(detail.column_counts),
            score=detail.score,
        )


class MatrixAnalyzeResponse(BaseModel):
    """Response body for ``POST /matrix/analyze``."""

    description: str = Field(default="", description="Echo of the request description.")
    totals: list[ScoreCount] = Field(..., description="Histogram, ascending by score.")
    rotation_count: int = Field(..., description="Snapshots analyzed.")
    maximum_rotations: int = Field(..., description="columns ** (groups - 1).")
    details: list[SnapshotDetailOut] = Field(default_factory=list)
    summary: str = Field(..., description="Plain-text histogram report.")
    elapsed_ms: float = Field(..., description="Analyzer run time (milliseconds).")

    @classmethod
    def from_report(
        cls, report: AnalysisReport, *, description: str, summary: str, elapsed_ms: float
    ) -> "MatrixAnalyzeResponse":
        return cls(
            description=description,
            totals=[ScoreCount(score=score, count=count) for score, count in report.totals],
            rotation_count=report.rotation_count,
            maximum_rotations=report.maximum_rotations,
            details=[SnapshotDetailOut.from_detail(detail) for detail in report.details],
            summary=summary,
            elapsed_ms=round(elapsed_ms, 2),
        )
