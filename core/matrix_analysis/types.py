"""
core/matrix_analysis/types.py — Frozen result types for rotation-matrix analysis.

All types are frozen dataclasses, safe to pass between the analyzer, the
report formatter, the CLI and the HTTP layer.

Design:
    - The score histogram is stored as sorted (score, count) pairs so reports
      stay hashable; ``AnalysisReport.histogram`` gives the dict view.
    - Offsets are right-rotation amounts per group; group 1 is always 0.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Score filter
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScoreRange:
    """Inclusive range of total scores that are counted and reported.

    Attributes:
        minimum: Lowest accepted score.
        maximum: Highest accepted score, or None for no upper bound.
    """

    minimum: int = 0
    maximum: int | None = None

    def __post_init__(self) -> None:
        if self.minimum < 0:
            raise ValueError(f"ScoreRange.minimum must be non-negative, got {self.minimum}")
        if self.maximum is not None and self.maximum < self.minimum:
            raise ValueError(
                f"ScoreRange.maximum ({self.maximum}) must not be less than minimum ({self.minimum})"
            )

    def __contains__(self, score: object) -> bool:
        if not isinstance(score, int):
            return False
        if score < self.minimum:
            return False
        return self.maximum is None or score <= self.maximum


# ---------------------------------------------------------------------------
# Per-snapshot detail
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SnapshotDetail:
    """One scored rotation snapshot.

    Attributes:
        offsets:       Right-rotation applied to each group, in group order.
        rows:          Every row after rotation, groups in order.
        row_groups:    1-based group label of each entry in ``rows``.
        column_counts: Number of search sets matched in each column.
        score:         Sum of ``column_counts``.
    """

    offsets: tuple[int, ...]
    rows: tuple[tuple[int, ...], ...]
    row_groups: tuple[int, ...]
    column_counts: tuple[int, ...]
    score: int

    def __post_init__(self) -> None:
        if len(self.rows) != len(self.row_groups):
            raise ValueError(
                f"SnapshotDetail has {len(self.rows)} rows but {len(self.row_groups)} group labels"
            )
        if sum(self.column_counts) != self.score:
            raise ValueError(
                f"SnapshotDetail.score ({self.score}) must equal the column-count total "
                f"({sum(self.column_counts)})"
            )

    @property
    def column_count(self) -> int:
        return len(self.column_counts)


# ---------------------------------------------------------------------------
# Run result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnalysisReport:
    """Outcome of one MatrixAnalyzer run (or a merge of sharded runs).

    Attributes:
        totals:            Sorted (score, count) pairs for in-range scores.
        rotation_count:    Snapshots actually analyzed.
        maximum_rotations: Snapshots a complete, unsharded run analyzes.
        details:           Detail records, present only when detail
                           reporting was enabled and the run had no
                           stream to write them to.
    """

    totals: tuple[tuple[int, int], ...]
    rotation_count: int
    maximum_rotations: int
    details: tuple[SnapshotDetail, ...] = ()

    @classmethod
    def from_histogram(
        cls,
        histogram: dict[int, int],
        *,
        rotation_count: int,
        maximum_rotations: int,
        details: tuple[SnapshotDetail, ...] = (),
    ) -> AnalysisReport:
        return cls(
            totals=tuple(sorted(histogram.items())),
            rotation_count=rotation_count,
            maximum_rotations=maximum_rotations,
            details=details,
        )

    @property
    def histogram(self) -> dict[int, int]:
        """Score → number of snapshots, ascending by score."""
        return dict(self.totals)

    @property
    def instances(self) -> int:
        """Number of snapshots whose score fell in range."""
        return sum(count for _, count in self.totals)

    @property
    def complete(self) -> bool:
        return self.rotation_count == self.maximum_rotations

    @property
    def best_score(self) -> int | None:
        return self.totals[-1][0] if self.totals else None
