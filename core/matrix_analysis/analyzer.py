"""
core/matrix_analysis/analyzer.py — Canon-style rotation matrix analyzer.

A matrix is a list of voice-groups; each group holds one or more rows of
pitch classes, every row with the same number of columns. Group 1 stays
fixed. Every other group is rotated right through all of its column offsets,
in lock-step across its rows, nested so that the deepest group completes a
full cycle for each single step of the group above it. Each resulting
snapshot is scored column by column against the registered search sets.

Enumeration order
=================
Recursive descent by group depth. At depth d (d >= 1) the group is rotated
right by one column ``columns`` times; after each step the snapshot is
analyzed when d is the last group, otherwise depth d+1 runs its own full
cycle. A matrix of G groups therefore yields ``columns ** (G - 1)``
snapshots, and a single group yields its one unrotated snapshot.

Rotation is tracked as a per-group offset rather than by moving elements:

    rotated[col] = row[(col - offset) % columns]

so input rows are never mutated and nothing is lost or duplicated.

Scoring
=======
The sonority of a column is the set of pitch classes found at that column
across every row of every group. Each search set that is a subset of the
sonority adds one to that column's count; duplicate search sets count
separately. The snapshot score is the sum over columns.

Cancellation and sharding
=========================
``run`` accepts a ``threading.Event``; it is checked before every top-level
rotation step and a set event stops the run with AnalysisCancelledError.
``shard_index``/``shard_count`` restrict the run to a subset of top-level
steps so independent processes can split the work; ``merge_reports``
recombines their results.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from collections.abc import Sequence
from typing import TextIO

from core.config import DEFAULT_ANALYZER_CONFIG, AnalyzerConfig
from core.matrix_analysis.report import format_detail, format_progress, format_summary
from core.matrix_analysis.types import AnalysisReport, ScoreRange, SnapshotDetail
from core.set_theory.arithmetic import MODULUS
from core.set_theory.dictionary import SetClassDictionary
from core.set_theory.sets import transpose
from core.set_theory.types import SetClassEntry

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class InvalidMatrixError(ValueError):
    """Raised when rows, groups or search sets cannot form a valid matrix."""


class AnalysisCancelledError(RuntimeError):
    """Raised when a run is cancelled; ``report`` holds the partial result."""

    def __init__(self, report: AnalysisReport) -> None:
        super().__init__(
            f"Analysis cancelled after {report.rotation_count} of "
            f"{report.maximum_rotations} snapshots"
        )
        self.report = report


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------


class MatrixAnalyzer:
    """Rotate voice-groups against each other and score every alignment.

    Populate groups and search sets first, then call ``run``. Counters and
    totals are reset at the start of every run and describe the most recent
    one until the next.

    Args:
        dictionary: Set-class dictionary used by ``add_named_search_set``.
            Optional; without it only literal search sets can be added.
        config: Score range, detail reporting, progress cadence and
            pitch-class strictness.

    Example:
        >>> analyzer = MatrixAnalyzer()
        >>> analyzer.add_row(1, [0, 4, 7])
        >>> analyzer.add_row(1, [4, 7, 0])
        >>> analyzer.add_row(2, [7, 0, 4])
        >>> analyzer.add_search_set([0, 4, 7])
        >>> analyzer.run().histogram
        {0: 2, 3: 1}
    """

    def __init__(
        self,
        dictionary: SetClassDictionary | None = None,
        config: AnalyzerConfig = DEFAULT_ANALYZER_CONFIG,
    ) -> None:
        self._dictionary = dictionary
        self._config = config
        self._score_range = ScoreRange(config.min_score, config.max_score)
        self._groups: list[list[tuple[int, ...]]] = []
        self._search_sets: list[frozenset[int]] = []
        self._summary_totals: dict[int, int] = {}
        self._rotation_count = 0
        self._details: list[SnapshotDetail] = []

    # -- read-only state ----------------------------------------------------

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    @property
    def dictionary(self) -> SetClassDictionary | None:
        return self._dictionary

    @property
    def groups(self) -> tuple[tuple[tuple[int, ...], ...], ...]:
        """Rows per group as added (after transposition), never rotated."""
        return tuple(tuple(group) for group in self._groups)

    @property
    def search_sets(self) -> tuple[frozenset[int], ...]:
        return tuple(self._search_sets)

    @property
    def score_range(self) -> ScoreRange:
        return self._score_range

    @property
    def column_count(self) -> int:
        """Row length shared by every row; 0 before the first row is added."""
        for group in self._groups:
            if group:
                return len(group[0])
        return 0

    @property
    def maximum_rotations(self) -> int:
        """Snapshots a full run analyzes: ``columns ** (groups - 1)``."""
        if not self._groups:
            return 0
        return self.column_count ** (len(self._groups) - 1)

    @property
    def rotation_count(self) -> int:
        """Snapshots analyzed by the most recent run."""
        return self._rotation_count

    @property
    def summary_totals(self) -> dict[int, int]:
        """Score → snapshot count from the most recent run, ascending."""
        return dict(sorted(self._summary_totals.items()))

    # -- population ---------------------------------------------------------

    def set_score_range(self, minimum: int = 0, maximum: int | None = None) -> None:
        """Replace the inclusive score filter used by subsequent runs."""
        self._score_range = ScoreRange(minimum, maximum)

    def add_row(self, group_id: int, row: Sequence[int], transpose_by: int = 0) -> None:
        """Append ``transpose(row, transpose_by)`` to a voice-group.

        Args:
            group_id: 1-based group number. Must name an existing group or
                the next new one.
            row: Pitch classes, one per column.
            transpose_by: Transposition amount, reduced mod 12.

        Raises:
            InvalidMatrixError: For an unknown group id, a non-integer
                transposition, an empty row, a row whose length differs from
                the established column count, or (in strict mode) values
                outside 0-11. Nothing is added.
        """
        if isinstance(group_id, bool) or not isinstance(group_id, int):
            raise InvalidMatrixError(f"group_id must be an integer, got {group_id!r}")
        if not 1 <= group_id <= len(self._groups) + 1:
            raise InvalidMatrixError(
                f"group_id {group_id} is out of range; expected 1..{len(self._groups) + 1}"
            )
        transpose_by = self._transposition(transpose_by)
        values = self._pitch_classes(row, "Row")
        if not values:
            raise InvalidMatrixError("Rows must contain at least one pitch class")
        columns = self.column_count
        if columns and len(values) != columns:
            raise InvalidMatrixError(
                f"Row has {len(values)} columns; every row must have {columns}"
            )

        if group_id == len(self._groups) + 1:
            self._groups.append([])
        self._groups[group_id - 1].append(transpose(values, transpose_by))

    def add_search_set(self, pcs: Sequence[int], transpose_by: int = 0) -> None:
        """Register ``transpose(pcs, transpose_by)`` as an unordered target.

        Raises:
            InvalidMatrixError: For an empty set, a non-integer transposition
                or (in strict mode) values outside 0-11.
        """
        transpose_by = self._transposition(transpose_by)
        values = self._pitch_classes(pcs, "Search set")
        if not values:
            raise InvalidMatrixError("Search sets must contain at least one pitch class")
        self._search_sets.append(frozenset(transpose(values, transpose_by)))

    def add_named_search_set(self, name: str, transpose_by: int = 0) -> SetClassEntry:
        """Register the canonical set of a named set class as a target.

        Returns:
            The resolved dictionary entry.

        Raises:
            InvalidMatrixError:    If the analyzer has no dictionary or the
                                   transposition is not an integer.
            SetClassNotFoundError: If ``name`` is unknown. Nothing is added.
        """
        if self._dictionary is None:
            raise InvalidMatrixError(
                f"Cannot resolve set class {name!r}: analyzer has no set-class dictionary"
            )
        transpose_by = self._transposition(transpose_by)
        entry = self._dictionary.get(name)
        self._search_sets.append(frozenset(transpose(entry.pitch_classes, transpose_by)))
        return entry

    @staticmethod
    def _transposition(amount: int) -> int:
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidMatrixError(f"transpose_by must be an integer, got {amount!r}")
        return amount

    def _pitch_classes(self, values: Sequence[int], what: str) -> tuple[int, ...]:
        result: list[int] = []
        for value in values:
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidMatrixError(f"{what} values must be integers, got {value!r}")
            if not 0 <= value < MODULUS:
                if self._config.strict_pitch_classes:
                    raise InvalidMatrixError(
                        f"{what} value {value} is outside the pitch-class range 0-11"
                    )
                value %= MODULUS
            result.append(value)
        return tuple(result)

    # -- validation ---------------------------------------------------------

    def validate(self) -> None:
        """Check the matrix can be analyzed.

        Raises:
            InvalidMatrixError: For zero groups, an empty group, zero columns
                or rows of differing length.
        """
        if not self._groups:
            raise InvalidMatrixError("Matrix has no voice-groups")
        for number, group in enumerate(self._groups, start=1):
            if not group:
                raise InvalidMatrixError(f"Group {number} has no rows")
        columns = len(self._groups[0][0])
        if columns == 0:
            raise InvalidMatrixError("Matrix has zero columns")
        for number, group in enumerate(self._groups, start=1):
            for row in group:
                if len(row) != columns:
                    raise InvalidMatrixError(
                        f"Group {number} has a row of {len(row)} columns; expected {columns}"
                    )

    # -- run ----------------------------------------------------------------

    def run(
        self,
        stream: TextIO | None = None,
        cancel: threading.Event | None = None,
        shard_index: int = 0,
        shard_count: int = 1,
    ) -> AnalysisReport:
        """Enumerate every rotation snapshot and build the score histogram.

        Args:
            stream: Optional text stream receiving detail blocks or progress
                lines during the run, then the summary. Detail blocks written
                to a stream are not kept in the returned report.
            cancel: Optional event; when set, the run stops before its next
                top-level rotation step.
            shard_index: Which shard of top-level steps to explore.
            shard_count: Number of shards the top-level steps are split into.
                0-based step k runs when ``k % shard_count == shard_index``.

        Returns:
            AnalysisReport for this run.

        Raises:
            InvalidMatrixError:     If ``validate`` fails.
            ValueError:             For an invalid shard specification.
            AnalysisCancelledError: If ``cancel`` is set mid-run.
        """
        self.validate()
        if shard_count < 1 or not 0 <= shard_index < shard_count:
            raise ValueError(
                f"Invalid shard {shard_index} of {shard_count}; "
                "need shard_count >= 1 and 0 <= shard_index < shard_count"
            )

        self._summary_totals = {}
        self._rotation_count = 0
        self._details = []

        columns = self.column_count
        # Distinct pitch classes per group per unrotated column.
        group_columns = [
            [frozenset(row[col] for row in group) for col in range(columns)]
            for group in self._groups
        ]
        offsets = [0] * len(self._groups)

        logger.info(
            "Matrix analysis started: %d groups x %d columns, %d search sets, %d snapshots "
            "(shard %d of %d)",
            len(self._groups),
            columns,
            len(self._search_sets),
            self.maximum_rotations,
            shard_index + 1,
            shard_count,
        )

        if len(self._groups) == 1:
            self._analyze(offsets, group_columns, columns, stream)
        else:
            self._descend(1, offsets, group_columns, columns, stream, cancel, shard_index, shard_count)

        report = self._report()
        if stream is not None:
            if not self._config.report_details:
                stream.write(format_progress(self._rotation_count, self.maximum_rotations) + "\n")
            stream.write(format_summary(report.histogram))

        logger.info(
            "Matrix analysis finished: %d snapshots analyzed, %d in score range",
            report.rotation_count,
            report.instances,
        )
        return report

    def _descend(
        self,
        depth: int,
        offsets: list[int],
        group_columns: list[list[frozenset[int]]],
        columns: int,
        stream: TextIO | None,
        cancel: threading.Event | None,
        shard_index: int,
        shard_count: int,
    ) -> None:
        last = depth == len(offsets) - 1
        for step in range(1, columns + 1):
            if depth == 1:
                if (step - 1) % shard_count != shard_index:
                    continue
                if cancel is not None and cancel.is_set():
                    offsets[depth] = 0
                    logger.warning(
                        "Matrix analysis cancelled at top-level step %d of %d (%d snapshots done)",
                        step,
                        columns,
                        self._rotation_count,
                    )
                    raise AnalysisCancelledError(self._report())
                logger.debug("Top-level rotation step %d of %d", step, columns)

            offsets[depth] = step % columns
            if last:
                self._analyze(offsets, group_columns, columns, stream)
            else:
                self._descend(
                    depth + 1, offsets, group_columns, columns, stream, cancel, shard_index, shard_count
                )
        offsets[depth] = 0

    def _analyze(
        self,
        offsets: list[int],
        group_columns: list[list[frozenset[int]]],
        columns: int,
        stream: TextIO | None,
    ) -> None:
        column_counts: list[int] = []
        for col in range(columns):
            sonority = frozenset().union(
                *(cells[(col - offset) % columns] for cells, offset in zip(group_columns, offsets))
            )
            column_counts.append(sum(1 for target in self._search_sets if target <= sonority))
        score = sum(column_counts)
        self._rotation_count += 1

        if score in self._score_range:
            self._summary_totals[score] = self._summary_totals.get(score, 0) + 1
            if self._config.report_details:
                detail = self._snapshot_detail(offsets, column_counts, score)
                # Streamed blocks are written, not retained.
                if stream is not None:
                    stream.write(format_detail(detail))
                else:
                    self._details.append(detail)

        if (
            stream is not None
            and not self._config.report_details
            and self._rotation_count % self._config.progress_interval == 0
        ):
            stream.write(format_progress(self._rotation_count, self.maximum_rotations))

    def _snapshot_detail(
        self, offsets: list[int], column_counts: list[int], score: int
    ) -> SnapshotDetail:
        columns = len(column_counts)
        rows: list[tuple[int, ...]] = []
        labels: list[int] = []
        for number, (group, offset) in enumerate(zip(self._groups, offsets), start=1):
            for row in group:
                rows.append(tuple(row[(col - offset) % columns] for col in range(columns)))
                labels.append(number)
        return SnapshotDetail(
            offsets=tuple(offsets),
            rows=tuple(rows),
            row_groups=tuple(labels),
            column_counts=tuple(column_counts),
            score=score,
        )

    def _report(self) -> AnalysisReport:
        return AnalysisReport.from_histogram(
            self._summary_totals,
            rotation_count=self._rotation_count,
            maximum_rotations=self.maximum_rotations,
            details=tuple(self._details),
        )


# ---------------------------------------------------------------------------
# Shard merging
# ---------------------------------------------------------------------------


def merge_reports(*reports: AnalysisReport) -> AnalysisReport:
    """Combine reports from shards of the same matrix.

    Histograms are added per score, rotation counts summed and details
    concatenated in argument order.

    Raises:
        ValueError: If no reports are given or they describe matrices of
            different sizes.
    """
    if not reports:
        raise ValueError("merge_reports needs at least one report")
    maxima = {report.maximum_rotations for report in reports}
    if len(maxima) != 1:
        raise ValueError(f"Cannot merge reports with different maximum_rotations: {sorted(maxima)}")

    totals: Counter[int] = Counter()
    for report in reports:
        totals.update(report.histogram)
    return AnalysisReport.from_histogram(
        dict(totals),
        rotation_count=sum(report.rotation_count for report in reports),
        maximum_rotations=maxima.pop(),
        details=tuple(detail for report in reports for detail in report.details),
    )
