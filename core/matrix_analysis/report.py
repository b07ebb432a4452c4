"""
core/matrix_analysis/report.py — Plain-text rendering of analyzer output.

Three pieces make up the textual report written to a stream during a run:

Detail block (one per in-range snapshot, when detail reporting is on)
=====================================================================
    ==========
      0  0  0  4  4  4  7  7  0  7  2  0  7  3  0  0  Group 1
      4  4  7  7  0  7  2  0  7  3  0  0  0  0  0  4  Group 2
      0  7  2  0  7  3  0  0  0  0  0  4  4  4  7  7  Group 3
    ------------------------------------------------
      0  1  0  1  1  0  0  0  0  1  0  0  1  0  0  1  Score
    Total Score: 6

Progress line (when detail reporting is off)
============================================
    "\\r{count} of {maximum} processed..." written without a newline so each
    update overwrites the previous one on a terminal.

Summary
=======
    Score : # Instances
    ===================
        0 :       46
        ...
    ** End of Report

Design:
    - Pure functions returning strings; the analyzer owns the stream.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from core.matrix_analysis.types import SnapshotDetail

DETAIL_RULE = "=" * 10
SUMMARY_HEADER = "Score : # Instances"
SUMMARY_RULE = "=" * 19
END_MARKER = "** End of Report"
CELL_WIDTH = 3


def format_cells(values: Iterable[int]) -> str:
    """Right-align each value in a 3-character cell."""
    return "".join(f"{value:{CELL_WIDTH}d}" for value in values)


def format_detail(detail: SnapshotDetail) -> str:
    """Render one snapshot as a detail block, newline-terminated."""
    lines = [DETAIL_RULE]
    for row, group in zip(detail.rows, detail.row_groups):
        lines.append(f"{format_cells(row)}  Group {group}")
    lines.append("-" * (detail.column_count * CELL_WIDTH))
    lines.append(f"{format_cells(detail.column_counts)}  Score")
    lines.append(f"Total Score: {detail.score}")
    return "\n".join(lines) + "\n"


def format_progress(count: int, maximum: int) -> str:
    """Carriage-return progress line; no trailing newline."""
    return f"\r{count} of {maximum} processed..."


def format_summary(histogram: Mapping[int, int]) -> str:
    """Render the score histogram in ascending score order.

    Args:
        histogram: Score → number of snapshots. Scores with no snapshots
            are simply absent.

    Returns:
        The summary section, newline-terminated.
    """
    lines = [SUMMARY_HEADER, SUMMARY_RULE]
    for score in sorted(histogram):
        lines.append(f"{score:>5} : {histogram[score]:>8}")
    lines.append(END_MARKER)
    return "\n".join(lines) + "\n"
