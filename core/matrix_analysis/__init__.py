"""
core/matrix_analysis — Rotation matrix analysis of canon-style voice-groups.

Public API:
    Analyzer:  MatrixAnalyzer, merge_reports
    Errors:    InvalidMatrixError, AnalysisCancelledError
    Types:     ScoreRange, SnapshotDetail, AnalysisReport
    Report:    format_detail, format_progress, format_summary
    Jobs:      AnalysisJob, load_job, parse_job, build_analyzer
"""

from core.matrix_analysis.analyzer import (
    AnalysisCancelledError,
    InvalidMatrixError,
    MatrixAnalyzer,
    merge_reports,
)
from core.matrix_analysis.jobs import AnalysisJob, build_analyzer, load_job, parse_job
from core.matrix_analysis.report import format_detail, format_progress, format_summary
from core.matrix_analysis.types import AnalysisReport, ScoreRange, SnapshotDetail

__all__ = [
    "MatrixAnalyzer",
    "merge_reports",
    "InvalidMatrixError",
    "AnalysisCancelledError",
    "ScoreRange",
    "SnapshotDetail",
    "AnalysisReport",
    "format_detail",
    "format_progress",
    "format_summary",
    "AnalysisJob",
    "load_job",
    "parse_job",
    "build_analyzer",
]
