"""
Configuration dataclasses for the matrix analyzer.

These immutable config objects decouple run parameters from the analyzer's
method signatures, making it easy to define standard configurations and reuse
them across the CLI, the HTTP API and tests.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalyzerConfig:
    """
    Configuration for MatrixAnalyzer runs.

    Attributes:
        min_score: Lowest total score counted in the histogram (inclusive).
            Defaults to 0, so every snapshot is counted.
        max_score: Highest total score counted (inclusive). None means
            unbounded.
        report_details: Record and print a detail block for every snapshot
            whose score falls in range. Defaults to False; when off, a
            progress line is written instead.
        strict_pitch_classes: Reject row and search-set values outside
            [0, 11]. When False such values are reduced mod 12.
        progress_interval: Write the progress line every N snapshots (the
            final count is always written). Defaults to 1.

    Example:
        >>> config = AnalyzerConfig(min_score=5, report_details=True)
        >>> analyzer = MatrixAnalyzer(dictionary, config=config)
    """

    min_score: int = 0
    max_score: int | None = None
    report_details: bool = False
    strict_pitch_classes: bool = True
    progress_interval: int = 1

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.min_score < 0:
            raise ValueError(f"min_score must be non-negative, got {self.min_score}")
        if self.max_score is not None and self.max_score < self.min_score:
            raise ValueError(
                f"max_score ({self.max_score}) must not be less than min_score ({self.min_score})"
            )
        if self.progress_interval <= 0:
            raise ValueError(f"progress_interval must be positive, got {self.progress_interval}")


# Pre-defined configurations for common use cases

DEFAULT_ANALYZER_CONFIG = AnalyzerConfig()
"""Count every snapshot, no detail blocks, strict pitch classes."""

DETAILED_ANALYZER_CONFIG = AnalyzerConfig(report_details=True)
"""Record a detail block for every snapshot."""

LENIENT_ANALYZER_CONFIG = AnalyzerConfig(strict_pitch_classes=False)
"""Reduce out-of-range pitch values mod 12 instead of rejecting them."""
