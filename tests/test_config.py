"""
Tests for core.config module.

These tests verify AnalyzerConfig validation and predefined configurations.
"""

import pytest

from core.config import (
    DEFAULT_ANALYZER_CONFIG,
    DETAILED_ANALYZER_CONFIG,
    LENIENT_ANALYZER_CONFIG,
    AnalyzerConfig,
)


class TestAnalyzerConfigValidation:
    """Test AnalyzerConfig parameter validation."""

    def test_default_values(self) -> None:
        config = AnalyzerConfig()
        assert config.min_score == 0
        assert config.max_score is None
        assert config.report_details is False
        assert config.strict_pitch_classes is True
        assert config.progress_interval == 1

    def test_custom_values(self) -> None:
        config = AnalyzerConfig(min_score=2, max_score=6, report_details=True, progress_interval=50)
        assert config.min_score == 2
        assert config.max_score == 6
        assert config.report_details is True
        assert config.progress_interval == 50

    def test_equal_bounds_allowed(self) -> None:
        config = AnalyzerConfig(min_score=4, max_score=4)
        assert config.max_score == 4

    def test_negative_min_score_raises(self) -> None:
        with pytest.raises(ValueError, match="min_score must be non-negative"):
            AnalyzerConfig(min_score=-1)

    def test_max_below_min_raises(self) -> None:
        with pytest.raises(ValueError, match=r"max_score \(2\) must not be less than min_score \(3\)"):
            AnalyzerConfig(min_score=3, max_score=2)

    def test_zero_progress_interval_raises(self) -> None:
        with pytest.raises(ValueError, match="progress_interval must be positive"):
            AnalyzerConfig(progress_interval=0)

    def test_config_is_immutable(self) -> None:
        config = AnalyzerConfig()
        with pytest.raises(AttributeError):
            config.min_score = 5  # type: ignore[misc]


class TestPredefinedConfigs:
    """Test predefined configuration constants."""

    def test_default_config(self) -> None:
        assert DEFAULT_ANALYZER_CONFIG == AnalyzerConfig()

    def test_detailed_config(self) -> None:
        assert DETAILED_ANALYZER_CONFIG.report_details is True
        assert DETAILED_ANALYZER_CONFIG.min_score == 0

    def test_lenient_config(self) -> None:
        assert LENIENT_ANALYZER_CONFIG.strict_pitch_classes is False
        assert LENIENT_ANALYZER_CONFIG.report_details is False
