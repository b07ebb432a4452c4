"""
Shared fixtures for the test suite.

Centralizes the reference dictionary, the three-voice round used by the
analyzer tests, and the FastAPI test client.
"""

import pytest
from fastapi.testclient import TestClient

from api.deps import get_max_snapshots, get_set_class_dictionary
from api.main import app
from core.config import AnalyzerConfig
from core.matrix_analysis.analyzer import MatrixAnalyzer
from core.set_theory.dictionary import SetClassDictionary, load_set_class_dictionary

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ROUND_MELODY: list[int] = [0, 0, 0, 4, 4, 4, 7, 7, 0, 7, 2, 0, 7, 3, 0, 0]
"""Sixteen-note melody sung as a three-voice round in the analyzer tests."""

ROUND_HISTOGRAM: dict[int, int] = {0: 46, 1: 18, 2: 48, 3: 72, 4: 24, 5: 42, 6: 6}
"""Score histogram of the round against all major and minor triads."""

TEST_MAX_SNAPSHOTS = 1000
"""Snapshot limit applied to the API client fixture."""


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_round_analyzer(
    config: AnalyzerConfig | None = None,
    dictionary: SetClassDictionary | None = None,
    *,
    by_name: bool = False,
) -> MatrixAnalyzer:
    """Three identical one-row groups searched for every major and minor triad."""
    analyzer = MatrixAnalyzer(dictionary, config=config or AnalyzerConfig())
    for group_id in (1, 2, 3):
        analyzer.add_row(group_id, ROUND_MELODY)
    for n in range(12):
        if by_name:
            analyzer.add_named_search_set("3-11i", transpose_by=n)
            analyzer.add_named_search_set("3-11", transpose_by=n)
        else:
            analyzer.add_search_set([0, 4, 7], transpose_by=n)
            analyzer.add_search_set([0, 3, 7], transpose_by=n)
    return analyzer


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def dictionary() -> SetClassDictionary:
    """The bundled set-class reference table."""
    return load_set_class_dictionary()


@pytest.fixture()
def round_analyzer() -> MatrixAnalyzer:
    return make_round_analyzer()


@pytest.fixture()
def round_factory():
    """The ``make_round_analyzer`` builder, for tests that need a custom config."""
    return make_round_analyzer


@pytest.fixture()
def round_melody() -> list[int]:
    return list(ROUND_MELODY)


@pytest.fixture()
def round_histogram() -> dict[int, int]:
    return dict(ROUND_HISTOGRAM)


@pytest.fixture()
def api_client(dictionary: SetClassDictionary):
    """FastAPI ``TestClient`` with the bundled dictionary and a small snapshot limit."""
    app.dependency_overrides[get_set_class_dictionary] = lambda: dictionary
    app.dependency_overrides[get_max_snapshots] = lambda: TEST_MAX_SNAPSHOTS

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
