"""
core/matrix_analysis/jobs.py — YAML job files describing an analyzer run.

A job file names the voice-groups, the search sets and the reporting options
for one run, so a matrix can be kept under version control and re-run from
the CLI or posted to the API unchanged.

Job format
==========
    description: Three-voice round
    report_details: false
    strict_pitch_classes: true
    score_range: {minimum: 0, maximum: null}
    groups:
      - rows: [[0, 0, 0, 4, 4, 4, 7, 7, 0, 7, 2, 0, 7, 3, 0, 0]]
        transpose_by: 0
    search_sets:
      - pitch_classes: [0, 4, 7]
        transpositions: all        # or a list of ints; default [0]
      - name: "3-11"
        transpositions: [0, 5, 7]

Every key except ``groups`` is optional. Each search-set entry needs exactly
one of ``pitch_classes`` or ``name``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml  # PyYAML

from core.config import AnalyzerConfig
from core.matrix_analysis.analyzer import MatrixAnalyzer
from core.matrix_analysis.types import ScoreRange
from core.set_theory.arithmetic import MODULUS
from core.set_theory.dictionary import SetClassDictionary

ALL_TRANSPOSITIONS: tuple[int, ...] = tuple(range(MODULUS))


# ---------------------------------------------------------------------------
# Job types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GroupSpec:
    """One voice-group: its rows and a transposition applied to all of them."""

    rows: tuple[tuple[int, ...], ...]
    transpose_by: int = 0


@dataclass(frozen=True)
class SearchSetSpec:
    """A literal or named search set registered at each listed transposition."""

    pitch_classes: tuple[int, ...] | None = None
    name: str | None = None
    transpositions: tuple[int, ...] = (0,)

    def __post_init__(self) -> None:
        if (self.pitch_classes is None) == (self.name is None):
            raise ValueError("A search set needs exactly one of 'pitch_classes' or 'name'")
        if not self.transpositions:
            raise ValueError("A search set needs at least one transposition")


@dataclass(frozen=True)
class AnalysisJob:
    """A parsed job file."""

    groups: tuple[GroupSpec, ...]
    search_sets: tuple[SearchSetSpec, ...] = ()
    description: str = ""
    report_details: bool = False
    strict_pitch_classes: bool = True
    score_range: ScoreRange = ScoreRange()

    @property
    def uses_names(self) -> bool:
        """True when any search set must be resolved through a dictionary."""
        return any(spec.name is not None for spec in self.search_sets)

    def analyzer_config(self) -> AnalyzerConfig:
        return AnalyzerConfig(
            min_score=self.score_range.minimum,
            max_score=self.score_range.maximum,
            report_details=self.report_details,
            strict_pitch_classes=self.strict_pitch_classes,
        )


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _int_list(value: Any, where: str) -> tuple[int, ...]:
    if not isinstance(value, list):
        raise ValueError(f"{where} must be a list of integers, got {value!r}")
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int):
            raise ValueError(f"{where} must contain only integers, got {item!r}")
    return tuple(value)


def _transpositions(value: Any, where: str) -> tuple[int, ...]:
    if value is None:
        return (0,)
    if value == "all":
        return ALL_TRANSPOSITIONS
    return _int_list(value, where)


def _parse_group(raw: Any, index: int) -> GroupSpec:
    where = f"groups[{index}]"
    if not isinstance(raw, Mapping):
        raise ValueError(f"{where} must be a mapping with a 'rows' key")
    rows = raw.get("rows")
    if not isinstance(rows, list) or not rows:
        raise ValueError(f"{where}.rows must be a non-empty list of rows")
    transpose_by = raw.get("transpose_by", 0)
    if isinstance(transpose_by, bool) or not isinstance(transpose_by, int):
        raise ValueError(f"{where}.transpose_by must be an integer, got {transpose_by!r}")
    return GroupSpec(
        rows=tuple(_int_list(row, f"{where}.rows[{n}]") for n, row in enumerate(rows)),
        transpose_by=transpose_by,
    )


def _parse_search_set(raw: Any, index: int) -> SearchSetSpec:
    where = f"search_sets[{index}]"
    if not isinstance(raw, Mapping):
        raise ValueError(f"{where} must be a mapping")
    pitch_classes = raw.get("pitch_classes")
    name = raw.get("name")
    if name is not None and not isinstance(name, str):
        name = str(name)
    return SearchSetSpec(
        pitch_classes=None if pitch_classes is None else _int_list(pitch_classes, f"{where}.pitch_classes"),
        name=name,
        transpositions=_transpositions(raw.get("transpositions"), f"{where}.transpositions"),
    )


def parse_job(data: Mapping[str, Any]) -> AnalysisJob:
    """Validate a job mapping (usually straight from YAML or JSON).

    Raises:
        ValueError: If the structure is invalid. Pitch-class ranges and row
            lengths are checked later, by the analyzer.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Job must be a mapping, got {type(data).__name__}")

    groups = data.get("groups")
    if not isinstance(groups, list) or not groups:
        raise ValueError("Job needs a non-empty 'groups' list")
    search_sets = data.get("search_sets") or []
    if not isinstance(search_sets, list):
        raise ValueError("'search_sets' must be a list")

    score_range = data.get("score_range") or {}
    if not isinstance(score_range, Mapping):
        raise ValueError("'score_range' must be a mapping with 'minimum'/'maximum'")

    minimum = score_range.get("minimum") or 0
    maximum = score_range.get("maximum")
    for key, value in (("minimum", minimum), ("maximum", maximum)):
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f"score_range.{key} must be an integer, got {value!r}")

    return AnalysisJob(
        groups=tuple(_parse_group(raw, n) for n, raw in enumerate(groups)),
        search_sets=tuple(_parse_search_set(raw, n) for n, raw in enumerate(search_sets)),
        description=str(data.get("description") or ""),
        report_details=bool(data.get("report_details", False)),
        strict_pitch_classes=bool(data.get("strict_pitch_classes", True)),
        score_range=ScoreRange(minimum=minimum, maximum=maximum),
    )


def load_job(path: str | Path) -> AnalysisJob:
    """Read and parse a YAML job file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the YAML is unreadable or the job is invalid.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"{path}: invalid YAML: {exc}") from exc
    return parse_job(data)


# ---------------------------------------------------------------------------
# Analyzer construction
# ---------------------------------------------------------------------------


def build_analyzer(
    job: AnalysisJob,
    dictionary: SetClassDictionary | None = None,
    *,
    config: AnalyzerConfig | None = None,
) -> MatrixAnalyzer:
    """Create a MatrixAnalyzer populated from ``job``.

    Args:
        job: Parsed job.
        dictionary: Needed when any search set is given by name.
        config: Overrides the configuration derived from the job.

    Raises:
        InvalidMatrixError:    If rows or search sets are invalid.
        SetClassNotFoundError: If a named search set is unknown.
    """
    analyzer = MatrixAnalyzer(dictionary, config=config or job.analyzer_config())
    for group_id, group in enumerate(job.groups, start=1):
        for row in group.rows:
            analyzer.add_row(group_id, row, transpose_by=group.transpose_by)
    for spec in job.search_sets:
        for n in spec.transpositions:
            if spec.name is not None:
                analyzer.add_named_search_set(spec.name, transpose_by=n)
            else:
                analyzer.add_search_set(spec.pitch_classes or (), transpose_by=n)
    return analyzer
