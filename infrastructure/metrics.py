"""Prometheus metrics for the pitch-class analysis service.

Metrics carry the musical dimensions of the work (snapshot volume, lookup
outcome) rather than just generic HTTP stats.

Metrics:
    matrix_runs_total               Counter of analyzer runs by status
    matrix_snapshots_total          Counter of rotation snapshots analyzed
    matrix_run_latency_seconds      Histogram of analyzer run latency
    set_class_lookups_total         Counter of set-class lookups by outcome
    set_analyses_total              Counter of single-set analyses

Usage::

    from infrastructure.metrics import LatencyTimer, record_matrix_run

    with LatencyTimer() as t:
        report = analyzer.run()
    record_matrix_run(status="success", snapshots=report.rotation_count,
                      latency_seconds=t.elapsed)
"""

from __future__ import annotations

import logging
import time

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

logger = logging.getLogger(__name__)

_REGISTRY = CollectorRegistry()

matrix_runs_total = Counter(
    "pcs_matrix_runs_total",
    "Matrix analyzer runs by status",
    ["status"],
    registry=_REGISTRY,
)

matrix_snapshots_total = Counter(
    "pcs_matrix_snapshots_total",
    "Rotation snapshots analyzed across all runs",
    registry=_REGISTRY,
)

matrix_run_latency_seconds = Histogram(
    "pcs_matrix_run_latency_seconds",
    "Matrix analyzer run latency in seconds",
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 30.0, 120.0],
    registry=_REGISTRY,
)

set_class_lookups_total = Counter(
    "pcs_set_class_lookups_total",
    "Set-class dictionary lookups by outcome",
    ["outcome"],
    registry=_REGISTRY,
)

set_analyses_total = Counter(
    "pcs_set_analyses_total",
    "Single pitch-class set analyses",
    registry=_REGISTRY,
)


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def record_matrix_run(*, status: str, snapshots: int, latency_seconds: float) -> None:
    """Record a finished (or failed) analyzer run.

    Args:
        status: One of "success", "invalid", "cancelled", "rejected".
        snapshots: Snapshots analyzed before the run ended.
        latency_seconds: Wall-clock run time in seconds.
    """
    matrix_runs_total.labels(status=status).inc()
    if snapshots:
        matrix_snapshots_total.inc(snapshots)
    matrix_run_latency_seconds.observe(latency_seconds)


def record_set_class_lookup(*, found: bool) -> None:
    """Increment the lookup counter under "hit" or "miss"."""
    set_class_lookups_total.labels(outcome="hit" if found else "miss").inc()


def record_set_analysis() -> None:
    """Increment the single-set analysis counter."""
    set_analyses_total.inc()


def get_metrics_response() -> tuple[bytes, str]:
    """Generate Prometheus text exposition format.

    Returns:
        Tuple of (body_bytes, content_type_string).
    """
    return generate_latest(_REGISTRY), CONTENT_TYPE_LATEST


class LatencyTimer:
    """Context manager for measuring latency.

    Usage::

        with LatencyTimer() as t:
            report = analyzer.run()
        record_matrix_run(status="success", snapshots=report.rotation_count,
                          latency_seconds=t.elapsed)
    """

    def __init__(self) -> None:
        self._start: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> LatencyTimer:
        self._start = time.perf_counter()
        return self

    def __exit__(self, *_: object) -> None:
        self.elapsed = time.perf_counter() - self._start


logger.debug("Prometheus metrics registry initialized")
