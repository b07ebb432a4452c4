"""
api/routes/matrix.py — Rotation matrix analysis endpoint.

Endpoints
=========
    POST /matrix/analyze   — Run the analyzer over the posted groups and search sets

The route is a sync function so FastAPI runs the analyzer in its threadpool.
Run time grows as columns ** (groups - 1); requests whose snapshot count
exceeds MATRIX_MAX_SNAPSHOTS are rejected before any work is done.

Error codes
===========
    422  — Invalid job structure, invalid matrix, unknown set-class name,
           or too many snapshots
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_max_snapshots, get_set_class_dictionary
from api.schemas.matrix import MatrixAnalyzeRequest, MatrixAnalyzeResponse
from core.matrix_analysis.jobs import build_analyzer, parse_job
from core.matrix_analysis.report import format_summary
from core.set_theory.dictionary import SetClassDictionary, SetClassNotFoundError
from infrastructure.metrics import LatencyTimer, record_matrix_run, record_set_class_lookup

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matrix", tags=["matrix"])

Dictionary = Annotated[SetClassDictionary, Depends(get_set_class_dictionary)]
MaxSnapshots = Annotated[int, Depends(get_max_snapshots)]


@router.post("/analyze", response_model=MatrixAnalyzeResponse)
def analyze_matrix(
    body: MatrixAnalyzeRequest,
    dictionary: Dictionary,
    max_snapshots: MaxSnapshots,
) -> MatrixAnalyzeResponse:
    """
    Score every rotation of the posted voice-groups against the search sets.

    Returns the score histogram, the snapshot counters, the plain-text summary
    and, when ``report_details`` is set, one record per counted snapshot.
    """
    try:
        job = parse_job(body.to_job_mapping())
        analyzer = build_analyzer(job, dictionary)
    except SetClassNotFoundError as exc:
        record_set_class_lookup(found=False)
        record_matrix_run(status="invalid", snapshots=0, latency_seconds=0.0)
        logger.warning("Matrix request names an unknown set class: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ValueError as exc:
        record_matrix_run(status="invalid", snapshots=0, latency_seconds=0.0)
        logger.warning("Invalid matrix request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    if analyzer.maximum_rotations > max_snapshots:
        record_matrix_run(status="rejected", snapshots=0, latency_seconds=0.0)
        logger.warning(
            "Matrix request rejected: %d snapshots exceeds limit %d",
            analyzer.maximum_rotations,
            max_snapshots,
        )
        raise HTTPException(
            status_code=422,
            detail=(
                f"Matrix needs {analyzer.maximum_rotations} snapshots; "
                f"the limit is {max_snapshots}"
            ),
        )

    with LatencyTimer() as timer:
        try:
            report = analyzer.run()
        except ValueError as exc:
            record_matrix_run(status="invalid", snapshots=0, latency_seconds=0.0)
            logger.warning("Matrix validation failed: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    record_matrix_run(
        status="success",
        snapshots=report.rotation_count,
        latency_seconds=timer.elapsed,
    )
    return MatrixAnalyzeResponse.from_report(
        report,
        description=job.description,
        summary=format_summary(report.histogram),
        elapsed_ms=timer.elapsed * 1000,
    )
