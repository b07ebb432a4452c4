"""
api/routes/sets.py — Pitch-class set analysis and set-class lookup endpoints.

Endpoints
=========
    POST /sets/analyze             — Every derived form of one set
    GET  /set-classes              — Reference-table entries, optionally by cardinality
    GET  /set-classes/{name}       — One entry by catalogue name

Error codes
===========
    404  — Unknown set-class name
    422  — Pitch classes outside 0–11, cardinality outside 1–12
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_set_class_dictionary
from api.schemas.sets import (
    SetAnalysisRequest,
    SetAnalysisResponse,
    SetClassListResponse,
    SetClassOut,
)
from core.set_theory import sets as algebra
from core.set_theory.dictionary import SetClassDictionary, SetClassNotFoundError
from infrastructure.metrics import record_set_analysis, record_set_class_lookup

logger = logging.getLogger(__name__)

router = APIRouter(tags=["set-theory"])

Dictionary = Annotated[SetClassDictionary, Depends(get_set_class_dictionary)]


@router.post("/sets/analyze", response_model=SetAnalysisResponse)
def analyze_set(body: SetAnalysisRequest, dictionary: Dictionary) -> SetAnalysisResponse:
    """Return transposition, inversion, complement and canonical forms of a set."""
    pcs = body.pitch_classes
    entry = dictionary.identify(pcs) if pcs else None
    record_set_analysis()
    return SetAnalysisResponse(
        pitch_classes=list(pcs),
        transposed=list(algebra.transpose(pcs, body.transpose_by)),
        inverted=list(algebra.invert(pcs)),
        complement=list(algebra.complement(pcs)),
        zero_form=list(algebra.zero_form(pcs)),
        normal_order=list(algebra.normal_order(pcs)),
        reduced=list(algebra.reduce(pcs)),
        prime_form=list(algebra.prime_form(pcs)),
        interval_vector=list(algebra.interval_vector(pcs)),
        set_class=SetClassOut.from_entry(entry) if entry is not None else None,
    )


@router.get("/set-classes", response_model=SetClassListResponse)
def list_set_classes(
    dictionary: Dictionary,
    cardinality: Annotated[int | None, Query(ge=1, le=12)] = None,
) -> SetClassListResponse:
    """List reference-table entries in table order."""
    entries = list(dictionary) if cardinality is None else dictionary.by_cardinality(cardinality)
    return SetClassListResponse(
        count=len(entries),
        set_classes=[SetClassOut.from_entry(entry) for entry in entries],
    )


@router.get("/set-classes/{name}", response_model=SetClassOut)
def get_set_class(name: str, dictionary: Dictionary) -> SetClassOut:
    """Look up one set class by catalogue name (case-sensitive)."""
    try:
        entry = dictionary.get(name)
    except SetClassNotFoundError as exc:
        record_set_class_lookup(found=False)
        logger.info("Set-class lookup miss: %s", name)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    record_set_class_lookup(found=True)
    return SetClassOut.from_entry(entry)
