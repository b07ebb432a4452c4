"""
api/main.py — FastAPI application for pitch-class set analysis.

Routers:
    sets    — /sets/analyze, /set-classes, /set-classes/{name}
    matrix  — /matrix/analyze

Run locally with ``uvicorn api.main:app --reload``.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from api.deps import get_set_class_dictionary
from api.routes.matrix import router as matrix_router
from api.routes.sets import router as sets_router
from core.set_theory.dictionary import SetClassDictionary
from infrastructure.metrics import get_metrics_response

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Load the reference table once at startup so bad tables fail fast."""
    dictionary = get_set_class_dictionary()
    logger.info("Set-class dictionary ready: %d entries", len(dictionary))
    yield


app = FastAPI(title="Pitch-Class Set Analysis", lifespan=lifespan)

# CORS: a local notation/analysis UI on a dev server calls the API
# localhost and 127.0.0.1 are distinct origins to browsers
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(sets_router)
app.include_router(matrix_router)


@app.get("/health")
def health(
    dictionary: Annotated[SetClassDictionary, Depends(get_set_class_dictionary)],
) -> dict[str, str | int]:
    """Liveness check reporting the size of the loaded reference table."""
    return {"status": "ok", "set_classes": len(dictionary)}


@app.get("/metrics")
def metrics() -> Response:
    """Prometheus metrics in text exposition format."""
    body, content_type = get_metrics_response()
    return Response(content=body, media_type=content_type)
