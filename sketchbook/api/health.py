"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from sketchbook import __version__
from sketchbook.engine.registry import get_registry
from sketchbook.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        sketches_registered=get_registry().count,
    )
