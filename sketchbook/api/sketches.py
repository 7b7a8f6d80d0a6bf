"""Sketch listing and rendering endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from sketchbook.config import Settings
from sketchbook.dependencies import get_pen_catalog, get_runner, get_settings
from sketchbook.engine.errors import InvalidParameterError, UnknownPenError, UnknownSketchError
from sketchbook.engine.registry import get_registry
from sketchbook.engine.runner import SketchRunner
from sketchbook.models.requests import RenderRequest
from sketchbook.models.responses import RenderResponse, SketchDetail, SketchSummary, primitive_out
from sketchbook.pens.catalog import PenCatalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sketches")


@router.get("", response_model=list[SketchSummary])
async def list_sketches() -> list[SketchSummary]:
    return [
        SketchSummary(key=spec.key, title=spec.title, description=spec.description)
        for spec in get_registry().all()
    ]


@router.get("/{key}", response_model=SketchDetail)
async def get_sketch(key: str) -> SketchDetail:
    try:
        spec = get_registry().get(key)
    except UnknownSketchError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return SketchDetail(
        key=spec.key,
        title=spec.title,
        description=spec.description,
        defaults=spec.default_params(),
    )


@router.post("/{key}/render", response_model=RenderResponse)
def render_sketch(
    key: str,
    req: RenderRequest,
    runner: SketchRunner = Depends(get_runner),
    catalog: PenCatalog = Depends(get_pen_catalog),
    settings: Settings = Depends(get_settings),
) -> RenderResponse:
    seed = req.seed if req.seed is not None else settings.default_seed
    try:
        result = runner.render(key, seed=seed, overrides=req.params)
        pens = {}
        if req.resolve_colors:
            tokens = sorted({prim.color for prim in result.primitives})
            pens = {token: catalog.resolve(token) for token in tokens}
    except UnknownSketchError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except (InvalidParameterError, UnknownPenError) as e:
        logger.info("Rejected render of %s: %s", key, e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    return RenderResponse(
        key=result.key,
        seed=result.seed,
        width=result.width,
        height=result.height,
        params=result.params,
        primitives=[primitive_out(p) for p in result.primitives],
        pens=pens,
        stats=result.stats,
        processing_time_ms=result.elapsed_ms,
    )
