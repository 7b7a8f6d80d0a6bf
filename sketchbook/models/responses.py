"""API response models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from sketchbook.engine.primitives import DotPrimitive, LinePrimitive, PolylinePrimitive, Primitive
from sketchbook.pens.catalog import PenStroke


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    sketches_registered: int = 0


class SketchSummary(BaseModel):
    key: str
    title: str
    description: str = ""


class SketchDetail(SketchSummary):
    defaults: dict[str, Any] = Field(default_factory=dict)


class LineOut(BaseModel):
    kind: Literal["line"] = "line"
    color: str
    weight: float | None = None
    x1: float
    y1: float
    x2: float
    y2: float


class PolylineOut(BaseModel):
    kind: Literal["polyline"] = "polyline"
    color: str
    weight: float | None = None
    smooth: bool = False
    points: list[tuple[float, float]]


class DotOut(BaseModel):
    kind: Literal["dot"] = "dot"
    color: str
    size: float = 1.0
    x: float
    y: float


PrimitiveOut = LineOut | PolylineOut | DotOut


def primitive_out(prim: Primitive) -> PrimitiveOut:
    if isinstance(prim, LinePrimitive):
        seg = prim.segment
        return LineOut(color=prim.color, weight=prim.weight, x1=seg.x1, y1=seg.y1, x2=seg.x2, y2=seg.y2)
    if isinstance(prim, PolylinePrimitive):
        return PolylineOut(
            color=prim.color,
            weight=prim.weight,
            smooth=prim.smooth,
            points=[(p.x, p.y) for p in prim.points],
        )
    if isinstance(prim, DotPrimitive):
        return DotOut(color=prim.color, size=prim.size, x=prim.point.x, y=prim.point.y)
    raise TypeError(f"Unsupported primitive: {type(prim).__name__}")


class RenderResponse(BaseModel):
    key: str
    seed: int
    width: float
    height: float
    params: dict[str, Any] = Field(default_factory=dict)
    primitives: list[PrimitiveOut] = Field(default_factory=list)
    pens: dict[str, PenStroke] = Field(default_factory=dict)
    stats: dict[str, Any] = Field(default_factory=dict)
    processing_time_ms: float = 0.0
