"""Sketch runner: resolves parameters, renders one sketch, reports timing."""

from __future__ import annotations

import dataclasses
import logging
import time
import typing
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from shapely.geometry import LineString
from shapely.geometry.base import BaseGeometry

from sketchbook.engine.context import SketchContext
from sketchbook.engine.errors import InvalidParameterError
from sketchbook.engine.paths import rotate_path
from sketchbook.engine.primitives import (
    BoundingBox,
    DotPrimitive,
    LinePrimitive,
    LineSegment,
    Point,
    PolylinePrimitive,
    Primitive,
)
from sketchbook.engine.registry import SketchParams, SketchRegistry, SketchSpec, get_registry

logger = logging.getLogger(__name__)


@dataclass
class SketchResult:
    key: str
    seed: int
    params: dict[str, Any]
    width: float
    height: float
    primitives: list[Primitive] = field(default_factory=list)
    stats: dict[str, Any] = field(default_factory=dict)
    elapsed_ms: float = 0.0


def random_seed() -> int:
    """Fresh 32-bit seed from OS entropy, so unseeded renders can be replayed."""
    return int(np.random.SeedSequence().generate_state(1)[0])


def _check_value(name: str, value: Any, expected: Any) -> Any:
    origin = typing.get_origin(expected)
    if expected is bool:
        if not isinstance(value, bool):
            raise InvalidParameterError(f"Parameter {name!r} must be a boolean, got {value!r}")
        return value
    if expected is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidParameterError(f"Parameter {name!r} must be an integer, got {value!r}")
        return value
    if expected is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidParameterError(f"Parameter {name!r} must be a number, got {value!r}")
        return float(value)
    if expected is str:
        if not isinstance(value, str):
            raise InvalidParameterError(f"Parameter {name!r} must be a string, got {value!r}")
        return value
    if origin is list:
        if not isinstance(value, list):
            raise InvalidParameterError(f"Parameter {name!r} must be a list, got {value!r}")
        (item_type,) = typing.get_args(expected) or (Any,)
        if item_type is Any:
            return list(value)
        return [_check_value(f"{name}[{i}]", item, item_type) for i, item in enumerate(value)]
    return value


def resolve_params(spec: SketchSpec, overrides: dict[str, Any] | None = None) -> SketchParams:
    """Defaults of ``spec.params`` with ``overrides`` applied and type-checked."""
    overrides = overrides or {}
    hints = typing.get_type_hints(spec.params)
    names = {f.name for f in dataclasses.fields(spec.params)}

    unknown = sorted(set(overrides) - names)
    if unknown:
        raise InvalidParameterError(f"Unknown parameter(s) for {spec.key}: {', '.join(unknown)}")

    checked = {name: _check_value(name, value, hints.get(name, Any)) for name, value in overrides.items()}
    params = spec.params(**checked)
    if params.width <= 0 or params.height <= 0:
        raise InvalidParameterError(f"Canvas must have positive size, got {params.width}x{params.height}")
    if params.margin_x < 0 or params.margin_y < 0:
        raise InvalidParameterError("Margins must be non-negative")
    return params


def rotate_primitives(primitives: list[Primitive], degrees: float, center: Point) -> list[Primitive]:
    """Rebuild every primitive rotated about ``center``."""
    rotated: list[Primitive] = []
    for prim in primitives:
        if isinstance(prim, LinePrimitive):
            start, end = rotate_path([prim.segment.start, prim.segment.end], degrees, center)
            rotated.append(LinePrimitive(LineSegment(start.x, start.y, end.x, end.y), prim.color, prim.weight))
        elif isinstance(prim, PolylinePrimitive):
            pts = tuple(rotate_path(list(prim.points), degrees, center))
            rotated.append(PolylinePrimitive(pts, prim.color, prim.weight, prim.smooth))
        elif isinstance(prim, DotPrimitive):
            (pt,) = rotate_path([prim.point], degrees, center)
            rotated.append(DotPrimitive(pt, prim.color, prim.size))
    return rotated


def _line_parts(geom: BaseGeometry) -> list[LineString]:
    if geom.is_empty:
        return []
    if isinstance(geom, LineString):
        return [geom]
    parts = getattr(geom, "geoms", ())
    return [g for g in parts if isinstance(g, LineString) and not g.is_empty]


def clip_primitives(primitives: list[Primitive], canvas: BoundingBox) -> list[Primitive]:
    """Cut every primitive to ``canvas``.

    Primitives fully inside pass through untouched. A line or polyline
    leaving and re-entering the canvas comes back as several pieces; dots
    outside are dropped.
    """
    area = canvas.to_polygon()
    clipped: list[Primitive] = []
    for prim in primitives:
        if isinstance(prim, LinePrimitive):
            seg = prim.segment
            if canvas.contains(seg.start) and canvas.contains(seg.end):
                clipped.append(prim)
                continue
            for part in _line_parts(seg.to_linestring().intersection(area)):
                (x1, y1), (x2, y2) = part.coords[0], part.coords[-1]
                clipped.append(LinePrimitive(LineSegment(x1, y1, x2, y2), prim.color, prim.weight))
        elif isinstance(prim, PolylinePrimitive):
            if all(canvas.contains(p) for p in prim.points):
                clipped.append(prim)
                continue
            for part in _line_parts(LineString(prim.points).intersection(area)):
                pts = tuple(Point(x, y) for x, y in part.coords)
                if len(pts) >= 2:
                    clipped.append(PolylinePrimitive(pts, prim.color, prim.weight, prim.smooth))
        elif isinstance(prim, DotPrimitive):
            if canvas.contains(prim.point):
                clipped.append(prim)
    return clipped


class SketchRunner:
    """Renders registered sketches. Holds no per-render state."""

    def __init__(self, registry: SketchRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def render(
        self,
        key: str,
        seed: int | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> SketchResult:
        spec = self.registry.get(key)
        params = resolve_params(spec, overrides)
        if seed is None:
            seed = random_seed()

        start = time.perf_counter()
        ctx = SketchContext.create(seed, params)
        spec.fn(ctx, params)

        primitives = ctx.primitives
        if params.rotate:
            primitives = rotate_primitives(primitives, params.rotate, ctx.canvas.center)
        primitives = clip_primitives(primitives, ctx.canvas)

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Rendered %s (seed %d): %d primitives in %.0fms",
            key,
            seed,
            len(primitives),
            elapsed,
        )
        return SketchResult(
            key=key,
            seed=seed,
            params=dataclasses.asdict(params),
            width=params.width,
            height=params.height,
            primitives=primitives,
            stats=dict(ctx.stats),
            elapsed_ms=round(elapsed, 1),
        )


def create_runner(registry: SketchRegistry | None = None) -> SketchRunner:
    """Factory function for a runner over the bundled sketches."""
    if registry is None:
        import sketchbook.sketches  # noqa: F401  (registers the bundled sketches)
    return SketchRunner(registry=registry)
