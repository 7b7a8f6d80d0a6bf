"""SketchContext: the per-render state handed to a sketch function.

A context is built fresh for every render and dropped afterwards. It owns
the seeded random source, the drawable area, the current intersection
ledger and the primitives emitted so far.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from sketchbook.engine.lines import IntersectionLedger
from sketchbook.engine.primitives import (
    BoundingBox,
    DotPrimitive,
    LinePrimitive,
    LineSegment,
    Point,
    PolylinePrimitive,
    Primitive,
)
from sketchbook.engine.registry import SketchParams
from sketchbook.engine.rng import SeededRandom


@dataclass
class SketchContext:
    seed: int | None
    rng: SeededRandom
    width: float
    height: float
    # Canvas minus margins
    area: BoundingBox
    ledger: IntersectionLedger = field(default_factory=IntersectionLedger)
    primitives: list[Primitive] = field(default_factory=list)
    # Free-form counters reported with the result (coverage, rejects, ...)
    stats: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, seed: int | None, params: SketchParams) -> SketchContext:
        area = BoundingBox(
            params.margin_x,
            params.margin_y,
            max(0.0, params.width - 2 * params.margin_x),
            max(0.0, params.height - 2 * params.margin_y),
        )
        return cls(
            seed=seed,
            rng=SeededRandom(seed),
            width=params.width,
            height=params.height,
            area=area,
        )

    @property
    def canvas(self) -> BoundingBox:
        return BoundingBox(0.0, 0.0, self.width, self.height)

    def new_ledger(self, tolerance: float = 0.1) -> IntersectionLedger:
        """Start a new instancing pass with an empty ledger."""
        self.ledger = IntersectionLedger(tolerance)
        return self.ledger

    # --- primitive output ---

    def line(self, segment: LineSegment, color: str, weight: float | None = None) -> None:
        self.primitives.append(LinePrimitive(segment, color, weight))

    def lines(self, segments: Iterable[LineSegment], color: str, weight: float | None = None) -> None:
        for segment in segments:
            self.line(segment, color, weight)

    def polyline(
        self,
        points: Sequence[Point],
        color: str,
        weight: float | None = None,
        smooth: bool = False,
    ) -> None:
        if len(points) < 2:
            return
        self.primitives.append(PolylinePrimitive(tuple(points), color, weight, smooth))

    def dot(self, point: Point, color: str, size: float = 1.0) -> None:
        self.primitives.append(DotPrimitive(point, color, size))

    def count(self, name: str, amount: int = 1) -> None:
        self.stats[name] = self.stats.get(name, 0) + amount
