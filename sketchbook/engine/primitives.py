"""Geometry value types shared by every generator. No engine imports."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

from shapely.geometry import LineString, Polygon
from shapely.geometry import box as shapely_box


class Point(NamedTuple):
    x: float
    y: float


# Ordered point sequence. Consumers treat it as read-only; transforms
# such as rotation build a new list.
Path = list[Point]

# (i, j) = (column, row) on a coarse grid.
GridCell = tuple[int, int]


class PathSample(NamedTuple):
    """Position on a path plus an (unnormalized) tangent direction."""

    point: Point
    direction: Point


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if not all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height)):
            raise ValueError(f"BoundingBox must be finite: {self}")
        if self.width < 0 or self.height < 0:
            raise ValueError(f"BoundingBox extents must be non-negative: {self}")

    @classmethod
    def from_corners(cls, x1: float, y1: float, x2: float, y2: float) -> BoundingBox:
        return cls(min(x1, x2), min(y1, y2), abs(x2 - x1), abs(y2 - y1))

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def min_side(self) -> float:
        return min(self.width, self.height)

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains(self, point: Point) -> bool:
        """Edge-inclusive containment test."""
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom

    def inset(self, padding: float) -> BoundingBox:
        """Shrink by ``padding`` on every side, collapsing to zero extent if needed."""
        w = max(0.0, self.width - 2 * padding)
        h = max(0.0, self.height - 2 * padding)
        return BoundingBox(self.x + padding, self.y + padding, w, h)

    def to_polygon(self) -> Polygon:
        return shapely_box(self.x, self.y, self.right, self.bottom)


@dataclass(frozen=True)
class LineSegment:
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def length(self) -> float:
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)

    @property
    def start(self) -> Point:
        return Point(self.x1, self.y1)

    @property
    def end(self) -> Point:
        return Point(self.x2, self.y2)

    def to_linestring(self) -> LineString:
        return LineString([(self.x1, self.y1), (self.x2, self.y2)])


# --- Drawable primitives handed to the render collaborator ---
# ``color`` is a semantic token ("family.pen"); the collaborator resolves
# it. ``weight`` of None means "use the pen's own stroke width".


@dataclass(frozen=True)
class LinePrimitive:
    segment: LineSegment
    color: str
    weight: float | None = None


@dataclass(frozen=True)
class PolylinePrimitive:
    points: tuple[Point, ...]
    color: str
    weight: float | None = None
    smooth: bool = False


@dataclass(frozen=True)
class DotPrimitive:
    point: Point
    color: str
    size: float = 1.0


Primitive = LinePrimitive | PolylinePrimitive | DotPrimitive
