"""Dot fields: rejection-sampled placement with a minimum spacing.

A uniform hash grid with cell size equal to the spacing limits every
proximity check to the 3x3 block of cells around the candidate.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict

from sketchbook.engine.config import NOISE_ATTEMPTS_FACTOR
from sketchbook.engine.primitives import BoundingBox, GridCell, Point
from sketchbook.engine.rng import SeededRandom

logger = logging.getLogger(__name__)


class SpatialHashGrid:
    """Points bucketed by ``floor((p - origin) / cell_size)``."""

    def __init__(self, cell_size: float, origin: Point = Point(0.0, 0.0)) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = cell_size
        self.origin = origin
        self._cells: defaultdict[GridCell, list[Point]] = defaultdict(list)
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def key(self, point: Point) -> GridCell:
        return (
            int(math.floor((point.x - self.origin.x) / self.cell_size)),
            int(math.floor((point.y - self.origin.y) / self.cell_size)),
        )

    def add(self, point: Point) -> None:
        self._cells[self.key(point)].append(point)
        self._count += 1

    def neighbors(self, point: Point) -> list[Point]:
        col, row = self.key(point)
        found: list[Point] = []
        for di in (-1, 0, 1):
            for dj in (-1, 0, 1):
                bucket = self._cells.get((col + di, row + dj))
                if bucket:
                    found.extend(bucket)
        return found

    def has_within(self, point: Point, distance: float) -> bool:
        """True if a stored point lies closer than ``distance``.

        Only exact for ``distance <= cell_size``.
        """
        limit = distance * distance
        for other in self.neighbors(point):
            dx = point.x - other.x
            dy = point.y - other.y
            if dx * dx + dy * dy < limit:
                return True
        return False


def place_points(
    rng: SeededRandom,
    bbox: BoundingBox,
    spacing: float,
    target_count: int,
    attempts_factor: int = NOISE_ATTEMPTS_FACTOR,
) -> list[Point]:
    """Up to ``target_count`` uniform points in ``bbox``, pairwise at least ``spacing`` apart.

    Gives up after ``attempts_factor * target_count`` candidates, so dense
    requests near the packing limit return fewer points.
    """
    if target_count <= 0:
        return []

    grid = SpatialHashGrid(spacing, Point(bbox.x, bbox.y))
    placed: list[Point] = []
    max_attempts = target_count * attempts_factor
    attempts = 0

    while len(placed) < target_count and attempts < max_attempts:
        attempts += 1
        candidate = Point(bbox.x + rng.random() * bbox.width, bbox.y + rng.random() * bbox.height)
        if grid.has_within(candidate, spacing):
            continue
        grid.add(candidate)
        placed.append(candidate)

    if len(placed) < target_count:
        logger.debug(
            "Placed %d/%d points in %s after %d attempts", len(placed), target_count, bbox, attempts
        )
    return placed


def noise_rect(rng: SeededRandom, bbox: BoundingBox, density: float, point_size: float) -> list[Point]:
    """Dots at ``density`` percent of the rectangle's capacity.

    Spacing is twice the dot size; at 100 the request is one dot per
    ``spacing**2`` of area, which saturates well before it is met.
    """
    spacing = point_size * 2
    if spacing <= 0:
        return []
    capacity = bbox.area / (spacing * spacing)
    target = int(math.floor(density / 100 * capacity))
    return place_points(rng, bbox, spacing, target)


def snap_to_grid(value: float, cell_size: float) -> float:
    return math.floor(value / cell_size + 0.5) * cell_size


def split_space(rng: SeededRandom, bbox: BoundingBox, count: int, cell_size: float) -> list[BoundingBox]:
    """Recursively cut ``bbox`` into about ``count`` grid-snapped rectangles.

    Cuts land between 30% and 70% of the side; boxes more than 1.5x
    longer one way are always cut across that side. Boxes too small to cut
    are returned whole, so the result may hold fewer than ``count`` boxes.
    """
    x = snap_to_grid(bbox.x, cell_size)
    y = snap_to_grid(bbox.y, cell_size)
    w = snap_to_grid(bbox.width, cell_size)
    h = snap_to_grid(bbox.height, cell_size)
    snapped = BoundingBox(x, y, w, h)

    if count <= 1:
        return [snapped]

    split_vertically = rng.random() < 0.5
    if w > h * 1.5:
        split_vertically = True
    if h > w * 1.5:
        split_vertically = False

    if split_vertically and w >= 2 * cell_size:
        split = snap_to_grid(rng.uniform(w * 0.3, w * 0.7), cell_size)
        count_a = int(math.floor(rng.uniform(1, count)))
        return split_space(rng, BoundingBox(x, y, split, h), count_a, cell_size) + split_space(
            rng, BoundingBox(x + split, y, w - split, h), count - count_a, cell_size
        )
    if not split_vertically and h >= 2 * cell_size:
        split = snap_to_grid(rng.uniform(h * 0.3, h * 0.7), cell_size)
        count_a = int(math.floor(rng.uniform(1, count)))
        return split_space(rng, BoundingBox(x, y, w, split), count_a, cell_size) + split_space(
            rng, BoundingBox(x, y + split, w, h - split), count - count_a, cell_size
        )

    return [snapped]
