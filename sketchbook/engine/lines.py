"""Perpendicular line instancing along a path.

Every "on" position on the path becomes a short line along the local
normal. With intersection avoidance enabled, each candidate is tested
against the lines already accepted in the same pass (tracked by a
caller-owned ``IntersectionLedger``) and dropped on any hit.

The ledger check is O(k^2) in lines per pass: fine for hundreds of lines,
a scaling limit beyond a few thousand.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from sketchbook.engine.config import LEDGER_WARN_SIZE, LineStyle
from sketchbook.engine.paths import calculate_path_distances, point_at_distance
from sketchbook.engine.patterns import PathSegment
from sketchbook.engine.primitives import LineSegment, PathSample, Point
from sketchbook.engine.rng import SeededRandom

logger = logging.getLogger(__name__)

# Denominators below this mean the two lines are parallel
_PARALLEL_EPS = 1e-4


def intersection_parameter(
    line1: LineSegment, line2: LineSegment, tolerance: float = 0.5
) -> float | None:
    """Parameter along ``line1`` where it meets ``line2``, or None.

    Both segment parameters must fall in ``[-tolerance, 1 + tolerance]``.
    Parallel lines never intersect.
    """
    x1, y1, x2, y2 = line1.x1, line1.y1, line1.x2, line1.y2
    x3, y3, x4, y4 = line2.x1, line2.y1, line2.x2, line2.y2

    denom = (y4 - y3) * (x2 - x1) - (x4 - x3) * (y2 - y1)
    if abs(denom) < _PARALLEL_EPS:
        return None

    ua = ((x4 - x3) * (y1 - y3) - (y4 - y3) * (x1 - x3)) / denom
    ub = ((x2 - x1) * (y1 - y3) - (y2 - y1) * (x1 - x3)) / denom

    lo, hi = -tolerance, 1 + tolerance
    if lo <= ua <= hi and lo <= ub <= hi:
        return ua
    return None


class IntersectionLedger:
    """Lines accepted so far in one instancing pass."""

    def __init__(self, tolerance: float = 0.1) -> None:
        self.tolerance = tolerance
        self._segments: list[LineSegment] = []
        self._warned = False

    @property
    def segments(self) -> list[LineSegment]:
        return list(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def intersects_any(self, segment: LineSegment) -> bool:
        return any(
            intersection_parameter(segment, existing, self.tolerance) is not None
            for existing in self._segments
        )

    def add(self, segment: LineSegment) -> None:
        self._segments.append(segment)
        if not self._warned and len(self._segments) > LEDGER_WARN_SIZE:
            self._warned = True
            logger.warning(
                "Intersection ledger holds %d segments; pairwise checks grow quadratically",
                len(self._segments),
            )

    def try_add(self, segment: LineSegment) -> bool:
        """Append ``segment`` unless it crosses a recorded one."""
        if self.intersects_any(segment):
            return False
        self.add(segment)
        return True

    def clear(self) -> None:
        self._segments.clear()
        self._warned = False


@dataclass
class InstancingResult:
    segments: list[LineSegment] = field(default_factory=list)
    rejected: int = 0


def perpendicular_line(sample: PathSample, length: float, start_on_path: bool = False) -> LineSegment:
    """Line along the unit normal at ``sample`` (tangent rotated 90 degrees clockwise)."""
    dx, dy = sample.direction
    perp_x, perp_y = dy, -dx
    perp_len = math.hypot(perp_x, perp_y)
    if perp_len > 0:
        perp_x /= perp_len
        perp_y /= perp_len

    px, py = sample.point
    if start_on_path:
        return LineSegment(px, py, px + perp_x * length, py + perp_y * length)
    half = length / 2
    return LineSegment(px - perp_x * half, py - perp_y * half, px + perp_x * half, py + perp_y * half)


def _accept(
    segment: LineSegment,
    style: LineStyle,
    ledger: IntersectionLedger | None,
    result: InstancingResult,
) -> None:
    if style.avoid_intersections and ledger is not None:
        if not ledger.try_add(segment):
            result.rejected += 1
            return
    result.segments.append(segment)


def _ledger_for(style: LineStyle, ledger: IntersectionLedger | None) -> IntersectionLedger | None:
    if style.avoid_intersections and ledger is None:
        return IntersectionLedger(style.intersection_tolerance)
    return ledger


def instance_mask_lines(
    rng: SeededRandom,
    path: Sequence[Point],
    mask: NDArray[np.int8] | Sequence[int],
    style: LineStyle,
    ledger: IntersectionLedger | None = None,
) -> InstancingResult:
    """One normal line per "on" slot; slot ``k`` of ``N`` sits at ``(k + 0.5) / N`` of the length."""
    result = InstancingResult()
    items = len(mask)
    if not path or items == 0:
        return result

    ledger = _ledger_for(style, ledger)
    dists = calculate_path_distances(path)
    total = float(dists[-1])

    for k in range(items):
        if not mask[k]:
            continue
        target = (k + 0.5) / items * total
        sample = point_at_distance(path, dists, target)
        length = rng.uniform(style.line_length_min, style.line_length_max)
        _accept(perpendicular_line(sample, length, style.lines_start_on_path), style, ledger, result)

    return result


def instance_segment_lines(
    rng: SeededRandom,
    path: Sequence[Point],
    segments: Sequence[PathSegment],
    style: LineStyle,
    density_min: float,
    density_max: float,
    ledger: IntersectionLedger | None = None,
) -> InstancingResult:
    """Lines spread through each draw segment, ``density`` lines per 100 px, +-5% jitter."""
    result = InstancingResult()
    if not path:
        return result

    ledger = _ledger_for(style, ledger)
    dists = calculate_path_distances(path)
    total = float(dists[-1])
    if total <= 0:
        return result

    for segment in segments:
        if not segment.draw:
            continue

        density = rng.uniform(density_min, density_max)
        num_lines = max(1, int(math.floor(segment.length / 100 * density)))

        for i in range(num_lines):
            progress = i / max(1, num_lines - 1)
            offset = rng.uniform(-0.05, 0.05)
            position = max(0.0, min(1.0, progress + offset))

            absolute = segment.start + (position * segment.length) / total
            if absolute >= 1:
                continue

            sample = point_at_distance(path, dists, absolute * total)
            length = rng.uniform(style.line_length_min, style.line_length_max)
            _accept(perpendicular_line(sample, length, style.lines_start_on_path), style, ledger, result)

    return result
