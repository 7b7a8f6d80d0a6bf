"""Path geometry: arc-length tables, point-at-distance queries and corner rounding."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from sketchbook.engine.config import (
    BEZIER_CIRCLE_FACTOR,
    DEGENERATE_SIN_EPS,
    DEGENERATE_TANGENT_EPS,
    MIN_CORNER_NEIGHBOR_DIST,
    SHORT_TANGENT_EPS,
    STRAIGHT_ANGLE_EPS,
    TANGENT_SPAN_FRACTION,
    TANGENT_SPAN_MAX,
)
from sketchbook.engine.primitives import Path, PathSample, Point


def calculate_path_distances(path: Sequence[Point]) -> NDArray[np.float64]:
    """Cumulative Euclidean length from the start to each point. ``dists[0] == 0``."""
    if len(path) == 0:
        return np.zeros(0)
    pts = np.asarray(path, dtype=np.float64).reshape(-1, 2)
    diffs = np.diff(pts, axis=0)
    segment_lengths = np.sqrt(np.sum(diffs**2, axis=1))
    return np.concatenate([[0.0], np.cumsum(segment_lengths)])


def path_length(path: Sequence[Point]) -> float:
    dists = calculate_path_distances(path)
    return float(dists[-1]) if len(dists) else 0.0


def find_segment_index(dists: Sequence[float] | NDArray[np.float64], target: float) -> int:
    """Binary search for ``i`` with ``dists[i] <= target < dists[i+1]``.

    Out-of-range targets clamp to ``[0, len(dists) - 2]``.
    """
    last = len(dists) - 2
    if last <= 0:
        return 0
    idx = int(np.searchsorted(dists, target, side="right")) - 1
    return max(0, min(last, idx))


def point_at_distance(
    path: Sequence[Point],
    dists: Sequence[float] | NDArray[np.float64],
    target: float,
) -> PathSample:
    """Interpolated position and tangent at arc length ``target``.

    Short local segments (coincident or duplicated points) widen the
    tangent span to a few neighbours; a still-degenerate tangent falls
    back to (1, 0).
    """
    n = len(path)
    if n == 0:
        raise ValueError("point_at_distance() on an empty path")
    if n == 1:
        return PathSample(Point(path[0].x, path[0].y), Point(1.0, 0.0))

    idx = find_segment_index(dists, target)
    p0 = path[idx]
    p1 = path[min(idx + 1, n - 1)]
    seg_len = float(dists[idx + 1] - dists[idx]) or 1.0
    local_t = (target - float(dists[idx])) / seg_len

    point = Point(p0.x + (p1.x - p0.x) * local_t, p0.y + (p1.y - p0.y) * local_t)

    dx = p1.x - p0.x
    dy = p1.y - p0.y
    if abs(dx) < SHORT_TANGENT_EPS and abs(dy) < SHORT_TANGENT_EPS:
        span = min(TANGENT_SPAN_MAX, int(n * TANGENT_SPAN_FRACTION))
        back = path[max(0, idx - span)]
        forward = path[min(n - 1, idx + span)]
        dx = forward.x - back.x
        dy = forward.y - back.y

    if abs(dx) < DEGENERATE_TANGENT_EPS and abs(dy) < DEGENERATE_TANGENT_EPS:
        dx, dy = 1.0, 0.0

    return PathSample(point, Point(dx, dy))


def round_corners(points: Sequence[Point], radius: float, steps: int = 10) -> Path:
    """Replace each interior vertex with a cubic Bezier arc.

    The corner radius is clamped to ``min(|ab|, |bc|) / 2 * |sin(theta/2)|``
    so neighbouring rounds never overlap. Endpoints pass through unchanged,
    as do near-straight and degenerate vertices.
    """
    if len(points) < 3:
        return list(points)

    rounded: Path = [points[0]]

    for i in range(1, len(points) - 1):
        a, b, c = points[i - 1], points[i], points[i + 1]

        ba_x, ba_y = a.x - b.x, a.y - b.y
        bc_x, bc_y = c.x - b.x, c.y - b.y
        ba_len = math.hypot(ba_x, ba_y)
        bc_len = math.hypot(bc_x, bc_y)

        if ba_len < MIN_CORNER_NEIGHBOR_DIST or bc_len < MIN_CORNER_NEIGHBOR_DIST:
            rounded.append(b)
            continue

        ba_nx, ba_ny = ba_x / ba_len, ba_y / ba_len
        bc_nx, bc_ny = bc_x / bc_len, bc_y / bc_len

        dot = ba_nx * bc_nx + ba_ny * bc_ny
        theta = math.acos(max(-1.0, min(1.0, dot)))
        sin_half = math.sin(theta / 2)

        # theta is the angle between the two legs: pi for a straight line,
        # small for a hairpin.
        if theta < STRAIGHT_ANGLE_EPS or abs(sin_half) < DEGENERATE_SIN_EPS:
            rounded.append(b)
            continue
        if math.pi - theta < STRAIGHT_ANGLE_EPS:
            rounded.append(b)
            continue

        max_r = (min(ba_len, bc_len) / 2) * abs(sin_half)
        corner_r = min(radius, max_r)
        distance = abs(corner_r / sin_half)

        c1x, c1y = b.x + ba_nx * distance, b.y + ba_ny * distance
        c2x, c2y = b.x + bc_nx * distance, b.y + bc_ny * distance

        handle = 2 * corner_r * BEZIER_CIRCLE_FACTOR
        p1x, p1y = c1x - ba_nx * handle, c1y - ba_ny * handle
        p2x, p2y = c2x - bc_nx * handle, c2y - bc_ny * handle

        rounded.append(Point(c1x, c1y))
        for t in range(1, steps + 1):
            u = t / steps
            mu = 1 - u
            w0 = mu * mu * mu
            w1 = 3 * mu * mu * u
            w2 = 3 * mu * u * u
            w3 = u * u * u
            rounded.append(
                Point(
                    w0 * c1x + w1 * p1x + w2 * p2x + w3 * c2x,
                    w0 * c1y + w1 * p1y + w2 * p2y + w3 * c2y,
                )
            )

    rounded.append(points[-1])
    return rounded


def catmull_rom_path(points: Sequence[Point], samples: int = 10) -> Path:
    """Smooth a polyline through its vertices with Catmull-Rom segments."""
    n = len(points)
    if n < 3:
        return list(points)

    smooth: Path = [points[0]]
    for i in range(n - 1):
        p0 = points[max(0, i - 1)]
        p1 = points[i]
        p2 = points[i + 1]
        p3 = points[min(n - 1, i + 2)]
        for t in range(1, samples + 1):
            u = t / samples
            u2 = u * u
            u3 = u2 * u
            x = 0.5 * (
                2 * p1.x
                + (-p0.x + p2.x) * u
                + (2 * p0.x - 5 * p1.x + 4 * p2.x - p3.x) * u2
                + (-p0.x + 3 * p1.x - 3 * p2.x + p3.x) * u3
            )
            y = 0.5 * (
                2 * p1.y
                + (-p0.y + p2.y) * u
                + (2 * p0.y - 5 * p1.y + 4 * p2.y - p3.y) * u2
                + (-p0.y + 3 * p1.y - 3 * p2.y + p3.y) * u3
            )
            smooth.append(Point(x, y))
    return smooth


def rotate_path(path: Sequence[Point], degrees: float, center: Point) -> Path:
    """Rotate about ``center``. Returns a new path."""
    angle = math.radians(degrees)
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    rotated: Path = []
    for p in path:
        dx, dy = p.x - center.x, p.y - center.y
        rotated.append(Point(center.x + dx * cos_a - dy * sin_a, center.y + dx * sin_a + dy * cos_a))
    return rotated


def sanitize_path(path: Sequence[Point]) -> Path:
    """Drop NaN / infinite points before handing a path to the renderer."""
    return [p for p in path if math.isfinite(p.x) and math.isfinite(p.y)]
