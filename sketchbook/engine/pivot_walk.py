"""Bounded pivot walk: short random walks that never leave their box.

Each step turns the heading by a random pivot angle and advances a random
length. Steps landing outside the box are retried with a further pivot;
when the retries run out the walk stalls on its current point.
"""

from __future__ import annotations

import logging
import math

from sketchbook.engine.config import PivotPathConfig
from sketchbook.engine.paths import catmull_rom_path
from sketchbook.engine.primitives import Path, Point
from sketchbook.engine.rng import SeededRandom

logger = logging.getLogger(__name__)


def generate_pivot_path(rng: SeededRandom, config: PivotPathConfig) -> Path:
    """Walk ``config.steps`` pivots from a jittered box centre.

    Returns ``steps + 2`` points when starting from the centre, else
    ``steps + 1``.
    """
    bbox = config.bounding_box
    center = bbox.center
    max_r = bbox.min_side / 2

    # Small jump off centre; the initial heading points along it
    jitter_r = rng.uniform(-config.inner_jitter_frac, config.inner_jitter_frac) * max_r
    jitter_a = rng.angle()
    first = Point(center.x + math.cos(jitter_a) * jitter_r, center.y + math.sin(jitter_a) * jitter_r)
    heading = math.atan2(first.y - center.y, first.x - center.x)

    pts: Path = []
    if config.start_from_center:
        pts.append(center)
    pts.append(first)

    x, y = first
    stalls = 0
    for _ in range(config.steps):
        for _attempt in range(config.max_attempts):
            heading += math.radians(rng.uniform(config.pivot_angle_min, config.pivot_angle_max))
            length = rng.uniform(config.min_length, config.max_length)
            nx = x + math.cos(heading) * length
            ny = y + math.sin(heading) * length
            if bbox.contains(Point(nx, ny)):
                break
        else:
            nx, ny = x, y
            stalls += 1

        pts.append(Point(nx, ny))
        x, y = nx, ny

    if stalls:
        logger.debug("Pivot walk stalled %d/%d steps in %s", stalls, config.steps, bbox)
    return pts


def generate_curved_pivot_path(rng: SeededRandom, config: PivotPathConfig, samples: int = 10) -> Path:
    """Pivot walk smoothed through its vertices with Catmull-Rom segments."""
    return catmull_rom_path(generate_pivot_path(rng, config), samples)
