"""Draw/skip pattern generation along a path.

Two flavours:
- slot masks: a flat 0/1 array over N instancing slots, built from
  alternating runs whose draw probability depends on the distance to an
  emphasis range;
- path segments: pixel-length draw/skip spans with in-zone and
  out-of-zone probabilities.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

import numpy as np
from numpy.typing import NDArray

from sketchbook.engine.config import PatternConfig, SegmentConfig
from sketchbook.engine.rng import SeededRandom


@dataclass(frozen=True)
class PatternRun:
    kind: Literal["draw", "skip"]
    length: int
    gap: int = 0  # draw runs only: 1 every (gap+1) slots

    @property
    def is_draw(self) -> bool:
        return self.kind == "draw"

    def slots(self) -> list[int]:
        if not self.is_draw:
            return [0] * self.length
        return [1 if i % (self.gap + 1) == 0 else 0 for i in range(self.length)]


@dataclass(frozen=True)
class PathSegment:
    start: float  # fraction of total path length
    length: float  # pixels
    draw: bool


def zone_probability(distance: float, items: int, inside: float, outside: float) -> float:
    """Linear map: 0 at a range edge -> inside, half the slot count away -> outside."""
    half = items / 2
    if half <= 0:
        return inside
    t = min(1.0, max(0.0, distance / half))
    return inside + (outside - inside) * t


def color_zone(index: int, total: int, items: int) -> tuple[int, int]:
    """Emphasis range ``[offset_min, offset_max)`` for colour ``index`` of ``total``."""
    if total <= 0:
        return (0, items)
    return (
        int(math.floor(index / total * items)),
        int(math.floor((index + 1) / total * items)),
    )


def generate_pattern_runs(
    rng: SeededRandom,
    items: int,
    offset_min: float,
    offset_max: float,
    config: PatternConfig | None = None,
) -> list[PatternRun]:
    """Alternating runs covering exactly ``items`` slots.

    A draw run is always followed by a skip run; the last run is cut to
    the remaining slots.
    """
    cfg = config or PatternConfig()
    runs: list[PatternRun] = []
    position = 0
    last_is_draw = False

    while position < items:
        remaining = items - position
        if last_is_draw:
            drawing = False
        else:
            distance = min(abs(position - offset_min), abs(position - offset_max))
            prob = zone_probability(
                distance, items, cfg.inside_range_probability, cfg.outside_range_probability
            )
            drawing = rng.random() < prob

        if drawing:
            raw = rng.uniform(cfg.draw_length_min, cfg.draw_length_max)
        else:
            raw = rng.uniform(cfg.skip_length_min, cfg.skip_length_max)
        length = max(1, int(math.floor(min(raw, remaining))))

        gap = int(math.floor(rng.uniform(0, cfg.max_gap + 1))) if drawing else 0
        runs.append(PatternRun("draw" if drawing else "skip", length, gap))
        position += length
        last_is_draw = drawing

    return runs


def runs_to_mask(runs: list[PatternRun]) -> NDArray[np.int8]:
    slots: list[int] = []
    for run in runs:
        slots.extend(run.slots())
    return np.array(slots, dtype=np.int8)


def generate_patterns(
    rng: SeededRandom,
    items: int,
    offset_min: float,
    offset_max: float,
    config: PatternConfig | None = None,
) -> NDArray[np.int8]:
    """0/1 slot mask of length ``items`` biased toward ``[offset_min, offset_max]``."""
    return runs_to_mask(generate_pattern_runs(rng, items, offset_min, offset_max, config))


def generate_path_segments(
    rng: SeededRandom,
    total_length: float,
    config: SegmentConfig | None = None,
    zone_index: int = 0,
    zone_count: int = 1,
) -> list[PathSegment]:
    """Pixel-length draw/skip spans; each draw span is followed by a gap."""
    cfg = config or SegmentConfig()
    segments: list[PathSegment] = []
    if total_length <= 0:
        return segments

    range_start = (zone_index / zone_count) * total_length
    range_end = ((zone_index + 1) / zone_count) * total_length
    current = 0.0

    while current < total_length:
        in_zone = range_start <= current < range_end
        probability = (cfg.draw_in_zone if in_zone else cfg.draw_outside_zone) / 100
        should_draw = rng.random() < probability

        length = rng.uniform(cfg.segment_length_min, cfg.segment_length_max)
        segments.append(PathSegment(current / total_length, length, should_draw))
        current += max(length, 1e-6)

        if should_draw:
            gap = rng.uniform(cfg.segment_gap_min, cfg.segment_gap_max)
            segments.append(PathSegment(current / total_length, gap, False))
            current += max(gap, 1e-6)

    return segments
