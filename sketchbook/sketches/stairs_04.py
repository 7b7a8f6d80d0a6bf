"""Stairs 04: a Hamiltonian ribbon hatched with perpendicular lines.

Each colour gets its own draw/skip mask, biased toward its share of the
path, so the colours hand over to each other along the ribbon.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from sketchbook.engine.config import HamiltonianConfig, LineStyle, PatternConfig
from sketchbook.engine.context import SketchContext
from sketchbook.engine.hamiltonian import generate_hamiltonian_path
from sketchbook.engine.lines import instance_mask_lines
from sketchbook.engine.patterns import color_zone, generate_patterns
from sketchbook.engine.registry import SketchParams, sketch

DEFAULT_COLORS = [
    "lePenPastelPens.rose",
    "lePenPastelPens.yellow",
    "lePenPastelPens.baby_blue",
    "lePenPastelPens.mauve",
    "lePenPastelPens.orange",
    "lePenPens.red",
    "lePenPens.wine",
]


@dataclass
class Stairs04Params(SketchParams):
    line_thickness: float = 0.5
    line_length_min: float = 8
    line_length_max: float = 14
    # Mask slots per path point, jittered +-25% per colour
    lines_per_segment: float = 1.0

    target_grid_size: int = 12
    grid_coverage: float = 0.8
    allow_two_step_jumps: bool = True
    max_dead_ends: int = 5

    corner_radius: float = 0.3
    bezier_steps: int = 10

    inside_range_probability: float = 0.7
    outside_range_probability: float = 0.3
    draw_pattern_length_min: float = 5
    draw_pattern_length_max: float = 15
    skip_pattern_length_min: float = 2
    skip_pattern_length_max: float = 8
    max_gap_in_pattern: int = 3

    colors: list[str] = field(default_factory=lambda: list(DEFAULT_COLORS))


@sketch(
    key="stairs-04",
    title="Stairs 04",
    description="A stairs-like pattern",
    params=Stairs04Params,
)
def stairs_04(ctx: SketchContext, params: Stairs04Params) -> None:
    grid_cfg = HamiltonianConfig(
        target_grid_size=params.target_grid_size,
        coverage=params.grid_coverage,
        allow_two_step_jumps=params.allow_two_step_jumps,
        max_dead_ends=params.max_dead_ends,
        corner_radius=params.corner_radius,
        bezier_steps=params.bezier_steps,
    )
    ribbon = generate_hamiltonian_path(ctx.rng, ctx.area, grid_cfg)
    ctx.stats.update(
        cells=ribbon.search.coverage,
        target=ribbon.search.target,
        iterations=ribbon.search.iterations,
        backtracks=ribbon.search.backtracks,
    )
    path = ribbon.path
    if len(path) < 2:
        return

    pattern_cfg = PatternConfig(
        draw_length_min=params.draw_pattern_length_min,
        draw_length_max=params.draw_pattern_length_max,
        skip_length_min=params.skip_pattern_length_min,
        skip_length_max=params.skip_pattern_length_max,
        max_gap=params.max_gap_in_pattern,
        inside_range_probability=params.inside_range_probability,
        outside_range_probability=params.outside_range_probability,
    )
    style = LineStyle(
        line_length_min=params.line_length_min,
        line_length_max=params.line_length_max,
        line_thickness=params.line_thickness,
    )

    for index, color in enumerate(params.colors):
        lps = params.lines_per_segment
        items = int(math.floor(len(path) * ctx.rng.uniform(lps * 0.75, lps * 1.25)))
        offset_min, offset_max = color_zone(index, len(params.colors), items)
        mask = generate_patterns(ctx.rng, items, offset_min, offset_max, pattern_cfg)

        result = instance_mask_lines(ctx.rng, path, mask, style)
        ctx.lines(result.segments, color, params.line_thickness)
        ctx.count("lines", len(result.segments))
