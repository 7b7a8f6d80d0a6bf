"""Stairs 05: a rounded path through scattered grid points, hatched in segments."""

from __future__ import annotations

from dataclasses import dataclass, field

from sketchbook.engine.config import LineStyle, SegmentConfig
from sketchbook.engine.context import SketchContext
from sketchbook.engine.grid import GridConfig, generate_grid_points
from sketchbook.engine.lines import instance_segment_lines
from sketchbook.engine.paths import path_length, round_corners
from sketchbook.engine.patterns import generate_path_segments
from sketchbook.engine.registry import SketchParams, sketch

DEFAULT_COLORS = [
    "staedtlerPensNew.teal",
    "staedtlerPensNew.yellow",
    "staedtlerPensNew.orange",
    "staedtlerPensNew.red",
    "staedtlerPensNew.blue",
    "staedtlerPensNew.crimson",
    "staedtlerPensNew.brightOrange",
    "staedtlerPensNew.gold",
    "staedtlerPensNew.lightPink",
]


@dataclass
class Stairs05Params(SketchParams):
    width: float = 500
    height: float = 500
    margin_x: float = 50
    margin_y: float = 50

    bezier_steps: int = 10
    num_points: int = 12
    radius: float = 25

    segment_length_min: float = 20
    segment_length_max: float = 60
    segment_gap_min: float = 5
    segment_gap_max: float = 15

    # Lines per 100 px of a draw segment
    line_density_min: float = 3
    line_density_max: float = 8
    line_thickness: float = 0.5
    line_length_min: float = 8
    line_length_max: float = 14

    # Percent chance to draw inside / outside the colour's zone
    draw_in_zone: float = 90
    draw_outside_zone: float = 10

    lines_start_on_path: bool = False
    avoid_intersections: bool = True

    colors: list[str] = field(default_factory=lambda: list(DEFAULT_COLORS))


@sketch(
    key="stairs-05",
    title="Stairs 05",
    description="Hatched segments along a rounded path",
    params=Stairs05Params,
)
def stairs_05(ctx: SketchContext, params: Stairs05Params) -> None:
    grid = GridConfig(
        width=params.width,
        height=params.height,
        margin_x=params.margin_x,
        margin_y=params.margin_y,
    )
    points = generate_grid_points(ctx.rng, grid, params.num_points, center_points=False)
    path = round_corners(points, params.radius, params.bezier_steps)
    total = path_length(path)
    if total <= 0:
        return

    segment_cfg = SegmentConfig(
        segment_length_min=params.segment_length_min,
        segment_length_max=params.segment_length_max,
        segment_gap_min=params.segment_gap_min,
        segment_gap_max=params.segment_gap_max,
        draw_in_zone=params.draw_in_zone,
        draw_outside_zone=params.draw_outside_zone,
    )
    style = LineStyle(
        line_length_min=params.line_length_min,
        line_length_max=params.line_length_max,
        line_thickness=params.line_thickness,
        lines_start_on_path=params.lines_start_on_path,
        avoid_intersections=params.avoid_intersections,
    )

    # One pass across all colours: later colours avoid earlier lines too
    ledger = ctx.new_ledger(style.intersection_tolerance)
    for index, color in enumerate(params.colors):
        segments = generate_path_segments(ctx.rng, total, segment_cfg, index, len(params.colors))
        result = instance_segment_lines(
            ctx.rng,
            path,
            segments,
            style,
            params.line_density_min,
            params.line_density_max,
            ledger=ledger,
        )
        ctx.lines(result.segments, color, params.line_thickness)
        ctx.count("lines", len(result.segments))
        ctx.count("rejected", result.rejected)
