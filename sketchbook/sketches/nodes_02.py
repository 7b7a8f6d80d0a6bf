"""Nodes 02: a grid of cells, each holding one tangled pivot walk."""

from __future__ import annotations

from dataclasses import dataclass

from sketchbook.engine.config import PivotPathConfig
from sketchbook.engine.context import SketchContext
from sketchbook.engine.grid import GridConfig, create_grid
from sketchbook.engine.pivot_walk import generate_pivot_path
from sketchbook.engine.primitives import BoundingBox
from sketchbook.engine.registry import SketchParams, sketch


@dataclass
class Nodes02Params(SketchParams):
    margin_x: float = 120
    margin_y: float = 120

    cols: int = 20
    rows: int = 27
    padding: float = 1

    num_segments: int = 30
    pivot_min: float = 200
    pivot_max: float = 210
    # Step length as a fraction of the cell width
    relative_min: float = 0.2
    relative_max: float = 0.8
    inner_jitter_frac: float = 0.05

    color: str = "staedtlerPens.baby_blue"
    accent_color: str = "staedtlerPens.red"
    accent_chance: float = 0.01


@sketch(
    key="nodes-02",
    title="Nodes 02",
    description="A grid of nodes",
    params=Nodes02Params,
)
def nodes_02(ctx: SketchContext, params: Nodes02Params) -> None:
    grid = create_grid(
        GridConfig(
            width=params.width,
            height=params.height,
            margin_x=params.margin_x,
            margin_y=params.margin_y,
            cols=params.cols,
            rows=params.rows,
        )
    )

    for cell in grid.cells:
        pad = params.padding
        box = BoundingBox(
            cell.box.x + pad,
            cell.box.y + pad,
            max(0.0, cell.box.width - 2 * pad),
            max(0.0, cell.box.height - 2 * pad),
        )
        config = PivotPathConfig(
            bounding_box=box,
            steps=params.num_segments,
            min_length=box.width * params.relative_min,
            max_length=box.width * params.relative_max,
            inner_jitter_frac=params.inner_jitter_frac,
            pivot_angle_min=params.pivot_min,
            pivot_angle_max=params.pivot_max,
        )
        points = generate_pivot_path(ctx.rng, config)

        accent = ctx.rng.random() >= 1 - params.accent_chance
        ctx.polyline(points, params.accent_color if accent else params.color, smooth=True)
        ctx.count("accents" if accent else "walks")
