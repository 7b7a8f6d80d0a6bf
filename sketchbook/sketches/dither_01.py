"""Dither 01: a random-angle gradient, Bayer-dithered and filled with cross hatches."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from sketchbook.engine.context import SketchContext
from sketchbook.engine.dither import dither_gradient
from sketchbook.engine.primitives import LineSegment
from sketchbook.engine.registry import SketchParams, sketch

DEFAULT_COLORS = [
    "micronPens.red_019",
    "micronPens.blue_036",
    "micronPens.green_029",
]


@dataclass
class Dither01Params(SketchParams):
    width: float = 550
    height: float = 700
    cell_size: float = 16
    matrix_size: int = 8
    colors: list[str] = field(default_factory=lambda: list(DEFAULT_COLORS))


def hatch_cell(x: float, y: float, size: float) -> tuple[list[LineSegment], list[LineSegment]]:
    """Diagonal hatches filling one square cell, one list per diagonal direction."""
    count = int(math.floor(size / 3))
    if count <= 0:
        return [], []
    spacing = size / count

    forward: list[LineSegment] = []
    backward: list[LineSegment] = []
    for i in range(count):
        offset = i * spacing
        forward.append(LineSegment(x + offset, y, x + size, y + size - offset))
        if i:
            forward.append(LineSegment(x, y + offset, x + size - offset, y + size))
    for i in range(count):
        offset = i * spacing
        backward.append(LineSegment(x + size - offset, y, x, y + size - offset))
        if i:
            backward.append(LineSegment(x + size, y + offset, x + offset, y + size))
    return forward, backward


@sketch(
    key="dither-01",
    title="Dither 01",
    description="Some dither design",
    params=Dither01Params,
)
def dither_01(ctx: SketchContext, params: Dither01Params) -> None:
    size = params.cell_size
    if size <= 0 or len(params.colors) < 2:
        return
    cols = int(math.floor(ctx.area.width / size))
    rows = int(math.floor(ctx.area.height / size))

    angle, mask = dither_gradient(ctx.rng, cols, rows, params.matrix_size)
    ctx.stats["angle"] = round(angle, 4)

    colors = list(params.colors)
    for col in range(cols):
        for row in range(rows):
            if not mask[row, col]:
                continue
            x = ctx.area.x + col * size
            y = ctx.area.y + row * size
            ctx.rng.shuffle(colors)
            forward, backward = hatch_cell(x, y, size)
            ctx.lines(forward, colors[0])
            ctx.lines(backward, colors[1])
            ctx.count("cells")
