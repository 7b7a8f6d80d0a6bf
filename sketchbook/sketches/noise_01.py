"""Noise 01: two overlapping random subdivisions, some rectangles filled with dots."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from sketchbook.engine.context import SketchContext
from sketchbook.engine.noise_field import noise_rect, split_space
from sketchbook.engine.registry import SketchParams, sketch

DEFAULT_COLORS = [
    "staedtlerPensNew.teal",
    "staedtlerPensNew.limeGreen",
    "staedtlerPensNew.yellow",
    "staedtlerPensNew.orange",
    "staedtlerPensNew.red",
    "staedtlerPensNew.crimson",
    "staedtlerPensNew.darkPurple",
    "staedtlerPensNew.blue",
    "staedtlerPensNew.slate",
]


@dataclass
class Noise01Params(SketchParams):
    margin_x: float = 120
    margin_y: float = 120
    # Mean fill density in percent; each rectangle draws from [0, 2x]
    noise_density: float = 50
    point_size: float = 1
    cell_size: float = 2
    fill_chance: float = 0.5
    colors: list[str] = field(default_factory=lambda: list(DEFAULT_COLORS))


@sketch(
    key="noise-01",
    title="Noise 01",
    description="A grid of noise",
    params=Noise01Params,
)
def noise_01(ctx: SketchContext, params: Noise01Params) -> None:
    if not params.colors or params.cell_size <= 0:
        return
    rect_count = int(math.floor(ctx.rng.uniform(4, 8)))
    horizontal = split_space(ctx.rng, ctx.area, rect_count, params.cell_size)
    vertical = split_space(ctx.rng, ctx.area, rect_count, params.cell_size)

    for rect in horizontal + vertical:
        if ctx.rng.random() >= params.fill_chance:
            continue
        density = ctx.rng.uniform(0, params.noise_density * 2)
        color = ctx.rng.choice(params.colors)
        for point in noise_rect(ctx.rng, rect, density, params.point_size):
            ctx.dot(point, color, params.point_size)
        ctx.count("rects")
