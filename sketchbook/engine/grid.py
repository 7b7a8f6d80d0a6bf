"""Layout grids over the drawable area of a canvas."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from sketchbook.engine.primitives import BoundingBox, Point
from sketchbook.engine.rng import SeededRandom

# Tries per point before generate_grid_points gives up on it
MAX_CELL_TRIES = 100


@dataclass
class GridConfig:
    """Canvas size and margins plus one of ``cell_size``, ``cols``, ``rows``.

    Resolution order: ``cell_size``; both ``cols`` and ``rows``; ``cols``
    alone (square cells); ``rows`` alone (square cells).
    """

    width: float
    height: float
    margin_x: float = 0.0
    margin_y: float = 0.0
    cols: int | None = None
    rows: int | None = None
    cell_size: float | None = None

    @property
    def draw_width(self) -> float:
        return self.width - 2 * self.margin_x

    @property
    def draw_height(self) -> float:
        return self.height - 2 * self.margin_y


@dataclass(frozen=True)
class GridCellBox:
    col: int
    row: int
    box: BoundingBox

    @property
    def center(self) -> Point:
        return self.box.center


@dataclass
class Grid:
    cells: list[GridCellBox] = field(default_factory=list)
    cols: int = 0
    rows: int = 0
    cell_width: float = 0.0
    cell_height: float = 0.0
    draw_width: float = 0.0
    draw_height: float = 0.0


def create_grid(config: GridConfig) -> Grid:
    draw_w = config.draw_width
    draw_h = config.draw_height

    if config.cell_size:
        cell_w = cell_h = config.cell_size
        cols = int(math.floor(draw_w / cell_w))
        rows = int(math.floor(draw_h / cell_h))
    elif config.cols and config.rows:
        cols, rows = config.cols, config.rows
        cell_w = draw_w / cols
        cell_h = draw_h / rows
    elif config.cols:
        cols = config.cols
        cell_w = cell_h = draw_w / cols
        rows = int(math.floor(draw_h / cell_h))
    elif config.rows:
        rows = config.rows
        cell_w = cell_h = draw_h / rows
        cols = int(math.floor(draw_w / cell_w))
    else:
        raise ValueError("GridConfig needs cell_size, cols, rows, or both cols and rows")

    cells: list[GridCellBox] = []
    for row in range(rows):
        for col in range(cols):
            box = BoundingBox(
                config.margin_x + col * cell_w,
                config.margin_y + row * cell_h,
                cell_w,
                cell_h,
            )
            cells.append(GridCellBox(col, row, box))

    return Grid(
        cells=cells,
        cols=cols,
        rows=rows,
        cell_width=cell_w,
        cell_height=cell_h,
        draw_width=draw_w,
        draw_height=draw_h,
    )


def generate_grid_points(
    rng: SeededRandom,
    config: GridConfig,
    num_points: int,
    center_points: bool = False,
) -> list[Point]:
    """One point per randomly chosen free cell of a ``ceil(sqrt(n))``-square grid.

    A point whose tries all land on occupied cells is skipped, so fewer
    than ``num_points`` may come back.
    """
    if num_points <= 0:
        return []

    grid_size = int(math.ceil(math.sqrt(num_points)))
    cell_w = config.draw_width / grid_size
    cell_h = config.draw_height / grid_size
    occupied: set[tuple[int, int]] = set()
    points: list[Point] = []

    for _ in range(num_points):
        for _attempt in range(MAX_CELL_TRIES):
            cell_x = int(math.floor(rng.uniform(0, grid_size)))
            cell_y = int(math.floor(rng.uniform(0, grid_size)))
            if (cell_x, cell_y) in occupied:
                continue

            if center_points:
                x = config.margin_x + cell_x * cell_w + cell_w / 2
                y = config.margin_y + cell_y * cell_h + cell_h / 2
            else:
                x = config.margin_x + cell_x * cell_w + rng.uniform(0, cell_w)
                y = config.margin_y + cell_y * cell_h + rng.uniform(0, cell_h)
            points.append(Point(x, y))
            occupied.add((cell_x, cell_y))
            break

    return points
