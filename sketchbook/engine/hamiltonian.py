"""Hamiltonian-style grid walk: a long self-avoiding path over a coarse grid.

The walk moves between 4-connected cells (plus optional 2-step jumps over
filled corridors), choosing among shuffled candidates that keep the
unvisited region in one piece and leave few dead-end cells behind. When no
candidate survives it backtracks through an explicit frame stack. Full
coverage is not guaranteed: the iteration cap bounds the runtime and a
shorter, still valid path is an accepted outcome.

Usage:
    result = generate_hamiltonian_path(rng, BoundingBox(80, 80, 540, 690))
    result.path        # rounded pixel path
    result.cells       # visited cells in walk order
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from sketchbook.engine.config import HamiltonianConfig
from sketchbook.engine.paths import round_corners
from sketchbook.engine.primitives import BoundingBox, GridCell, Path, Point
from sketchbook.engine.rng import SeededRandom

logger = logging.getLogger(__name__)

# Called with (visited cells, candidate) right before the walk enters the candidate.
AcceptHook = Callable[[frozenset[GridCell], GridCell], None]

# Corner trap in local coordinates of the top-left corner: six open cells
# walled in by three filled ones. The other corners are mirror images.
_TRAP_OPEN = ((0, 0), (1, 0), (0, 1), (1, 1), (2, 0), (0, 2))
_TRAP_FILLED = ((2, 1), (1, 2), (2, 2))


@dataclass
class BacktrackFrame:
    """A cell on the walk plus the candidates not yet tried from it."""

    cell: GridCell
    remaining: list[GridCell] = field(default_factory=list)


@dataclass
class GridFit:
    cols: int
    rows: int
    step: float
    origin: Point

    def center(self, cell: GridCell) -> Point:
        i, j = cell
        return Point(
            self.origin.x + i * self.step + self.step / 2,
            self.origin.y + j * self.step + self.step / 2,
        )


@dataclass
class SearchResult:
    cells: list[GridCell]
    target: int
    iterations: int = 0
    backtracks: int = 0
    teleports: int = 0

    @property
    def coverage(self) -> int:
        return len(self.cells)


@dataclass
class HamiltonianPath:
    cells: list[GridCell]
    grid_cells: list[GridCell]  # cells with 2-step jumps expanded
    grid_points: Path
    path: Path
    fit: GridFit
    search: SearchResult


def fit_grid(bbox: BoundingBox, target_grid_size: int) -> GridFit:
    """Square cells sized so ``target_grid_size`` fit across the shorter side."""
    if target_grid_size <= 0 or bbox.width <= 0 or bbox.height <= 0:
        return GridFit(0, 0, 0.0, Point(bbox.x, bbox.y))
    step = min(bbox.width / target_grid_size, bbox.height / target_grid_size)
    # Nudge before flooring so exact multiples survive float division
    cols = int(math.floor(bbox.width / step + 1e-9))
    rows = int(math.floor(bbox.height / step + 1e-9))
    return GridFit(cols, rows, step, Point(bbox.x, bbox.y))


class HamiltonianSearch:
    """Backtracking coverage walk over a ``cols x rows`` grid."""

    def __init__(
        self,
        cols: int,
        rows: int,
        rng: SeededRandom,
        config: HamiltonianConfig | None = None,
        on_accept: AcceptHook | None = None,
    ) -> None:
        self.cols = cols
        self.rows = rows
        self.rng = rng
        self.config = config or HamiltonianConfig()
        self.on_accept = on_accept
        self.total = cols * rows
        self.target = min(self.total, int(math.floor(self.total * self.config.coverage + 0.5)))

    # --- grid topology ---

    def in_bounds(self, cell: GridCell) -> bool:
        i, j = cell
        return 0 <= i < self.cols and 0 <= j < self.rows

    def neighbors(self, cell: GridCell) -> list[GridCell]:
        i, j = cell
        result: list[GridCell] = []
        if j < self.rows - 1:
            result.append((i, j + 1))
        if j > 0:
            result.append((i, j - 1))
        if i < self.cols - 1:
            result.append((i + 1, j))
        if i > 0:
            result.append((i - 1, j))
        return result

    def all_cells(self) -> Iterable[GridCell]:
        for i in range(self.cols):
            for j in range(self.rows):
                yield (i, j)

    def two_step_jumps(self, cell: GridCell, filled: set[GridCell]) -> list[GridCell]:
        """Cells two steps away across a fully filled 3-cell corridor."""
        i, j = cell
        jumps: list[GridCell] = []
        if 0 < j < self.rows - 1:
            if i < self.cols - 2 and {(i + 1, j - 1), (i + 1, j), (i + 1, j + 1)} <= filled:
                jumps.append((i + 2, j))
            if i > 1 and {(i - 1, j - 1), (i - 1, j), (i - 1, j + 1)} <= filled:
                jumps.append((i - 2, j))
        if 0 < i < self.cols - 1:
            if j < self.rows - 2 and {(i - 1, j + 1), (i, j + 1), (i + 1, j + 1)} <= filled:
                jumps.append((i, j + 2))
            if j > 1 and {(i - 1, j - 1), (i, j - 1), (i + 1, j - 1)} <= filled:
                jumps.append((i, j - 2))
        return jumps

    # --- candidate filters ---

    def is_disjointed(self, filled: set[GridCell]) -> bool:
        """True when the unfilled cells form more than one 4-connected component."""
        open_count = self.total - len(filled)
        if open_count <= 0:
            return False
        start = next(c for c in self.all_cells() if c not in filled)
        seen = {start}
        stack = [start]
        while stack:
            cell = stack.pop()
            for neigh in self.neighbors(cell):
                if neigh not in filled and neigh not in seen:
                    seen.add(neigh)
                    stack.append(neigh)
        return len(seen) != open_count

    def count_dead_ends(self, filled: set[GridCell], ignore: Iterable[GridCell]) -> int:
        """Open cells (outside ``ignore``) with fewer than two open neighbours."""
        skip = set(ignore)
        count = 0
        for cell in self.all_cells():
            if cell in filled or cell in skip:
                continue
            open_neighbors = sum(1 for n in self.neighbors(cell) if n not in filled)
            if open_neighbors < 2:
                count += 1
        return count

    def has_corner_trap(self, filled: set[GridCell]) -> bool:
        if self.cols < 3 or self.rows < 3:
            return False
        if len(filled) < self.total * self.config.corner_trap_fill_ratio:
            return False
        for flip_i in (False, True):
            for flip_j in (False, True):

                def at(a: int, b: int) -> GridCell:
                    return (
                        self.cols - 1 - a if flip_i else a,
                        self.rows - 1 - b if flip_j else b,
                    )

                if all(at(*c) not in filled for c in _TRAP_OPEN) and all(
                    at(*c) in filled for c in _TRAP_FILLED
                ):
                    return True
        return False

    def dead_end_limit(self, covered: int) -> int:
        cfg = self.config
        if self.target and covered / self.target > cfg.dead_end_relax_ratio:
            return cfg.max_dead_ends * cfg.dead_end_relax_factor
        return cfg.max_dead_ends

    def ranked_candidates(self, current: GridCell, visited: set[GridCell]) -> list[GridCell]:
        """Surviving moves from ``current``, fewest dead ends first, shuffle order within ties."""
        candidates = self.neighbors(current)
        if self.config.allow_two_step_jumps:
            candidates.extend(self.two_step_jumps(current, visited - {current}))
        self.rng.shuffle(candidates)

        limit = self.dead_end_limit(len(visited))
        scored: list[tuple[int, GridCell]] = []
        for cand in candidates:
            if cand in visited:
                continue
            projected = visited | {cand}
            if self.has_corner_trap(projected):
                continue
            dead_ends = self.count_dead_ends(projected, self.neighbors(cand))
            if dead_ends >= limit:
                continue
            if self.is_disjointed(projected):
                continue
            scored.append((dead_ends, cand))

        scored.sort(key=lambda item: item[0])
        return [cand for _, cand in scored]

    # --- main loop ---

    def run(self) -> SearchResult:
        if self.total == 0:
            return SearchResult(cells=[], target=0)

        cfg = self.config
        if cfg.start is not None and self.in_bounds(cfg.start):
            current = cfg.start
        else:
            current = (self.rng.randint(self.cols), self.rng.randint(self.rows))

        frames: list[BacktrackFrame] = []
        visited: set[GridCell] = {current}
        exhausted_starts: set[GridCell] = set()
        max_iterations = cfg.iteration_factor * self.total
        iterations = backtracks = teleports = 0
        best: list[GridCell] = [current]

        while len(visited) < self.target and iterations < max_iterations:
            iterations += 1

            options = self.ranked_candidates(current, visited)
            while not options and frames:
                frame = frames.pop()
                visited.discard(current)
                current = frame.cell
                options = frame.remaining
                backtracks += 1

            if options:
                nxt, rest = options[0], options[1:]
                if self.on_accept is not None:
                    self.on_accept(frozenset(visited), nxt)
                frames.append(BacktrackFrame(current, rest))
                visited.add(nxt)
                current = nxt
                if len(frames) + 1 > len(best):
                    best = [f.cell for f in frames] + [current]
                continue

            # Stack exhausted: every walk from this start dead-ends
            if len(visited) >= self.target * cfg.teleport_coverage_ratio:
                break
            exhausted_starts.add(current)
            pool = [c for c in self.all_cells() if c not in exhausted_starts]
            if not pool:
                break
            current = pool[self.rng.randint(len(pool))]
            visited = {current}
            teleports += 1
            logger.debug("Grid walk restarted at %s (%d starts exhausted)", current, len(exhausted_starts))

        # Backtracking can unwind past the deepest walk; keep the longest one seen
        walk = [f.cell for f in frames] + [current]
        cells = walk if len(walk) >= len(best) else best
        result = SearchResult(
            cells=cells,
            target=self.target,
            iterations=iterations,
            backtracks=backtracks,
            teleports=teleports,
        )
        if result.coverage < self.target:
            logger.info(
                "Grid walk covered %d/%d cells (target %d) after %d iterations",
                result.coverage,
                self.total,
                self.target,
                iterations,
            )
        else:
            logger.debug(
                "Grid walk reached %d/%d cells in %d iterations (%d backtracks)",
                result.coverage,
                self.total,
                iterations,
                backtracks,
            )
        return result


def expand_jumps(cells: list[GridCell]) -> list[GridCell]:
    """Insert the grid-aligned midpoint of every 2-step jump."""
    if not cells:
        return []
    expanded: list[GridCell] = [cells[0]]
    for (i0, j0), (i1, j1) in zip(cells, cells[1:]):
        di, dj = i1 - i0, j1 - j0
        if abs(di) > 1 or abs(dj) > 1:
            if di != 0 and dj == 0:
                expanded.append((i0 + (1 if di > 0 else -1), j0))
            elif dj != 0 and di == 0:
                expanded.append((i0, j0 + (1 if dj > 0 else -1)))
        expanded.append((i1, j1))
    return expanded


def generate_hamiltonian_path(
    rng: SeededRandom,
    bbox: BoundingBox,
    config: HamiltonianConfig | None = None,
    on_accept: AcceptHook | None = None,
) -> HamiltonianPath:
    """Fit a grid into ``bbox``, walk it, and return the rounded pixel path."""
    cfg = config or HamiltonianConfig()
    fit = fit_grid(bbox, cfg.target_grid_size)
    search = HamiltonianSearch(fit.cols, fit.rows, rng, cfg, on_accept=on_accept).run()

    grid_cells = expand_jumps(search.cells)
    grid_points = [fit.center(c) for c in grid_cells]
    path = round_corners(grid_points, cfg.corner_radius * fit.step, cfg.bezier_steps)
    return HamiltonianPath(
        cells=search.cells,
        grid_cells=grid_cells,
        grid_points=grid_points,
        path=path,
        fit=fit,
        search=search,
    )
