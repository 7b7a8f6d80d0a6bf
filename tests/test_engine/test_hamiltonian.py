"""Tests for the Hamiltonian grid walk."""

import logging

import pytest

from sketchbook.engine.config import HamiltonianConfig
from sketchbook.engine.hamiltonian import (
    HamiltonianSearch,
    expand_jumps,
    fit_grid,
    generate_hamiltonian_path,
)
from sketchbook.engine.primitives import BoundingBox
from sketchbook.engine.rng import SeededRandom


def _components(cols: int, rows: int, blocked: set) -> int:
    """Number of 4-connected components among the unblocked cells."""
    open_cells = {(i, j) for i in range(cols) for j in range(rows)} - blocked
    seen: set = set()
    components = 0
    for start in open_cells:
        if start in seen:
            continue
        components += 1
        stack = [start]
        seen.add(start)
        while stack:
            i, j = stack.pop()
            for n in ((i + 1, j), (i - 1, j), (i, j + 1), (i, j - 1)):
                if n in open_cells and n not in seen:
                    seen.add(n)
                    stack.append(n)
    return components


class _InvariantRecorder:
    def __init__(self, cols: int, rows: int) -> None:
        self.cols = cols
        self.rows = rows
        self.steps = 0

    def __call__(self, visited, candidate) -> None:
        self.steps += 1
        assert candidate not in visited
        assert _components(self.cols, self.rows, set(visited) | {candidate}) <= 1


def _assert_walk(cells, cols, rows):
    assert len(cells) == len(set(cells))
    for i, j in cells:
        assert 0 <= i < cols and 0 <= j < rows
    for (i0, j0), (i1, j1) in zip(cells, cells[1:]):
        di, dj = abs(i1 - i0), abs(j1 - j0)
        assert (di, dj) in {(1, 0), (0, 1), (2, 0), (0, 2)}


def test_fit_grid_square_box():
    fit = fit_grid(BoundingBox(0, 0, 120, 120), 12)
    assert (fit.cols, fit.rows) == (12, 12)
    assert fit.step == pytest.approx(10.0)


def test_fit_grid_tall_box():
    fit = fit_grid(BoundingBox(80, 80, 540, 690), 12)
    assert fit.cols == 12
    assert fit.rows == 15
    assert fit.center((0, 0)).x == pytest.approx(80 + 45 / 2)


def test_three_by_three_full_coverage_from_corner():
    cfg = HamiltonianConfig(coverage=1.0, start=(0, 0))
    recorder = _InvariantRecorder(3, 3)
    result = HamiltonianSearch(3, 3, SeededRandom(1), cfg, on_accept=recorder).run()
    assert result.target == 9
    assert sorted(result.cells) == [(i, j) for i in range(3) for j in range(3)]
    _assert_walk(result.cells, 3, 3)
    assert result.iterations <= 5 * 9
    assert recorder.steps >= 8


@pytest.mark.parametrize("seed", range(8))
def test_three_by_three_random_start_is_valid(seed):
    cfg = HamiltonianConfig(coverage=1.0)
    result = HamiltonianSearch(3, 3, SeededRandom(seed), cfg, on_accept=_InvariantRecorder(3, 3)).run()
    _assert_walk(result.cells, 3, 3)
    assert result.iterations <= 5 * 9
    assert len(result.cells) >= 1


@pytest.mark.parametrize("seed", range(60))
def test_ten_by_ten_coverage_bound(seed):
    cfg = HamiltonianConfig(coverage=0.8)
    recorder = _InvariantRecorder(10, 10)
    result = HamiltonianSearch(10, 10, SeededRandom(seed), cfg, on_accept=recorder).run()
    assert result.target == 80
    _assert_walk(result.cells, 10, 10)
    assert result.iterations <= 5 * 100
    # Documented minimum: half the target
    assert result.coverage >= 0.5 * result.target


class _DepthTracker:
    def __init__(self) -> None:
        self.deepest = 1

    def __call__(self, visited, candidate) -> None:
        self.deepest = max(self.deepest, len(visited) + 1)


@pytest.mark.parametrize("cols, rows", [(10, 10), (12, 15)])
def test_result_keeps_deepest_walk(cols, rows):
    for seed in range(60):
        tracker = _DepthTracker()
        cfg = HamiltonianConfig(coverage=0.8)
        result = HamiltonianSearch(cols, rows, SeededRandom(seed), cfg, on_accept=tracker).run()
        _assert_walk(result.cells, cols, rows)
        assert result.coverage == tracker.deepest


def test_search_is_deterministic():
    a = HamiltonianSearch(8, 8, SeededRandom(17)).run()
    b = HamiltonianSearch(8, 8, SeededRandom(17)).run()
    assert a.cells == b.cells


def test_no_jumps_when_disabled():
    cfg = HamiltonianConfig(allow_two_step_jumps=False)
    result = HamiltonianSearch(6, 6, SeededRandom(4), cfg).run()
    for (i0, j0), (i1, j1) in zip(result.cells, result.cells[1:]):
        assert abs(i1 - i0) + abs(j1 - j0) == 1


def test_two_step_jump_requires_filled_corridor():
    search = HamiltonianSearch(5, 5, SeededRandom(1))
    corridor = {(2, 1), (2, 2), (2, 3)}
    assert (3, 2) in search.two_step_jumps((1, 2), corridor)
    assert search.two_step_jumps((1, 2), {(2, 1), (2, 2)}) == []


def test_is_disjointed():
    search = HamiltonianSearch(3, 3, SeededRandom(1))
    assert search.is_disjointed({(1, 0), (1, 1), (1, 2)})
    assert not search.is_disjointed({(0, 0), (1, 0)})
    assert not search.is_disjointed({(i, j) for i in range(3) for j in range(3)})


def test_count_dead_ends():
    search = HamiltonianSearch(3, 3, SeededRandom(1))
    # (0, 0) is left with a single open neighbour once (1, 0) is filled
    filled = {(1, 0), (1, 1)}
    assert search.count_dead_ends(filled, ignore=[]) >= 1
    assert search.count_dead_ends(set(), ignore=[]) == 0


def test_corner_trap_detected_in_every_corner():
    search = HamiltonianSearch(6, 6, SeededRandom(1))
    everything = {(i, j) for i in range(6) for j in range(6)}
    open_top_left = {(0, 0), (1, 0), (0, 1), (1, 1), (2, 0), (0, 2)}
    assert search.has_corner_trap(everything - open_top_left)

    open_bottom_right = {(5, 5), (4, 5), (5, 4), (4, 4), (3, 5), (5, 3)}
    assert search.has_corner_trap(everything - open_bottom_right)

    # Below the fill ratio the check is skipped
    assert not search.has_corner_trap({(2, 1), (1, 2), (2, 2)})


def test_dead_end_limit_relaxes():
    search = HamiltonianSearch(10, 10, SeededRandom(1), HamiltonianConfig(max_dead_ends=5))
    assert search.dead_end_limit(10) == 5
    assert search.dead_end_limit(70) == 10


def test_expand_jumps_inserts_axis_aligned_midpoints():
    cells = [(0, 0), (2, 0), (2, 1), (2, 3)]
    assert expand_jumps(cells) == [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (2, 3)]
    assert expand_jumps([]) == []


def test_generate_path_inside_box():
    bbox = BoundingBox(80, 80, 300, 300)
    result = generate_hamiltonian_path(SeededRandom(7), bbox, HamiltonianConfig(target_grid_size=6))
    assert result.fit.cols == 6
    assert len(result.grid_points) == len(result.grid_cells)
    assert len(result.path) >= len(result.grid_points)
    for p in result.path:
        assert bbox.x <= p.x <= bbox.right
        assert bbox.y <= p.y <= bbox.bottom
    assert result.path[0] == result.grid_points[0]
    assert result.path[-1] == result.grid_points[-1]


def test_generate_path_deterministic():
    bbox = BoundingBox(0, 0, 200, 250)
    cfg = HamiltonianConfig(target_grid_size=5)
    a = generate_hamiltonian_path(SeededRandom(3), bbox, cfg)
    b = generate_hamiltonian_path(SeededRandom(3), bbox, cfg)
    assert a.path == b.path


def test_partial_coverage_logged(caplog):
    cfg = HamiltonianConfig(coverage=1.0, iteration_factor=0)
    with caplog.at_level(logging.INFO, logger="sketchbook.engine.hamiltonian"):
        result = HamiltonianSearch(4, 4, SeededRandom(1), cfg).run()
    assert result.coverage == 1
    assert "covered 1/16" in caplog.text


def test_empty_grid():
    result = HamiltonianSearch(0, 0, SeededRandom(1)).run()
    assert result.cells == []
    assert result.target == 0
