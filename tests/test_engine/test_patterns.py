"""Tests for draw/skip pattern generation."""

import numpy as np
import pytest

from sketchbook.engine.config import PatternConfig, SegmentConfig
from sketchbook.engine.patterns import (
    PatternRun,
    color_zone,
    generate_path_segments,
    generate_pattern_runs,
    generate_patterns,
    runs_to_mask,
    zone_probability,
)
from sketchbook.engine.rng import SeededRandom


def test_run_slots():
    assert PatternRun("skip", 3).slots() == [0, 0, 0]
    assert PatternRun("draw", 4).slots() == [1, 1, 1, 1]
    assert PatternRun("draw", 5, gap=1).slots() == [1, 0, 1, 0, 1]
    assert PatternRun("draw", 5, gap=3).slots() == [1, 0, 0, 0, 1]


@pytest.mark.parametrize("items", [1, 7, 10, 11, 64, 100, 333])
def test_mask_length_exact(items):
    for seed in range(5):
        mask = generate_patterns(SeededRandom(seed), items, 0, items / 2)
        assert len(mask) == items
        assert mask.dtype == np.int8
        assert set(np.unique(mask)) <= {0, 1}


def test_zero_items():
    assert len(generate_patterns(SeededRandom(1), 0, 0, 0)) == 0


def test_runs_alternate_and_are_positive():
    for seed in range(20):
        runs = generate_pattern_runs(SeededRandom(seed), 200, 50, 120)
        assert sum(r.length for r in runs) == 200
        assert all(r.length >= 1 for r in runs)
        for prev, nxt in zip(runs, runs[1:]):
            assert not (prev.is_draw and nxt.is_draw)


def test_draw_gap_within_max():
    cfg = PatternConfig(max_gap=2)
    for seed in range(10):
        for run in generate_pattern_runs(SeededRandom(seed), 150, 0, 150, cfg):
            assert 0 <= run.gap <= 2
            if not run.is_draw:
                assert run.gap == 0


def test_run_lengths_within_ranges():
    cfg = PatternConfig()
    runs = generate_pattern_runs(SeededRandom(2), 500, 0, 250, cfg)
    for run in runs[:-1]:
        if run.is_draw:
            assert cfg.draw_length_min <= run.length <= cfg.draw_length_max
        else:
            assert cfg.skip_length_min <= run.length <= cfg.skip_length_max


def test_runs_to_mask_concatenates():
    runs = [PatternRun("draw", 2), PatternRun("skip", 1), PatternRun("draw", 3, gap=1)]
    assert runs_to_mask(runs).tolist() == [1, 1, 0, 1, 0, 1]


def test_zone_probability_linear_and_clamped():
    assert zone_probability(0, 100, 0.9, 0.1) == pytest.approx(0.9)
    assert zone_probability(25, 100, 0.9, 0.1) == pytest.approx(0.5)
    assert zone_probability(50, 100, 0.9, 0.1) == pytest.approx(0.1)
    assert zone_probability(80, 100, 0.9, 0.1) == pytest.approx(0.1)


def test_always_draw_probability():
    cfg = PatternConfig(inside_range_probability=1.0, outside_range_probability=1.0, max_gap=0)
    runs = generate_pattern_runs(SeededRandom(4), 100, 0, 100, cfg)
    # Draw runs alternate with forced skips
    assert runs[0].is_draw
    assert [r.is_draw for r in runs] == [i % 2 == 0 for i in range(len(runs))]


def test_emphasis_range_gets_more_draws():
    first_half = 0
    second_half = 0
    for seed in range(200):
        mask = generate_patterns(
            SeededRandom(seed),
            100,
            0,
            50,
            PatternConfig(inside_range_probability=0.9, outside_range_probability=0.1),
        )
        first_half += int(mask[:50].sum())
        second_half += int(mask[50:].sum())
    assert first_half > second_half


def test_patterns_deterministic():
    a = generate_patterns(SeededRandom(3), 80, 10, 30)
    b = generate_patterns(SeededRandom(3), 80, 10, 30)
    assert np.array_equal(a, b)


def test_color_zone():
    assert color_zone(0, 7, 100) == (0, 14)
    assert color_zone(6, 7, 100) == (85, 100)
    assert color_zone(0, 0, 10) == (0, 10)


def test_path_segments_cover_length():
    segments = generate_path_segments(SeededRandom(1), 500.0)
    assert segments[0].start == 0.0
    starts = [s.start for s in segments]
    assert starts == sorted(starts)
    assert all(s.start < 1.0 for s in segments if s.draw)
    assert segments[-1].start * 500.0 + segments[-1].length >= 500.0 - 1e-9


def test_path_segments_gap_after_draw():
    segments = generate_path_segments(SeededRandom(9), 2000.0)
    for seg, nxt in zip(segments, segments[1:]):
        if seg.draw:
            assert not nxt.draw
            assert 5.0 <= nxt.length <= 15.0


def test_path_segments_zone_bias():
    cfg = SegmentConfig(draw_in_zone=100, draw_outside_zone=0)
    segments = generate_path_segments(SeededRandom(2), 1000.0, cfg, zone_index=1, zone_count=4)
    for seg in segments:
        if seg.draw:
            assert 0.25 <= seg.start < 0.5


def test_path_segments_empty_path():
    assert generate_path_segments(SeededRandom(1), 0.0) == []
