"""Tests for ordered dithering and gradient fields."""

import math

import numpy as np
import pytest

from sketchbook.engine.dither import (
    BAYER_2,
    BAYER_4,
    BAYER_8,
    bayer_dither,
    bayer_matrix,
    bayer_threshold,
    dither_field,
    dither_gradient,
    dither_level,
    floyd_steinberg,
    gradient_field,
    linear_gradient,
)
from sketchbook.engine.rng import SeededRandom


@pytest.mark.parametrize("matrix", [BAYER_2, BAYER_4, BAYER_8])
def test_matrix_is_permutation(matrix):
    size = matrix.shape[0]
    assert matrix.shape == (size, size)
    assert sorted(matrix.flatten().tolist()) == list(range(size * size))


def test_unknown_matrix_size():
    with pytest.raises(ValueError):
        bayer_matrix(3)
    with pytest.raises(ValueError):
        bayer_threshold(0, 0, 16)


def test_threshold_wraps():
    assert bayer_threshold(1, 0) == 48
    assert bayer_threshold(9, 8) == 48
    assert bayer_threshold(0, 1, size=4) == 12


def test_bayer_dither_extremes():
    assert bayer_dither(0, 0, 0) == 0
    assert bayer_dither(255, 0, 0) == 255
    # The largest threshold normalises to exactly 255
    assert bayer_dither(255, 7, 0) == 0


def test_field_coverage_tracks_value():
    values = np.full((8, 8), 128.0)
    on = int((dither_field(values) > 0).sum())
    # thresholds t with t / 63 * 255 < 128 are 0..31
    assert on == 32


def test_field_matches_scalar():
    rng = SeededRandom(4)
    values = np.array([[rng.uniform(0, 255) for _ in range(11)] for _ in range(5)])
    field = dither_field(values, size=4)
    for y in range(5):
        for x in range(11):
            assert field[y, x] == bayer_dither(values[y, x], x, y, size=4)


def test_dither_level():
    assert dither_level(0.0, 0, 0) == 0
    assert dither_level(0.5, 0, 0) == 1
    assert dither_level(0.5, 7, 0) == 0


def test_gradient_field_horizontal():
    field = gradient_field(5, 3, 0.0)
    assert field.shape == (3, 5)
    assert np.allclose(field[:, 0], 0.0)
    assert np.allclose(field[:, -1], 255.0)
    assert np.allclose(field[:, 2], 127.5)


def test_gradient_field_degenerate():
    assert np.array_equal(gradient_field(1, 1, 1.0), np.zeros((1, 1)))
    assert gradient_field(0, 3, 0.0).shape == (3, 0)


def test_dither_gradient():
    angle, mask = dither_gradient(SeededRandom(2), 20, 12)
    assert 0 <= angle < 2 * math.pi
    assert mask.shape == (12, 20)
    assert set(np.unique(mask)) <= {0, 1}
    again_angle, again = dither_gradient(SeededRandom(2), 20, 12)
    assert again_angle == angle
    assert np.array_equal(mask, again)


def test_linear_gradient_ramps():
    field = linear_gradient(64, 16)
    assert field.shape == (16, 64)
    assert field[:, 0].sum() == 0
    assert field[:, :16].mean() < field[:, -16:].mean()

    vertical = linear_gradient(8, 32, horizontal=False)
    assert vertical[:8].mean() < vertical[-8:].mean()


def test_floyd_steinberg_preserves_tone():
    values = np.full((32, 32), 128.0)
    result = floyd_steinberg(values)
    assert result.dtype == np.uint8
    assert abs(result.mean() - 128.0) < 0.05 * 255
    assert np.all(values == 128.0)


def test_floyd_steinberg_flat_fields():
    assert floyd_steinberg(np.zeros((4, 4))).sum() == 0
    assert np.all(floyd_steinberg(np.full((4, 4), 255.0)) == 255)


def test_floyd_steinberg_rejects_1d():
    with pytest.raises(ValueError):
        floyd_steinberg(np.zeros(5))
