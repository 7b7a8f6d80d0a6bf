"""Ordered (Bayer) dithering and gradient fields.

Threshold tables hold a permutation of ``0 .. size**2 - 1``. A value in
0-255 becomes 255 where it exceeds the normalised threshold at its cell.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from sketchbook.engine.rng import SeededRandom

BAYER_2: NDArray[np.int64] = np.array(
    [
        [0, 2],
        [3, 1],
    ]
)

BAYER_4: NDArray[np.int64] = np.array(
    [
        [0, 8, 2, 10],
        [12, 4, 14, 6],
        [3, 11, 1, 9],
        [15, 7, 13, 5],
    ]
)

BAYER_8: NDArray[np.int64] = np.array(
    [
        [0, 48, 12, 60, 3, 51, 15, 63],
        [32, 16, 44, 28, 35, 19, 47, 31],
        [8, 56, 4, 52, 11, 59, 7, 55],
        [40, 24, 36, 20, 43, 27, 39, 23],
        [2, 50, 14, 62, 1, 49, 13, 61],
        [34, 18, 46, 30, 33, 17, 45, 29],
        [10, 58, 6, 54, 9, 57, 5, 53],
        [42, 26, 38, 22, 41, 25, 37, 21],
    ]
)

_MATRICES = {2: BAYER_2, 4: BAYER_4, 8: BAYER_8}


def bayer_matrix(size: int) -> NDArray[np.int64]:
    try:
        return _MATRICES[size]
    except KeyError:
        raise ValueError(f"Bayer matrix size must be 2, 4 or 8, got {size}") from None


def bayer_threshold(x: int, y: int, size: int = 8) -> int:
    """Threshold at ``(x, y)``: ``matrix[y mod size][x mod size]``."""
    return int(bayer_matrix(size)[y % size, x % size])


def bayer_dither(value: float, x: int, y: int, size: int = 8) -> int:
    """255 when ``value`` clears the cell's threshold, else 0."""
    max_threshold = size * size - 1
    cutoff = bayer_threshold(x, y, size) / max_threshold * 255
    return 255 if value > cutoff else 0


def dither_level(intensity: float, x: int, y: int, size: int = 8) -> int:
    """1 if a cell at normalised ``intensity`` (0-1) should be filled."""
    max_threshold = size * size - 1
    return 1 if intensity > bayer_threshold(x, y, size) / max_threshold else 0


def dither_field(values: NDArray[np.float64], size: int = 8) -> NDArray[np.uint8]:
    """Vectorised ``bayer_dither`` over a ``(rows, cols)`` array of 0-255 values."""
    values = np.asarray(values, dtype=np.float64)
    rows, cols = values.shape
    matrix = bayer_matrix(size)
    reps = (math.ceil(rows / size), math.ceil(cols / size))
    tiled = np.tile(matrix, reps)[:rows, :cols]
    cutoff = tiled / (size * size - 1) * 255
    return np.where(values > cutoff, 255, 0).astype(np.uint8)


def gradient_field(cols: int, rows: int, angle: float) -> NDArray[np.float64]:
    """Linear 0-255 gradient along ``angle`` over a ``(rows, cols)`` grid.

    Cell coordinates are projected onto the direction vector and min/max
    normalised against the projections of the four grid corners. A grid
    whose corners all project to the same value yields a uniform field of 0.
    """
    if cols <= 0 or rows <= 0:
        return np.zeros((max(rows, 0), max(cols, 0)))

    cos_a, sin_a = math.cos(angle), math.sin(angle)
    corners = np.array([[0, 0], [cols - 1, 0], [0, rows - 1], [cols - 1, rows - 1]], dtype=np.float64)
    projections = corners[:, 0] * cos_a + corners[:, 1] * sin_a
    lo, hi = float(projections.min()), float(projections.max())

    col_idx, row_idx = np.meshgrid(np.arange(cols), np.arange(rows))
    projection = col_idx * cos_a + row_idx * sin_a
    if hi - lo < 1e-12:
        return np.zeros((rows, cols))
    return (projection - lo) / (hi - lo) * 255


def dither_gradient(
    rng: SeededRandom, cols: int, rows: int, size: int = 8
) -> tuple[float, NDArray[np.uint8]]:
    """Random-angle gradient, dithered. Returns ``(angle, mask)`` with mask values 0/1."""
    angle = rng.uniform(0, 2 * math.pi)
    field = gradient_field(cols, rows, angle)
    if field.size == 0:
        return angle, np.zeros(field.shape, dtype=np.uint8)
    return angle, (dither_field(field, size) > 0).astype(np.uint8)


def linear_gradient(width: int, height: int, horizontal: bool = True, size: int = 8) -> NDArray[np.uint8]:
    """Left-to-right (or top-to-bottom) ramp dithered to 0/255."""
    if width <= 0 or height <= 0:
        return np.zeros((max(height, 0), max(width, 0)), dtype=np.uint8)
    span = (width if horizontal else height) - 1
    ramp = np.arange(width if horizontal else height, dtype=np.float64) / max(span, 1)
    if horizontal:
        values = np.tile(ramp, (height, 1))
    else:
        values = np.tile(ramp[:, None], (1, width))
    return dither_field(values * 255, size)


def floyd_steinberg(values: NDArray[np.float64]) -> NDArray[np.uint8]:
    """Error-diffusion dither of a ``(rows, cols)`` 0-255 array. Input is not modified."""
    working = np.array(values, dtype=np.float64, copy=True)
    if working.ndim != 2:
        raise ValueError(f"floyd_steinberg() expects a 2-D array, got shape {working.shape}")
    height, width = working.shape
    result = np.zeros((height, width), dtype=np.uint8)

    for y in range(height):
        for x in range(width):
            old = working[y, x]
            new = 255 if old > 127 else 0
            result[y, x] = new
            error = old - new
            if x + 1 < width:
                working[y, x + 1] += error * 7 / 16
            if y + 1 < height:
                if x > 0:
                    working[y + 1, x - 1] += error * 3 / 16
                working[y + 1, x] += error * 5 / 16
                if x + 1 < width:
                    working[y + 1, x + 1] += error * 1 / 16

    return result
