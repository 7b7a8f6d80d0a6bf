"""Shared test fixtures."""

from __future__ import annotations

import pytest

from sketchbook.engine.primitives import BoundingBox, Point
from sketchbook.engine.rng import SeededRandom


# An L-shaped polyline: 100 px right, then 50 px down
L_PATH = [Point(0.0, 0.0), Point(100.0, 0.0), Point(100.0, 50.0)]

# Zig-zag through a 3-cell staircase, every corner a right angle
STAIR_PATH = [
    Point(0.0, 0.0),
    Point(20.0, 0.0),
    Point(20.0, 20.0),
    Point(40.0, 20.0),
    Point(40.0, 40.0),
]

SMALL_PEN_CATALOG = {
    "testPens": {
        "name": "Test Pens",
        "lineWidth": 0.5,
        "opaque": True,
        "pens": {
            "black": [0, 0, 0, 255],
            "red": [255, 0, 0],
        },
    },
    "washPens": {
        "name": "Wash",
        "lineWidth": 1.2,
        "opaque": False,
        "pens": {"blue": [0, 0, 255, 255]},
    },
}


@pytest.fixture
def rng() -> SeededRandom:
    return SeededRandom(1)


@pytest.fixture
def box() -> BoundingBox:
    return BoundingBox(0.0, 0.0, 100.0, 100.0)


@pytest.fixture
def l_path() -> list[Point]:
    return list(L_PATH)


@pytest.fixture
def stair_path() -> list[Point]:
    return list(STAIR_PATH)


@pytest.fixture
def pen_catalog_data() -> dict:
    return SMALL_PEN_CATALOG
