"""Procedural path and pattern engine for generative sketches."""

from sketchbook.engine.context import SketchContext
from sketchbook.engine.registry import SketchParams, get_registry, sketch
from sketchbook.engine.rng import SeededRandom
from sketchbook.engine.runner import SketchRunner, create_runner

__all__ = [
    "sketch",
    "get_registry",
    "SketchParams",
    "SketchContext",
    "SeededRandom",
    "SketchRunner",
    "create_runner",
]
