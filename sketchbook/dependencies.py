"""FastAPI dependency injection."""

from __future__ import annotations

from sketchbook.config import Settings, settings
from sketchbook.engine.runner import SketchRunner, create_runner
from sketchbook.pens.catalog import PenCatalog, get_catalog


def get_settings() -> Settings:
    return settings


def get_runner() -> SketchRunner:
    return create_runner()


def get_pen_catalog() -> PenCatalog:
    return get_catalog(settings.pen_catalog_path or None)
