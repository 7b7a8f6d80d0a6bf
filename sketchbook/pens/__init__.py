"""Semantic colour tokens and the pen catalog behind them."""

from sketchbook.pens.catalog import PenCatalog, PenFamily, PenStroke, get_catalog, load_catalog

__all__ = ["PenCatalog", "PenFamily", "PenStroke", "get_catalog", "load_catalog"]
