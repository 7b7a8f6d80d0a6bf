"""Bundled sketches. Importing this package registers every one of them."""

from sketchbook.sketches import dither_01, nodes_02, noise_01, stairs_04, stairs_05

__all__ = ["dither_01", "nodes_02", "noise_01", "stairs_04", "stairs_05"]
