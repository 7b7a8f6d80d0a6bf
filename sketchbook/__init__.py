"""sketchbook: seeded procedural paths and patterns for generative plotter sketches."""

__version__ = "0.1.0"
