"""Generator configuration: tunables for every engine component.

Defaults come from the gallery sketches that use each generator. The
Hamiltonian thresholds are empirically tuned ("visually fewer dead ends")
and kept as named values rather than derived.
"""

from __future__ import annotations

from dataclasses import dataclass

from sketchbook.engine.primitives import BoundingBox, GridCell

# --- Path geometry ---

# Cubic Bezier handle length for a quarter circle: 4/3 * tan(pi/8)
BEZIER_CIRCLE_FACTOR = 0.5523

# Corners turning less than this (radians) are treated as straight
STRAIGHT_ANGLE_EPS = 0.1

# sin(theta/2) below this is a degenerate corner
DEGENERATE_SIN_EPS = 0.001

# Neighbours closer than this (px) are coincident; the corner passes through
MIN_CORNER_NEIGHBOR_DIST = 0.1

# Tangent components below this (px) trigger the widened look-around span
SHORT_TANGENT_EPS = 1.0

# Tangent components below this after widening fall back to (1, 0)
DEGENERATE_TANGENT_EPS = 0.1

# Widened look-around span: at most this many points ...
TANGENT_SPAN_MAX = 5
# ... and at most this fraction of the path's point count
TANGENT_SPAN_FRACTION = 0.1


@dataclass
class PivotPathConfig:
    """Bounded pivot-walk inputs."""

    bounding_box: BoundingBox
    steps: int = 30
    min_length: float = 10.0
    max_length: float = 10.0
    inner_jitter_frac: float = 0.05  # fraction of min(box)/2 for the first jump
    pivot_angle_min: float = 200.0  # degrees
    pivot_angle_max: float = 210.0  # degrees
    start_from_center: bool = True

    # Retries per step before the walk stalls on its current point
    max_attempts: int = 100


@dataclass
class HamiltonianConfig:
    """Backtracking coverage walk over a coarse grid."""

    # Grid fitting: cells across the shorter drawable side
    target_grid_size: int = 12
    # Fraction of the M*N cells the walk tries to cover
    coverage: float = 0.8
    allow_two_step_jumps: bool = True

    # Dead-end filter: candidates leaving >= this many dead-end cells are
    # rejected; the limit is multiplied by relax_factor once the walk has
    # covered relax_ratio of its target.
    max_dead_ends: int = 5
    dead_end_relax_ratio: float = 0.7
    dead_end_relax_factor: int = 2

    # Corner-trap check only runs once this fraction of the grid is filled
    corner_trap_fill_ratio: float = 0.5

    # When backtracking empties the stack below this fraction of the
    # target, restart from a random unvisited cell instead of stopping
    teleport_coverage_ratio: float = 0.5

    # Iteration cap = iteration_factor * M * N
    iteration_factor: int = 5

    # Corner rounding, radius as a fraction of the cell size
    corner_radius: float = 0.3
    bezier_steps: int = 10

    # Fixed start cell; random when None
    start: GridCell | None = None


@dataclass
class PatternConfig:
    """Draw/skip run lengths and zone probabilities for the slot mask."""

    draw_length_min: float = 5
    draw_length_max: float = 15
    skip_length_min: float = 2
    skip_length_max: float = 8
    # Draw runs may become every (gap+1)-th slot, gap in [0, max_gap]
    max_gap: int = 3
    inside_range_probability: float = 0.7
    outside_range_probability: float = 0.3


@dataclass
class SegmentConfig:
    """Pixel-length draw/skip segmentation along a path."""

    segment_length_min: float = 20.0
    segment_length_max: float = 60.0
    segment_gap_min: float = 5.0
    segment_gap_max: float = 15.0
    # Probabilities as percentages (0-100)
    draw_in_zone: float = 90.0
    draw_outside_zone: float = 10.0


@dataclass
class LineStyle:
    """Appearance of perpendicular line instances."""

    line_length_min: float = 8.0
    line_length_max: float = 14.0
    line_thickness: float = 0.5
    # True = lines start on the path and extend outward; False = centred
    lines_start_on_path: bool = False
    avoid_intersections: bool = False
    intersection_tolerance: float = 0.1


# Segments per intersection ledger before the O(k^2) check is reported
LEDGER_WARN_SIZE = 2000

# Noise placer: attempts per requested point
NOISE_ATTEMPTS_FACTOR = 50
