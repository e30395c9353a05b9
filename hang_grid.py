#!/usr/bin/env python3
"""
HANG_GRID.PY - Ceiling-plan grid math

The grid is centered in the boundary: whatever is left over after whole grid
cells is split evenly on both sides. Grid indices are 1-based, matching the
stored project format.
"""

import math
from typing import Tuple

from hang_models import ProjectSpecs, Point


EPS = 1e-9


def grid_origin(specs: ProjectSpecs) -> Tuple[float, float]:
    g = specs.grid_spacing_in
    if g <= 0:
        return 0.0, 0.0
    ox = (specs.boundary_width_in - math.floor(specs.boundary_width_in / g) * g) / 2
    oy = (specs.boundary_height_in - math.floor(specs.boundary_height_in / g) * g) / 2
    return ox, oy


def snap_to_grid_index(x_in: float, y_in: float, specs: ProjectSpecs) -> Tuple[int, int]:
    """Nearest (col, row) grid index for a plan position."""
    ox, oy = grid_origin(specs)
    g = specs.grid_spacing_in
    col = int(math.floor((x_in - ox) / g + EPS + 0.5)) + 1
    row = int(math.floor((y_in - oy) / g + EPS + 0.5)) + 1
    return col, row


def grid_index_to_world(col: int, row: int, specs: ProjectSpecs) -> Point:
    ox, oy = grid_origin(specs)
    g = specs.grid_spacing_in
    x = ox + (col - 1) * g
    y = oy + (row - 1) * g
    # Clamp tiny floating error
    return Point(0.0 if abs(x) < EPS else x, 0.0 if abs(y) < EPS else y)


def clamp_to_boundary_shape(x_in: float, y_in: float, specs: ProjectSpecs) -> Point:
    """Pull a point back inside a circular or oval boundary (rect is unclamped)."""
    shape = specs.boundary_shape
    if shape == "rect":
        return Point(x_in, y_in)

    w = specs.boundary_width_in
    h = specs.boundary_height_in
    cx = w / 2
    cy = h / 2
    if shape == "circle":
        rx = ry = min(w, h) / 2
    else:
        rx, ry = w / 2, h / 2
    if rx <= 0 or ry <= 0:
        return Point(cx, cy)

    dx = x_in - cx
    dy = y_in - cy
    t = (dx * dx) / (rx * rx) + (dy * dy) / (ry * ry)
    if t <= 1:
        return Point(x_in, y_in)
    scale = 1 / math.sqrt(t)
    return Point(cx + dx * scale, cy + dy * scale)
