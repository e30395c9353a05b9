#!/usr/bin/env python3
"""
HANG_PROJECTION.PY - Rotation/parallax projection of plan anchors

Contains:
- Projected: Display x and depth key of a projected anchor
- project_preview: Rotate an anchor about the plan center
- compute_y_shift: Vertical parallax lift for a depth key
- layer_depth_offset: Extra depth for the front/mid/back layers

Depth convention: larger depth_key = farther from the viewer.
"""

import math
from dataclasses import dataclass

from hang_models import Anchor, Point, LAYER_FRONT, LAYER_BACK


DEPTH_RAISE_IN = 0.8  # vertical raise (inches) at the edge of the plan


@dataclass
class Projected:
    x_in: float
    depth_key: float


def project_preview(boundary_center: Point, anchor: Anchor, rotation_deg: float,
                    strength: float) -> Projected:
    """Rotate the anchor's offset from the plan center by rotation_deg.

    The displayed x blends between the unrotated and rotated x by strength;
    the depth key is always the fully rotated depth so sorting follows the
    true rotation even when horizontal motion is damped.
    """
    dx = anchor.x_in - boundary_center.x
    dy = anchor.y_in - boundary_center.y
    theta = math.radians(rotation_deg)
    c = math.cos(theta)
    s = math.sin(theta)
    rot_x = dx * c + dy * s
    rot_depth = -dx * s + dy * c

    if strength == 0 or rotation_deg % 360 == 0:
        return Projected(x_in=anchor.x_in, depth_key=rot_depth)

    x_rot = boundary_center.x + rot_x
    x_final = anchor.x_in + (x_rot - anchor.x_in) * strength
    return Projected(x_in=x_final, depth_key=rot_depth)


def compute_y_shift(depth_key: float, perspective_factor: float = 0.0,
                    half_diagonal: float = 1.0) -> float:
    """Vertical raise in inches to subtract from an element's y.

    perspective_factor in -1..1: magnitude is 1 + |f|, and a negative factor
    flips the direction (view from below instead of above).
    """
    f = perspective_factor or 0.0
    sign = 1.0 if f >= 0 else -1.0
    magnitude = 1.0 + abs(f)
    normalized = depth_key / (half_diagonal or 1.0)
    return normalized * DEPTH_RAISE_IN * magnitude * sign


def layer_depth_offset(layer: str, layer_spread_in: float) -> float:
    if layer == LAYER_FRONT:
        return -layer_spread_in
    if layer == LAYER_BACK:
        return layer_spread_in
    return 0.0
