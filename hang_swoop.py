#!/usr/bin/env python3
"""
HANG_SWOOP.PY - Two-point sagging cable ("swoop") geometry

Contains:
- SwoopGeometry: Spheres, clasps and end chains of a laid-out swoop
- compute_swoop_geometry: Solve the cable shape and pitch spheres along it

The cable hangs from the bottom of each endpoint chain, in the y-down
rendering frame with y = 0 at the ceiling. Shape selection:
- zero horizontal span: straight vertical run from the higher endpoint
- otherwise: closed-form catenary
- catenary unsolvable with slack left: rope relaxation
- no slack at all: straight line between the endpoints
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from hang_models import (
    Point, Sphere, ChainSegment, ClaspConnector, SwoopSpec,
    SPHERE_DIAMETER_IN, SPHERE_GAP_IN,
)
from hang_catenary import solve_catenary_by_length, point_at_arc_length
from hang_relax import relax_rope
from hang_sampling import build_cumulative, sample_at
from hang_hardware import clasp_between
from hang_projection import Projected

logger = logging.getLogger(__name__)


VERTICAL_SPAN_EPS = 1e-3
MIN_SAMPLES = 60
MAX_SAMPLES = 240
SAMPLES_PER_SPHERE = 20


@dataclass
class SwoopGeometry:
    spheres: List[Sphere] = field(default_factory=list)
    clasps: List[ClaspConnector] = field(default_factory=list)
    clasp_depths: List[float] = field(default_factory=list)
    end_chains: List[ChainSegment] = field(default_factory=list)
    end_chain_depths: List[float] = field(default_factory=list)
    path: List[Point] = field(default_factory=list)
    total_length: float = 0.0
    shape: str = "catenary"  # "catenary", "relaxed", "straight" or "vertical"


def _sample_count(sphere_count: int) -> int:
    return max(MIN_SAMPLES, min(MAX_SAMPLES, sphere_count * SAMPLES_PER_SPHERE))


def _vertical_drop(x: float, y_a: float, y_b: float, total_len: float,
                   samples: int) -> List[Point]:
    """Cable with no horizontal span: one straight vertical run.

    It hangs from the higher endpoint and is as long as the cable, so sphere
    centers placed along it stay a full pitch apart.
    """
    top = min(y_a, y_b)
    bottom = top + max(total_len, abs(y_b - y_a))
    return [Point(x, top + (bottom - top) * i / samples) for i in range(samples + 1)]


def compute_swoop_geometry(proj_a: Projected, proj_b: Projected, spec: SwoopSpec,
                           sphere_diameter: float = SPHERE_DIAMETER_IN,
                           gap: float = SPHERE_GAP_IN,
                           y_shift: Optional[Callable[[float], float]] = None,
                           key: str = "swoop") -> SwoopGeometry:
    """Lay out a swoop between two projected anchors.

    proj_a / proj_b carry the display x and the (layer-adjusted) depth of
    each end. y_shift maps a depth to the parallax lift subtracted from y.
    """
    lift = y_shift or (lambda depth: 0.0)
    r = sphere_diameter / 2
    pitch = sphere_diameter + gap
    count = max(0, int(spec.sphere_count or 0))

    base_len = 0.0 if count <= 1 else (count - 1) * pitch
    breathing_room = 2 * r
    desired_len = base_len + breathing_room + max(0.0, spec.sag_in or 0.0)

    x_a = proj_a.x_in
    x_b = proj_b.x_in
    y_a = max(0.0, spec.chain_a_in or 0.0)
    y_b = max(0.0, spec.chain_b_in or 0.0)
    depth_a = proj_a.depth_key
    depth_b = proj_b.depth_key

    chord = math.hypot(x_b - x_a, y_b - y_a)
    total_len = max(chord, desired_len)

    dx = x_b - x_a
    direction = 1.0 if dx >= 0 else -1.0
    span = abs(dx)
    samples = _sample_count(count)

    if span < VERTICAL_SPAN_EPS:
        shape = "vertical"
        path = _vertical_drop(x_a, y_a, y_b, total_len, samples)
    else:
        # Solver frame is y-up and starts at x = 0
        cat = solve_catenary_by_length(0.0, -y_a, span, -y_b, total_len)
        if cat is not None:
            shape = "catenary"
            path = []
            for i in range(samples + 1):
                p_up = point_at_arc_length(cat, cat.length * i / samples)
                path.append(Point(x_a + direction * p_up.x, -p_up.y))
        elif total_len > chord + 1e-6:
            shape = "relaxed"
            logger.debug(f"{key}: catenary unsolvable, relaxing rope of {total_len:.2f} in")
            hanging = relax_rope(Point(x_a, y_a), Point(x_b, y_b), total_len, samples + 1)
            path = hanging.points
        else:
            shape = "straight"
            path = [Point(x_a + dx * i / samples, y_a + (y_b - y_a) * i / samples)
                    for i in range(samples + 1)]

    cum = build_cumulative(path)
    total_sample_len = cum[-1] if cum else 0.0
    geometry = SwoopGeometry(path=path, total_length=total_sample_len, shape=shape)

    if count == 0:
        return geometry

    # Center the sphere run in the slack left over after the pitched spheres
    free_slack = max(0.0, total_sample_len - base_len)
    start_s = free_slack / 2
    for i in range(count):
        s = max(0.0, min(total_sample_len, start_s + i * pitch))
        p = sample_at(path, cum, s)
        if span > 1e-6:
            t = (p.x - x_a) * direction / span
        else:
            t = s / total_sample_len if total_sample_len > 0 else 0.0
        depth = depth_a + (depth_b - depth_a) * t
        geometry.spheres.append(Sphere(
            x=p.x,
            y=p.y - lift(depth),
            diameter=sphere_diameter,
            depth=depth,
            color_id=spec.color_id,
        ))

    spheres = geometry.spheres
    for i in range(len(spheres) - 1):
        a = spheres[i]
        b = spheres[i + 1]
        geometry.clasps.append(clasp_between(
            f"{key}-clasp-{i}", Point(a.x, a.y), Point(b.x, b.y), radius=r, gap=gap,
        ))
        geometry.clasp_depths.append(0.5 * (a.depth + b.depth))

    # Terminal chains run from each ceiling anchor to the nearest sphere surface
    for anchor_x, anchor_depth, sphere in ((x_a, depth_a, spheres[0]), (x_b, depth_b, spheres[-1])):
        anchor_pt = Point(anchor_x, 0.0 - lift(anchor_depth))
        ddx = sphere.x - anchor_pt.x
        ddy = sphere.y - anchor_pt.y
        dist = math.hypot(ddx, ddy) or 1e-9
        end = Point(sphere.x - ddx / dist * r, sphere.y - ddy / dist * r)
        geometry.end_chains.append(ChainSegment(anchor_pt, end))
        geometry.end_chain_depths.append(0.5 * (anchor_depth + sphere.depth))

    return geometry
