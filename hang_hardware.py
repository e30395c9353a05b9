#!/usr/bin/env python3
"""
HANG_HARDWARE.PY - Clasp and chain-link geometry

Contains:
- clasp_between: Eye + link + eye connector between two sphere centers
- chain_links_along: Procedural chain links laid along a polyline
- ChainLink: One link glyph (face-on ellipse or edge-on bar)

Shared by strands, stacks, custom strands, clusters and swoops.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence, Set

from hang_models import Point, ClaspConnector, SPHERE_RADIUS_IN, SPHERE_GAP_IN
from hang_sampling import build_cumulative, sample_at

logger = logging.getLogger(__name__)


CLASP_GAP_TOLERANCE_IN = 0.25
EYE_DIAMETER_IN = 0.75
LINK_WIDTH_IN = 0.55
LINK_HEIGHT_IN = 1.0

# Connector keys already reported, so a redraw does not repeat the warning
_warned_clasp_keys: Set[str] = set()


@dataclass
class ChainLink:
    x: float
    y: float
    angle_deg: float   # glyph rotation (tangent + 90)
    face_on: bool      # True = ellipse, False = edge-on bar
    width: float = LINK_WIDTH_IN
    height: float = LINK_HEIGHT_IN


def clasp_between(key: str, top: Point, bottom: Point,
                  radius: float = SPHERE_RADIUS_IN,
                  gap: float = SPHERE_GAP_IN,
                  eye_diameter: float = EYE_DIAMETER_IN,
                  link_width: float = LINK_WIDTH_IN,
                  link_height: float = LINK_HEIGHT_IN) -> ClaspConnector:
    """Build the clasp joining two adjacent sphere centers.

    Each eye sits on its sphere's surface facing the other sphere; the link
    sits halfway between the eyes, rotated to follow the connecting direction.
    A realized eye-to-eye gap that differs from the nominal gap by more than
    0.25 in is logged once per key. It never changes the geometry.
    """
    dx = bottom.x - top.x
    dy = bottom.y - top.y
    dist = math.hypot(dx, dy) or 1e-9
    ux = dx / dist
    uy = dy / dist

    eye_top = Point(top.x + ux * radius, top.y + uy * radius)
    eye_bottom = Point(bottom.x - ux * radius, bottom.y - uy * radius)

    realized = math.hypot(eye_bottom.x - eye_top.x, eye_bottom.y - eye_top.y)
    if abs(realized - gap) > CLASP_GAP_TOLERANCE_IN and key not in _warned_clasp_keys:
        _warned_clasp_keys.add(key)
        logger.warning(f"Clasp gap mismatch on {key}: {realized:.3f} in (expected {gap:.3f} in)")

    center = Point((eye_top.x + eye_bottom.x) / 2, (eye_top.y + eye_bottom.y) / 2)
    angle = math.degrees(math.atan2(dy, dx)) + 90.0

    return ClaspConnector(
        eye_top=eye_top,
        eye_bottom=eye_bottom,
        link_center=center,
        angle_deg=angle,
        eye_diameter=eye_diameter,
        link_width=link_width,
        link_height=link_height,
    )


def chain_links_along(points: Sequence[Point], link_height_in: float = LINK_HEIGHT_IN,
                      link_width_in: float = LINK_WIDTH_IN,
                      start_phase: int = 0) -> List[ChainLink]:
    """Lay chain links along a polyline, one per link height of arc length.

    Links alternate between face-on and edge-on, starting with face-on when
    start_phase is even.
    """
    if len(points) < 2:
        return []

    cum = build_cumulative(points)
    total = cum[-1]
    if total <= 1e-6:
        return []

    links = []
    delta = min(0.01 * total, 0.1)
    count = int(math.floor((total + 1e-9) / link_height_in)) + 1
    for idx in range(count):
        s = min(idx * link_height_in, total)
        p = sample_at(points, cum, s)

        # Tangent from a small forward/backward sample
        p1 = sample_at(points, cum, max(0.0, s - delta))
        p2 = sample_at(points, cum, min(total, s + delta))
        theta = math.degrees(math.atan2(p2.y - p1.y, p2.x - p1.x))

        links.append(ChainLink(
            x=p.x,
            y=p.y,
            angle_deg=theta + 90.0,
            face_on=(start_phase + idx) % 2 == 0,
            width=link_width_in,
            height=link_height_in,
        ))
    return links


def reset_clasp_warnings():
    """Forget which connectors have already been reported."""
    _warned_clasp_keys.clear()
