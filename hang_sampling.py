#!/usr/bin/env python3
"""
HANG_SAMPLING.PY - Arc-length sampling of polylines

Contains:
- build_cumulative: Prefix sums of segment lengths
- sample_at: Point at an arc-length offset along a polyline
- polyline_length: Total length of a polyline
"""

import math
from typing import List, Sequence

from hang_models import Point


def build_cumulative(points: Sequence[Point]) -> List[float]:
    """Cumulative distance table, cum[0] = 0 and cum[i] = length up to points[i]."""
    if not points:
        return []
    cum = [0.0]
    for i in range(1, len(points)):
        dx = points[i].x - points[i - 1].x
        dy = points[i].y - points[i - 1].y
        cum.append(cum[-1] + math.hypot(dx, dy))
    return cum


def polyline_length(points: Sequence[Point]) -> float:
    cum = build_cumulative(points)
    return cum[-1] if cum else 0.0


def sample_at(points: Sequence[Point], cum: Sequence[float], s: float) -> Point:
    """Linearly interpolated point at arc length s (clamped to [0, total]).

    Point counts are small (tens to low hundreds) so a linear scan is used.
    """
    if not points:
        return Point(0.0, 0.0)
    if len(points) == 1:
        return points[0]

    total = cum[-1]
    target = max(0.0, min(total, s))

    i = 1
    while i < len(cum) and cum[i] < target:
        i += 1
    if i >= len(cum):
        return points[-1]

    s0 = cum[i - 1]
    s1 = cum[i]
    t = 0.0 if s1 - s0 <= 1e-9 else (target - s0) / (s1 - s0)
    p = points[i - 1]
    q = points[i]
    return Point(p.x + (q.x - p.x) * t, p.y + (q.y - p.y) * t)
