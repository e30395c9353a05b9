#!/usr/bin/env python3
"""
HANG_RELAX.PY - Discrete hanging-rope relaxation

Approximates a hanging curve by pinning both ends of a chain of points,
pulling interior points down and re-imposing equal segment lengths.
Used when the closed-form catenary cannot be solved, and on its own for
cheap depth-envelope estimates (preview bounds).

Works in the y-down rendering frame: gravity increases y.
"""

import math
from dataclasses import dataclass
from typing import List

from hang_models import Point
from hang_sampling import build_cumulative


GRAVITY_STEP = 0.35       # visual gravity per iteration; larger = more sag for the same slack
CONSTRAINT_PASSES = 6
SEED_BULGE = 0.25         # fraction of a segment length used to bow the seed curve


@dataclass
class HangingPolyline:
    points: List[Point]
    cum: List[float]

    def total_length(self) -> float:
        return self.cum[-1] if self.cum else 0.0

    def deepest_y(self) -> float:
        return max(p.y for p in self.points)


def relax_rope(p0: Point, p1: Point, total_length: float, point_count: int,
               iterations: int = 90) -> HangingPolyline:
    """Relax a rope of the given length hanging between p0 and p1.

    There is no convergence check: a fixed iteration budget is good enough for
    a preview. The first and last points are always exactly p0 and p1.
    """
    n = max(2, int(point_count))
    length = max(0.0, total_length)
    seg_len = length / (n - 1)

    # Seed on a gently sagging curve so the start is never singular
    xs = []
    ys = []
    for i in range(n):
        t = i / (n - 1)
        xs.append(p0.x + (p1.x - p0.x) * t)
        ys.append(p0.y + (p1.y - p0.y) * t + math.sin(math.pi * t) * SEED_BULGE * seg_len)
    xs[0], ys[0] = p0.x, p0.y
    xs[-1], ys[-1] = p1.x, p1.y

    if seg_len > 0:
        for _ in range(iterations):
            for i in range(1, n - 1):
                ys[i] += GRAVITY_STEP

            for _ in range(CONSTRAINT_PASSES):
                for i in range(n - 1):
                    dx = xs[i + 1] - xs[i]
                    dy = ys[i + 1] - ys[i]
                    dist = math.hypot(dx, dy) or 1e-9
                    diff = (dist - seg_len) / dist

                    # Split the correction unless one side is a pinned endpoint
                    w_p = 0.0 if i == 0 else 0.5
                    w_q = 0.0 if i + 1 == n - 1 else 0.5
                    w_sum = w_p + w_q
                    if w_sum <= 0:
                        continue

                    corr_x = dx * diff
                    corr_y = dy * diff
                    if w_p > 0:
                        xs[i] += corr_x * (w_p / w_sum)
                        ys[i] += corr_y * (w_p / w_sum)
                    if w_q > 0:
                        xs[i + 1] -= corr_x * (w_q / w_sum)
                        ys[i + 1] -= corr_y * (w_q / w_sum)

                xs[0], ys[0] = p0.x, p0.y
                xs[-1], ys[-1] = p1.x, p1.y

    points = [Point(x, y) for x, y in zip(xs, ys)]
    return HangingPolyline(points=points, cum=build_cumulative(points))
