#!/usr/bin/env python3
"""
HANG_CLUSTER.PY - Plan layout of the strands in a cluster

Strands are seeded on a golden-angle spiral around the cluster anchor, then
pushed apart until no two overlap, with a mild pull back toward the anchor.
"""

import math
from typing import List, Optional

from hang_models import ClusterSpec, Point


GOLDEN_ANGLE = 2.399963229728653  # radians
LAYOUT_ITERATIONS = 40
CENTER_PULL = 0.98


def compute_cluster_layout(spec: ClusterSpec, count: Optional[int] = None) -> List[Point]:
    """Offsets (inches, plan coordinates) of each strand from the cluster anchor."""
    n = max(0, int(count if count is not None else len(spec.strands)))
    if n == 0:
        return []

    r = max(0.1, spec.item_radius_in or 0.1)
    max_r = max(r * 2, spec.spread_in or r * 4)

    xs = []
    ys = []
    for i in range(n):
        angle = i * GOLDEN_ANGLE
        rad = min(max_r, r * 2 * math.sqrt(i + 1))
        xs.append(math.cos(angle) * rad)
        ys.append(math.sin(angle) * rad)

    min_d = 2 * r
    for _ in range(LAYOUT_ITERATIONS):
        # Repel overlaps
        for i in range(n):
            for j in range(i + 1, n):
                dx = xs[j] - xs[i]
                dy = ys[j] - ys[i]
                d = math.hypot(dx, dy) or 1e-6
                if d < min_d:
                    push = (min_d - d) / 2
                    nx = dx / d
                    ny = dy / d
                    xs[i] -= nx * push
                    ys[i] -= ny * push
                    xs[j] += nx * push
                    ys[j] += ny * push

        # Pull toward the anchor, then clamp to the spread
        for i in range(n):
            xs[i] *= CENTER_PULL
            ys[i] *= CENTER_PULL
            d = math.hypot(xs[i], ys[i])
            if d > max_r:
                s = max_r / d
                xs[i] *= s
                ys[i] *= s

    return [Point(x, y) for x, y in zip(xs, ys)]
