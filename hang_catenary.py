#!/usr/bin/env python3
"""
HANG_CATENARY.PY - Closed-form hanging cable solver

Contains:
- CatenaryParams: Solved curve y = a*cosh((x-b)/a) + c
- solve_catenary_by_length: Fit a catenary through two points with a given arc length
- point_at_arc_length: Evaluate the curve at an arc-length offset from the start

The solver works in math coordinates (y-up). Callers drawing in a y-down frame
negate y before solving and again after sampling.
"""

import math
from dataclasses import dataclass
from typing import Optional

from hang_models import Point


BISECTION_ITERATIONS = 80
BRACKET_CAP = 60.0


@dataclass
class CatenaryParams:
    a: float
    b: float
    c: float
    u0: float       # (x0 - b) / a
    length: float   # arc length from the start point to the end point


def solve_catenary_by_length(x0: float, y0: float, x1: float, y1: float,
                             length: float) -> Optional[CatenaryParams]:
    """Solve for the catenary through (x0, y0) and (x1, y1) with arc length L.

    With dx = x1 - x0 and dy = y1 - y0 the curve satisfies:
        m = atanh(dy / L)
        R = dx / sqrt(L² - dy²) = d / sinh(d)
    where d is half the parameter span. d has no closed form, so it is found
    by bracketing then bisection. From d:
        u0 = m - d, u1 = m + d
        a = dx / (u1 - u0), b = x0 - a*u0, c = y0 - a*cosh(u0)

    Returns None when the cable has no slack to solve for, the span is
    near-vertical (y(x) is singular), or the length is impossible.
    """
    dx_raw = x1 - x0
    dy_raw = y1 - y0
    chord = math.hypot(dx_raw, dy_raw)

    if not math.isfinite(length) or length <= chord + 1e-6:
        return None
    if abs(dx_raw) < 1e-6:
        return None
    if abs(dy_raw) >= length:
        return None

    # Solve left to right; the curve itself does not depend on the direction
    if x1 < x0:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    dy = y1 - y0

    m = math.atanh(dy / length)
    denom = math.sqrt(max(1e-12, length * length - dy * dy))
    ratio = dx / denom  # in (0, 1)

    def residual(d: float) -> float:
        return d / math.sinh(d) - ratio

    lo = 1e-9
    hi = 1.0
    while residual(hi) > 0 and hi < BRACKET_CAP:
        hi *= 2
    if residual(hi) > 0:
        return None

    for _ in range(BISECTION_ITERATIONS):
        mid = (lo + hi) / 2
        if residual(mid) > 0:
            lo = mid
        else:
            hi = mid
    d = (lo + hi) / 2

    u0 = m - d
    u1 = m + d

    a = dx / (u1 - u0)
    b = x0 - a * u0
    c = y0 - a * math.cosh(u0)
    return CatenaryParams(a=a, b=b, c=c, u0=u0, length=length)


def point_at_arc_length(params: CatenaryParams, s: float) -> Point:
    """Point at arc length s from the left end, s clamped into [0, length].

    Inverts s = a*(sinh(u) - sinh(u0)).
    """
    clamped = max(0.0, min(params.length, s))
    a = params.a
    u = math.asinh(clamped / a + math.sinh(params.u0))
    return Point(a * u + params.b, a * math.cosh(u) + params.c)
