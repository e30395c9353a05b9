import math

import pytest

from hang_catenary import solve_catenary_by_length, point_at_arc_length
from hang_sampling import polyline_length


def _sample(params, n=400):
    return [point_at_arc_length(params, params.length * i / n) for i in range(n + 1)]


@pytest.mark.parametrize("x0,y0,x1,y1,length", [
    (0.0, 0.0, 10.0, 0.0, 12.0),
    (0.0, 0.0, 10.0, 3.0, 14.0),
    (-5.0, -2.0, 20.0, -8.0, 40.0),
    (0.0, 0.0, 1.0, 0.0, 30.0),
])
def test_endpoints_reproduced(x0, y0, x1, y1, length):
    params = solve_catenary_by_length(x0, y0, x1, y1, length)
    assert params is not None

    start = point_at_arc_length(params, 0.0)
    end = point_at_arc_length(params, params.length)
    assert start.x == pytest.approx(x0, abs=1e-3)
    assert start.y == pytest.approx(y0, abs=1e-3)
    assert end.x == pytest.approx(x1, abs=1e-3)
    assert end.y == pytest.approx(y1, abs=1e-3)


def test_sampled_curve_has_requested_length():
    params = solve_catenary_by_length(0.0, 0.0, 10.0, 3.0, 14.0)
    assert polyline_length(_sample(params)) == pytest.approx(14.0, rel=1e-3)


def test_curve_sags_below_both_ends():
    params = solve_catenary_by_length(0.0, 0.0, 10.0, 0.0, 12.0)
    lowest = min(p.y for p in _sample(params))
    assert lowest < -1.0
    # Symmetric span: the lowest point is at mid-span
    assert params.b == pytest.approx(5.0, abs=1e-6)


def test_endpoint_order_does_not_change_the_curve():
    forward = solve_catenary_by_length(0.0, 2.0, 10.0, 0.0, 13.0)
    backward = solve_catenary_by_length(10.0, 0.0, 0.0, 2.0, 13.0)
    assert forward.a == pytest.approx(backward.a)
    assert forward.b == pytest.approx(backward.b)
    assert forward.c == pytest.approx(backward.c)
    # Arc length is measured from the left end either way
    assert point_at_arc_length(backward, 0.0).x == pytest.approx(0.0, abs=1e-3)


def test_arc_length_is_clamped():
    params = solve_catenary_by_length(0.0, 0.0, 10.0, 0.0, 12.0)
    assert point_at_arc_length(params, -5.0) == point_at_arc_length(params, 0.0)
    assert point_at_arc_length(params, 99.0) == point_at_arc_length(params, 12.0)


@pytest.mark.parametrize("x0,y0,x1,y1,length", [
    (0.0, 0.0, 10.0, 0.0, 10.0),          # no slack
    (0.0, 0.0, 10.0, 0.0, 8.0),           # shorter than chord
    (0.0, 0.0, 0.0, -5.0, 8.0),           # vertical span
    (0.0, 0.0, 5e-7, -5.0, 8.0),          # near-vertical span
    (0.0, 0.0, 10.0, 0.0, math.nan),
    (0.0, 0.0, 10.0, 0.0, math.inf),
])
def test_unsolvable_returns_none(x0, y0, x1, y1, length):
    assert solve_catenary_by_length(x0, y0, x1, y1, length) is None
