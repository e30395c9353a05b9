import math

import pytest

from hang_models import Point
from hang_relax import relax_rope


@pytest.mark.parametrize("iterations", [0, 1, 60, 90])
def test_endpoints_stay_pinned(iterations):
    p0 = Point(0.0, 10.0)
    p1 = Point(20.0, 15.0)
    rope = relax_rope(p0, p1, 30.0, 16, iterations=iterations)
    assert rope.points[0] == p0
    assert rope.points[-1] == p1
    assert len(rope.points) == 16


def test_slack_rope_sags_below_endpoints():
    p0 = Point(0.0, 10.0)
    p1 = Point(20.0, 15.0)
    rope = relax_rope(p0, p1, 30.0, 16)
    assert rope.deepest_y() > 15.0
    assert rope.total_length() > math.hypot(20.0, 5.0)
    assert len(rope.cum) == len(rope.points)


def test_vertical_span_is_supported():
    rope = relax_rope(Point(5.0, 0.0), Point(5.0, 0.0), 20.0, 11)
    assert rope.points[0] == Point(5.0, 0.0)
    assert rope.points[-1] == Point(5.0, 0.0)
    assert rope.deepest_y() > 0.0


def test_zero_length_and_minimum_points():
    rope = relax_rope(Point(0.0, 0.0), Point(4.0, 0.0), 0.0, 1)
    assert len(rope.points) == 2
    assert rope.points[0] == Point(0.0, 0.0)
    assert rope.points[-1] == Point(4.0, 0.0)
