import pytest

from hang_models import ProjectSpecs, Point
from hang_grid import grid_origin, snap_to_grid_index, grid_index_to_world, clamp_to_boundary_shape


def test_grid_is_centered_in_boundary(specs):
    ox, oy = grid_origin(specs)
    assert ox == pytest.approx(0.75)
    assert oy == pytest.approx(1.5)
    p = grid_index_to_world(1, 1, specs)
    assert (p.x, p.y) == pytest.approx((0.75, 1.5))


def test_snap_and_back(specs):
    assert snap_to_grid_index(5.3, 6.1, specs) == (2, 2)
    p = grid_index_to_world(2, 2, specs)
    assert p.x == pytest.approx(5.25)
    assert p.y == pytest.approx(6.0)


def test_zero_spacing_has_origin_at_corner():
    assert grid_origin(ProjectSpecs(grid_spacing_in=0.0)) == (0.0, 0.0)


def test_rect_boundary_is_not_clamped(specs):
    assert clamp_to_boundary_shape(30.0, 6.0, specs) == Point(30.0, 6.0)


def test_circle_and_oval_clamp(specs):
    specs.boundary_shape = "circle"
    p = clamp_to_boundary_shape(30.0, 6.0, specs)
    assert p.x == pytest.approx(18.0)
    assert p.y == pytest.approx(6.0)
    # Inside points pass through
    assert clamp_to_boundary_shape(13.0, 7.0, specs) == Point(13.0, 7.0)

    specs.boundary_shape = "oval"
    p = clamp_to_boundary_shape(30.0, 6.0, specs)
    assert p.x == pytest.approx(24.0)
