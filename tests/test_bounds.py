import pytest

from hang_models import Project, Anchor, Strand, StrandSpec, Swoop, SwoopSpec
from hang_bounds import compute_preview_fit_bounds


def test_empty_project_spans_boundary_and_ceiling(specs):
    bounds = compute_preview_fit_bounds(Project(specs=specs))
    assert bounds.min_x == pytest.approx(-4.25)
    assert bounds.max_x == pytest.approx(28.25)
    assert bounds.min_y == pytest.approx(-2.0)
    assert bounds.max_y == pytest.approx(122.0)
    assert bounds.width == pytest.approx(32.5)


def test_long_strand_extends_bottom(specs):
    project = Project(specs=specs, anchors=[Anchor("a1", 3.0, 3.0)],
                      strands=[Strand("s1", "a1", StrandSpec(3, 100.0, 10.0))])
    assert compute_preview_fit_bounds(project).max_y == pytest.approx(140.5)


def test_swoop_with_missing_anchor_uses_chain_estimate(specs):
    project = Project(specs=specs, anchors=[Anchor("a1", 3.0, 3.0)],
                      swoops=[Swoop("w1", "a1", "gone", SwoopSpec(2, 10.0, 20.0, 150.0))])
    assert compute_preview_fit_bounds(project).max_y == pytest.approx(177.0)


def test_deep_swoop_extends_bottom(specs):
    specs.ceiling_height_in = 50.0
    project = Project(specs=specs, anchors=[Anchor("a1", 3.0, 6.0), Anchor("a2", 21.0, 6.0)],
                      swoops=[Swoop("w1", "a1", "a2", SwoopSpec(4, 50.0, 50.0, 30.0))])
    assert compute_preview_fit_bounds(project).max_y > 62.0 + 2.25
