import pytest

from hang_models import StrandSpec, StackSpec, CustomStrandSpec, CustomStrandNode
from hang_strand import compute_strand_preview, compute_stack_preview, compute_custom_strand_preview


def test_strand_layout_matches_pitch():
    preview = compute_strand_preview(110.0, StrandSpec(3, 10.0, 5.0))
    assert preview.sphere_centers_y == pytest.approx([12.25, 19.25, 26.25])
    assert preview.top_chain_y1 == 0.0
    assert preview.top_chain_y2 == pytest.approx(10.0)
    assert preview.bottom_chain_y1 == pytest.approx(28.5)
    assert preview.last_sphere_bottom_y == pytest.approx(28.5)
    assert preview.sphere_section_height == pytest.approx(18.5)
    assert preview.total_drop_in == pytest.approx(33.5)
    assert preview.over_ceiling is False


def test_over_ceiling_is_advisory():
    preview = compute_strand_preview(30.0, StrandSpec(3, 10.0, 5.0))
    assert preview.over_ceiling is True
    # Geometry is unchanged by the advisory
    assert preview.total_drop_in == pytest.approx(33.5)


def test_strand_without_spheres():
    preview = compute_strand_preview(110.0, StrandSpec(0, 12.0, 4.0))
    assert preview.sphere_centers_y == []
    assert preview.top_chain_y2 == pytest.approx(12.0)
    assert preview.bottom_chain_y1 == pytest.approx(12.0)
    assert preview.total_drop_in == pytest.approx(16.0)
    assert preview.sphere_section_height == 0.0


def test_custom_gap_changes_pitch():
    preview = compute_strand_preview(110.0, StrandSpec(2, 0.0, 0.0), sphere_diameter=4.0, gap=1.0)
    assert preview.sphere_centers_y == pytest.approx([2.0, 7.0])


def test_stack_spheres_touch():
    preview = compute_stack_preview(110.0, StackSpec(3, 10.0, 0.0))
    assert preview.sphere_centers_y == pytest.approx([12.25, 16.75, 21.25])
    assert preview.total_drop_in == pytest.approx(23.5)


def test_custom_strand_walks_nodes_top_down():
    spec = CustomStrandSpec(nodes=[
        CustomStrandNode("chain", length_in=6.0),
        CustomStrandNode("strand", sphere_count=2, color_id="c2"),
        CustomStrandNode("stack", sphere_count=2, color_id="c4"),
        CustomStrandNode("chain", length_in=4.0),
    ])
    preview = compute_custom_strand_preview(110.0, spec)
    chain_top, strand, stack, chain_bottom = preview.segments

    assert (chain_top.y1, chain_top.y2) == (0.0, 6.0)
    assert strand.centers_y == pytest.approx([8.25, 15.25])
    assert strand.color_id == "c2"
    assert stack.centers_y == pytest.approx([19.75, 24.25])
    assert (chain_bottom.y1, chain_bottom.y2) == pytest.approx((26.5, 30.5))
    assert preview.total_drop_in == pytest.approx(30.5)
    assert preview.over_ceiling is False


def test_custom_strand_rejects_unknown_node():
    spec = CustomStrandSpec(nodes=[CustomStrandNode("rope", length_in=3.0)])
    with pytest.raises(ValueError, match="rope"):
        compute_custom_strand_preview(110.0, spec)
