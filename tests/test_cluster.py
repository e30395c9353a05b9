import math

from hang_models import ClusterSpec, ClusterStrandSpec
from hang_cluster import compute_cluster_layout


def _spec(n, radius=2.25, spread=10.0):
    return ClusterSpec(strands=[ClusterStrandSpec(1, 6.0) for _ in range(n)],
                       item_radius_in=radius, spread_in=spread)


def test_one_offset_per_strand():
    assert len(compute_cluster_layout(_spec(4))) == 4
    assert len(compute_cluster_layout(_spec(4), count=2)) == 2
    assert compute_cluster_layout(_spec(0)) == []


def test_offsets_stay_inside_spread():
    for p in compute_cluster_layout(_spec(7)):
        assert math.hypot(p.x, p.y) <= 10.0 + 1e-9


def test_strands_do_not_overlap():
    offsets = compute_cluster_layout(_spec(3))
    for i, a in enumerate(offsets):
        for b in offsets[i + 1:]:
            assert math.hypot(b.x - a.x, b.y - a.y) >= 2 * 2.25 * 0.85


def test_layout_is_deterministic():
    assert compute_cluster_layout(_spec(5)) == compute_cluster_layout(_spec(5))
