import pytest

from hang_bom import calc_resources, calc_costs, print_bom
from hang_models import Project


def test_sample_resources(sample_project):
    res = calc_resources(sample_project)
    assert res.spheres == 15
    assert res.clasps == 15
    assert res.strand_hole_count == 4
    assert res.eye_screws == 4
    assert res.fastener_hole_count == 1
    assert res.decorative_plates == 1
    assert res.chain_feet == pytest.approx(79 / 12)
    assert res.total_weight_lb == pytest.approx(0.621667, abs=1e-6)
    assert (res.strands, res.stacks, res.swoops, res.custom_strands, res.clusters) == (1, 1, 1, 1, 1)
    assert res.strands_by_sphere_count[3] == 1
    assert res.stacks_by_sphere_count[2] == 1


def test_sample_costs(sample_project):
    costs = calc_costs(sample_project)
    assert costs.line_totals == pytest.approx({
        "spheres": 1890.0,
        "clasps": 7.5,
        "eye_screws": 1.0,
        "fasteners": 1.25,
        "chain": 9.875,
        "decorative_plates": 2.5,
    })
    assert costs.materials_subtotal == pytest.approx(1912.125)
    assert costs.artist_net == pytest.approx(1927.125)
    assert costs.showroom_net == pytest.approx(2697.975)
    assert costs.designer_net == pytest.approx(3237.57)
    assert costs.total == costs.designer_net


def test_negative_counts_are_ignored(sample_project):
    sample_project.strands[0].spec.sphere_count = -3
    sample_project.strands[0].spec.bottom_chain_length_in = -5.0
    res = calc_resources(sample_project)
    assert res.spheres == 12
    assert res.clasps == 11


def test_empty_project_costs_only_labor(specs):
    costs = calc_costs(Project(specs=specs))
    assert costs.materials_subtotal == 0.0
    assert costs.artist_net == pytest.approx(15.0)


def test_print_bom(sample_project, capsys):
    res = calc_resources(sample_project)
    print_bom(sample_project, res, calc_costs(sample_project, res))
    out = capsys.readouterr().out
    assert "BILL OF MATERIALS - LOBBY" in out
    assert "3 spheres: 1" in out
    assert "$3,237.57" in out
