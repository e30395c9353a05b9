import json

import pytest

from hang_models import MoundPreset, ROLE_FASTENER_HOLE, ROLE_STRAND_HOLE, LAYER_MID, LAYER_BACK, LAYER_FRONT
from hang_project import project_from_dict, load_project_from_json


def _write(tmp_path, data):
    path = tmp_path / "project.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_specs_and_settings(project_state):
    specs = project_from_dict(project_state).specs
    assert specs.project_name == "Atrium"
    assert specs.ceiling_height_in == 96.0
    assert specs.view.rotation_deg == 15.0
    assert specs.view.rotation_strength == 0.5
    assert specs.view.layer_spread_in == 2.0
    assert specs.view.perspective_factor == 0.25
    assert specs.pricing.sphere_unit_cost == 100.0
    assert specs.pricing.clasp_unit_cost == 0.5
    assert specs.quote.showroom_multiplier == 1.5
    assert specs.quote.designer_multiplier == 1.2


def test_anchors_follow_grid_indices(project_state):
    anchors = project_from_dict(project_state).anchor_by_id()
    assert (anchors["a1"].x_in, anchors["a1"].y_in) == pytest.approx((5.25, 1.5))
    assert (anchors["a3"].x_in, anchors["a3"].y_in) == pytest.approx((18.75, 6.0))

    # No stored indices: snapped to the nearest grid point
    a2 = anchors["a2"]
    assert (a2.grid_col, a2.grid_row) == (2, 2)
    assert (a2.x_in, a2.y_in) == pytest.approx((5.25, 6.0))

    assert anchors["f1"].role == ROLE_FASTENER_HOLE
    assert anchors["a1"].role == ROLE_STRAND_HOLE


def test_placements(project_state):
    project = project_from_dict(project_state)
    strand = project.strands[0]
    assert strand.anchor_id == "a1"
    assert strand.spec.mound_preset == MoundPreset.MEDIUM
    assert strand.spec.layer == LAYER_MID
    assert project.stacks[0].spec.layer == LAYER_BACK

    swoop = project.swoops[0]
    assert (swoop.a_hole_id, swoop.b_hole_id) == ("a1", "a3")
    assert swoop.spec.chain_b_in == 12.0

    custom = project.custom_strands[0]
    assert [n.type for n in custom.spec.nodes] == ["chain", "stack"]
    assert custom.spec.layer == LAYER_FRONT

    items = project.clusters[0].spec.strands
    assert items[0].offset_x_in is None
    assert (items[1].offset_x_in, items[1].offset_y_in) == (3, -1)
    assert items[0].bottom_sphere_count == 1


def test_load_wrapped_and_bare(tmp_path, project_state):
    wrapped = load_project_from_json(_write(tmp_path, {"schemaVersion": 1, "state": project_state}))
    bare = load_project_from_json(_write(tmp_path, project_state))
    assert wrapped == bare
    assert len(bare.anchors) == 4


@pytest.mark.parametrize("mutate", [
    lambda s: s["strands"][0]["spec"].update(moundPreset="6"),
    lambda s: s["stacks"][0]["spec"].update(layer="side"),
    lambda s: s["customStrands"][0]["spec"]["nodes"].append({"type": "rope"}),
    lambda s: s["projectSpecs"].update(boundaryShape="hexagon"),
    lambda s: s.pop("projectSpecs"),
])
def test_invalid_state_is_rejected(project_state, mutate):
    mutate(project_state)
    with pytest.raises(ValueError):
        project_from_dict(project_state)


def test_non_object_root_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        load_project_from_json(_write(tmp_path, [1, 2, 3]))
