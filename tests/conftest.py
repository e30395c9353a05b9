import copy
import logging

import pytest

from hang_models import (
    Project, ProjectSpecs, Anchor, StrandSpec, StackSpec, SwoopSpec,
    CustomStrandNode, CustomStrandSpec, ClusterStrandSpec, ClusterSpec,
    Strand, Stack, Swoop, CustomStrand, Cluster, MoundPreset,
    ROLE_FASTENER_HOLE, LAYER_BACK,
)
from hang_hardware import reset_clasp_warnings


@pytest.fixture(autouse=True)
def clean_clasp_warnings():
    reset_clasp_warnings()
    yield
    reset_clasp_warnings()


@pytest.fixture
def restore_root_logging():
    """Undo setup_logging() so later tests see pytest's own handlers."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def specs():
    return ProjectSpecs(project_name="Lobby", ceiling_height_in=110.0,
                        boundary_width_in=24.0, boundary_height_in=12.0, grid_spacing_in=4.5)


@pytest.fixture
def sample_project(specs):
    """One of every element type, plus a fastener hole."""
    anchors = [
        Anchor("a1", 3.0, 3.0),
        Anchor("a2", 12.0, 6.0),
        Anchor("a3", 21.0, 9.0),
        Anchor("a4", 6.0, 9.0),
        Anchor("f1", 18.0, 3.0, role=ROLE_FASTENER_HOLE),
    ]
    return Project(
        specs=specs,
        anchors=anchors,
        strands=[Strand("s1", "a1", StrandSpec(3, 10.0, 5.0, MoundPreset.SMALL, "c1"))],
        stacks=[Stack("k1", "a4", StackSpec(2, 6.0, 0.0, color_id="c3", layer=LAYER_BACK))],
        swoops=[Swoop("w1", "a1", "a3", SwoopSpec(4, 10.0, 20.0, 6.0, "c5"))],
        custom_strands=[CustomStrand("cs1", "a2", CustomStrandSpec(nodes=[
            CustomStrandNode("chain", length_in=6.0),
            CustomStrandNode("strand", sphere_count=2, color_id="c2"),
            CustomStrandNode("chain", length_in=4.0),
        ]))],
        clusters=[Cluster("cl1", "a3", ClusterSpec(strands=[
            ClusterStrandSpec(2, 12.0, bottom_sphere_count=1),
            ClusterStrandSpec(1, 0.0),
        ]))],
    )


_STATE = {
    "projectSpecs": {
        "projectName": "Atrium",
        "ceilingHeightIn": 96,
        "boundaryWidthIn": 24,
        "boundaryHeightIn": 12,
        "gridSpacingIn": 4.5,
        "strandHoleDiameterIn": 0.28,
        "fastenerHoleDiameterIn": 0.5,
        "previewDepth": {"layerSpreadIn": 2, "perspectiveFactor": 0.25},
        "previewView": {"rotationDeg": 15, "rotationStrength": 0.5},
        "pricing": {"sphereUnitCost": 100},
        "quote": {"showroomMultiplier": 1.5},
    },
    "anchors": [
        {"id": "a1", "xIn": 5.25, "yIn": 1.5, "type": "strand", "holeType": "strand", "gridCol": 2, "gridRow": 1},
        {"id": "a2", "xIn": 5.3, "yIn": 6.1, "type": "strand"},
        {"id": "a3", "xIn": 18.75, "yIn": 6.0, "type": "strand", "gridCol": 5, "gridRow": 2},
        {"id": "f1", "xIn": 12.0, "yIn": 6.0, "type": "canopy_fastener", "holeType": "fastener"},
    ],
    "strands": [
        {"id": "s1", "anchorId": "a1", "spec": {
            "sphereCount": 3, "topChainLengthIn": 10, "bottomChainLengthIn": 5,
            "moundPreset": "medium", "colorId": "c2", "layer": "mid"}},
    ],
    "stacks": [
        {"id": "k1", "anchorId": "a2", "spec": {
            "sphereCount": 2, "topChainLengthIn": 6, "bottomChainLengthIn": 0,
            "moundPreset": "none", "colorId": "c1", "layer": "back"}},
    ],
    "swoops": [
        {"id": "w1", "aHoleId": "a1", "bHoleId": "a3",
         "spec": {"sphereCount": 3, "chainAIn": 8, "chainBIn": 12, "sagIn": 6, "colorId": "c0"}},
    ],
    "customStrands": [
        {"id": "cs1", "anchorId": "a3", "spec": {"layer": "front", "nodes": [
            {"type": "chain", "lengthIn": 6},
            {"type": "stack", "sphereCount": 2, "colorId": "c4"},
        ]}},
    ],
    "clusters": [
        {"id": "cl1", "anchorId": "a2", "spec": {
            "itemRadiusIn": 2.25, "spreadIn": 10,
            "strands": [
                {"sphereCount": 2, "topChainLengthIn": 8, "bottomSphereCount": 1, "colorId": "c1"},
                {"sphereCount": 1, "topChainLengthIn": 4, "colorId": "c6", "offsetXIn": 3, "offsetYIn": -1},
            ]}},
    ],
}


@pytest.fixture
def project_state():
    """Saved project state in the camelCase file format."""
    return copy.deepcopy(_STATE)
