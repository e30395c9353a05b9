#!/usr/bin/env python3
"""
HANG_PROJECT.PY - Read saved installation projects

Contains:
- project_from_dict: Build a Project from the camelCase project state
- load_project_from_json: Load a saved project file (bare state or wrapped package)

Read-only: projects are never written back.
"""

import json
import logging
from typing import Any, Dict, List

from hang_models import (
    Project, ProjectSpecs, ViewParams, MaterialsDefaults, PricingDefaults, QuoteSettings,
    PaletteColor, DEFAULT_PALETTE, Anchor, MoundPreset,
    StrandSpec, StackSpec, SwoopSpec, CustomStrandNode, CustomStrandSpec,
    ClusterStrandSpec, ClusterSpec, Strand, Stack, Swoop, CustomStrand, Cluster,
    ROLE_STRAND_HOLE, ROLE_FASTENER_HOLE, DEPTH_LAYERS, LAYER_FRONT,
)
from hang_grid import grid_index_to_world, snap_to_grid_index

logger = logging.getLogger(__name__)


NODE_TYPES = ("chain", "strand", "stack")
BOUNDARY_SHAPES = ("rect", "circle", "oval")


# =============================================================================
# FIELD HELPERS
# =============================================================================

def _layer(value: Any, where: str) -> str:
    layer = value or LAYER_FRONT
    if layer not in DEPTH_LAYERS:
        raise ValueError(f"{where}: unknown layer {layer!r} (expected one of {', '.join(DEPTH_LAYERS)})")
    return layer


def _mound(value: Any, where: str) -> MoundPreset:
    try:
        return MoundPreset(value or MoundPreset.NONE.value)
    except ValueError:
        names = ", ".join(m.value for m in MoundPreset)
        raise ValueError(f"{where}: unknown mound preset {value!r} (expected one of {names})") from None


def _role(a: Dict) -> str:
    if a.get('holeType') == 'fastener' or a.get('type') == 'canopy_fastener':
        return ROLE_FASTENER_HOLE
    return ROLE_STRAND_HOLE


# =============================================================================
# SPECS
# =============================================================================

def _specs_from_dict(d: Dict) -> ProjectSpecs:
    depth = d.get('previewDepth') or {}
    view = d.get('previewView') or {}
    materials = d.get('materials') or {}
    pricing = d.get('pricing') or {}
    quote = d.get('quote') or {}

    shape = d.get('boundaryShape', 'rect')
    if shape not in BOUNDARY_SHAPES:
        raise ValueError(f"projectSpecs: unknown boundary shape {shape!r}")

    defaults = ProjectSpecs()
    m = MaterialsDefaults()
    p = PricingDefaults()
    q = QuoteSettings()
    v = ViewParams()

    return ProjectSpecs(
        project_name=d.get('projectName', defaults.project_name),
        ceiling_height_in=float(d.get('ceilingHeightIn', defaults.ceiling_height_in)),
        boundary_width_in=float(d.get('boundaryWidthIn', defaults.boundary_width_in)),
        boundary_height_in=float(d.get('boundaryHeightIn', defaults.boundary_height_in)),
        boundary_shape=shape,
        grid_spacing_in=float(d.get('gridSpacingIn', defaults.grid_spacing_in)),
        strand_hole_diameter_in=float(d.get('strandHoleDiameterIn', defaults.strand_hole_diameter_in)),
        fastener_hole_diameter_in=float(d.get('fastenerHoleDiameterIn', defaults.fastener_hole_diameter_in)),
        view=ViewParams(
            rotation_deg=float(view.get('rotationDeg', v.rotation_deg)),
            rotation_strength=float(view.get('rotationStrength', v.rotation_strength)),
            perspective_factor=float(depth.get('perspectiveFactor', v.perspective_factor)),
            layer_spread_in=float(depth.get('layerSpreadIn', v.layer_spread_in)),
        ),
        materials=MaterialsDefaults(
            sphere_diameter_in=float(materials.get('sphereDiameterIn', m.sphere_diameter_in)),
            hardware_spacing_in=float(materials.get('hardwareSpacingIn', m.hardware_spacing_in)),
            sphere_weight_lb=float(materials.get('sphereWeightLb', m.sphere_weight_lb)),
            chain_weight_lb_per_foot=float(materials.get('chainWeightLbPerFoot', m.chain_weight_lb_per_foot)),
            eye_screw_weight_lb=float(materials.get('eyeScrewWeightLb', m.eye_screw_weight_lb)),
            clasp_weight_lb=float(materials.get('claspWeightLb', m.clasp_weight_lb)),
            plate_weight_lb=float(materials.get('plateWeightLb', m.plate_weight_lb)),
        ),
        pricing=PricingDefaults(
            sphere_unit_cost=float(pricing.get('sphereUnitCost', p.sphere_unit_cost)),
            clasp_unit_cost=float(pricing.get('claspUnitCost', p.clasp_unit_cost)),
            eye_screw_unit_cost=float(pricing.get('eyeScrewUnitCost', p.eye_screw_unit_cost)),
            fastener_unit_cost=float(pricing.get('fastenerUnitCost', p.fastener_unit_cost)),
            chain_cost_per_foot=float(pricing.get('chainCostPerFoot', p.chain_cost_per_foot)),
            decorative_plate_cost=float(pricing.get('decorativePlateCost', p.decorative_plate_cost)),
            labor_cost=float(pricing.get('laborCost', p.labor_cost)),
        ),
        quote=QuoteSettings(
            showroom_multiplier=float(quote.get('showroomMultiplier', q.showroom_multiplier)),
            designer_multiplier=float(quote.get('designerMultiplier', q.designer_multiplier)),
        ),
    )


# =============================================================================
# ANCHORS AND PLACEMENTS
# =============================================================================

def _anchors_from_list(items: List[Dict], specs: ProjectSpecs) -> List[Anchor]:
    """Anchors with persisted grid indices are placed from the indices.

    Anchors without indices are snapped to the grid and given indices.
    """
    anchors = []
    for a in items:
        anchor = Anchor(
            id=a['id'],
            x_in=float(a.get('xIn', 0.0)),
            y_in=float(a.get('yIn', 0.0)),
            role=_role(a),
            grid_col=a.get('gridCol'),
            grid_row=a.get('gridRow'),
        )
        if specs.grid_spacing_in > 0:
            if anchor.grid_col is None or anchor.grid_row is None:
                anchor.grid_col, anchor.grid_row = snap_to_grid_index(anchor.x_in, anchor.y_in, specs)
            world = grid_index_to_world(int(anchor.grid_col), int(anchor.grid_row), specs)
            anchor.x_in, anchor.y_in = world.x, world.y
        anchors.append(anchor)
    return anchors


def _strand_spec(cls, d: Dict, where: str):
    return cls(
        sphere_count=int(d.get('sphereCount', 0)),
        top_chain_length_in=float(d.get('topChainLengthIn', 0.0)),
        bottom_chain_length_in=float(d.get('bottomChainLengthIn', 0.0)),
        mound_preset=_mound(d.get('moundPreset'), where),
        color_id=d.get('colorId') or "c1",
        layer=_layer(d.get('layer'), where),
    )


def _custom_spec(d: Dict, where: str) -> CustomStrandSpec:
    nodes = []
    for i, n in enumerate(d.get('nodes') or []):
        node_type = n.get('type')
        if node_type not in NODE_TYPES:
            raise ValueError(f"{where} node {i}: unknown node type {node_type!r}")
        nodes.append(CustomStrandNode(
            type=node_type,
            length_in=float(n.get('lengthIn', 0.0)),
            sphere_count=int(n.get('sphereCount', 0)),
            color_id=n.get('colorId') or "c1",
        ))
    return CustomStrandSpec(nodes=nodes, layer=_layer(d.get('layer'), where))


def _cluster_spec(d: Dict, where: str) -> ClusterSpec:
    strands = []
    for st in d.get('strands') or []:
        strands.append(ClusterStrandSpec(
            sphere_count=int(st.get('sphereCount', 0)),
            top_chain_length_in=float(st.get('topChainLengthIn', 0.0)),
            bottom_sphere_count=int(st.get('bottomSphereCount', 0)),
            color_id=st.get('colorId') or "c1",
            offset_x_in=st.get('offsetXIn'),
            offset_y_in=st.get('offsetYIn'),
        ))
    return ClusterSpec(
        strands=strands,
        item_radius_in=float(d.get('itemRadiusIn', 2.25)),
        spread_in=float(d.get('spreadIn', 10.0)),
        layer=_layer(d.get('layer'), where),
    )


def project_from_dict(state: Dict) -> Project:
    """Build a Project from saved project state."""
    if not isinstance(state, dict):
        raise ValueError("Invalid project: root is not an object")
    if not isinstance(state.get('projectSpecs'), dict):
        raise ValueError("Invalid project: missing projectSpecs")

    specs = _specs_from_dict(state['projectSpecs'])

    palette = [PaletteColor(c['id'], c.get('name', c['id']), c['hex']) for c in state.get('palette') or []]

    project = Project(
        specs=specs,
        anchors=_anchors_from_list(state.get('anchors') or [], specs),
        palette=palette or list(DEFAULT_PALETTE),
    )

    for s in state.get('strands') or []:
        project.strands.append(Strand(s['id'], s['anchorId'], _strand_spec(StrandSpec, s.get('spec') or {}, s['id'])))
    for s in state.get('stacks') or []:
        project.stacks.append(Stack(s['id'], s['anchorId'], _strand_spec(StackSpec, s.get('spec') or {}, s['id'])))
    for s in state.get('customStrands') or []:
        project.custom_strands.append(CustomStrand(s['id'], s['anchorId'], _custom_spec(s.get('spec') or {}, s['id'])))
    for c in state.get('clusters') or []:
        project.clusters.append(Cluster(c['id'], c['anchorId'], _cluster_spec(c.get('spec') or {}, c['id'])))
    for sw in state.get('swoops') or []:
        spec = sw.get('spec') or {}
        project.swoops.append(Swoop(
            id=sw['id'],
            a_hole_id=sw['aHoleId'],
            b_hole_id=sw['bHoleId'],
            spec=SwoopSpec(
                sphere_count=int(spec.get('sphereCount', 0)),
                chain_a_in=float(spec.get('chainAIn', 0.0)),
                chain_b_in=float(spec.get('chainBIn', 0.0)),
                sag_in=float(spec.get('sagIn', 0.0)),
                color_id=spec.get('colorId') or "c1",
            ),
        ))

    logger.debug(f"Loaded {len(project.anchors)} anchors, {len(project.strands)} strands, "
                 f"{len(project.stacks)} stacks, {len(project.swoops)} swoops, "
                 f"{len(project.custom_strands)} custom strands, {len(project.clusters)} clusters")
    return project


def load_project_from_json(json_path: str) -> Project:
    """Load a project file; accepts a bare state or a {schemaVersion, state} package."""

    with open(json_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    state = data.get('state', data) if isinstance(data, dict) else data
    project = project_from_dict(state)
    logger.info(f"Loaded project '{project.specs.project_name}' from {json_path}")
    return project
