#!/usr/bin/env python3
"""
HANG_LAYOUT3D.PY - Sphere positions in installation space

Origin is the boundary center on the ceiling plane, x/y in plan inches and
z up (spheres have negative z). Used by the STEP/STL exporter and the 3D
layout JSON.
"""

import json
import logging
from dataclasses import dataclass, asdict
from typing import List

from hang_models import Project, StrandSpec
from hang_strand import compute_strand_preview, compute_stack_preview, compute_custom_strand_preview
from hang_swoop import compute_swoop_geometry
from hang_cluster import compute_cluster_layout
from hang_projection import Projected

logger = logging.getLogger(__name__)


INCH_TO_METERS = 0.0254


@dataclass
class SpherePlacement3D:
    element_id: str
    index: int
    x: float
    y: float
    z: float
    diameter: float
    color_id: str = "c1"


def layout_spheres_3d(project: Project) -> List[SpherePlacement3D]:
    """Every hanging sphere of the project, centered on the boundary."""
    specs = project.specs
    anchors = project.anchor_by_id()
    center = specs.boundary_center()
    d = specs.materials.sphere_diameter_in
    gap = specs.materials.hardware_spacing_in
    ceiling = specs.ceiling_height_in
    out = []

    def hang(element_id: str, anchor_x: float, anchor_y: float, drops, color_ids):
        for i, (drop, color_id) in enumerate(zip(drops, color_ids)):
            out.append(SpherePlacement3D(element_id, i, anchor_x - center.x, anchor_y - center.y,
                                         -drop, d, color_id))

    for s in project.strands:
        a = anchors.get(s.anchor_id)
        if a is None:
            continue
        centers = compute_strand_preview(ceiling, s.spec, d, gap).sphere_centers_y
        hang(s.id, a.x_in, a.y_in, centers, [s.spec.color_id] * len(centers))

    for s in project.stacks:
        a = anchors.get(s.anchor_id)
        if a is None:
            continue
        centers = compute_stack_preview(ceiling, s.spec, d).sphere_centers_y
        hang(s.id, a.x_in, a.y_in, centers, [s.spec.color_id] * len(centers))

    for cs in project.custom_strands:
        a = anchors.get(cs.anchor_id)
        if a is None:
            continue
        preview = compute_custom_strand_preview(ceiling, cs.spec, d, gap)
        drops, colors = [], []
        for seg in preview.segments:
            drops.extend(seg.centers_y)
            colors.extend([seg.color_id] * len(seg.centers_y))
        hang(cs.id, a.x_in, a.y_in, drops, colors)

    for cl in project.clusters:
        a = anchors.get(cl.anchor_id)
        if a is None:
            continue
        layout = compute_cluster_layout(cl.spec)
        for i, item in enumerate(cl.spec.strands):
            ox = item.offset_x_in if item.offset_x_in is not None else layout[i].x
            oy = item.offset_y_in if item.offset_y_in is not None else layout[i].y
            spec = StrandSpec(sphere_count=max(0, item.sphere_count) + max(0, item.bottom_sphere_count),
                              top_chain_length_in=item.top_chain_length_in, bottom_chain_length_in=0.0)
            centers = compute_strand_preview(ceiling, spec, d, gap).sphere_centers_y
            hang(f"{cl.id}-{i}", a.x_in + ox, a.y_in + oy, centers, [item.color_id] * len(centers))

    for sw in project.swoops:
        a = anchors.get(sw.a_hole_id)
        b = anchors.get(sw.b_hole_id)
        if a is None or b is None:
            continue
        # Solve in the vertical plane through both anchors, then map back to plan
        dx = b.x_in - a.x_in
        dy = b.y_in - a.y_in
        span = (dx * dx + dy * dy) ** 0.5
        geometry = compute_swoop_geometry(Projected(0.0, 0.0), Projected(span, 0.0), sw.spec, d, gap, key=sw.id)
        for i, sphere in enumerate(geometry.spheres):
            t = sphere.x / span if span > 1e-9 else 0.0
            out.append(SpherePlacement3D(sw.id, i, a.x_in + dx * t - center.x, a.y_in + dy * t - center.y,
                                         -sphere.y, d, sphere.color_id))

    return out


def build_layout_json(project: Project) -> dict:
    """Canopy, holes and sphere positions as a plain dict."""
    specs = project.specs
    center = specs.boundary_center()
    return {
        "unit": "in",
        "unitScaleToMeters": INCH_TO_METERS,
        "canopy": {
            "boundaryWidthIn": specs.boundary_width_in,
            "boundaryHeightIn": specs.boundary_height_in,
            "ceilingHeightIn": specs.ceiling_height_in,
            "gridSpacingIn": specs.grid_spacing_in,
            "origin": {"xIn": 0.0, "yIn": 0.0, "zIn": 0.0},
        },
        "holes": [
            {
                "id": a.id,
                "xIn": round(a.x_in - center.x, 6),
                "yIn": round(a.y_in - center.y, 6),
                "role": a.role,
            }
            for a in project.anchors
        ],
        "spheres": [asdict(p) for p in layout_spheres_3d(project)],
    }


def export_layout_json(project: Project, output_path: str):
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(build_layout_json(project), f, indent=2)
    logger.info(f"3D layout saved to {output_path}")
