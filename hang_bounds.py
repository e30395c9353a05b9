#!/usr/bin/env python3
"""
HANG_BOUNDS.PY - Fit bounds of the front-elevation preview

The preview spans the boundary width horizontally and, vertically, from just
above the ceiling to below the deepest element (or the floor, whichever is
lower). Swoop depths are estimated with a short rope relaxation rather than an
exact catenary solve, since only the envelope is needed.
"""

import math
from dataclasses import dataclass
from typing import Optional

from hang_models import Project, ViewParams, Point, StrandSpec
from hang_strand import compute_strand_preview, compute_stack_preview, compute_custom_strand_preview
from hang_relax import relax_rope
from hang_projection import project_preview


PAD_X_EXTRA_IN = 2.0
PAD_TOP_IN = 2.0
PAD_BOTTOM_IN = 12.0
BOUNDS_RELAX_ITERATIONS = 60


@dataclass
class Bounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def compute_preview_fit_bounds(project: Project, view_params: Optional[ViewParams] = None) -> Bounds:
    specs = project.specs
    vp = view_params or specs.view
    sphere_d = specs.materials.sphere_diameter_in
    gap = specs.materials.hardware_spacing_in
    r = sphere_d / 2
    pitch = sphere_d + gap
    ceiling = specs.ceiling_height_in

    max_drop = ceiling
    for strand in project.strands:
        max_drop = max(max_drop, compute_strand_preview(ceiling, strand.spec, sphere_d, gap).total_drop_in)
    for stack in project.stacks:
        max_drop = max(max_drop, compute_stack_preview(ceiling, stack.spec, sphere_d).total_drop_in)
    for custom in project.custom_strands:
        max_drop = max(max_drop, compute_custom_strand_preview(ceiling, custom.spec, sphere_d, gap).total_drop_in)
    for cluster in project.clusters:
        for item in cluster.spec.strands:
            total = max(0, item.sphere_count) + max(0, item.bottom_sphere_count)
            if total == 0:
                continue
            spec = StrandSpec(sphere_count=total, top_chain_length_in=max(0.0, item.top_chain_length_in),
                              bottom_chain_length_in=0.0)
            max_drop = max(max_drop, compute_strand_preview(ceiling, spec, sphere_d, gap).total_drop_in)

    anchors = project.anchor_by_id()
    center = specs.boundary_center()
    for swoop in project.swoops:
        spec = swoop.spec
        a = anchors.get(swoop.a_hole_id)
        b = anchors.get(swoop.b_hole_id)
        if a is None or b is None:
            max_drop = max(max_drop, (spec.chain_a_in + spec.chain_b_in) / 2 + spec.sag_in)
            continue

        x_a = project_preview(center, a, vp.rotation_deg, vp.rotation_strength).x_in
        x_b = project_preview(center, b, vp.rotation_deg, vp.rotation_strength).x_in
        y_a = max(0.0, spec.chain_a_in or 0.0)
        y_b = max(0.0, spec.chain_b_in or 0.0)

        count = max(0, int(spec.sphere_count or 0))
        base_len = 0.0 if count <= 1 else (count - 1) * pitch
        desired_len = base_len + 2 * r + max(0.0, spec.sag_in or 0.0)
        total_len = max(math.hypot(x_b - x_a, y_b - y_a), desired_len)
        point_count = max(1, math.ceil(total_len / pitch)) + 1

        hanging = relax_rope(Point(x_a, y_a), Point(x_b, y_b), total_len, point_count,
                             iterations=BOUNDS_RELAX_ITERATIONS)
        deepest = hanging.deepest_y()
        if math.isfinite(deepest):
            max_drop = max(max_drop, deepest + r)
        else:
            max_drop = max(max_drop, (spec.chain_a_in + spec.chain_b_in) / 2 + spec.sag_in)

    pad_x = r + PAD_X_EXTRA_IN
    return Bounds(
        min_x=-pad_x,
        max_x=specs.boundary_width_in + pad_x,
        min_y=-PAD_TOP_IN,
        max_y=max_drop + PAD_BOTTOM_IN,
    )
