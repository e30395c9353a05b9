#!/usr/bin/env python3
"""
HANG_VALIDATION.PY - Advisory checks for installation layouts

Contains:
- Advisory: Data class for a layout advisory
- check_advisories: Run all layout checks against a project
- print_advisory_report: Print formatted advisory report

None of these checks block rendering; geometry is always produced and the
operator decides what to fix.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from hang_models import Project, ViewParams, StrandSpec, ROLE_FASTENER_HOLE
from hang_strand import compute_strand_preview, compute_stack_preview, compute_custom_strand_preview
from hang_projection import project_preview
from hang_grid import clamp_to_boundary_shape


@dataclass
class Advisory:
    """A layout problem found during validation."""
    check: str
    message: str
    severity: str = "warning"  # "error" or "warning"
    element_id: Optional[str] = None
    actual_value: Optional[float] = None
    expected_value: Optional[float] = None


def check_advisories(project: Project, view_params: Optional[ViewParams] = None) -> List[Advisory]:
    """
    Check an installation layout:
    1. Every placement references an existing anchor
    2. Nothing hangs below the floor (ceiling height)
    3. Swoops have enough cable for their sphere run
    4. Swoops do not hang from fastener holes
    5. Anchors sit inside the boundary

    view_params overrides the project view so swoop spans match the drawing.

    Returns list of advisories (empty if everything passes).
    """
    advisories = []
    specs = project.specs
    anchors = project.anchor_by_id()
    sphere_d = specs.materials.sphere_diameter_in
    gap = specs.materials.hardware_spacing_in
    ceiling = specs.ceiling_height_in

    # ---------------------------------------------------------------------
    # 1. MISSING ANCHORS
    # ---------------------------------------------------------------------
    placements = [(p.id, p.anchor_id) for p in project.strands]
    placements += [(p.id, p.anchor_id) for p in project.stacks]
    placements += [(p.id, p.anchor_id) for p in project.custom_strands]
    placements += [(p.id, p.anchor_id) for p in project.clusters]
    for sw in project.swoops:
        placements += [(sw.id, sw.a_hole_id), (sw.id, sw.b_hole_id)]

    for element_id, anchor_id in placements:
        if anchor_id not in anchors:
            advisories.append(Advisory(
                check="missing_anchor",
                message=f"{element_id} references unknown anchor {anchor_id!r}; it will not be drawn",
                severity="error",
                element_id=element_id,
            ))

    # ---------------------------------------------------------------------
    # 2. OVER CEILING HEIGHT
    # The ceiling height is also the floor distance in the elevation
    # ---------------------------------------------------------------------
    drops = []
    for s in project.strands:
        drops.append((s.id, compute_strand_preview(ceiling, s.spec, sphere_d, gap)))
    for s in project.stacks:
        drops.append((s.id, compute_stack_preview(ceiling, s.spec, sphere_d)))
    for s in project.custom_strands:
        drops.append((s.id, compute_custom_strand_preview(ceiling, s.spec, sphere_d, gap)))
    for cl in project.clusters:
        for i, st in enumerate(cl.spec.strands):
            spec = StrandSpec(sphere_count=max(0, st.sphere_count) + max(0, st.bottom_sphere_count),
                              top_chain_length_in=st.top_chain_length_in, bottom_chain_length_in=0.0)
            drops.append((f"{cl.id}-{i}", compute_strand_preview(ceiling, spec, sphere_d, gap)))

    for element_id, preview in drops:
        if preview.over_ceiling:
            advisories.append(Advisory(
                check="over_ceiling",
                message=f"{element_id} drops {preview.total_drop_in:.1f}in, past the {ceiling:.1f}in ceiling height",
                element_id=element_id,
                actual_value=preview.total_drop_in,
                expected_value=ceiling,
            ))

    # ---------------------------------------------------------------------
    # 3. SWOOP CABLE LENGTH
    # A chord longer than the requested length pulls the swoop straight
    # ---------------------------------------------------------------------
    center = specs.boundary_center()
    vp = view_params or specs.view
    pitch = sphere_d + gap
    for sw in project.swoops:
        a = anchors.get(sw.a_hole_id)
        b = anchors.get(sw.b_hole_id)
        if a is None or b is None:
            continue

        for anchor in (a, b):
            if anchor.role == ROLE_FASTENER_HOLE:
                advisories.append(Advisory(
                    check="swoop_fastener_hole",
                    message=f"{sw.id} hangs from fastener hole {anchor.id}; use a strand hole",
                    severity="error",
                    element_id=sw.id,
                ))

        x_a = project_preview(center, a, vp.rotation_deg, vp.rotation_strength).x_in
        x_b = project_preview(center, b, vp.rotation_deg, vp.rotation_strength).x_in
        chord = math.hypot(x_b - x_a, max(0.0, sw.spec.chain_b_in) - max(0.0, sw.spec.chain_a_in))
        n = max(0, sw.spec.sphere_count)
        desired = (0.0 if n <= 1 else (n - 1) * pitch) + sphere_d + max(0.0, sw.spec.sag_in)
        if n > 0 and chord > desired:
            advisories.append(Advisory(
                check="swoop_too_short",
                message=f"{sw.id} spans {chord:.1f}in but its spheres and sag only need {desired:.1f}in; "
                        f"the cable will hang straight",
                element_id=sw.id,
                actual_value=chord,
                expected_value=desired,
            ))

    # ---------------------------------------------------------------------
    # 4. ANCHORS OUTSIDE THE BOUNDARY
    # Circle and oval boundaries are inscribed in the width x height box
    # ---------------------------------------------------------------------
    for anchor in project.anchors:
        in_box = 0 <= anchor.x_in <= specs.boundary_width_in and 0 <= anchor.y_in <= specs.boundary_height_in
        clamped = clamp_to_boundary_shape(anchor.x_in, anchor.y_in, specs)
        in_shape = math.hypot(clamped.x - anchor.x_in, clamped.y - anchor.y_in) < 1e-6
        if not (in_box and in_shape):
            advisories.append(Advisory(
                check="anchor_outside_boundary",
                message=f"Anchor {anchor.id} at ({anchor.x_in:.2f}, {anchor.y_in:.2f}) is outside the "
                        f"{specs.boundary_width_in}x{specs.boundary_height_in}in {specs.boundary_shape} boundary",
                element_id=anchor.id,
            ))

    return advisories


def print_advisory_report(advisories: List[Advisory], project: Project):
    """Print a formatted advisory report."""

    print("\n" + "="*60)
    print("LAYOUT ADVISORY REPORT")
    print("="*60)

    specs = project.specs
    print(f"\nProject: {specs.project_name}")
    print(f"  Ceiling height: {specs.ceiling_height_in} in")
    print(f"  Boundary: {specs.boundary_width_in} x {specs.boundary_height_in} in ({specs.boundary_shape})")

    if not advisories:
        print("\n✓ All checks PASSED")
        print("="*60 + "\n")
        return

    by_check = {}
    for a in advisories:
        by_check.setdefault(a.check, []).append(a)

    errors = [a for a in advisories if a.severity == "error"]
    warnings = [a for a in advisories if a.severity == "warning"]

    print(f"\n✗ Found {len(errors)} errors, {len(warnings)} warnings")

    for check, alist in by_check.items():
        print(f"\n--- {check.upper().replace('_', ' ')} ---")
        for a in alist[:5]:  # Limit to first 5 per category
            marker = "✗" if a.severity == "error" else "⚠"
            print(f"  {marker} {a.message}")
        if len(alist) > 5:
            print(f"  ... and {len(alist) - 5} more")

    print("="*60 + "\n")
