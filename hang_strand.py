#!/usr/bin/env python3
"""
HANG_STRAND.PY - Vertical hang geometry

Contains:
- StrandPreview: Sphere centers and chain spans of a single vertical hang
- compute_strand_preview: Chain - spheres - chain layout for a strand
- compute_stack_preview: Same layout with touching spheres
- compute_custom_strand_preview: Stacked chain/strand/stack sections

All distances are inches measured downward from the ceiling (y = 0).
"""

from dataclasses import dataclass, field
from typing import List

from hang_models import (
    StrandSpec, StackSpec, CustomStrandSpec,
    SPHERE_DIAMETER_IN, SPHERE_GAP_IN,
)


@dataclass
class StrandPreview:
    sphere_centers_y: List[float]
    top_chain_y1: float
    top_chain_y2: float
    bottom_chain_y1: float
    bottom_chain_y2: float
    last_sphere_bottom_y: float
    sphere_section_height: float
    total_drop_in: float
    over_ceiling: bool  # advisory only


@dataclass
class CustomSegment:
    type: str                       # "chain", "strand" or "stack"
    y1: float = 0.0                 # chain span (chain segments)
    y2: float = 0.0
    centers_y: List[float] = field(default_factory=list)
    color_id: str = "c1"


@dataclass
class CustomStrandPreview:
    segments: List[CustomSegment]
    total_drop_in: float
    over_ceiling: bool


def compute_strand_preview(ceiling_height_in: float, spec: StrandSpec,
                           sphere_diameter: float = SPHERE_DIAMETER_IN,
                           gap: float = SPHERE_GAP_IN) -> StrandPreview:
    """Lay out a strand: sphere i sits at top_chain + r + i*pitch.

    With no spheres the top chain spans the full declared top-chain length and
    the bottom chain starts where it ends.
    """
    r = sphere_diameter / 2
    pitch = sphere_diameter + gap
    count = spec.sphere_count

    centers = [spec.top_chain_length_in + r + i * pitch for i in range(count)]

    if centers:
        first_sphere_top = centers[0] - r
        last_sphere_bottom = centers[-1] + r
    else:
        first_sphere_top = spec.top_chain_length_in
        last_sphere_bottom = spec.top_chain_length_in

    section_height = 0.0 if count == 0 else sphere_diameter + (count - 1) * pitch

    bottom_end = last_sphere_bottom + spec.bottom_chain_length_in
    return StrandPreview(
        sphere_centers_y=centers,
        top_chain_y1=0.0,
        top_chain_y2=first_sphere_top,
        bottom_chain_y1=last_sphere_bottom,
        bottom_chain_y2=bottom_end,
        last_sphere_bottom_y=last_sphere_bottom,
        sphere_section_height=section_height,
        total_drop_in=bottom_end,
        over_ceiling=bottom_end > ceiling_height_in,
    )


def compute_stack_preview(ceiling_height_in: float, spec: StackSpec,
                          sphere_diameter: float = SPHERE_DIAMETER_IN) -> StrandPreview:
    """Stacks have no clasp spacing: pitch equals the diameter."""
    return compute_strand_preview(ceiling_height_in, spec, sphere_diameter, gap=0.0)


def compute_custom_strand_preview(ceiling_height_in: float, spec: CustomStrandSpec,
                                  sphere_diameter: float = SPHERE_DIAMETER_IN,
                                  gap: float = SPHERE_GAP_IN) -> CustomStrandPreview:
    """Walk the nodes top-down, each section starting where the last one ended."""
    r = sphere_diameter / 2
    y = 0.0
    segments = []

    for node in spec.nodes:
        if node.type == "chain":
            length = max(0.0, node.length_in or 0.0)
            segments.append(CustomSegment(type="chain", y1=y, y2=y + length))
            y += length
        elif node.type in ("strand", "stack"):
            count = max(0, int(node.sphere_count or 0))
            pitch = sphere_diameter + gap if node.type == "strand" else sphere_diameter
            centers = [y + r + i * pitch for i in range(count)]
            if centers:
                y = centers[-1] + r
            segments.append(CustomSegment(type=node.type, centers_y=centers, color_id=node.color_id))
        else:
            raise ValueError(f"Unknown custom strand node type: {node.type!r}")

    return CustomStrandPreview(
        segments=segments,
        total_drop_in=y,
        over_ceiling=y > ceiling_height_in,
    )
