#!/usr/bin/env python3
"""
HANG_COMPOSITOR.PY - Depth-ordered scene assembly

Contains:
- Drawable: A primitive tagged with its depth key and layer
- DepthCompositor: Painter's-algorithm ordering of drawables
- ChainPrimitive, Mound, OverCeilingMarker: Non-sphere primitives
- Scene / build_scene: Every strand, stack, custom strand, cluster and swoop
  of a project, projected and ordered for drawing

Front view draws the largest depth first. Rear view mirrors x about the
plan center and draws the smallest depth first, breaking ties so that back
layer elements land on top.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from hang_models import (
    Project, ViewParams, Anchor, Point, Sphere, ChainSegment, StrandSpec,
    MoundPreset, LAYER_FRONT, LAYER_MID, LAYER_BACK,
)
from hang_strand import (
    StrandPreview, compute_strand_preview, compute_stack_preview,
    compute_custom_strand_preview,
)
from hang_swoop import compute_swoop_geometry
from hang_cluster import compute_cluster_layout
from hang_hardware import ChainLink, clasp_between, chain_links_along
from hang_projection import Projected, project_preview, compute_y_shift, layer_depth_offset
from hang_bounds import Bounds, compute_preview_fit_bounds

logger = logging.getLogger(__name__)


VIEW_FRONT = "front"
VIEW_REAR = "rear"

# Rear view tie-break: higher priority draws later (on top)
REAR_LAYER_PRIORITY = {LAYER_FRONT: 0, LAYER_MID: 1, LAYER_BACK: 2}


# =============================================================================
# PRIMITIVES
# =============================================================================

@dataclass
class ChainPrimitive:
    segment: ChainSegment
    links: List[ChainLink]
    stroke_in: float = 0.1


@dataclass
class Mound:
    """Cosmetic pile of chain on the floor under a strand."""
    x: float
    y: float
    chain_in: float


@dataclass
class OverCeilingMarker:
    x: float
    y: float


@dataclass
class Drawable:
    depth: float
    primitive: Any
    layer: str = LAYER_MID
    element_id: str = ""
    color: str = "#111111"
    fade: bool = True  # apply layer opacity when drawn


# =============================================================================
# COMPOSITOR
# =============================================================================

class DepthCompositor:
    """Collects depth-tagged primitives and orders them back to front."""

    def __init__(self):
        self.drawables: List[Drawable] = []

    def add(self, depth: float, primitive: Any, layer: str = LAYER_MID,
            element_id: str = "", color: str = "#111111", fade: bool = True) -> Drawable:
        drawable = Drawable(depth=depth, primitive=primitive, layer=layer,
                            element_id=element_id, color=color, fade=fade)
        self.drawables.append(drawable)
        return drawable

    def ordered(self, view: str = VIEW_FRONT) -> List[Drawable]:
        """Drawables in draw order (stable, so insertion order breaks exact ties)."""
        if view == VIEW_REAR:
            return sorted(self.drawables,
                          key=lambda d: (d.depth, REAR_LAYER_PRIORITY.get(d.layer, 1)))
        return sorted(self.drawables, key=lambda d: -d.depth)

    def primitives(self, view: str = VIEW_FRONT) -> List[Any]:
        return [d.primitive for d in self.ordered(view)]

    def __len__(self):
        return len(self.drawables)


# =============================================================================
# SCENE ASSEMBLY
# =============================================================================

@dataclass
class Scene:
    drawables: List[Drawable]
    view: str
    bounds: Bounds
    boundary_width_in: float
    ceiling_height_in: float
    sphere_diameter_in: float


class _SceneBuilder:
    """Projects placements and feeds their geometry to a compositor."""

    def __init__(self, project: Project, view_params: ViewParams, view: str):
        self.project = project
        self.specs = project.specs
        self.view_params = view_params
        self.view = view
        self.center = self.specs.boundary_center()
        self.half_diagonal = self.specs.half_diagonal()
        self.sphere_d = self.specs.materials.sphere_diameter_in
        self.compositor = DepthCompositor()

    def project_anchor(self, anchor: Anchor, layer: Optional[str]) -> Projected:
        vp = self.view_params
        proj = project_preview(self.center, anchor, vp.rotation_deg, vp.rotation_strength)
        x = proj.x_in
        if self.view == VIEW_REAR:
            x = 2 * self.center.x - x
        depth = proj.depth_key
        if layer is not None:
            depth += layer_depth_offset(layer, vp.layer_spread_in)
        return Projected(x_in=x, depth_key=depth)

    def y_shift(self, depth: float) -> float:
        # Depth keys measure distance from the front viewer
        if self.view == VIEW_REAR:
            depth = -depth
        return compute_y_shift(depth, self.view_params.perspective_factor, self.half_diagonal)

    def chain(self, p1: Point, p2: Point, stroke_in: float = 0.1, start_phase: int = 0) -> ChainPrimitive:
        return ChainPrimitive(
            segment=ChainSegment(p1, p2),
            links=chain_links_along([p1, p2], start_phase=start_phase),
            stroke_in=stroke_in,
        )

    def add_vertical_hang(self, element_id: str, x: float, depth: float, layer: str,
                          color_id: str, preview: StrandPreview, gap: float,
                          clasped: bool = True, mound: MoundPreset = MoundPreset.NONE):
        """Top chain, clasps, spheres, bottom chain, mound and advisory marker."""
        add = self.compositor.add
        ys = self.y_shift(depth)
        color = self.project.color_hex(color_id)
        r = self.sphere_d / 2

        if preview.top_chain_y2 > preview.top_chain_y1:
            add(depth, self.chain(Point(x, preview.top_chain_y1 - ys), Point(x, preview.top_chain_y2 - ys)),
                layer, element_id)

        centers = preview.sphere_centers_y
        if clasped:
            for i in range(len(centers) - 1):
                clasp = clasp_between(f"{element_id}-clasp-{i}", Point(x, centers[i] - ys),
                                      Point(x, centers[i + 1] - ys), radius=r, gap=gap)
                add(depth, clasp, layer, element_id)

        for cy in centers:
            add(depth, Sphere(x, cy - ys, self.sphere_d, depth, color_id), layer, element_id, color)

        if preview.bottom_chain_y2 > preview.bottom_chain_y1:
            add(depth, self.chain(Point(x, preview.bottom_chain_y1 - ys), Point(x, preview.bottom_chain_y2 - ys),
                                  start_phase=1), layer, element_id)

        if mound != MoundPreset.NONE:
            add(depth, Mound(x, self.specs.ceiling_height_in, mound.chain_in), layer, element_id)

        if preview.over_ceiling:
            add(depth, OverCeilingMarker(x + 1.0, self.specs.ceiling_height_in - 1.0), layer, element_id)

    def add_strands(self, anchors):
        for strand in self.project.strands:
            anchor = anchors.get(strand.anchor_id)
            if anchor is None:
                continue
            spec = strand.spec
            proj = self.project_anchor(anchor, spec.layer)
            preview = compute_strand_preview(self.specs.ceiling_height_in, spec, self.sphere_d, self.sphere_gap())
            self.add_vertical_hang(strand.id, proj.x_in, proj.depth_key, spec.layer, spec.color_id,
                                   preview, gap=self.sphere_gap(), mound=spec.mound_preset)

    def add_stacks(self, anchors):
        for stack in self.project.stacks:
            anchor = anchors.get(stack.anchor_id)
            if anchor is None:
                continue
            spec = stack.spec
            proj = self.project_anchor(anchor, spec.layer)
            preview = compute_stack_preview(self.specs.ceiling_height_in, spec, self.sphere_d)
            self.add_vertical_hang(stack.id, proj.x_in, proj.depth_key, spec.layer, spec.color_id,
                                   preview, gap=0.0, clasped=False, mound=spec.mound_preset)

    def add_custom_strands(self, anchors):
        add = self.compositor.add
        r = self.sphere_d / 2
        for custom in self.project.custom_strands:
            anchor = anchors.get(custom.anchor_id)
            if anchor is None:
                continue
            layer = custom.spec.layer
            proj = self.project_anchor(anchor, layer)
            x, depth = proj.x_in, proj.depth_key
            ys = self.y_shift(depth)
            preview = compute_custom_strand_preview(self.specs.ceiling_height_in, custom.spec,
                                                    self.sphere_d, self.sphere_gap())
            for n, seg in enumerate(preview.segments):
                if seg.type == "chain":
                    if seg.y2 > seg.y1:
                        add(depth, self.chain(Point(x, seg.y1 - ys), Point(x, seg.y2 - ys)), layer, custom.id)
                    continue
                if seg.type == "strand":
                    for i in range(len(seg.centers_y) - 1):
                        clasp = clasp_between(f"{custom.id}-{n}-clasp-{i}", Point(x, seg.centers_y[i] - ys),
                                              Point(x, seg.centers_y[i + 1] - ys), radius=r,
                                              gap=self.sphere_gap())
                        add(depth, clasp, layer, custom.id)
                color = self.project.color_hex(seg.color_id)
                for cy in seg.centers_y:
                    add(depth, Sphere(x, cy - ys, self.sphere_d, depth, seg.color_id), layer, custom.id, color)
            if preview.over_ceiling:
                add(depth, OverCeilingMarker(x + 1.0, self.specs.ceiling_height_in - 1.0), layer, custom.id)

    def add_clusters(self, anchors):
        for cluster in self.project.clusters:
            anchor = anchors.get(cluster.anchor_id)
            if anchor is None:
                continue
            spec = cluster.spec
            layout = compute_cluster_layout(spec)
            for i, item in enumerate(spec.strands):
                ox = item.offset_x_in if item.offset_x_in is not None else layout[i].x
                oy = item.offset_y_in if item.offset_y_in is not None else layout[i].y
                virtual = Anchor(id=f"{cluster.id}-{i}", x_in=anchor.x_in + ox, y_in=anchor.y_in + oy)
                proj = self.project_anchor(virtual, spec.layer)
                strand_spec = StrandSpec(
                    sphere_count=max(0, item.sphere_count) + max(0, item.bottom_sphere_count),
                    top_chain_length_in=item.top_chain_length_in,
                    bottom_chain_length_in=0.0,
                    color_id=item.color_id,
                    layer=spec.layer,
                )
                preview = compute_strand_preview(self.specs.ceiling_height_in, strand_spec, self.sphere_d,
                                                 self.sphere_gap())
                self.add_vertical_hang(virtual.id, proj.x_in, proj.depth_key, spec.layer, item.color_id,
                                       preview, gap=self.sphere_gap())

    def add_swoops(self, anchors):
        add = self.compositor.add
        for swoop in self.project.swoops:
            a = anchors.get(swoop.a_hole_id)
            b = anchors.get(swoop.b_hole_id)
            if a is None or b is None:
                logger.debug(f"Swoop {swoop.id} skipped: missing anchor")
                continue
            proj_a = self.project_anchor(a, self.project.layer_for_anchor(a.id))
            proj_b = self.project_anchor(b, self.project.layer_for_anchor(b.id))
            geometry = compute_swoop_geometry(proj_a, proj_b, swoop.spec, self.sphere_d, self.sphere_gap(),
                                              y_shift=self.y_shift, key=swoop.id)

            color = self.project.color_hex(swoop.spec.color_id)
            chain_color = "#111111" if color.lower() == "#ffffff" else color
            for sphere in geometry.spheres:
                add(sphere.depth, sphere, LAYER_MID, swoop.id, color, fade=False)
            for clasp, depth in zip(geometry.clasps, geometry.clasp_depths):
                add(depth, clasp, LAYER_MID, swoop.id, chain_color, fade=False)
            for segment, depth in zip(geometry.end_chains, geometry.end_chain_depths):
                add(depth, self.chain(segment.p1, segment.p2, stroke_in=0.12), LAYER_MID, swoop.id, chain_color,
                    fade=False)

    def sphere_gap(self) -> float:
        return self.specs.materials.hardware_spacing_in

    def build(self) -> Scene:
        anchors = self.project.anchor_by_id()
        self.add_strands(anchors)
        self.add_stacks(anchors)
        self.add_custom_strands(anchors)
        self.add_clusters(anchors)
        self.add_swoops(anchors)
        return Scene(
            drawables=self.compositor.ordered(self.view),
            view=self.view,
            bounds=compute_preview_fit_bounds(self.project, self.view_params),
            boundary_width_in=self.specs.boundary_width_in,
            ceiling_height_in=self.specs.ceiling_height_in,
            sphere_diameter_in=self.sphere_d,
        )


def build_scene(project: Project, view_params: Optional[ViewParams] = None,
                view: str = VIEW_FRONT) -> Scene:
    """Compute every element's geometry and return it in draw order."""
    if view not in (VIEW_FRONT, VIEW_REAR):
        raise ValueError(f"Unknown view: {view!r}")
    builder = _SceneBuilder(project, view_params or project.specs.view, view)
    scene = builder.build()
    logger.debug(f"Built {view} scene with {len(scene.drawables)} drawables")
    return scene
