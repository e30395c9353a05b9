#!/usr/bin/env python3
"""
HANG_MODELS.PY - Data classes for hanging-sphere installations

Contains all the data structures representing an installation:
- Anchor, StrandSpec, StackSpec, SwoopSpec, CustomStrandSpec, ClusterSpec
- Strand, Stack, Swoop, CustomStrand, Cluster placements
- ViewParams, ProjectSpecs, Project
- Derived geometry: Point, Sphere, ChainSegment, ClaspConnector
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional


# =============================================================================
# SPHERE GEOMETRY CONSTANTS (inches)
# =============================================================================

SPHERE_DIAMETER_IN = 4.5
SPHERE_RADIUS_IN = SPHERE_DIAMETER_IN / 2
SPHERE_GAP_IN = 2.5          # Gap between sphere surfaces on a clasped strand


# =============================================================================
# ENUMERATIONS
# =============================================================================

ROLE_STRAND_HOLE = "strand-hole"
ROLE_FASTENER_HOLE = "fastener-hole"

LAYER_FRONT = "front"
LAYER_MID = "mid"
LAYER_BACK = "back"
DEPTH_LAYERS = (LAYER_FRONT, LAYER_MID, LAYER_BACK)


class MoundPreset(str, Enum):
    """Cosmetic pile of slack chain at the floor end of a strand."""
    NONE = "none"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @property
    def chain_in(self) -> float:
        """Chain inches consumed by the mound."""
        return MOUND_CHAIN_IN[self]


MOUND_CHAIN_IN = {
    MoundPreset.NONE: 0.0,
    MoundPreset.SMALL: 6.0,
    MoundPreset.MEDIUM: 12.0,
    MoundPreset.LARGE: 24.0,
}


# =============================================================================
# PLAN CLASSES
# =============================================================================

@dataclass
class Anchor:
    """A hole on the ceiling plan where a hanging element attaches."""
    id: str
    x_in: float
    y_in: float
    role: str = ROLE_STRAND_HOLE  # "strand-hole" or "fastener-hole"
    grid_col: Optional[int] = None  # 1-based, persisted for deterministic re-gridding
    grid_row: Optional[int] = None


@dataclass
class StrandSpec:
    """A vertical hang: top chain, clasped spheres, bottom chain."""
    sphere_count: int
    top_chain_length_in: float
    bottom_chain_length_in: float
    mound_preset: MoundPreset = MoundPreset.NONE
    color_id: str = "c1"
    layer: str = LAYER_FRONT


@dataclass
class StackSpec(StrandSpec):
    """Same as a strand, but the spheres touch (no clasp gap)."""


@dataclass
class SwoopSpec:
    """A sagging cable of spheres strung between two anchors."""
    sphere_count: int
    chain_a_in: float   # vertical drop at anchor A before the cable begins
    chain_b_in: float
    sag_in: float       # extra slack length
    color_id: str = "c1"


@dataclass
class CustomStrandNode:
    """One section of a custom strand, read top to bottom."""
    type: str  # "chain", "strand" or "stack"
    length_in: float = 0.0
    sphere_count: int = 0
    color_id: str = "c1"


@dataclass
class CustomStrandSpec:
    nodes: List[CustomStrandNode] = field(default_factory=list)
    layer: str = LAYER_FRONT


@dataclass
class ClusterStrandSpec:
    """A strand inside a cluster, offset from the cluster anchor on the plan."""
    sphere_count: int
    top_chain_length_in: float
    bottom_sphere_count: int = 0
    color_id: str = "c1"
    offset_x_in: Optional[float] = None  # None = use the computed cluster layout
    offset_y_in: Optional[float] = None


@dataclass
class ClusterSpec:
    strands: List[ClusterStrandSpec] = field(default_factory=list)
    item_radius_in: float = 2.25
    spread_in: float = 10.0
    layer: str = LAYER_FRONT


@dataclass
class Strand:
    id: str
    anchor_id: str
    spec: StrandSpec


@dataclass
class Stack:
    id: str
    anchor_id: str
    spec: StackSpec


@dataclass
class CustomStrand:
    id: str
    anchor_id: str
    spec: CustomStrandSpec


@dataclass
class Cluster:
    id: str
    anchor_id: str
    spec: ClusterSpec


@dataclass
class Swoop:
    """A swoop is order-insensitive except for which end is A (left/right sign)."""
    id: str
    a_hole_id: str
    b_hole_id: str
    spec: SwoopSpec


# =============================================================================
# VIEW AND PROJECT SETTINGS
# =============================================================================

@dataclass
class ViewParams:
    rotation_deg: float = 0.0          # plan rotation, 0-360
    rotation_strength: float = 1.0     # 0 = unrotated x, 1 = fully rotated x
    perspective_factor: float = 0.0    # -1..1, negative = view from below
    layer_spread_in: float = 1.0       # extra depth offset per depth layer


@dataclass
class MaterialsDefaults:
    sphere_diameter_in: float = SPHERE_DIAMETER_IN
    hardware_spacing_in: float = SPHERE_GAP_IN
    sphere_weight_lb: float = 0.02
    chain_weight_lb_per_foot: float = 0.02
    eye_screw_weight_lb: float = 0.005
    clasp_weight_lb: float = 0.01
    plate_weight_lb: float = 0.02


@dataclass
class PricingDefaults:
    sphere_unit_cost: float = 126.0
    clasp_unit_cost: float = 0.5
    eye_screw_unit_cost: float = 0.25
    fastener_unit_cost: float = 1.25
    chain_cost_per_foot: float = 1.5
    decorative_plate_cost: float = 2.5
    labor_cost: float = 15.0


@dataclass
class QuoteSettings:
    showroom_multiplier: float = 1.4
    designer_multiplier: float = 1.2


@dataclass
class PaletteColor:
    id: str
    name: str
    hex: str


DEFAULT_PALETTE = [
    PaletteColor("c0", "White", "#ffffff"),
    PaletteColor("c0a", "Ultra Light", "#f5f5f5"),
    PaletteColor("c6", "Very Light", "#bbbbbb"),
    PaletteColor("c5", "Light Gray", "#999999"),
    PaletteColor("c4", "Mid Gray", "#777777"),
    PaletteColor("c3", "Gray", "#555555"),
    PaletteColor("c2", "Dark Gray", "#333333"),
    PaletteColor("c1", "Black", "#111111"),
    PaletteColor("c7", "Warm Gray", "#7a6f66"),
    PaletteColor("c8", "Neutral Brown", "#6f5e4a"),
]


@dataclass
class ProjectSpecs:
    project_name: str = "New Project"
    ceiling_height_in: float = 110.0
    boundary_width_in: float = 24.0
    boundary_height_in: float = 12.0
    boundary_shape: str = "rect"  # "rect", "circle" or "oval"
    grid_spacing_in: float = 4.5
    strand_hole_diameter_in: float = 0.28
    fastener_hole_diameter_in: float = 0.5
    view: ViewParams = field(default_factory=ViewParams)
    materials: MaterialsDefaults = field(default_factory=MaterialsDefaults)
    pricing: PricingDefaults = field(default_factory=PricingDefaults)
    quote: QuoteSettings = field(default_factory=QuoteSettings)

    def boundary_center(self) -> 'Point':
        return Point(self.boundary_width_in / 2, self.boundary_height_in / 2)

    def half_diagonal(self) -> float:
        """Distance from the plan center to a corner, used to normalize depth."""
        return math.hypot(self.boundary_width_in / 2, self.boundary_height_in / 2) or 1.0


@dataclass
class Project:
    """The complete installation: plan, placements and settings."""
    specs: ProjectSpecs
    anchors: List[Anchor] = field(default_factory=list)
    strands: List[Strand] = field(default_factory=list)
    stacks: List[Stack] = field(default_factory=list)
    swoops: List[Swoop] = field(default_factory=list)
    custom_strands: List[CustomStrand] = field(default_factory=list)
    clusters: List[Cluster] = field(default_factory=list)
    palette: List[PaletteColor] = field(default_factory=lambda: list(DEFAULT_PALETTE))

    def anchor_by_id(self) -> Dict[str, Anchor]:
        return {a.id: a for a in self.anchors}

    def color_hex(self, color_id: str) -> str:
        for c in self.palette:
            if c.id == color_id:
                return c.hex
        return "#111111"

    def layer_for_anchor(self, anchor_id: str) -> str:
        """Depth layer of whatever hangs from an anchor (mid if nothing does)."""
        for s in self.strands:
            if s.anchor_id == anchor_id:
                return s.spec.layer
        for s in self.stacks:
            if s.anchor_id == anchor_id:
                return s.spec.layer
        return LAYER_MID


# =============================================================================
# DERIVED GEOMETRY (recomputed on every change, never persisted)
# =============================================================================

@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass
class Sphere:
    x: float
    y: float
    diameter: float
    depth: float = 0.0
    color_id: str = "c1"

    def radius(self) -> float:
        return self.diameter / 2


@dataclass
class ChainSegment:
    p1: Point
    p2: Point


@dataclass
class ClaspConnector:
    """Eye ring on each sphere surface plus one link between them."""
    eye_top: Point
    eye_bottom: Point
    link_center: Point
    angle_deg: float          # link rotation, aligned with the connecting direction
    eye_diameter: float = 0.75
    link_width: float = 0.55
    link_height: float = 1.0
