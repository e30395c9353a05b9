#!/usr/bin/env python3
"""
HANG_BOM.PY - Bill of materials and cost roll-up for an installation

Contains:
- calc_resources: Count spheres, clasps, chain, holes and weight
- calc_costs: Price the resources and apply the showroom/designer markups
- print_bom: Print formatted BOM to console
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Optional

from hang_models import Project, MoundPreset, ROLE_STRAND_HOLE, ROLE_FASTENER_HOLE


@dataclass
class ResourcesSummary:
    spheres: int = 0
    clasps: int = 0
    strand_hole_count: int = 0
    fastener_hole_count: int = 0
    eye_screws: int = 0
    decorative_plates: int = 0
    chain_feet: float = 0.0
    total_weight_lb: float = 0.0
    strands: int = 0
    stacks: int = 0
    swoops: int = 0
    custom_strands: int = 0
    clusters: int = 0
    strands_by_sphere_count: Counter = field(default_factory=Counter)
    stacks_by_sphere_count: Counter = field(default_factory=Counter)


@dataclass
class CostsSummary:
    line_totals: Dict[str, float] = field(default_factory=dict)
    materials_subtotal: float = 0.0
    labor_subtotal: float = 0.0
    artist_net: float = 0.0
    showroom_net: float = 0.0
    designer_net: float = 0.0
    total: float = 0.0


def _count(value) -> int:
    return max(0, int(value or 0))


def _length(value) -> float:
    return max(0.0, float(value or 0.0))


def calc_resources(project: Project) -> ResourcesSummary:
    """Count everything needed to build the installation."""
    res = ResourcesSummary()

    # Spheres
    for s in project.strands:
        res.spheres += _count(s.spec.sphere_count)
        res.strands_by_sphere_count[_count(s.spec.sphere_count)] += 1
    for s in project.stacks:
        res.spheres += _count(s.spec.sphere_count)
        res.stacks_by_sphere_count[_count(s.spec.sphere_count)] += 1
    for cs in project.custom_strands:
        res.spheres += sum(_count(n.sphere_count) for n in cs.spec.nodes if n.type != "chain")
    for cl in project.clusters:
        res.spheres += sum(_count(st.sphere_count) + _count(st.bottom_sphere_count) for st in cl.spec.strands)
    for sw in project.swoops:
        res.spheres += _count(sw.spec.sphere_count)

    res.strands = len(project.strands)
    res.stacks = len(project.stacks)
    res.swoops = len(project.swoops)
    res.custom_strands = len(project.custom_strands)
    res.clusters = len(project.clusters)

    # Clasps: one per sphere gap plus one at each chain junction
    clasps = 0
    for s in project.strands:
        clasps += _count(s.spec.sphere_count) + (1 if _length(s.spec.bottom_chain_length_in) > 0 else 0)
    for cs in project.custom_strands:
        nodes = cs.spec.nodes
        for i, node in enumerate(nodes):
            if node.type == "chain":
                continue
            if node.type == "strand":
                clasps += max(0, _count(node.sphere_count) - 1)
            if i > 0 and nodes[i - 1].type == "chain":
                clasps += 1
            if i + 1 < len(nodes) and nodes[i + 1].type == "chain":
                clasps += 1
    for cl in project.clusters:
        for st in cl.spec.strands:
            total = _count(st.sphere_count) + _count(st.bottom_sphere_count)
            if total > 0:
                clasps += total - 1
                if _length(st.top_chain_length_in) > 0:
                    clasps += 1
    for sw in project.swoops:
        clasps += _count(sw.spec.sphere_count) + 1
    res.clasps = clasps

    # Holes
    res.strand_hole_count = sum(1 for a in project.anchors if a.role == ROLE_STRAND_HOLE)
    res.fastener_hole_count = sum(1 for a in project.anchors if a.role == ROLE_FASTENER_HOLE)
    res.eye_screws = res.strand_hole_count

    # Chain
    chain_in = 0.0
    for s in list(project.strands) + list(project.stacks):
        chain_in += _length(s.spec.top_chain_length_in) + _length(s.spec.bottom_chain_length_in)
        mound = MoundPreset(s.spec.mound_preset)
        chain_in += mound.chain_in
        if mound != MoundPreset.NONE:
            res.decorative_plates += 1
    for cs in project.custom_strands:
        chain_in += sum(_length(n.length_in) for n in cs.spec.nodes if n.type == "chain")
    for cl in project.clusters:
        chain_in += sum(_length(st.top_chain_length_in) for st in cl.spec.strands)
    for sw in project.swoops:
        chain_in += _length(sw.spec.chain_a_in) + _length(sw.spec.chain_b_in)
    res.chain_feet = chain_in / 12

    # Weight
    m = project.specs.materials
    res.total_weight_lb = (
        m.sphere_weight_lb * res.spheres
        + m.chain_weight_lb_per_foot * res.chain_feet
        + m.clasp_weight_lb * res.clasps
        + m.eye_screw_weight_lb * res.eye_screws
        + m.plate_weight_lb * res.decorative_plates
    )
    return res


def calc_costs(project: Project, resources: Optional[ResourcesSummary] = None) -> CostsSummary:
    """Price the resources and roll up the quote chain."""
    if resources is None:
        resources = calc_resources(project)
    pricing = project.specs.pricing
    quote = project.specs.quote

    line_totals = {
        "spheres": resources.spheres * pricing.sphere_unit_cost,
        "clasps": resources.clasps * pricing.clasp_unit_cost,
        "eye_screws": resources.strand_hole_count * pricing.eye_screw_unit_cost,
        "fasteners": resources.fastener_hole_count * pricing.fastener_unit_cost,
        "chain": resources.chain_feet * pricing.chain_cost_per_foot,
        "decorative_plates": resources.decorative_plates * pricing.decorative_plate_cost,
    }

    costs = CostsSummary(line_totals=line_totals)
    costs.materials_subtotal = sum(line_totals.values())
    costs.labor_subtotal = pricing.labor_cost
    costs.artist_net = costs.materials_subtotal + costs.labor_subtotal
    costs.showroom_net = costs.artist_net * quote.showroom_multiplier
    costs.designer_net = costs.showroom_net * quote.designer_multiplier
    costs.total = costs.designer_net
    return costs


def print_bom(project: Project, resources: ResourcesSummary, costs: CostsSummary):
    """Print formatted BOM to console."""

    print("\n" + "="*60)
    print(f"BILL OF MATERIALS - {project.specs.project_name.upper()}")
    print("="*60)

    print("\n--- ELEMENTS ---")
    print(f"  Strands: {resources.strands}")
    for count, n in sorted(resources.strands_by_sphere_count.items()):
        print(f"    {count} spheres: {n}")
    print(f"  Stacks: {resources.stacks}")
    for count, n in sorted(resources.stacks_by_sphere_count.items()):
        print(f"    {count} spheres: {n}")
    print(f"  Swoops: {resources.swoops}")
    print(f"  Custom strands: {resources.custom_strands}")
    print(f"  Clusters: {resources.clusters}")

    print("\n--- HARDWARE ---")
    print(f"  {'Spheres':<20} {resources.spheres:>8}")
    print(f"  {'Clasps':<20} {resources.clasps:>8}")
    print(f"  {'Eye screws':<20} {resources.eye_screws:>8}")
    print(f"  {'Fastener holes':<20} {resources.fastener_hole_count:>8}")
    print(f"  {'Decorative plates':<20} {resources.decorative_plates:>8}")
    print(f"  {'Chain':<20} {resources.chain_feet:>7.1f}ft")
    print(f"  {'Hanging weight':<20} {resources.total_weight_lb:>7.2f}lb")

    print("\n--- COSTS ---")
    for key, value in costs.line_totals.items():
        print(f"  {key.replace('_', ' ').title():<20} ${value:>10,.2f}")
    print("-" * 35)
    print(f"  {'Materials':<20} ${costs.materials_subtotal:>10,.2f}")
    print(f"  {'Labor':<20} ${costs.labor_subtotal:>10,.2f}")
    print(f"  {'Artist net':<20} ${costs.artist_net:>10,.2f}")
    print(f"  {'Showroom net':<20} ${costs.showroom_net:>10,.2f}")
    print(f"  {'Designer net':<20} ${costs.designer_net:>10,.2f}")

    print("\n--- TOTAL ---")
    print(f"  ${costs.total:,.2f}")
    print("="*60 + "\n")
