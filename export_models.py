#!/usr/bin/env python3
"""
Export Models - STEP and STL Export of Installations

Exports the hanging spheres of a project as 3D solids:
- STEP (.step) - for CAD interchange and installation drawings
- STL (.stl) - for visualization and 3D printing of scale models

Usage:
    python export_models.py project.json                    # STEP and STL
    python export_models.py project.json --format step      # STEP only
    python export_models.py project.json --output-dir ./out # Custom output directory
"""

import logging
from pathlib import Path
from typing import List, Sequence

import cadquery as cq

from hang_models import Project
from hang_layout3d import SpherePlacement3D, layout_spheres_3d, export_layout_json

logger = logging.getLogger(__name__)


def make_sphere(placement: SpherePlacement3D):
    """Solid sphere at its installation position (z up, ceiling at 0)."""
    return (cq.Workplane("XY")
            .sphere(placement.diameter / 2)
            .translate((placement.x, placement.y, placement.z))
            .val())


def make_installation(placements: Sequence[SpherePlacement3D]):
    """All spheres as one compound (touching stack spheres stay separate solids)."""
    return cq.Compound.makeCompound([make_sphere(p) for p in placements])


def export_step(solid, filepath):
    """Export CadQuery shape to STEP format."""
    cq.exporters.export(solid, str(filepath), exportType='STEP')


def export_stl(solid, filepath, tolerance=0.01, angular_tolerance=0.1):
    """Export CadQuery shape to STL format.

    Args:
        solid: CadQuery shape to export
        filepath: Output file path
        tolerance: Linear tolerance for mesh (smaller = finer mesh)
        angular_tolerance: Angular tolerance in radians
    """
    cq.exporters.export(
        solid, str(filepath), exportType='STL',
        tolerance=tolerance, angularTolerance=angular_tolerance
    )


def export_installation(project: Project, output_dir, formats=('step', 'stl'),
                        basename: str = None) -> List[Path]:
    """Export a project's spheres to the requested formats.

    Args:
        project: Loaded project
        output_dir: Directory for output files
        formats: Tuple of formats to export ('step', 'stl', 'json')
        basename: File stem (default: project name)

    Returns:
        List of exported file paths
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    stem = basename or project.specs.project_name.strip().replace(' ', '_') or "installation"

    exported = []

    if 'json' in formats:
        json_path = output_dir / f"{stem}.layout3d.json"
        export_layout_json(project, str(json_path))
        exported.append(json_path)

    placements = layout_spheres_3d(project)
    if not placements:
        logger.warning(f"{project.specs.project_name}: no spheres to export")
        return exported

    solid = make_installation(placements)

    if 'step' in formats:
        step_path = output_dir / f"{stem}.step"
        export_step(solid, step_path)
        exported.append(step_path)
        logger.info(f"STEP: {step_path} ({len(placements)} spheres)")

    if 'stl' in formats:
        stl_path = output_dir / f"{stem}.stl"
        export_stl(solid, stl_path)
        exported.append(stl_path)
        logger.info(f"STL:  {stl_path} ({len(placements)} spheres)")

    return exported


def main():
    import argparse
    from hang_project import load_project_from_json
    from logging_config import setup_logging

    parser = argparse.ArgumentParser(
        description='Export the spheres of an installation to STEP/STL formats'
    )
    parser.add_argument('project', help='Path to project JSON file')
    parser.add_argument(
        '--format', '-f',
        choices=['step', 'stl', 'json', 'both'],
        default='both',
        help='Export format (default: both STEP and STL)'
    )
    parser.add_argument(
        '--output-dir', '-o',
        type=Path,
        default=None,
        help='Output directory (default: ./exports)'
    )

    args = parser.parse_args()
    setup_logging()

    if args.format == 'both':
        formats = ('step', 'stl')
    else:
        formats = (args.format,)

    output_dir = args.output_dir or Path.cwd() / "exports"

    project = load_project_from_json(args.project)
    exported = export_installation(project, output_dir, formats)
    print(f"Total files exported: {len(exported)}")


if __name__ == '__main__':
    main()
