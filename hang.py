#!/usr/bin/env python3
"""
HANG.PY - Elevation previews, BOM and exports for hanging-sphere installations

Loads a saved project, builds the depth-ordered front or rear elevation and
writes it as SVG (plus optional PNG, PDF, rotating GIF and 3D models), then
prints the layout advisories and the bill of materials.

Usage:
    python hang.py --json project.json --output elevation.svg
    python hang.py --json project.json --view rear --rotation 30 --png rear.png
    python hang.py --json project.json --gif-frames 36 --gif spin.gif
    python hang.py --json project.json --bom-only
"""

import argparse
import logging
import sys
from dataclasses import replace

from logging_config import setup_logging
from hang_project import load_project_from_json
from hang_compositor import build_scene, VIEW_FRONT, VIEW_REAR
from hang_renderer import ElevationRenderer
from hang_bom import calc_resources, calc_costs, print_bom
from hang_validation import check_advisories, print_advisory_report

logger = logging.getLogger("hang")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Generate installation elevation SVG and BOM')
    parser.add_argument('--json', required=True,
                        help='Path to project JSON file')
    parser.add_argument('--output', default='elevation.svg',
                        help='Output SVG path (default: elevation.svg)')
    parser.add_argument('--view', choices=[VIEW_FRONT, VIEW_REAR], default=VIEW_FRONT,
                        help='Elevation to draw (default: front)')
    parser.add_argument('--rotation', type=float, default=None,
                        help='Plan rotation in degrees (default: from project)')
    parser.add_argument('--strength', type=float, default=None,
                        help='Rotation strength 0..1 (default: from project)')
    parser.add_argument('--perspective', type=float, default=None,
                        help='Perspective factor -1..1 (default: from project)')
    parser.add_argument('--scale', type=float, default=8.0,
                        help='SVG pixels per inch (default: 8)')
    parser.add_argument('--png', default=None,
                        help='Also save a PNG image to this path')
    parser.add_argument('--pdf', default=None,
                        help='Also save a PDF to this path')
    parser.add_argument('--gif-frames', type=int, default=0,
                        help='Frames in a rotating GIF (0 = no GIF)')
    parser.add_argument('--gif', default='rotation.gif',
                        help='Animated GIF path (default: rotation.gif)')
    parser.add_argument('--export-3d', default=None, metavar='DIR',
                        help='Export spheres to STEP/STL in this directory')
    parser.add_argument('--bom-only', action='store_true',
                        help='Only print BOM, do not generate drawings')
    parser.add_argument('--skip-validation', action='store_true',
                        help='Skip layout advisories')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: INFO)')
    parser.add_argument('--log-file', default=None,
                        help='Also write the log to this file')

    args = parser.parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    print(f"Loading project from {args.json}...")
    project = load_project_from_json(args.json)
    specs = project.specs
    print(f"Loaded {specs.project_name}: {len(project.anchors)} anchors, {len(project.strands)} strands, "
          f"{len(project.stacks)} stacks, {len(project.swoops)} swoops, "
          f"{len(project.custom_strands)} custom strands, {len(project.clusters)} clusters")

    # Command-line view overrides
    view_params = specs.view
    if args.rotation is not None:
        view_params = replace(view_params, rotation_deg=args.rotation % 360)
    if args.strength is not None:
        view_params = replace(view_params, rotation_strength=min(1.0, max(0.0, args.strength)))
    if args.perspective is not None:
        view_params = replace(view_params, perspective_factor=min(1.0, max(-1.0, args.perspective)))

    # Advisories
    if not args.skip_validation:
        advisories = check_advisories(project, view_params)
        print_advisory_report(advisories, project)

    if not args.bom_only:
        scene = build_scene(project, view_params, args.view)
        print(f"View: {args.view}, rotation {view_params.rotation_deg:.1f}°, "
              f"strength {view_params.rotation_strength:.2f}, perspective {view_params.perspective_factor:.2f}")

        ElevationRenderer(scene, scale=args.scale).render(args.output)
        print(f"SVG saved to {args.output}")

        if args.png or args.pdf or args.gif_frames > 0:
            from hang_raster import render_scene_image, render_rotation_frames
            for path in (args.png, args.pdf):
                if path:
                    render_scene_image(scene, path)
                    print(f"Image saved to {path}")
            if args.gif_frames > 0:
                frames = render_rotation_frames(project, args.gif, args.gif_frames, args.view, view_params)
                print(f"GIF saved to {args.gif} ({frames} frames)")

        if args.export_3d:
            from export_models import export_installation
            exported = export_installation(project, args.export_3d)
            print(f"3D files exported: {len(exported)}")

    resources = calc_resources(project)
    costs = calc_costs(project, resources)
    print_bom(project, resources, costs)
    return 0


if __name__ == "__main__":
    sys.exit(main())
