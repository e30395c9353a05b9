#!/usr/bin/env python3
"""
HANG_RASTER.PY - Raster, PDF and animated exports of installation elevations

Contains:
- render_scene_image: Draw a Scene with matplotlib and save PNG or PDF
- render_rotation_frames: Sequential rotation sweep saved as an animated GIF

Uses the same Scene (and therefore the same draw order and opacities) as the
SVG renderer.
"""

import logging
from dataclasses import replace
from typing import Optional

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.animation import PillowWriter
from matplotlib.patches import Circle, Polygon

from hang_models import Project, Sphere, ClaspConnector, ViewParams
from hang_hardware import ChainLink
from hang_compositor import (
    Scene, Drawable, ChainPrimitive, Mound, OverCeilingMarker, VIEW_FRONT, build_scene,
)
from hang_renderer import ElevationRenderer

logger = logging.getLogger(__name__)


INSTALL_IN_PER_FIG_IN = 12.0   # installation inches per figure inch
MIN_FIG_IN = 3.0
MAX_FIG_IN = 24.0
OUTLINE_SEGMENTS = 24
MAX_GIF_FRAMES = 360

HARDWARE_COLOR = ElevationRenderer.HARDWARE_COLOR
SPHERE_STROKE = ElevationRenderer.SPHERE_STROKE


def _figure_size(scene: Scene):
    b = scene.bounds
    w = min(MAX_FIG_IN, max(MIN_FIG_IN, b.width / INSTALL_IN_PER_FIG_IN))
    h = min(MAX_FIG_IN, max(MIN_FIG_IN, b.height / INSTALL_IN_PER_FIG_IN))
    return w, h


def _ellipse_outline(cx: float, cy: float, rx: float, ry: float, angle_deg: float):
    """Closed ellipse outline as two numpy arrays, rotated about its center."""
    t = np.linspace(0.0, 2 * np.pi, OUTLINE_SEGMENTS + 1)
    pts = np.vstack([rx * np.cos(t), ry * np.sin(t)])
    a = np.radians(angle_deg)
    rot = np.array([[np.cos(a), -np.sin(a)], [np.sin(a), np.cos(a)]])
    pts = rot @ pts
    return pts[0] + cx, pts[1] + cy


def _draw_link(ax, link: ChainLink, color: str, alpha: float, z: int):
    if link.face_on:
        xs, ys = _ellipse_outline(link.x, link.y, link.height / 2, link.width / 2, link.angle_deg)
        ax.plot(xs, ys, color=color, linewidth=0.5, alpha=alpha, zorder=z)
    else:
        a = np.radians(link.angle_deg)
        half = link.height / 2
        dx, dy = np.cos(a) * half, np.sin(a) * half
        ax.plot([link.x - dx, link.x + dx], [link.y - dy, link.y + dy],
                color=color, linewidth=0.8, alpha=alpha, zorder=z)


def _draw_drawable(ax, drawable: Drawable, renderer: ElevationRenderer, z: int):
    prim = drawable.primitive
    alpha = renderer.opacity_for(drawable)

    if isinstance(prim, Sphere):
        ax.add_patch(Circle((prim.x, prim.y), prim.radius(), facecolor=drawable.color,
                            edgecolor=SPHERE_STROKE, linewidth=0.5, alpha=alpha, zorder=z))
    elif isinstance(prim, ChainPrimitive):
        seg = prim.segment
        ax.plot([seg.p1.x, seg.p2.x], [seg.p1.y, seg.p2.y], color=drawable.color,
                linewidth=0.8, alpha=alpha, zorder=z)
        for link in prim.links:
            _draw_link(ax, link, drawable.color, alpha, z)
    elif isinstance(prim, ClaspConnector):
        for eye in (prim.eye_top, prim.eye_bottom):
            r = prim.eye_diameter / 2
            xs, ys = _ellipse_outline(eye.x, eye.y, r, r, 0.0)
            ax.plot(xs, ys, color=HARDWARE_COLOR, linewidth=0.5, alpha=alpha, zorder=z)
        xs, ys = _ellipse_outline(prim.link_center.x, prim.link_center.y,
                                  prim.link_width / 2, prim.link_height / 2, prim.angle_deg - 90)
        ax.plot(xs, ys, color=HARDWARE_COLOR, linewidth=0.6, alpha=alpha, zorder=z)
    elif isinstance(prim, Mound):
        half_w = 1.0 + prim.chain_in / 12
        h = 0.4 + prim.chain_in / 48
        t = np.linspace(-1.0, 1.0, OUTLINE_SEGMENTS)
        xs = prim.x + t * half_w
        ys = prim.y - h * (1 - t ** 2)
        ax.add_patch(Polygon(np.column_stack([xs, ys]), closed=True, facecolor=HARDWARE_COLOR,
                             edgecolor='none', alpha=alpha, zorder=z))
    elif isinstance(prim, OverCeilingMarker):
        ax.text(prim.x, prim.y, "!", color=ElevationRenderer.WARNING_COLOR, fontweight='bold',
                alpha=alpha, zorder=z)
    else:
        logger.debug(f"Skipping unknown primitive {type(prim).__name__}")


def draw_scene(ax, scene: Scene, show_reference_lines: bool = True):
    """Draw a scene onto matplotlib axes in the elevation's y-down frame."""
    renderer = ElevationRenderer(scene)
    b = scene.bounds

    if show_reference_lines:
        ax.plot([0, scene.boundary_width_in], [0, 0], color=ElevationRenderer.CEILING_COLOR, linewidth=1.2)
        ax.plot([b.min_x, b.max_x], [scene.ceiling_height_in] * 2,
                color=ElevationRenderer.FLOOR_COLOR, linewidth=0.8, linestyle='--')

    # Draw order is already painter's order; zorder keeps matplotlib from regrouping
    for z, drawable in enumerate(scene.drawables, start=2):
        _draw_drawable(ax, drawable, renderer, z)

    ax.set_xlim(b.min_x, b.max_x)
    ax.set_ylim(b.max_y, b.min_y)
    ax.set_aspect('equal')
    ax.axis('off')


def render_scene_image(scene: Scene, output_path: str, dpi: int = 150):
    """Save a scene as PNG or PDF (chosen from the file extension)."""
    fig, ax = plt.subplots(1, 1, figsize=_figure_size(scene))
    try:
        draw_scene(ax, scene)
        fig.savefig(output_path, dpi=dpi, bbox_inches="tight", facecolor="white")
    finally:
        plt.close(fig)
    logger.info(f"Image saved to {output_path}")


def render_rotation_frames(project: Project, output_path: str, frames: int = 36,
                           view: str = VIEW_FRONT, view_params: Optional[ViewParams] = None,
                           fps: int = 12, dpi: int = 100) -> int:
    """Sweep the plan rotation through 360 degrees and save an animated GIF.

    Frames are rendered one after another; each frame sets the rotation and
    rebuilds the scene from scratch. Returns the number of frames written.
    """
    frames = max(1, min(MAX_GIF_FRAMES, int(frames)))
    base = view_params or project.specs.view

    first = build_scene(project, replace(base, rotation_deg=0.0), view)
    fig, ax = plt.subplots(1, 1, figsize=_figure_size(first))
    writer = PillowWriter(fps=fps)
    try:
        with writer.saving(fig, output_path, dpi):
            for i in range(frames):
                rotation = 360.0 * i / frames
                scene = first if i == 0 else build_scene(project, replace(base, rotation_deg=rotation), view)
                ax.clear()
                draw_scene(ax, scene)
                ax.set_title(f"{rotation:.0f}°", fontsize=8)
                writer.grab_frame(facecolor="white")
                logger.debug(f"Frame {i + 1}/{frames} at {rotation:.1f}°")
    finally:
        plt.close(fig)

    logger.info(f"Animated GIF saved to {output_path} ({frames} frames)")
    return frames
