#!/usr/bin/env python3
"""
HANG_RENDERER.PY - SVG rendering of installation elevations

Contains:
- ElevationRenderer: Draws a depth-ordered Scene to SVG using svgwrite
"""

import logging

import svgwrite

from hang_models import Sphere, ClaspConnector, LAYER_FRONT, LAYER_MID, LAYER_BACK
from hang_hardware import ChainLink
from hang_compositor import Scene, Drawable, ChainPrimitive, Mound, OverCeilingMarker, VIEW_REAR

logger = logging.getLogger(__name__)


class ElevationRenderer:
    """Renders a front or rear elevation Scene to SVG using svgwrite."""

    # Layer opacity, nearest layer fully opaque
    LAYER_OPACITY = {LAYER_FRONT: 1.0, LAYER_MID: 0.7, LAYER_BACK: 0.45}
    REAR_LAYER_OPACITY = {LAYER_FRONT: 0.45, LAYER_MID: 0.7, LAYER_BACK: 1.0}

    CEILING_COLOR = '#444444'
    FLOOR_COLOR = '#BBBBBB'
    HARDWARE_COLOR = '#555555'
    SPHERE_STROKE = '#222222'
    WARNING_COLOR = '#CC2222'

    def __init__(self, scene: Scene, scale: float = 8.0, padding: float = 10):
        self.scene = scene
        self.scale = scale       # pixels per inch
        self.padding = padding   # pixels

        b = scene.bounds
        self.min_x = b.min_x
        self.min_y = b.min_y
        self.width = int(b.width * self.scale + 2 * self.padding)
        self.height = int(b.height * self.scale + 2 * self.padding)

    def _tx(self, x_in: float) -> float:
        """Transform X coordinate to SVG space."""
        return (x_in - self.min_x) * self.scale + self.padding

    def _ty(self, y_in: float) -> float:
        """Transform Y coordinate to SVG space (both frames are y-down)."""
        return (y_in - self.min_y) * self.scale + self.padding

    def _scale(self, val_in: float) -> float:
        return val_in * self.scale

    def opacity_for(self, drawable: Drawable) -> float:
        if not drawable.fade:
            return 1.0
        table = self.REAR_LAYER_OPACITY if self.scene.view == VIEW_REAR else self.LAYER_OPACITY
        return table.get(drawable.layer, 1.0)

    def render(self, output_path: str, show_reference_lines: bool = True, background: str = 'white'):
        """Render the scene to an SVG file.

        Args:
            output_path: Path to save the SVG file
            show_reference_lines: If True, draw the ceiling and floor lines
            background: Fill color behind the drawing (None for transparent)
        """
        dwg = svgwrite.Drawing(output_path,
                               size=(f'{self.width}px', f'{self.height}px'),
                               viewBox=f'0 0 {self.width} {self.height}')

        if background:
            dwg.add(dwg.rect((0, 0), (self.width, self.height), fill=background))

        if show_reference_lines:
            self._draw_reference_lines(dwg)

        for drawable in self.scene.drawables:
            self._draw(dwg, drawable)

        dwg.save()
        logger.info(f"SVG saved to {output_path} ({self.scene.view} view, {len(self.scene.drawables)} drawables)")

    def _draw_reference_lines(self, dwg):
        """Ceiling line across the boundary width, dashed floor line at ceiling height."""
        x0 = self._tx(0)
        x1 = self._tx(self.scene.boundary_width_in)
        dwg.add(dwg.line((x0, self._ty(0)), (x1, self._ty(0)),
                         stroke=self.CEILING_COLOR, stroke_width=1.5))
        floor_y = self._ty(self.scene.ceiling_height_in)
        dwg.add(dwg.line((self._tx(self.scene.bounds.min_x), floor_y),
                         (self._tx(self.scene.bounds.max_x), floor_y),
                         stroke=self.FLOOR_COLOR, stroke_width=1, stroke_dasharray='6,4'))

    def _draw(self, dwg, drawable: Drawable):
        prim = drawable.primitive
        group = dwg.g(opacity=self.opacity_for(drawable))
        if isinstance(prim, Sphere):
            self._draw_sphere(dwg, group, prim, drawable.color)
        elif isinstance(prim, ChainPrimitive):
            self._draw_chain(dwg, group, prim, drawable.color)
        elif isinstance(prim, ClaspConnector):
            self._draw_clasp(dwg, group, prim)
        elif isinstance(prim, Mound):
            self._draw_mound(dwg, group, prim)
        elif isinstance(prim, OverCeilingMarker):
            self._draw_over_ceiling(dwg, group, prim)
        else:
            logger.debug(f"Skipping unknown primitive {type(prim).__name__}")
            return
        dwg.add(group)

    def _draw_sphere(self, dwg, group, sphere: Sphere, color: str):
        group.add(dwg.circle(
            center=(self._tx(sphere.x), self._ty(sphere.y)),
            r=self._scale(sphere.radius()),
            fill=color,
            stroke=self.SPHERE_STROKE,
            stroke_width=0.5,
        ))

    def _draw_chain(self, dwg, group, chain: ChainPrimitive, color: str):
        seg = chain.segment
        group.add(dwg.line(
            (self._tx(seg.p1.x), self._ty(seg.p1.y)),
            (self._tx(seg.p2.x), self._ty(seg.p2.y)),
            stroke=color, stroke_width=max(0.5, self._scale(chain.stroke_in)),
        ))
        for link in chain.links:
            self._draw_link(dwg, group, link, color)

    def _draw_link(self, dwg, group, link: ChainLink, color: str):
        cx = self._tx(link.x)
        cy = self._ty(link.y)
        transform = f"rotate({link.angle_deg:.1f}, {cx:.2f}, {cy:.2f})"
        if link.face_on:
            group.add(dwg.ellipse(center=(cx, cy),
                                  r=(self._scale(link.height / 2), self._scale(link.width / 2)),
                                  fill='none', stroke=color, stroke_width=0.6, transform=transform))
        else:
            half = self._scale(link.height / 2)
            group.add(dwg.line((cx - half, cy), (cx + half, cy),
                               stroke=color, stroke_width=0.9, transform=transform))

    def _draw_clasp(self, dwg, group, clasp: ClaspConnector):
        eye_r = self._scale(clasp.eye_diameter / 2)
        for eye in (clasp.eye_top, clasp.eye_bottom):
            group.add(dwg.circle(center=(self._tx(eye.x), self._ty(eye.y)), r=eye_r,
                                 fill='none', stroke=self.HARDWARE_COLOR, stroke_width=0.6))
        cx = self._tx(clasp.link_center.x)
        cy = self._ty(clasp.link_center.y)
        group.add(dwg.ellipse(
            center=(cx, cy),
            r=(self._scale(clasp.link_width / 2), self._scale(clasp.link_height / 2)),
            fill='none', stroke=self.HARDWARE_COLOR, stroke_width=0.8,
            transform=f"rotate({clasp.angle_deg - 90:.1f}, {cx:.2f}, {cy:.2f})",
        ))

    def _draw_mound(self, dwg, group, mound: Mound):
        # Pile width grows with the chain it holds
        half_w = self._scale(1.0 + mound.chain_in / 12)
        h = self._scale(0.4 + mound.chain_in / 48)
        x = self._tx(mound.x)
        y = self._ty(mound.y)
        path_data = f"M {x - half_w:.2f},{y:.2f} Q {x:.2f},{y - 2 * h:.2f} {x + half_w:.2f},{y:.2f} Z"
        group.add(dwg.path(d=path_data, fill=self.HARDWARE_COLOR, stroke='none'))

    def _draw_over_ceiling(self, dwg, group, marker: OverCeilingMarker):
        group.add(dwg.text("!", insert=(self._tx(marker.x), self._ty(marker.y)),
                           font_size=f"{max(8, self._scale(2)):.0f}px", font_weight="bold",
                           fill=self.WARNING_COLOR, font_family='sans-serif'))
