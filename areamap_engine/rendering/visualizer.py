"""
Region Visualizer Module
========================

Thin canvas adapter: composites fill rasters onto a frame and strokes
outlines and labels.

Design:
- Canvas is a numpy BGR frame (OpenCV convention)
- Fill comes from the engine's Blit values (no polygon filling here)
- Strokes and labels use supervision drawing utilities
- No geometry decisions beyond reading the builder's vertex list
- Off-screen committed regions get a direction indicator instead of an outline

Dependencies:
- supervision (draw utilities, Color, Point)
- numpy (alpha compositing)
"""

import math
from typing import TYPE_CHECKING, List, Tuple

import numpy as np
import supervision as sv

from areamap_engine.geometry.primitives import Point
from areamap_engine.geometry.spherical import distance
from areamap_engine.rendering.cache import Blit
from areamap_engine.viewport import Viewport

if TYPE_CHECKING:
    from areamap_engine.regions.region import Region
    from areamap_engine.regions.session import DrawingSession


# Half-angle between an indicator arm and its shaft (50 degrees)
INDICATOR_SPREAD = math.pi * 5 / 18


class RegionVisualizer:
    """
    Draws regions onto a BGR frame.

    Usage:
        visualizer = RegionVisualizer(outline_thickness=3)
        frame = RegionVisualizer.blank_canvas(1280, 720)
        frame = visualizer.render(frame, session, viewport)
    """

    def __init__(
        self,
        outline_thickness: int = 3,
        pending_thickness: int = 2,
        text_color: sv.Color = sv.Color(r=0, g=0, b=0),
        text_background_color: sv.Color = sv.Color(r=255, g=255, b=255),
        text_scale: float = 0.5,
        text_thickness: int = 1,
        text_padding: int = 6,
        show_labels: bool = True,
        show_indicators: bool = True,
    ):
        self.outline_thickness = outline_thickness
        self.pending_thickness = pending_thickness
        self.text_color = text_color
        self.text_background_color = text_background_color
        self.text_scale = text_scale
        self.text_thickness = text_thickness
        self.text_padding = text_padding
        self.show_labels = show_labels
        self.show_indicators = show_indicators

    @staticmethod
    def blank_canvas(width: int, height: int, color: Tuple[int, int, int] = (255, 255, 255)) -> np.ndarray:
        """Solid BGR frame used when no basemap is available."""
        frame = np.empty((height, width, 3), dtype=np.uint8)
        frame[:] = color
        return frame

    def blend(self, frame: np.ndarray, blit: Blit) -> np.ndarray:
        """
        Alpha-composite an RGBA blit onto the frame, clipped to its bounds.

        Args:
            frame: BGR frame (modified in place)
            blit: Raster and its offset

        Returns:
            The same frame
        """
        frame_h, frame_w = frame.shape[:2]
        x0, y0 = max(blit.x, 0), max(blit.y, 0)
        x1 = min(blit.x + blit.width, frame_w)
        y1 = min(blit.y + blit.height, frame_h)
        if x0 >= x1 or y0 >= y1:
            return frame

        patch = blit.image[y0 - blit.y:y1 - blit.y, x0 - blit.x:x1 - blit.x]
        alpha = patch[..., 3:4].astype(np.float32) / 255.0
        bgr = patch[..., 2::-1].astype(np.float32)
        background = frame[y0:y1, x0:x1].astype(np.float32)
        frame[y0:y1, x0:x1] = (background * (1.0 - alpha) + bgr * alpha).astype(np.uint8)
        return frame

    @staticmethod
    def _to_pixels(points: List[Point], viewport: Viewport) -> np.ndarray:
        return np.array(
            [[round(px), round(py)] for px, py in (viewport.world_to_pixel(p) for p in points)],
            dtype=np.int32,
        )

    def draw_outline(self, frame: np.ndarray, region: "Region", viewport: Viewport) -> np.ndarray:
        """
        Stroke the region's boundary.

        Finished rings are drawn closed. While drawing, the committed path is
        solid, the pending edges thinner; a self-intersecting preview is
        drawn as a thin closed loop.
        """
        builder = region.builder
        vertices = list(builder.vertices)
        if not vertices:
            return frame

        color = sv.Color(r=region.color[0], g=region.color[1], b=region.color[2])

        if builder.finished:
            pixels = self._to_pixels(vertices[:-1], viewport)
            return sv.draw_polygon(scene=frame, polygon=pixels, color=color, thickness=self.outline_thickness)

        if len(vertices) >= 3 and not builder.legal():
            pixels = self._to_pixels(vertices + [builder.effective_pending], viewport)
            return sv.draw_polygon(scene=frame, polygon=pixels, color=color, thickness=1)

        pixels = self._to_pixels(vertices, viewport)
        for (ax, ay), (bx, by) in zip(pixels, pixels[1:]):
            frame = sv.draw_line(
                scene=frame,
                start=sv.Point(x=int(ax), y=int(ay)),
                end=sv.Point(x=int(bx), y=int(by)),
                color=color,
                thickness=self.outline_thickness,
            )

        if builder.has_pending:
            last, pending, first = self._to_pixels([vertices[-1], builder.pending, vertices[0]], viewport)
            frame = sv.draw_line(
                scene=frame,
                start=sv.Point(x=int(last[0]), y=int(last[1])),
                end=sv.Point(x=int(pending[0]), y=int(pending[1])),
                color=color,
                thickness=self.pending_thickness,
            )
            frame = sv.draw_line(
                scene=frame,
                start=sv.Point(x=int(pending[0]), y=int(pending[1])),
                end=sv.Point(x=int(first[0]), y=int(first[1])),
                color=color,
                thickness=1,
            )
        return frame

    def draw_label(self, frame: np.ndarray, region: "Region", viewport: Viewport) -> np.ndarray:
        """Write `name: area` above the region's bounding box."""
        bbox = region.bounding_box()
        if bbox is None:
            return frame

        px, py = viewport.world_to_pixel(bbox.min)
        cx, _ = viewport.world_to_pixel(bbox.center)
        anchor = sv.Point(x=int(cx), y=int(max(py - 12, 12)))
        if not (0 <= anchor.x < frame.shape[1] and 0 <= anchor.y < frame.shape[0]):
            return frame

        return sv.draw_text(
            scene=frame,
            text=f"{region.name}: {region.display_area()}",
            text_anchor=anchor,
            text_color=self.text_color,
            text_scale=self.text_scale,
            text_thickness=self.text_thickness,
            text_padding=self.text_padding,
            background_color=self.text_background_color,
        )

    def draw_indicator(self, frame: np.ndarray, region: "Region", viewport: Viewport) -> np.ndarray:
        """
        Point an arrowhead from the frame centre towards an off-screen region.

        The tip sits on a box inset to 90% of the frame, in the direction of
        the region's centre; the arms shrink with the great-circle distance.
        """
        target = region.center()
        if target is None:
            return frame

        height, width = frame.shape[:2]
        half_w, half_h = width / 2, height / 2
        tx, ty = viewport.world_to_pixel(target)
        dx, dy = tx - half_w, ty - half_h
        if dx == 0 and dy == 0:
            return frame

        reach = min(
            0.45 * width / abs(dx) if dx else math.inf,
            0.45 * height / abs(dy) if dy else math.inf,
        )
        tip_x, tip_y = half_w + dx * reach, half_h + dy * reach

        accumulator = region.builder.accumulator
        here = accumulator.to_geographic(viewport.cursor_to_world(half_w, half_h))
        there = accumulator.to_geographic(target)
        km = distance(here[1], here[0], there[1], there[0], accumulator.radius) / 1000.0

        short_side = min(width, height)
        length = short_side / 12.0 * 1.05 ** (-km / 3) + short_side / 30.0
        thickness = int(length / 25 + 2)

        color = sv.Color(r=region.color[0], g=region.color[1], b=region.color[2])
        theta = math.atan2(dy, dx)
        tip = sv.Point(x=int(round(tip_x)), y=int(round(tip_y)))
        for angle in (theta + INDICATOR_SPREAD - math.pi, theta - INDICATOR_SPREAD - math.pi):
            arm = sv.Point(
                x=int(round(tip_x + length * math.cos(angle))),
                y=int(round(tip_y + length * math.sin(angle))),
            )
            frame = sv.draw_line(scene=frame, start=arm, end=tip, color=color, thickness=thickness)
        return frame

    def render(
        self,
        frame: np.ndarray,
        session: "DrawingSession",
        viewport: Viewport,
        resize: bool = False,
    ) -> np.ndarray:
        """
        Draw every visible region of the session.

        Args:
            frame: BGR frame sized like the viewport
            session: Draft + committed regions
            viewport: Current map window
            resize: Window size changed since the last render

        Returns:
            Frame with fills, outlines, labels and off-screen indicators
        """
        for _, blit in session.render(viewport, resize=resize):
            frame = self.blend(frame, blit)

        rect = viewport.world_rect()
        for region in session.regions():
            if not region.visible:
                continue
            bbox = region.bounding_box()
            if bbox is not None and bbox.is_clipped(rect) and region is not session.draft:
                if self.show_indicators:
                    frame = self.draw_indicator(frame, region, viewport)
                continue
            frame = self.draw_outline(frame, region, viewport)
            if self.show_labels:
                frame = self.draw_label(frame, region, viewport)
        return frame
