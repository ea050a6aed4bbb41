"""
Rasterizer Module
=================

Parity-fill scanline rasterization of a closed ring into an RGBA buffer.

Design:
- No clipping library: crossings come from `ray_intersect` per ring edge
- One horizontal ray per output row, sampled at pixel centres
- Rows are independent (no shared state across rows)
- Optional reduced internal resolution, upsampled by nearest neighbour
"""

import math
from typing import List, Sequence, Tuple

import numpy as np

from areamap_engine.geometry.primitives import Point, Rect, ray_intersect

RGBA = Tuple[int, int, int, int]


def trace_ray(ring: Sequence[Point], x: float, y: float) -> Tuple[bool, List[float]]:
    """
    Cast a +x ray from (x, y) across every edge of a closed ring.

    Args:
        ring: Closed boundary (first vertex repeated at the end)
        x: Ray origin x
        y: Ray origin y (the scanline)

    Returns:
        Tuple of:
        - inside: True if (x, y) is inside (odd crossing count)
        - crossings: Sorted x coordinates of the crossings at or right of x
    """
    origin = Point(x, y)
    crossings = []
    for p1, p2 in zip(ring, ring[1:]):
        crossing = ray_intersect(p1, p2, origin)
        if crossing is not None:
            crossings.append(crossing)
    crossings.sort()
    return len(crossings) % 2 == 1, crossings


class Rasterizer:
    """
    Turns a closed ring into a solid-colour RGBA mask.

    Usage:
        rasterizer = Rasterizer(downsample=3)

        # Exact grid
        buffer = rasterizer.rasterize(ring, Rect(0, 0, 1, 1), 64, 64, (255, 0, 0, 32))

        # Display-size buffer rendered at 1/3 linear resolution
        image = rasterizer.render(ring, origin, (sx, sy), 1280, 720, (255, 0, 0, 32))
    """

    def __init__(self, downsample: int = 3):
        """
        Args:
            downsample: Linear reduction of the internal resolution (>= 1)
        """
        if downsample < 1:
            raise ValueError(f"downsample must be >= 1, got {downsample}")
        self.downsample = downsample

    def rasterize(
        self,
        ring: Sequence[Point],
        rect: Rect,
        width: int,
        height: int,
        color: RGBA,
    ) -> np.ndarray:
        """
        Fill the ring's interior over `rect` sampled on a width x height grid.

        Args:
            ring: Closed boundary (first vertex repeated at the end)
            rect: World-space rectangle covered by the grid
            width: Grid columns
            height: Grid rows
            color: (R, G, B, A) written to interior pixels

        Returns:
            uint8 array of shape (height, width, 4)
        """
        buffer = np.zeros((max(height, 0), max(width, 0), 4), dtype=np.uint8)
        # A closed triangle is 4 points
        if len(ring) < 4 or width <= 0 or height <= 0:
            return buffer

        rgba = np.asarray(color, dtype=np.uint8)
        pixel_w = rect.width / width
        pixel_h = rect.height / height

        for j in range(height):
            y = rect.y1 + (j + 0.5) * pixel_h
            inside, crossings = trace_ray(ring, rect.x1, y)
            if not crossings:
                continue
            self._fill_row(buffer[j], inside, crossings, rect.x1, pixel_w, rgba)

        return buffer

    @staticmethod
    def _fill_row(
        row: np.ndarray,
        inside: bool,
        crossings: Sequence[float],
        x1: float,
        pixel_w: float,
        rgba: np.ndarray,
    ) -> None:
        # Pixel i is filled when its centre lies inside; each crossing flips state
        width = row.shape[0]
        start = 0
        filling = inside
        for crossing in crossings:
            column = min(max(math.ceil((crossing - x1) / pixel_w - 0.5), 0), width)
            if filling and column > start:
                row[start:column] = rgba
            start = max(start, column)
            filling = not filling
        if filling and start < width:
            row[start:] = rgba

    def render(
        self,
        ring: Sequence[Point],
        origin: Point,
        scale: Tuple[float, float],
        width: int,
        height: int,
        color: RGBA,
    ) -> np.ndarray:
        """
        Rasterize a display-size buffer at reduced internal resolution.

        Args:
            ring: Closed boundary
            origin: World position of the buffer's top-left corner
            scale: World units per display pixel (x, y)
            width: Display width in pixels
            height: Display height in pixels
            color: (R, G, B, A)

        Returns:
            uint8 array of shape (height, width, 4)
        """
        step = self.downsample
        inner_w = max(1, math.ceil(width / step))
        inner_h = max(1, math.ceil(height / step))
        rect = Rect(
            origin.x,
            origin.y,
            origin.x + inner_w * step * scale[0],
            origin.y + inner_h * step * scale[1],
        )
        small = self.rasterize(ring, rect, inner_w, inner_h, color)
        if step == 1:
            return small[:height, :width]

        upsampled = np.repeat(np.repeat(small, step, axis=0), step, axis=1)
        return np.ascontiguousarray(upsampled[:height, :width])
