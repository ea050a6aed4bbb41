"""
Raster Cache Module
===================

Per-region memory of the last rasterized buffer and where it is valid.

States:
    EMPTY -> next draw rasterizes
    VALID(anchor, buffer) -> next draw re-blits at an offset (panning is cheap)

Transitions:
- invalidate() (geometry edit, visibility toggle, resize) -> EMPTY
- draw() with the ring larger than the viewport -> full-viewport raster,
  no anchor kept (EMPTY)
- draw() with the ring fitting and EMPTY -> rasterize bbox, anchor at bbox origin
- draw() at a different pixel scale (zoom) -> treated as a resize
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

from areamap_engine.geometry.primitives import Point, Rect
from areamap_engine.logging import LogEvent, StructuredLogger, create_logger
from areamap_engine.polygon.builder import BoundingBox
from areamap_engine.rendering.rasterizer import RGBA, Rasterizer


class CacheState(str, Enum):
    EMPTY = "empty"
    VALID = "valid"


@dataclass(frozen=True)
class Blit:
    """
    A display-resolution RGBA buffer and where to draw it.

    Attributes:
        image: uint8 array (height, width, 4)
        x: Left offset in display pixels (may be negative)
        y: Top offset in display pixels (may be negative)
    """

    image: np.ndarray
    x: int
    y: int

    @property
    def width(self) -> int:
        return self.image.shape[1]

    @property
    def height(self) -> int:
        return self.image.shape[0]


@dataclass(frozen=True)
class RasterCacheEntry:
    """Cached buffer, the world point its origin maps to, and its pixel scale."""

    image: np.ndarray
    anchor: Point
    scale: Tuple[float, float]


class RasterCache:
    """
    Decides, per draw, between a cheap re-blit and a full re-rasterization.

    Usage:
        cache = RasterCache(Rasterizer(downsample=3))
        blit = cache.draw(builder.ring(), builder.bounding_box(), viewport_rect, 1280, 720, color)
        canvas.draw(blit.image, blit.x, blit.y)

        builder.push(point)
        cache.invalidate()
    """

    def __init__(self, rasterizer: Rasterizer, logger: Optional[StructuredLogger] = None):
        self.rasterizer = rasterizer
        self.logger = logger or create_logger("raster")
        self._entry: Optional[RasterCacheEntry] = None

    @property
    def state(self) -> CacheState:
        return CacheState.VALID if self._entry is not None else CacheState.EMPTY

    @property
    def entry(self) -> Optional[RasterCacheEntry]:
        return self._entry

    def invalidate(self) -> None:
        """Force regeneration on the next draw."""
        if self._entry is not None:
            self.logger.debug(LogEvent.RASTER_INVALIDATED, "Cached raster dropped")
        self._entry = None

    def draw(
        self,
        ring: Sequence[Point],
        bbox: BoundingBox,
        rect: Rect,
        width: int,
        height: int,
        color: RGBA,
        resize: bool = False,
    ) -> Optional[Blit]:
        """
        Produce the blit for the current viewport.

        Args:
            ring: Closed boundary to fill
            bbox: Bounding box of the ring
            rect: Viewport in world space
            width: Viewport width in display pixels
            height: Viewport height in display pixels
            color: (R, G, B, A)
            resize: Viewport was resized, drop the cache unconditionally

        Returns:
            Blit positioned relative to the viewport's top-left corner, or
            None for a zero-sized viewport
        """
        if resize:
            self.invalidate()
        if width <= 0 or height <= 0:
            return None

        scale = (rect.width / width, rect.height / height)

        if not bbox.fits(rect.width, rect.height):
            self._entry = None
            image = self.rasterizer.render(ring, rect.origin, scale, width, height, color)
            self._log_generated(image, cached=False)
            return Blit(image=image, x=0, y=0)

        if self._entry is not None and not self._same_scale(self._entry.scale, scale):
            self.invalidate()

        if self._entry is None:
            inner_w = math.ceil(bbox.width / scale[0]) + 1
            inner_h = math.ceil(bbox.height / scale[1]) + 1
            image = self.rasterizer.render(ring, bbox.min, scale, inner_w, inner_h, color)
            self._entry = RasterCacheEntry(image=image, anchor=bbox.min, scale=scale)
            self._log_generated(image, cached=True)

        anchor = self._entry.anchor
        return Blit(
            image=self._entry.image,
            x=math.floor((anchor.x - rect.x1) / scale[0]),
            y=math.floor((anchor.y - rect.y1) / scale[1]),
        )

    @staticmethod
    def _same_scale(a: Tuple[float, float], b: Tuple[float, float]) -> bool:
        return math.isclose(a[0], b[0], rel_tol=1e-9) and math.isclose(a[1], b[1], rel_tol=1e-9)

    def _log_generated(self, image: np.ndarray, cached: bool) -> None:
        self.logger.debug(
            LogEvent.RASTER_GENERATED,
            "Raster regenerated",
            metadata={'width': image.shape[1], 'height': image.shape[0], 'cached': cached},
        )
