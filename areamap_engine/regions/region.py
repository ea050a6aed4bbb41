"""
Region Module
=============

A polygon plus its display metadata and raster cache - the engine facade
the interaction layer talks to.

Design:
- Construction / query / render protocol in one place
- Geometry lives in PolygonBuilder, pixels in RasterCache
- Every geometry edit (and pending move) invalidates the cache
- Coordinates on the protocol are plain floats in normalized map space
"""

from typing import Iterable, Optional, Tuple

from areamap_engine.geometry.legality import LegalityChecker
from areamap_engine.geometry.primitives import Point, Rect
from areamap_engine.geometry.projection import Projection, WEB_MERCATOR
from areamap_engine.geometry.spherical import AreaAccumulator
from areamap_engine.logging import LogEvent, StructuredLogger, create_logger
from areamap_engine.polygon.builder import BoundingBox, PolygonBuilder
from areamap_engine.rendering.cache import Blit, RasterCache
from areamap_engine.rendering.rasterizer import RGBA, Rasterizer
from areamap_engine.regions.units import ILLEGAL_AREA, format_area


class Region:
    """
    Named, coloured polygon with a cached fill raster.

    Usage:
        region = Region(name="Area 1", color=(255, 0, 0, 32))

        region.push(0.83735, 0.409238)
        region.push(0.837286, 0.409262)
        region.set_pending(0.837299, 0.409298)
        if region.legal():
            region.confirm_pending()

        region.finish()
        blit = region.rasterize(viewport.world_rect(), 1280, 720)
    """

    def __init__(
        self,
        name: str,
        color: RGBA,
        builder: Optional[PolygonBuilder] = None,
        rasterizer: Optional[Rasterizer] = None,
        visible: bool = True,
        logger: Optional[StructuredLogger] = None,
    ):
        self.name = name
        self.color = color
        self.builder = builder or PolygonBuilder()
        self.logger = logger or create_logger("region")
        self.cache = RasterCache(rasterizer or Rasterizer(), self.logger)
        self._visible = visible

    @classmethod
    def from_coordinates(
        cls,
        name: str,
        coordinates: Iterable[Tuple[float, float]],
        color: RGBA,
        projection: Projection = WEB_MERCATOR,
        accumulator: Optional[AreaAccumulator] = None,
        rasterizer: Optional[Rasterizer] = None,
        visible: bool = True,
        logger: Optional[StructuredLogger] = None,
    ) -> "Region":
        """
        Build a finished region from (lon, lat) degrees.

        Raises:
            ValueError: If the ring has fewer than 3 points or self-intersects
        """
        accumulator = accumulator or AreaAccumulator(projection.unproject)
        builder = PolygonBuilder(accumulator=accumulator)
        for lon, lat in coordinates:
            point = Point(*projection.project(lon, lat))
            if not LegalityChecker.legal(builder.vertices, point):
                raise ValueError(f"Region '{name}' is not a simple polygon")
            builder.push(point)

        if not builder.finish():
            raise ValueError(f"Region '{name}' is not a simple polygon")

        return cls(
            name=name,
            color=color,
            builder=builder,
            rasterizer=rasterizer,
            visible=visible,
            logger=logger,
        )

    # ========== Construction protocol ==========

    def push(self, x: float, y: float) -> None:
        self.builder.push(Point(x, y))
        self.cache.invalidate()

    def set_pending(self, x: float, y: float) -> None:
        point = Point(x, y)
        if self.builder.pending != point:
            self.builder.set_pending(point)
            self.cache.invalidate()

    def reset_pending(self) -> None:
        if self.builder.has_pending:
            self.builder.reset_pending()
            self.cache.invalidate()

    def confirm_pending(self) -> None:
        self.builder.confirm_pending()
        self.cache.invalidate()

    def undo(self) -> None:
        self.builder.undo()
        self.cache.invalidate()

    def finish(self) -> bool:
        finished = self.builder.finish()
        if finished:
            self.cache.invalidate()
        return finished

    # ========== Query protocol ==========

    def vertex_count(self) -> int:
        return self.builder.vertex_count()

    def bounding_box(self) -> Optional[BoundingBox]:
        return self.builder.bounding_box()

    def committed_area(self) -> float:
        return self.builder.committed_area()

    def speculative_area(self) -> float:
        return self.builder.speculative_area()

    def legal(self) -> bool:
        return self.builder.legal()

    def size_legal(self) -> bool:
        return self.builder.size_legal()

    @property
    def finished(self) -> bool:
        return self.builder.finished

    def center(self) -> Optional[Point]:
        return self.builder.center()

    def display_area(self) -> str:
        """Area string for the UI, `---` while the preview ring self-intersects."""
        if self.builder.finished:
            return format_area(self.committed_area())
        if not self.size_legal():
            return ILLEGAL_AREA
        return format_area(self.speculative_area())

    # ========== Display metadata ==========

    @property
    def visible(self) -> bool:
        return self._visible

    def flip_visible(self) -> None:
        self._visible = not self._visible
        self.cache.invalidate()
        self.logger.info(
            LogEvent.REGION_VISIBILITY_CHANGED,
            f"Region '{self.name}' {'shown' if self._visible else 'hidden'}",
            metadata={'name': self.name, 'visible': self._visible},
        )

    # ========== Render protocol ==========

    def request_invalidate(self) -> None:
        self.cache.invalidate()

    def rasterize(
        self,
        viewport_rect: Rect,
        out_width: int,
        out_height: int,
        resize: bool = False,
    ) -> Optional[Blit]:
        """
        Fill raster for the current viewport.

        Args:
            viewport_rect: Visible world rectangle
            out_width: Display width in pixels
            out_height: Display height in pixels
            resize: Viewport size changed since the last draw

        Returns:
            Blit to draw, or None (hidden, fewer than 3 vertices, off-screen,
            zero-sized viewport)
        """
        if resize:
            self.cache.invalidate()
        if not self._visible or self.builder.vertex_count() < 3:
            return None

        bbox = self.builder.bounding_box()
        if self.builder.has_pending:
            # The preview ring reaches the pending vertex
            bbox = bbox.extended(self.builder.pending)
        if bbox.is_clipped(viewport_rect):
            return None

        return self.cache.draw(
            self.builder.ring(),
            bbox,
            viewport_rect,
            out_width,
            out_height,
            self.color,
        )

    def __repr__(self) -> str:
        return f"Region(name={self.name!r}, vertices={self.vertex_count()}, visible={self._visible})"
