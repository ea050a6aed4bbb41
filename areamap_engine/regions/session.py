"""
Drawing Session Module
======================

Explicit context for the interaction layer: the in-progress draft slot,
the committed-regions registry, and the shared geometry / raster services.

Design:
- At most one draft at a time
- finish() moves the draft into the registry only when it closes cleanly;
  a rejected finish keeps the draft for further editing
- cancel() discards the draft
- Events applied strictly in call order (no batching)
"""

from typing import List, Optional, Tuple

from areamap_engine.config import EngineConfig, RegionConfig
from areamap_engine.geometry.projection import Projection, WEB_MERCATOR
from areamap_engine.geometry.spherical import AreaAccumulator
from areamap_engine.logging import LogEvent, StructuredLogger, create_logger
from areamap_engine.polygon.builder import PolygonBuilder
from areamap_engine.rendering.cache import Blit
from areamap_engine.rendering.rasterizer import Rasterizer
from areamap_engine.regions.colors import ColorGenerator
from areamap_engine.regions.region import Region
from areamap_engine.regions.registry import RegionRegistry
from areamap_engine.viewport import Viewport


class DrawingSession:
    """
    Owns the draft region and the committed regions.

    Usage:
        session = DrawingSession.from_config(config)

        draft = session.start()
        draft.push(0.83735, 0.409238)
        ...
        if session.finish():
            print(session.registry.info())

        for region, blit in session.render(viewport):
            canvas.draw(blit)
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        projection: Projection = WEB_MERCATOR,
        logger: Optional[StructuredLogger] = None,
    ):
        self.config = config or EngineConfig()
        self.projection = projection
        self.logger = logger or create_logger("session")

        geodesy = self.config.geodesy
        self.accumulator = AreaAccumulator(
            projection.unproject,
            radius=geodesy.earth_radius,
            small_side=geodesy.small_side_threshold,
        )
        self.rasterizer = Rasterizer(downsample=self.config.render.downsample)
        self.colors = ColorGenerator(self.config.render.color_seed)
        self.registry = RegionRegistry(logger=self.logger)

        self.draft: Optional[Region] = None
        self._count = 0

    @classmethod
    def from_config(cls, config: EngineConfig, projection: Projection = WEB_MERCATOR) -> "DrawingSession":
        """Create a session with the configured regions already committed."""
        session = cls(config=config, projection=projection)
        for region_config in config.regions:
            session.add_region(region_config)
        return session

    def _next_color(self) -> Tuple[int, int, int, int]:
        r, g, b = self.colors.next_color()
        return (r, g, b, self.config.render.fill_alpha)

    def add_region(self, region_config: RegionConfig) -> Region:
        """
        Commit a region described by (lon, lat) coordinates.

        Raises:
            ValueError: If the ring is not simple or the name is taken
        """
        if region_config.color is not None:
            color = (*region_config.color, self.config.render.fill_alpha)
        else:
            color = self._next_color()

        region = Region.from_coordinates(
            name=region_config.name,
            coordinates=region_config.coordinates,
            color=color,
            projection=self.projection,
            accumulator=self.accumulator,
            rasterizer=self.rasterizer,
            visible=region_config.visible,
            logger=self.logger,
        )
        self.registry.add(region)
        return region

    # ========== Draft lifecycle ==========

    def start(self, name: Optional[str] = None) -> Region:
        """
        Open a new draft region.

        Raises:
            RuntimeError: If a draft is already open
        """
        if self.draft is not None:
            raise RuntimeError(f"Region '{self.draft.name}' is still being drawn")

        self._count += 1
        self.draft = Region(
            name=name or f"Area {self._count}",
            color=self._next_color(),
            builder=PolygonBuilder(accumulator=self.accumulator),
            rasterizer=self.rasterizer,
            logger=self.logger,
        )
        self.logger.info(
            LogEvent.REGION_STARTED,
            f"Drawing '{self.draft.name}'",
            metadata={'name': self.draft.name, 'color': list(self.draft.color)},
        )
        return self.draft

    def rename(self, name: str) -> None:
        """Rename the draft; an empty name falls back to the generated one."""
        if self.draft is not None:
            self.draft.name = name or f"Area {self._count}"

    def undo(self) -> None:
        if self.draft is not None:
            self.draft.undo()

    def cancel(self) -> None:
        if self.draft is None:
            return
        self.logger.info(
            LogEvent.REGION_CANCELLED,
            f"Draft '{self.draft.name}' discarded",
            metadata={'name': self.draft.name, 'vertices': self.draft.vertex_count()},
        )
        self.draft = None

    def finish(self) -> bool:
        """
        Close the draft and move it into the registry.

        Returns:
            True if the draft was committed; False if there is no draft, the
            ring cannot close (fewer than 3 vertices, self-intersecting preview),
            or its name is already taken
        """
        draft = self.draft
        if draft is None:
            return False

        reason = None
        if draft.name in self.registry:
            reason = "name already taken"
        elif not draft.finish():
            reason = "ring cannot be closed"

        if reason is not None:
            self.logger.warning(
                LogEvent.REGION_FINISH_REJECTED,
                f"Cannot finish '{draft.name}': {reason}",
                metadata={'name': draft.name, 'vertices': draft.vertex_count()},
            )
            return False

        self.registry.add(draft)
        self.draft = None
        self.logger.info(
            LogEvent.REGION_FINISHED,
            f"Region '{draft.name}' finished",
            metadata={
                'name': draft.name,
                'vertices': draft.vertex_count() - 1,
                'area_m2': draft.committed_area(),
            },
        )
        return True

    # ========== Rendering ==========

    def regions(self) -> List[Region]:
        """Committed regions followed by the draft (draw order)."""
        regions = list(self.registry)
        if self.draft is not None:
            regions.append(self.draft)
        return regions

    def render(self, viewport: Viewport, resize: bool = False) -> List[Tuple[Region, Blit]]:
        """
        Rasterize every visible region for the viewport.

        Args:
            viewport: Current map window
            resize: Window size changed since the last render

        Returns:
            (region, blit) pairs in draw order; regions with nothing to draw
            are omitted
        """
        rect = viewport.world_rect()
        blits = []
        for region in self.regions():
            blit = region.rasterize(rect, viewport.width, viewport.height, resize=resize)
            if blit is not None:
                blits.append((region, blit))
        return blits

    def focus(self, name: str, viewport: Viewport) -> None:
        """Centre the viewport on a committed region."""
        center = self.registry.get(name).center()
        viewport.focus_on(center.x, center.y)
