"""
Areamap Engine
==============

Bounded Context: Drawing polygons on a Web Mercator map and measuring
their true area on the sphere.

Design Philosophy:
- Geometry is pure and stateless; construction state lives in one builder
- Area is accumulated incrementally on push, recomputed on undo
- Fill rasters are cached per viewport and regenerated only when needed
- The engine never raises for degenerate input; it reports legality instead

Architecture:

    areamap_engine/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── primitives.py  # Point, Rect, segment tests, ray crossings
    │   ├── legality.py    # LegalityChecker (simple-polygon queries)
    │   ├── spherical.py   # Haversine, spherical excess, AreaAccumulator
    │   └── projection.py  # WebMercator (normalized plane)
    │
    ├── polygon/           # Construction state
    │   └── builder.py     # PolygonBuilder, BoundingBox
    │
    ├── rendering/         # Pixels
    │   ├── rasterizer.py  # Parity scanline fill
    │   ├── cache.py       # RasterCache (regenerate vs. re-blit)
    │   └── visualizer.py  # RegionVisualizer (canvas adapter)
    │
    ├── regions/           # Named regions and the drawing workflow
    ├── viewport.py        # Pan / zoom state
    └── config.py          # YAML configuration

Usage:

    from areamap_engine import DrawingSession, EngineConfig, Viewport, RegionVisualizer

    config = EngineConfig.from_yaml("config/areas.yaml")
    session = DrawingSession.from_config(config)
    viewport = Viewport.from_config(config.viewport)

    draft = session.start()
    draft.push(*viewport.cursor_to_world(640, 360).as_tuple())
    draft.set_pending(*viewport.cursor_to_world(700, 380).as_tuple())
    print(draft.display_area())

    frame = RegionVisualizer.blank_canvas(viewport.width, viewport.height)
    frame = RegionVisualizer().render(frame, session, viewport)
"""

# Geometry Layer (immutable, stateless)
from areamap_engine.geometry import (
    EPSILON,
    Point,
    Rect,
    LegalityChecker,
    AreaAccumulator,
    WebMercator,
    WEB_MERCATOR,
)

# Construction
from areamap_engine.polygon import BoundingBox, PolygonBuilder, PolygonFinishedError

# Rendering Layer
from areamap_engine.rendering import Blit, Rasterizer, RasterCache, RegionVisualizer

# Regions Layer (stateful)
from areamap_engine.regions import DrawingSession, Region, RegionRegistry, format_area

# Viewport / configuration
from areamap_engine.viewport import Viewport
from areamap_engine.config import EngineConfig

__all__ = [
    # Geometry
    "EPSILON",
    "Point",
    "Rect",
    "LegalityChecker",
    "AreaAccumulator",
    "WebMercator",
    "WEB_MERCATOR",
    # Construction
    "BoundingBox",
    "PolygonBuilder",
    "PolygonFinishedError",
    # Rendering
    "Blit",
    "Rasterizer",
    "RasterCache",
    "RegionVisualizer",
    # Regions
    "DrawingSession",
    "Region",
    "RegionRegistry",
    "format_area",
    # Viewport / config
    "Viewport",
    "EngineConfig",
]

__version__ = "1.0.0"
