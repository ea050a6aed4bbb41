"""
Rendering Layer
===============

Bounded Context: Turning polygons into pixels.

Responsibilities:
- Parity scanline fill of a ring (Rasterizer)
- Reuse vs. regeneration of the fill per viewport (RasterCache)
- Compositing fills and stroking outlines on a frame (RegionVisualizer)

Non-responsibilities:
- Polygon construction (polygon layer)
- Region naming / ownership (regions layer)
"""

from areamap_engine.rendering.rasterizer import Rasterizer, trace_ray
from areamap_engine.rendering.cache import Blit, CacheState, RasterCache, RasterCacheEntry
from areamap_engine.rendering.visualizer import RegionVisualizer

__all__ = [
    "Rasterizer",
    "trace_ray",
    "Blit",
    "CacheState",
    "RasterCache",
    "RasterCacheEntry",
    "RegionVisualizer",
]
