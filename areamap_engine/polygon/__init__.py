"""
Polygon Layer
=============

Bounded Context: One ring under construction (stateful).

Responsibilities:
- Committed vertex sequence + pending vertex
- Incremental bounding box and signed spherical area
- Construction protocol (push / pending / confirm / undo / finish)

Non-responsibilities:
- Rasterization and caching (rendering layer)
- Names, colours, visibility (regions layer)
"""

from areamap_engine.polygon.builder import BoundingBox, PolygonBuilder, PolygonFinishedError

__all__ = [
    "BoundingBox",
    "PolygonBuilder",
    "PolygonFinishedError",
]
