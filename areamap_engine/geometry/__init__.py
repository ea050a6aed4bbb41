"""
Geometry Layer
==============

Bounded Context: Pure geometry on the normalized map plane and the sphere.

Responsibilities:
- Point / segment / ray predicates
- Self-intersection (legality) checks
- Great-circle distances and signed triangle areas
- Projection between geographic and normalized coordinates
- NO state, NO caching, NO drawing

Design Philosophy:
- Pure functions where possible
- Immutable value types
- One shared tolerance (EPSILON)
"""

from areamap_engine.geometry.primitives import (
    EPSILON,
    Point,
    Rect,
    on_segment,
    ray_intersect,
    segments_intersect,
)
from areamap_engine.geometry.legality import LegalityChecker
from areamap_engine.geometry.spherical import (
    EARTH_RADIUS,
    SMALL_SIDE_THRESHOLD,
    AreaAccumulator,
    distance,
    initial_bearing,
    spherical_triangle_area,
)
from areamap_engine.geometry.projection import Projection, WebMercator, WEB_MERCATOR

__all__ = [
    # Primitives
    "EPSILON",
    "Point",
    "Rect",
    "on_segment",
    "ray_intersect",
    "segments_intersect",
    # Legality
    "LegalityChecker",
    # Spherical
    "EARTH_RADIUS",
    "SMALL_SIDE_THRESHOLD",
    "AreaAccumulator",
    "distance",
    "initial_bearing",
    "spherical_triangle_area",
    # Projection
    "Projection",
    "WebMercator",
    "WEB_MERCATOR",
]
