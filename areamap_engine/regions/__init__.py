"""
Regions Layer
=============

Bounded Context: Named, coloured regions and the drawing workflow (stateful).

Responsibilities:
- Region: polygon + colour + visibility + raster cache (engine facade)
- RegionRegistry: committed regions by name
- DrawingSession: draft slot + registry + shared services
- Colour generation and area formatting

Design Philosophy:
- Exclusive ownership (draft slot or registry, never both)
- Explicit context instead of global state
"""

from areamap_engine.regions.colors import ColorGenerator, hsl_to_rgb
from areamap_engine.regions.region import Region
from areamap_engine.regions.registry import RegionRegistry
from areamap_engine.regions.session import DrawingSession
from areamap_engine.regions.units import ILLEGAL_AREA, format_area

__all__ = [
    "ColorGenerator",
    "hsl_to_rgb",
    "Region",
    "RegionRegistry",
    "DrawingSession",
    "ILLEGAL_AREA",
    "format_area",
]
