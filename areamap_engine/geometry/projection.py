"""
Map Projection Module
=====================

Conversions between geographic coordinates and the normalized map plane.

    Web Mercator (normalized):   x [   0,   1] *   y [  0,  1]
    Geographic:                lon [-180, 180] * lat [ 85,-85]

The engine only consumes the `Projection` protocol, so a datum-shifting
projection can be injected without touching the geometry.
"""

import math
from typing import Protocol, Tuple


class Projection(Protocol):
    """Protocol for projections (interface)."""

    def project(self, lon: float, lat: float) -> Tuple[float, float]:
        """Geographic degrees -> normalized (x, y)."""
        ...

    def unproject(self, x: float, y: float) -> Tuple[float, float]:
        """Normalized (x, y) -> geographic (lon, lat) degrees."""
        ...


class WebMercator:
    """Spherical Web Mercator scaled to the unit square, y growing southward."""

    @staticmethod
    def project(lon: float, lat: float) -> Tuple[float, float]:
        phi = math.radians(lat)
        x = (lon + 180.0) / 360.0
        y = 0.5 - math.log(math.tan(phi) + 1.0 / math.cos(phi)) / (2.0 * math.pi)
        return x, y

    @staticmethod
    def unproject(x: float, y: float) -> Tuple[float, float]:
        lon = x * 360.0 - 180.0
        lat = math.degrees(math.atan(math.sinh(math.pi - 2.0 * math.pi * y)))
        return lon, lat


WEB_MERCATOR = WebMercator()
