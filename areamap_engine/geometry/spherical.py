"""
Spherical Geometry Module
=========================

Great-circle distance, bearings and signed triangle areas on a sphere.

Design:
- Pure functions over (lon, lat) degrees
- Hybrid area formula chosen by scale:
    * every side below `small_side` metres -> planar Heron magnitude,
      signed by the spherical excess (avoids cancellation for tiny triangles)
    * otherwise -> spherical excess x R^2
- Counter-clockwise in (lon east, lat north) yields a positive area
- Degenerate triangles return 0.0, never raise

References:
- https://en.wikipedia.org/wiki/Haversine_formula
- http://www.movable-type.co.uk/scripts/latlong.html
"""

import math
from typing import Callable, Tuple

from areamap_engine.geometry.primitives import EPSILON, Point


# Krasovsky 1940 semi-major axis, metres
EARTH_RADIUS = 6378245.0

# Side length (metres) below which a triangle counts as planar
SMALL_SIDE_THRESHOLD = 100.0

LonLat = Tuple[float, float]


def distance(lat_a: float, lng_a: float, lat_b: float, lng_b: float, radius: float = EARTH_RADIUS) -> float:
    """Haversine great-circle distance in the units of `radius`."""
    phi_a = math.radians(lat_a)
    phi_b = math.radians(lat_b)
    d_phi = phi_b - phi_a
    d_lambda = math.radians(lng_b - lng_a)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi_a) * math.cos(phi_b) * math.sin(d_lambda / 2) ** 2
    h = min(max(h, 0.0), 1.0)
    return 2.0 * radius * math.asin(math.sqrt(h))


def initial_bearing(lat_a: float, lng_a: float, lat_b: float, lng_b: float) -> float:
    """
    Initial great-circle bearing from A to B, radians clockwise from north.

    The northward component cos(a)sin(b) - sin(a)cos(b)cos(dl) is evaluated
    as sin(b - a) + 2 sin(a)cos(b)sin^2(dl / 2), which keeps full precision
    for points metres apart.
    """
    phi_a = math.radians(lat_a)
    phi_b = math.radians(lat_b)
    d_lambda = math.radians(lng_b - lng_a)
    east = math.sin(d_lambda) * math.cos(phi_b)
    north = math.sin(phi_b - phi_a) + 2.0 * math.sin(phi_a) * math.cos(phi_b) * math.sin(d_lambda / 2) ** 2
    return math.atan2(east, north)


def _interior_angle(at: LonLat, towards: LonLat, away: LonLat) -> float:
    # Signed angle between two bearings, folded into [-pi, pi]
    theta = initial_bearing(at[1], at[0], towards[1], towards[0]) - initial_bearing(at[1], at[0], away[1], away[0])
    return math.remainder(theta, 2.0 * math.pi)


def angle_sum(a: LonLat, b: LonLat, c: LonLat) -> float:
    """Signed sum of the interior angles of triangle abc (about +-pi)."""
    return _interior_angle(a, b, c) + _interior_angle(b, c, a) + _interior_angle(c, a, b)


def spherical_excess(a: LonLat, b: LonLat, c: LonLat) -> float:
    """
    Signed spherical excess of triangle abc in steradians.

    The angle sum is about +pi for a counter-clockwise triangle and about
    -pi for a clockwise one; the excess is its distance from that pole.
    """
    total = angle_sum(a, b, c)
    if total > 0:
        return total - math.pi
    return total + math.pi


def planar_triangle_area(a: float, b: float, c: float) -> float:
    """Unsigned Heron's formula area from three side lengths."""
    p = (a + b + c) / 2
    product = p * (p - a) * (p - b) * (p - c)
    if product <= EPSILON:
        return 0.0
    return math.sqrt(product)


def spherical_triangle_area(
    a: LonLat,
    b: LonLat,
    c: LonLat,
    radius: float = EARTH_RADIUS,
    small_side: float = SMALL_SIDE_THRESHOLD,
) -> float:
    """
    Signed area of the spherical triangle abc.

    Args:
        a, b, c: (lon, lat) vertices in degrees
        radius: Sphere radius
        small_side: Side length below which Heron's formula is used

    Returns:
        Signed area in radius units squared (0.0 for coincident vertices)
    """
    if a == b or a == c or b == c:
        return 0.0

    side_a = distance(b[1], b[0], c[1], c[0], radius)
    side_b = distance(a[1], a[0], c[1], c[0], radius)
    side_c = distance(a[1], a[0], b[1], b[0], radius)
    excess = spherical_excess(a, b, c)

    if side_a < small_side and side_b < small_side and side_c < small_side:
        magnitude = planar_triangle_area(side_a, side_b, side_c)
        return magnitude if excess > 0 else -magnitude

    return excess * radius * radius


class AreaAccumulator:
    """
    Signed area contribution of one fan triangle in projected space.

    Converts projected points through the injected `unproject` collaborator
    and applies `spherical_triangle_area`.

    Usage:
        accumulator = AreaAccumulator(WEB_MERCATOR.unproject)
        area = accumulator.triangle(v0, v1, v2)
    """

    def __init__(
        self,
        unproject: Callable[[float, float], LonLat],
        radius: float = EARTH_RADIUS,
        small_side: float = SMALL_SIDE_THRESHOLD,
    ):
        self.unproject = unproject
        self.radius = radius
        self.small_side = small_side

    def to_geographic(self, point: Point) -> LonLat:
        return self.unproject(point.x, point.y)

    def triangle(self, p0: Point, p1: Point, p2: Point) -> float:
        return self.triangle_geographic(
            self.to_geographic(p0), self.to_geographic(p1), self.to_geographic(p2)
        )

    def triangle_geographic(self, a: LonLat, b: LonLat, c: LonLat) -> float:
        return spherical_triangle_area(a, b, c, self.radius, self.small_side)
