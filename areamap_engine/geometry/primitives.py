"""
Geometric Primitives Module
===========================

Pure 2D predicates over the normalized map plane - NO state, NO side effects.

Design:
- Immutable value types (frozen dataclass pattern)
- One fixed tolerance (EPSILON) shared by every higher layer
- Degenerate input returns a default (False / None), never raises
"""

from dataclasses import dataclass
from typing import Optional, Tuple


# Tolerance in the normalized [0, 1] coordinate space.
EPSILON = 1e-16


@dataclass(frozen=True)
class Point:
    """
    Immutable (x, y) pair in normalized projected space.

    Attributes:
        x: Horizontal coordinate (wraps at the antimeridian)
        y: Vertical coordinate (grows southward)
    """

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned world-space rectangle (x1, y1)-(x2, y2)."""

    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1

    @property
    def origin(self) -> Point:
        return Point(self.x1, self.y1)


def cross(o: Point, a: Point, b: Point) -> float:
    """Z component of (a - o) x (b - o)."""
    return (a.x - o.x) * (b.y - o.y) - (b.x - o.x) * (a.y - o.y)


def on_segment(q: Point, p1: Point, p2: Point) -> bool:
    """
    Check whether q lies on the closed segment p1-p2.

    Collinearity is tested with EPSILON; containment uses the segment's
    bounding box, so coincident endpoints still behave.

    Args:
        q: Point to test
        p1: Segment start
        p2: Segment end

    Returns:
        True if q is on the segment
    """
    d = (p1.x - q.x) * (p2.y - q.y) - (p2.x - q.x) * (p1.y - q.y)
    return (
        abs(d) < EPSILON
        and (q.x - p1.x) * (q.x - p2.x) <= 0
        and (q.y - p1.y) * (q.y - p2.y) <= 0
    )


def ray_intersect(p1: Point, p2: Point, q: Point) -> Optional[float]:
    """
    Intersect segment p1-p2 with the ray leaving q towards +x.

    Degenerate cases, in order:
    1. Segment entirely left of, above or below the ray -> None
    2. q on the segment, or the segment is horizontal -> None
    3. The ray passes through an endpoint -> counted only when that endpoint
       is the upper one (larger y) and lies strictly right of q
    4. Otherwise interpolate and accept crossings at or right of q

    Args:
        p1: Segment start
        p2: Segment end
        q: Ray origin

    Returns:
        x coordinate of the crossing, or None
    """
    if max(p1.x, p2.x) < q.x or max(p1.y, p2.y) < q.y or q.y < min(p1.y, p2.y):
        return None
    if on_segment(q, p1, p2) or abs(p2.y - p1.y) < EPSILON:
        return None

    # Only the upper endpoint counts
    if abs(p1.y - q.y) <= EPSILON:
        if p1.x > q.x and p1.y > p2.y:
            return p1.x
        return None
    if abs(p2.y - q.y) <= EPSILON:
        if p2.x > q.x and p2.y > p1.y:
            return p2.x
        return None

    p1q = p1.y - q.y
    qp2 = q.y - p2.y
    x = p1.x + (p2.x - p1.x) * (p1q / (p1q + qp2))
    if x < q.x:
        return None
    return x


def segments_intersect(p1: Point, p2: Point, q1: Point, q2: Point) -> bool:
    """
    Check whether segments p1-p2 and q1-q2 properly cross.

    Bounding-box rejection first, then the endpoints of each segment must lie
    strictly on opposite sides of the other. Touching (shared endpoint,
    T-junction, collinear overlap) is not a crossing.
    """
    if (
        max(p1.x, p2.x) < min(q1.x, q2.x)
        or max(p1.y, p2.y) < min(q1.y, q2.y)
        or max(q1.x, q2.x) < min(p1.x, p2.x)
        or max(q1.y, q2.y) < min(p1.y, p2.y)
    ):
        return False

    if cross(p1, p2, q1) * cross(p1, p2, q2) >= 0:
        return False
    if cross(q1, q2, p1) * cross(q1, q2, p2) >= 0:
        return False
    return True
