"""
Polygon Builder Module
======================

Incremental construction of a single ring on the normalized map plane.

Design:
- Mutable accumulators (vertices, bounding box, signed fan area)
- Explicit optional pending vertex (None = the ring closes on vertex 0)
- Append is incremental (one fan triangle, min/max update)
- Undo is a full recompute (bitwise inverse of push)
- No validation on push: legality is queried, never enforced, before commit
- Immutable once finished
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from areamap_engine.geometry.legality import LegalityChecker
from areamap_engine.geometry.primitives import Point, Rect
from areamap_engine.geometry.projection import WEB_MERCATOR
from areamap_engine.geometry.spherical import AreaAccumulator


class PolygonFinishedError(RuntimeError):
    """Raised when a finished (closed) polygon is edited."""
    pass


@dataclass(frozen=True)
class BoundingBox:
    """
    Component-wise min/max over a vertex set.

    Attributes:
        min: Top-left corner (smallest x and y)
        max: Bottom-right corner (largest x and y)
    """

    min: Point
    max: Point

    @classmethod
    def of(cls, point: Point) -> "BoundingBox":
        return cls(min=point, max=point)

    def extended(self, point: Point) -> "BoundingBox":
        """Return a box also covering `point`."""
        return BoundingBox(
            min=Point(min(self.min.x, point.x), min(self.min.y, point.y)),
            max=Point(max(self.max.x, point.x), max(self.max.y, point.y)),
        )

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def center(self) -> Point:
        return Point((self.min.x + self.max.x) / 2, (self.min.y + self.max.y) / 2)

    def is_clipped(self, rect: Rect) -> bool:
        """True if the box lies entirely outside `rect`."""
        return (
            rect.x1 > self.max.x
            or rect.y1 > self.max.y
            or rect.x2 < self.min.x
            or rect.y2 < self.min.y
        )

    def fits(self, dx: float, dy: float) -> bool:
        """True if the box is strictly smaller than a dx by dy viewport."""
        return dx > self.width and dy > self.height

    def as_tuple(self) -> Tuple[Point, Point]:
        return (self.min, self.max)


class PolygonBuilder:
    """
    Owns the committed vertices, bounding box, running area and pending vertex.

    The running area is the signed sum of the fan triangles
    (v0, v[i-1], v[i]) for i = 2..N-1, in square metres.

    Usage:
        builder = PolygonBuilder()
        builder.push(Point(0.8373, 0.4092))
        builder.set_pending(Point(0.8374, 0.4093))

        if builder.legal():
            builder.confirm_pending()

        builder.finish()
        area = builder.committed_area()
    """

    def __init__(
        self,
        accumulator: Optional[AreaAccumulator] = None,
        vertices: Iterable[Point] = (),
    ):
        """
        Args:
            accumulator: Fan-triangle area source (default: Web Mercator, Krasovsky sphere)
            vertices: Optional vertices to pre-seed, pushed in order
        """
        self.accumulator = accumulator or AreaAccumulator(WEB_MERCATOR.unproject)

        self._vertices: List[Point] = []
        self._bbox: Optional[BoundingBox] = None
        self._area = 0.0
        self._pending: Optional[Point] = None
        self._finished = False

        for vertex in vertices:
            self.push(vertex)

    # ========== Construction protocol ==========

    def push(self, point: Point) -> None:
        """Append a committed vertex (incremental bbox and area update)."""
        self._ensure_open()

        if not self._vertices:
            self._bbox = BoundingBox.of(point)
        else:
            self._bbox = self._bbox.extended(point)
        self._vertices.append(point)

        if len(self._vertices) > 2:
            self._area += self.accumulator.triangle(
                self._vertices[0], self._vertices[-2], self._vertices[-1]
            )

    def set_pending(self, point: Point) -> None:
        self._ensure_open()
        self._pending = point

    def reset_pending(self) -> None:
        """Drop the pending vertex; the preview ring closes on vertex 0 again."""
        self._ensure_open()
        self._pending = None

    def confirm_pending(self) -> None:
        """
        Commit the pending vertex, `push(effective_pending)`.

        Caller must check `legal()` first; an illegal vertex is accepted as is.
        With no pending vertex this pushes a copy of vertex 0.
        """
        self._ensure_open()
        pending = self.effective_pending
        if pending is None:
            return
        self.push(pending)

    def undo(self) -> None:
        """Remove the last committed vertex and fully recompute bbox and area."""
        self._ensure_open()
        if not self._vertices:
            return
        self._vertices.pop()
        self.recalculate()

    def finish(self) -> bool:
        """
        Close the ring by appending a copy of vertex 0.

        Requires at least 3 committed vertices, a legal preview ring (pending
        vertex included) and a closing edge (last vertex -> vertex 0) that
        crosses no other edge.

        Returns:
            True if the ring was closed, False otherwise (no-op)
        """
        if self._finished or len(self._vertices) < 3:
            return False
        if not self.legal():
            return False
        if self.has_pending and not LegalityChecker.legal(self._vertices, self._vertices[0]):
            return False

        self._pending = None
        self._vertices.append(self._vertices[0])
        self._finished = True
        return True

    def recalculate(self) -> None:
        """Rebuild bounding box and area from scratch."""
        self._area = 0.0
        if not self._vertices:
            self._bbox = None
            return

        bbox = BoundingBox.of(self._vertices[0])
        for vertex in self._vertices[1:]:
            bbox = bbox.extended(vertex)
        self._bbox = bbox

        if len(self._vertices) < 3:
            return
        first = self.accumulator.to_geographic(self._vertices[0])
        previous = self.accumulator.to_geographic(self._vertices[1])
        for vertex in self._vertices[2:]:
            current = self.accumulator.to_geographic(vertex)
            self._area += self.accumulator.triangle_geographic(first, previous, current)
            previous = current

    # ========== Query protocol ==========

    def vertex_count(self) -> int:
        return len(self._vertices)

    def bounding_box(self) -> Optional[BoundingBox]:
        return self._bbox

    @property
    def signed_area(self) -> float:
        return self._area

    def committed_area(self) -> float:
        """Area of the committed ring in m^2 (0 below 3 vertices)."""
        return abs(self._area)

    def speculative_area(self) -> float:
        """
        Area as if the pending vertex were appended.

        Only trustworthy while `size_legal()` holds.
        """
        if self._finished or len(self._vertices) < 2:
            return self.committed_area()
        extra = self.accumulator.triangle(
            self._vertices[0], self._vertices[-1], self.effective_pending
        )
        return abs(self._area + extra)

    def legal(self) -> bool:
        if self._finished or not self._vertices:
            return True
        return LegalityChecker.legal(self._vertices, self.effective_pending)

    def size_legal(self) -> bool:
        if self._finished or not self._vertices:
            return True
        return LegalityChecker.size_legal(self._vertices, self.effective_pending)

    @property
    def vertices(self) -> Tuple[Point, ...]:
        return tuple(self._vertices)

    @property
    def pending(self) -> Optional[Point]:
        return self._pending

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    @property
    def effective_pending(self) -> Optional[Point]:
        """The pending vertex, or vertex 0 when none is set."""
        if self._pending is not None:
            return self._pending
        if self._vertices:
            return self._vertices[0]
        return None

    @property
    def finished(self) -> bool:
        return self._finished

    def center(self) -> Optional[Point]:
        return self._bbox.center if self._bbox is not None else None

    def ring(self, include_pending: bool = True) -> Tuple[Point, ...]:
        """
        Closed boundary to trace, first vertex repeated at the end.

        While building, the pending vertex (if any and requested) is inserted
        between the last committed vertex and the closing vertex 0. The
        committed sequence itself is never modified.
        """
        if self._finished or not self._vertices:
            return tuple(self._vertices)

        ring = list(self._vertices)
        if include_pending and self._pending is not None:
            ring.append(self._pending)
        ring.append(self._vertices[0])
        return tuple(ring)

    def _ensure_open(self) -> None:
        if self._finished:
            raise PolygonFinishedError("Polygon is finished and can no longer be edited")

    def __repr__(self) -> str:
        return (
            f"PolygonBuilder(vertices={len(self._vertices)}, "
            f"finished={self._finished}, area={self.committed_area():.1f})"
        )
