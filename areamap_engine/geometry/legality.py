"""
Legality Checker Module
=======================

Stateless self-intersection checks for a ring under construction.

Design:
- All methods are static (no instance state)
- Operate on the committed vertex sequence + one candidate (pending) vertex
- Fewer than 3 committed vertices is always legal
- Edges sharing an endpoint with the candidate edge are skipped, a
  shared-endpoint touch is not a crossing
"""

from typing import Sequence

from areamap_engine.geometry.primitives import Point, segments_intersect


class LegalityChecker:
    """
    Decides whether accepting the pending vertex keeps the ring simple.

    Usage:
        if LegalityChecker.legal(vertices, pending):
            builder.confirm_pending()

        if LegalityChecker.size_legal(vertices, pending):
            show(builder.speculative_area())
    """

    @staticmethod
    def legal(vertices: Sequence[Point], pending: Point) -> bool:
        """
        Check the candidate edge (last vertex -> pending).

        Tested against ring edges 0 .. N-3; edge N-2 ends at the last vertex.

        Args:
            vertices: Committed vertices, in ring order
            pending: Candidate vertex

        Returns:
            False if the candidate edge crosses an existing edge
        """
        n = len(vertices)
        if n < 3:
            return True

        last = vertices[-1]
        for i in range(n - 2):
            if segments_intersect(vertices[i], vertices[i + 1], last, pending):
                return False
        return True

    @staticmethod
    def size_legal(vertices: Sequence[Point], pending: Point) -> bool:
        """
        Check that the whole ring (vertices + pending, closed) is simple.

        Requires `legal()`, then tests the closing edge (pending -> vertex 0)
        against ring edges 1 .. N-2.
        """
        n = len(vertices)
        if n < 3:
            return True
        if not LegalityChecker.legal(vertices, pending):
            return False

        first = vertices[0]
        for i in range(1, n - 1):
            if segments_intersect(vertices[i], vertices[i + 1], first, pending):
                return False
        return True
