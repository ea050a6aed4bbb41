"""Tests for self-intersection checks."""

from areamap_engine.geometry.legality import LegalityChecker
from areamap_engine.geometry.primitives import Point
from areamap_engine.polygon.builder import PolygonBuilder


def _points(*coords):
    return [Point(x, y) for x, y in coords]


def test_bowtie_pending_is_illegal():
    builder = PolygonBuilder(vertices=_points((0, 0), (1, 1), (0, 1)))
    builder.set_pending(Point(1, 0))
    assert not builder.legal()
    assert not builder.size_legal()


def test_square_pending_is_legal():
    builder = PolygonBuilder(vertices=_points((0, 0), (1, 0), (1, 1)))
    builder.set_pending(Point(0, 1))
    assert builder.legal()
    assert builder.size_legal()


def test_closing_edge_crossing_is_only_size_illegal():
    vertices = _points((0, 0), (2, 0), (2, 2))
    pending = Point(3, 1)
    assert LegalityChecker.legal(vertices, pending)
    assert not LegalityChecker.size_legal(vertices, pending)


def test_fewer_than_three_vertices_is_always_legal():
    assert LegalityChecker.legal(_points((0, 0), (1, 1)), Point(5, -5))
    assert LegalityChecker.size_legal(_points((0, 0)), Point(5, -5))


def test_empty_builder_is_legal():
    builder = PolygonBuilder()
    assert builder.legal()
    assert builder.size_legal()


def test_pending_touching_existing_vertex_is_legal():
    vertices = _points((0, 0), (2, 0), (2, 2), (1, 3))
    # Edge (1, 3) -> (2, 0) ends on a shared vertex
    assert LegalityChecker.legal(vertices, Point(2, 0))
