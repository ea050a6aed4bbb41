"""Tests for spherical distances and triangle areas."""

import math

import pytest

from areamap_engine.geometry.spherical import (
    EARTH_RADIUS,
    AreaAccumulator,
    distance,
    initial_bearing,
    planar_triangle_area,
    spherical_triangle_area,
)
from areamap_engine.geometry.projection import WEB_MERCATOR
from tests.conftest import ORIGIN_LAT, ORIGIN_LON, metres_to_degrees, projected


def _triangle(east: float, north: float):
    dlon, dlat = metres_to_degrees(east, north)
    return (
        (ORIGIN_LON, ORIGIN_LAT),
        (ORIGIN_LON + dlon, ORIGIN_LAT),
        (ORIGIN_LON, ORIGIN_LAT + dlat),
    )


def test_distance_one_degree_of_latitude():
    assert distance(0.0, 0.0, 1.0, 0.0) == pytest.approx(EARTH_RADIUS * math.pi / 180)


def test_distance_is_symmetric_and_zero_on_coincident_points():
    assert distance(31.0, 121.0, 31.5, 121.5) == pytest.approx(distance(31.5, 121.5, 31.0, 121.0))
    assert distance(31.0, 121.0, 31.0, 121.0) == 0.0


def test_initial_bearing_cardinal_directions():
    assert initial_bearing(0.0, 0.0, 1.0, 0.0) == pytest.approx(0.0)
    assert initial_bearing(0.0, 0.0, 0.0, 1.0) == pytest.approx(math.pi / 2)


def test_planar_triangle_area():
    assert planar_triangle_area(3.0, 4.0, 5.0) == pytest.approx(6.0)
    assert planar_triangle_area(1.0, 1.0, 2.0) == 0.0


def test_counter_clockwise_triangle_is_positive():
    a, b, c = _triangle(60.0, 40.0)
    assert spherical_triangle_area(a, b, c) > 0
    assert spherical_triangle_area(a, c, b) < 0


def test_small_and_large_branches_agree():
    a, b, c = _triangle(60.0, 40.0)
    heron = spherical_triangle_area(a, b, c, small_side=100.0)
    excess = spherical_triangle_area(a, b, c, small_side=0.0)
    assert heron == pytest.approx(1200.0, rel=1e-3)
    assert excess == pytest.approx(heron, rel=1e-3)


def test_large_triangle_uses_spherical_excess():
    a, b, c = _triangle(5000.0, 5000.0)
    assert spherical_triangle_area(a, b, c) == pytest.approx(12.5e6, rel=1e-3)


def test_octant_triangle():
    # One eighth of the sphere
    area = spherical_triangle_area((0.0, 0.0), (90.0, 0.0), (0.0, 90.0), radius=1.0, small_side=0.0)
    assert area == pytest.approx(math.pi / 2)


def test_coincident_vertices_have_zero_area():
    a, b, _ = _triangle(60.0, 40.0)
    assert spherical_triangle_area(a, a, b) == 0.0
    assert spherical_triangle_area(a, b, b) == 0.0


def test_accumulator_works_in_projected_space():
    accumulator = AreaAccumulator(WEB_MERCATOR.unproject)
    p0, p1, p2 = projected(_triangle(60.0, 40.0))
    assert abs(accumulator.triangle(p0, p1, p2)) == pytest.approx(1200.0, rel=1e-3)
