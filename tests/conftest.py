"""Shared test fixtures."""

import math

import pytest

from areamap_engine.geometry.primitives import Point
from areamap_engine.geometry.projection import WEB_MERCATOR
from areamap_engine.geometry.spherical import EARTH_RADIUS


# Somewhere in Shanghai, away from the poles and the antimeridian
ORIGIN_LON = 121.4310
ORIGIN_LAT = 31.0250


def metres_to_degrees(dx: float, dy: float, lat: float = ORIGIN_LAT):
    """East/north offsets in metres -> (dlon, dlat) degrees on the sphere."""
    dlat = math.degrees(dy / EARTH_RADIUS)
    dlon = math.degrees(dx / (EARTH_RADIUS * math.cos(math.radians(lat))))
    return dlon, dlat


def geo_square(side: float, lon: float = ORIGIN_LON, lat: float = ORIGIN_LAT):
    """Counter-clockwise (lon, lat) square with `side` metre edges, SW corner first."""
    dlon, dlat = metres_to_degrees(side, side, lat)
    return [(lon, lat), (lon + dlon, lat), (lon + dlon, lat + dlat), (lon, lat + dlat)]


def projected(coordinates):
    return [Point(*WEB_MERCATOR.project(lon, lat)) for lon, lat in coordinates]


def closed(points):
    """Ring with the first point repeated at the end."""
    points = [Point(*p) if not isinstance(p, Point) else p for p in points]
    return points + [points[0]]


@pytest.fixture
def square_100m():
    return projected(geo_square(100.0))


@pytest.fixture
def unit_square_ring():
    return closed([(0, 0), (1, 0), (1, 1), (0, 1)])


CONFIG_YAML = """
geodesy:
  earth_radius: 6378245.0
  small_side_threshold: 100.0

render:
  downsample: 3
  fill_alpha: 64
  color_seed: 7

viewport:
  width: 320
  height: 240
  zoom: 15
  center: [0.837324, 0.409268]

regions:
  - name: "campus"
    coordinates:
      - [121.4310, 31.0250]
      - [121.4460, 31.0250]
      - [121.4460, 31.0360]
      - [121.4310, 31.0360]
    color: [255, 0, 0]
  - name: "plaza"
    coordinates:
      - [121.4380, 31.0290]
      - [121.4392, 31.0290]
      - [121.4386, 31.0298]
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "areas.yaml"
    path.write_text(CONFIG_YAML)
    return path
