"""Tests for colour generation and area formatting."""

from areamap_engine.regions.colors import ColorGenerator, hsl_to_rgb
from areamap_engine.regions.units import ILLEGAL_AREA, format_area


def test_hsl_primaries():
    assert hsl_to_rgb(0, 1.0, 0.5) == (255, 0, 0)
    assert hsl_to_rgb(120, 1.0, 0.5) == (0, 255, 0)
    assert hsl_to_rgb(240, 1.0, 0.5) == (0, 0, 255)


def test_hsl_grey_and_extremes():
    assert hsl_to_rgb(200, 0.0, 0.5) == (128, 128, 128)
    assert hsl_to_rgb(0, 1.0, 1.0) == (255, 255, 255)
    assert hsl_to_rgb(0, 1.0, 0.0) == (0, 0, 0)


def test_color_generator_is_seeded():
    first = ColorGenerator(seed=7)
    second = ColorGenerator(seed=7)
    assert [first.next_color() for _ in range(5)] == [second.next_color() for _ in range(5)]


def test_color_generator_values_in_range():
    colors = ColorGenerator(seed=1)
    for _ in range(50):
        color = colors.next_color()
        assert len(color) == 3
        assert all(0 <= channel <= 255 for channel in color)


def test_format_area_units():
    assert format_area(9876.54321) == "9877 m²"
    assert format_area(12.5) == "12.5 m²"
    assert format_area(2.5e6) == "2.5000 km²"
    assert format_area(5.1e14) == "5.100e+08 km²"
    assert format_area(0.0) == "0 m²"


def test_illegal_area_marker():
    assert ILLEGAL_AREA == "---"
