"""
Region colour generation.

Successive regions get well-separated hues: each step advances the hue by
180-300 degrees, with saturation and lightness kept in a readable band.
"""

from typing import Optional, Tuple

import numpy as np

RGB = Tuple[int, int, int]


def _hsl_channel(n1: float, n2: float, hue: float) -> int:
    if hue > 360:
        hue -= 360
    elif hue < 0:
        hue += 360

    if hue < 60:
        value = n1 + (n2 - n1) * hue / 60
    elif hue < 180:
        value = n2
    elif hue < 240:
        value = n1 + (n2 - n1) * (240 - hue) / 60
    else:
        value = n1
    return int(round(value * 255))


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RGB:
    """Convert HSL (hue in degrees, s and l in [0, 1]) to 8-bit RGB."""
    if lightness <= 0.5:
        cmax = lightness * (1 + saturation)
    else:
        cmax = lightness * (1 - saturation) + saturation
    cmin = 2 * lightness - cmax
    return (
        _hsl_channel(cmin, cmax, hue + 120),
        _hsl_channel(cmin, cmax, hue),
        _hsl_channel(cmin, cmax, hue - 120),
    )


class ColorGenerator:
    """
    Seeded hue walk producing one RGB colour per call.

    Usage:
        colors = ColorGenerator(seed=7)
        r, g, b = colors.next_color()
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)
        self._hue = 0

    def next_color(self) -> RGB:
        self._hue = int(self._hue + self._rng.uniform(180, 300)) % 360
        saturation = self._rng.uniform(0.75, 1.0)
        lightness = self._rng.uniform(0.45, 0.75)
        return hsl_to_rgb(self._hue, saturation, lightness)
