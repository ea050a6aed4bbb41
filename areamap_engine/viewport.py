"""
Viewport Module
===============

Pan / zoom state of the map window over the normalized plane.

Design:
- Zoom = tile level z (integer) x fractional scale k in [1, 2)
- pixels_per_side = k * 2^z * tile_size
- x wraps at the antimeridian, y is clamped to a latitude band
"""

from typing import Tuple

from areamap_engine.config import ViewportConfig
from areamap_engine.geometry.primitives import Point, Rect


class Viewport:
    """
    Window onto the map, origin at its top-left world position.

    Usage:
        viewport = Viewport.from_config(config.viewport)
        viewport.translate(40, -12)        # drag by pixels
        viewport.scale(640, 360, 1.25)     # wheel zoom around the cursor
        rect = viewport.world_rect()
    """

    def __init__(
        self,
        width: int,
        height: int,
        zoom: int = 15,
        scale: float = 1.0,
        min_zoom: int = 3,
        max_zoom: int = 18,
        tile_size: int = 256,
        lat_bounds: Tuple[float, float] = (0.15, 0.85),
    ):
        self.width = width
        self.height = height
        self.z = zoom
        self.k = scale
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.tile_size = tile_size
        self.lat_bounds = lat_bounds

        self.x = 0.5
        self.y = 0.5
        self.correct_position()

    @classmethod
    def from_config(cls, config: ViewportConfig) -> "Viewport":
        viewport = cls(
            width=config.width,
            height=config.height,
            zoom=config.zoom,
            scale=config.scale,
            min_zoom=config.min_zoom,
            max_zoom=config.max_zoom,
            tile_size=config.tile_size,
            lat_bounds=config.lat_bounds,
        )
        viewport.focus_on(*config.center)
        return viewport

    @property
    def pixels_per_side(self) -> float:
        return self.k * (1 << self.z) * self.tile_size

    def world_rect(self) -> Rect:
        pps = self.pixels_per_side
        return Rect(self.x, self.y, self.x + self.width / pps, self.y + self.height / pps)

    def cursor_to_world(self, mx: float, my: float) -> Point:
        pps = self.pixels_per_side
        return Point(self.x + mx / pps, self.y + my / pps)

    def world_to_pixel(self, point: Point) -> Tuple[float, float]:
        pps = self.pixels_per_side
        return ((point.x - self.x) * pps, (point.y - self.y) * pps)

    def correct_position(self) -> None:
        """Wrap x into [0, 1] and keep the window inside the latitude band."""
        screen_height = self.height / self.pixels_per_side
        low, high = self.lat_bounds

        if self.x > 1:
            self.x -= 1
        elif self.x < 0:
            self.x += 1

        if self.y < low:
            self.y = low + 1e-8
        elif self.y + screen_height > high:
            self.y = high - screen_height - 1e-8

    def translate(self, dx: int, dy: int) -> None:
        """Pan by a pixel delta (content follows the cursor)."""
        pps = self.pixels_per_side
        self.x -= dx / pps
        self.y -= dy / pps
        self.correct_position()

    def focus_on(self, cx: float, cy: float) -> None:
        """Centre the window on a world point."""
        pps = self.pixels_per_side
        self.x = cx - self.width / pps / 2
        self.y = cy - self.height / pps / 2
        self.correct_position()

    def scale(self, mx: int, my: int, factor: float) -> bool:
        """
        Zoom by `factor`, keeping the world point under the cursor fixed.

        Returns:
            False if the zoom limit is reached (nothing changes)
        """
        target = self.cursor_to_world(mx, my)

        k = self.k * factor
        if k >= 2:
            if self.z >= self.max_zoom:
                return False
            self.z += 1
            self.k = k / 2
        elif k < 1:
            if self.z <= self.min_zoom:
                return False
            self.z -= 1
            self.k = k * 2
        else:
            self.k = k

        self.x += (target.x - self.x) * (1 - 1 / factor)
        self.y += (target.y - self.y) * (1 - 1 / factor)
        self.correct_position()
        return True

    def fit(self, bbox_min: Point, bbox_max: Point, margin: float = 0.9) -> None:
        """
        Choose the deepest integer zoom showing the box, then centre on it.

        Args:
            bbox_min: Top-left world corner
            bbox_max: Bottom-right world corner
            margin: Fraction of the window the box may occupy
        """
        dx = bbox_max.x - bbox_min.x
        dy = bbox_max.y - bbox_min.y
        self.k = 1.0
        self.z = self.min_zoom
        for z in range(self.max_zoom, self.min_zoom - 1, -1):
            pps = (1 << z) * self.tile_size
            if dx * pps <= self.width * margin and dy * pps <= self.height * margin:
                self.z = z
                break
        self.focus_on((bbox_min.x + bbox_max.x) / 2, (bbox_min.y + bbox_max.y) / 2)

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.correct_position()

    def __repr__(self) -> str:
        return f"Viewport(x={self.x:.6f}, y={self.y:.6f}, z={self.z}, k={self.k:.3f}, {self.width}x{self.height})"
