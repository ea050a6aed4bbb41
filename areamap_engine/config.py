"""
Configuration schema for the area engine.

This module defines the configuration structure: geodesy constants,
rendering tunables, the initial viewport and optional pre-seeded regions.
Everything is validated at construction and immutable afterwards.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
import yaml

from areamap_engine.geometry.spherical import EARTH_RADIUS, SMALL_SIDE_THRESHOLD


@dataclass(frozen=True)
class GeodesyConfig:
    """Sphere used for area computation."""

    earth_radius: float = EARTH_RADIUS
    small_side_threshold: float = SMALL_SIDE_THRESHOLD  # metres

    def __post_init__(self):
        if self.earth_radius <= 0:
            raise ValueError(f"earth_radius must be positive, got {self.earth_radius}")
        if self.small_side_threshold < 0:
            raise ValueError(
                f"small_side_threshold must be >= 0, got {self.small_side_threshold}"
            )


@dataclass(frozen=True)
class RenderConfig:
    """Rasterization and stroke tunables."""

    downsample: int = 3
    fill_alpha: int = 32
    outline_thickness: int = 3
    pending_thickness: int = 2
    color_seed: Optional[int] = None

    def __post_init__(self):
        if not 1 <= self.downsample <= 16:
            raise ValueError(f"downsample must be in [1, 16], got {self.downsample}")
        if not 0 <= self.fill_alpha <= 255:
            raise ValueError(f"fill_alpha must be in [0, 255], got {self.fill_alpha}")
        if self.outline_thickness < 1 or self.pending_thickness < 1:
            raise ValueError("Stroke thickness must be >= 1")


@dataclass(frozen=True)
class ViewportConfig:
    """Initial viewport over the normalized map."""

    width: int = 1280
    height: int = 720
    zoom: int = 15
    scale: float = 1.0
    min_zoom: int = 3
    max_zoom: int = 18
    tile_size: int = 256
    lat_bounds: Tuple[float, float] = (0.15, 0.85)
    center: Tuple[float, float] = (0.837324, 0.409268)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Viewport must have positive dimensions, got {self.width}x{self.height}"
            )
        if not self.min_zoom <= self.zoom <= self.max_zoom:
            raise ValueError(
                f"zoom must be in [{self.min_zoom}, {self.max_zoom}], got {self.zoom}"
            )
        if not 1.0 <= self.scale < 2.0:
            raise ValueError(f"scale must be in [1.0, 2.0), got {self.scale}")
        low, high = self.lat_bounds
        if not 0.0 <= low < high <= 1.0:
            raise ValueError(f"lat_bounds must satisfy 0 <= low < high <= 1, got {self.lat_bounds}")


@dataclass(frozen=True)
class RegionConfig:
    """Pre-seeded region, coordinates as (lon, lat) degrees."""

    name: str
    coordinates: List[Tuple[float, float]]
    color: Optional[Tuple[int, int, int]] = None
    visible: bool = True

    def __post_init__(self):
        if not self.name:
            raise ValueError("Region name cannot be empty")
        if len(self.coordinates) < 3:
            raise ValueError(
                f"Region '{self.name}' must have at least 3 points, "
                f"got {len(self.coordinates)}"
            )
        if self.color is not None:
            if len(self.color) != 3 or not all(0 <= c <= 255 for c in self.color):
                raise ValueError(
                    f"Region '{self.name}' color must be 3 values in [0, 255], got {self.color}"
                )


@dataclass(frozen=True)
class EngineConfig:
    """
    Main configuration.

    Loaded from YAML and validated at startup.
    """

    geodesy: GeodesyConfig = field(default_factory=GeodesyConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    viewport: ViewportConfig = field(default_factory=ViewportConfig)
    regions: List[RegionConfig] = field(default_factory=list)

    def __post_init__(self):
        names = [r.name for r in self.regions]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"Duplicate region names: {sorted(duplicates)}")

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "EngineConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            geodesy:
              earth_radius: 6378245.0
              small_side_threshold: 100.0

            render:
              downsample: 3
              fill_alpha: 32
              color_seed: 7

            viewport:
              width: 1280
              height: 720
              zoom: 15
              center: [0.837324, 0.409268]

            regions:
              - name: "campus"
                coordinates: [[121.431, 31.025], [121.446, 31.025], [121.446, 31.036]]
                color: [255, 0, 0]

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the YAML is invalid or a section fails validation
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(yaml_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config {yaml_path} must be a mapping, got {type(data).__name__}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "EngineConfig":
        try:
            return cls._from_dict(data)
        except (TypeError, AttributeError) as e:
            # Unknown keys or a section that is not a mapping
            raise ValueError(f"Invalid config structure: {e}")

    @classmethod
    def _from_dict(cls, data: dict) -> "EngineConfig":
        geodesy = GeodesyConfig(**data.get("geodesy", {}))
        render = RenderConfig(**data.get("render", {}))

        viewport_data = dict(data.get("viewport", {}))
        for key in ("lat_bounds", "center"):
            if key in viewport_data:
                viewport_data[key] = tuple(viewport_data[key])
        viewport = ViewportConfig(**viewport_data)

        regions = [
            RegionConfig(
                name=r["name"],
                coordinates=[tuple(coord) for coord in r["coordinates"]],
                color=tuple(r["color"]) if r.get("color") is not None else None,
                visible=r.get("visible", True),
            )
            for r in data.get("regions", [])
        ]

        return cls(geodesy=geodesy, render=render, viewport=viewport, regions=regions)
