"""
Region Registry - collection of committed, named regions.

Regions are owned exclusively by the registry once finished; insertion
order is display order (later regions draw on top).
"""

from typing import Dict, Iterator, List, Optional, Tuple

from areamap_engine.logging import LogEvent, StructuredLogger, create_logger
from areamap_engine.regions.region import Region


class RegionRegistry:
    """
    Ordered registry of finished regions keyed by unique name.

    Usage:
        registry = RegionRegistry()
        registry.add(region)

        for name, color, area in registry.info():
            print(name, area)

        registry.remove("Area 1")
    """

    def __init__(self, logger: Optional[StructuredLogger] = None):
        self._regions: Dict[str, Region] = {}
        self.logger = logger or create_logger("registry")

    def add(self, region: Region) -> None:
        """
        Register a finished region.

        Raises:
            ValueError: If the name is taken or the region is not finished
        """
        if not region.finished:
            raise ValueError(f"Region '{region.name}' must be finished before registration")
        if region.name in self._regions:
            raise ValueError(f"Region '{region.name}' already exists")

        self._regions[region.name] = region
        self.logger.info(
            LogEvent.REGION_ADDED,
            f"Region '{region.name}' added",
            metadata={'name': region.name, 'area_m2': region.committed_area()},
        )

    def remove(self, name: str) -> Region:
        """
        Remove and return a region.

        Raises:
            KeyError: If no region has this name
        """
        if name not in self._regions:
            raise KeyError(f"Region '{name}' not found")
        region = self._regions.pop(name)
        self.logger.info(LogEvent.REGION_REMOVED, f"Region '{name}' removed", metadata={'name': name})
        return region

    def get(self, name: str) -> Region:
        if name not in self._regions:
            raise KeyError(f"Region '{name}' not found")
        return self._regions[name]

    def rename(self, old_name: str, new_name: str) -> None:
        """Rename a region, keeping its display position."""
        if old_name not in self._regions:
            raise KeyError(f"Region '{old_name}' not found")
        if new_name != old_name and new_name in self._regions:
            raise ValueError(f"Region '{new_name}' already exists")

        self._regions = {
            (new_name if name == old_name else name): region
            for name, region in self._regions.items()
        }
        self._regions[new_name].name = new_name

    def list_regions(self) -> List[str]:
        return list(self._regions)

    def info(self) -> List[Tuple[str, Tuple[int, int, int, int], str]]:
        """(name, RGBA colour, formatted area) per region, in display order."""
        return [(r.name, r.color, r.display_area()) for r in self._regions.values()]

    def invalidate_all(self) -> None:
        for region in self._regions.values():
            region.request_invalidate()

    def __contains__(self, name: str) -> bool:
        return name in self._regions

    def __iter__(self) -> Iterator[Region]:
        return iter(list(self._regions.values()))

    def __len__(self) -> int:
        return len(self._regions)

    def __repr__(self) -> str:
        return f"RegionRegistry(regions={len(self._regions)})"
