"""
Structured Log Event Types
==========================

Typed event names for the engine's JSON log lines.

Event Naming Convention:
    <area>.<subject>[.<outcome>]

    area: region, raster, config, cli
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names.

    Categories:
    - region.*: Region lifecycle (drafting, finishing, registry changes)
    - raster.*: Raster generation and cache decisions
    - config.*: Configuration loading
    - cli.*: Command-line runs
    """

    # ========== Region Events ==========
    REGION_STARTED = "region.started"
    """New draft region opened."""

    REGION_FINISHED = "region.finished"
    """Draft closed and moved into the registry."""

    REGION_FINISH_REJECTED = "region.finish.rejected"
    """Finish refused (too few vertices or self-intersecting closing edge)."""

    REGION_CANCELLED = "region.cancelled"
    """Draft discarded."""

    REGION_ADDED = "region.added"
    """Region registered by name."""

    REGION_REMOVED = "region.removed"
    """Region removed from the registry."""

    REGION_VISIBILITY_CHANGED = "region.visibility_changed"
    """Region shown or hidden."""

    # ========== Raster Events ==========
    RASTER_GENERATED = "raster.generated"
    """Pixel buffer regenerated."""

    RASTER_INVALIDATED = "raster.invalidated"
    """Cached buffer dropped."""

    # ========== Config / CLI Events ==========
    CONFIG_LOADED = "config.loaded"
    """Configuration parsed and validated."""

    CLI_OUTPUT_WRITTEN = "cli.output.written"
    """Rendered image written to disk."""

    CLI_ERROR = "cli.error"
    """Command failed."""

