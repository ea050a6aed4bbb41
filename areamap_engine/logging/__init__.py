"""
Structured Logging
==================

Bounded Context: Observability

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from areamap_engine.logging import create_logger, LogEvent
    >>> logger = create_logger("raster")
    >>> logger.debug(LogEvent.RASTER_GENERATED, "Raster regenerated", {'size': [640, 360]})
"""

from .events import LogEvent
from .structured import JSONFormatter, StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'JSONFormatter',
    'StructuredLogger',
    'create_logger',
]
