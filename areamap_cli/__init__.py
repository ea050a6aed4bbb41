"""
Areamap CLI - Command-line interface for the area engine.

Reads regions from a YAML config, prints their areas, or renders them
to an image.

Usage:
    areamap area config/areas.yaml
    areamap render config/areas.yaml -o areas.png
    areamap render config/areas.yaml -o campus.png --focus campus
"""

__version__ = "1.0.0"
