"""
Areamap CLI - Main entry point.

Measures and renders the regions described in a YAML config.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import cv2

from areamap_engine.config import EngineConfig
from areamap_engine.geometry.primitives import Point
from areamap_engine.logging import LogEvent, create_logger
from areamap_engine.regions.session import DrawingSession
from areamap_engine.rendering.visualizer import RegionVisualizer
from areamap_engine.viewport import Viewport

logger = create_logger("cli")


def load_session(config_path: str) -> DrawingSession:
    """
    Load a config and commit its regions.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config or one of its regions is invalid
    """
    config = EngineConfig.from_yaml(Path(config_path))
    logger.info(
        LogEvent.CONFIG_LOADED,
        f"Loaded {config_path}",
        metadata={'path': str(config_path), 'regions': len(config.regions)},
    )
    return DrawingSession.from_config(config)


def format_report(session: DrawingSession) -> List[str]:
    """One line per region: name, vertex count, area, legality."""
    lines = []
    for region in session.registry:
        lines.append(
            f"{region.name}\t{region.vertex_count() - 1} vertices\t"
            f"{region.display_area()}\t{'simple' if region.size_legal() else 'self-intersecting'}"
        )
    return lines


def fit_all(session: DrawingSession, viewport: Viewport, focus: Optional[str] = None) -> None:
    """Centre the viewport on one region, or zoom to show all of them."""
    if focus is not None:
        bbox = session.registry.get(focus).bounding_box()
        viewport.fit(bbox.min, bbox.max)
        return

    boxes = [region.bounding_box() for region in session.registry]
    if not boxes:
        return
    viewport.fit(
        Point(min(b.min.x for b in boxes), min(b.min.y for b in boxes)),
        Point(max(b.max.x for b in boxes), max(b.max.y for b in boxes)),
    )


def render_to_file(
    session: DrawingSession,
    output: str,
    width: Optional[int] = None,
    height: Optional[int] = None,
    focus: Optional[str] = None,
) -> Path:
    """
    Render every visible region onto a blank canvas and write it as an image.

    Returns:
        Path of the written image

    Raises:
        KeyError: If `focus` names no region
        RuntimeError: If OpenCV cannot write the image
    """
    config = session.config
    viewport = Viewport.from_config(config.viewport)
    if width is not None or height is not None:
        viewport.resize(width or viewport.width, height or viewport.height)
    fit_all(session, viewport, focus)

    visualizer = RegionVisualizer(
        outline_thickness=config.render.outline_thickness,
        pending_thickness=config.render.pending_thickness,
    )
    frame = RegionVisualizer.blank_canvas(viewport.width, viewport.height)
    frame = visualizer.render(frame, session, viewport)

    path = Path(output)
    if not cv2.imwrite(str(path), frame):
        raise RuntimeError(f"Could not write image to {path}")

    logger.info(
        LogEvent.CLI_OUTPUT_WRITTEN,
        f"Rendered {len(session.registry)} regions to {path}",
        metadata={'path': str(path), 'viewport': repr(viewport)},
    )
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="areamap",
        description="Areamap CLI - Measure and render map regions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print area and legality of every configured region
  areamap area config/areas.yaml

  # Render all regions to a PNG
  areamap render config/areas.yaml -o areas.png

  # Zoom on one region at a custom size
  areamap render config/areas.yaml -o campus.png --focus campus --width 800 --height 600
"""
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # area command
    area = subparsers.add_parser('area', help='Print region areas')
    area.add_argument('config', help='Path to regions config YAML')

    # render command
    render = subparsers.add_parser('render', help='Render regions to an image')
    render.add_argument('config', help='Path to regions config YAML')
    render.add_argument('-o', '--output', required=True, help='Output image path (e.g. areas.png)')
    render.add_argument('--width', type=int, help='Image width (default: viewport width from config)')
    render.add_argument('--height', type=int, help='Image height (default: viewport height from config)')
    render.add_argument('--focus', help='Region name to zoom on')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        session = load_session(args.config)

        if args.command == 'area':
            for line in format_report(session):
                print(line)

        elif args.command == 'render':
            path = render_to_file(session, args.output, args.width, args.height, args.focus)
            print(f"Wrote {path}")

    except (FileNotFoundError, ValueError, KeyError, RuntimeError) as e:
        logger.error(LogEvent.CLI_ERROR, f"{args.command} failed", metadata={'config': args.config}, exc_info=e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
