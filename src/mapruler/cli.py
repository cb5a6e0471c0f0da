#!/usr/bin/env python3
"""
Ruler measurement tool.

Replays a sequence of clicks on a map through the ruler control, prints the
distance of every leg and writes an interactive HTML map of the measurement.

Requirements:
    pip install gpxpy folium

"""

from typing import List, Optional
import webbrowser
import argparse
import logging
import sys
import os
from gpxpy import gpx

from . import __version__
from .config import RulerConfig
from .control import RulerControl
from .file_utils import generate_output_filename
from .geometry import LngLat, parse_lnglat
from .gpx import load_points
from .labels import Segment, default_label_format, total_label_format
from .units import Unit
from .visualization import FoliumSurface

# Configure logging
logger = logging.getLogger("mapruler")

LABEL_FORMATS = {
    "delta": default_label_format,
    "total": total_label_format,
}


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Measure great-circle distances along a sequence of map points",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "points",
        type=str,
        nargs="*",
        metavar="LON,LAT",
        help="Points to measure, in click order (use -- before them if a longitude is negative)",
    )
    parser.add_argument(
        "--gpx",
        type=str,
        default=None,
        help="Take the points from the tracks of a GPX file instead",
    )
    parser.add_argument(
        "--units",
        type=str,
        default=Unit.KILOMETERS.value,
        choices=[unit.value for unit in Unit],
        help="Distance units (default: km)",
    )
    parser.add_argument(
        "--label-format",
        type=str,
        default="delta",
        choices=sorted(LABEL_FORMATS),
        help="Label style: per-leg delta plus running sum, or running sum only (default: delta)",
    )
    parser.add_argument(
        "--main-color",
        type=str,
        default=RulerConfig.main_color,
        help=f"Line and handle border color (default: {RulerConfig.main_color})",
    )
    parser.add_argument(
        "--secondary-color",
        type=str,
        default=RulerConfig.secondary_color,
        help=f"Handle fill color (default: {RulerConfig.secondary_color})",
    )
    parser.add_argument(
        "--alt-color",
        type=str,
        default=RulerConfig.alt_color,
        help=f"Fill color of the first handle (default: {RulerConfig.alt_color})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output HTML map file (default: auto-generated)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="Don't automatically open the HTML file in browser",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"mapruler {__version__}",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> RulerConfig:
    """Build a RulerConfig from parsed arguments."""
    return RulerConfig(
        units=args.units,
        label_format=LABEL_FORMATS[args.label_format],
        main_color=args.main_color,
        secondary_color=args.secondary_color,
        alt_color=args.alt_color,
    )


def determine_output_filename(
    input_filename: Optional[str], output_arg: Optional[str]
) -> str:
    """
    Determine the output filename to use.

    Args:
        input_filename: Path to the input GPX file, if any
        output_arg: Value from --output argument (None if not specified)

    Returns:
        Output filename to use

    Raises:
        RuntimeError: If auto-generation fails
        ValueError: If constructed filename would be illegal
    """
    if output_arg is not None:
        return output_arg

    try:
        return generate_output_filename(input_filename)
    except (RuntimeError, ValueError) as e:
        logger.error(f"Failed to generate output filename: {e}")
        raise


def open_file_in_browser(filename: str) -> None:
    """
    Open the specified file in the default browser.

    Args:
        filename: Path to the file to open
    """
    abs_path = os.path.abspath(filename)
    try:
        webbrowser.open(f"file://{abs_path}")
        logger.debug(f"Opening {abs_path} in your default browser...")
    except Exception as e:
        logger.warning(f"Could not automatically open browser: {e}")
        logger.warning(f"Please manually open {abs_path}")


def setup_logging(args: argparse.Namespace) -> None:
    """Setup logging configuration."""
    if hasattr(sys.stdout, "reconfigure") and sys.stdout.encoding != "utf-8":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            if hasattr(sys.stderr, "reconfigure") and sys.stderr.encoding != "utf-8":
                sys.stderr.reconfigure(encoding="utf-8")
            logger.debug("Reconfigured stdout and stderr to UTF-8 encoding.")
        except Exception as e:
            logger.debug(f"Could not reconfigure stdout/stderr to UTF-8: {e}")
    level = getattr(logging, args.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def load_input_points(args: argparse.Namespace) -> List[LngLat]:
    """
    Collect the points to measure from the GPX file or the positional arguments.

    Raises:
        ValueError: If a positional point is malformed
        FileNotFoundError, PermissionError, gpx.GPXException: On GPX problems
    """
    if args.gpx:
        return load_points(args.gpx)
    return [parse_lnglat(text) for text in args.points]


def print_segments(points: List[LngLat], segments: List[Segment], unit: Unit) -> None:
    """
    Print one aligned line per point with its leg distance and running sum.

    Args:
        points: Measured points
        segments: Deltas and running sums, index-aligned with points
        unit: Unit the segments are expressed in
    """
    if not segments:
        print("No points measured")
        return

    total = segments[-1].total
    width = len(f"{total:.0f}") + 3  # +3 for ".XX"
    index_width = len(str(len(points) - 1))

    print(f"Measured {len(points)} points ({total:.2f} {unit}):")
    for i, (point, segment) in enumerate(zip(points, segments)):
        print(
            f"{i:>{index_width}}  {point.longitude:11.6f},{point.latitude:10.6f}  "
            f"+ {segment.delta:{width}.2f} {unit}  = {segment.total:{width}.2f} {unit}"
        )


def main():
    """
    Parses command-line arguments, replays the points through the ruler
    and generates an interactive map.
    """
    parser = create_argument_parser()
    args = parser.parse_args()

    if not args.points and not args.gpx:
        parser.print_help()
        sys.exit(1)

    setup_logging(args)

    try:
        points = load_input_points(args)
    except ValueError as e:
        logger.error(f"Invalid point: {e}")
        sys.exit(1)
    except FileNotFoundError:
        logger.error(f"GPX file not found: {args.gpx}")
        sys.exit(1)
    except PermissionError:
        logger.error(f"Cannot read GPX file (permission denied): {args.gpx}")
        sys.exit(1)
    except gpx.GPXException as e:
        logger.error(f"Invalid GPX file: {e}")
        sys.exit(1)

    if not points:
        logger.error("No points to measure")
        sys.exit(1)
    logger.info(f"Loaded {len(points)} points")

    try:
        output_filename = determine_output_filename(args.gpx, args.output)
        logger.debug(f"Output filename: {output_filename}")
    except (RuntimeError, ValueError):
        sys.exit(1)

    surface = FoliumSurface()
    control = RulerControl(config_from_args(args)).on_add(surface)
    control.toggle()
    for point in points:
        surface.click(point)

    segments = control.segments()
    print_segments(control.points, segments, control.units)

    total_label = f"{segments[-1].total:.2f} {control.units}"
    logger.info(f"Total distance: {total_label}")

    try:
        surface.save(output_filename, total_label)
    except Exception as e:
        logger.error(f"Failed to create map: {e}")
        sys.exit(1)

    if not args.no_open:
        open_file_in_browser(output_filename)


if __name__ == "__main__":
    main()
