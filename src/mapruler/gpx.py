#!/usr/bin/env python3
"""
GPX file parsing into measurement points.
"""

from typing import List, TextIO
import logging
import gpxpy
import gpxpy.gpx

from .geometry import LngLat

logger = logging.getLogger(__name__)


def points_from_gpx(file_input: TextIO) -> List[LngLat]:
    """
    Parse GPX data and concatenate all tracks/segments into a list of points.

    Routes and waypoints are used only when the file has no track points.

    Args:
        file_input: File-like object containing GPX data

    Returns:
        List of LngLat in file order

    Raises:
        gpxpy.gpx.GPXException: If GPX data is malformed
    """
    gpx_data = gpxpy.parse(file_input)

    points = []

    # Extract all track points from all tracks and segments
    for track in gpx_data.tracks:
        for segment in track.segments:
            for point in segment.points:
                points.append(LngLat(longitude=point.longitude, latitude=point.latitude))

    if not points:
        for route in gpx_data.routes:
            for point in route.points:
                points.append(LngLat(longitude=point.longitude, latitude=point.latitude))

    if not points:
        for waypoint in gpx_data.waypoints:
            points.append(
                LngLat(longitude=waypoint.longitude, latitude=waypoint.latitude)
            )

    if not points:
        logger.warning("No points found in GPX data")

    logger.debug(f"Parsed {len(points)} points from GPX data")

    return points


def load_points(filename: str) -> List[LngLat]:
    """
    Load and parse a GPX file into measurement points.

    Args:
        filename: Path to GPX file

    Returns:
        List of LngLat in file order

    Raises:
        FileNotFoundError: If file doesn't exist.
        PermissionError: If file can't be read.
        gpxpy.gpx.GPXException: If GPX file is malformed.
    """
    logger.debug(f"Reading GPX file: {filename}")
    with open(filename, "r", encoding="utf-8") as f:
        return points_from_gpx(f)
