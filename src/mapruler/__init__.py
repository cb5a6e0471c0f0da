#!/usr/bin/env python3
"""
mapruler - A click-to-measure ruler for map surfaces.

This package keeps a measuring session in step with a map: every click adds
a draggable point, and every point shows the great-circle distance from the
previous one along with the running total.
"""
import importlib.metadata

__version__ = importlib.metadata.version("mapruler")

# Import main classes for public API
from .config import RulerConfig
from .control import MeasurementSession, RulerControl
from .geometry import LngLat, haversine_distance
from .labels import (
    Segment,
    compute_labels,
    default_label_format,
    measure_segments,
    total_label_format,
)
from .surface import MapSurface, PointHandle
from .units import Unit

__all__ = [
    "RulerConfig",
    "RulerControl",
    "MeasurementSession",
    "LngLat",
    "haversine_distance",
    "Segment",
    "compute_labels",
    "default_label_format",
    "measure_segments",
    "total_label_format",
    "MapSurface",
    "PointHandle",
    "Unit",
]
