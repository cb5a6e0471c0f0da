#!/usr/bin/env python3
"""
Distance and label computation for a sequence of measurement points.

Everything here is pure: the controller calls these functions again after
every capture or drag and replaces its labels wholesale.
"""

from typing import Callable, List, NamedTuple, Sequence
import logging

from .geometry import LngLat, haversine_distance
from .units import Unit

logger = logging.getLogger(__name__)

LabelFormatter = Callable[[float, float, Unit], str]


class Segment(NamedTuple):
    """Distance information for one measurement point."""

    delta: float  # Distance from the previous point, in display units
    total: float  # Running sum from the first point, in display units


def default_label_format(delta: float, total: float, unit: Unit) -> str:
    """Render the per-segment delta and the running sum on two lines."""
    return f"+ {delta:.2f} {unit}<br/>= {total:.2f} {unit}"


def total_label_format(delta: float, total: float, unit: Unit) -> str:
    """Render only the running sum."""
    return f"{total:.2f} {unit}"


def measure_segments(points: Sequence[LngLat], unit: Unit) -> List[Segment]:
    """
    Calculate per-point deltas and running sums along a sequence of points.

    Deltas are converted to the display unit before they are accumulated.

    Args:
        points: Ordered measurement points
        unit: Display unit

    Returns:
        List of Segment with the same length as points; the first entry is
        always (0, 0)
    """
    if not points:
        return []

    segments = [Segment(0.0, 0.0)]
    running_sum = 0.0

    for i in range(1, len(points)):
        delta_km = haversine_distance(points[i - 1], points[i]) / 1000
        delta = delta_km * unit.factor
        running_sum += delta
        segments.append(Segment(delta, running_sum))

    return segments


def compute_labels(
    points: Sequence[LngLat],
    unit: Unit,
    formatter: LabelFormatter = default_label_format,
) -> List[str]:
    """
    Turn an ordered sequence of points into an ordered sequence of labels.

    Args:
        points: Ordered measurement points
        unit: Display unit passed through to the formatter
        formatter: Callable mapping (delta, sum, unit) to a display string

    Returns:
        One label per point; the first label always reports zero
    """
    return [
        formatter(segment.delta, segment.total, unit)
        for segment in measure_segments(points, unit)
    ]


def total_distance(points: Sequence[LngLat], unit: Unit) -> float:
    """Return the cumulative distance of the whole sequence in display units."""
    segments = measure_segments(points, unit)
    if not segments:
        return 0.0
    return segments[-1].total
