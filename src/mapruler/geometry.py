"""
Great-circle distance utilities for measurement points.

Points are kept in (longitude, latitude) order so they can be dropped
straight into GeoJSON coordinate arrays.
"""

from typing import List, NamedTuple
import math

# Mean Earth radius in meters
EARTH_RADIUS = 6371000.0


class LngLat(NamedTuple):
    """Represents a geographic position as longitude and latitude."""

    longitude: float
    latitude: float

    def to_list(self) -> List[float]:
        """Return the position as a GeoJSON ``[lon, lat]`` pair."""
        return [self.longitude, self.latitude]


def haversine_distance(coord1: LngLat, coord2: LngLat) -> float:
    """
    Calculate Haversine distance between two coordinates.

    Uses Haversine formula for great circle distance along the Earth's surface.

    Args:
        coord1: First coordinate position
        coord2: Second coordinate position

    Returns:
        Distance in meters
    """
    lat1, lon1 = math.radians(coord1.latitude), math.radians(coord1.longitude)
    lat2, lon2 = math.radians(coord2.latitude), math.radians(coord2.longitude)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    # Rounding can push a slightly past 1 for near-antipodal points
    a = min(1.0, a)

    return 2 * EARTH_RADIUS * math.asin(math.sqrt(a))


def parse_lnglat(text: str) -> LngLat:
    """
    Parse a ``"LON,LAT"`` string into a LngLat.

    Args:
        text: Comma separated longitude and latitude in decimal degrees

    Returns:
        Parsed LngLat

    Raises:
        ValueError: If the text is malformed or out of range
    """
    parts = text.split(",")
    if len(parts) != 2:
        raise ValueError(f"Expected LON,LAT but got {text!r}")

    try:
        longitude, latitude = float(parts[0]), float(parts[1])
    except ValueError:
        raise ValueError(f"Non-numeric coordinate in {text!r}")

    if not -180.0 <= longitude <= 180.0:
        raise ValueError(f"Longitude {longitude} out of range in {text!r}")
    if not -90.0 <= latitude <= 90.0:
        raise ValueError(f"Latitude {latitude} out of range in {text!r}")

    return LngLat(longitude=longitude, latitude=latitude)
