"""
Distance and planar geometry helpers for city-scale routing.
"""

import math
from typing import Tuple

from .models import Coordinate

EARTH_RADIUS_M = 6371000


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1, lon1: First point coordinates
        lat2, lon2: Second point coordinates

    Returns:
        Distance in meters
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def midpoint(start: Coordinate, end: Coordinate) -> Coordinate:
    """Midpoint of the straight lat/lng line between two coordinates."""
    return Coordinate((start.lat + end.lat) / 2, (start.lng + end.lng) / 2)


def planar_offset_basis(start: Coordinate, end: Coordinate) -> Tuple[float, float, float]:
    """
    Straight-line length and perpendicular unit vector of the start->end delta.

    Latitude and longitude are treated as Euclidean axes, which only holds at
    city scale.

    Args:
        start: Line start
        end: Line end

    Returns:
        (length_deg, perp_lat, perp_lng); the vector is (0, 0) when start == end
    """
    d_lat = end.lat - start.lat
    d_lng = end.lng - start.lng
    length = math.hypot(d_lat, d_lng)
    norm = length or 1.0
    return length, -d_lng / norm, d_lat / norm
