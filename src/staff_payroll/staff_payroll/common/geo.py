from __future__ import annotations

import math
from typing import Optional

from ..core.constants import EARTH_RADIUS_METERS


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle (haversine) distance between two coordinates, in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def is_within_radius(user_lat: float, user_lon: float, store_lat: float, store_lon: float, radius_meters: float) -> bool:
    # Boundary is inclusive.
    return distance_meters(user_lat, user_lon, store_lat, store_lon) <= radius_meters


def has_coordinate(lat: Optional[float], lon: Optional[float]) -> bool:
    """Unset or zero coordinates mean no geofence is enforced."""
    return bool(lat) and bool(lon)
