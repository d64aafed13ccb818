"""Great-circle helpers."""

from __future__ import annotations

import math

from aqivoice._constants import EARTH_RADIUS_KM
from aqivoice.models.coordinate import Coordinate


def distance_km(origin: Coordinate, destination: Coordinate) -> float:
    """Haversine distance between two coordinates in kilometers."""
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(destination.latitude)
    delta_lat = math.radians(destination.latitude - origin.latitude)
    delta_lon = math.radians(destination.longitude - origin.longitude)

    a = math.sin(delta_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c
