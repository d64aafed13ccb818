"""Coordinate model and validator."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict

from aqivoice.exceptions import AqiValidationError


class Coordinate(BaseModel):
    """A latitude/longitude pair in degrees.

    Construction does not check ranges so untrusted input can be carried
    around and rejected by :func:`is_valid_coordinate`.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"{self.latitude:.6f}, {self.longitude:.6f}"


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_valid_coordinate(coordinate: Coordinate | None) -> bool:
    """Return ``True`` when *coordinate* can be trusted for a lookup.

    Rejects missing coordinates, NaN/infinite axes, out-of-range axes and
    the ``(0, 0)`` pair uninitialized clients report instead of "unknown".
    """
    if coordinate is None:
        return False
    lat = getattr(coordinate, "latitude", None)
    lon = getattr(coordinate, "longitude", None)
    if not _is_number(lat) or not _is_number(lon):
        return False
    if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
        return False
    return not (lat == 0 and lon == 0)


def require_valid_coordinate(coordinate: Coordinate | None) -> Coordinate:
    """Return *coordinate* or raise :class:`~aqivoice.exceptions.AqiValidationError`."""
    if coordinate is None or not is_valid_coordinate(coordinate):
        raise AqiValidationError(f"Invalid coordinate: {coordinate}")
    return coordinate
