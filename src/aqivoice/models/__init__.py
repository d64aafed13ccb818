"""Data models for host payloads and provider responses."""

from aqivoice.models._base import AqiBaseModel
from aqivoice.models.coordinate import Coordinate, is_valid_coordinate, require_valid_coordinate
from aqivoice.models.location import DeviceFix, IpLocation, LocationSource, ResolvedLocation
from aqivoice.models.reading import AqiReading, WaqiCity, WaqiFeedData, WaqiFeedResponse
from aqivoice.models.severity import DEFAULT_SEVERITY_TABLE, SeverityLevel, classify

__all__ = [
    "AqiBaseModel",
    "AqiReading",
    "Coordinate",
    "DEFAULT_SEVERITY_TABLE",
    "DeviceFix",
    "IpLocation",
    "LocationSource",
    "ResolvedLocation",
    "SeverityLevel",
    "WaqiCity",
    "WaqiFeedData",
    "WaqiFeedResponse",
    "classify",
    "is_valid_coordinate",
    "require_valid_coordinate",
]
