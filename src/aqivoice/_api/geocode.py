"""Reverse geocoding endpoint (Nominatim compatible)."""

from __future__ import annotations

from typing import Any

from aqivoice._transport import Transport
from aqivoice.config import AqiConfig
from aqivoice.exceptions import AqiProviderError
from aqivoice.ingestion.normalize import first_present, safe_str
from aqivoice.models.coordinate import Coordinate

# Ordered from most to least specific.
_PLACE_KEYS = ("city", "town", "village", "hamlet", "suburb", "county")


def extract_place_name(payload: Any) -> str | None:
    """Pick a human-readable place name from a Nominatim ``address`` block."""
    if not isinstance(payload, dict):
        return None
    return safe_str(first_present(payload.get("address"), *_PLACE_KEYS))


async def reverse_geocode(config: AqiConfig, transport: Transport, coordinate: Coordinate) -> str:
    """Return a place name for *coordinate*.

    Raises :class:`AqiProviderError` when the answer names no place.
    """
    url = config.reverse_geocode_url
    payload = await transport.get_json(
        url,
        params={
            "format": "json",
            "lat": str(coordinate.latitude),
            "lon": str(coordinate.longitude),
            "zoom": "10",
        },
        timeout=config.geocode_timeout,
    )
    place = extract_place_name(payload)
    if place is None:
        raise AqiProviderError("Reverse geocoding answer names no place", endpoint=url)
    return place
