"""WAQI (World Air Quality Index) feed endpoint.

Endpoint:
  - /feed/geo:{lat};{lon}/ (nearest station to a coordinate)
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from aqivoice._constants import WAQI_MAP_URL
from aqivoice._transport import Transport
from aqivoice.config import AqiConfig
from aqivoice.exceptions import AqiProviderError, AqiTransportError
from aqivoice.geo import distance_km
from aqivoice.ingestion.normalize import now_ms
from aqivoice.models.coordinate import Coordinate, is_valid_coordinate, require_valid_coordinate
from aqivoice.models.reading import AqiReading, WaqiFeedResponse

_logger = logging.getLogger(__name__)


def _feed_url(config: AqiConfig, coordinate: Coordinate) -> str:
    return f"{config.waqi_base_url.rstrip('/')}/feed/geo:{coordinate.latitude};{coordinate.longitude}/"


def parse_feed(
    payload: Any,
    query: Coordinate,
    *,
    fetched_at_ms: int,
    endpoint: str = "",
) -> AqiReading:
    """Normalize a WAQI feed answer into an :class:`AqiReading`.

    Raises :class:`AqiProviderError` for any shape other than
    ``{status: "ok", data: {aqi: number, city: {...}}}``.
    """
    if not isinstance(payload, dict):
        raise AqiProviderError(f"Unexpected WAQI payload type {type(payload).__name__}", endpoint=endpoint)
    try:
        feed = WaqiFeedResponse.model_validate(payload)
    except ValidationError as exc:
        raise AqiProviderError(f"Malformed WAQI payload: {exc}", endpoint=endpoint) from exc

    if not feed.is_ok:
        raise AqiProviderError(
            f"WAQI status={feed.status!r} message={feed.error_message!r}",
            endpoint=endpoint,
        )
    if feed.data is None or feed.data.aqi is None:
        raise AqiProviderError("WAQI response has no usable aqi value", endpoint=endpoint)
    if feed.data.aqi < 0:
        raise AqiProviderError(f"WAQI returned negative aqi {feed.data.aqi}", endpoint=endpoint)

    city = feed.data.city
    station = query
    distance: float | None = None
    if city.geo is not None:
        candidate = Coordinate(latitude=city.geo[0], longitude=city.geo[1])
        if is_valid_coordinate(candidate):
            station = candidate
            distance = distance_km(query, station)

    return AqiReading(
        index=feed.data.aqi,
        station_name=city.name or "Nearest Station",
        station_coordinate=station,
        fetched_at_ms=fetched_at_ms,
        distance_km=distance,
        station_url=city.url or WAQI_MAP_URL.format(lat=query.latitude, lon=query.longitude),
    )


async def fetch_reading(config: AqiConfig, transport: Transport, coordinate: Coordinate) -> AqiReading:
    """Fetch the nearest station reading for *coordinate*.

    Raises
    ------
    AqiValidationError
        *coordinate* is missing, out of range or the (0, 0) placeholder.
    AqiTimeoutError
        The provider did not answer within ``config.aqi_timeout``.
    AqiProviderError
        Transport failure or an unusable answer.
    """
    coordinate = require_valid_coordinate(coordinate)
    url = _feed_url(config, coordinate)
    try:
        payload = await transport.get_json(url, params={"token": config.aqi_token}, timeout=config.aqi_timeout)
    except AqiTransportError as exc:
        raise AqiProviderError(f"WAQI request failed: {exc}", endpoint=url) from exc
    reading = parse_feed(payload, coordinate, fetched_at_ms=now_ms(), endpoint=url)
    _logger.debug(
        "WAQI reading aqi=%d station=%r distance_km=%s",
        reading.index,
        reading.station_name,
        None if reading.distance_km is None else round(reading.distance_km, 1),
    )
    return reading
