"""High-level async client for the provider APIs."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from aqivoice._api import geocode as _geocode_api
from aqivoice._api import ipgeo as _ipgeo_api
from aqivoice._api import waqi as _waqi_api
from aqivoice._transport import HttpTransport, Transport
from aqivoice.config import AqiConfig
from aqivoice.exceptions import AqiError
from aqivoice.models.coordinate import Coordinate
from aqivoice.models.location import IpLocation
from aqivoice.models.reading import AqiReading

_logger = logging.getLogger(__name__)


class AirQualityClient:
    """Async client for the air-quality, IP-geolocation and geocoding providers.

    The client holds no per-user state, so one instance can serve every
    session of a process.

    Usage::

        async with AirQualityClient(config) as client:
            reading = await client.fetch_reading(coordinate)
    """

    def __init__(
        self,
        config: AqiConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = None

    @property
    def config(self) -> AqiConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AirQualityClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise AqiError("Client not initialized. Use 'async with AirQualityClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Provider calls
    # ------------------------------------------------------------------

    async def fetch_reading(self, coordinate: Coordinate) -> AqiReading:
        """Fetch the nearest station reading for *coordinate*.

        Raises :class:`~aqivoice.exceptions.AqiProviderError` (or its
        :class:`~aqivoice.exceptions.AqiTimeoutError` subclass). Never
        retried.
        """
        return await _waqi_api.fetch_reading(self._config, self._require_transport(), coordinate)

    async def reverse_geocode(self, coordinate: Coordinate) -> str:
        """Return a place name for *coordinate*."""
        return await _geocode_api.reverse_geocode(self._config, self._require_transport(), coordinate)

    async def locate_by_ip(self) -> IpLocation:
        """Estimate the position from the network origin."""
        return await _ipgeo_api.locate_by_ip(self._config, self._require_transport())
