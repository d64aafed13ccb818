"""Location fallback chain.

Tiers, each tried only when the previous one produced nothing usable:

1. the coordinate the host pushed for this session, if valid and recent;
2. an IP-based estimate from the network origin;
3. the static default from configuration.

Every tier swallows and logs its own failure, so :meth:`LocationResolver.resolve`
always returns a location.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Protocol

from aqivoice.config import AqiConfig
from aqivoice.exceptions import ResolutionExhaustedError
from aqivoice.models.coordinate import Coordinate, is_valid_coordinate
from aqivoice.models.location import DeviceFix, IpLocation, LocationSource, ResolvedLocation
from aqivoice.state.policy import is_fix_fresh

_logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    """The provider calls the resolver needs (see :class:`~aqivoice.client.AirQualityClient`)."""

    async def reverse_geocode(self, coordinate: Coordinate) -> str:
        ...

    async def locate_by_ip(self) -> IpLocation:
        ...


class LocationResolver:
    """Produce one :class:`ResolvedLocation` per lookup cycle.

    Raises
    ------
    ResolutionExhaustedError
        At construction, when the configured default coordinate is invalid.
    """

    def __init__(
        self,
        config: AqiConfig,
        provider: LocationProvider,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._provider = provider
        self._clock = clock
        default = config.default_coordinate
        if not is_valid_coordinate(default):
            raise ResolutionExhaustedError(f"Configured default location is invalid: {default}")
        self._default = ResolvedLocation(
            coordinate=default,
            place_name=config.default_place,
            source=LocationSource.STATIC_DEFAULT,
        )

    @property
    def default_location(self) -> ResolvedLocation:
        return self._default

    async def resolve(self, device_fix: DeviceFix | None) -> ResolvedLocation:
        """Walk the fallback chain. Never raises."""
        resolved = await self._from_device(device_fix)
        if resolved is not None:
            return resolved

        resolved = await self._from_ip()
        if resolved is not None:
            return resolved

        _logger.warning("Using static default location %r", self._default.place_name)
        return self._default

    async def _place_name(self, coordinate: Coordinate) -> str | None:
        try:
            async with asyncio.timeout(self._config.geocode_timeout):
                return await self._provider.reverse_geocode(coordinate)
        except Exception as exc:
            _logger.warning("Reverse geocoding failed for %s: %s", coordinate, exc)
            _logger.debug("Reverse geocoding failure detail", exc_info=True)
            return None

    async def _from_device(self, device_fix: DeviceFix | None) -> ResolvedLocation | None:
        if device_fix is None:
            _logger.debug("No device location pushed yet")
            return None
        if not is_valid_coordinate(device_fix.coordinate):
            _logger.info("Device location %s rejected as invalid", device_fix.coordinate)
            return None
        age = device_fix.age(self._clock())
        if not is_fix_fresh(age, max_age=self._config.device_fix_max_age):
            _logger.info("Device location is %.1fs old; falling back", age)
            return None

        place = await self._place_name(device_fix.coordinate)
        return ResolvedLocation(
            coordinate=device_fix.coordinate,
            place_name=place or self._config.generic_place_label,
            source=LocationSource.DEVICE,
        )

    async def _from_ip(self) -> ResolvedLocation | None:
        try:
            async with asyncio.timeout(self._config.ip_lookup_timeout):
                located = await self._provider.locate_by_ip()
        except Exception as exc:
            _logger.warning("IP geolocation failed: %s", exc)
            _logger.debug("IP geolocation failure detail", exc_info=True)
            return None

        coordinate = located.to_coordinate()
        if coordinate is None or not is_valid_coordinate(coordinate):
            _logger.info("IP geolocation returned unusable coordinate %s", coordinate)
            return None

        _logger.info("Using approximate IP-based location %s", coordinate)
        if located.place_name:
            return ResolvedLocation(coordinate=coordinate, place_name=located.place_name, source=LocationSource.IP)

        place = await self._place_name(coordinate)
        return ResolvedLocation(
            coordinate=coordinate,
            place_name=place or self._config.generic_place_label,
            source=LocationSource.REVERSE_GEOCODED_FALLBACK,
        )
