"""Per-session state owned by the orchestration layer."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from aqivoice._cache import SessionResultCache
from aqivoice.config import AqiConfig
from aqivoice.models.coordinate import Coordinate, is_valid_coordinate
from aqivoice.models.location import DeviceFix
from aqivoice.state.trigger import VoiceTrigger

_logger = logging.getLogger(__name__)


class SessionState:
    """State of one host session.

    Holds the cached reading, the last pushed device coordinate and the
    voice-trigger gate. Created on session start and dropped with the
    session; nothing here is attached to the host's own session object.
    """

    def __init__(
        self,
        config: AqiConfig,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self.cache = SessionResultCache(
            recent=config.cache_recent,
            refresh=config.cache_refresh,
        )
        self.trigger = VoiceTrigger(config.voice_commands, cooldown=config.cooldown, clock=clock)
        self._device_fix: DeviceFix | None = None

    @property
    def device_fix(self) -> DeviceFix | None:
        return self._device_fix

    def record_location(self, coordinate: Coordinate | None) -> DeviceFix | None:
        """Store a pushed coordinate with its receipt time.

        Invalid coordinates (including the ``(0, 0)`` placeholder) are
        dropped and the previous fix is kept.
        """
        if coordinate is None or not is_valid_coordinate(coordinate):
            _logger.debug("Ignoring invalid device location: %s", coordinate)
            return None
        fix = DeviceFix(coordinate=coordinate, received_at=self._clock())
        self._device_fix = fix
        _logger.debug("Device location updated: %s", coordinate)
        return fix
