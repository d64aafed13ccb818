"""Orchestration of one host session.

Wires host events to the voice-trigger gate, runs lookup cycles (resolve
location, reuse or fetch a reading, present it) and owns the subscriptions
for the lifetime of the session.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable, Coroutine, Mapping, Sequence
from typing import Any, Protocol

from aqivoice.config import AqiConfig
from aqivoice.exceptions import AqiError
from aqivoice.host import HostSession, Subscription
from aqivoice.ingestion.normalize import now_ms
from aqivoice.models.coordinate import Coordinate
from aqivoice.models.reading import AqiReading
from aqivoice.models.severity import DEFAULT_SEVERITY_TABLE, SeverityLevel, classify
from aqivoice.presenter import (
    Presentation,
    present_listening,
    present_processing,
    present_reading,
    present_unavailable,
    present_where_am_i,
)
from aqivoice.resolver import LocationProvider, LocationResolver
from aqivoice.state.events import LocationUpdate, TranscriptionEvent
from aqivoice.state.store import SessionState
from aqivoice.state.trigger import TriggerState

_logger = logging.getLogger(__name__)


def _primary_subtag(language: str) -> str:
    return language.replace("_", "-").split("-", 1)[0].strip().lower()


class AirQualityProvider(LocationProvider, Protocol):
    """Provider calls a session needs (see :class:`~aqivoice.client.AirQualityClient`)."""

    async def fetch_reading(self, coordinate: Coordinate) -> AqiReading:
        ...


class AirQualitySession:
    """Air-quality lookups for one host session.

    Usage::

        session = AirQualitySession(host_session, client, config)
        await session.start()
        ...
        await session.close()

    Parameters
    ----------
    host : HostSession
        The host's session: event subscriptions and the render call.
    client : AirQualityProvider
        Provider client, usually a shared :class:`~aqivoice.client.AirQualityClient`.
    config : AqiConfig
        Service configuration.
    resolver : LocationResolver or None
        Location fallback chain; built from *client* when omitted.
    clock : callable
        Monotonic clock for trigger cooldown and device-fix age.
    wall_clock_ms : callable
        Epoch-millisecond clock for cache ages; must match the clock that
        stamps readings.
    severity_table : sequence of SeverityLevel
        Classification table.
    """

    def __init__(
        self,
        host: HostSession,
        client: AirQualityProvider,
        config: AqiConfig,
        *,
        resolver: LocationResolver | None = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock_ms: Callable[[], int] = now_ms,
        severity_table: Sequence[SeverityLevel] = DEFAULT_SEVERITY_TABLE,
    ) -> None:
        self._host = host
        self._client = client
        self._config = config
        self._resolver = resolver or LocationResolver(config, client, clock=clock)
        self._wall_clock_ms = wall_clock_ms
        self._severity_table = tuple(severity_table)
        self._state = SessionState(config, clock=clock)
        self._where_am_i = tuple(p.lower() for p in config.where_am_i_commands)
        self._subscriptions: list[Subscription] = []
        self._cycle_task: asyncio.Task[Presentation] | None = None
        self._active = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AirQualitySession:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    @property
    def session_id(self) -> str:
        return self._host.session_id

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def trigger_state(self) -> TriggerState:
        return self._state.trigger.state

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def cycle_task(self) -> asyncio.Task[Presentation] | None:
        return self._cycle_task

    async def start(self) -> asyncio.Task[Presentation] | None:
        """Subscribe to host events and schedule the initial lookup cycle.

        Returns the initial cycle task.
        """
        if self._active:
            return None
        self._active = True
        self._subscriptions = [
            self._host.on_location(self.handle_location),
            self._host.on_transcription(self.handle_transcription),
        ]
        _logger.info("Session %s started", self.session_id)
        await self._render(present_listening())
        if not self._state.trigger.try_begin():
            return None
        return self._schedule(self._run_cycle())

    async def close(self) -> None:
        """Dispose subscriptions and abandon any in-flight cycle."""
        if not self._active and not self._subscriptions:
            return
        self._active = False
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions.clear()

        task = self._cycle_task
        self._cycle_task = None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        # A task cancelled before its first step never reaches its finally.
        self._state.trigger.finish()
        _logger.info("Session %s ended", self.session_id)

    # ------------------------------------------------------------------
    # Host event handlers
    # ------------------------------------------------------------------

    def handle_location(self, payload: Mapping[str, Any]) -> None:
        """Store a location push. Never starts a lookup cycle.

        Pushes stamped longer ago than ``device_fix_max_age`` are dropped.
        Malformed and non-mapping payloads are ignored.
        """
        if not self._active:
            return
        try:
            update = LocationUpdate.model_validate(dict(payload))
        except (TypeError, ValueError):
            _logger.debug("Unparseable location push: %r", payload, exc_info=True)
            return
        if update.timestamp_ms is not None:
            age = (self._wall_clock_ms() - update.timestamp_ms) / 1000.0
            if age > self._config.device_fix_max_age:
                _logger.debug("Ignoring location push taken %.0fs ago", age)
                return
        self._state.record_location(update.to_coordinate())

    def handle_transcription(self, payload: Mapping[str, Any]) -> asyncio.Task[Presentation] | None:
        """Start a cycle if the utterance is a command and the gate is idle.

        Returns the scheduled cycle task, or ``None`` when the utterance was
        not a command or was dropped by the gate.
        """
        if not self._active:
            return None
        try:
            event = TranscriptionEvent.model_validate(dict(payload))
        except (TypeError, ValueError):
            _logger.debug("Unparseable transcription: %r", payload, exc_info=True)
            return None

        if not self._accepts_language(event.language):
            _logger.debug("Ignoring %s transcription", event.language)
            return None
        text = event.normalized_text
        if not text:
            return None
        wants_lookup = self._state.trigger.matches(text)
        wants_position = any(phrase in text for phrase in self._where_am_i)
        if not wants_lookup and not wants_position:
            return None
        if not self._state.trigger.try_begin():
            return None

        _logger.info("Voice command detected: %r", text)
        if wants_lookup:
            return self._schedule(self._run_cycle())
        return self._schedule(self._run_where_am_i())

    def _accepts_language(self, language: str | None) -> bool:
        # Only the primary subtag is compared: "en" and "en-GB" both match "en-US".
        if not language or not self._config.language:
            return True
        return _primary_subtag(language) == _primary_subtag(self._config.language)

    # ------------------------------------------------------------------
    # Cycles
    # ------------------------------------------------------------------

    def _schedule(self, coro: Coroutine[Any, Any, Presentation]) -> asyncio.Task[Presentation]:
        task = asyncio.get_running_loop().create_task(coro)
        self._cycle_task = task
        return task

    async def _render(self, presentation: Presentation) -> None:
        try:
            await self._host.show_text(presentation.text, duration_ms=presentation.duration_ms)
        except Exception:
            _logger.warning("Session %s: rendering failed", self.session_id, exc_info=True)

    async def _run_cycle(self) -> Presentation:
        """One gated lookup. Always renders something and always releases the gate."""
        started = time.monotonic()
        try:
            presentation = await self._produce()
            await self._render(presentation)
            _logger.debug("Session %s: cycle finished in %.2fs", self.session_id, time.monotonic() - started)
            return presentation
        finally:
            self._state.trigger.finish()

    async def _run_where_am_i(self) -> Presentation:
        try:
            presentation = present_where_am_i(self._state.device_fix)
            await self._render(presentation)
            return presentation
        finally:
            self._state.trigger.finish()

    async def _produce(self) -> Presentation:
        try:
            async with asyncio.timeout(self._config.cycle_timeout):
                await self._render(present_processing())
                return await self._lookup()
        except AqiError as exc:
            _logger.warning("Session %s: air quality check failed: %s", self.session_id, exc)
        except TimeoutError:
            _logger.warning(
                "Session %s: lookup exceeded %.1fs",
                self.session_id,
                self._config.cycle_timeout,
            )
        except Exception:
            _logger.exception("Session %s: lookup failed unexpectedly", self.session_id)
        return present_unavailable()

    async def _lookup(self) -> Presentation:
        location = await self._resolver.resolve(self._state.device_fix)
        _logger.debug("Session %s: location source=%s", self.session_id, location.source)

        hit = self._state.cache.lookup(self._wall_clock_ms())
        if hit is not None:
            _logger.info(
                "Session %s: reusing %s reading (%.0fs old)",
                self.session_id,
                hit.staleness,
                hit.age_seconds,
            )
            reading, shown_location = hit.reading, hit.location
        else:
            reading = await self._client.fetch_reading(location.coordinate)
            self._state.cache.store(reading, location)
            shown_location = location

        severity = classify(reading.index, self._severity_table)
        return present_reading(
            shown_location,
            reading,
            severity,
            cache_hit=hit,
            disclose_approximate=self._config.disclose_approximate,
        )
