from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from aqivoice.config import AqiConfig
from aqivoice.exceptions import AqiProviderError
from aqivoice.host import EventChannel, Handler, Subscription
from aqivoice.models.coordinate import Coordinate
from aqivoice.models.location import IpLocation
from aqivoice.models.reading import AqiReading

T0_MS = 1_767_225_600_000


class FakeClock:
    """Manually advanced clock usable as both monotonic and epoch-ms source."""

    def __init__(self, start: float = 1000.0, start_ms: int = T0_MS) -> None:
        self.now = start
        self._start = start
        self._start_ms = start_ms

    def __call__(self) -> float:
        return self.now

    def ms(self) -> int:
        return self._start_ms + int((self.now - self._start) * 1000)

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class FakeHost:
    session_id: str = "session-1"
    rendered: list[tuple[str, int]] = field(default_factory=list)
    transcriptions: EventChannel = field(default_factory=lambda: EventChannel("transcription"))
    locations: EventChannel = field(default_factory=lambda: EventChannel("location"))
    render_should_fail: bool = False

    def on_transcription(self, handler: Handler) -> Subscription:
        return self.transcriptions.subscribe(handler)

    def on_location(self, handler: Handler) -> Subscription:
        return self.locations.subscribe(handler)

    async def show_text(self, text: str, *, duration_ms: int) -> None:
        if self.render_should_fail:
            raise RuntimeError("display gone")
        self.rendered.append((text, duration_ms))

    def say(self, text: str, **extra: Any) -> None:
        self.transcriptions.emit({"text": text, **extra})

    def push_location(self, payload: Mapping[str, Any]) -> None:
        self.locations.emit(payload)

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.rendered]


@dataclass
class FakeProvider:
    """In-memory stand-in for :class:`aqivoice.client.AirQualityClient`."""

    clock: FakeClock
    aqi: int = 55
    station_name: str = "Testville Central"
    place_for_coordinate: str | None = "Testville"
    ip_payload: dict[str, Any] | None = field(
        default_factory=lambda: {"latitude": 48.8566, "longitude": 2.3522, "city": "Paris"}
    )
    fetch_should_fail: bool = False
    fetch_delay: float = 0.0
    calls: dict[str, int] = field(default_factory=dict)
    fetched_for: list[Coordinate] = field(default_factory=list)

    def _record(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    async def fetch_reading(self, coordinate: Coordinate) -> AqiReading:
        self._record("fetch_reading")
        self.fetched_for.append(coordinate)
        if self.fetch_delay:
            await asyncio.sleep(self.fetch_delay)
        if self.fetch_should_fail:
            raise AqiProviderError("upstream down", endpoint="fake")
        return AqiReading(
            index=self.aqi,
            station_name=self.station_name,
            station_coordinate=coordinate,
            fetched_at_ms=self.clock.ms(),
            distance_km=1.25,
        )

    async def reverse_geocode(self, coordinate: Coordinate) -> str:
        self._record("reverse_geocode")
        if self.place_for_coordinate is None:
            raise AqiProviderError("no place", endpoint="fake")
        return self.place_for_coordinate

    async def locate_by_ip(self) -> IpLocation:
        self._record("locate_by_ip")
        if self.ip_payload is None:
            raise AqiProviderError("ip lookup down", endpoint="fake")
        return IpLocation.model_validate(self.ip_payload)


@pytest.fixture
def config() -> AqiConfig:
    return AqiConfig(aqi_token="test-token")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def provider(clock: FakeClock) -> FakeProvider:
    return FakeProvider(clock=clock)


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()
