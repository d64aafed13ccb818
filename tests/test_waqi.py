from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest
from conftest import T0_MS

from aqivoice._api.waqi import fetch_reading, parse_feed
from aqivoice.config import AqiConfig
from aqivoice.exceptions import AqiProviderError, AqiTimeoutError, AqiTransportError, AqiValidationError
from aqivoice.models.coordinate import Coordinate

QUERY = Coordinate(latitude=13.75, longitude=100.5)


def _testville_payload(aqi: Any = 55) -> dict[str, Any]:
    return {
        "status": "ok",
        "data": {
            "aqi": aqi,
            "idx": 1234,
            "city": {
                "name": "Testville",
                "geo": [13.7563, 100.5018],
                "url": "https://aqicn.org/city/testville",
            },
        },
    }


class RecordingTransport:
    def __init__(self, answer: Any = None, error: Exception | None = None) -> None:
        self.answer = answer
        self.error = error
        self.requests: list[tuple[str, dict[str, str], float]] = []

    async def get_json(self, url: str, *, params: Mapping[str, str] | None = None, timeout: float) -> Any:
        self.requests.append((url, dict(params or {}), timeout))
        if self.error is not None:
            raise self.error
        return self.answer


def test_parse_feed_testville() -> None:
    reading = parse_feed(_testville_payload(), QUERY, fetched_at_ms=T0_MS)

    assert reading.index == 55
    assert reading.station_name == "Testville"
    assert reading.station_coordinate == Coordinate(latitude=13.7563, longitude=100.5018)
    assert reading.fetched_at_ms == T0_MS
    assert reading.distance_km == pytest.approx(0.73, abs=0.05)
    assert reading.station_url == "https://aqicn.org/city/testville"


def test_parse_feed_accepts_numeric_string_aqi() -> None:
    assert parse_feed(_testville_payload("87"), QUERY, fetched_at_ms=T0_MS).index == 87


def test_parse_feed_without_station_geo_uses_query_point() -> None:
    payload = {"status": "ok", "data": {"aqi": 12, "city": {}}}
    reading = parse_feed(payload, QUERY, fetched_at_ms=T0_MS)

    assert reading.station_name == "Nearest Station"
    assert reading.station_coordinate == QUERY
    assert reading.distance_km is None
    assert reading.station_url is not None
    assert "13.75" in reading.station_url


@pytest.mark.parametrize(
    "payload",
    [
        _testville_payload("-"),
        _testville_payload(None),
        _testville_payload(-3),
        {"status": "error", "data": "Invalid key"},
        {"status": "ok", "data": "Unknown station"},
        {"status": "ok"},
        ["not", "an", "object"],
        None,
    ],
)
def test_parse_feed_rejects_unusable_answers(payload: Any) -> None:
    with pytest.raises(AqiProviderError):
        parse_feed(payload, QUERY, fetched_at_ms=T0_MS)


def test_parse_feed_error_includes_provider_message() -> None:
    with pytest.raises(AqiProviderError, match="Invalid key"):
        parse_feed({"status": "error", "data": "Invalid key"}, QUERY, fetched_at_ms=T0_MS)


@pytest.mark.asyncio
async def test_fetch_reading_builds_geo_feed_request(config: AqiConfig) -> None:
    transport = RecordingTransport(answer=_testville_payload())

    reading = await fetch_reading(config, transport, QUERY)

    url, params, timeout = transport.requests[0]
    assert url == "https://api.waqi.info/feed/geo:13.75;100.5/"
    assert params == {"token": "test-token"}
    assert timeout == config.aqi_timeout
    assert reading.index == 55


@pytest.mark.asyncio
async def test_fetch_reading_wraps_transport_errors(config: AqiConfig) -> None:
    transport = RecordingTransport(error=AqiTransportError("HTTP 502", status_code=502))
    with pytest.raises(AqiProviderError) as excinfo:
        await fetch_reading(config, transport, QUERY)
    assert isinstance(excinfo.value.__cause__, AqiTransportError)


@pytest.mark.asyncio
async def test_fetch_reading_timeout_stays_a_timeout(config: AqiConfig) -> None:
    transport = RecordingTransport(error=AqiTimeoutError("slow"))
    with pytest.raises(TimeoutError):
        await fetch_reading(config, transport, QUERY)


@pytest.mark.asyncio
async def test_fetch_reading_refuses_invalid_coordinate(config: AqiConfig) -> None:
    transport = RecordingTransport(answer=_testville_payload())
    with pytest.raises(AqiValidationError):
        await fetch_reading(config, transport, Coordinate(latitude=0.0, longitude=0.0))
    assert transport.requests == []
