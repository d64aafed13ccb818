from __future__ import annotations

import pytest
from conftest import T0_MS

from aqivoice._cache import SessionResultCache
from aqivoice.models.coordinate import Coordinate
from aqivoice.models.location import LocationSource, ResolvedLocation
from aqivoice.models.reading import AqiReading
from aqivoice.presenter import staleness_note
from aqivoice.state.policy import Staleness

HERE = Coordinate(latitude=48.8566, longitude=2.3522)


def _reading(index: int = 55, fetched_at_ms: int = T0_MS) -> AqiReading:
    return AqiReading(
        index=index,
        station_name="Testville Central",
        station_coordinate=HERE,
        fetched_at_ms=fetched_at_ms,
    )


def _location(coordinate: Coordinate = HERE) -> ResolvedLocation:
    return ResolvedLocation(coordinate=coordinate, place_name="Testville", source=LocationSource.DEVICE)


def test_empty_cache_misses() -> None:
    assert SessionResultCache().lookup(T0_MS) is None


def test_fresh_hit_within_recent_window() -> None:
    cache = SessionResultCache()
    cache.store(_reading(), _location())

    hit = cache.lookup(T0_MS + 60_000)
    assert hit is not None
    assert hit.staleness == Staleness.FRESH
    assert hit.reading.index == 55
    assert staleness_note(hit) == "same as ~60s ago"


def test_stale_hit_is_annotated_in_minutes() -> None:
    cache = SessionResultCache()
    cache.store(_reading(), _location())

    hit = cache.lookup(T0_MS + 10 * 60_000)
    assert hit is not None
    assert hit.staleness == Staleness.STALE
    assert staleness_note(hit) == "~10m old"


def test_expired_entry_is_not_served() -> None:
    cache = SessionResultCache()
    cache.store(_reading(), _location())
    assert cache.lookup(T0_MS + 20 * 60_000) is None
    # Entry stays until replaced.
    assert cache.entry is not None


def test_reading_and_location_are_reused_together() -> None:
    cache = SessionResultCache()
    location = _location()
    cache.store(_reading(), location)

    hit = cache.lookup(T0_MS + 1000)
    assert hit is not None
    assert hit.location == location


def test_store_replaces_and_clear_empties() -> None:
    cache = SessionResultCache()
    cache.store(_reading(index=10), _location())
    cache.store(_reading(index=99, fetched_at_ms=T0_MS + 5000), _location())

    hit = cache.lookup(T0_MS + 6000)
    assert hit is not None
    assert hit.reading.index == 99
    assert hit.age_seconds == pytest.approx(1.0)

    cache.clear()
    assert cache.lookup(T0_MS + 6000) is None


def test_clock_skew_never_yields_negative_age() -> None:
    cache = SessionResultCache()
    cache.store(_reading(fetched_at_ms=T0_MS + 5000), _location())
    hit = cache.lookup(T0_MS)
    assert hit is not None
    assert hit.age_seconds == 0.0


def test_recent_must_not_exceed_refresh() -> None:
    with pytest.raises(ValueError):
        SessionResultCache(recent=1000.0, refresh=900.0)
