"""Per-session memo of the last air-quality lookup."""

from __future__ import annotations

from dataclasses import dataclass

from aqivoice.models.location import ResolvedLocation
from aqivoice.models.reading import AqiReading
from aqivoice.state.policy import Staleness, classify_age


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A reading together with the location it was fetched for.

    The pair is cached and reused as one unit so a reused reading is never
    shown next to a newer place name.
    """

    reading: AqiReading
    location: ResolvedLocation


@dataclass(frozen=True, slots=True)
class CacheHit:
    entry: CacheEntry
    staleness: Staleness
    age_seconds: float

    @property
    def reading(self) -> AqiReading:
        return self.entry.reading

    @property
    def location(self) -> ResolvedLocation:
        return self.entry.location


class SessionResultCache:
    """Staleness-aware cache holding at most one entry.

    Parameters
    ----------
    recent : float
        Entries up to this age (seconds) are ``FRESH``.
    refresh : float
        Entries up to this age (seconds) are ``STALE``; older entries are
        never served.
    """

    def __init__(self, *, recent: float = 120.0, refresh: float = 900.0) -> None:
        if recent > refresh:
            raise ValueError(f"recent ({recent}) must not exceed refresh ({refresh})")
        self._recent = recent
        self._refresh = refresh
        self._entry: CacheEntry | None = None

    @property
    def entry(self) -> CacheEntry | None:
        return self._entry

    def lookup(self, now_ms: int) -> CacheHit | None:
        """Return the cached entry if policy allows reusing it at *now_ms*.

        ``None`` means the caller must fetch.
        """
        entry = self._entry
        if entry is None:
            return None

        age_seconds = entry.reading.age_ms(now_ms) / 1000.0
        staleness = classify_age(age_seconds, recent=self._recent, refresh=self._refresh)
        if staleness == Staleness.EXPIRED:
            return None
        return CacheHit(entry=entry, staleness=staleness, age_seconds=age_seconds)

    def store(self, reading: AqiReading, location: ResolvedLocation) -> CacheEntry:
        """Replace the cached entry with a newly fetched reading."""
        self._entry = CacheEntry(reading=reading, location=location)
        return self._entry

    def clear(self) -> None:
        self._entry = None
