"""Text shown on the host's display.

Pure formatting; the session hands the result to the host's render call.
"""

from __future__ import annotations

from dataclasses import dataclass

from aqivoice._cache import CacheHit
from aqivoice._constants import (
    ERROR_DISPLAY_MS,
    LISTENING_DISPLAY_MS,
    PROCESSING_DISPLAY_MS,
    RESULT_DISPLAY_MS,
)
from aqivoice.models.location import DeviceFix, ResolvedLocation
from aqivoice.models.reading import AqiReading
from aqivoice.models.severity import SeverityLevel
from aqivoice.state.policy import Staleness


@dataclass(frozen=True, slots=True)
class Presentation:
    """A text block and how long the host should show it."""

    text: str
    duration_ms: int


def staleness_note(hit: CacheHit) -> str:
    """Describe how old a reused reading is.

    ``"same as ~60s ago"`` for fresh entries, ``"~10m old"`` for stale ones.
    """
    if hit.staleness == Staleness.FRESH:
        return f"same as ~{round(hit.age_seconds)}s ago"
    return f"~{round(hit.age_seconds / 60)}m old"


def present_reading(
    location: ResolvedLocation,
    reading: AqiReading,
    severity: SeverityLevel,
    *,
    cache_hit: CacheHit | None = None,
    disclose_approximate: bool = True,
    duration_ms: int = RESULT_DISPLAY_MS,
) -> Presentation:
    header = f"📍 {location.place_name}"
    if disclose_approximate and location.is_approximate:
        header += " (approximate location)"

    station = reading.station_name
    if reading.distance_km is not None:
        station += f" ({reading.distance_km:.1f}km)"

    lines = [
        header,
        f"Station: {station}",
        "",
        f"Air Quality Index: {reading.index} {severity.pictogram}",
        f"Status: {severity.label}",
        "",
        f"Recommendation: {severity.advice}",
    ]
    if cache_hit is not None:
        lines.extend(["", f"({staleness_note(cache_hit)})"])
    return Presentation(text="\n".join(lines), duration_ms=duration_ms)


def present_unavailable() -> Presentation:
    return Presentation(
        text="⚠️ Couldn't get air quality data. Please try again.",
        duration_ms=ERROR_DISPLAY_MS,
    )


def present_listening(command: str = "air quality") -> Presentation:
    return Presentation(text=f"👂 Listening... Say '{command}'", duration_ms=LISTENING_DISPLAY_MS)


def present_processing() -> Presentation:
    return Presentation(text="🔄 Getting your air quality...", duration_ms=PROCESSING_DISPLAY_MS)


def present_where_am_i(fix: DeviceFix | None) -> Presentation:
    """Show the last pushed device coordinate, if any."""
    if fix is None:
        return Presentation(
            text='📍 No location data available yet.\n\nSay "air quality" to check with an approximate location.',
            duration_ms=ERROR_DISPLAY_MS,
        )
    coordinate = fix.coordinate
    return Presentation(
        text=(
            "📍 Your location is being tracked.\n\n"
            f"Coordinates: {coordinate.latitude:.6f}, {coordinate.longitude:.6f}\n"
            'Say "air quality" to check pollution levels'
        ),
        duration_ms=LISTENING_DISPLAY_MS,
    )
