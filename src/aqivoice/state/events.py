"""Normalized host events.

Raw host payloads (transcriptions and location pushes) are converted into
these models before the session acts on them.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from aqivoice.ingestion.normalize import normalize_timestamp_ms, safe_float
from aqivoice.models._base import AqiBaseModel
from aqivoice.models.coordinate import Coordinate


class TranscriptionEvent(AqiBaseModel):
    """A transcribed utterance."""

    text: str = ""
    language: str | None = None

    @field_validator("text", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @property
    def normalized_text(self) -> str:
        return self.text.strip().lower()


class LocationUpdate(AqiBaseModel):
    """A location push.

    Hosts send either ``{latitude, longitude}`` or ``{lat, lon}``; both are
    accepted, as is ``lng``.
    """

    latitude: float | None = Field(default=None, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float | None = Field(default=None, validation_alias=AliasChoices("longitude", "lon", "lng"))
    timestamp_ms: int | None = Field(default=None, validation_alias=AliasChoices("timestamp", "timestamp_ms"))

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("timestamp_ms", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> int | None:
        return normalize_timestamp_ms(value)

    def to_coordinate(self) -> Coordinate | None:
        """Return the pushed coordinate, or ``None`` when an axis is missing."""
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(latitude=self.latitude, longitude=self.longitude)
