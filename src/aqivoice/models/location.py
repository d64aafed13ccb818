"""Location models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from aqivoice.ingestion.normalize import safe_float, safe_str
from aqivoice.models._base import AqiBaseModel
from aqivoice.models.coordinate import Coordinate


class LocationSource(StrEnum):
    """Which fallback tier produced a :class:`ResolvedLocation`."""

    DEVICE = "device"
    IP = "ip"
    REVERSE_GEOCODED_FALLBACK = "reverse-geocoded-fallback"
    STATIC_DEFAULT = "static-default"


class ResolvedLocation(BaseModel):
    """Best-effort position for one lookup cycle.

    Parameters
    ----------
    coordinate : Coordinate
        Position used for the air-quality query.
    place_name : str
        Human-readable place label.
    source : LocationSource
        Tier that produced the position. Whether to tell the user the
        position is approximate is left to the presenter.
    """

    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    place_name: str
    source: LocationSource

    @property
    def is_approximate(self) -> bool:
        return self.source != LocationSource.DEVICE


class DeviceFix(BaseModel):
    """Last coordinate pushed by the host, with its receipt time.

    ``received_at`` is a ``time.monotonic()`` reading.
    """

    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    received_at: float

    def age(self, now: float) -> float:
        return now - self.received_at


class IpLocation(AqiBaseModel):
    """IP geolocation provider answer (ipapi.co / ip-api.com shapes).

    Numeric fields are ``None`` when absent or unparseable.
    """

    latitude: float | None = Field(default=None, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float | None = Field(default=None, validation_alias=AliasChoices("longitude", "lon", "lng"))
    city: str | None = None
    region: str | None = Field(default=None, validation_alias=AliasChoices("region", "regionName"))
    country: str | None = Field(default=None, validation_alias=AliasChoices("country_name", "country"))

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("city", "region", "country", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str | None:
        return safe_str(value)

    def to_coordinate(self) -> Coordinate | None:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    @property
    def place_name(self) -> str | None:
        return self.city or self.region
