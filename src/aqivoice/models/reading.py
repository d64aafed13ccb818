"""Air-quality reading models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aqivoice.ingestion.normalize import safe_float, safe_int, safe_str
from aqivoice.models._base import AqiBaseModel
from aqivoice.models.coordinate import Coordinate


class AqiReading(BaseModel):
    """Normalized air-quality reading for one station.

    Parameters
    ----------
    index : int
        Provider AQI, never negative.
    station_name : str
        Name of the reporting station.
    station_coordinate : Coordinate
        Station position as reported by the provider.
    fetched_at_ms : int
        Epoch milliseconds when the reading was fetched.
    distance_km : float or None
        Great-circle distance between the queried point and the station.
        Display only.
    station_url : str or None
        Link to the provider's map for the queried point.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    station_name: str
    station_coordinate: Coordinate
    fetched_at_ms: int
    distance_km: float | None = None
    station_url: str | None = None

    def age_ms(self, now_ms: int) -> int:
        return max(0, now_ms - self.fetched_at_ms)


class WaqiCity(AqiBaseModel):
    name: str | None = None
    geo: list[float] | None = None
    url: str | None = None

    @field_validator("name", "url", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("geo", mode="before")
    @classmethod
    def _coerce_geo(cls, value: Any) -> list[float] | None:
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            return None
        lat, lon = safe_float(value[0]), safe_float(value[1])
        if lat is None or lon is None:
            return None
        return [lat, lon]


class WaqiFeedData(AqiBaseModel):
    aqi: int | None = None
    idx: int | None = None
    city: WaqiCity = Field(default_factory=WaqiCity)

    @field_validator("aqi", "idx", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)


class WaqiFeedResponse(AqiBaseModel):
    """Top-level ``/feed/geo:{lat};{lon}/`` answer."""

    status: str | None = None
    data: WaqiFeedData | None = None

    @field_validator("data", mode="before")
    @classmethod
    def _drop_error_message(cls, value: Any) -> Any:
        # On errors WAQI puts a message string in ``data``.
        return value if isinstance(value, dict) else None

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"

    @property
    def error_message(self) -> str:
        data = self.raw.get("data")
        return data if isinstance(data, str) else ""
