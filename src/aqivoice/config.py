"""Runtime configuration for aqivoice."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from aqivoice._constants import (
    DEFAULT_VOICE_COMMANDS,
    DEFAULT_WHERE_AM_I_COMMANDS,
    IP_LOOKUP_URL,
    REVERSE_GEOCODE_URL,
    WAQI_BASE_URL,
)
from aqivoice.exceptions import AqiConfigError
from aqivoice.models.coordinate import Coordinate


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_phrases(value: str) -> tuple[str, ...]:
    return tuple(phrase.strip().lower() for phrase in value.split(",") if phrase.strip())


@dataclasses.dataclass(frozen=True)
class AqiConfig:
    """Service configuration.

    Parameters
    ----------
    aqi_token : str
        WAQI API token. Required; the service cannot run without it.
    waqi_base_url : str
        Air-quality provider base URL.
    ip_lookup_url : str
        IP geolocation endpoint.
    reverse_geocode_url : str
        Reverse geocoding endpoint (Nominatim compatible).
    aqi_timeout : float
        Seconds allowed for one air-quality fetch.
    ip_lookup_timeout : float
        Seconds allowed for the IP geolocation tier.
    geocode_timeout : float
        Seconds allowed for one reverse geocoding call.
    cycle_timeout : float
        Upper bound in seconds for a whole lookup cycle, rendering included.
    device_fix_max_age : float
        Seconds a pushed device coordinate stays usable.
    cooldown : float
        Seconds the voice trigger ignores new utterances after a cycle.
    cache_recent : float
        Cached readings up to this age (seconds) are reused as-is.
    cache_refresh : float
        Cached readings up to this age (seconds) are reused with an age
        annotation; older ones are fetched again.
    voice_commands : tuple of str
        Phrases that start a lookup (substring match, case-insensitive).
    where_am_i_commands : tuple of str
        Phrases that show the last pushed device coordinate.
    default_latitude, default_longitude : float
        Static fallback coordinate.
    default_place : str
        Place name shown with the static fallback coordinate.
    generic_place_label : str
        Place name used when reverse geocoding fails.
    disclose_approximate : bool
        Tell the user when a result is not based on the device position.
    language : str
        Transcription language the session listens to.
    """

    aqi_token: str
    waqi_base_url: str = WAQI_BASE_URL
    ip_lookup_url: str = IP_LOOKUP_URL
    reverse_geocode_url: str = REVERSE_GEOCODE_URL
    aqi_timeout: float = 4.0
    ip_lookup_timeout: float = 2.5
    geocode_timeout: float = 3.0
    cycle_timeout: float = 15.0
    device_fix_max_age: float = 30.0
    cooldown: float = 1.75
    cache_recent: float = 2 * 60
    cache_refresh: float = 15 * 60
    voice_commands: tuple[str, ...] = DEFAULT_VOICE_COMMANDS
    where_am_i_commands: tuple[str, ...] = DEFAULT_WHERE_AM_I_COMMANDS
    default_latitude: float = 51.5074
    default_longitude: float = -0.1278
    default_place: str = "London (fallback)"
    generic_place_label: str = "Your location"
    disclose_approximate: bool = True
    language: str = "en-US"

    def __post_init__(self) -> None:
        if not self.aqi_token or not self.aqi_token.strip():
            raise AqiConfigError("aqi_token is required")
        if self.cache_recent > self.cache_refresh:
            raise AqiConfigError(
                f"cache_recent ({self.cache_recent}) must not exceed cache_refresh ({self.cache_refresh})"
            )
        if not self.voice_commands:
            raise AqiConfigError("at least one voice command is required")

    @property
    def default_coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.default_latitude, longitude=self.default_longitude)

    @classmethod
    def from_env(cls, **overrides: Any) -> AqiConfig:
        """Create configuration from environment variables.

        Reads ``AQI_TOKEN`` and optional ``AQI_*`` variables. Explicit
        keyword arguments override environment values.

        Raises
        ------
        AqiConfigError
            If no token is available or a numeric variable is malformed.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "AQI_TOKEN": "aqi_token",
            "AQI_WAQI_BASE_URL": "waqi_base_url",
            "AQI_IP_LOOKUP_URL": "ip_lookup_url",
            "AQI_REVERSE_GEOCODE_URL": "reverse_geocode_url",
            "AQI_DEFAULT_PLACE": "default_place",
            "AQI_GENERIC_PLACE_LABEL": "generic_place_label",
            "AQI_LANGUAGE": "language",
        }
        _ENV_FLOAT_MAP = {
            "AQI_TIMEOUT": "aqi_timeout",
            "AQI_IP_LOOKUP_TIMEOUT": "ip_lookup_timeout",
            "AQI_GEOCODE_TIMEOUT": "geocode_timeout",
            "AQI_CYCLE_TIMEOUT": "cycle_timeout",
            "AQI_DEVICE_FIX_MAX_AGE": "device_fix_max_age",
            "AQI_COOLDOWN": "cooldown",
            "AQI_CACHE_RECENT": "cache_recent",
            "AQI_CACHE_REFRESH": "cache_refresh",
            "AQI_DEFAULT_LATITUDE": "default_latitude",
            "AQI_DEFAULT_LONGITUDE": "default_longitude",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise AqiConfigError(f"{env_key} must be a number, got {val!r}") from exc

        commands_env = env.get("AQI_VOICE_COMMANDS")
        if commands_env is not None and "voice_commands" not in overrides:
            config_kwargs["voice_commands"] = _env_phrases(commands_env)

        if "disclose_approximate" not in overrides:
            config_kwargs["disclose_approximate"] = _env_bool(env.get("AQI_DISCLOSE_APPROXIMATE"), True)

        config_kwargs.update(overrides)

        if "aqi_token" not in config_kwargs:
            raise AqiConfigError("Missing required environment variable AQI_TOKEN")

        return cls(**config_kwargs)
