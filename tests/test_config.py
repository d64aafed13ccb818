from __future__ import annotations

import pytest

from aqivoice.config import AqiConfig
from aqivoice.exceptions import AqiConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("AQI_TOKEN", "AQI_COOLDOWN", "AQI_VOICE_COMMANDS", "AQI_DISCLOSE_APPROXIMATE", "AQI_CACHE_RECENT"):
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = AqiConfig(aqi_token="t")
    assert config.cooldown == 1.75
    assert config.cache_recent == 120
    assert config.cache_refresh == 900
    assert config.cycle_timeout == 15.0
    assert "air quality" in config.voice_commands
    assert config.default_coordinate.latitude == pytest.approx(51.5074)


def test_missing_token_is_rejected() -> None:
    with pytest.raises(AqiConfigError):
        AqiConfig(aqi_token="  ")
    with pytest.raises(AqiConfigError):
        AqiConfig.from_env()


def test_inverted_cache_windows_are_rejected() -> None:
    with pytest.raises(AqiConfigError):
        AqiConfig(aqi_token="t", cache_recent=1000, cache_refresh=900)


def test_empty_voice_commands_are_rejected() -> None:
    with pytest.raises(AqiConfigError):
        AqiConfig(aqi_token="t", voice_commands=())


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AQI_TOKEN", "env-token")
    monkeypatch.setenv("AQI_COOLDOWN", "3")
    monkeypatch.setenv("AQI_VOICE_COMMANDS", "Air Quality, pollution check ,")
    monkeypatch.setenv("AQI_DISCLOSE_APPROXIMATE", "no")

    config = AqiConfig.from_env()

    assert config.aqi_token == "env-token"
    assert config.cooldown == 3.0
    assert config.voice_commands == ("air quality", "pollution check")
    assert config.disclose_approximate is False


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AQI_TOKEN", "env-token")
    monkeypatch.setenv("AQI_COOLDOWN", "3")

    config = AqiConfig.from_env(aqi_token="explicit", cooldown=0.5)

    assert config.aqi_token == "explicit"
    assert config.cooldown == 0.5


def test_from_env_rejects_malformed_number(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AQI_TOKEN", "env-token")
    monkeypatch.setenv("AQI_CACHE_RECENT", "two minutes")
    with pytest.raises(AqiConfigError, match="AQI_CACHE_RECENT"):
        AqiConfig.from_env()
