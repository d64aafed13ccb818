from __future__ import annotations

import pytest

from aqivoice.models.coordinate import Coordinate
from aqivoice.state.events import LocationUpdate, TranscriptionEvent


@pytest.mark.parametrize(
    "payload",
    [
        {"lat": 40.7128, "lon": -74.006},
        {"latitude": 40.7128, "longitude": -74.006},
        {"latitude": "40.7128", "lng": "-74.006"},
    ],
)
def test_location_update_accepts_both_key_shapes(payload: dict[str, object]) -> None:
    update = LocationUpdate.model_validate(payload)
    assert update.to_coordinate() == Coordinate(latitude=40.7128, longitude=-74.006)


def test_location_update_missing_axis_has_no_coordinate() -> None:
    assert LocationUpdate.model_validate({"lat": 40.7}).to_coordinate() is None
    assert LocationUpdate.model_validate({"lat": "-", "lon": 3.0}).to_coordinate() is None


def test_location_update_timestamp_seconds_become_ms() -> None:
    update = LocationUpdate.model_validate({"lat": 1.0, "lon": 2.0, "timestamp": 1_767_225_600})
    assert update.timestamp_ms == 1_767_225_600_000


def test_transcription_event_normalizes_text() -> None:
    event = TranscriptionEvent.model_validate({"text": "  Air Quality ", "isFinal": True, "language": "en-US"})
    assert event.normalized_text == "air quality"
    assert event.language == "en-US"


def test_transcription_event_tolerates_missing_text() -> None:
    assert TranscriptionEvent.model_validate({}).normalized_text == ""
    assert TranscriptionEvent.model_validate({"text": None}).normalized_text == ""
