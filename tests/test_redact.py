from __future__ import annotations

from aqivoice._redact import redact_params


def test_redact_params_masks_api_token() -> None:
    params = {"token": "secret-waqi-token", "format": "json", "lat": "48.8566"}

    redacted = redact_params(params)

    assert redacted == {"token": "<redacted>", "format": "json", "lat": "48.8566"}
    # The request itself still carries the real token.
    assert params["token"] == "secret-waqi-token"


def test_redact_params_is_case_insensitive() -> None:
    assert redact_params({"API_KEY": "k", "Token": "t"}) == {"API_KEY": "<redacted>", "Token": "<redacted>"}


def test_redact_params_without_params() -> None:
    assert redact_params(None) == {}
    assert redact_params({}) == {}
