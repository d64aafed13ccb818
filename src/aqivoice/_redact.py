"""Query-parameter redaction for DEBUG request logs.

WAQI takes its API token as a query parameter, so request parameters are
passed through :func:`redact_params` before they are logged.
"""

from __future__ import annotations

from collections.abc import Mapping

_SECRET_PARAMS: frozenset[str] = frozenset({"token", "key", "api_key", "apikey"})

_MASK = "<redacted>"


def redact_params(params: Mapping[str, str] | None) -> dict[str, str]:
    """Return a copy of *params* with secret values masked.

    Names are compared case-insensitively.
    """
    if not params:
        return {}
    return {name: _MASK if name.lower() in _SECRET_PARAMS else value for name, value in params.items()}
