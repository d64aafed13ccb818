"""Custom exception hierarchy for aqivoice."""

from __future__ import annotations


class AqiError(Exception):
    """Base exception for all aqivoice errors."""


class AqiConfigError(AqiError):
    """Invalid or missing configuration."""


class ResolutionExhaustedError(AqiConfigError):
    """Even the static default location is unusable.

    Only reachable when the configured default coordinate is malformed,
    so it is raised while wiring up a resolver rather than during a
    lookup cycle.
    """


class AqiValidationError(AqiError):
    """Malformed coordinate or host payload."""


class AqiTransportError(AqiError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class AqiProviderError(AqiError):
    """Provider answered, but the answer is unusable.

    Covers a non-``ok`` status, a missing or placeholder index value and
    any other response shape the normalizer cannot map.
    """

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class AqiTimeoutError(AqiProviderError, TimeoutError):
    """A provider call exceeded its time bound."""
