"""aqivoice - Voice-triggered air-quality lookups for host session runtimes."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("aqivoice")
except PackageNotFoundError:
    __version__ = "0+local"
from aqivoice.app import AirQualityApp
from aqivoice.client import AirQualityClient
from aqivoice.config import AqiConfig
from aqivoice.exceptions import (
    AqiConfigError,
    AqiError,
    AqiProviderError,
    AqiTimeoutError,
    AqiTransportError,
    AqiValidationError,
    ResolutionExhaustedError,
)
from aqivoice.host import EventChannel, HostSession, Subscription
from aqivoice.models import (
    AqiReading,
    Coordinate,
    DeviceFix,
    LocationSource,
    ResolvedLocation,
    SeverityLevel,
    classify,
    is_valid_coordinate,
)
from aqivoice.resolver import LocationResolver
from aqivoice.session import AirQualitySession
from aqivoice.state.trigger import TriggerState, VoiceTrigger

__all__ = [
    "__version__",
    "AirQualityApp",
    "AirQualityClient",
    "AirQualitySession",
    "AqiConfig",
    "AqiConfigError",
    "AqiError",
    "AqiProviderError",
    "AqiReading",
    "AqiTimeoutError",
    "AqiTransportError",
    "AqiValidationError",
    "Coordinate",
    "DeviceFix",
    "EventChannel",
    "HostSession",
    "LocationResolver",
    "LocationSource",
    "ResolutionExhaustedError",
    "ResolvedLocation",
    "SeverityLevel",
    "Subscription",
    "TriggerState",
    "VoiceTrigger",
    "classify",
    "is_valid_coordinate",
]
