"""IP-based geolocation endpoint."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from aqivoice._transport import Transport
from aqivoice.config import AqiConfig
from aqivoice.exceptions import AqiProviderError
from aqivoice.models.location import IpLocation

_logger = logging.getLogger(__name__)


async def locate_by_ip(config: AqiConfig, transport: Transport) -> IpLocation:
    """Estimate the caller's position from its network origin.

    Raises :class:`AqiProviderError` when the answer carries no coordinate;
    absent fields are never read as ``(0, 0)``.
    """
    url = config.ip_lookup_url
    payload = await transport.get_json(url, timeout=config.ip_lookup_timeout)
    if not isinstance(payload, dict):
        raise AqiProviderError("IP geolocation answer is not an object", endpoint=url)
    # ip-api.com reports failures in-band with status=fail.
    if payload.get("status") == "fail" or payload.get("error") is True:
        reason = payload.get("message") or payload.get("reason")
        raise AqiProviderError(f"IP geolocation failed: {reason}", endpoint=url)
    try:
        located = IpLocation.model_validate(payload)
    except ValidationError as exc:
        raise AqiProviderError(f"Malformed IP geolocation answer: {exc}", endpoint=url) from exc
    if located.to_coordinate() is None:
        raise AqiProviderError("IP geolocation answer has no coordinate", endpoint=url)
    _logger.debug("IP geolocation place=%r", located.place_name)
    return located
