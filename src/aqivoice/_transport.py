"""HTTP transport for the JSON provider APIs."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from aqivoice._constants import USER_AGENT
from aqivoice._redact import redact_params
from aqivoice.exceptions import AqiTimeoutError, AqiTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        timeout: float,
    ) -> Any:
        ...


class HttpTransport:
    """GET-and-decode transport with a per-call time bound."""

    def __init__(self, http_session: aiohttp.ClientSession) -> None:
        self._http = http_session

    async def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        timeout: float,
    ) -> Any:
        """GET *url* and return the decoded JSON body.

        Raises
        ------
        AqiTimeoutError
            The call did not finish within *timeout* seconds.
        AqiTransportError
            Network failure, non-2xx status or a body that is not JSON.
        """
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        _logger.debug("GET %s params=%s", url, redact_params(params))

        try:
            async with self._http.get(
                url,
                params=dict(params or {}),
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as resp:
                text = await resp.text()
                if resp.status < 200 or resp.status >= 300:
                    raise AqiTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=url,
                    )
        except AqiTransportError:
            raise
        except (asyncio.TimeoutError, TimeoutError) as exc:
            raise AqiTimeoutError(f"Request to {url} timed out after {timeout}s", endpoint=url) from exc
        except aiohttp.ClientError as exc:
            raise AqiTransportError(f"Request to {url} failed: {exc}", endpoint=url) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise AqiTransportError(
                f"Invalid JSON from {url}: {text[:200]}",
                endpoint=url,
            ) from exc
