"""Plugin entry point: one :class:`AirQualitySession` per host session."""

from __future__ import annotations

import logging
from typing import Any

from aqivoice.client import AirQualityClient
from aqivoice.config import AqiConfig
from aqivoice.host import HostSession
from aqivoice.resolver import LocationResolver
from aqivoice.session import AirQualitySession

_logger = logging.getLogger(__name__)


class AirQualityApp:
    """Owns the shared provider client and the live sessions.

    Sessions never share state; only the stateless HTTP client and the
    resolver are shared.

    Usage::

        async with AirQualityApp(AqiConfig.from_env()) as app:
            await app.on_session(host_session)
            ...
            await app.on_session_end(host_session.session_id)
    """

    def __init__(self, config: AqiConfig, *, client: AirQualityClient | None = None) -> None:
        self._config = config
        self._client = client or AirQualityClient(config)
        # Fails fast on a broken default location.
        self._resolver = LocationResolver(config, self._client)
        self._sessions: dict[str, AirQualitySession] = {}

    async def __aenter__(self) -> AirQualityApp:
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
        await self._client.__aexit__(*exc)

    @property
    def active_sessions(self) -> int:
        return len(self._sessions)

    def get_session(self, session_id: str) -> AirQualitySession | None:
        return self._sessions.get(session_id)

    async def on_session(self, host: HostSession) -> AirQualitySession:
        """Start serving a new host session.

        A session id that is already live is closed and replaced.
        """
        previous = self._sessions.pop(host.session_id, None)
        if previous is not None:
            _logger.info("Replacing live session %s", host.session_id)
            await previous.close()

        session = AirQualitySession(host, self._client, self._config, resolver=self._resolver)
        self._sessions[host.session_id] = session
        await session.start()
        return session

    async def on_session_end(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            _logger.debug("Unknown session %s ended", session_id)
            return
        await session.close()

    async def close(self) -> None:
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            await session.close()
