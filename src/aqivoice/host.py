"""Boundary to the host session runtime.

The host delivers transcriptions and location pushes and renders text. Its
subscriptions are modelled as explicit handles the session disposes when it
ends.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

_logger = logging.getLogger(__name__)

Handler = Callable[[Mapping[str, Any]], None]


class Subscription(Protocol):
    def dispose(self) -> None:
        ...


class HostSession(Protocol):
    """What the core needs from a host session."""

    session_id: str

    def on_transcription(self, handler: Handler) -> Subscription:
        ...

    def on_location(self, handler: Handler) -> Subscription:
        ...

    async def show_text(self, text: str, *, duration_ms: int) -> None:
        ...


class _ChannelSubscription:
    def __init__(self, channel: EventChannel, handler: Handler) -> None:
        self._channel = channel
        self._handler: Handler | None = handler

    def dispose(self) -> None:
        handler = self._handler
        self._handler = None
        if handler is not None:
            self._channel._remove(handler)


class EventChannel:
    """Fan-out of one host event stream to subscribed handlers.

    A host adapter emits raw payloads; each subscriber gets a handle whose
    ``dispose()`` detaches it. A failing handler is logged and does not stop
    delivery to the others.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._handlers: list[Handler] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: Handler) -> Subscription:
        self._handlers.append(handler)
        return _ChannelSubscription(self, handler)

    def _remove(self, handler: Handler) -> None:
        with contextlib.suppress(ValueError):
            self._handlers.remove(handler)

    def emit(self, payload: Mapping[str, Any]) -> None:
        for handler in list(self._handlers):
            try:
                handler(payload)
            except Exception:
                _logger.exception("%s handler failed", self._name)
