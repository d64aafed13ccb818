"""Voice-trigger gate.

A single spoken phrase often reaches the session several times (partial and
final transcripts). This gate lets exactly one lookup cycle run per phrase:

``idle`` -> ``processing`` on an accepted trigger, ``processing`` ->
``cooldown`` when the cycle ends (success or failure), and ``cooldown`` ->
``idle`` once the cooldown window has elapsed. Triggers outside ``idle`` are
dropped, not queued.

Transitions happen synchronously inside the event handler that causes them,
so no lock is needed on a single event loop.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from enum import StrEnum

_logger = logging.getLogger(__name__)


class TriggerState(StrEnum):
    IDLE = "idle"
    PROCESSING = "processing"
    COOLDOWN = "cooldown"


class VoiceTrigger:
    """Re-entrancy gate for lookup cycles.

    Parameters
    ----------
    commands : iterable of str
        Phrases that count as a request. Matching is a case-insensitive
        substring test so transcription noise around the phrase is
        tolerated.
    cooldown : float
        Seconds to ignore triggers after a cycle finishes.
    clock : callable
        Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        commands: Iterable[str],
        *,
        cooldown: float = 1.75,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._commands = tuple(c.strip().lower() for c in commands if c and c.strip())
        if cooldown < 0:
            raise ValueError(f"cooldown must be >= 0, got {cooldown}")
        self._cooldown = cooldown
        self._clock = clock
        self._state = TriggerState.IDLE
        self._cooldown_until = 0.0

    @property
    def commands(self) -> tuple[str, ...]:
        return self._commands

    @property
    def state(self) -> TriggerState:
        if self._state == TriggerState.COOLDOWN and self._clock() >= self._cooldown_until:
            self._state = TriggerState.IDLE
        return self._state

    @property
    def is_idle(self) -> bool:
        return self.state == TriggerState.IDLE

    def matches(self, text: str) -> bool:
        """Whether *text* contains any configured command phrase."""
        lowered = text.lower()
        return any(command in lowered for command in self._commands)

    def try_begin(self) -> bool:
        """Enter ``processing`` if idle; return whether the cycle may start."""
        current = self.state
        if current != TriggerState.IDLE:
            _logger.debug("Trigger ignored in state=%s", current)
            return False
        self._state = TriggerState.PROCESSING
        return True

    def finish(self) -> None:
        """End the running cycle and start the cooldown window."""
        if self._state != TriggerState.PROCESSING:
            _logger.debug("finish() called in state=%s; ignoring", self._state)
            return
        self._cooldown_until = self._clock() + self._cooldown
        self._state = TriggerState.COOLDOWN

    def cooldown_remaining(self) -> float:
        if self.state != TriggerState.COOLDOWN:
            return 0.0
        return max(0.0, self._cooldown_until - self._clock())
