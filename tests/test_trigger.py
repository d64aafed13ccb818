from __future__ import annotations

import pytest
from conftest import FakeClock

from aqivoice.state.trigger import TriggerState, VoiceTrigger


def _trigger(clock: FakeClock, cooldown: float = 1.75) -> VoiceTrigger:
    return VoiceTrigger(["air quality", "what's the air like"], cooldown=cooldown, clock=clock)


def test_matches_is_case_insensitive_substring(clock: FakeClock) -> None:
    trigger = _trigger(clock)
    assert trigger.matches("Hey, AIR QUALITY please")
    assert trigger.matches("so what's the air like today")
    assert not trigger.matches("what's the weather")


def test_blank_commands_are_dropped(clock: FakeClock) -> None:
    trigger = VoiceTrigger(["  Air Quality ", "", "   "], clock=clock)
    assert trigger.commands == ("air quality",)


def test_negative_cooldown_is_rejected(clock: FakeClock) -> None:
    with pytest.raises(ValueError):
        VoiceTrigger(["air quality"], cooldown=-1.0, clock=clock)


def test_only_one_cycle_can_begin(clock: FakeClock) -> None:
    trigger = _trigger(clock)
    assert trigger.try_begin()
    assert trigger.state == TriggerState.PROCESSING
    assert not trigger.try_begin()


def test_finish_enters_cooldown_then_idle(clock: FakeClock) -> None:
    trigger = _trigger(clock)
    trigger.try_begin()
    trigger.finish()

    assert trigger.state == TriggerState.COOLDOWN
    assert trigger.cooldown_remaining() == pytest.approx(1.75)
    assert not trigger.try_begin()

    clock.advance(1.0)
    assert trigger.state == TriggerState.COOLDOWN
    assert not trigger.try_begin()

    clock.advance(0.75)
    assert trigger.state == TriggerState.IDLE
    assert trigger.cooldown_remaining() == 0.0
    assert trigger.try_begin()


def test_zero_cooldown_returns_to_idle_immediately(clock: FakeClock) -> None:
    trigger = _trigger(clock, cooldown=0.0)
    trigger.try_begin()
    trigger.finish()
    assert trigger.is_idle


def test_finish_outside_processing_is_ignored(clock: FakeClock) -> None:
    trigger = _trigger(clock)
    trigger.finish()
    assert trigger.state == TriggerState.IDLE

    trigger.try_begin()
    trigger.finish()
    clock.advance(1.0)
    # A second finish must not extend the cooldown window.
    trigger.finish()
    clock.advance(0.75)
    assert trigger.is_idle
