"""Tests for the 60 Hz delay/sound timers."""

from __future__ import annotations

import pytest

from pychip8.bus import TICK_SECONDS, Timers


def test_no_tick_before_a_full_period() -> None:
    timers = Timers(delay=3)
    assert timers.advance(0.01) is False
    assert timers.delay == 3
    assert timers.accumulator == pytest.approx(0.01)


def test_tick_once_per_period() -> None:
    timers = Timers(delay=3, sound=3)
    assert timers.advance(TICK_SECONDS) is True
    assert timers.delay == 2
    assert timers.sound == 2
    assert timers.accumulator == 0.0


def test_accumulates_small_deltas() -> None:
    timers = Timers(delay=3)
    timers.advance(0.01)
    timers.advance(0.01)
    assert timers.delay == 2
    assert timers.accumulator == 0.0


def test_large_delta_ticks_only_once() -> None:
    timers = Timers(delay=10)
    timers.advance(1.0)
    assert timers.delay == 9
    assert timers.ticks == 1


def test_timers_floor_at_zero() -> None:
    timers = Timers()
    for _ in range(5):
        timers.advance(TICK_SECONDS)
    assert timers.delay == 0
    assert timers.sound == 0
    assert timers.ticks == 5


def test_tone_signal_fires_when_sound_expires() -> None:
    calls: list[int] = []
    timers = Timers(tone_callback=lambda: calls.append(1))
    timers.set_sound(2)

    timers.advance(TICK_SECONDS)
    assert calls == []
    assert timers.consume_tone() is False

    timers.advance(TICK_SECONDS)
    assert calls == [1]
    assert timers.sound == 0
    assert timers.consume_tone() is True
    assert timers.consume_tone() is False

    timers.advance(TICK_SECONDS)
    assert calls == [1]


def test_clock_is_used_without_delta() -> None:
    now = [100.0]
    timers = Timers(clock=lambda: now[0], delay=5)

    assert timers.advance() is False  # first call only records the time
    now[0] += 0.5
    assert timers.advance() is True
    assert timers.delay == 4


def test_set_masks_to_byte() -> None:
    timers = Timers()
    timers.set_delay(0x1FF)
    assert timers.delay == 0xFF


def test_negative_delta_rejected() -> None:
    with pytest.raises(ValueError):
        Timers().advance(-0.1)


def test_reset() -> None:
    timers = Timers(delay=4, sound=4)
    timers.advance(0.01)
    timers.reset()
    assert (timers.delay, timers.sound, timers.accumulator, timers.ticks) == (0, 0, 0.0, 0)
