"""Delay and sound countdown timers decaying at 60 Hz."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from pychip8.utils import debug_enabled, debug_log

TIMER_HZ = 60
TICK_SECONDS = 1.0 / TIMER_HZ

ToneCallback = Callable[[], None]


@dataclass
class Timers:
    """Delay/sound timer pair driven by elapsed wall-clock time.

    ``advance`` adds elapsed seconds to an accumulator. Whenever the
    accumulator reaches one 60 Hz period it is reset to zero and both timers
    tick once, so a single advance never ticks more than once no matter how
    long the gap was.
    """

    clock: Callable[[], float] = time.perf_counter
    tone_callback: Optional[ToneCallback] = None

    delay: int = 0
    sound: int = 0
    accumulator: float = 0.0
    ticks: int = 0
    _last_time: float | None = field(default=None, repr=False)
    _tone_pending: bool = field(default=False, repr=False)

    def advance(self, delta: float | None = None) -> bool:
        """Account for elapsed time and return True if the timers ticked.

        When ``delta`` is None the elapsed time since the previous call is
        read from ``clock``; the very first call measures nothing.
        """

        if delta is None:
            now = self.clock()
            delta = 0.0 if self._last_time is None else now - self._last_time
            self._last_time = now
        if delta < 0:
            raise ValueError("time delta must not be negative")

        self.accumulator += delta
        if self.accumulator < TICK_SECONDS:
            return False
        self.accumulator = 0.0
        self._tick()
        return True

    def set_delay(self, value: int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: int) -> None:
        self.sound = value & 0xFF

    def consume_tone(self) -> bool:
        """Return and clear the one-shot tone signal."""

        pending = self._tone_pending
        self._tone_pending = False
        return pending

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0
        self.accumulator = 0.0
        self.ticks = 0
        self._last_time = None
        self._tone_pending = False

    def _tick(self) -> None:
        self.ticks += 1
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            if self.sound == 1:
                self._tone_pending = True
                if debug_enabled("timer"):
                    debug_log("timer", "tone tick=%d", self.ticks)
                if self.tone_callback is not None:
                    self.tone_callback()
            self.sound -= 1
