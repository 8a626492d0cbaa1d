"""Memory bus and timer devices for the CHIP-8 interpreter."""

from .memory import (
    MAX_PROGRAM_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
    Memory,
    MemoryOutOfBoundsError,
)
from .timers import TICK_SECONDS, TIMER_HZ, Timers

__all__ = [
    "Memory",
    "MemoryOutOfBoundsError",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",
    "Timers",
    "TIMER_HZ",
    "TICK_SECONDS",
]
