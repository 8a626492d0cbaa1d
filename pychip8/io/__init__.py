"""Input helpers for the CHIP-8 interpreter."""

from .keypad import KEY_COUNT, Keypad, KeyState

__all__ = [
    "Keypad",
    "KeyState",
    "KEY_COUNT",
]
