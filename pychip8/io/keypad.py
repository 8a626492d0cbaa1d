"""Sixteen-key hexadecimal keypad."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16


class KeyState(Enum):
    UP = 0
    DOWN = 1


@dataclass
class Keypad:
    """Pressed/released state of the 16 logical keys.

    ``press_serial`` increases on every UP -> DOWN transition so a waiting
    instruction can tell a fresh key-down apart from a key that was already
    held.
    """

    _states: list[KeyState] = field(default_factory=lambda: [KeyState.UP] * KEY_COUNT)
    _pressed_count: int = 0
    _last_pressed: int | None = None
    _press_serial: int = 0

    def set_key(self, key: int, state: KeyState) -> None:
        self._validate(key)
        previous = self._states[key]
        if previous is state:
            return
        self._states[key] = state
        if state is KeyState.DOWN:
            self._pressed_count += 1
            self._last_pressed = key
            self._press_serial += 1
        else:
            self._pressed_count = max(0, self._pressed_count - 1)
        if debug_enabled("input"):
            debug_log("input", "key=%X state=%s pressed=%d", key, state.name, self._pressed_count)

    def get_key(self, key: int) -> KeyState:
        self._validate(key)
        return self._states[key]

    def is_pressed(self, key: int) -> bool:
        """Return True if ``key`` is held; values beyond 0xF are never held."""

        if not 0 <= key < KEY_COUNT:
            return False
        return self._states[key] is KeyState.DOWN

    def press(self, key: int) -> None:
        self.set_key(key, KeyState.DOWN)

    def release(self, key: int) -> None:
        self.set_key(key, KeyState.UP)

    @property
    def pressed_count(self) -> int:
        return self._pressed_count

    @property
    def last_pressed(self) -> int | None:
        return self._last_pressed

    @property
    def press_serial(self) -> int:
        return self._press_serial

    def reset(self) -> None:
        self._states[:] = [KeyState.UP] * KEY_COUNT
        self._pressed_count = 0
        self._last_pressed = None
        self._press_serial = 0

    @staticmethod
    def _validate(key: int) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"key {key!r} outside 0x0-0xF")
