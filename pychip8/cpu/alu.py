"""8-bit arithmetic helpers returning ``(result, flag)`` pairs.

The flag is the value the interpreter writes into VF.
"""

from __future__ import annotations


def add_carry(x: int, y: int) -> tuple[int, int]:
    """Add two bytes; the flag is 1 when the 9-bit sum exceeds 0xFF."""

    total = x + y
    return total & 0xFF, 1 if total > 0xFF else 0


def sub_borrow(x: int, y: int) -> tuple[int, int]:
    """Subtract ``y`` from ``x``; the flag is 1 when no borrow occurred."""

    difference = x - y
    if difference < 0:
        return difference + 0x100, 0
    return difference, 1


def shift_right(x: int) -> tuple[int, int]:
    return (x >> 1) & 0xFF, x & 0x01


def shift_left(x: int) -> tuple[int, int]:
    return (x << 1) & 0xFF, (x >> 7) & 0x01


def add_wrap(x: int, y: int) -> int:
    return (x + y) & 0xFF


def to_bcd(value: int) -> tuple[int, int, int]:
    """Split a byte into hundreds, tens and ones digits."""

    value &= 0xFF
    return value // 100, (value // 10) % 10, value % 10
