"""Flat 4 KiB memory for the CHIP-8 interpreter.

Layout::

    0x000-0x04F  reserved
    0x050-0x09F  built-in hexadecimal font
    0x200-0xFFF  program image and program-writable data

Addresses are never masked. Any access outside the 4096-byte space raises
``MemoryOutOfBoundsError`` so that arithmetic on the index register cannot
silently wrap around.
"""

from __future__ import annotations

from typing import Final, Iterable

from pychip8.video.font import FONT_BASE, FONTSET

MEMORY_SIZE: Final[int] = 0x1000
PROGRAM_START: Final[int] = 0x200
MAX_PROGRAM_SIZE: Final[int] = MEMORY_SIZE - PROGRAM_START


class MemoryOutOfBoundsError(Exception):
    """Raised when an address falls outside the 4096-byte space."""

    def __init__(self, address: int, length: int = 1) -> None:
        if length == 1:
            message = f"address {address:#05x} outside memory (0x000-{MEMORY_SIZE - 1:#05x})"
        else:
            end = address + length - 1
            message = (
                f"range {address:#05x}-{end:#05x} outside memory (0x000-{MEMORY_SIZE - 1:#05x})"
            )
        super().__init__(message)
        self.address = address
        self.length = length


class Memory:
    """Byte-addressable memory with the font preloaded."""

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        if size < PROGRAM_START:
            raise ValueError(f"memory size {size} too small for the program area")
        self._size = size
        self._data = bytearray(size)
        self._data[FONT_BASE : FONT_BASE + len(FONTSET)] = FONTSET

    def __len__(self) -> int:
        return self._size

    def reset(self) -> None:
        """Zero every byte and restore the font."""

        self._data[:] = bytes(self._size)
        self._data[FONT_BASE : FONT_BASE + len(FONTSET)] = FONTSET

    def _check(self, address: int, length: int = 1) -> None:
        if address < 0 or length < 0 or address + length > self._size:
            raise MemoryOutOfBoundsError(address, length)

    def load8(self, address: int) -> int:
        self._check(address)
        return self._data[address]

    def store8(self, address: int, value: int) -> None:
        self._check(address)
        self._data[address] = value & 0xFF

    def load16(self, address: int) -> int:
        """Read a big-endian word at ``address``."""

        self._check(address, 2)
        return (self._data[address] << 8) | self._data[address + 1]

    def read_block(self, address: int, length: int) -> bytes:
        self._check(address, length)
        return bytes(self._data[address : address + length])

    def write_block(self, address: int, data: Iterable[int]) -> None:
        payload = bytes(value & 0xFF for value in data)
        self._check(address, len(payload))
        self._data[address : address + len(payload)] = payload

    def snapshot(self) -> bytes:
        return bytes(self._data)
