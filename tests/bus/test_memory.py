"""Tests for the flat 4 KiB memory."""

from __future__ import annotations

import pytest

from pychip8.bus import MAX_PROGRAM_SIZE, MEMORY_SIZE, Memory, MemoryOutOfBoundsError
from pychip8.video import FONT_BASE, FONTSET


def test_layout_constants() -> None:
    assert MEMORY_SIZE == 4096
    assert MAX_PROGRAM_SIZE == 3584


def test_font_is_preloaded() -> None:
    memory = Memory()
    assert memory.read_block(FONT_BASE, len(FONTSET)) == FONTSET
    assert memory.load8(FONT_BASE - 1) == 0
    assert memory.load8(0x200) == 0


def test_store_masks_to_byte() -> None:
    memory = Memory()
    memory.store8(0x300, 0x1FF)
    assert memory.load8(0x300) == 0xFF


def test_load16_is_big_endian() -> None:
    memory = Memory()
    memory.write_block(0x200, b"\xA2\x10")
    assert memory.load16(0x200) == 0xA210


@pytest.mark.parametrize("address", [-1, MEMORY_SIZE, 0x10000])
def test_single_byte_access_outside_memory(address: int) -> None:
    memory = Memory()
    with pytest.raises(MemoryOutOfBoundsError):
        memory.load8(address)
    with pytest.raises(MemoryOutOfBoundsError):
        memory.store8(address, 0)


def test_word_read_straddling_end() -> None:
    memory = Memory()
    with pytest.raises(MemoryOutOfBoundsError) as info:
        memory.load16(0xFFF)
    assert info.value.address == 0xFFF
    assert info.value.length == 2


def test_block_write_is_all_or_nothing() -> None:
    memory = Memory()
    with pytest.raises(MemoryOutOfBoundsError):
        memory.write_block(0xFFE, b"\x01\x02\x03")
    assert memory.read_block(0xFFE, 2) == b"\x00\x00"


def test_block_read_up_to_last_byte() -> None:
    memory = Memory()
    memory.store8(0xFFF, 0x7E)
    assert memory.read_block(0xFFC, 4) == b"\x00\x00\x00\x7e"


def test_reset_clears_program_area_and_keeps_font() -> None:
    memory = Memory()
    memory.write_block(0x200, b"\x12\x34")
    memory.store8(FONT_BASE, 0x00)

    memory.reset()

    assert memory.load16(0x200) == 0
    assert memory.read_block(FONT_BASE, len(FONTSET)) == FONTSET
