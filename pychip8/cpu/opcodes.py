"""Instruction metadata and decoding for the CHIP-8 instruction set.

Instructions are grouped by family (the top nibble of the word). Within a
family an entry matches when ``word & mask == pattern``; families with a
single instruction use mask ``0xF000`` while the ALU (0x8), key (0xE) and
misc (0xF) families discriminate on the low nibble or low byte.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, List, Sequence


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single CHIP-8 instruction."""

    pattern: int
    mask: int
    mnemonic: str
    handler: str
    operands: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.pattern <= 0xFFFF:
            raise ValueError(f"pattern out of range: {self.pattern}")
        if self.mask & 0xF000 != 0xF000:
            raise ValueError("mask must cover the family nibble")
        if self.pattern & ~self.mask:
            raise ValueError(f"pattern {self.pattern:#06x} has bits outside mask {self.mask:#06x}")

    @property
    def family(self) -> int:
        return self.pattern >> 12

    def matches(self, word: int) -> bool:
        return word & self.mask == self.pattern

    def format(self, word: int) -> str:
        if not self.operands:
            return self.mnemonic
        fields = operand_fields(word)
        return f"{self.mnemonic} {self.operands.format(**fields)}"


def family_of(word: int) -> int:
    return (word >> 12) & 0xF


def payload_of(word: int) -> int:
    return word & 0x0FFF


def operand_fields(word: int) -> dict[str, int]:
    return {
        "x": (word >> 8) & 0xF,
        "y": (word >> 4) & 0xF,
        "n": word & 0xF,
        "nn": word & 0xFF,
        "nnn": word & 0xFFF,
    }


class OpcodeTable:
    """Mutable builder for the 16-family instruction table."""

    _FAMILIES: Final[int] = 0x10

    def __init__(self) -> None:
        self._table: List[List[Instruction]] = [[] for _ in range(self._FAMILIES)]

    def register(self, instruction: Instruction) -> None:
        bucket = self._table[instruction.family]
        for existing in bucket:
            if (existing.pattern & instruction.mask) == (instruction.pattern & existing.mask):
                raise ValueError(
                    f"pattern {instruction.pattern:#06x} overlaps {existing.mnemonic} "
                    f"({existing.pattern:#06x})"
                )
        bucket.append(instruction)

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[tuple[Instruction, ...]]:
        return tuple(tuple(bucket) for bucket in self._table)


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[tuple[Instruction, ...]]:
    """Build the family-indexed lookup table."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(0x00E0, 0xFFFF, "CLS", "op_cls"),
    Instruction(0x00EE, 0xFFFF, "RET", "op_ret"),
    Instruction(0x1000, 0xF000, "JP", "op_jp", "0x{nnn:03X}"),
    Instruction(0x2000, 0xF000, "CALL", "op_call", "0x{nnn:03X}"),
    Instruction(0x3000, 0xF000, "SE", "op_se_immediate", "V{x:X}, 0x{nn:02X}"),
    Instruction(0x4000, 0xF000, "SNE", "op_sne_immediate", "V{x:X}, 0x{nn:02X}"),
    Instruction(0x5000, 0xF00F, "SE", "op_se_register", "V{x:X}, V{y:X}"),
    Instruction(0x6000, 0xF000, "LD", "op_ld_immediate", "V{x:X}, 0x{nn:02X}"),
    Instruction(0x7000, 0xF000, "ADD", "op_add_immediate", "V{x:X}, 0x{nn:02X}"),
    # ALU
    Instruction(0x8000, 0xF00F, "LD", "op_ld_register", "V{x:X}, V{y:X}"),
    Instruction(0x8001, 0xF00F, "OR", "op_or", "V{x:X}, V{y:X}"),
    Instruction(0x8002, 0xF00F, "AND", "op_and", "V{x:X}, V{y:X}"),
    Instruction(0x8003, 0xF00F, "XOR", "op_xor", "V{x:X}, V{y:X}"),
    Instruction(0x8004, 0xF00F, "ADD", "op_add_register", "V{x:X}, V{y:X}"),
    Instruction(0x8005, 0xF00F, "SUB", "op_sub", "V{x:X}, V{y:X}"),
    Instruction(0x8006, 0xF00F, "SHR", "op_shr", "V{x:X}"),
    Instruction(0x8007, 0xF00F, "SUBN", "op_subn", "V{x:X}, V{y:X}"),
    Instruction(0x800E, 0xF00F, "SHL", "op_shl", "V{x:X}"),
    Instruction(0x9000, 0xF00F, "SNE", "op_sne_register", "V{x:X}, V{y:X}"),
    Instruction(0xA000, 0xF000, "LD", "op_ld_index", "I, 0x{nnn:03X}"),
    Instruction(0xB000, 0xF000, "JP", "op_jp_offset", "V0, 0x{nnn:03X}"),
    Instruction(0xC000, 0xF000, "RND", "op_rnd", "V{x:X}, 0x{nn:02X}"),
    Instruction(0xD000, 0xF000, "DRW", "op_drw", "V{x:X}, V{y:X}, {n}"),
    # keypad
    Instruction(0xE09E, 0xF0FF, "SKP", "op_skp", "V{x:X}"),
    Instruction(0xE0A1, 0xF0FF, "SKNP", "op_sknp", "V{x:X}"),
    # misc
    Instruction(0xF007, 0xF0FF, "LD", "op_ld_from_delay", "V{x:X}, DT"),
    Instruction(0xF00A, 0xF0FF, "LD", "op_wait_key", "V{x:X}, K"),
    Instruction(0xF015, 0xF0FF, "LD", "op_ld_delay", "DT, V{x:X}"),
    Instruction(0xF018, 0xF0FF, "LD", "op_ld_sound", "ST, V{x:X}"),
    Instruction(0xF01E, 0xF0FF, "ADD", "op_add_index", "I, V{x:X}"),
    Instruction(0xF029, 0xF0FF, "LD", "op_ld_font", "F, V{x:X}"),
    Instruction(0xF033, 0xF0FF, "LD", "op_ld_bcd", "B, V{x:X}"),
    Instruction(0xF055, 0xF0FF, "LD", "op_store_registers", "[I], V{x:X}"),
    Instruction(0xF065, 0xF0FF, "LD", "op_load_registers", "V{x:X}, [I]"),
)


OPCODE_TABLE: Sequence[tuple[Instruction, ...]] = build_instruction_table(DEFAULT_INSTRUCTIONS)


def decode(word: int, table: Sequence[tuple[Instruction, ...]] = OPCODE_TABLE) -> Instruction | None:
    """Return the instruction matching ``word`` or None."""

    word &= 0xFFFF
    for instruction in table[family_of(word)]:
        if instruction.matches(word):
            return instruction
    return None


def disassemble(word: int) -> str:
    instruction = decode(word)
    if instruction is None:
        return f"DW 0x{word & 0xFFFF:04X}"
    return instruction.format(word)


__all__ = [
    "Instruction",
    "OpcodeTable",
    "OPCODE_TABLE",
    "DEFAULT_INSTRUCTIONS",
    "build_instruction_table",
    "decode",
    "disassemble",
    "family_of",
    "payload_of",
    "operand_fields",
]
