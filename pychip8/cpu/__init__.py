"""CPU package for the CHIP-8 interpreter."""

from .core import (
    CPUError,
    CPUState,
    Chip8CPU,
    InvalidOpcodeError,
    StackOverflowError,
    StackUnderflowError,
)
from . import alu, opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "CPUError",
    "InvalidOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "alu",
    "opcodes",
]
