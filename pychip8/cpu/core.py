"""CHIP-8 interpreter core: machine state and the fetch/decode/execute step."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from pychip8.bus import MEMORY_SIZE, PROGRAM_START, Memory, MemoryOutOfBoundsError, Timers
from pychip8.io import Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import Framebuffer, glyph_address

from . import alu
from .opcodes import OPCODE_TABLE, Instruction, decode, payload_of

REGISTER_COUNT = 16
STACK_DEPTH = 16
FLAG_REGISTER = 0xF


class CPUError(Exception):
    """Base error for interpreter failures."""


class InvalidOpcodeError(CPUError):
    """Raised when the fetched word is not part of the instruction set."""

    def __init__(self, opcode: int, pc: int) -> None:
        super().__init__(f"invalid opcode {opcode:#06x} at pc={pc:#05x}")
        self.opcode = opcode
        self.pc = pc


class StackOverflowError(CPUError):
    """Raised when a call would exceed the 16-entry stack."""

    def __init__(self, pc: int) -> None:
        super().__init__(f"stack overflow at pc={pc:#05x} (depth {STACK_DEPTH})")
        self.pc = pc


class StackUnderflowError(CPUError):
    """Raised when a return is executed with an empty stack."""

    def __init__(self, pc: int) -> None:
        super().__init__(f"stack underflow at pc={pc:#05x}")
        self.pc = pc


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file."""

    registers: list[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    index: int = 0x000
    pc: int = PROGRAM_START
    stack: list[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    sp: int = 0

    def clone(self) -> "CPUState":
        return CPUState(list(self.registers), self.index, self.pc, list(self.stack), self.sp)


def _x(opcode: int) -> int:
    return (opcode >> 8) & 0xF


def _y(opcode: int) -> int:
    return (opcode >> 4) & 0xF


def _n(opcode: int) -> int:
    return opcode & 0xF


def _nn(opcode: int) -> int:
    return opcode & 0xFF


@dataclass
class Chip8CPU:
    """Interpreter bound to a memory, framebuffer, keypad and timer pair.

    ``step`` executes exactly one instruction. ``Fx0A`` does not block:
    it parks the CPU in a waiting mode and later steps only poll the keypad
    until a fresh key-down arrives.
    """

    memory: Memory
    framebuffer: Framebuffer = field(default_factory=Framebuffer)
    keypad: Keypad = field(default_factory=Keypad)
    timers: Timers = field(default_factory=Timers)
    strict_illegal: bool = True
    rng: random.Random = field(default_factory=random.Random)
    instruction_table: Sequence[tuple[Instruction, ...]] = field(default=OPCODE_TABLE)

    state: CPUState = field(default_factory=CPUState)
    draw: bool = False
    clear: bool = False
    halted: bool = False
    waiting_register: int | None = None
    step_count: int = 0
    last_opcode: int | None = None
    _wait_serial: int = 0

    def reset(self) -> None:
        """Reset registers, stack and transient flags."""

        self.state = CPUState()
        self.draw = False
        self.clear = False
        self.halted = False
        self.waiting_register = None
        self.step_count = 0
        self.last_opcode = None
        self._wait_serial = 0

    @property
    def waiting_for_key(self) -> bool:
        return self.waiting_register is not None

    def step(self, delta: float | None = None) -> bool:
        """Advance the machine by one instruction.

        ``delta`` is the elapsed time in seconds fed to the timers; when
        omitted the timers read their own clock. Returns True if an
        instruction completed, False while halted or still waiting for a key.
        """

        if self.halted:
            return False

        self.timers.advance(delta)
        self.draw = False
        self.clear = False

        if self.waiting_register is not None:
            return self._poll_key()

        pc_before = self.state.pc
        try:
            opcode = self.memory.load16(pc_before)
            self.last_opcode = opcode
            instruction = self._decode(opcode)
            if instruction is None:
                if debug_enabled("cpu"):
                    debug_log("cpu", "skip invalid opcode=%04x pc=%03x", opcode, pc_before)
                self._advance()
            else:
                if debug_enabled("cpu"):
                    debug_log("cpu", "pc=%03x opcode=%04x %s", pc_before, opcode, instruction.format(opcode))
                handler = getattr(self, instruction.handler, None)
                if handler is None:
                    raise CPUError(f"handler '{instruction.handler}' not implemented")
                handler(opcode)
        except (CPUError, MemoryOutOfBoundsError):
            self.halted = True
            raise

        if self.waiting_register is not None:
            return False
        self.step_count += 1
        return True

    # ------------------------------------------------------------------
    # Flow control

    def op_cls(self, _: int) -> None:
        self.framebuffer.clear()
        self.clear = True
        self._advance()

    def op_ret(self, _: int) -> None:
        state = self.state
        if state.sp == 0:
            raise StackUnderflowError(state.pc)
        state.sp -= 1
        state.pc = state.stack[state.sp] + 2

    def op_jp(self, opcode: int) -> None:
        self.state.pc = payload_of(opcode)

    def op_call(self, opcode: int) -> None:
        state = self.state
        if state.sp >= STACK_DEPTH:
            raise StackOverflowError(state.pc)
        state.stack[state.sp] = state.pc
        state.sp += 1
        state.pc = payload_of(opcode)

    def op_jp_offset(self, opcode: int) -> None:
        self.state.pc = payload_of(opcode) + self.state.registers[0]

    def op_se_immediate(self, opcode: int) -> None:
        self._skip_if(self.state.registers[_x(opcode)] == _nn(opcode))

    def op_sne_immediate(self, opcode: int) -> None:
        self._skip_if(self.state.registers[_x(opcode)] != _nn(opcode))

    def op_se_register(self, opcode: int) -> None:
        registers = self.state.registers
        self._skip_if(registers[_x(opcode)] == registers[_y(opcode)])

    def op_sne_register(self, opcode: int) -> None:
        registers = self.state.registers
        self._skip_if(registers[_x(opcode)] != registers[_y(opcode)])

    # ------------------------------------------------------------------
    # Register loads and arithmetic

    def op_ld_immediate(self, opcode: int) -> None:
        self.state.registers[_x(opcode)] = _nn(opcode)
        self._advance()

    def op_add_immediate(self, opcode: int) -> None:
        registers = self.state.registers
        x = _x(opcode)
        registers[x] = alu.add_wrap(registers[x], _nn(opcode))
        self._advance()

    def op_ld_register(self, opcode: int) -> None:
        registers = self.state.registers
        registers[_x(opcode)] = registers[_y(opcode)]
        self._advance()

    def op_or(self, opcode: int) -> None:
        registers = self.state.registers
        registers[_x(opcode)] |= registers[_y(opcode)]
        self._advance()

    def op_and(self, opcode: int) -> None:
        registers = self.state.registers
        registers[_x(opcode)] &= registers[_y(opcode)]
        self._advance()

    def op_xor(self, opcode: int) -> None:
        registers = self.state.registers
        registers[_x(opcode)] ^= registers[_y(opcode)]
        self._advance()

    def op_add_register(self, opcode: int) -> None:
        registers = self.state.registers
        x = _x(opcode)
        self._store_with_flag(x, *alu.add_carry(registers[x], registers[_y(opcode)]))

    def op_sub(self, opcode: int) -> None:
        registers = self.state.registers
        x = _x(opcode)
        self._store_with_flag(x, *alu.sub_borrow(registers[x], registers[_y(opcode)]))

    def op_subn(self, opcode: int) -> None:
        registers = self.state.registers
        x = _x(opcode)
        self._store_with_flag(x, *alu.sub_borrow(registers[_y(opcode)], registers[x]))

    def op_shr(self, opcode: int) -> None:
        x = _x(opcode)
        self._store_with_flag(x, *alu.shift_right(self.state.registers[x]))

    def op_shl(self, opcode: int) -> None:
        x = _x(opcode)
        self._store_with_flag(x, *alu.shift_left(self.state.registers[x]))

    def op_ld_index(self, opcode: int) -> None:
        self.state.index = payload_of(opcode)
        self._advance()

    def op_rnd(self, opcode: int) -> None:
        self.state.registers[_x(opcode)] = self.rng.randint(0, 0xFF) & _nn(opcode)
        self._advance()

    # ------------------------------------------------------------------
    # Display and input

    def op_drw(self, opcode: int) -> None:
        registers = self.state.registers
        x = registers[_x(opcode)]
        y = registers[_y(opcode)]
        rows = self.memory.read_block(self.state.index, _n(opcode))
        collision = self.framebuffer.draw_sprite(x, y, rows)
        registers[FLAG_REGISTER] = 1 if collision else 0
        self.draw = True
        self._advance()

    def op_skp(self, opcode: int) -> None:
        self._skip_if(self.keypad.is_pressed(self.state.registers[_x(opcode)]))

    def op_sknp(self, opcode: int) -> None:
        self._skip_if(not self.keypad.is_pressed(self.state.registers[_x(opcode)]))

    def op_wait_key(self, opcode: int) -> None:
        self.waiting_register = _x(opcode)
        self._wait_serial = self.keypad.press_serial
        if debug_enabled("input"):
            debug_log("input", "wait_key V%X pc=%03x", self.waiting_register, self.state.pc)

    # ------------------------------------------------------------------
    # Timers and memory transfers

    def op_ld_from_delay(self, opcode: int) -> None:
        self.state.registers[_x(opcode)] = self.timers.delay
        self._advance()

    def op_ld_delay(self, opcode: int) -> None:
        self.timers.set_delay(self.state.registers[_x(opcode)])
        self._advance()

    def op_ld_sound(self, opcode: int) -> None:
        self.timers.set_sound(self.state.registers[_x(opcode)])
        self._advance()

    def op_add_index(self, opcode: int) -> None:
        target = self.state.index + self.state.registers[_x(opcode)]
        if target >= MEMORY_SIZE:
            raise MemoryOutOfBoundsError(target)
        self.state.index = target
        self._advance()

    def op_ld_font(self, opcode: int) -> None:
        self.state.index = glyph_address(self.state.registers[_x(opcode)])
        self._advance()

    def op_ld_bcd(self, opcode: int) -> None:
        digits = alu.to_bcd(self.state.registers[_x(opcode)])
        self.memory.write_block(self.state.index, digits)
        self._advance()

    def op_store_registers(self, opcode: int) -> None:
        count = _x(opcode) + 1
        self.memory.write_block(self.state.index, self.state.registers[:count])
        self._advance()

    def op_load_registers(self, opcode: int) -> None:
        count = _x(opcode) + 1
        data = self.memory.read_block(self.state.index, count)
        self.state.registers[:count] = list(data)
        self._advance()

    # ------------------------------------------------------------------
    # Internal helpers

    def _decode(self, opcode: int) -> Instruction | None:
        instruction = decode(opcode, self.instruction_table)
        if instruction is None and self.strict_illegal:
            raise InvalidOpcodeError(opcode, self.state.pc)
        return instruction

    def _poll_key(self) -> bool:
        keypad = self.keypad
        if keypad.press_serial == self._wait_serial or keypad.last_pressed is None:
            return False
        register = self.waiting_register
        assert register is not None
        self.state.registers[register] = keypad.last_pressed
        self.waiting_register = None
        self._advance()
        self.step_count += 1
        if debug_enabled("input"):
            debug_log("input", "wait_key resolved V%X=%X", register, keypad.last_pressed)
        return True

    def _store_with_flag(self, register: int, value: int, flag: int) -> None:
        # VF is written last so it holds the flag even when x == F
        self.state.registers[register] = value
        self.state.registers[FLAG_REGISTER] = flag
        self._advance()

    def _skip_if(self, condition: bool) -> None:
        self.state.pc += 4 if condition else 2

    def _advance(self) -> None:
        self.state.pc += 2
