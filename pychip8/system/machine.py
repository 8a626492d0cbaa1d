"""CHIP-8 machine assembly."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from pychip8.bus import Memory, Timers
from pychip8.bus.timers import ToneCallback
from pychip8.cpu import Chip8CPU
from pychip8.io import Keypad, KeyState
from pychip8.loader import ProgramImage, install_program, load_program_bytes
from pychip8.video import Framebuffer, Pixel


@dataclass
class MachineConfig:
    """Runtime configuration for the CHIP-8 machine."""

    program_image: Optional[bytes] = None
    program_name: str = ""
    strict_illegal: bool = True
    seed: Optional[int] = None
    clock: Callable[[], float] = time.perf_counter
    tone_callback: Optional[ToneCallback] = None


@dataclass
class Machine:
    """Aggregates the core components of the interpreter."""

    memory: Memory
    cpu: Chip8CPU
    framebuffer: Framebuffer
    keypad: Keypad
    timers: Timers
    program: ProgramImage | None = field(default=None)

    def step(self, delta: float | None = None) -> bool:
        return self.cpu.step(delta)

    def get_pixel(self, x: int, y: int) -> Pixel:
        return self.framebuffer.get_pixel(x, y)

    def set_key(self, key: int, state: KeyState) -> None:
        self.keypad.set_key(key, state)

    def get_key(self, key: int) -> KeyState:
        return self.keypad.get_key(key)

    @property
    def draw(self) -> bool:
        return self.cpu.draw

    @property
    def clear(self) -> bool:
        return self.cpu.clear

    @property
    def halted(self) -> bool:
        return self.cpu.halted

    def reset(self) -> None:
        """Return to the freshly loaded state, reinstalling the program."""

        self.memory.reset()
        self.framebuffer.clear()
        self.keypad.reset()
        self.timers.reset()
        self.cpu.reset()
        if self.program is not None:
            install_program(self.program, self.memory)


def create_machine(config: MachineConfig) -> Machine:
    """Instantiate a machine, loading ``config.program_image`` if present."""

    memory = Memory()
    framebuffer = Framebuffer()
    keypad = Keypad()
    timers = Timers(clock=config.clock, tone_callback=config.tone_callback)

    program = None
    if config.program_image is not None:
        program = load_program_bytes(config.program_image, memory, name=config.program_name)

    cpu = Chip8CPU(
        memory,
        framebuffer=framebuffer,
        keypad=keypad,
        timers=timers,
        strict_illegal=config.strict_illegal,
        rng=random.Random(config.seed),
    )

    return Machine(
        memory=memory,
        cpu=cpu,
        framebuffer=framebuffer,
        keypad=keypad,
        timers=timers,
        program=program,
    )
