"""Pygame frontend for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from pychip8.bus import MemoryOutOfBoundsError
from pychip8.cpu import CPUError
from pychip8.cpu.opcodes import disassemble
from pychip8.io import KeyState
from pychip8.loader import ProgramLoadError, load_program_from_path
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import MONOCHROME, Renderer, SCREEN_HEIGHT, SCREEN_WIDTH
from pychip8.video.palette import RGBColor

# COSMAC VIP layout on the left side of a QWERTY keyboard:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  <-  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
KEY_MAP: dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}


@dataclass
class AppConfig:
    """Configuration for the CHIP-8 frontend."""

    program_path: Optional[Path] = None
    scale: int = 10
    fullscreen: bool = False
    instructions_per_second: int = 700
    palette: Sequence[RGBColor] = field(default=MONOCHROME)
    strict_illegal: bool = True


class Chip8App:
    """Thin wrapper around the pygame event loop."""

    def __init__(self, config: AppConfig) -> None:
        if config.scale <= 0:
            raise ValueError("scale must be positive")
        if config.instructions_per_second <= 0:
            raise ValueError("instructions_per_second must be positive")
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._renderer = Renderer(config.palette)
        self._steps_per_frame = max(1, config.instructions_per_second // _FRAME_RATE)
        self._tone_count = 0
        self._frame_counter = 0
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)

    @property
    def steps_per_frame(self) -> int:
        return self._steps_per_frame

    @property
    def tone_count(self) -> int:
        return self._tone_count

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        if not self._config.program_path:
            raise RuntimeError("program image is required; pass a path to a CHIP-8 program")

        machine = self._create_machine(self._config.program_path)
        self._machine = machine

        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {self._config.program_path.name}")
        scale = self._config.scale
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale), flags)
        clock = pygame.time.Clock()
        self._present(pygame, screen, machine)

        self._running = True
        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_F5:
                        machine.reset()
                        self._present(pygame, screen, machine)
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_name(pygame.key.name(event.key), pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_name(pygame.key.name(event.key), pressed=False)

                if self._step_machine(machine):
                    self._present(pygame, screen, machine)

                clock.tick(_FRAME_RATE)
                self._frame_counter += 1
        finally:
            pygame.quit()

    def _create_machine(self, program_path: Path) -> Machine:
        config = MachineConfig(
            strict_illegal=self._config.strict_illegal,
            tone_callback=self._handle_tone,
        )
        machine = create_machine(config)
        try:
            machine.program = load_program_from_path(program_path, machine.memory)
        except ProgramLoadError as exc:
            raise RuntimeError(f"Failed to load program {program_path}: {exc}") from exc
        return machine

    def _handle_key_name(self, name: str, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        key = KEY_MAP.get(name.lower())
        if debug_enabled("input"):
            debug_log("input", "event=%s key=%s pressed=%s", name, key, pressed)
        if key is None:
            return
        machine.set_key(key, KeyState.DOWN if pressed else KeyState.UP)

    def _handle_tone(self) -> None:
        self._tone_count += 1
        if debug_enabled("timer"):
            debug_log("timer", "tone count=%d", self._tone_count)

    def _step_machine(self, machine: Machine) -> bool:
        """Run one frame worth of instructions; return True if the frame changed."""

        cpu = machine.cpu
        trace = self._trace_recorder
        dirty = False
        try:
            for _ in range(self._steps_per_frame):
                state_before = cpu.state.clone() if trace is not None else None
                waiting_before = cpu.waiting_for_key
                executed = cpu.step()
                dirty = dirty or cpu.draw or cpu.clear
                if trace is not None and state_before is not None:
                    opcode = cpu.last_opcode if not waiting_before else None
                    trace.record_step(
                        state_before,
                        opcode,
                        waiting=cpu.waiting_for_key,
                        halted=cpu.halted,
                        mnemonic="" if opcode is None else disassemble(opcode),
                        note="" if executed else "idle",
                    )
                if cpu.waiting_for_key:
                    break
        except (CPUError, MemoryOutOfBoundsError) as exc:
            self._running = False
            opcode = cpu.last_opcode
            opcode_repr = "----" if opcode is None else f"{opcode:04X}"
            if trace is not None:
                trace.dump("trace", limit=64)
            raise RuntimeError(
                f"Machine halted at pc={cpu.state.pc:03X} opcode={opcode_repr}: {exc}"
            ) from exc
        return dirty

    def _present(self, pygame, screen, machine: Machine) -> None:
        frame = self._renderer.render(machine.framebuffer)
        scale = self._config.scale
        surface = pygame.transform.scale(frame.to_surface(), (frame.width * scale, frame.height * scale))
        screen.blit(surface, (0, 0))
        pygame.display.flip()


_FRAME_RATE = 60
