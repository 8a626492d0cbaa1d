"""Chip8App behaviour that does not need a display."""

from __future__ import annotations

import pytest

from pychip8.io import KeyState
from pychip8.ui.app import KEY_MAP, AppConfig, Chip8App


def _write_program(tmp_path, data: bytes):
    path = tmp_path / "test.ch8"
    path.write_bytes(data)
    return path


def test_key_map_covers_all_sixteen_keys() -> None:
    assert sorted(KEY_MAP.values()) == list(range(16))


def test_create_machine_loads_program(tmp_path) -> None:
    path = _write_program(tmp_path, b"\x00\xE0\x12\x00")
    app = Chip8App(AppConfig(program_path=path))

    machine = app._create_machine(path)

    assert machine.memory.load16(0x200) == 0x00E0
    assert machine.program is not None
    assert machine.program.name == "test.ch8"


def test_create_machine_reports_load_failure(tmp_path) -> None:
    path = _write_program(tmp_path, b"")
    app = Chip8App(AppConfig(program_path=path))
    with pytest.raises(RuntimeError, match="Failed to load program"):
        app._create_machine(path)


def test_key_names_are_mapped(tmp_path) -> None:
    path = _write_program(tmp_path, b"\x12\x00")
    app = Chip8App(AppConfig(program_path=path))
    app._machine = app._create_machine(path)

    app._handle_key_name("V", pressed=True)
    assert app._machine.get_key(0xF) is KeyState.DOWN

    app._handle_key_name("v", pressed=False)
    assert app._machine.get_key(0xF) is KeyState.UP

    app._handle_key_name("left shift", pressed=True)
    assert app._machine.keypad.pressed_count == 0


def test_step_machine_runs_a_frame_of_instructions(tmp_path) -> None:
    # CLS; ADD V0, 1; JP 0x202
    path = _write_program(tmp_path, b"\x00\xE0\x70\x01\x12\x02")
    app = Chip8App(AppConfig(program_path=path, instructions_per_second=600))
    machine = app._create_machine(path)

    assert app.steps_per_frame == 10
    assert app._step_machine(machine) is True
    assert machine.cpu.step_count == 10
    assert machine.cpu.state.registers[0] == 5


def test_step_machine_stops_early_while_waiting(tmp_path) -> None:
    path = _write_program(tmp_path, b"\xF0\x0A")
    app = Chip8App(AppConfig(program_path=path))
    machine = app._create_machine(path)

    assert app._step_machine(machine) is False
    assert machine.cpu.waiting_for_key


def test_step_machine_surfaces_halt_with_context(tmp_path) -> None:
    path = _write_program(tmp_path, b"\x60\x01\x01\x23")
    app = Chip8App(AppConfig(program_path=path))
    machine = app._create_machine(path)

    with pytest.raises(RuntimeError) as info:
        app._step_machine(machine)

    message = str(info.value)
    assert "pc=202" in message
    assert "opcode=0123" in message
    assert machine.halted


def test_tone_signals_are_counted(tmp_path) -> None:
    path = _write_program(tmp_path, b"\x12\x00")
    app = Chip8App(AppConfig(program_path=path))
    machine = app._create_machine(path)

    machine.timers.set_sound(1)
    machine.timers.advance(1.0)

    assert app.tone_count == 1


def test_invalid_config_rejected() -> None:
    with pytest.raises(ValueError):
        Chip8App(AppConfig(scale=0))
    with pytest.raises(ValueError):
        Chip8App(AppConfig(instructions_per_second=0))
