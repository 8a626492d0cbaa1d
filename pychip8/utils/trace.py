"""Ring buffer of recent interpreter steps for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .debug import debug_log


@dataclass
class TraceEntry:
    pc: int
    opcode: int | None
    mnemonic: str
    index: int
    sp: int
    registers: tuple[int, ...]
    waiting: bool
    halted: bool
    note: str = ""


class TraceRecorder:
    """Ring buffer that stores recent CPU snapshots."""

    def __init__(self, capacity: int = 256) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._entries: List[TraceEntry | None] = [None] * capacity
        self._index = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def record_step(
        self,
        cpu_state,
        opcode: int | None,
        *,
        waiting: bool,
        halted: bool,
        mnemonic: str = "",
        note: str = "",
    ) -> None:
        entry = TraceEntry(
            pc=cpu_state.pc & 0xFFFF,
            opcode=None if opcode is None else opcode & 0xFFFF,
            mnemonic=mnemonic,
            index=cpu_state.index & 0xFFFF,
            sp=cpu_state.sp,
            registers=tuple(value & 0xFF for value in cpu_state.registers),
            waiting=waiting,
            halted=halted,
            note=note,
        )
        self._append(entry)

    def entries(self, limit: int | None = None) -> Iterable[TraceEntry]:
        count = self._size if limit is None else min(self._size, max(limit, 0))
        for offset in range(count):
            index = (self._index - count + offset) % self._capacity
            entry = self._entries[index]
            if entry is not None:
                yield entry

    def last_entry(self) -> TraceEntry | None:
        if self._size == 0:
            return None
        index = (self._index - 1) % self._capacity
        return self._entries[index]

    def format_entries(self, limit: int | None = None) -> Sequence[str]:
        lines: list[str] = []
        for entry in self.entries(limit):
            opcode = "----" if entry.opcode is None else f"{entry.opcode:04X}"
            mnemonic = entry.mnemonic or "?"
            flags: list[str] = []
            if entry.waiting:
                flags.append("WAIT")
            if entry.halted:
                flags.append("HALT")
            if entry.note:
                flags.append(entry.note)
            flag_repr = ",".join(flags) if flags else "-"
            registers = " ".join(f"{value:02X}" for value in entry.registers)
            line = (
                f"pc={entry.pc:03X} opcode={opcode} {mnemonic:<18} "
                f"I={entry.index:03X} SP={entry.sp:02d} V=[{registers}] flags={flag_repr}"
            )
            lines.append(line)
        return lines

    def dump(self, category: str, limit: int | None = None) -> None:
        for line in self.format_entries(limit):
            debug_log(category, line)

    def _append(self, entry: TraceEntry) -> None:
        self._entries[self._index] = entry
        self._index = (self._index + 1) % self._capacity
        if self._size < self._capacity:
            self._size += 1
