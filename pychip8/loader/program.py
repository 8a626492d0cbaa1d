"""Raw program image loading.

A program is a flat binary copied byte-for-byte into memory at 0x200. The
image may not exceed the 3584 bytes between 0x200 and the end of memory;
oversize images are rejected rather than truncated.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MAX_PROGRAM_SIZE, PROGRAM_START, Memory
from pychip8.utils import debug_enabled, debug_log


class ProgramLoadError(RuntimeError):
    """Raised when a program image cannot be read or does not fit in memory."""


@dataclass(frozen=True)
class ProgramImage:
    """Program bytes together with where they were loaded."""

    data: bytes
    name: str = ""
    start: int = PROGRAM_START

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def end(self) -> int:
        """Last address occupied by the image."""

        return self.start + len(self.data) - 1


def read_program(stream: BinaryIO, *, name: str = "") -> ProgramImage:
    """Read and validate a program image from ``stream``.

    Short reads are followed up until the stream reports end of file, so
    raw and piped streams yield the whole image. Reading stops as soon as
    the image is known to be too large.
    """

    label = name or "<stream>"
    buffer = bytearray()
    try:
        while True:
            chunk = stream.read(MAX_PROGRAM_SIZE + 1 - len(buffer))
            if chunk is None:
                raise ProgramLoadError(f"program {label} stream has no data available")
            if not chunk:
                break
            buffer += chunk
            if len(buffer) > MAX_PROGRAM_SIZE:
                break
    except OSError as exc:
        raise ProgramLoadError(f"failed to read program {label}: {exc}") from exc
    return _validate(bytes(buffer), name)


def load_program(stream: BinaryIO, memory: Memory, *, name: str = "") -> ProgramImage:
    """Read a program from ``stream`` and copy it into ``memory``."""

    image = read_program(stream, name=name)
    install_program(image, memory)
    return image


def load_program_bytes(data: bytes, memory: Memory, *, name: str = "") -> ProgramImage:
    image = _validate(bytes(data), name)
    install_program(image, memory)
    return image


def load_program_from_path(path: Path, memory: Memory) -> ProgramImage:
    """Load a program image from the filesystem."""

    try:
        with Path(path).open("rb") as handle:
            return load_program(handle, memory, name=Path(path).name)
    except OSError as exc:
        raise ProgramLoadError(f"failed to open program {path}: {exc}") from exc


def install_program(image: ProgramImage, memory: Memory) -> None:
    memory.write_block(image.start, image.data)
    if debug_enabled("loader"):
        debug_log(
            "loader",
            "program=%s start=%03x end=%03x size=%d",
            image.name or "<anonymous>",
            image.start,
            image.end,
            image.size,
        )


def _validate(data: bytes, name: str) -> ProgramImage:
    label = name or "<stream>"
    if not data:
        raise ProgramLoadError(f"program {label} is empty")
    if len(data) > MAX_PROGRAM_SIZE:
        raise ProgramLoadError(
            f"program {label} exceeds {MAX_PROGRAM_SIZE} bytes available at {PROGRAM_START:#05x}"
        )
    return ProgramImage(data=data, name=name)
