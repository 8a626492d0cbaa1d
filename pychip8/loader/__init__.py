"""Program loaders for the CHIP-8 interpreter."""

from __future__ import annotations

from .program import (
    ProgramImage,
    ProgramLoadError,
    install_program,
    load_program,
    load_program_bytes,
    load_program_from_path,
    read_program,
)

__all__ = [
    "ProgramImage",
    "ProgramLoadError",
    "install_program",
    "load_program",
    "load_program_bytes",
    "load_program_from_path",
    "read_program",
]
