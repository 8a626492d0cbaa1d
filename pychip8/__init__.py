"""CHIP-8 interpreter.

The core (``cpu``, ``bus``, ``io``, ``video``) runs without any display;
``ui`` adds a pygame frontend used by ``run.py``.
"""

from __future__ import annotations

from . import bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "bus",
    "cpu",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
    "video",
]
