"""Two-colour palettes for the CHIP-8 display.

A palette is a ``(background, foreground)`` pair of RGB tuples. Palettes
can be picked by name or written as ``BG,FG`` hex colours on the command
line, e.g. ``#000000,#33ff66``.
"""

from __future__ import annotations

import string
from typing import Dict, Sequence, Tuple

RGBColor = Tuple[int, int, int]
Palette = Tuple[RGBColor, RGBColor]


MONOCHROME: Palette = ((0, 0, 0), (0xFF, 0xFF, 0xFF))
PHOSPHOR: Palette = ((0x10, 0x18, 0x10), (0x33, 0xFF, 0x66))
AMBER: Palette = ((0x1A, 0x10, 0x00), (0xFF, 0xB0, 0x00))

PALETTES: Dict[str, Palette] = {
    "mono": MONOCHROME,
    "phosphor": PHOSPHOR,
    "amber": AMBER,
}


def parse_color(text: str) -> RGBColor:
    """Parse ``#rrggbb``; the leading ``#`` is optional."""

    digits = text.strip().removeprefix("#")
    if len(digits) != 6 or any(char not in string.hexdigits for char in digits):
        raise ValueError(f"colour {text!r} must be six hex digits")
    packed = int(digits, 16)
    return ((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF)


def resolve_palette(text: str) -> Palette:
    """Return the named palette, or parse a ``BG,FG`` colour pair."""

    key = text.strip().lower()
    if key in PALETTES:
        return PALETTES[key]
    parts = key.split(",")
    if len(parts) != 2:
        names = ", ".join(sorted(PALETTES))
        raise ValueError(f"unknown palette {text!r} (expected {names} or BG,FG)")
    return (parse_color(parts[0]), parse_color(parts[1]))


def validate_palette(palette: Sequence[RGBColor]) -> Palette:
    if len(palette) != 2:
        raise ValueError("palette must contain exactly two colours (background and foreground)")
    checked = []
    for color in palette:
        if len(color) != 3:
            raise ValueError("palette entries must be RGB tuples")
        channels = tuple(int(channel) for channel in color)
        if any(not 0 <= channel <= 0xFF for channel in channels):
            raise ValueError(f"colour {channels!r} has a channel outside 0-255")
        checked.append(channels)
    return (checked[0], checked[1])
