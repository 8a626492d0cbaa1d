"""Video helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT_BASE, FONTSET, GLYPH_BYTES, glyph_address
from .framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH, Framebuffer, Pixel
from .palette import AMBER, MONOCHROME, PALETTES, PHOSPHOR, resolve_palette, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "Framebuffer",
    "Pixel",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "FONT_BASE",
    "FONTSET",
    "GLYPH_BYTES",
    "glyph_address",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "PHOSPHOR",
    "AMBER",
    "PALETTES",
    "resolve_palette",
    "validate_palette",
]
