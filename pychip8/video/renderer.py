"""Convert the framebuffer into scaled RGB frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .framebuffer import Framebuffer
from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    width: int
    height: int
    pixels: List[List[RGBColor]]

    def get_pixel(self, x: int, y: int) -> RGBColor:
        return self.pixels[y][x]

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc

        surface = pygame.Surface((self.width, self.height))
        for y, row in enumerate(self.pixels):
            for x, color in enumerate(row):
                surface.set_at((x, y), color)
        return surface


class Renderer:
    """Render a :class:`Framebuffer` using a two-colour palette."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        self._background, self._foreground = validate_palette(palette)

    def render(self, framebuffer: Framebuffer, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        pixels: List[List[RGBColor]] = []
        for row in framebuffer.rows():
            line: List[RGBColor] = []
            for value in row:
                color = self._foreground if value else self._background
                line.extend([color] * scale)
            for _ in range(scale):
                pixels.append(list(line))
        return RenderResult(framebuffer.width * scale, framebuffer.height * scale, pixels)
