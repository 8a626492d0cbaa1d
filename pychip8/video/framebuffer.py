"""64x32 monochrome framebuffer and the sprite blitter."""

from __future__ import annotations

from enum import IntEnum
from typing import Final, Iterator

SCREEN_WIDTH: Final[int] = 64
SCREEN_HEIGHT: Final[int] = 32
SPRITE_WIDTH: Final[int] = 8


class Pixel(IntEnum):
    OFF = 0
    ON = 1


class Framebuffer:
    """Row-major pixel store (``index = y * width + x``)."""

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)

    def get_pixel(self, x: int, y: int) -> Pixel:
        return Pixel(self._pixels[y * self.width + x])

    def set_pixel(self, x: int, y: int, value: Pixel | int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"pixel ({x}, {y}) outside {self.width}x{self.height} frame")
        self._pixels[y * self.width + x] = 1 if value else 0

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))

    def draw_sprite(self, x: int, y: int, rows: bytes) -> bool:
        """XOR ``rows`` onto the frame with the top-left corner at (x, y).

        Each byte is one 8-pixel row, most significant bit leftmost. Pixels
        that land outside the frame are dropped rather than wrapped. Returns
        True when any lit pixel was switched off.
        """

        collision = False
        width = self.width
        pixels = self._pixels
        for row, bits in enumerate(rows):
            py = y + row
            if py >= self.height:
                break
            base = py * width
            for column in range(SPRITE_WIDTH):
                if not bits & (0x80 >> column):
                    continue
                px = x + column
                if px >= width:
                    break
                index = base + px
                if pixels[index]:
                    collision = True
                pixels[index] ^= 1
        return collision

    def rows(self) -> Iterator[bytes]:
        for y in range(self.height):
            start = y * self.width
            yield bytes(self._pixels[start : start + self.width])

    def snapshot(self) -> bytes:
        return bytes(self._pixels)
