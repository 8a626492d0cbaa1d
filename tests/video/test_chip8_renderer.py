"""Unit tests for the framebuffer renderer."""

from __future__ import annotations

import pytest

from pychip8.video import MONOCHROME, Framebuffer, Pixel, Renderer, validate_palette

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def test_render_single_pixel() -> None:
    fb = Framebuffer()
    fb.set_pixel(1, 0, Pixel.ON)

    result = Renderer().render(fb)

    assert (result.width, result.height) == (64, 32)
    assert result.get_pixel(1, 0) == WHITE
    assert result.get_pixel(0, 0) == BLACK


def test_render_scale_factor() -> None:
    fb = Framebuffer()
    fb.set_pixel(1, 1, Pixel.ON)

    result = Renderer(MONOCHROME).render(fb, scale=3)

    assert (result.width, result.height) == (192, 96)
    for x in range(3, 6):
        for y in range(3, 6):
            assert result.get_pixel(x, y) == WHITE
    assert result.get_pixel(2, 3) == BLACK
    assert result.get_pixel(6, 5) == BLACK


def test_render_custom_palette() -> None:
    fb = Framebuffer()
    fb.set_pixel(0, 0, Pixel.ON)
    palette = ((1, 2, 3), (4, 5, 6))
    result = Renderer(palette).render(fb)
    assert result.get_pixel(0, 0) == (4, 5, 6)
    assert result.get_pixel(1, 0) == (1, 2, 3)


def test_invalid_scale_rejected() -> None:
    with pytest.raises(ValueError):
        Renderer().render(Framebuffer(), scale=0)


def test_validate_palette() -> None:
    assert validate_palette([[0, 0, 255], (1, 1, 1)]) == ((0, 0, 255), (1, 1, 1))
    with pytest.raises(ValueError):
        validate_palette([(0, 0, 256), (1, 1, 1)])
    with pytest.raises(ValueError):
        validate_palette([(0, 0, 0)])
    with pytest.raises(ValueError):
        validate_palette([(0, 0), (1, 1, 1)])
