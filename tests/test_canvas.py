import numpy as np
import pygame

from floatspace.clouds.stamp import AlphaMask
from floatspace.render.canvas import PygameCanvas, clamp_byte, clamp_color

WHITE = (255, 255, 255)


def white_canvas(w=20, h=20):
    canvas = PygameCanvas(pygame.Surface((w, h)))
    canvas.clear(WHITE)
    return canvas


def rgb_at(canvas, x, y):
    return tuple(canvas.surface.get_at((x, y)))[:3]


def test_clamp_helpers():
    assert clamp_byte(-3) == 0
    assert clamp_byte(300.2) == 255
    assert clamp_byte(18.36) == 18
    assert clamp_color((270, -1, 12.6)) == (255, 0, 13)


def test_size():
    assert white_canvas(30, 12).size == (30, 12)


def test_opaque_vertical_line():
    canvas = white_canvas()
    canvas.line(5, 0, 5, 20, (255, 0, 0), 255)
    assert rgb_at(canvas, 5, 10) == (255, 0, 0)
    assert rgb_at(canvas, 7, 10) == WHITE


def test_translucent_horizontal_line_blends():
    canvas = white_canvas()
    canvas.line(0, 8, 20, 8, (0, 0, 0), 128)
    r, g, b = rgb_at(canvas, 10, 8)
    assert 100 < r < 160 and r == g == b


def test_zero_alpha_draws_nothing():
    canvas = white_canvas()
    canvas.line(0, 8, 20, 8, (0, 0, 0), 0)
    canvas.circle(10, 10, 6, (0, 0, 0), 0)
    assert rgb_at(canvas, 10, 8) == WHITE


def test_diagonal_line():
    canvas = white_canvas()
    canvas.line(0, 0, 19, 19, (0, 0, 255), 255)
    assert rgb_at(canvas, 10, 10) == (0, 0, 255)


def test_circle():
    canvas = white_canvas()
    canvas.circle(10, 10, 6, (0, 255, 0))
    assert rgb_at(canvas, 10, 10) == (0, 255, 0)
    assert rgb_at(canvas, 1, 1) == WHITE


def test_stamp_tints_mask():
    pixels = np.zeros((4, 4), dtype=np.uint8)
    pixels[1:3, 1:3] = 255
    mask = AlphaMask(pixels)
    canvas = white_canvas(10, 10)
    canvas.stamp(mask, 2, 2, (0, 0, 255), 255)
    assert rgb_at(canvas, 3, 3) == (0, 0, 255)
    assert rgb_at(canvas, 2, 2) == WHITE
    assert "pygame" in mask.cache


def test_layer_compose_and_clear():
    canvas = white_canvas(10, 10)
    layer = canvas.new_layer()
    assert layer.size == (10, 10)
    layer.circle(5, 5, 4, (255, 0, 0))
    canvas.compose(layer)
    assert rgb_at(canvas, 5, 5) == (255, 0, 0)

    layer.clear()
    fresh = white_canvas(10, 10)
    fresh.compose(layer)
    assert rgb_at(fresh, 5, 5) == WHITE
