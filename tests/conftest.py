import os
import sys
from pathlib import Path

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "hide")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import numpy as np
import pygame
import pytest

from floatspace.api.config import CloudSettings
from floatspace.render.canvas import Canvas


class RecordingCanvas(Canvas):
    """Canvas double that records every draw call."""

    def __init__(self, size=(800, 600)):
        self._size = size
        self.ops = []

    @property
    def size(self):
        return self._size

    def clear(self, color=None):
        self.ops.append(("clear", color))

    def line(self, x0, y0, x1, y1, color, alpha, weight=1.0):
        self.ops.append(("line", x0, y0, x1, y1, tuple(color), alpha, weight))

    def circle(self, x, y, diameter, color, alpha=255):
        self.ops.append(("circle", x, y, diameter, tuple(color), alpha))

    def stamp(self, mask, x, y, color, alpha=255):
        self.ops.append(("stamp", mask, x, y, tuple(color), alpha))

    def new_layer(self):
        return RecordingCanvas(self._size)

    def compose(self, layer):
        self.ops.append(("compose", layer))

    def of(self, kind):
        return [op for op in self.ops if op[0] == kind]


@pytest.fixture
def canvas():
    return RecordingCanvas((800, 600))


@pytest.fixture
def small_clouds():
    # tiny stamps keep the simulator tests fast
    return CloudSettings(spray_radius=10, particles=30, blur=2.0)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def pygame_display():
    pygame.init()
    pygame.display.set_mode((320, 240))
    yield
    pygame.quit()
