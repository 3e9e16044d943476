from __future__ import annotations
import pygame
from typing import Tuple

from .sampler import InputSampler

LEFT_BUTTON = 1


class PointerRouter:
    """
    Feeds pygame mouse events into an InputSampler:
    - Left button down starts a stroke, motion while held drags it.
    - Button up or losing window focus ends the stroke.
    - Respects --mirror by converting window coords -> logical coords.
    """

    def __init__(self, sampler: InputSampler, mirror: bool = False):
        self.sampler = sampler
        self.mirror = mirror

    def _to_logical(self, x: int, y: int, w: int, h: int) -> Tuple[float, float]:
        if self.mirror:
            x = (w - 1) - x
        return float(x), float(y)

    def handle_pygame_event(self, event: pygame.event.Event, screen_size: Tuple[int, int]) -> bool:
        """Returns True when the event was a pointer event for the sampler."""
        w, h = screen_size

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == LEFT_BUTTON:
            self.sampler.on_press_start(*self._to_logical(*event.pos, w, h))
            return True

        if event.type == pygame.MOUSEMOTION:
            if self.sampler.dragging:
                self.sampler.on_drag_move(*self._to_logical(*event.pos, w, h))
                return True
            return False

        if event.type == pygame.MOUSEBUTTONUP and event.button == LEFT_BUTTON:
            self.sampler.on_release()
            return True

        if event.type == pygame.WINDOWFOCUSLOST:
            self.sampler.on_release()
            return True

        return False
