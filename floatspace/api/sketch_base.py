from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

from .frame_data import FrameData

if TYPE_CHECKING:
    from floatspace.app.context import Context


class Sketch:
    """
    Base interface sketches should implement.
    """

    def on_load(self, ctx: Context, manifest: dict) -> None:
        """Called once after the sketch module loads."""
        ...

    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        """Called every frame; dt_ms is milliseconds elapsed."""
        ...

    def on_draw(self, surface: pygame.Surface) -> None:
        """Draw your sketch to the provided surface."""
        ...

    def on_event(self, event: pygame.event.Event) -> None:
        """Optional: Handle pygame events (keyboard, pointer, etc.)."""
        ...

    def on_resize(self, size: tuple[int, int]) -> None:
        """Optional: the window changed size; re-derive size-dependent state."""
        ...

    def on_unload(self) -> None:
        """Optional: cleanup when the sketch exits."""
        ...
