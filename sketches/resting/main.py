from __future__ import annotations
import pygame
from typing import Optional

from const import BACKGROUND_COLOR
from floatspace.api import Sketch, FrameData, HaloSettings
from floatspace.app.context import Context
from floatspace.input.pointer import PointerRouter
from floatspace.input.sampler import SAMPLE_SPACING, InputSampler
from floatspace.render.canvas import PygameCanvas
from floatspace.render.halo import HaloLineRenderer
from floatspace.render.shapes import draw_text


class RestingSketch(Sketch):
    def on_load(self, ctx: Context, manifest):
        self.ctx = ctx
        self.manifest = manifest
        options = manifest.get("options", {}) or {}

        self.renderer = HaloLineRenderer(HaloSettings.from_options(options.get("halo")))
        self.sampler = InputSampler(
            ctx.screen_size,
            reference=ctx.resources.get("reference_image"),
            spacing=float(options.get("sample_spacing", SAMPLE_SPACING)),
            on_seed=self._on_seed,
            sample_drag=bool(options.get("sample_drag", False)),
        )
        self.router = PointerRouter(self.sampler, mirror=ctx.cfg.mirror)

        # halo grid only changes when seeds or the canvas change
        self._cache: Optional[pygame.Surface] = None

    def _on_seed(self, seed) -> None:
        self._cache = None

    def clear(self) -> None:
        self.sampler.clear()
        self._cache = None

    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        pass

    def _rebuild(self, size) -> pygame.Surface:
        cache = pygame.Surface(size)
        canvas = PygameCanvas(cache)
        canvas.clear(BACKGROUND_COLOR)
        self.renderer.render(canvas, self.sampler.seeds)
        return cache

    def on_draw(self, surface: pygame.Surface) -> None:
        size = surface.get_size()
        if self._cache is None or self._cache.get_size() != size:
            self._cache = self._rebuild(size)
        surface.blit(self._cache, (0, 0))
        if not self.sampler.seeds:
            draw_text(surface, "Resting: click to weave, C to clear", (20, 20), size=24)

    def on_event(self, event: pygame.event.Event) -> None:
        if self.router.handle_pygame_event(event, self.ctx.screen_size):
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_c:
            self.clear()

    def on_resize(self, size) -> None:
        self.sampler.resize(size)
        self._cache = None

    def on_unload(self) -> None:
        self._cache = None


def get_sketch():
    return RestingSketch()
