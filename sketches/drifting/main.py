from __future__ import annotations
import pygame
from typing import Optional

import numpy as np

from const import BACKGROUND_COLOR
from floatspace.api import EMPTY_SNAPSHOT, CloudSettings, FrameData, PoseSnapshot, Sketch
from floatspace.app.context import Context
from floatspace.clouds import CloudSimulator
from floatspace.input.pointer import PointerRouter
from floatspace.input.sampler import SAMPLE_SPACING, InputSampler
from floatspace.noise import NoiseField
from floatspace.render.canvas import PygameCanvas
from floatspace.render.shapes import blit_camera_frame, draw_text
from floatspace.render.skeleton import draw_skeleton


class DriftingSketch(Sketch):
    def on_load(self, ctx: Context, manifest):
        self.ctx = ctx
        self.manifest = manifest
        options = manifest.get("options", {}) or {}

        self.settings = CloudSettings.from_options(options.get("clouds"))
        seed = options.get("noise_seed")
        self.sim = CloudSimulator(
            ctx.screen_size,
            self.settings,
            noise=NoiseField(seed),
            rng=np.random.default_rng(seed),
        )
        self.sim.attach_layer(PygameCanvas(ctx.screen).new_layer())

        self.sampler = InputSampler(
            ctx.screen_size,
            reference=ctx.resources.get("reference_image"),
            spacing=float(options.get("sample_spacing", SAMPLE_SPACING)),
            on_seed=lambda s: self.sim.spawn(s.x, s.y, s.color),
            sample_drag=bool(options.get("sample_drag", True)),
        )
        self.router = PointerRouter(self.sampler, mirror=ctx.cfg.mirror)

        self.show_skeleton = False
        self.poses: PoseSnapshot = EMPTY_SNAPSHOT
        self.camera_frame: Optional[np.ndarray] = None

    def clear(self) -> None:
        self.sampler.clear()
        self.sim.clear()

    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        self.poses = frame.poses
        self.camera_frame = frame.camera_frame
        self.sim.advance(1, frame.poses)

    def on_draw(self, surface: pygame.Surface) -> None:
        if self.camera_frame is not None:
            blit_camera_frame(surface, self.camera_frame, mirror=True)
        else:
            surface.fill(BACKGROUND_COLOR)

        canvas = PygameCanvas(surface)
        self.sim.render(canvas)
        if self.show_skeleton:
            draw_skeleton(canvas, self.poses, self.settings.confidence_threshold)
        if not len(self.sim):
            draw_text(surface, "Drifting: drag to spray, C to clear, S for skeleton", (20, 20), size=24)

    def on_event(self, event: pygame.event.Event) -> None:
        if self.router.handle_pygame_event(event, self.ctx.screen_size):
            return
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_c:
                self.clear()
            elif event.key == pygame.K_s:
                self.show_skeleton = not self.show_skeleton

    def on_resize(self, size) -> None:
        self.sampler.resize(size)
        self.sim.resize(size, PygameCanvas(self.ctx.screen).new_layer())

    def on_unload(self) -> None:
        self.sim.clear()


def get_sketch():
    return DriftingSketch()
