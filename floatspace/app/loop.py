from __future__ import annotations
import logging
import time
import pygame

from const import CAM_HEIGHT, CAM_WIDTH, IMAGE_PATTERN
from floatspace.api.config import EngineConfig
from floatspace.api.frame_data import FrameData
from floatspace.app.context import Context
from floatspace.app.loader import SKETCHES_DIR, load_sketch_manifest, load_sketch_module
from floatspace.input.reference_image import ReferenceImage
from floatspace.pose.bridge import PoseBridge
from floatspace.pose.detector import PoseDetector
from floatspace.video.camera import Camera

log = logging.getLogger(__name__)


def _start_detector(cfg: EngineConfig, manifest: dict, bridge: PoseBridge) -> PoseDetector | None:
    if not manifest.get("camera", {}).get("enabled", False):
        return None
    detector = PoseDetector(bridge, Camera(cfg.cam_index, (CAM_WIDTH, CAM_HEIGHT)), cfg.screen_size)
    with_pose = cfg.pose_enabled and manifest.get("pose", {}).get("enabled", True)
    if not detector.start(with_pose=with_pose):
        log.warning("camera unavailable; running without webcam and pose input")
        return None
    return detector


def run_sketch(sketch_id: str, cfg: EngineConfig):
    pygame.init()
    pygame.display.set_caption(f"Floatspace – {sketch_id}")
    screen = pygame.display.set_mode(cfg.screen_size, pygame.RESIZABLE)
    clock = pygame.time.Clock()

    # load sketch
    sketch_root = SKETCHES_DIR / sketch_id
    manifest = load_sketch_manifest(sketch_root)
    module = load_sketch_module(sketch_root)
    sketch = module.get_sketch()

    # color source & pose stream
    reference = ReferenceImage.load_random(cfg.image_dir, cfg.screen_size, IMAGE_PATTERN)
    bridge = PoseBridge()
    detector = _start_detector(cfg, manifest, bridge)

    # Render target: draw to off-screen if mirroring, otherwise draw directly to screen
    render_surface = screen if not cfg.mirror else pygame.Surface(cfg.screen_size).convert()

    ctx = Context(
        screen=render_surface,
        clock=clock,
        cfg=cfg,
        resources={"reference_image": reference, "pose_bridge": bridge},
        screen_size=cfg.screen_size,
    )

    sketch.on_load(ctx, manifest)

    frame_index = 0
    running = True
    try:
        while running:
            dt = clock.tick(cfg.fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    size = (max(1, event.w), max(1, event.h))
                    screen = pygame.display.get_surface()
                    render_surface = screen if not cfg.mirror else pygame.Surface(size).convert()
                    ctx.screen = render_surface
                    ctx.screen_size = size
                    if detector is not None:
                        detector.set_canvas_size(size)
                    log.debug("canvas resized to %dx%d", *size)
                    sketch.on_resize(size)
                sketch.on_event(event)

            frame_index += 1
            frame_data = FrameData(
                timestamp=time.time(),
                frame_index=frame_index,
                poses=bridge.latest(),
                camera_frame=detector.latest_frame() if detector is not None else None,
            )

            # ---- draw to render_surface ----
            sketch.on_update(dt, frame_data)
            sketch.on_draw(render_surface)

            # ---- present to window ----
            if cfg.mirror:
                flipped = pygame.transform.flip(render_surface, True, False)
                screen.blit(flipped, (0, 0))

            pygame.display.flip()

    finally:
        if detector is not None:
            detector.stop()
        sketch.on_unload()
        pygame.quit()
