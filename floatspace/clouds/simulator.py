from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from floatspace.api.config import CloudSettings
from floatspace.api.frame_data import EMPTY_SNAPSHOT, RGB, PoseSnapshot
from floatspace.noise.field import NoiseField
from floatspace.render.canvas import Canvas, clamp_byte

from .stamp import AlphaMask, CloudStampFactory

log = logging.getLogger(__name__)


@dataclass
class Cloud:
    x: float
    y: float
    stamp: AlphaMask
    base_color: RGB
    noise_seed_x: float
    noise_seed_y: float
    drift_scale: float
    hue_jitter_speed: float
    color: Optional[RGB] = None

    def __post_init__(self):
        if self.color is None:
            self.color = tuple(self.base_color)

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y


class CloudSimulator:
    """
    Owns the live clouds and moves them once per frame.

    Clouds drift on noise, get pushed away from confident body keypoints
    and shimmer in color. When more than ``max_active_clouds`` are alive the
    oldest are baked into the paint layer and stop simulating.
    """

    def __init__(
        self,
        size: Tuple[int, int],
        settings: Optional[CloudSettings] = None,
        noise: Optional[NoiseField] = None,
        stamps: Optional[CloudStampFactory] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.settings = settings or CloudSettings()
        self.width, self.height = size
        self.rng = rng if rng is not None else np.random.default_rng()
        self.noise = noise or NoiseField()
        self.stamps = stamps or CloudStampFactory(self.settings, self.rng)
        self.clouds: List[Cloud] = []
        self.frame = 0.0
        self.paint_layer: Optional[Canvas] = None
        self.baked_count = 0

    # ---------- Lifecycle ----------
    def attach_layer(self, layer: Optional[Canvas]) -> None:
        self.paint_layer = layer

    def resize(self, size: Tuple[int, int], layer: Optional[Canvas] = None) -> None:
        self.width, self.height = size
        # baked paint does not survive a resize
        self.paint_layer = layer
        self.baked_count = 0

    def clear(self) -> None:
        self.clouds = []
        self.baked_count = 0
        if self.paint_layer is not None:
            self.paint_layer.clear()

    # ---------- Spawning ----------
    def spawn(self, x: float, y: float, base_color: RGB) -> Cloud:
        s = self.settings
        cloud = Cloud(
            x=float(x),
            y=float(y),
            stamp=self.stamps.create_stamp(self.rng),
            base_color=tuple(int(c) for c in base_color[:3]),
            noise_seed_x=float(self.rng.uniform(0.0, s.noise_seed_range)),
            noise_seed_y=float(self.rng.uniform(0.0, s.noise_seed_range)),
            drift_scale=float(self.rng.uniform(s.drift_scale_min, s.drift_scale_max)),
            hue_jitter_speed=float(self.rng.uniform(s.hue_jitter_min, s.hue_jitter_max)),
        )
        self.clouds.append(cloud)
        self._bake_overflow()
        return cloud

    def _bake_overflow(self) -> None:
        limit = self.settings.max_active_clouds
        if not limit or len(self.clouds) <= limit:
            return
        overflow = self.clouds[: len(self.clouds) - limit]
        self.clouds = self.clouds[len(overflow):]
        if self.paint_layer is None:
            log.debug("dropping %d clouds without a paint layer", len(overflow))
            return
        for cloud in overflow:
            self._draw_cloud(self.paint_layer, cloud)
        self.baked_count += len(overflow)

    # ---------- Simulation ----------
    @property
    def t(self) -> float:
        return self.frame * self.settings.time_rate

    def drift(self, cloud: Cloud) -> Tuple[float, float]:
        s = self.settings
        t = self.t
        k = 2.0 * cloud.drift_scale * s.drift_multiplier
        vx = (self.noise.sample(cloud.noise_seed_x + t) - 0.5) * k
        vy = (self.noise.sample(cloud.noise_seed_y + t + s.drift_phase_offset) - 0.5) * k
        return vx, vy

    def repulsion(self, cloud: Cloud, snapshot: PoseSnapshot) -> Tuple[float, float]:
        s = self.settings
        fx = fy = 0.0
        for pose in snapshot.poses:
            for kp in pose.keypoints or ():
                if not kp.confidence > s.confidence_threshold:
                    continue
                # detections are in camera space; the canvas is mirrored
                dx = cloud.x - (self.width - kp.x)
                dy = cloud.y - kp.y
                dist = math.hypot(dx, dy)
                if dist >= s.repulsion_radius:
                    continue
                if dist < s.min_repulsion_distance:
                    # no usable direction; push along a per-cloud heading
                    angle = 2.0 * math.pi * math.modf(cloud.noise_seed_x)[0]
                    dx, dy, dist = math.cos(angle), math.sin(angle), 1.0
                    force = s.repulsion_force
                else:
                    force = s.repulsion_force * (1.0 - dist / s.repulsion_radius)
                fx += dx / dist * force
                fy += dy / dist * force
        return fx, fy

    def jittered_color(self, cloud: Cloud) -> RGB:
        s = self.settings
        th = self.t * cloud.hue_jitter_speed
        samples = (
            self.noise.sample(cloud.noise_seed_x + th),
            self.noise.sample(cloud.noise_seed_x + 100 + th),
            self.noise.sample(cloud.noise_seed_y + 200 + th),
        )
        return tuple(
            clamp_byte(base + (-s.color_jitter + 2.0 * s.color_jitter * n))
            for base, n in zip(cloud.base_color, samples)
        )

    def advance(self, delta_frames: float = 1.0, snapshot: Optional[PoseSnapshot] = None) -> None:
        if snapshot is None:
            snapshot = EMPTY_SNAPSHOT
        self.frame += delta_frames
        for cloud in self.clouds:
            vx, vy = self.drift(cloud)
            rx, ry = self.repulsion(cloud, snapshot)
            cloud.x += vx + rx
            cloud.y += vy + ry
            cloud.color = self.jittered_color(cloud)

    # ---------- Rendering ----------
    def _draw_cloud(self, surface: Canvas, cloud: Cloud) -> None:
        half = cloud.stamp.side / 2.0
        surface.stamp(cloud.stamp, cloud.x - half, cloud.y - half, cloud.color, self.settings.alpha)

    def render(self, surface: Canvas) -> None:
        if self.paint_layer is not None and self.baked_count:
            surface.compose(self.paint_layer)
        for cloud in self.clouds:
            self._draw_cloud(surface, cloud)

    def __len__(self) -> int:
        return len(self.clouds)
