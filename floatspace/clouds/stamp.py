from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import cv2
import numpy as np

from floatspace.api.config import CloudSettings

log = logging.getLogger(__name__)


@dataclass(eq=False)
class AlphaMask:
    """Square grayscale opacity raster (uint8, rows x cols)."""
    pixels: np.ndarray
    # per-backend render caches (e.g. the pygame surface built from pixels)
    cache: Dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self):
        self.pixels.setflags(write=False)

    @property
    def side(self) -> int:
        return int(self.pixels.shape[0])


def _lerp(v: float, lo: float, hi: float, out_lo: float, out_hi: float) -> float:
    return out_lo + (out_hi - out_lo) * ((v - lo) / (hi - lo))


class CloudStampFactory:
    """
    Builds the soft brush each cloud is drawn with.

    Speckles are scattered with sqrt-distributed radii (uniform density by
    area), larger and more opaque towards the centre, then the buffer is
    blurred into a matte cloud. Hue is never baked in; the renderer tints.
    """

    def __init__(self, settings: Optional[CloudSettings] = None, rng: Optional[np.random.Generator] = None):
        self.settings = settings or CloudSettings()
        self.rng = rng if rng is not None else np.random.default_rng()
        self._warned_blur = False

    @property
    def side(self) -> int:
        return int(2 * self.settings.spray_radius)

    def _scatter(self, rng: np.random.Generator) -> np.ndarray:
        s = self.settings
        radius = float(s.spray_radius)
        side = self.side
        buf = np.zeros((side, side), dtype=np.float32)

        for _ in range(int(s.particles)):
            r = math.sqrt(rng.random()) * radius
            a = rng.uniform(0.0, 2.0 * math.pi)
            px = radius + math.cos(a) * r + rng.normal() * s.speckle_jitter
            py = radius + math.sin(a) * r + rng.normal() * s.speckle_jitter
            size = _lerp(r, 0, radius, s.speckle_size_max, s.speckle_size_min) * rng.uniform(0.7, 1.0)
            alpha = _lerp(r, 0, radius, s.speckle_alpha_max, s.speckle_alpha_min) * rng.uniform(0.7, 1.0)
            opacity = max(0.0, min(255.0, alpha)) / 255.0

            half = size / 2.0
            x0, x1 = max(0, int(px - half)), min(side, int(math.ceil(px + half)) + 1)
            y0, y1 = max(0, int(py - half)), min(side, int(math.ceil(py + half)) + 1)
            if x0 >= x1 or y0 >= y1:
                continue
            yy, xx = np.ogrid[y0:y1, x0:x1]
            inside = (xx + 0.5 - px) ** 2 + (yy + 0.5 - py) ** 2 <= half * half
            window = buf[y0:y1, x0:x1]
            # white "over" composite onto the accumulated opacity
            window[inside] += opacity * (1.0 - window[inside])

        return buf

    def _soften(self, buf: np.ndarray) -> np.ndarray:
        sigma = float(self.settings.blur)
        if sigma <= 0:
            if not self._warned_blur:
                log.warning("cloud blur disabled (blur=%s), using unblurred stamps", self.settings.blur)
                self._warned_blur = True
            return buf
        try:
            return cv2.GaussianBlur(buf, (0, 0), sigmaX=sigma, sigmaY=sigma)
        except cv2.error as exc:
            if not self._warned_blur:
                log.warning("cloud blur unavailable, using unblurred stamps: %s", exc)
                self._warned_blur = True
            return buf

    def create_stamp(self, rng: Optional[np.random.Generator] = None) -> AlphaMask:
        buf = self._soften(self._scatter(rng if rng is not None else self.rng))
        pixels = np.clip(np.rint(buf * 255.0), 0, 255).astype(np.uint8)
        return AlphaMask(pixels)
