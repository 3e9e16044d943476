from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Tuple

import cv2
import numpy as np

from floatspace.api.frame_data import RGB

log = logging.getLogger(__name__)


class ReferenceImage:
    """
    Bitmap seed colors are sampled from.

    The image is "cover"-fitted to the canvas: scaled by
    max(w/iw, h/ih) so it fills the canvas and centred, with the overflow
    cropped. Canvas coordinates are mapped back through that transform.
    """

    def __init__(self, pixels: Optional[np.ndarray] = None, canvas_size: Tuple[int, int] = (1, 1)):
        # RGB, shape (h, w, 3)
        self.pixels = pixels
        self.scale = 1.0
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.fit(canvas_size)

    # ---------- Loading ----------
    @classmethod
    def load(cls, path, canvas_size: Tuple[int, int] = (1, 1)) -> "ReferenceImage":
        bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if bgr is None:
            log.warning("could not read reference image %s; using fallback color", path)
            return cls(None, canvas_size)
        return cls(cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB), canvas_size)

    @classmethod
    def load_random(
        cls,
        directory,
        canvas_size: Tuple[int, int] = (1, 1),
        pattern: str = "F*.jpg",
        rng: Optional[np.random.Generator] = None,
    ) -> "ReferenceImage":
        if directory is None:
            return cls(None, canvas_size)
        root = Path(directory)
        candidates = sorted(root.glob(pattern)) if root.is_dir() else []
        if not candidates:
            log.warning("no reference images matching %s in %s; using fallback color", pattern, root)
            return cls(None, canvas_size)
        rng = rng if rng is not None else np.random.default_rng()
        choice = candidates[int(rng.integers(len(candidates)))]
        log.info("sampling colors from %s", choice.name)
        return cls.load(choice, canvas_size)

    # ---------- Transform ----------
    def has_image(self) -> bool:
        return self.pixels is not None and self.pixels.shape[0] > 0 and self.pixels.shape[1] > 0

    def fit(self, canvas_size: Tuple[int, int]) -> None:
        if not self.has_image():
            return
        w, h = canvas_size
        ih, iw = self.pixels.shape[:2]
        self.scale = max(w / iw, h / ih)
        self.offset_x = (w - iw * self.scale) / 2
        self.offset_y = (h - ih * self.scale) / 2

    def to_image(self, x: float, y: float) -> Tuple[int, int]:
        ih, iw = self.pixels.shape[:2]
        ix = (x - self.offset_x) / self.scale
        iy = (y - self.offset_y) / self.scale
        ix = min(max(ix, 0), iw - 1)
        iy = min(max(iy, 0), ih - 1)
        return int(ix), int(iy)

    def sample_pixel(self, x: float, y: float) -> RGB:
        ix, iy = self.to_image(x, y)
        r, g, b = self.pixels[iy, ix][:3]
        return int(r), int(g), int(b)
