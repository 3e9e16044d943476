from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np


RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class SeedPoint:
    x: float
    y: float
    color: RGB


@dataclass(frozen=True)
class Keypoint:
    x: float
    y: float
    confidence: float


@dataclass(frozen=True)
class Pose:
    keypoints: Tuple[Keypoint, ...] = ()
    # pairs of keypoint indices to connect when drawing the skeleton
    skeleton: Tuple[Tuple[int, int], ...] = ()


@dataclass(frozen=True)
class PoseSnapshot:
    poses: Tuple[Pose, ...] = ()

    def __len__(self) -> int:
        return len(self.poses)


EMPTY_SNAPSHOT = PoseSnapshot()


@dataclass
class FrameData:
    timestamp: float
    frame_index: int
    # latest pose detections (raw detector space, not mirrored)
    poses: PoseSnapshot = EMPTY_SNAPSHOT
    # latest webcam frame (BGR) or None when no camera is running
    camera_frame: Optional[np.ndarray] = field(default=None, repr=False)
