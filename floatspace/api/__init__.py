from .sketch_base import Sketch
from .frame_data import FrameData, SeedPoint, Keypoint, Pose, PoseSnapshot, EMPTY_SNAPSHOT
from .config import EngineConfig, HaloSettings, CloudSettings

__all__ = [
    "Sketch",
    "FrameData",
    "SeedPoint",
    "Keypoint",
    "Pose",
    "PoseSnapshot",
    "EMPTY_SNAPSHOT",
    "EngineConfig",
    "HaloSettings",
    "CloudSettings",
]
