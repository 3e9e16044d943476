from __future__ import annotations
from dataclasses import dataclass
import pygame
from typing import Any, Tuple
from floatspace.api.config import EngineConfig


@dataclass
class Context:
    screen: pygame.Surface
    clock: pygame.time.Clock
    cfg: EngineConfig
    # engine-owned collaborators shared with sketches ("reference_image", "pose_bridge")
    resources: dict[str, Any]
    screen_size: Tuple[int, int]
