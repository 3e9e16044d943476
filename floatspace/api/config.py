from __future__ import annotations
import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

log = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    screen_size: Tuple[int, int]
    cam_index: int
    image_dir: Optional[str]
    pose_enabled: bool = True
    mirror: bool = False
    fps: int = 60


def _from_options(cls, options: Optional[Dict[str, Any]]):
    known = {f.name: f for f in fields(cls)}
    kwargs = {}
    for key, value in (options or {}).items():
        if key not in known:
            log.warning("ignoring unknown %s option %r", cls.__name__, key)
            continue
        kwargs[key] = value
    return cls(**kwargs)


@dataclass
class HaloSettings:
    max_spread: int = 160          # how many pixels the halo spreads
    spread_step: int = 1
    base_opacity: float = 0.6      # main line opacity (fraction of 255)
    along_exponent: float = 0.5    # < 1 keeps the centre saturated longer
    min_alpha_factor: float = 0.12
    main_weight: float = 0.001     # hairline
    halo_weight: float = 1.0
    dot_diameter: float = 6.0
    min_visible_alpha: float = 0.5

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]]) -> "HaloSettings":
        return _from_options(cls, options)


@dataclass
class CloudSettings:
    spray_radius: int = 120
    particles: int = 400
    speckle_size_min: float = 1.0
    speckle_size_max: float = 16.0
    speckle_alpha_min: float = 8.0
    speckle_alpha_max: float = 220.0
    speckle_jitter: float = 1.2
    blur: float = 12.0
    alpha: int = 255
    drift_scale_min: float = 0.08
    drift_scale_max: float = 0.26
    drift_multiplier: float = 1.2
    time_rate: float = 0.002       # noise time per frame
    drift_phase_offset: float = 437.1
    hue_jitter_min: float = 0.008
    hue_jitter_max: float = 0.01
    color_jitter: float = 12.0
    noise_seed_range: float = 10000.0
    repulsion_radius: float = 80.0
    repulsion_force: float = 3.5
    confidence_threshold: float = 0.3
    min_repulsion_distance: float = 0.1
    max_active_clouds: Optional[int] = 600

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]]) -> "CloudSettings":
        return _from_options(cls, options)
