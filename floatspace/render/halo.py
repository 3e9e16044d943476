from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from floatspace.api.config import HaloSettings
from floatspace.api.frame_data import RGB, SeedPoint

from .canvas import Canvas, clamp_byte


@dataclass(frozen=True)
class HaloSegment:
    x0: float
    y0: float
    x1: float
    y1: float
    color: RGB
    alpha: int
    weight: float


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def grid_coordinates(values: Iterable[float], extent: float) -> List[float]:
    """
    Sorted distinct rounded coordinates strictly inside (0, extent), with
    both canvas edges added so the grid reaches the boundaries.
    """
    inner = sorted({_round_half_up(v) for v in values if 0 < _round_half_up(v) < extent})
    return [0, *inner, extent]


def base_alpha(d: float, max_spread: float, base_opacity: float = 0.6) -> float:
    """Halo opacity for offset ``d``: 255*base_opacity at 0 down to 0 at max_spread."""
    top = 255.0 * base_opacity
    if max_spread <= 0:
        return 0.0
    a = top + (0.0 - top) * (d / max_spread)
    return max(0.0, min(top, a))


def along_factor(dist_along: float, max_spread: float, floor: float = 0.12, exponent: float = 0.5) -> float:
    """Multiplier for distance measured along a line; 1 at the seed, ``floor`` beyond max_spread."""
    if max_spread <= 0:
        return floor
    t = max(0.0, min(1.0, 1.0 - abs(dist_along) / max_spread))
    return floor + (1.0 - floor) * t ** exponent


def _cells(coords: Sequence[float]) -> List[Tuple[float, float]]:
    return [(coords[i], coords[i + 1]) for i in range(len(coords) - 1)]


class HaloLineRenderer:
    """
    Woven grid renderer.

    Every seed contributes a vertical and a horizontal line through its
    position. Lines are chopped at the grid formed by all seeds' coordinates
    and each chunk fades by its distance from the owning seed; parallel
    offset lines on both sides form the halo. Chunks owned by one seed are
    chopped by other seeds' coordinates too, so colors cross over.
    """

    def __init__(self, settings: Optional[HaloSettings] = None):
        self.settings = settings or HaloSettings()

    def _factor(self, dist_along: float) -> float:
        s = self.settings
        return along_factor(dist_along, s.max_spread, s.min_alpha_factor, s.along_exponent)

    def segments(self, seed_points: Sequence[SeedPoint], size: Tuple[int, int]) -> Iterator[HaloSegment]:
        """Every line segment in draw order (halos first, then centerlines)."""
        s = self.settings
        points = list(seed_points)
        if not points:
            return
        w, h = size
        xs = grid_coordinates((p.x for p in points), w)
        ys = grid_coordinates((p.y for p in points), h)
        x_cells = _cells(xs)
        y_cells = _cells(ys)
        offsets = range(int(s.spread_step), int(s.max_spread) + 1, max(1, int(s.spread_step)))

        for p in points:
            c = p.color
            # along-line factors depend only on the cell, not on the offset
            v_factors = [self._factor((y0 + y1) / 2 - p.y) for (y0, y1) in y_cells]
            h_factors = [self._factor((x0 + x1) / 2 - p.x) for (x0, x1) in x_cells]

            # vertical halo lines, offset along x
            for d in offsets:
                base = base_alpha(d, s.max_spread, s.base_opacity)
                for (y0, y1), f in zip(y_cells, v_factors):
                    a = clamp_byte(base * f)
                    for xpos in (p.x + d, p.x - d):
                        if 0 <= xpos <= w:
                            yield HaloSegment(xpos, y0, xpos, y1, c, a, s.halo_weight)

            # horizontal halo lines, offset along y
            for d in offsets:
                base = base_alpha(d, s.max_spread, s.base_opacity)
                for (x0, x1), f in zip(x_cells, h_factors):
                    a = clamp_byte(base * f)
                    for ypos in (p.y + d, p.y - d):
                        if 0 <= ypos <= h:
                            yield HaloSegment(x0, ypos, x1, ypos, c, a, s.halo_weight)

        main = 255.0 * s.base_opacity
        for p in points:
            c = p.color
            for y0, y1 in y_cells:
                alpha = main * self._factor((y0 + y1) / 2 - p.y)
                if alpha > s.min_visible_alpha:
                    yield HaloSegment(p.x, y0, p.x, y1, c, clamp_byte(alpha), s.main_weight)
            for x0, x1 in x_cells:
                alpha = main * self._factor((x0 + x1) / 2 - p.x)
                if alpha > s.min_visible_alpha:
                    yield HaloSegment(x0, p.y, x1, p.y, c, clamp_byte(alpha), s.main_weight)

    def render(self, surface: Canvas, seed_points: Sequence[SeedPoint]) -> None:
        for seg in self.segments(seed_points, surface.size):
            if seg.alpha > 0:
                surface.line(seg.x0, seg.y0, seg.x1, seg.y1, seg.color, seg.alpha, seg.weight)
        for p in seed_points:
            surface.circle(p.x, p.y, self.settings.dot_diameter, p.color, 255)
