from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Tuple

import pygame
from pygame import gfxdraw

if TYPE_CHECKING:
    from floatspace.clouds.stamp import AlphaMask

Color = Tuple[int, int, int]


def clamp_byte(value: float) -> int:
    return int(max(0, min(255, round(value))))


def clamp_color(color) -> Color:
    r, g, b = color[:3]
    return clamp_byte(r), clamp_byte(g), clamp_byte(b)


class Canvas:
    """
    Drawing surface the renderers target.

    Coordinates are floats in canvas pixels; colors are RGB triples and
    alpha is a separate 0..255 value.
    """

    @property
    def size(self) -> Tuple[int, int]:
        raise NotImplementedError

    def clear(self, color: Optional[Color] = None) -> None:
        """Fill with ``color``, or wipe to fully transparent when None."""
        raise NotImplementedError

    def line(self, x0: float, y0: float, x1: float, y1: float,
             color: Color, alpha: float, weight: float = 1.0) -> None:
        raise NotImplementedError

    def circle(self, x: float, y: float, diameter: float, color: Color, alpha: float = 255) -> None:
        raise NotImplementedError

    def stamp(self, mask: "AlphaMask", x: float, y: float, color: Color, alpha: float = 255) -> None:
        """Blit ``mask`` with its top-left at (x, y), tinted by color/alpha."""
        raise NotImplementedError

    def new_layer(self) -> "Canvas":
        """A transparent canvas of the same size."""
        raise NotImplementedError

    def compose(self, layer: "Canvas") -> None:
        """Draw ``layer`` over this canvas."""
        raise NotImplementedError


class PygameCanvas(Canvas):
    def __init__(self, surface: pygame.Surface):
        self.surface = surface

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def clear(self, color: Optional[Color] = None) -> None:
        if color is None:
            self.surface.fill((0, 0, 0, 0))
        else:
            self.surface.fill(clamp_color(color))

    def line(self, x0, y0, x1, y1, color, alpha, weight=1.0):
        a = clamp_byte(alpha)
        if a <= 0:
            return
        w = max(1, int(round(weight)))
        rgb = clamp_color(color)

        if (x0 == x1 or y0 == y1) and w == 1:
            # gfxdraw blends RGBA colors itself; end pixel is left to the next cell
            if x0 == x1:
                top, bottom = sorted((int(round(y0)), int(round(y1))))
                gfxdraw.vline(self.surface, int(round(x0)), top, max(top, bottom - 1), (*rgb, a))
            else:
                left, right = sorted((int(round(x0)), int(round(x1))))
                gfxdraw.hline(self.surface, left, max(left, right - 1), int(round(y0)), (*rgb, a))
            return

        if x0 == x1 or y0 == y1:
            # thick axis-aligned: a flat block with surface alpha is enough
            if x0 == x1:
                top, bottom = sorted((y0, y1))
                rect = pygame.Rect(int(round(x0)) - w // 2, int(round(top)), w, max(1, int(round(bottom - top))))
            else:
                left, right = sorted((x0, x1))
                rect = pygame.Rect(int(round(left)), int(round(y0)) - w // 2, max(1, int(round(right - left))), w)
            seg = pygame.Surface(rect.size)
            seg.fill(rgb)
            seg.set_alpha(a)
            self.surface.blit(seg, rect.topleft)
            return

        left, top = int(min(x0, x1)) - w, int(min(y0, y1)) - w
        bw = int(abs(x1 - x0)) + 2 * w + 1
        bh = int(abs(y1 - y0)) + 2 * w + 1
        line_surf = pygame.Surface((bw, bh), pygame.SRCALPHA)
        pygame.draw.line(line_surf, (*rgb, a), (x0 - left, y0 - top), (x1 - left, y1 - top), w)
        self.surface.blit(line_surf, (left, top))

    def circle(self, x, y, diameter, color, alpha=255):
        a = clamp_byte(alpha)
        if a <= 0:
            return
        rr = max(1, int(round(diameter / 2)))
        circle_surf = pygame.Surface((rr * 2 + 2, rr * 2 + 2), pygame.SRCALPHA)
        pygame.draw.circle(circle_surf, (*clamp_color(color), a), (rr + 1, rr + 1), rr)
        self.surface.blit(circle_surf, (int(round(x)) - rr - 1, int(round(y)) - rr - 1))

    def _mask_surface(self, mask: "AlphaMask") -> pygame.Surface:
        cached = mask.cache.get("pygame")
        if cached is None:
            h, w = mask.pixels.shape
            cached = pygame.Surface((w, h), pygame.SRCALPHA, 32)
            cached.fill((255, 255, 255, 0))
            alpha = pygame.surfarray.pixels_alpha(cached)
            alpha[:] = mask.pixels.T
            del alpha  # unlock the surface
            mask.cache["pygame"] = cached
        return cached

    def stamp(self, mask, x, y, color, alpha=255):
        a = clamp_byte(alpha)
        if a <= 0:
            return
        tinted = self._mask_surface(mask).copy()
        tinted.fill((*clamp_color(color), a), special_flags=pygame.BLEND_RGBA_MULT)
        self.surface.blit(tinted, (int(round(x)), int(round(y))))

    def new_layer(self) -> "PygameCanvas":
        layer = pygame.Surface(self.size, pygame.SRCALPHA, 32)
        layer.fill((0, 0, 0, 0))
        return PygameCanvas(layer)

    def compose(self, layer: Canvas) -> None:
        if isinstance(layer, PygameCanvas):
            self.surface.blit(layer.surface, (0, 0))
        else:
            raise TypeError(f"cannot compose {type(layer).__name__} onto a pygame surface")
