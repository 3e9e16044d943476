from __future__ import annotations
import math
from typing import Optional

import numpy as np

# Lattice layout: 4096 values, y rows wrap every 16, z planes every 256.
PERLIN_YWRAPB = 4
PERLIN_YWRAP = 1 << PERLIN_YWRAPB
PERLIN_ZWRAPB = 8
PERLIN_ZWRAP = 1 << PERLIN_ZWRAPB
PERLIN_SIZE = 4095


def _scaled_cosine(i: float) -> float:
    return 0.5 * (1.0 - math.cos(i * math.pi))


class NoiseField:
    """
    Smooth pseudo-random scalar field in [0, 1).

    Cosine-interpolated lattice noise summed over a few octaves. Each octave
    doubles the frequency and multiplies the amplitude by ``falloff``; the
    first octave has amplitude 0.5, so with falloff <= 0.5 the sum stays
    strictly below 1.
    """

    def __init__(self, seed: Optional[int] = None, octaves: int = 4, falloff: float = 0.5):
        if octaves < 1:
            raise ValueError("octaves must be >= 1")
        if not 0.0 < falloff <= 0.5:
            raise ValueError("falloff must be in (0, 0.5]")
        self.octaves = octaves
        self.falloff = falloff
        self.reseed(seed)

    def reseed(self, seed: Optional[int]) -> None:
        rng = np.random.default_rng(seed)
        self._table = rng.random(PERLIN_SIZE + 1).tolist()

    def sample(self, x: float, y: float = 0.0, z: float = 0.0) -> float:
        perlin = self._table
        x, y, z = abs(x), abs(y), abs(z)

        xi, yi, zi = int(x), int(y), int(z)
        xf, yf, zf = x - xi, y - yi, z - zi

        r = 0.0
        ampl = 0.5
        for _ in range(self.octaves):
            of = xi + (yi << PERLIN_YWRAPB) + (zi << PERLIN_ZWRAPB)

            rxf = _scaled_cosine(xf)
            ryf = _scaled_cosine(yf)

            n1 = perlin[of & PERLIN_SIZE]
            n1 += rxf * (perlin[(of + 1) & PERLIN_SIZE] - n1)
            n2 = perlin[(of + PERLIN_YWRAP) & PERLIN_SIZE]
            n2 += rxf * (perlin[(of + PERLIN_YWRAP + 1) & PERLIN_SIZE] - n2)
            n1 += ryf * (n2 - n1)

            of += PERLIN_ZWRAP
            n2 = perlin[of & PERLIN_SIZE]
            n2 += rxf * (perlin[(of + 1) & PERLIN_SIZE] - n2)
            n3 = perlin[(of + PERLIN_YWRAP) & PERLIN_SIZE]
            n3 += rxf * (perlin[(of + PERLIN_YWRAP + 1) & PERLIN_SIZE] - n3)
            n2 += ryf * (n3 - n2)

            n1 += _scaled_cosine(zf) * (n2 - n1)

            r += n1 * ampl
            ampl *= self.falloff

            xi <<= 1
            xf *= 2
            yi <<= 1
            yf *= 2
            zi <<= 1
            zf *= 2
            if xf >= 1.0:
                xi += 1
                xf -= 1
            if yf >= 1.0:
                yi += 1
                yf -= 1
            if zf >= 1.0:
                zi += 1
                zf -= 1

        return r

    __call__ = sample
