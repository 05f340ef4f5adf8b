"""
NoiseField — seeded coherent 2D noise in [0, 1).

OpenSimplex gradient noise summed over octaves: octave o samples at
frequency 2**o with amplitude falloff**(o+1), each sample mapped from
[-1, 1] to [0, 1]. With the defaults (4 octaves, falloff 0.5) the
result stays below 0.9375.
"""

from ctypes import c_int64

import numpy as np
from opensimplex import OpenSimplex

DEFAULT_OCTAVES = 4
DEFAULT_FALLOFF = 0.5


def fold_seed(seed: int) -> int:
    return c_int64(int(seed)).value


class NoiseField:
    def __init__(self, seed: int, octaves: int = DEFAULT_OCTAVES, falloff: float = DEFAULT_FALLOFF):
        if octaves < 1:
            raise ValueError("octaves must be >= 1")
        if not 0.0 < falloff < 1.0:
            raise ValueError("falloff must be in (0, 1)")
        self.seed = int(seed)
        self.octaves = octaves
        self.falloff = falloff
        self._gen = OpenSimplex(seed=fold_seed(self.seed))

    def _octaves(self):
        for o in range(self.octaves):
            yield 2.0 ** o, self.falloff ** (o + 1)

    @staticmethod
    def _unit(n):
        return np.clip((n + 1.0) * 0.5, 0.0, 1.0)

    def value(self, x: float, y: float) -> float:
        total = 0.0
        for freq, amp in self._octaves():
            total += amp * float(self._unit(self._gen.noise2(x * freq, y * freq)))
        return total

    def grid(self, xs, ys) -> np.ndarray:
        """Sample every (x, y) pair; result is indexed [ix][iy]."""
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        total = np.zeros((xs.size, ys.size), dtype=np.float64)
        for freq, amp in self._octaves():
            # noise2array returns rows per y
            total += amp * self._unit(self._gen.noise2array(xs * freq, ys * freq)).T
        return total
