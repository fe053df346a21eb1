"""
2D Perlin gradient noise with memoized samples.

Backs the nebula background (sampled for every visible cell every frame)
and the clustering fields of planet element maps. Each PerlinNoise is an
explicit value owned by its generation context; there is no module-level
cache. Gradients are derived from the spatial hash of the lattice point,
so a given seed always yields the same field regardless of sampling order.
"""

import logging
import math
from typing import Dict, Optional, Tuple

from .constants import NEBULA_CACHE_PRECISION
from .prng import hash_string
from .spatial_hash import fast_hash

logger = logging.getLogger(__name__)

_TWO_PI = 2.0 * math.pi
_TWO_POW_32 = 4294967296.0


def smootherstep(t: float) -> float:
    """Quintic fade curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def interp(factor: float, a: float, b: float) -> float:
    """Interpolate from a to b, easing the factor with smootherstep."""
    return a + smootherstep(factor) * (b - a)


class PerlinNoise:
    """
    Seeded 2D Perlin noise engine.

    Attributes:
        gradients: Lattice point (vx, vy) -> unit gradient (gx, gy)
        memory: Rounded sample key -> noise value
    """

    def __init__(self, seed: str, precision: int = NEBULA_CACHE_PRECISION):
        """
        Args:
            seed: Seed string for this noise field
            precision: Decimal places used to round sample cache keys
        """
        self.precision = precision
        self.gradients: Dict[Tuple[int, int], Tuple[float, float]] = {}
        self.memory: Dict[Tuple[float, float], float] = {}
        self._seed = str(seed)
        self._seed_int = hash_string(self._seed)

    @property
    def seed_string(self) -> str:
        return self._seed

    def seed(self, new_seed: Optional[str] = None) -> None:
        """
        Start a new seed epoch: clear both caches.

        Call once per session. Reseeding mid-generation discontinues any
        field that is being sampled.

        Args:
            new_seed: Optional replacement seed string
        """
        if new_seed is not None:
            self._seed = str(new_seed)
            self._seed_int = hash_string(self._seed)
        self.gradients = {}
        self.memory = {}
        logger.debug("Perlin noise seeded with %r", self._seed)

    def _gradient(self, vx: int, vy: int) -> Tuple[float, float]:
        """Unit gradient for lattice point (vx, vy), memoized."""
        key = (vx, vy)
        gradient = self.gradients.get(key)
        if gradient is None:
            theta = fast_hash(vx, vy, self._seed_int) / _TWO_POW_32 * _TWO_PI
            gradient = (math.cos(theta), math.sin(theta))
            self.gradients[key] = gradient
        return gradient

    def _dot_grid(self, x: float, y: float, vx: int, vy: int) -> float:
        gx, gy = self._gradient(vx, vy)
        return (x - vx) * gx + (y - vy) * gy

    def get(self, x: float, y: float) -> float:
        """
        Sample noise at (x, y).

        Repeated calls with the same rounded coordinates return the cached
        value without touching the gradient table.

        Returns:
            Noise value, roughly in [-0.71, 0.71]
        """
        key = (round(x, self.precision), round(y, self.precision))
        cached = self.memory.get(key)
        if cached is not None:
            return cached

        xf = math.floor(x)
        yf = math.floor(y)

        tl = self._dot_grid(x, y, xf, yf)
        tr = self._dot_grid(x, y, xf + 1, yf)
        bl = self._dot_grid(x, y, xf, yf + 1)
        br = self._dot_grid(x, y, xf + 1, yf + 1)

        top = interp(x - xf, tl, tr)
        bottom = interp(x - xf, bl, br)
        value = interp(y - yf, top, bottom)

        self.memory[key] = value
        return value

    def get_unit(self, x: float, y: float) -> float:
        """Sample mapped from [-1, 1] to [0, 1] and clamped."""
        return min(1.0, max(0.0, (self.get(x, y) + 1.0) / 2.0))
