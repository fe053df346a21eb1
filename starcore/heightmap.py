"""
Diamond-square heightmap generation.

Synthesizes square fractal terrain of side 2^k + 1 from a seed, then
normalizes it to integer altitude levels. Identical (target_size,
roughness, seed) always produce identical grids; planet element maps and
mined-cell sets index the same (x, y) cells, so this is load-bearing.

Grids are numpy arrays indexed [y, x].
"""

import logging
import math

import numpy as np

from .constants import HEIGHTMAP_INITIAL_RANGE, PLANET_HEIGHT_LEVELS
from .prng import PRNG

logger = logging.getLogger(__name__)


def working_size(target_size: int) -> int:
    """Smallest 2^k + 1 >= target_size, never below 3."""
    power = 0
    while (1 << power) + 1 < target_size:
        power += 1
    return max(3, (1 << power) + 1)


def normalize_heightmap(raw: np.ndarray, height_levels: int = PLANET_HEIGHT_LEVELS) -> np.ndarray:
    """
    Rescale raw heights to integers in [0, height_levels - 1].

    A flat (or non-finite) range maps every cell to the midpoint level
    round((height_levels - 1) / 2), rounding half up.

    Args:
        raw: Float grid
        height_levels: Number of altitude levels

    Returns:
        int64 grid of the same shape
    """
    target_max = height_levels - 1
    lo = float(np.min(raw))
    hi = float(np.max(raw))
    span = hi - lo

    if span == 0 or not math.isfinite(span):
        midpoint = math.floor(target_max / 2 + 0.5)
        logger.debug("Heightmap range is %s; flattening to level %d", span, midpoint)
        return np.full(raw.shape, midpoint, dtype=np.int64)

    scaled = (raw - lo) / span * target_max
    levels = np.floor(scaled + 0.5).astype(np.int64)
    return np.clip(levels, 0, target_max)


class HeightmapGenerator:
    """
    Diamond-square terrain synthesizer seeded per planet.

    Attributes:
        size: Actual grid side (2^k + 1)
        roughness: Amplitude decays by 2^-roughness per iteration
    """

    def __init__(self, target_size: int, roughness: float, seed: str,
                 height_levels: int = PLANET_HEIGHT_LEVELS):
        self.size = working_size(target_size)
        self.max_index = self.size - 1
        self.roughness = max(0.0, float(roughness))
        self.height_levels = height_levels
        self.prng = PRNG(f"{seed}_heightmap")
        self.map = np.zeros((self.size, self.size), dtype=np.float64)
        logger.debug("Heightmap generator: size %d (target %d), roughness %.2f, seed %r",
                     self.size, target_size, self.roughness, seed)

    def _offsets(self, count: int, amplitude: float) -> np.ndarray:
        """Draw `count` offsets in [-amplitude/2, amplitude/2) in stream order."""
        half = amplitude / 2.0
        return np.array([self.prng.random(-half, half) for _ in range(count)], dtype=np.float64)

    def _diamond_step(self, step: int, amplitude: float) -> None:
        """Set each square's centre to the mean of its four corners plus an offset."""
        half = step // 2
        m = self.map
        corners = (
            m[0:self.max_index:step, 0:self.max_index:step]
            + m[0:self.max_index:step, step::step]
            + m[step::step, 0:self.max_index:step]
            + m[step::step, step::step]
        )
        n = corners.shape[0]
        offsets = self._offsets(n * n, amplitude).reshape(n, n)
        m[half::step, half::step] = corners / 4.0 + offsets

    def _square_step(self, step: int, amplitude: float) -> None:
        """Set each edge midpoint to the mean of its in-bounds diamond neighbours plus an offset."""
        half = step // 2
        size = self.size
        padded = np.pad(self.map, half, mode='constant', constant_values=np.nan)

        neighbours = np.stack([
            padded[0:size, half:half + size],                 # up
            padded[2 * half:2 * half + size, half:half + size],  # down
            padded[half:half + size, 0:size],                 # left
            padded[half:half + size, 2 * half:2 * half + size],  # right
        ])

        ys, xs = np.indices((size, size))
        mask = (ys % half == 0) & (xs % half == 0) & ((ys + xs) % step == half)

        # Every masked cell has at least three in-bounds neighbours
        counts = np.sum(~np.isnan(neighbours), axis=0)
        sums = np.nansum(neighbours, axis=0)
        averages = np.divide(sums, counts, out=np.zeros_like(sums), where=counts > 0)

        offsets = self._offsets(int(mask.sum()), amplitude)
        self.map[mask] = averages[mask] + offsets

    def generate(self, initial_range: float = HEIGHTMAP_INITIAL_RANGE) -> np.ndarray:
        """
        Run diamond-square and normalize.

        Args:
            initial_range: Width of the corner/offset distribution

        Returns:
            (size, size) int64 grid in [0, height_levels - 1]
        """
        half_range = initial_range / 2.0
        for y, x in ((0, 0), (0, self.max_index), (self.max_index, 0), (self.max_index, self.max_index)):
            self.map[y, x] = self.prng.random(-half_range, half_range)

        step = self.max_index
        amplitude = float(initial_range)
        decay = 2.0 ** (-self.roughness)
        while step > 1:
            self._diamond_step(step, amplitude)
            self._square_step(step, amplitude)
            step //= 2
            amplitude *= decay

        return self.normalize()

    def normalize(self) -> np.ndarray:
        """Normalize the working grid in place and return it as ints."""
        levels = normalize_heightmap(self.map, self.height_levels)
        self.map = levels.astype(np.float64)
        return levels


def add_craters(heightmap: np.ndarray, prng: PRNG,
                height_levels: int = PLANET_HEIGHT_LEVELS) -> int:
    """
    Stamp impact craters (bowl plus raised rim) into a normalized heightmap.

    Modifies heightmap in place; values stay within [0, height_levels - 1].

    Args:
        heightmap: Square int grid
        prng: Stream dedicated to crater placement
        height_levels: Number of altitude levels

    Returns:
        Number of craters added
    """
    map_size = heightmap.shape[0]
    if map_size <= 0:
        return 0

    count = prng.random_int(map_size // 15, map_size // 5)
    for _ in range(count):
        radius = prng.random_int(3, max(5, map_size // 10))
        cx = prng.random_int(0, map_size - 1)
        cy = prng.random_int(0, map_size - 1)
        max_depth = radius * prng.random(0.5, 2.0)
        rim_height = max_depth * prng.random(0.1, 0.3)

        y0, y1 = max(0, cy - radius - 2), min(map_size - 1, cy + radius + 2)
        x0, x1 = max(0, cx - radius - 2), min(map_size - 1, cx + radius + 2)
        ys, xs = np.mgrid[y0:y1 + 1, x0:x1 + 1]
        dist = np.sqrt((xs - cx) ** 2 + (ys - cy) ** 2)

        delta = np.zeros_like(dist)
        bowl = dist < radius
        delta[bowl] -= max_depth * (np.cos(dist[bowl] / radius * np.pi) + 1.0) / 2.0

        rim_peak = radius * 0.85
        rim_width = radius * 0.3
        rim = (dist > rim_peak - rim_width) & (dist < rim_peak + rim_width)
        delta[rim] += rim_height * (np.cos((dist[rim] - rim_peak) / rim_width * np.pi) + 1.0) / 2.0

        influenced = dist <= radius + 1
        window = heightmap[y0:y1 + 1, x0:x1 + 1]
        updated = np.clip(np.floor(window + delta + 0.5), 0, height_levels - 1).astype(heightmap.dtype)
        window[influenced] = updated[influenced]

    return count
