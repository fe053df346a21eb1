"""
Galaxy generation context.

Owns the master PRNG, the nebula noise field, the catalog and the config
for one session. Everything else is derived from these on demand: star
presence from the spatial hash, systems from child streams of the master
PRNG. The master stream is never advanced, so a system built by a peek
equals the one built on entry.
"""

import dataclasses
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from .data_types import Catalog, GalaxyConfig
from .loader import DEFAULT_DATA_ROOT, default_catalog, load_all_data
from .perlin import PerlinNoise
from .prng import PRNG
from .solar_system import SolarSystem
from .spatial_hash import is_star_cell, star_mask

logger = logging.getLogger(__name__)


class Galaxy:
    """
    Seeded hyperspace.

    Example:
        galaxy = Galaxy("haunting beauty")
        if galaxy.is_star(10, 10):
            system = galaxy.generate_system(10, 10)
    """

    def __init__(self, seed=None, config: Optional[GalaxyConfig] = None,
                 catalog: Optional[Catalog] = None):
        """
        Args:
            seed: Master seed (string or number); defaults to config.seed
            config: Generation parameters (defaults from constants)
            catalog: Content tables (defaults to the bundled data pack)
        """
        # Copied: reseed() mutates it
        self.config = dataclasses.replace(config or GalaxyConfig())
        if seed is not None:
            self.config.seed = str(seed)
        self.catalog = catalog or default_catalog()
        self.prng = PRNG(self.config.seed)
        self.nebula = PerlinNoise(f"{self.config.seed}_nebula", self.config.nebula_cache_precision)
        logger.info("Galaxy seeded with %r (seed_int %d)", self.config.seed, self.prng.seed_int)

    @classmethod
    def from_data_pack(cls, data_root: Path = DEFAULT_DATA_ROOT, seed=None) -> 'Galaxy':
        """Build a galaxy from data/world/galaxy.yaml and the catalog beside it."""
        data = load_all_data(data_root)
        return cls(seed=seed, config=data['config'], catalog=data['catalog'])

    @property
    def seed(self) -> str:
        return self.config.seed

    def reseed(self, seed) -> None:
        """Start a new session seed; clears the nebula caches."""
        self.config.seed = str(seed)
        self.prng = PRNG(self.config.seed)
        self.nebula.seed(f"{self.config.seed}_nebula")
        logger.info("Galaxy reseeded with %r", self.config.seed)

    # ------------------------------------------------------------------------
    # Presence
    # ------------------------------------------------------------------------

    def is_star(self, x: int, y: int) -> bool:
        return is_star_cell(x, y, self.prng.seed_int,
                            self.config.star_density, self.config.star_check_hash_scale)

    def star_mask(self, x0: int, y0: int, width: int, height: int) -> np.ndarray:
        """(height, width) bool mask of star cells; mask[row, col] is (x0 + col, y0 + row)."""
        return star_mask(x0, y0, width, height, self.prng.seed_int,
                         self.config.star_density, self.config.star_check_hash_scale)

    def stars_in_region(self, x0: int, y0: int, width: int, height: int) -> List[Tuple[int, int]]:
        """Star cells in a region, row by row."""
        rows, cols = np.nonzero(self.star_mask(x0, y0, width, height))
        return [(x0 + int(c), y0 + int(r)) for r, c in zip(rows, cols)]

    # ------------------------------------------------------------------------
    # Systems
    # ------------------------------------------------------------------------

    def generate_system(self, x: int, y: int) -> SolarSystem:
        """
        Synthesize the system at (x, y).

        Does not check presence; callers test is_star() first.
        """
        return SolarSystem(x, y, self.prng, self.catalog, self.config)

    # ------------------------------------------------------------------------
    # Background
    # ------------------------------------------------------------------------

    def nebula_intensity(self, x: float, y: float) -> float:
        """
        Nebula brightness in [0, 1] at a hyperspace cell.

        Noise below the sparsity cutoff is black; the rest is rescaled to
        fill [0, 1].
        """
        value = self.nebula.get_unit(x * self.config.nebula_scale, y * self.config.nebula_scale)
        sparsity = self.config.nebula_sparsity
        if value <= sparsity or sparsity >= 1.0:
            return 0.0
        return (value - sparsity) / (1.0 - sparsity)
