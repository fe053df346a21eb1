"""
Starbase entity.

A starbase orbits like a planet but has no terrain: its interior is a
fixed single-cell grid, so landing (docking) works through the same
surface interface as planets.
"""

import logging
import math
from typing import List, Optional

import numpy as np

from .constants import RICHNESS_NONE, STARBASE_INTERIOR_SIZE, STARBASE_ORBIT_DISTANCE
from .prng import PRNG

logger = logging.getLogger(__name__)


class Starbase:
    """Orbital trading post"""

    type = 'Starbase'

    def __init__(self, system_name: str, prng: PRNG,
                 orbit_base: float = STARBASE_ORBIT_DISTANCE):
        """
        Args:
            system_name: Owning system's name
            prng: Child stream dedicated to this starbase
            orbit_base: Nominal orbit distance, jittered by U(0.9, 1.1)
        """
        self.name = f"{system_name} Starbase"
        self.prng = prng
        self.orbit_distance = orbit_base * prng.random(0.9, 1.1)
        self.orbit_angle = prng.random(0.0, 2.0 * math.pi)
        self.system_x = math.cos(self.orbit_angle) * self.orbit_distance
        self.system_y = math.sin(self.orbit_angle) * self.orbit_distance

        self.mineral_richness = RICHNESS_NONE
        self.scanned = False
        self.heightmap = np.zeros((STARBASE_INTERIOR_SIZE, STARBASE_INTERIOR_SIZE), dtype=np.int64)
        self.element_map = [[''] * STARBASE_INTERIOR_SIZE for _ in range(STARBASE_INTERIOR_SIZE)]

        logger.debug("Starbase %s at orbit %.0f, angle %.2f",
                     self.name, self.orbit_distance, self.orbit_angle)

    def place_at_angle(self, angle: float) -> None:
        self.orbit_angle = angle % (2.0 * math.pi)
        self.system_x = math.cos(self.orbit_angle) * self.orbit_distance
        self.system_y = math.sin(self.orbit_angle) * self.orbit_distance

    @property
    def is_gaseous(self) -> bool:
        return False

    @property
    def surface_ready(self) -> bool:
        return True

    @property
    def map_size(self) -> int:
        return STARBASE_INTERIOR_SIZE

    def ensure_surface_ready(self) -> None:
        """Interior is fixed at construction."""
        return None

    def element_at(self, x: int, y: int) -> str:
        return ''

    def scan(self) -> None:
        self.scanned = True

    @property
    def primary_resource(self) -> Optional[str]:
        return None

    def get_scan_info(self) -> List[str]:
        return [
            f"--- SCAN REPORT: {self.name} ---",
            "Type: Orbital Starbase",
            "Services: Trading Post, Refueling Depot",
            "Status: Operational",
            "Mineral Scan: N/A",
        ]

    def __repr__(self) -> str:
        return f"Starbase({self.name!r}, orbit={self.orbit_distance:.0f})"
