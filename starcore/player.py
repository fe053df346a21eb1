"""
Player position holder.

The player exists in three coordinate frames at once: an integer
hyperspace cell, a float position inside the current system (star at the
origin), and an integer cell on the current surface. Only the state
machine decides which frame is live.
"""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass
class Player:
    """
    Attributes:
        world_x, world_y: Hyperspace cell
        heading: Last hyperspace move (dx, dy); (0, 0) before the first move
        system_x, system_y: Position in the current system
        surface_x, surface_y: Cell on the current planet surface
    """
    world_x: int = 0
    world_y: int = 0
    heading: Tuple[int, int] = (0, 0)
    system_x: float = 0.0
    system_y: float = 0.0
    surface_x: int = 0
    surface_y: int = 0

    def move_world(self, dx: int, dy: int) -> None:
        self.world_x += dx
        self.world_y += dy
        if dx or dy:
            self.heading = (dx, dy)

    def move_system(self, dx: float, dy: float) -> None:
        self.system_x += dx
        self.system_y += dy

    def move_surface(self, dx: int, dy: int, map_size: int) -> None:
        """Move on the surface, wrapping around the map edges."""
        if map_size <= 0:
            return
        self.surface_x = (self.surface_x + dx) % map_size
        self.surface_y = (self.surface_y + dy) % map_size

    def place_in_system(self, distance: float, angle: float) -> None:
        self.system_x = math.cos(angle) * distance
        self.system_y = math.sin(angle) * distance

    @property
    def distance_to_star(self) -> float:
        return math.hypot(self.system_x, self.system_y)
