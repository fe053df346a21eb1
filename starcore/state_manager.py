"""
Game state machine.

    hyperspace -> system -> planet | starbase -> system -> hyperspace

The manager alone holds the "current" system and body. Rejected
transitions leave every field untouched and explain themselves through
status_message. Generation failures are logged and turned into staying in
the last stable state; they never propagate to the caller.
"""

import logging
import math
from enum import Enum
from typing import List, Optional, Union

from .constants import LIFTOFF_CLEARANCE, SYSTEM_ENTRY_RADIUS_FRACTION
from .events import EventBus, GameEvents
from .galaxy import Galaxy
from .planet import Planet
from .player import Player
from .solar_system import SolarSystem
from .starbase import Starbase

logger = logging.getLogger(__name__)


class GameState(Enum):
    HYPERSPACE = 'hyperspace'
    SYSTEM = 'system'
    PLANET = 'planet'
    STARBASE = 'starbase'


class GameStateManager:
    """
    Owns the current state and the objects it refers to.

    Invariants:
        current_system is set exactly in SYSTEM, PLANET and STARBASE
        current_planet is set only in PLANET
        current_starbase is set only in STARBASE
    """

    def __init__(self, galaxy: Galaxy, player: Optional[Player] = None,
                 events: Optional[EventBus] = None):
        self.galaxy = galaxy
        self.player = player or Player()
        self.events = events or EventBus()
        self.state = GameState.HYPERSPACE
        self.current_system: Optional[SolarSystem] = None
        self.current_planet: Optional[Planet] = None
        self.current_starbase: Optional[Starbase] = None
        self.status_message = ''

    # ------------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------------

    def _reject(self, message: str) -> None:
        logger.warning("Transition rejected in %s: %s", self.state.value, message)
        self.status_message = message

    def _set_state(self, new_state: GameState) -> None:
        old = self.state
        self.state = new_state
        logger.info("State changed: %s -> %s", old.value, new_state.value)
        self.events.publish(GameEvents.GAME_STATE_CHANGED, new_state)

    def _entry_angle(self) -> float:
        """Approach from the side the player came from."""
        dx, dy = self.player.heading
        if dx or dy:
            return math.atan2(-dy, -dx)
        if self.player.world_x or self.player.world_y:
            return math.atan2(self.player.world_y, self.player.world_x)
        return 0.0

    @property
    def current_body(self) -> Optional[Union[Planet, Starbase]]:
        return self.current_planet or self.current_starbase

    # ------------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------------

    def enter_system(self) -> bool:
        """Enter the system at the player's hyperspace cell."""
        if self.state != GameState.HYPERSPACE:
            self._reject("Can only enter a system from hyperspace.")
            return False

        x, y = self.player.world_x, self.player.world_y
        if not self.galaxy.is_star(x, y):
            self._reject("No star system here.")
            return False

        try:
            system = self.galaxy.generate_system(x, y)
        except Exception:
            logger.exception("System generation failed at (%d, %d) with seed %r",
                             x, y, self.galaxy.seed)
            self.status_message = f"Sensor failure: could not resolve the system at ({x}, {y})."
            return False

        self.player.place_in_system(system.edge_radius * SYSTEM_ENTRY_RADIUS_FRACTION,
                                    self._entry_angle())
        self.current_system = system
        self.current_planet = None
        self.current_starbase = None
        self.status_message = f"Entering {system.name} ({system.star_type} class star)."
        self._set_state(GameState.SYSTEM)
        self.events.publish(GameEvents.SYSTEM_ENTERED, system)
        return True

    def leave_system(self) -> bool:
        """Return to hyperspace once the player is near the system edge."""
        if self.state != GameState.SYSTEM or self.current_system is None:
            self._reject("Not in a system.")
            return False

        system = self.current_system
        if not system.is_at_edge(self.player.system_x, self.player.system_y):
            self._reject("Too close to the star to engage hyperdrive.")
            return False

        self.current_system = None
        self.current_planet = None
        self.current_starbase = None
        self.status_message = f"Left {system.name}."
        self._set_state(GameState.HYPERSPACE)
        self.events.publish(GameEvents.SYSTEM_LEFT, system)
        return True

    def land_on_nearby_object(self) -> Optional[Union[Planet, Starbase]]:
        """
        Land on (or dock with) the nearest body within landing distance.

        Returns:
            The body landed on, or None if the landing was rejected or failed
        """
        if self.state != GameState.SYSTEM or self.current_system is None:
            self._reject("Can only land from within a system.")
            return None

        body = self.current_system.get_object_near(self.player.system_x, self.player.system_y,
                                                   self.galaxy.config.landing_distance)
        if body is None:
            self._reject("Nothing close enough to land on.")
            return None

        try:
            body.ensure_surface_ready()
        except Exception:
            logger.exception("Surface generation failed for %s in system (%d, %d) with seed %r",
                             body.name, self.current_system.star_x, self.current_system.star_y,
                             self.galaxy.seed)
            self.status_message = f"Landing aborted: surface of {body.name} could not be mapped."
            return None

        centre = body.map_size // 2
        self.player.surface_x = centre
        self.player.surface_y = centre

        if isinstance(body, Starbase):
            self.current_starbase = body
            self.current_planet = None
            self.status_message = f"Docked at {body.name}."
            self._set_state(GameState.STARBASE)
            self.events.publish(GameEvents.STARBASE_DOCKED, body)
        else:
            self.current_planet = body
            self.current_starbase = None
            self.status_message = f"Landed on {body.name}."
            self._set_state(GameState.PLANET)
            self.events.publish(GameEvents.PLANET_LANDED, body)
        return body

    def lift_off(self) -> bool:
        """Leave the current planet or starbase for system space."""
        if self.state not in (GameState.PLANET, GameState.STARBASE):
            self._reject("Not landed or docked.")
            return False

        body = self.current_body
        if self.current_system is None or body is None:
            logger.error("Lift-off from %s with no current system or body; resetting to hyperspace",
                         self.state.value)
            self.current_system = None
            self.current_planet = None
            self.current_starbase = None
            self.status_message = "Navigation fault: returned to hyperspace."
            self._set_state(GameState.HYPERSPACE)
            return False

        self.player.place_in_system(body.orbit_distance + LIFTOFF_CLEARANCE, body.orbit_angle)
        self.current_planet = None
        self.current_starbase = None
        self.status_message = f"Lifted off from {body.name}."
        self._set_state(GameState.SYSTEM)
        self.events.publish(GameEvents.LIFT_OFF, body)
        return True

    # ------------------------------------------------------------------------
    # Side-effect-free queries
    # ------------------------------------------------------------------------

    def peek_at_system(self, x: int, y: int) -> Optional[SolarSystem]:
        """
        Preview the system at (x, y) without entering it.

        Returns:
            A fresh SolarSystem, or None if there is no star or generation failed
        """
        if not self.galaxy.is_star(x, y):
            return None
        try:
            return self.galaxy.generate_system(x, y)
        except Exception:
            logger.exception("Peek failed at (%d, %d) with seed %r", x, y, self.galaxy.seed)
            return None

    def scan_current(self) -> List[str]:
        """
        Scan whatever the player is at: the body in PLANET/STARBASE, the
        star in SYSTEM. Publishes SCAN_COMPLETE with the report lines.
        """
        body = self.current_body
        if body is not None:
            body.scan()
            lines = body.get_scan_info()
        elif self.state == GameState.SYSTEM and self.current_system is not None:
            lines = self.current_system.get_star_scan_info()
        else:
            self._reject("Nothing to scan in hyperspace.")
            return []

        self.events.publish(GameEvents.SCAN_COMPLETE, lines)
        return lines
