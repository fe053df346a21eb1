"""
Surface mining.

Mining takes the element under the player's surface cell, once per cell.
The yield is drawn from a stream labelled with the cell, so mining the
same cell of the same planet always yields the same amount.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .constants import MINING_YIELD_JITTER
from .events import GameEvents
from .state_manager import GameState, GameStateManager

logger = logging.getLogger(__name__)


@dataclass
class MiningResult:
    """Outcome of one mining action"""
    success: bool
    element_key: Optional[str] = None
    amount: int = 0
    message: str = ''


class MiningSystem:
    """Mines the current planet through a GameStateManager"""

    def __init__(self, state_manager: GameStateManager):
        self.state_manager = state_manager

    def _refuse(self, message: str) -> MiningResult:
        logger.debug("Mining refused: %s", message)
        self.state_manager.status_message = message
        return MiningResult(success=False, message=message)

    def mine(self) -> MiningResult:
        manager = self.state_manager
        planet = manager.current_planet
        if manager.state != GameState.PLANET or planet is None:
            return self._refuse("Mining requires landing on a planet.")

        if planet.is_gaseous:
            return self._refuse(f"{planet.name} has no solid surface to mine.")

        planet.ensure_surface_ready()
        x = manager.player.surface_x
        y = manager.player.surface_y
        if not planet.in_bounds(x, y):
            return self._refuse("Position is off the surface map.")

        if planet.is_mined(x, y):
            return self._refuse("This deposit is depleted.")

        element_key = planet.element_at(x, y)
        if not element_key:
            return self._refuse("Nothing of value here.")

        abundance = planet.element_abundance.get(element_key, 0.0)
        prng = planet.prng.seed_new('mine', x, y)
        rate = manager.galaxy.config.mining_rate_factor
        amount = max(1, round(rate * max(0.1, math.sqrt(abundance / 100.0)) * prng.random(*MINING_YIELD_JITTER)))

        planet.mark_mined(x, y)
        element = planet.catalog.elements.get(element_key)
        name = element.name if element else element_key
        message = f"Mined {amount} units of {name}."
        manager.status_message = message
        logger.info("Mined %d %s at (%d, %d) on %s", amount, element_key, x, y, planet.name)

        manager.events.publish(GameEvents.CARGO_ADDED, {'element_key': element_key, 'amount': amount})
        return MiningResult(success=True, element_key=element_key, amount=amount, message=message)
