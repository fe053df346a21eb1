"""
Star system synthesis.

A SolarSystem is a pure function of (x, y, master PRNG, catalog, config):
constructing it twice yields field-for-field identical systems. Systems
are built when the player enters or peeks at a star and discarded when
they leave.
"""

import logging
import math
from typing import List, Optional, Tuple, Union

from .constants import (
    BASE_ORBIT_SPEED,
    FIRST_ORBIT_RANGE,
    MIN_ORBIT_SEPARATION,
    ORBIT_FACTOR_JITTER,
    ORBIT_FACTOR_RANGE,
    ORBIT_STEP_RANGE,
    REFERENCE_ORBIT_DISTANCE,
    REFERENCE_SPECTRAL_TYPE,
    SYSTEM_EXIT_RADIUS_FRACTION,
    SYSTEM_NAME_PREFIXES,
)
from .data_types import Catalog, GalaxyConfig, PlanetType, SpectralType
from .errors import GenerationError
from .planet import Planet, effective_temperature
from .prng import PRNG
from .starbase import Starbase

logger = logging.getLogger(__name__)

Body = Union[Planet, Starbase]

_ROMAN = [(10, 'X'), (9, 'IX'), (5, 'V'), (4, 'IV'), (1, 'I')]


def roman_numeral(n: int) -> str:
    result = ''
    for value, numeral in _ROMAN:
        while n >= value:
            result += numeral
            n -= value
    return result


def pick_planet_type(prng: PRNG, catalog: Catalog, temperature: float) -> PlanetType:
    """
    Weighted planet type for an effective temperature.

    Uses the first (hottest) band whose min_temp the temperature exceeds,
    falling back to the coldest band.
    """
    bands = catalog.planet_bands
    if not bands:
        raise GenerationError("Catalog defines no planet type bands")

    band = bands[-1]
    for candidate in bands:
        if temperature > candidate.min_temp:
            band = candidate
            break

    keys = list(band.weights)
    key = prng.weighted_choice(keys, [band.weights[k] for k in keys])
    if key is None:
        raise GenerationError(f"Planet band above {band.min_temp} K has no positive weights")
    return catalog.planet_types[key]


class SolarSystem:
    """
    One star and its bodies.

    Attributes:
        star_x, star_y: Hyperspace cell of the star
        prng: Child stream of the master PRNG, fixed at construction
        star_type: Spectral type key
        planets: Planets ordered by increasing orbit distance
        starbase: Optional starbase
        edge_radius: Distance beyond which the player may leave
    """

    def __init__(self, star_x: int, star_y: int, master_prng: PRNG,
                 catalog: Catalog, config: Optional[GalaxyConfig] = None):
        self.star_x = star_x
        self.star_y = star_y
        self.catalog = catalog
        self.config = config or GalaxyConfig()
        self.prng = master_prng.seed_new(star_x, star_y)
        prng = self.prng

        # Star
        spectral = list(catalog.spectral_types.values())
        if not spectral:
            raise GenerationError("Catalog defines no spectral types")
        star: SpectralType = prng.weighted_choice(spectral, [s.weight for s in spectral])
        if star is None:
            raise GenerationError("Spectral type weights sum to zero")
        self.star = star
        self.star_type = star.key
        self.star_temperature = star.temperature
        self.star_mass = star.mass
        self.star_radius = star.radius
        self.star_brightness = star.brightness
        self.star_colour = star.colour

        self.name = f"{prng.choice(SYSTEM_NAME_PREFIXES)}-{prng.random_int(1, 999)}{chr(65 + prng.random_int(0, 25))}"

        # Starbase first, so planet orbits can keep clear of it
        self.starbase: Optional[Starbase] = None
        if prng.random() < self.config.starbase_probability:
            self.starbase = Starbase(self.name, prng.seed_new('starbase'),
                                     self.config.starbase_orbit_distance)

        self.planets: List[Planet] = []
        self._generate_planets()

        outermost = max((body.orbit_distance for body in self.bodies()), default=0.0)
        self.edge_radius = max(self.config.min_edge_radius, outermost * self.config.edge_radius_factor)

        self._check_invariants()
        logger.debug("Generated system %s at (%d, %d): %s star, %d planets, starbase=%s, edge %.0f",
                     self.name, star_x, star_y, self.star_type, len(self.planets),
                     self.starbase is not None, self.edge_radius)

    def _generate_planets(self) -> None:
        prng = self.prng
        count = prng.random_int(0, self.config.max_planets)
        reference = self.catalog.spectral_types.get(REFERENCE_SPECTRAL_TYPE, self.star).temperature
        starbase_orbit = self.starbase.orbit_distance if self.starbase else None

        distance = 0.0
        for i in range(count):
            if i == 0:
                candidate = prng.random(*FIRST_ORBIT_RANGE)
            else:
                factor = prng.random(*ORBIT_FACTOR_RANGE) + prng.random(-ORBIT_FACTOR_JITTER, ORBIT_FACTOR_JITTER)
                candidate = distance * factor + prng.random(*ORBIT_STEP_RANGE)
                candidate = max(candidate, distance + MIN_ORBIT_SEPARATION)

            if starbase_orbit is not None and abs(candidate - starbase_orbit) < MIN_ORBIT_SEPARATION:
                candidate = starbase_orbit + MIN_ORBIT_SEPARATION
            distance = candidate
            angle = prng.random(0.0, 2.0 * math.pi)

            planet_prng = prng.seed_new('planet', i)
            temperature = effective_temperature(self.star_temperature, reference, distance)
            planet_type = pick_planet_type(planet_prng, self.catalog, temperature)
            name = f"{self.name} {roman_numeral(i + 1)}"
            self.planets.append(Planet(name, planet_type, distance, angle, planet_prng,
                                       self.star, self.catalog, self.config))

    def _check_invariants(self) -> None:
        orbits = [p.orbit_distance for p in self.planets]
        if any(b <= a for a, b in zip(orbits, orbits[1:])):
            raise GenerationError(f"Planet orbits of {self.name} are not strictly increasing")
        if len(self.planets) > self.config.max_planets:
            raise GenerationError(f"{self.name} has {len(self.planets)} planets")

    # ------------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------------

    def bodies(self) -> List[Body]:
        """Planets, then the starbase if present."""
        result: List[Body] = list(self.planets)
        if self.starbase is not None:
            result.append(self.starbase)
        return result

    @staticmethod
    def distance_to_star(x: float, y: float) -> float:
        return math.hypot(x, y)

    def get_object_near(self, x: float, y: float, radius: float) -> Optional[Body]:
        """
        Nearest planet or starbase within radius of system point (x, y).

        Returns:
            The closest body, or None if nothing is in range
        """
        nearest = None
        best = radius
        for body in self.bodies():
            distance = math.hypot(body.system_x - x, body.system_y - y)
            if distance <= best:
                nearest = body
                best = distance
        return nearest

    def is_at_edge(self, x: float, y: float) -> bool:
        """True once (x, y) is far enough from the star to leave."""
        return self.distance_to_star(x, y) > self.edge_radius * SYSTEM_EXIT_RADIUS_FRACTION

    def update_orbits(self, dt: float) -> None:
        """Advance every body; angular speed falls with sqrt(distance)."""
        for body in self.bodies():
            speed = BASE_ORBIT_SPEED * math.sqrt(REFERENCE_ORBIT_DISTANCE / max(body.orbit_distance, 1.0))
            body.place_at_angle(body.orbit_angle + speed * dt)

    def get_star_scan_info(self) -> List[str]:
        return [
            f"--- STAR SCAN: {self.name} ---",
            f"Spectral Type: {self.star_type}",
            f"Temperature: {self.star_temperature:.0f} K",
            f"Mass: {self.star_mass:.2f} Solar Masses",
            f"Radius: {self.star_radius:.2f} Solar Radii",
            f"Planets: {len(self.planets)} | Starbase: {'Yes' if self.starbase else 'No'}",
        ]

    def signature(self) -> Tuple:
        """
        Comparable summary of every generated field.

        Two systems built from the same coordinates and seed have equal
        signatures.
        """
        planets = tuple(
            (p.name, p.type, p.orbit_distance, p.orbit_angle, p.diameter, p.density,
             p.atmosphere.density, p.surface_temp, p.mineral_richness, p.base_minerals,
             p.map_seed)
            for p in self.planets
        )
        starbase = None
        if self.starbase is not None:
            starbase = (self.starbase.name, self.starbase.orbit_distance, self.starbase.orbit_angle)
        return (self.name, self.star_x, self.star_y, self.star_type,
                self.edge_radius, planets, starbase)

    def __repr__(self) -> str:
        return f"SolarSystem({self.name!r}, ({self.star_x}, {self.star_y}), {self.star_type})"
