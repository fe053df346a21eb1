"""
Planet entity: characteristics synthesis, scanning, and the lazy surface.

A planet's characteristics are drawn from its own child stream the moment
it is constructed, in a fixed order (physical, atmosphere, temperature,
hydrosphere, lithosphere, richness, abundance). Surface grids are costly
and only needed on landing, so they are built by ensure_surface_ready()
from string-seeded streams that do not depend on when the call happens.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

import numpy as np

from .constants import (
    ATMOSPHERE_DENSITIES,
    ATMOSPHERE_GASES,
    BOLTZMANN_CONSTANT,
    CRATERED_PLANET_TYPES,
    DEFAULT_ALBEDO,
    EARTH_DENSITY,
    EARTH_DIAMETER_KM,
    EARTH_ESCAPE_VELOCITY,
    ESCAPE_THRESHOLD_FACTOR,
    GAS_MOLECULAR_MASS_KG,
    GASEOUS_PLANET_TYPES,
    GRAVITY_RANGE,
    PLANET_ALBEDOS,
    PLANET_DIAMETER_RANGE,
    REFERENCE_ORBIT_DISTANCE,
    REFERENCE_SPECTRAL_TYPE,
    REFERENCE_TEMP_K,
    RICHNESS_NONE,
    RICHNESS_ULTRA_RICH,
)
from .data_types import Catalog, GalaxyConfig, PlanetType, SpectralType
from .errors import GenerationError
from .heightmap import HeightmapGenerator, add_craters
from .prng import PRNG
from .surface import (
    base_minerals,
    calculate_element_abundance,
    determine_mineral_richness,
    generate_surface_element_map,
)

logger = logging.getLogger(__name__)


@dataclass
class Atmosphere:
    """Atmosphere summary"""
    density: str  # One of ATMOSPHERE_DENSITIES
    pressure: float  # bar
    composition: Dict[str, float] = field(default_factory=dict)  # {gas: percent}


# ============================================================================
# Characteristics
# ============================================================================

def effective_temperature(star_temperature: float, reference_temperature: float,
                          orbit_distance: float) -> float:
    """
    Blackbody-style equilibrium temperature at an orbit.

    Luminosity scales as (T_star / T_ref)^4 relative to the reference star;
    flux falls with the square of distance; temperature is the fourth root.

    Args:
        star_temperature: Kelvin
        reference_temperature: Kelvin of the reference (G) star
        orbit_distance: System units

    Returns:
        Kelvin; REFERENCE_TEMP_K for the reference star at the reference distance
    """
    luminosity = (star_temperature / reference_temperature) ** 4
    relative_distance = max(orbit_distance, 1.0) / REFERENCE_ORBIT_DISTANCE
    return (luminosity / relative_distance ** 2) ** 0.25 * REFERENCE_TEMP_K


def calculate_gravity(diameter: float, density: float) -> float:
    """Surface gravity in G, clamped to GRAVITY_RANGE."""
    gravity = (density / EARTH_DENSITY) * (diameter / EARTH_DIAMETER_KM)
    return max(GRAVITY_RANGE[0], min(GRAVITY_RANGE[1], gravity))


def escape_velocity(gravity: float, diameter: float) -> float:
    """Escape velocity in m/s; v_esc scales with sqrt(g * r)."""
    return EARTH_ESCAPE_VELOCITY * math.sqrt(gravity * diameter / EARTH_DIAMETER_KM)


def _thermal_velocity(temperature: float, gas_mass: float) -> float:
    if temperature <= 0 or gas_mass <= 0:
        return 0.0
    return math.sqrt(3.0 * BOLTZMANN_CONSTANT * temperature / gas_mass)


def _retained(gas: str, temperature: float, v_escape: float) -> bool:
    mass = GAS_MOLECULAR_MASS_KG.get(gas)
    if mass is None:
        return False
    return _thermal_velocity(temperature, mass) * ESCAPE_THRESHOLD_FACTOR < v_escape


def _primary_gas_weights(planet_type: str, approx_temp: float) -> Dict[str, float]:
    if planet_type in GASEOUS_PLANET_TYPES:
        return {'Hydrogen': 75, 'Helium': 25}
    if approx_temp < 150:
        return {'Nitrogen': 50, 'Methane': 20, 'Carbon Dioxide': 15, 'Argon': 15}
    if approx_temp > 500:
        return {'Carbon Dioxide': 50, 'Nitrogen': 20, 'Sulfur Dioxide': 15, 'Water Vapor': 15}
    return {'Nitrogen': 60, 'Carbon Dioxide': 15, 'Argon': 10, 'Water Vapor': 15}


def _normalize_composition(composition: Dict[str, float], primary: str) -> Dict[str, float]:
    """Rescale to 100%, one decimal, absorbing rounding drift into the primary gas."""
    total = sum(composition.values())
    if total <= 0:
        return {primary: 100.0}

    result = {}
    for gas, percent in composition.items():
        value = round(percent * 100.0 / total, 1)
        if value > 0:
            result[gas] = value

    drift = 100.0 - sum(result.values())
    if abs(drift) > 0.1 and primary in result:
        result[primary] = max(0.0, round(result[primary] + drift, 1))
    return result


def generate_atmosphere(prng: PRNG, planet_type: str, gravity: float,
                        v_escape: float, approx_temp: float) -> Atmosphere:
    """
    Atmosphere density class, pressure and gas mix.

    Gas and ice giants are always Thick; Lunar and Molten worlds are mostly
    airless; low escape velocity strips dense atmospheres. Gases whose
    thermal velocity would exceed the escape threshold are rarely primary
    and never secondary.
    """
    roll = prng.random()
    if roll < 0.2:
        index = 0
    elif roll < 0.5:
        index = 1
    elif roll < 0.85:
        index = 2
    else:
        index = 3

    if planet_type in GASEOUS_PLANET_TYPES:
        index = 3
    elif planet_type in ('Lunar', 'Molten'):
        index = prng.choice([0, 0, 1])
    elif v_escape < EARTH_ESCAPE_VELOCITY * 0.3 and index > 1:
        index = prng.choice([0, 1])
    elif v_escape < EARTH_ESCAPE_VELOCITY * 0.7 and index > 2:
        index = prng.choice([1, 2])

    density = ATMOSPHERE_DENSITIES[index]
    if index == 0:
        return Atmosphere(density=density, pressure=0.0, composition={'None': 100.0})

    pressure = max(0.001, prng.random(0.01, 5.0) * (index + 1) * math.sqrt(gravity))

    weights = {}
    for gas, weight in _primary_gas_weights(planet_type, approx_temp).items():
        if not _retained(gas, approx_temp, v_escape):
            weight *= 0.01
        weights[gas] = weight
    gases = list(weights)
    primary = prng.weighted_choice(gases, [weights[g] for g in gases]) or 'Nitrogen'

    primary_percent = prng.random(50.0, 95.0)
    gas_count = prng.random_int(2, 6)
    composition = {primary: primary_percent}
    remaining = 100.0 - primary_percent
    available = [g for g in ATMOSPHERE_GASES
                 if g != primary and _retained(g, approx_temp, v_escape)]

    i = 1
    while i < gas_count and remaining > 0.1 and available:
        gas = available.pop(prng.random_int(0, len(available) - 1))
        if i == gas_count - 1 or not available:
            percent = remaining
        else:
            percent = prng.random(0.1, remaining / 1.5)
        if percent > 0.05:
            composition[gas] = percent
            remaining -= percent
        i += 1

    return Atmosphere(density=density, pressure=pressure,
                      composition=_normalize_composition(composition, primary))


def greenhouse_factor(atmosphere: Atmosphere) -> float:
    """Warming multiplier in [1, 3] from density, pressure and greenhouse gases."""
    pressure = atmosphere.pressure
    if atmosphere.density == 'Thin':
        factor = 1.05 + pressure / 0.5 * 0.05
    elif atmosphere.density == 'Earth-like':
        factor = 1.10 + pressure * 0.15
    elif atmosphere.density == 'Thick':
        factor = 1.25 + pressure / 2.0 * 0.35
    else:
        factor = 1.0

    comp = atmosphere.composition
    co2 = comp.get('Carbon Dioxide', 0.0)
    methane = comp.get('Methane', 0.0)
    water = comp.get('Water Vapor', 0.0)
    if co2 > 20 or methane > 5 or water > 1:
        factor *= 1.15
    if co2 > 80 or methane > 20 or water > 5:
        factor *= 1.25
    return max(1.0, min(factor, 3.0))


def calculate_surface_temp(planet_type: str, equilibrium: float, atmosphere: Atmosphere) -> int:
    """Average surface temperature (K) after albedo and greenhouse warming."""
    albedo = PLANET_ALBEDOS.get(planet_type, DEFAULT_ALBEDO)
    absorbed = equilibrium * ((1.0 - albedo) / (1.0 - DEFAULT_ALBEDO)) ** 0.25
    return max(2, int(math.floor(absorbed * greenhouse_factor(atmosphere) + 0.5)))


def describe_hydrosphere(prng: PRNG, planet_type: PlanetType, surface_temp: float,
                         atmosphere: Atmosphere) -> str:
    if planet_type.hydrosphere is not None:
        return planet_type.hydrosphere
    if atmosphere.density == 'None':
        return "None"
    if surface_temp > 373:
        return "Trace Water Vapor"
    if surface_temp < 273:
        return prng.choice(["Polar Ice Caps", "Subsurface Ice", "Frost Deposits"])
    return prng.choice(["Scattered Lakes", "Shallow Seas", "Major Oceans"])


# ============================================================================
# Planet
# ============================================================================

class Planet:
    """
    One planet of a solar system.

    Attributes:
        type: Planet type key (Rock, Molten, Oceanic, Lunar, GasGiant, IceGiant, Frozen)
        prng: Child stream fixed at construction
        map_seed: Seed string for every surface grid
        heightmap: (size, size) int grid once the surface is ready
        element_map: Same-shape grid of element keys once the surface is ready
        mined_cells: Surface cells already mined
    """

    def __init__(self, name: str, planet_type: PlanetType, orbit_distance: float,
                 orbit_angle: float, prng: PRNG, star: SpectralType,
                 catalog: Catalog, config: Optional[GalaxyConfig] = None):
        self.name = name
        self.type = planet_type.key
        self.planet_type = planet_type
        self.orbit_distance = orbit_distance
        self.orbit_angle = orbit_angle
        self.system_x = math.cos(orbit_angle) * orbit_distance
        self.system_y = math.sin(orbit_angle) * orbit_distance
        self.prng = prng
        self.star_type = star.key
        self.catalog = catalog
        self.config = config or GalaxyConfig()
        self.map_seed = f"{prng.initial_seed}_map"

        # Physical
        self.diameter = prng.random_int(*PLANET_DIAMETER_RANGE)
        self.density = prng.random(*planet_type.density_range)
        self.gravity = calculate_gravity(self.diameter, self.density)
        self.escape_velocity = escape_velocity(self.gravity, self.diameter)

        # Atmosphere and temperature
        reference = catalog.spectral_types.get(REFERENCE_SPECTRAL_TYPE, star).temperature
        self.equilibrium_temp = effective_temperature(star.temperature, reference, orbit_distance)
        approx_temp = planet_type.base_temp * (star.temperature / reference) ** 0.5
        self.atmosphere = generate_atmosphere(prng, self.type, self.gravity,
                                              self.escape_velocity, approx_temp)
        self.surface_temp = calculate_surface_temp(self.type, self.equilibrium_temp, self.atmosphere)

        self.hydrosphere = describe_hydrosphere(prng, planet_type, self.surface_temp, self.atmosphere)
        self.lithosphere = prng.choice(planet_type.lithospheres) or "Unknown"

        # Resources
        self.mineral_richness = determine_mineral_richness(prng, planet_type)
        self.base_minerals = base_minerals(prng, self.mineral_richness)
        self.element_abundance = calculate_element_abundance(
            prng, self.type, self.surface_temp, self.lithosphere, self.gravity, catalog.elements
        )

        self.scanned = False
        self.primary_resource: Optional[str] = None

        self.heightmap: Optional[np.ndarray] = None
        self.element_map: Optional[List[List[str]]] = None
        self.craters = 0
        self.mined_cells: Set[Tuple[int, int]] = set()

        logger.debug("Planet %s: %s, orbit %.0f, %d km, %.2f G, %d K, %s",
                     self.name, self.type, orbit_distance, self.diameter,
                     self.gravity, self.surface_temp, self.mineral_richness)

    # ------------------------------------------------------------------------
    # Orbit
    # ------------------------------------------------------------------------

    def place_at_angle(self, angle: float) -> None:
        self.orbit_angle = angle % (2.0 * math.pi)
        self.system_x = math.cos(self.orbit_angle) * self.orbit_distance
        self.system_y = math.sin(self.orbit_angle) * self.orbit_distance

    # ------------------------------------------------------------------------
    # Surface
    # ------------------------------------------------------------------------

    @property
    def is_gaseous(self) -> bool:
        return self.type in GASEOUS_PLANET_TYPES

    @property
    def surface_ready(self) -> bool:
        return self.heightmap is not None and self.element_map is not None

    @property
    def map_size(self) -> int:
        """Surface side length; 0 until the surface is ready or for gas giants."""
        if self.heightmap is None:
            return 0
        return self.heightmap.shape[0]

    def ensure_surface_ready(self) -> None:
        """
        Build the heightmap and element map once; later calls do nothing.

        Gas and ice giants get empty grids. Raises GenerationError if the
        grids come out inconsistent.
        """
        if self.surface_ready:
            return

        if self.is_gaseous:
            self.heightmap = np.zeros((0, 0), dtype=np.int64)
            self.element_map = []
            logger.debug("Planet %s has no solid surface", self.name)
            return

        levels = self.config.height_levels
        generator = HeightmapGenerator(self.config.map_base_size, self.config.surface_roughness,
                                       self.map_seed, levels)
        heightmap = generator.generate()

        if self.type in CRATERED_PLANET_TYPES or (self.type == 'Rock' and self.atmosphere.density == 'None'):
            self.craters = add_craters(heightmap, PRNG(f"{self.map_seed}_craters"), levels)

        element_map = generate_surface_element_map(
            heightmap, self.element_abundance, self.catalog.elements,
            self.map_seed, self.mineral_richness, levels
        )

        if len(element_map) != heightmap.shape[0] or any(len(row) != heightmap.shape[1] for row in element_map):
            raise GenerationError(f"Element map shape does not match heightmap for {self.name}")

        self.heightmap = heightmap
        self.element_map = element_map
        logger.info("Surface ready for %s: %dx%d, %d craters",
                    self.name, heightmap.shape[0], heightmap.shape[1], self.craters)

    def in_bounds(self, x: int, y: int) -> bool:
        size = self.map_size
        return 0 <= x < size and 0 <= y < size

    def element_at(self, x: int, y: int) -> str:
        """Element key at a surface cell ("" when empty)."""
        if self.element_map is None or not self.in_bounds(x, y):
            return ''
        return self.element_map[y][x]

    def is_mined(self, x: int, y: int) -> bool:
        return (x, y) in self.mined_cells

    def mark_mined(self, x: int, y: int) -> None:
        """Record a mined cell. Raises ValueError outside the surface grid."""
        if not self.in_bounds(x, y):
            raise ValueError(f"Cell ({x}, {y}) is outside the surface of {self.name}")
        self.mined_cells.add((x, y))

    # ------------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------------

    def scan(self) -> None:
        """Reveal the primary resource. Repeat scans change nothing."""
        if self.scanned:
            return

        self.scanned = True
        if self.mineral_richness == RICHNESS_NONE:
            self.primary_resource = "None Detected"
        else:
            prng = PRNG(f"{self.map_seed}_resource")
            self.primary_resource = prng.choice(self.planet_type.resources) or "Unknown"
            if self.mineral_richness == RICHNESS_ULTRA_RICH and prng.random() < 0.5:
                self.primary_resource = prng.choice(self.catalog.exceptional_resources) or self.primary_resource

        logger.info("Scanned %s: primary resource %s, richness %s",
                    self.name, self.primary_resource, self.mineral_richness)

    def composition_summary(self) -> str:
        gases = sorted(((g, p) for g, p in self.atmosphere.composition.items() if g != 'None' and p > 0),
                       key=lambda item: item[1], reverse=True)
        if not gases:
            return "None"
        return ', '.join(f"{gas}:{percent}%" for gas, percent in gases)

    def get_scan_info(self) -> List[str]:
        """Multi-line scan report."""
        lines = [f"--- SCAN REPORT: {self.name} ---"]
        if self.is_gaseous:
            lines += [
                f"Type: {self.type}",
                f"Diameter: {self.diameter} km | Gravity: {self.gravity:.2f} G (at 1 bar level)",
                f"Effective Temp: {self.surface_temp} K (cloud tops)",
                f"Atmosphere: {self.atmosphere.density} ({self.atmosphere.pressure:.2f} bar at cloud tops)",
            ]
        else:
            lines += [
                f"Type: {self.type} Planet",
                f"Diameter: {self.diameter} km | Gravity: {self.gravity:.2f} G",
                f"Surface Temp (Avg): {self.surface_temp} K",
                f"Atmosphere: {self.atmosphere.density} ({self.atmosphere.pressure:.2f} bar)",
            ]
        lines += [
            f"Composition: {self.composition_summary()}",
            f"Hydrosphere: {self.hydrosphere}",
            f"Lithosphere: {self.lithosphere}",
        ]
        if self.scanned:
            lines.append(f"Mineral Scan: Richness {self.mineral_richness}. "
                         f"Primary Resource: {self.primary_resource or 'N/A'}.")
        else:
            lines.append(f"Mineral Scan: Requires planetary scan. Richness potential: {self.mineral_richness}.")
        return lines

    def __repr__(self) -> str:
        return f"Planet({self.name!r}, {self.type}, orbit={self.orbit_distance:.0f})"
