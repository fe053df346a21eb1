"""
Data types mirroring YAML catalog and world-config structures.

These dataclasses are populated by loader.py from YAML files.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .constants import (
    DEFAULT_SEED,
    STAR_DENSITY,
    STAR_CHECK_HASH_SCALE,
    NEBULA_SCALE,
    NEBULA_SPARSITY,
    NEBULA_CACHE_PRECISION,
    MAX_PLANETS_PER_SYSTEM,
    SYSTEM_EDGE_RADIUS_FACTOR,
    MIN_EDGE_RADIUS,
    STARBASE_PROBABILITY,
    STARBASE_ORBIT_DISTANCE,
    LANDING_DISTANCE,
    PLANET_MAP_BASE_SIZE,
    PLANET_SURFACE_ROUGHNESS,
    PLANET_HEIGHT_LEVELS,
    MINING_RATE_FACTOR,
)


# ============================================================================
# Catalog Definitions
# ============================================================================

@dataclass
class SpectralType:
    """Star classification entry"""
    key: str  # O, B, A, F, G, K, M
    weight: float  # Relative frequency in the weighted draw
    temperature: float  # Kelvin
    mass: float  # Solar masses
    radius: float  # Solar radii
    brightness: float
    colour: str  # Hex colour for renderers
    glyph: str


@dataclass
class PlanetType:
    """Planet class entry"""
    key: str  # Rock, Molten, Oceanic, Lunar, GasGiant, IceGiant, Frozen
    base_temp: float  # Kelvin at reference distance around a G star
    density_range: List[float]  # [min, max] g/cm^3
    mineral_chance: float  # Probability the planet carries any minerals
    rich_chance: float  # Share of Rich/UltraRich outcomes when it does
    poor_chance: float  # Share of Poor/UltraPoor outcomes when it does
    colours: List[str] = field(default_factory=list)
    lithospheres: List[str] = field(default_factory=list)
    resources: List[str] = field(default_factory=list)
    hydrosphere: Optional[str] = None  # Fixed description, None = derived


@dataclass
class PlanetTypeBand:
    """Planet type weights for an effective-temperature band"""
    min_temp: float  # Band applies at effective temperatures above this
    weights: Dict[str, float]  # {planet_type: weight}


@dataclass
class ElementInfo:
    """Mineable element entry"""
    key: str  # e.g., IRON
    name: str
    group: str  # Metal, Silicate, Carbon, Gas, Noble, Ice, Precious, Radioactive
    atomic_weight: float
    melting_point: float  # Kelvin
    base_frequency: float
    value: float = 1.0  # Trade value per unit
    is_gas: bool = False
    type_hints: List[str] = field(default_factory=list)  # Planet types that favour it


@dataclass
class Catalog:
    """Complete content catalog"""
    spectral_types: Dict[str, SpectralType]  # Ordered as declared (draw order)
    planet_types: Dict[str, PlanetType]
    planet_bands: List[PlanetTypeBand]  # Sorted hottest first
    elements: Dict[str, ElementInfo]
    exceptional_resources: List[str] = field(default_factory=list)


# ============================================================================
# World Configuration
# ============================================================================

@dataclass
class GalaxyConfig:
    """Generation parameters for one galaxy (session)"""
    seed: str = DEFAULT_SEED
    star_density: float = STAR_DENSITY
    star_check_hash_scale: int = STAR_CHECK_HASH_SCALE
    nebula_scale: float = NEBULA_SCALE
    nebula_sparsity: float = NEBULA_SPARSITY
    nebula_cache_precision: int = NEBULA_CACHE_PRECISION
    max_planets: int = MAX_PLANETS_PER_SYSTEM
    edge_radius_factor: float = SYSTEM_EDGE_RADIUS_FACTOR
    min_edge_radius: float = MIN_EDGE_RADIUS
    starbase_probability: float = STARBASE_PROBABILITY
    starbase_orbit_distance: float = STARBASE_ORBIT_DISTANCE
    landing_distance: float = LANDING_DISTANCE
    map_base_size: int = PLANET_MAP_BASE_SIZE
    surface_roughness: float = PLANET_SURFACE_ROUGHNESS
    height_levels: int = PLANET_HEIGHT_LEVELS
    mining_rate_factor: float = MINING_RATE_FACTOR
    description: Optional[str] = None
