"""
Planet surface resource synthesis.

Decides a planet's mineral richness tier, its element abundance table, and
the per-cell element-key grid laid over its heightmap. The grid uses two
Perlin fields: one clusters precious elements into veins, the other opens
"rich" patches where cells are more likely to hold anything at all.

Element grids are lists of rows (grid[y][x]); "" marks an empty cell.
"""

import logging
from typing import Dict, List

import numpy as np

from .constants import (
    RICHNESS_NONE,
    RICHNESS_ULTRA_POOR,
    RICHNESS_POOR,
    RICHNESS_AVERAGE,
    RICHNESS_RICH,
    RICHNESS_ULTRA_RICH,
    BASE_MINERAL_RANGES,
    RICHNESS_SPARSITY_FACTORS,
    ELEMENT_CLUSTER_NOISE_SCALE,
    ELEMENT_RICHNESS_NOISE_SCALE,
    ELEMENT_BASE_SPARSITY,
    ELEMENT_RICHNESS_INFLUENCE,
    CLUSTERING_ELEMENTS,
    UNIFORM_ELEMENTS,
    GASEOUS_PLANET_TYPES,
    PLANET_HEIGHT_LEVELS,
)
from .data_types import ElementInfo, PlanetType
from .perlin import PerlinNoise
from .prng import PRNG

logger = logging.getLogger(__name__)


# ============================================================================
# Richness
# ============================================================================

def determine_mineral_richness(prng: PRNG, planet_type: PlanetType) -> str:
    """
    Roll a planet's richness tier.

    Gaseous types (mineral_chance 0) are always None without consuming a
    draw. Otherwise one draw decides whether any minerals exist and a
    second picks the tier: half of rich_chance is UltraRich, the other
    half Rich; poor_chance splits the same way at the bottom.

    Returns:
        One of the RICHNESS_* tier names
    """
    if planet_type.mineral_chance <= 0:
        return RICHNESS_NONE

    if prng.random() >= planet_type.mineral_chance:
        return RICHNESS_NONE

    roll = prng.random()
    rich = planet_type.rich_chance
    poor = planet_type.poor_chance

    if roll < rich / 2:
        richness = RICHNESS_ULTRA_RICH
    elif roll < rich:
        richness = RICHNESS_RICH
    elif roll < 1.0 - poor:
        richness = RICHNESS_AVERAGE
    elif roll < 1.0 - poor / 2:
        richness = RICHNESS_POOR
    else:
        richness = RICHNESS_ULTRA_POOR

    logger.debug("Richness for %s: %s (roll %.3f)", planet_type.key, richness, roll)
    return richness


def base_minerals(prng: PRNG, richness: str) -> int:
    """Base mineral yield for a tier; 0 (and no draw) for None."""
    bounds = BASE_MINERAL_RANGES.get(richness)
    if bounds is None:
        return 0
    return prng.random_int(*bounds)


# ============================================================================
# Element Abundance
# ============================================================================

def _type_factor(element: ElementInfo, planet_type: str) -> float:
    factor = 1.0
    if planet_type in element.type_hints:
        factor *= 1.5
    if planet_type in GASEOUS_PLANET_TYPES and not element.is_gas:
        factor *= 0.01
    return factor


def _temperature_factor(element: ElementInfo, planet_type: str, surface_temp: float) -> float:
    factor = 1.0
    mp = element.melting_point
    if planet_type == 'Molten' and mp < surface_temp:
        factor *= 1.3
    if planet_type == 'Frozen' and mp > surface_temp - 50:
        factor *= 0.5
    if mp < surface_temp - 200:
        factor *= 0.8   # volatile at this temperature
    if mp > surface_temp + 500:
        factor *= 1.1   # refractory
    return factor


def _lithosphere_factor(element: ElementInfo, lithosphere: str) -> float:
    factor = 1.0
    if 'Carbonaceous' in lithosphere and element.group == 'Carbon':
        factor *= 1.4
    if 'Iron-Rich' in lithosphere and element.group == 'Metal':
        factor *= 1.3
    if 'Silicate' in lithosphere and element.group == 'Silicate':
        factor *= 1.2
    return factor


def _gravity_factor(element: ElementInfo, gravity: float) -> float:
    # Heavy elements sink under strong gravity
    return 1.0 + (element.atomic_weight / 100.0) * (gravity - 1.0) * 0.05


def calculate_element_abundance(
    prng: PRNG,
    planet_type: str,
    surface_temp: float,
    lithosphere: str,
    gravity: float,
    elements: Dict[str, ElementInfo]
) -> Dict[str, float]:
    """
    Relative abundance of each catalog element on one planet.

    Each element's base frequency is jittered by U(0.5, 1.5) (one draw per
    element, catalog order) and adjusted for planet type, surface
    temperature, lithosphere and gravity.

    Args:
        prng: Planet stream
        planet_type: Planet type key
        surface_temp: Kelvin
        lithosphere: Lithosphere description
        gravity: Surface gravity in G
        elements: Element catalog

    Returns:
        {element_key: percent}, summing to 100 (empty if nothing qualifies)
    """
    weights: Dict[str, float] = {}
    for key, element in elements.items():
        if element.base_frequency <= 0:
            continue
        weight = element.base_frequency * prng.random(0.5, 1.5)
        weight *= _type_factor(element, planet_type)
        weight *= _temperature_factor(element, planet_type, surface_temp)
        weight *= _lithosphere_factor(element, lithosphere)
        weight *= _gravity_factor(element, gravity)
        weights[key] = max(0.0001, weight)

    total = sum(weights.values())
    if total <= 0:
        logger.warning("No element weight for %s planet; abundance table is empty", planet_type)
        return {}

    return {key: weight / total * 100.0 for key, weight in weights.items()}


# ============================================================================
# Element Map
# ============================================================================

def _cluster_affinity(key: str, cluster_noise: float) -> float:
    if key in CLUSTERING_ELEMENTS:
        return cluster_noise ** 3
    if key in UNIFORM_ELEMENTS:
        return 0.8 + cluster_noise * 0.4
    return 1.0


def _altitude_affinity(element: ElementInfo, height: float) -> float:
    """height is normalized to [0, 1]."""
    if element.atomic_weight > 100:
        return 1.0 - height * 0.5
    if element.group == 'Ice':
        return height * height * 2.0
    if element.atomic_weight < 30 and element.group not in ('Gas', 'Noble'):
        return 0.7 + height * 0.6
    return 1.0


def generate_surface_element_map(
    heightmap: np.ndarray,
    abundance: Dict[str, float],
    elements: Dict[str, ElementInfo],
    map_seed: str,
    richness: str,
    height_levels: int = PLANET_HEIGHT_LEVELS
) -> List[List[str]]:
    """
    Lay element keys over a heightmap.

    Cells are visited row by row. A cell holds an element when a sparsity
    roll falls under a threshold raised by the richness noise field and
    scaled by the planet's tier; the element is then picked by weight from
    a child stream labelled with the cell coordinates.

    Args:
        heightmap: Square int grid
        abundance: Planet-wide {element_key: percent}
        elements: Element catalog
        map_seed: Planet map seed
        richness: Planet richness tier
        height_levels: Altitude levels used to normalize heights

    Returns:
        Grid of element keys with the heightmap's shape ("" = empty)
    """
    rows, cols = heightmap.shape
    surface = [[''] * cols for _ in range(rows)]

    candidates = [(key, weight) for key, weight in abundance.items()
                  if weight > 0 and key in elements]
    tier_factor = RICHNESS_SPARSITY_FACTORS.get(richness, 0.0)
    if not candidates or tier_factor <= 0:
        logger.debug("Element map for seed %r left empty (richness %s)", map_seed, richness)
        return surface

    prng = PRNG(f"{map_seed}_elements")
    cluster_noise = PerlinNoise(f"{map_seed}_elements_cluster")
    richness_noise = PerlinNoise(f"{map_seed}_elements_richness")
    max_height = max(1, height_levels - 1)
    # Highest threshold any patch can reach; noise stays within [-1, 1]
    ceiling = (ELEMENT_BASE_SPARSITY + ELEMENT_RICHNESS_INFLUENCE) * tier_factor

    filled = 0
    for y in range(rows):
        for x in range(cols):
            roll = prng.random()
            if roll > ceiling:
                continue
            patch = (richness_noise.get(x * ELEMENT_RICHNESS_NOISE_SCALE,
                                        y * ELEMENT_RICHNESS_NOISE_SCALE) + 1.0) / 2.0
            threshold = (ELEMENT_BASE_SPARSITY + patch * ELEMENT_RICHNESS_INFLUENCE) * tier_factor
            if roll > threshold:
                continue

            cluster = (cluster_noise.get(x * ELEMENT_CLUSTER_NOISE_SCALE,
                                         y * ELEMENT_CLUSTER_NOISE_SCALE) + 1.0) / 2.0
            height = float(heightmap[y, x]) / max_height

            keys = []
            weights = []
            for key, weight in candidates:
                element = elements[key]
                weight *= _cluster_affinity(key, cluster)
                weight *= _altitude_affinity(element, height)
                if element.melting_point < 300 and height < 0.1:
                    weight *= 0.1
                if weight > 0:
                    keys.append(key)
                    weights.append(weight)

            chosen = prng.seed_new('elem', x, y).weighted_choice(keys, weights)
            if chosen is not None:
                surface[y][x] = chosen
                filled += 1

    logger.debug("Element map for seed %r: %d/%d cells filled", map_seed, filled, rows * cols)
    return surface
