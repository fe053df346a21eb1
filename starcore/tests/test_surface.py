"""
Richness tiers, element abundance and the surface element grid.
"""

import math
import sys
from pathlib import Path
from unittest import mock

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from starcore.constants import (
    BASE_MINERAL_RANGES,
    RICHNESS_AVERAGE,
    RICHNESS_NONE,
    RICHNESS_RICH,
    RICHNESS_ULTRA_RICH,
)
from starcore.data_types import PlanetType
from starcore.heightmap import HeightmapGenerator
from starcore.loader import default_catalog
from starcore.perlin import PerlinNoise
from starcore.prng import PRNG
from starcore.surface import (
    base_minerals,
    calculate_element_abundance,
    determine_mineral_richness,
    generate_surface_element_map,
)


def make_type(mineral_chance, rich_chance=0.25, poor_chance=0.15):
    return PlanetType(key='Rock', base_temp=300, density_range=[3.0, 6.0],
                      mineral_chance=mineral_chance, rich_chance=rich_chance,
                      poor_chance=poor_chance)


def test_barren_type_never_draws():
    prng = PRNG("barren")
    assert determine_mineral_richness(prng, make_type(0.0)) == RICHNESS_NONE
    assert prng.next() == PRNG("barren").next()


def test_all_rich_type():
    prng = PRNG("rich")
    rich_type = make_type(1.0, rich_chance=1.0, poor_chance=0.0)
    tiers = {determine_mineral_richness(prng, rich_type) for _ in range(200)}
    assert tiers == {RICHNESS_RICH, RICHNESS_ULTRA_RICH}


def test_base_minerals_within_tier_range():
    prng = PRNG("minerals")
    for tier, (low, high) in BASE_MINERAL_RANGES.items():
        for _ in range(50):
            assert low <= base_minerals(prng, tier) <= high


def test_base_minerals_none_tier():
    prng = PRNG("none")
    assert base_minerals(prng, RICHNESS_NONE) == 0
    assert prng.next() == PRNG("none").next()


def test_abundance_sums_to_hundred():
    elements = default_catalog().elements
    abundance = calculate_element_abundance(PRNG("abund"), 'Rock', 290, "Iron-Rich Crust", 1.0, elements)
    assert set(abundance) == set(elements)
    assert math.isclose(sum(abundance.values()), 100.0)
    assert all(v > 0 for v in abundance.values())


def test_gas_giant_abundance_favours_gases():
    elements = default_catalog().elements
    abundance = calculate_element_abundance(PRNG("giant"), 'GasGiant', 120, "None", 2.5, elements)
    gas = sum(v for k, v in abundance.items() if elements[k].is_gas)
    assert gas > 50.0


def _surface_inputs():
    elements = default_catalog().elements
    heightmap = HeightmapGenerator(33, 0.7, "surface-test", 256).generate()
    abundance = calculate_element_abundance(PRNG("surface-test"), 'Rock', 290,
                                            "Silicate Rock", 1.0, elements)
    return heightmap, abundance, elements


def test_element_map_matches_heightmap_shape():
    heightmap, abundance, elements = _surface_inputs()
    grid = generate_surface_element_map(heightmap, abundance, elements, "seed_map", RICHNESS_AVERAGE)
    assert len(grid) == heightmap.shape[0]
    assert all(len(row) == heightmap.shape[1] for row in grid)
    assert {key for row in grid for key in row} <= set(abundance) | {''}


def test_element_map_deterministic():
    heightmap, abundance, elements = _surface_inputs()
    first = generate_surface_element_map(heightmap, abundance, elements, "seed_map", RICHNESS_RICH)
    second = generate_surface_element_map(heightmap, abundance, elements, "seed_map", RICHNESS_RICH)
    assert first == second


def test_none_richness_leaves_map_empty():
    heightmap, abundance, elements = _surface_inputs()
    grid = generate_surface_element_map(heightmap, abundance, elements, "seed_map", RICHNESS_NONE)
    assert all(key == '' for row in grid for key in row)


def test_richer_tier_fills_a_superset():
    heightmap, abundance, elements = _surface_inputs()
    average = generate_surface_element_map(heightmap, abundance, elements, "seed_map", RICHNESS_AVERAGE)
    ultra = generate_surface_element_map(heightmap, abundance, elements, "seed_map", RICHNESS_ULTRA_RICH)
    for avg_row, ultra_row in zip(average, ultra):
        for avg_key, ultra_key in zip(avg_row, ultra_row):
            if avg_key:
                assert ultra_key == avg_key


def test_element_map_skips_noise_for_hopeless_cells():
    heightmap, abundance, elements = _surface_inputs()
    original = PerlinNoise.get
    with mock.patch.object(PerlinNoise, 'get', autospec=True, side_effect=original) as get:
        grid = generate_surface_element_map(heightmap, abundance, elements, "seed_map", RICHNESS_AVERAGE)
    cells = heightmap.shape[0] * heightmap.shape[1]
    filled = sum(1 for row in grid for key in row if key)
    # One richness lookup per plausible cell plus one cluster lookup per filled cell
    assert get.call_count < cells
    assert get.call_count >= filled
