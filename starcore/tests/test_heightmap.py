"""
Diamond-square heightmaps: sizing, range, determinism, normalization, craters.
"""

import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from starcore.heightmap import HeightmapGenerator, add_craters, normalize_heightmap, working_size
from starcore.prng import PRNG


def test_working_size():
    assert working_size(1) == 3
    assert working_size(3) == 3
    assert working_size(4) == 5
    assert working_size(5) == 5
    assert working_size(128) == 129
    assert working_size(129) == 129
    assert working_size(130) == 257


def test_generator_size():
    for target in (2, 9, 20, 64):
        assert HeightmapGenerator(target, 0.7, "size").size == working_size(target)


def test_generate_shape_and_range():
    gen = HeightmapGenerator(64, 0.7, "terrain", height_levels=256)
    heightmap = gen.generate()
    assert heightmap.shape == (65, 65)
    assert np.issubdtype(heightmap.dtype, np.integer)
    assert heightmap.min() == 0
    assert heightmap.max() == 255
    assert np.isfinite(gen.map).all()


def test_same_seed_same_map():
    a = HeightmapGenerator(33, 0.7, "planet-x").generate()
    b = HeightmapGenerator(33, 0.7, "planet-x").generate()
    assert np.array_equal(a, b)


def test_different_seed_different_map():
    a = HeightmapGenerator(33, 0.7, "planet-x").generate()
    b = HeightmapGenerator(33, 0.7, "planet-y").generate()
    assert not np.array_equal(a, b)


def test_roughness_clamped():
    assert HeightmapGenerator(9, -1.0, "rough").roughness == 0.0
    heightmap = HeightmapGenerator(9, -1.0, "rough").generate()
    assert heightmap.shape == (9, 9)


def test_smallest_map():
    heightmap = HeightmapGenerator(1, 0.7, "tiny").generate()
    assert heightmap.shape == (3, 3)
    assert heightmap.min() >= 0 and heightmap.max() <= 255


def test_normalize_flat_input():
    flat = np.full((5, 5), 3.7)
    levels = normalize_heightmap(flat, 256)
    assert (levels == 128).all()


def test_normalize_spans_range():
    raw = np.arange(9, dtype=np.float64).reshape(3, 3)
    levels = normalize_heightmap(raw, 256)
    assert levels[0, 0] == 0
    assert levels[2, 2] == 255
    assert levels[1, 1] == 128  # 4/8 * 255 = 127.5 rounds half up


def test_normalize_replaces_generator_map():
    gen = HeightmapGenerator(9, 0.5, "norm")
    levels = gen.generate()
    assert np.array_equal(gen.map, levels.astype(np.float64))


def test_craters_stay_in_range():
    heightmap = np.full((129, 129), 128, dtype=np.int64)
    count = add_craters(heightmap, PRNG("craters"), 256)
    assert 8 <= count <= 25
    assert (heightmap != 128).any()
    assert heightmap.min() >= 0 and heightmap.max() <= 255


def test_craters_deterministic():
    base = HeightmapGenerator(65, 0.7, "moon").generate()
    a = base.copy()
    b = base.copy()
    add_craters(a, PRNG("moon_craters"))
    add_craters(b, PRNG("moon_craters"))
    assert np.array_equal(a, b)
