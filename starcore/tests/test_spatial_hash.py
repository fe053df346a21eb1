"""
Spatial presence hash: scalar/vector agreement, stability, density.
"""

import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from starcore.prng import PRNG
from starcore.spatial_hash import fast_hash, fast_hash_grid, is_star_cell, star_mask

DENSITY = 0.008
SCALE = 10000


def test_fast_hash_is_32_bit():
    for x, y in [(0, 0), (1, -1), (-100000, 99999), (2 ** 40, -(2 ** 40))]:
        h = fast_hash(x, y, 12345)
        assert 0 <= h <= 0xFFFFFFFF


def test_fast_hash_depends_on_inputs():
    base = fast_hash(10, 10, 1)
    assert fast_hash(11, 10, 1) != base
    assert fast_hash(10, 11, 1) != base
    assert fast_hash(10, 10, 2) != base
    # Not symmetric in x and y
    assert fast_hash(3, 7, 1) != fast_hash(7, 3, 1)


def test_grid_matches_scalar():
    seed_int = PRNG("grid").seed_int
    xs = np.arange(-20, 20, dtype=np.int64)[np.newaxis, :]
    ys = np.arange(-15, 15, dtype=np.int64)[:, np.newaxis]
    grid = fast_hash_grid(xs, ys, seed_int)

    assert grid.dtype == np.uint32
    assert grid.shape == (30, 40)
    for row in range(30):
        for col in range(40):
            assert int(grid[row, col]) == fast_hash(col - 20, row - 15, seed_int)


def test_presence_is_stable():
    seed_int = PRNG("abc").seed_int
    first = is_star_cell(10, 10, seed_int, DENSITY, SCALE)
    for _ in range(1000):
        assert is_star_cell(10, 10, seed_int, DENSITY, SCALE) == first


def test_star_mask_orientation():
    seed_int = PRNG("mask").seed_int
    x0, y0 = -37, 52
    mask = star_mask(x0, y0, 60, 45, seed_int, DENSITY, SCALE)
    assert mask.shape == (45, 60)
    assert mask.dtype == np.bool_
    for row in range(45):
        for col in range(60):
            assert bool(mask[row, col]) == is_star_cell(x0 + col, y0 + row, seed_int, DENSITY, SCALE)


def test_density_within_tolerance():
    seed_int = PRNG("density").seed_int
    mask = star_mask(-150, -150, 300, 300, seed_int, DENSITY, SCALE)
    expected = 300 * 300 * DENSITY
    count = int(mask.sum())
    print(f"[OK] {count} stars in 300x300 (expected {expected:.0f})")
    assert 0.8 * expected <= count <= 1.2 * expected


def test_low_neighbour_correlation():
    seed_int = PRNG("correlation").seed_int
    mask = star_mask(0, 0, 300, 300, seed_int, DENSITY, SCALE)
    stars = int(mask.sum())
    horizontal_pairs = int(np.sum(mask[:, :-1] & mask[:, 1:]))
    vertical_pairs = int(np.sum(mask[:-1, :] & mask[1:, :]))
    # Independent cells give about stars * density pairs each way
    assert horizontal_pairs < 0.05 * stars
    assert vertical_pairs < 0.05 * stars


def test_zero_density_has_no_stars():
    mask = star_mask(0, 0, 50, 50, 99, 0.0, SCALE)
    assert not mask.any()


def test_fractional_threshold_keeps_boundary_residue():
    # 0.29 * 100 is 28.999..., so residue 28 still holds a star
    density, scale, seed_int = 0.29, 100, 1234
    for x in range(2000):
        expected = fast_hash(x, 0, seed_int) % scale < density * scale
        assert is_star_cell(x, 0, seed_int, density, scale) == expected

    mask = star_mask(0, 0, 2000, 1, seed_int, density, scale)
    boundary = [x for x in range(2000) if fast_hash(x, 0, seed_int) % scale == 28]
    assert boundary
    assert all(mask[0, x] for x in boundary)
