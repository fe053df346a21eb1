"""
Spatial presence hash for the hyperspace grid.

A fast, non-cryptographic integer hash of (x, y, seed) used for O(1)
star-existence tests without running full system generation. The scalar
form is used for single-cell queries (entering, peeking); the numpy form
masks whole regions at once (surveys, background rendering) and is
bit-identical to the scalar form.
"""

import numpy as np

MASK32 = 0xFFFFFFFF

# Murmur-style mixing constants
_C1 = 0xCC9E2D51
_C2 = 0x1B873593
# murmur3 fmix32 avalanche constants
_F1 = 0x85EBCA6B
_F2 = 0xC2B2AE35


def _rotl15(h: int) -> int:
    return ((h << 15) | (h >> 17)) & MASK32


def fast_hash(x: int, y: int, seed_int: int) -> int:
    """
    Hash integer coordinates and a seed to an unsigned 32-bit value.

    Args:
        x: World X (signed int, wrapped to 32 bits)
        y: World Y (signed int, wrapped to 32 bits)
        seed_int: 32-bit seed (e.g., PRNG.seed_int)

    Returns:
        Unsigned 32-bit hash
    """
    h = seed_int & MASK32
    x &= MASK32
    y &= MASK32

    h = ((h ^ x) * _C1) & MASK32
    h = _rotl15(h)
    h = (h * _C2) & MASK32

    h = ((h ^ y) * _C1) & MASK32
    h = _rotl15(h)
    h = (h * _C2) & MASK32

    # Final avalanche
    h ^= h >> 16
    h = (h * _F1) & MASK32
    h ^= h >> 13
    h = (h * _F2) & MASK32
    h ^= h >> 16
    return h


def fast_hash_grid(xs: np.ndarray, ys: np.ndarray, seed_int: int) -> np.ndarray:
    """
    Vectorized fast_hash over broadcastable coordinate arrays.

    uint32 multiplication and shifts wrap exactly like the masked scalar
    arithmetic, so results match fast_hash() element for element.

    Args:
        xs: Integer X coordinates
        ys: Integer Y coordinates (broadcast against xs)
        seed_int: 32-bit seed

    Returns:
        uint32 array of hashes
    """
    x = (np.asarray(xs, dtype=np.int64) & MASK32).astype(np.uint32)
    y = (np.asarray(ys, dtype=np.int64) & MASK32).astype(np.uint32)
    c1 = np.uint32(_C1)
    c2 = np.uint32(_C2)

    with np.errstate(over='ignore'):
        h = np.uint32(seed_int & MASK32) ^ x
        h = h * c1
        h = (h << np.uint32(15)) | (h >> np.uint32(17))
        h = h * c2

        h = (h ^ y) * c1
        h = (h << np.uint32(15)) | (h >> np.uint32(17))
        h = h * c2

        h = h ^ (h >> np.uint32(16))
        h = h * np.uint32(_F1)
        h = h ^ (h >> np.uint32(13))
        h = h * np.uint32(_F2)
        h = h ^ (h >> np.uint32(16))

    return h.astype(np.uint32)


def presence_threshold(density: float, scale: int) -> float:
    """Hash residue below which a cell holds a star; not truncated."""
    return density * scale


def is_star_cell(x: int, y: int, seed_int: int, density: float, scale: int) -> bool:
    """
    Check whether a hyperspace cell contains a star.

    Stateless and replayable: the answer for (x, y, seed_int) never changes.
    """
    return fast_hash(x, y, seed_int) % scale < presence_threshold(density, scale)


def star_mask(x0: int, y0: int, width: int, height: int,
              seed_int: int, density: float, scale: int) -> np.ndarray:
    """
    Star presence for a rectangular region.

    Args:
        x0, y0: Top-left world cell
        width, height: Region size in cells

    Returns:
        (height, width) bool array; mask[row, col] is cell (x0 + col, y0 + row)
    """
    xs = np.arange(x0, x0 + width, dtype=np.int64)[np.newaxis, :]
    ys = np.arange(y0, y0 + height, dtype=np.int64)[:, np.newaxis]
    hashes = fast_hash_grid(xs, ys, seed_int)
    return (hashes % np.uint32(scale)) < presence_threshold(density, scale)
