"""
Deterministic PRNG for starcore generation.

A 32-bit Mulberry32-style stream seeded from a string. All arithmetic is
integer and masked to 32 bits so output is bit-exact on every platform.
Child streams are derived with seed_new() from the parent's current state
plus suffixes, giving every system, planet and surface cell an independent,
reproducible sub-stream without a global counter.
"""

import math
from typing import Any, Optional, Sequence, TypeVar

from .constants import PRNG_WARMUP_ROUNDS

T = TypeVar('T')

MASK32 = 0xFFFFFFFF
_STRING_HASH_MULTIPLIER = 9 ** 9
_MULBERRY_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """32-bit wrap-around multiply on unsigned representations."""
    return (a * b) & MASK32


def hash_string(text: str) -> int:
    """
    Hash a string to an unsigned 32-bit integer.

    Args:
        text: Seed string

    Returns:
        Unsigned 32-bit hash
    """
    h = 9
    for ch in text:
        h = _imul(h ^ ord(ch), _STRING_HASH_MULTIPLIER)
    return (h ^ (h >> 9)) & MASK32


class PRNG:
    """
    Seedable deterministic random stream.

    Identical seed strings always produce identical infinite sequences.

    Example:
        master = PRNG("haunting beauty")
        system_prng = master.seed_new(10, -4)
        planet_prng = system_prng.seed_new('planet', 0)
    """

    def __init__(self, seed: Any):
        self._initial_seed = str(seed)
        self.seed_int = hash_string(self._initial_seed)
        self._state = self.seed_int
        for _ in range(PRNG_WARMUP_ROUNDS):
            self.next()

    @property
    def initial_seed(self) -> str:
        return self._initial_seed

    def get_initial_seed(self) -> str:
        """Return the seed string this stream was constructed from."""
        return self._initial_seed

    def next(self) -> float:
        """
        Advance the stream.

        Returns:
            Float in [0, 1)
        """
        t = (self._state + _MULBERRY_INCREMENT) & MASK32
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        self._state = t
        return ((t ^ (t >> 14)) & MASK32) / _TWO_POW_32

    def random(self, min_val: float = 0.0, max_val: float = 1.0) -> float:
        """Float in [min_val, max_val)."""
        return self.next() * (max_val - min_val) + min_val

    def random_int(self, min_val: float, max_val: float) -> int:
        """Integer in [min_val, max_val], inclusive at both ends."""
        lo = math.ceil(min_val)
        hi = math.floor(max_val)
        return math.floor(self.next() * (hi - lo + 1)) + lo

    def choice(self, items: Sequence[T]) -> Optional[T]:
        """Pick one element, or None for an empty sequence."""
        if not items:
            return None
        return items[self.random_int(0, len(items) - 1)]

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> Optional[T]:
        """
        Pick one element with probability proportional to its weight.

        Consumes exactly one draw when a choice is made.

        Args:
            items: Candidates
            weights: Non-negative weights, same length as items

        Returns:
            Chosen item, or None if items is empty or total weight <= 0
        """
        total = sum(weights)
        if not items or total <= 0:
            return None

        roll = self.random(0.0, total)
        for item, weight in zip(items, weights):
            roll -= weight
            if roll < 0:
                return item

        # Float rounding can leave a tiny positive remainder
        return items[-1]

    def seed_new(self, *suffixes: Any) -> 'PRNG':
        """
        Derive an independent child stream.

        The parent's state is read, not advanced.

        Args:
            *suffixes: Extra seed components (coordinates, labels, indices)

        Returns:
            New PRNG seeded from "<state>:<suffix>:<suffix>..."
        """
        combined = f"{self._state}:" + ':'.join(str(s) for s in suffixes)
        return PRNG(combined)

    def __repr__(self) -> str:
        return f"PRNG(seed={self._initial_seed!r})"
