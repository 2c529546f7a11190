# random_stream.py
"""
Seeded, reproducible pseudo-random stream.

Every generator in the toolkit draws from exactly one RandomStream that the
caller creates for a generation session and passes in explicitly. There is
no module-level stream: two sessions with the same seed produce identical
output, and sessions with different streams never interfere.
"""
import logging
import math
import time
from typing import List, Optional, Sequence, TypeVar

import numpy as np

from constants import (
    SEED_MIX, STREAM_MULTIPLIER, STREAM_INCREMENT, UINT32_MASK, UINT32_RANGE,
    ID_SUFFIX_RANGE
)

T = TypeVar('T')

# --- Data Contracts ---
#
# class RandomStream:
#   - __init__(self, seed: Optional[int] = None):
#     - Inputs:
#       - seed: 32-bit integer. Values outside the range are reduced
#         modulo 2**32. None derives a seed from the current time, which
#         is NOT reproducible.
#     - Invariants: the same seed always yields the same sequence.
#
#   - next(self) -> float:
#     - Outputs: a float in [0, 1).
#     - Side Effects: advances the internal 32-bit state.
#
#   - pick / weighted_pick / shuffle / uniform / randint / make_id:
#     - Built only from next(); each consumes a fixed number of draws
#       (shuffle: len - 1 draws, make_id: one draw).


def clamp(value: float, lo: float, hi: float) -> float:
    """Limits value to the closed interval [lo, hi]."""
    return max(lo, min(hi, value))


def default_seed() -> int:
    """A time-derived seed for sessions that do not need to be replayed."""
    millis = time.time_ns() // 1_000_000
    return (millis ^ SEED_MIX) & UINT32_MASK


class RandomStream:
    """
    A 32-bit multiply-xorshift-add generator.

    No cryptographic property is claimed. The transform works on wrapping
    unsigned 32-bit integers:

        s = (48271 * s) mod 2**32
        s = s ^ (s >> 13)
        s = (s + 0x7fffffff) mod 2**32
        next() = s / 2**32
    """
    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = default_seed()
            logging.warning(
                f"No seed given, using time-derived seed {seed}. "
                "This run cannot be reproduced unless the seed is recorded."
            )
        elif isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
            msg = f"Seed must be an integer, got {type(seed).__name__}."
            logging.error(msg)
            raise ValueError(msg)

        self.seed = int(seed) & UINT32_MASK
        self._state = self.seed
        logging.debug(f"RandomStream created with seed {self.seed}.")

    def next(self) -> float:
        """Returns the next value of the stream, in [0, 1)."""
        s = (STREAM_MULTIPLIER * self._state) & UINT32_MASK
        s ^= s >> 13
        s = (s + STREAM_INCREMENT) & UINT32_MASK
        self._state = s
        return s / UINT32_RANGE

    def uniform(self, lo: float, hi: float) -> float:
        """A float in [lo, hi)."""
        return lo + self.next() * (hi - lo)

    def randint(self, lo: int, hi: int) -> int:
        """An integer in [lo, hi)."""
        return lo + math.floor(self.next() * (hi - lo))

    def pick(self, items: Sequence[T]) -> T:
        """Uniform choice from a non-empty sequence."""
        if len(items) == 0:
            msg = "Cannot pick from an empty collection."
            logging.error(msg)
            raise ValueError(msg)
        return items[math.floor(self.next() * len(items))]

    def weighted_pick(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """
        Cumulative-weight choice.

        One value is drawn and scaled by the weight total, then weights are
        subtracted in order until the remainder is exhausted. Non-positive
        totals, or rounding that never exhausts the remainder, fall back to
        the last candidate.
        """
        if len(items) == 0:
            msg = "Cannot make a weighted pick from an empty collection."
            logging.error(msg)
            raise ValueError(msg)
        if len(weights) != len(items):
            msg = (
                f"Weighted pick needs one weight per item: got {len(weights)} "
                f"weights for {len(items)} items."
            )
            logging.error(msg)
            raise ValueError(msg)

        total = sum(weights)
        remainder = self.next() * total
        if total <= 0:
            return items[-1]
        for item, weight in zip(items, weights):
            remainder -= weight
            if remainder <= 0:
                return item
        return items[-1]

    def shuffle(self, items: List[T]) -> List[T]:
        """Fisher-Yates shuffle, in place. Returns the same list."""
        for i in range(len(items) - 1, 0, -1):
            j = math.floor(self.next() * (i + 1))
            items[i], items[j] = items[j], items[i]
        return items

    def make_id(self, n: int) -> str:
        """An opaque id: the index in base 36, a dash, and a random base-36 suffix."""
        suffix = math.floor(self.next() * ID_SUFFIX_RANGE)
        return f"{np.base_repr(n, 36)}-{np.base_repr(suffix, 36)}".lower()
