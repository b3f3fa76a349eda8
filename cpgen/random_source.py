"""
Seedable random source used by the generator.

JavaRandom reproduces the 48-bit linear congruential generator behind
java.util.Random, so a given seed yields exactly the same draw sequence
(and therefore the same passwords) as the original Java tool.

This is NOT a cryptographically secure generator.
"""

from __future__ import annotations

import threading
from typing import Protocol

MULTIPLIER = 0x5DEECE66D
ADDEND = 0xB
MASK = (1 << 48) - 1

# Largest value of a Java int plus one; nextInt rejects samples that would
# overflow past it.
INT_LIMIT = 1 << 31


class RandomSource(Protocol):
    """
    The only capability the generator needs: a uniform integer in [0, bound).
    """

    def next_int(self, bound: int) -> int:
        ...


class JavaRandom:
    """
    Thread-safe port of java.util.Random's core recurrence.

    The 48-bit state is guarded by a lock so several threads can draw from
    one instance without corrupting it.
    """

    def __init__(self, seed: int | None = None) -> None:
        """
        Without a seed, each instance is seeded from fresh quantum entropy.
        """
        self._lock = threading.Lock()
        self._state = 0
        if seed is None:
            from .entropy import quantum_seed

            seed = quantum_seed()
        self.set_seed(seed)

    def set_seed(self, seed: int) -> None:
        """
        Reset the generator. Any Python int is accepted; only its low
        48 bits matter, as with a Java long.
        """
        with self._lock:
            self._state = (seed ^ MULTIPLIER) & MASK

    def next_bits(self, bits: int) -> int:
        """
        Advance the state once and return its top `bits` bits (1..31).
        """
        if not 1 <= bits <= 31:
            raise ValueError(f"bits must be in [1, 31], got {bits}")
        with self._lock:
            self._state = (self._state * MULTIPLIER + ADDEND) & MASK
            return self._state >> (48 - bits)

    def next_int(self, bound: int) -> int:
        """
        Uniform integer in [0, bound), identical to Random.nextInt(bound).
        """
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")

        r = self.next_bits(31)
        m = bound - 1

        # Power of two: take the high bits directly.
        if bound & m == 0:
            return (bound * r) >> 31

        u = r
        r = u % bound
        # Reject the partial bucket at the top of the range.
        while u - r + m >= INT_LIMIT:
            u = self.next_bits(31)
            r = u % bound
        return r
