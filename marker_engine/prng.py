"""PCG32 pseudorandom number generator for bulk marker operations.

"Randomize" scatters every marker across the map so an operator can start
a layout from scratch. Drawing from a seeded PCG-XSH-RR stream instead of
the process-wide ``random`` module means a scatter can be replayed: tests
pin exact layouts by seed, and a host that records the seed alongside a
randomize can re-run it and get the same positions back.
``PCG32()`` without a seed picks one at random and keeps it on ``.seed``.
Reference: https://www.pcg-random.org/
"""

from __future__ import annotations

import random


class PCG32:
    _MASK32 = 0xFFFFFFFF
    _MASK64 = 0xFFFFFFFFFFFFFFFF
    _MUL = 6364136223846793005

    def __init__(self, seed: int | None = None, seq: int = 0) -> None:
        if seed is None:
            seed = random.randint(0, 2**32 - 1)
        self.seed = seed
        self._state: int = 0
        self._inc: int = ((seq << 1) | 1) & self._MASK64
        self._advance()
        self._state = (self._state + seed) & self._MASK64
        self._advance()

    def _advance(self) -> None:
        self._state = (self._state * self._MUL + self._inc) & self._MASK64

    def next_u32(self) -> int:
        old = self._state
        self._advance()
        xorshifted = (((old >> 18) ^ old) >> 27) & self._MASK32
        rot = (old >> 59) & 31
        return (
            (xorshifted >> rot) | (xorshifted << ((-rot) & 31))
        ) & self._MASK32

    def next_float(self) -> float:
        """Uniform float in [0, 1)."""
        return self.next_u32() / (self._MASK32 + 1)

    def next_int(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi] inclusive."""
        return lo + self.next_u32() % (hi - lo + 1)

    def next_percent(self) -> int:
        """Whole-number percentage in [0, 99]."""
        return int(self.next_float() * 100)
