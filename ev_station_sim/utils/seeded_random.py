"""
Seeded Random Module
Deterministic Park-Miller (Lehmer) generator for reproducible simulations.
"""

from __future__ import annotations

import math

from ev_station_sim.errors import InvalidArgument

MODULUS = 2147483647    # 2^31 - 1, prime
MULTIPLIER = 16807      # 7^5, full-period primitive root


class SeededRandom:
    """
    Multiplicative linear congruential generator.

    The whole sequence is determined by the integer seed; the only state is a
    single register in ``[1, MODULUS - 1]``. Python integers keep
    ``state * MULTIPLIER`` exact, so draws match any other implementation of
    the same recurrence bit for bit.
    """

    def __init__(self, seed: int):
        if isinstance(seed, bool) or not isinstance(seed, int):
            raise InvalidArgument(f"Seed must be an integer, got {seed!r}")
        self.initial_seed = seed

        # Truncating reduction: the sign of the seed is kept
        state = abs(seed) % MODULUS
        if seed < 0:
            state = -state
        if state <= 0:
            state += MODULUS - 1
        if state <= 0:
            # Only reachable for seed == -(MODULUS - 1) (mod MODULUS)
            state = MODULUS - 1
        self._state = state

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Advance the register and return a float in [0, 1)."""
        self._state = (self._state * MULTIPLIER) % MODULUS
        return (self._state - 1) / (MODULUS - 1)

    def next_int(self, min_value: int, max_value: int) -> int:
        """Integer in [min_value, max_value)."""
        return math.floor(self.next() * (max_value - min_value)) + min_value

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.initial_seed}, state={self._state})"
