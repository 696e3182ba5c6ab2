"""Bit-exact port of the host's 48-bit linear congruential generator.

Placement coordinates are defined entirely by this generator's output sequence,
so every operation here reproduces the host's fixed-width integer behaviour:
64-bit seeds are reinterpreted as unsigned before scrambling, draws are truncated
to signed 32-bit values, and the bounded draw keeps the host's rejection loop.
"""

from __future__ import annotations

MULTIPLIER = 0x5DEECE66D
ADDEND = 0xB
MASK_48 = (1 << 48) - 1

_DOUBLE_UNIT = float(1 << 53)


def to_int32(value: int) -> int:
    """Wrap an arbitrary integer to a signed 32-bit value."""
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def to_int64(value: int) -> int:
    """Wrap an arbitrary integer to a signed 64-bit value."""
    value &= 0xFFFFFFFFFFFFFFFF
    return value - (1 << 64) if value & 0x8000000000000000 else value


class JavaRandom:
    """Seeded 48-bit LCG with the host's integer and float draw operations."""

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = 0
        self.seed(seed)

    @property
    def state(self) -> int:
        return self._state

    def seed(self, initial: int) -> None:
        self._state = (initial ^ MULTIPLIER) & MASK_48

    def next_bits(self, bits: int) -> int:
        """Advance the register and return its top ``bits`` bits as a signed 32-bit int."""
        self._state = (self._state * MULTIPLIER + ADDEND) & MASK_48
        return to_int32(self._state >> (48 - bits))

    def next_int(self, bound: int) -> int:
        """Return an int in ``[0, bound)``."""
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")

        if bound & -bound == bound:
            return (bound * self.next_bits(31)) >> 31

        while True:
            bits = self.next_bits(31)
            value = bits % bound
            # Rejects draws from the truncated top bucket; overflow shows up as a negative int32.
            if to_int32(bits - value + (bound - 1)) >= 0:
                return value

    def next_double(self) -> float:
        """Return a float in ``[0.0, 1.0)`` built from a 26-bit and a 27-bit draw."""
        return ((self.next_bits(26) << 27) + self.next_bits(27)) / _DOUBLE_UNIT
