"""A 64-bit linear congruential random number generator."""

from __future__ import annotations

_MASK_32 = 0xFFFFFFFF
_MASK_64 = 0xFFFFFFFFFFFFFFFF
_FACTOR = (0x5851F42D << 32) | 0x4C957F2D
_INCREMENT = 1


class Rng:
    """Random source seeded from two 32-bit halves.

    Each draw multiplies the 64-bit state, adds one and returns the
    upper 32 bits.
    """

    def __init__(self, seed_low: int, seed_high: int) -> None:
        self._state = ((seed_high & _MASK_32) << 32) | (seed_low & _MASK_32)
        self._advances_enabled = True

    @property
    def state(self) -> int:
        """The current 64-bit state."""
        return self._state

    @property
    def advances_enabled(self) -> bool:
        return self._advances_enabled

    def next(self) -> int:
        """Step the generator and return the upper 32 bits of the state."""
        self._advances_enabled = False
        self._state = (self._state * _FACTOR + _INCREMENT) & _MASK_64
        self._advances_enabled = True
        return self._state >> 32

    def advance(self) -> None:
        """Step the generator unless advances are disabled."""
        if self._advances_enabled:
            self.next()

    def increase(self, low: int, high: int) -> None:
        """Add a 64-bit value, given as two halves, to the state."""
        self._advances_enabled = False
        addend = ((high & _MASK_32) << 32) | (low & _MASK_32)
        self._state = (self._state + addend) & _MASK_64
        self._advances_enabled = True

    def disable_advances(self) -> None:
        self._advances_enabled = False

    def enable_advances(self) -> None:
        self._advances_enabled = True