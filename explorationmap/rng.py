"""Seedable Mersenne Twister used by the map generator."""

from __future__ import annotations

_N = 624
_M = 397
_MATRIX_A = 0x9908B0DF
_UPPER_MASK = 0x80000000
_LOWER_MASK = 0x7FFFFFFF
_WORD = 0xFFFFFFFF


class RandomWrapper:
    """A 32-bit MT19937 engine that must be seeded before use."""

    def __init__(self) -> None:
        self._state: list[int] | None = None
        self._index = _N

    def seed(self, seed: int) -> None:
        """Reset the engine to the sequence produced by ``seed``."""
        state = [seed & _WORD]
        for i in range(1, _N):
            prev = state[-1]
            state.append((1812433253 * (prev ^ (prev >> 30)) + i) & _WORD)
        self._state = state
        self._index = _N

    def _twist(self) -> None:
        state = self._state
        assert state is not None
        for i in range(_N):
            y = (state[i] & _UPPER_MASK) | (state[(i + 1) % _N] & _LOWER_MASK)
            value = state[(i + _M) % _N] ^ (y >> 1)
            if y & 1:
                value ^= _MATRIX_A
            state[i] = value
        self._index = 0

    def rand(self) -> int:
        """Return the next 32-bit unsigned value."""
        if self._state is None:
            raise RuntimeError("random engine has not been seeded")
        if self._index >= _N:
            self._twist()
        y = self._state[self._index]
        self._index += 1
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y & _WORD


map_gen_random = RandomWrapper()