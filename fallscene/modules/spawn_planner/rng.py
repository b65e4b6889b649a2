"""Seeded xorshift32 stream.

Every step is masked to 32 unsigned bits; Python ints never overflow, so the
masks are what keep the sequence identical to a native uint32 implementation.
A zero seed stays at zero forever and yields 0.0 on every draw.
"""

from typing import Iterator

_MASK32 = 0xFFFFFFFF


class Xorshift32:
    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = int(seed) & _MASK32

    @property
    def state(self) -> int:
        return self._state

    def next_u32(self) -> int:
        s = self._state
        s ^= (s << 13) & _MASK32
        s ^= s >> 17
        s ^= (s << 5) & _MASK32
        self._state = s
        return s

    def next(self) -> float:
        """Next value in [0, 1]."""
        return self.next_u32() / _MASK32

    __call__ = next

    def __iter__(self) -> Iterator[float]:
        while True:
            yield self.next()
