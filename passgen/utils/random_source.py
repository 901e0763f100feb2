"""
Randomness sources for password generation.

All index draws are uniform over ``[0, bound)``. The system source
delegates to :mod:`secrets`; the seeded source exists so tests can replay
a sequence while still using rejection sampling instead of a modulo.
"""

import hashlib
import secrets


class RandomSource:
    """Interface for uniform random draws."""

    def next_below(self, bound: int) -> int:
        """Return a uniformly distributed integer in ``[0, bound)``."""
        raise NotImplementedError

    def random_bytes(self, count: int) -> bytes:
        """Return ``count`` random bytes."""
        raise NotImplementedError

    def choice(self, sequence):
        """Pick one element of a non-empty sequence uniformly."""
        if not sequence:
            raise IndexError("Cannot choose from an empty sequence")
        return sequence[self.next_below(len(sequence))]

    def shuffle(self, items: list) -> None:
        """Shuffle ``items`` in place (Fisher-Yates)."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_below(i + 1)
            items[i], items[j] = items[j], items[i]


class SystemRandomSource(RandomSource):
    """OS-backed CSPRNG.

    ``secrets.randbelow`` rejection-samples internally, so it carries no
    modulo bias. Failures of the OS source surface as ``OSError`` and are
    never replaced by a weaker generator.
    """

    def next_below(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"Upper bound must be positive, got {bound}")
        return secrets.randbelow(bound)

    def random_bytes(self, count: int) -> bytes:
        return secrets.token_bytes(count)


class SeededRandomSource(RandomSource):
    """Deterministic source built on SHA-256 in counter mode.

    Produces the same stream for the same seed. Not for production use.
    """

    WORD_BITS = 32

    def __init__(self, seed: bytes = b"passgen"):
        self.seed = seed
        self._counter = 0
        self._buffer = b""

    def random_bytes(self, count: int) -> bytes:
        while len(self._buffer) < count:
            block = hashlib.sha256(self.seed + self._counter.to_bytes(8, "big")).digest()
            self._counter += 1
            self._buffer += block
        data, self._buffer = self._buffer[:count], self._buffer[count:]
        return data

    def next_below(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"Upper bound must be positive, got {bound}")
        if bound > 1 << self.WORD_BITS:
            raise ValueError(f"Upper bound must not exceed 2**{self.WORD_BITS}")

        # Largest multiple of bound that fits in a word; draws above it are rejected
        span = 1 << self.WORD_BITS
        limit = span - (span % bound)
        while True:
            value = int.from_bytes(self.random_bytes(self.WORD_BITS // 8), "big")
            if value < limit:
                return value % bound


def get_random_source() -> RandomSource:
    """Return the production randomness source."""
    return SystemRandomSource()
