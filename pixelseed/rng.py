import numpy as np

from pixelseed.config import SEED_CHUNKS


class DeterministicGenerator:
    """
    Seeded PCG64 stream. The whole output sequence is a function of the
    32-byte seed and the order of draws, nothing else.
    """

    def __init__(self, seed: bytes):
        if len(seed) != SEED_CHUNKS:
            raise ValueError(f"Seed must be {SEED_CHUNKS} bytes, got {len(seed)}")
        entropy = int.from_bytes(seed, "little")
        self._rng = np.random.Generator(np.random.PCG64(np.random.SeedSequence(entropy)))

    def gen_range(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi)."""
        if hi <= lo:
            raise ValueError(f"Empty range [{lo}, {hi})")
        return int(self._rng.integers(lo, hi))

    def gen_bool(self, p: float) -> bool:
        """True with probability p."""
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"Probability must be within [0, 1], got {p}")
        return bool(self._rng.random() < p)

    def read(self, n: int) -> bytes:
        """Byte-stream draw, usable as a pycryptodome randfunc."""
        return self._rng.bytes(n)


def new_generator(seed: bytes) -> DeterministicGenerator:
    return DeterministicGenerator(seed)
