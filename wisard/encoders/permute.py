"""
Permute - seeded bit permutation.

Scatters the bits of every sample with the same fixed permutation, so that
bits which belong to one feature do not all land in the same address chunk.

Algorithm (modified Fisher-Yates over the whole buffer):

    for i from n-1 down to 0:
        j = rng.next_u64() mod (i + 1)
        swap(bits[i], bits[j])

with rng = xoshiro256++ built from the encoder seed. The permutation depends
only on (seed, n); it is computed once per length and cached.
"""

from __future__ import annotations
from typing import Dict, Optional, Union
import logging

import numpy as np

from ..constants import PERMUTATION_SEED_BYTES
from ..hashing import MASK64, Xoshiro256PlusPlus
from ..sample import Sample
from .base import SampleEncoder, require_bits


logger = logging.getLogger(__name__)

Seed = Union[int, bytes]


def random_seed(num_bytes: int = PERMUTATION_SEED_BYTES) -> bytes:
    """Draw a fresh seed from the process-wide random source."""
    return np.random.default_rng().bytes(num_bytes)


def _normalize_seed(seed: Seed) -> Seed:
    if isinstance(seed, (bytes, bytearray)):
        seed = bytes(seed)
        if len(seed) != Xoshiro256PlusPlus.SEED_BYTES:
            raise ValueError(
                f"Byte seeds must be {Xoshiro256PlusPlus.SEED_BYTES} bytes long, got {len(seed)}"
            )
        return seed
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise TypeError(f"Seed must be an int or bytes, got {type(seed).__name__}")
    seed = int(seed)
    if not 0 <= seed <= MASK64:
        raise ValueError(f"Integer seeds must fit in 64 bits, got {seed}")
    return seed


def permutation_indices(n: int, seed: Seed) -> np.ndarray:
    """
    Index array ``p`` such that ``bits[p]`` is the permuted buffer.

    Running the swaps on an index array and gathering once is equivalent to
    swapping the bits themselves.
    """
    rng = Xoshiro256PlusPlus.from_any(seed)
    indices = list(range(n))
    for i in range(n - 1, -1, -1):
        j = rng.next_u64() % (i + 1)
        indices[i], indices[j] = indices[j], indices[i]
    return np.array(indices, dtype=np.intp)


class Permute(SampleEncoder):
    """
    Permutes the sample bits according to a random seed.

    Args:
        seed: 64-bit integer or 32 bytes. None draws 32 random bytes once,
              here; later calls never touch global randomness.

    Example:
        >>> enc = Permute(seed=7)
        >>> s = Sample([0, 0, 0, 0, 1, 1, 1, 1], 1, 0)
        >>> enc.encode(s).bits.astype(int).tolist()
        [1, 0, 0, 1, 0, 0, 1, 1]
    """

    def __init__(self, seed: Optional[Seed] = None):
        self._seed = _normalize_seed(random_seed() if seed is None else seed)
        self._cache: Dict[int, np.ndarray] = {}

    @classmethod
    def with_seed(cls, seed: Seed) -> Permute:
        return cls(seed)

    @property
    def seed(self) -> Seed:
        return self._seed

    def clone(self) -> Permute:
        """Same seed, so the same permutation."""
        return Permute(self._seed)

    def indices(self, n: int) -> np.ndarray:
        perm = self._cache.get(n)
        if perm is None:
            perm = permutation_indices(n, self._seed)
            self._cache[n] = perm
            logger.debug("Computed %d-bit permutation", n)
        return perm

    def encode_inplace(self, sample: Sample) -> None:
        require_bits(sample, "Permute")
        sample.set_bits(sample.bits[self.indices(len(sample))])

    def __repr__(self) -> str:
        seed = self._seed.hex() if isinstance(self._seed, bytes) else self._seed
        return f"Permute(seed={seed!r})"


__all__ = ['Permute', 'permutation_indices', 'random_seed']
