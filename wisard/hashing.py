"""
Hashing and Pseudo-Random Generation - pure Python 64-bit arithmetic.

Everything here is platform independent: every intermediate is masked to
64 bits, so a given seed produces the same stream on any interpreter.

Contents:
- murmur_hash64a: keyed 64-bit hash used by the counting Bloom filter
- HashConfig: the pair of seeds that makes two independent hash functions
- SplitMix64: seed expander
- Xoshiro256PlusPlus: generator behind the Permute encoder

Seeding:
    Xoshiro256PlusPlus.seed_from_u64(s) fills the 256-bit state with four
    consecutive SplitMix64 outputs started at ``s``.
    Xoshiro256PlusPlus.from_seed(b) reads 32 bytes as four little-endian
    words; an all-zero state falls back to seed_from_u64(0).

    >>> rng = Xoshiro256PlusPlus.seed_from_u64(0)
    >>> hex(rng.next_u64())
    '0x53175d61490b23df'
"""

from __future__ import annotations
from typing import Tuple, Union
from dataclasses import dataclass
import struct

from .constants import DEFAULT_BLOOM_SEEDS


MASK64 = 0xFFFFFFFFFFFFFFFF


# =============================================================================
# MURMURHASH64A
# =============================================================================

def murmur_hash64a(data: bytes, seed: int = 0) -> int:
    """
    MurmurHash64A of ``data`` under a 64-bit ``seed``.

    Args:
        data: Bytes to hash
        seed: 64-bit seed value

    Returns:
        64-bit unsigned hash value
    """
    M = 0xc6a4a7935bd1e995
    R = 47

    length = len(data)
    h = ((seed & MASK64) ^ (length * M)) & MASK64

    # Process 8-byte chunks
    nblocks = length // 8
    for i in range(nblocks):
        k = struct.unpack_from('<Q', data, i * 8)[0]
        k = (k * M) & MASK64
        k ^= (k >> R)
        k = (k * M) & MASK64
        h ^= k
        h = (h * M) & MASK64

    # Remaining bytes, highest first
    tail = data[nblocks * 8:]
    if tail:
        for i in range(len(tail) - 1, -1, -1):
            h ^= tail[i] << (8 * i)
        h = (h * M) & MASK64

    # Finalize
    h ^= (h >> R)
    h = (h * M) & MASK64
    h ^= (h >> R)

    return h


@dataclass(frozen=True)
class HashConfig:
    """
    Seeds of the two hash functions used by a counting Bloom filter.

    Two filters built from the same HashConfig hash identically, which is
    what lets a builder stamp out interchangeable filters.

    Attributes:
        seed_one: Seed of the first MurmurHash64A function
        seed_two: Seed of the second; must differ from seed_one
    """
    seed_one: int = DEFAULT_BLOOM_SEEDS[0]
    seed_two: int = DEFAULT_BLOOM_SEEDS[1]

    def __post_init__(self):
        for seed in (self.seed_one, self.seed_two):
            if not 0 <= seed <= MASK64:
                raise ValueError(f"Hash seeds must fit in 64 bits, got {seed}")
        if self.seed_one == self.seed_two:
            raise ValueError("The two Bloom hash functions need distinct seeds")

    def hash_pair(self, data: bytes) -> Tuple[int, int]:
        """Hash ``data`` with both functions."""
        return murmur_hash64a(data, self.seed_one), murmur_hash64a(data, self.seed_two)


# =============================================================================
# PSEUDO-RANDOM GENERATORS
# =============================================================================

def _rotl(x: int, k: int) -> int:
    return ((x << k) | (x >> (64 - k))) & MASK64


class SplitMix64:
    """SplitMix64 generator (used to expand a 64-bit seed)."""

    GOLDEN_GAMMA = 0x9e3779b97f4a7c15

    def __init__(self, seed: int):
        self._x = seed & MASK64

    def next_u64(self) -> int:
        self._x = (self._x + self.GOLDEN_GAMMA) & MASK64
        z = self._x
        z = ((z ^ (z >> 30)) * 0xbf58476d1ce4e5b9) & MASK64
        z = ((z ^ (z >> 27)) * 0x94d049bb133111eb) & MASK64
        return z ^ (z >> 31)


class Xoshiro256PlusPlus:
    """
    xoshiro256++ 1.0 generator.

    Same stream as Blackman and Vigna's xoshiro256++ for the same 256-bit
    state.
    """

    SEED_BYTES = 32

    def __init__(self, state: Tuple[int, int, int, int]):
        if len(state) != 4:
            raise ValueError("xoshiro256++ state is four 64-bit words")
        self._s = [w & MASK64 for w in state]
        if not any(self._s):
            raise ValueError("xoshiro256++ state must not be all zero")

    @classmethod
    def seed_from_u64(cls, seed: int) -> Xoshiro256PlusPlus:
        """Expand a 64-bit seed with SplitMix64."""
        if not 0 <= seed <= MASK64:
            raise ValueError(f"Integer seeds must fit in 64 bits, got {seed}")
        sm = SplitMix64(seed)
        return cls(tuple(sm.next_u64() for _ in range(4)))

    @classmethod
    def from_seed(cls, seed: bytes) -> Xoshiro256PlusPlus:
        """Use 32 raw bytes (four little-endian words) as the state."""
        if len(seed) != cls.SEED_BYTES:
            raise ValueError(
                f"Byte seeds must be {cls.SEED_BYTES} bytes long, got {len(seed)}"
            )
        state = struct.unpack('<4Q', bytes(seed))
        if not any(state):
            return cls.seed_from_u64(0)
        return cls(state)

    @classmethod
    def from_any(cls, seed: Union[int, bytes]) -> Xoshiro256PlusPlus:
        if isinstance(seed, (bytes, bytearray)):
            return cls.from_seed(bytes(seed))
        return cls.seed_from_u64(int(seed))

    def next_u64(self) -> int:
        s = self._s
        result = (_rotl((s[0] + s[3]) & MASK64, 23) + s[0]) & MASK64
        t = (s[1] << 17) & MASK64

        s[2] ^= s[0]
        s[3] ^= s[1]
        s[1] ^= s[2]
        s[0] ^= s[3]
        s[2] ^= t
        s[3] = _rotl(s[3], 45)

        return result


__all__ = [
    'HashConfig',
    'MASK64',
    'SplitMix64',
    'Xoshiro256PlusPlus',
    'murmur_hash64a',
]
