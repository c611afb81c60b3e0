"""
Counting Bloom filter - probabilistic counters for large address spaces.

Sizing (n = 2^address_width expected items, p = false positive rate):

    num_entries = round(n * ln(1/p) / ln(2)^2)
    num_hashes  = clamp(round(num_entries / n * ln 2), 2, 200)

Each key is hashed by two independently seeded MurmurHash64A functions
(h1, h2); its cells are (h1 + i*h2) mod 2^64 mod num_entries for
i = 0..num_hashes-1, duplicates collapsed. include increments every cell
(saturating), counter is the minimum over the cells.

Collisions can only inflate a count, so false negatives are impossible.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional
import math

import numpy as np

from ..bits import PackedBitArray
from ..constants import (
    DEFAULT_BLOOM_COUNTER_WIDTH,
    DEFAULT_FALSE_POSITIVE_RATE,
    DEFAULT_STORAGE_DTYPE,
    DEFAULT_THRESHOLD,
    MAX_BLOOM_HASHES,
    MIN_BLOOM_HASHES,
)
from ..hashing import MASK64, HashConfig
from .base import CountingFilter, FilterBuilder, check_filter_config, warn_filter_config


LN2_SQUARED = math.log(2) ** 2


def _round(x: float) -> int:
    """Round half away from zero."""
    return int(math.floor(x + 0.5))


def needed_entries(false_positive_rate: float, num_items: int) -> int:
    """Counter cells needed for ``num_items`` at ``false_positive_rate``."""
    return max(1, _round(num_items * math.log(1.0 / false_positive_rate) / LN2_SQUARED))


def optimal_num_hashes(num_entries: int, num_items: int) -> int:
    k = _round(num_entries / num_items * math.log(2))
    return min(max(k, MIN_BLOOM_HASHES), MAX_BLOOM_HASHES)


def key_bytes(key: Hashable) -> bytes:
    """Canonical byte form of a Bloom filter key."""
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    if isinstance(key, str):
        return key.encode('utf-8')
    if isinstance(key, (int, np.integer)):
        key = int(key)
        length = max(8, (key.bit_length() + 8) // 8)
        return key.to_bytes(length, 'little', signed=True)
    raise TypeError(f"Unsupported Bloom filter key type: {type(key).__name__}")


def _check_rate(false_positive_rate: float) -> None:
    if not 0.0 < false_positive_rate < 1.0:
        raise ValueError(
            f"false_positive_rate must be in (0, 1), got {false_positive_rate}"
        )


class CountingBloomFilter(CountingFilter):
    """
    Filter based on a counting Bloom filter.

    Args:
        address_width: Expected items are 2^address_width (sizes the filter)
        counter_width: Bits per counter cell
        threshold: An item is a member once its estimated count exceeds this
        false_positive_rate: Target false positive rate
        hash_config: Seeds of the two hash functions
        storage_dtype: Unsigned word type of the packed counters

    Example:
        >>> f = CountingBloomFilter(address_width=1, counter_width=2, threshold=1)
        >>> f.include(0); f.include(0)
        True
        True
        >>> f.counter(0), f.contains(0)
        (2, True)
    """

    kind = "bloom"
    exact = False

    def __init__(self, address_width: int,
                 counter_width: int = DEFAULT_BLOOM_COUNTER_WIDTH,
                 threshold: int = DEFAULT_THRESHOLD,
                 false_positive_rate: float = DEFAULT_FALSE_POSITIVE_RATE,
                 hash_config: Optional[HashConfig] = None,
                 storage_dtype=DEFAULT_STORAGE_DTYPE):
        check_filter_config(address_width, counter_width, threshold)
        _check_rate(false_positive_rate)

        self.address_width = int(address_width)
        self.counter_width = int(counter_width)
        self.threshold = int(threshold)
        self.false_positive_rate = float(false_positive_rate)
        self.hash_config = hash_config if hash_config is not None else HashConfig()
        self.max_count = (1 << self.counter_width) - 1

        expected_items = 1 << self.address_width
        self.num_entries = needed_entries(self.false_positive_rate, expected_items)
        self.num_hashes = optimal_num_hashes(self.num_entries, expected_items)
        self._counters = PackedBitArray(self.num_entries * self.counter_width, storage_dtype)

    @property
    def storage(self) -> PackedBitArray:
        return self._counters

    def positions(self, key: Hashable) -> List[int]:
        """Distinct counter cells for ``key``."""
        h1, h2 = self.hash_config.hash_pair(key_bytes(key))
        cells = {((h1 + i * h2) & MASK64) % self.num_entries for i in range(self.num_hashes)}
        return sorted(cells)

    def include(self, key: Hashable) -> bool:
        for cell in self.positions(key):
            offset = cell * self.counter_width
            value = self._counters.read(offset, self.counter_width)
            if value < self.max_count:
                self._counters.write(offset, self.counter_width, value + 1)
        return True

    def counter(self, key: Hashable) -> Optional[int]:
        return min(
            self._counters.read(cell * self.counter_width, self.counter_width)
            for cell in self.positions(key)
        )

    def contains(self, key: Hashable) -> bool:
        return self.counter(key) > self.threshold

    def __len__(self) -> int:
        return self.num_entries

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'address_width': self.address_width,
            'counter_width': self.counter_width,
            'threshold': self.threshold,
            'false_positive_rate': self.false_positive_rate,
            'seeds': (self.hash_config.seed_one, self.hash_config.seed_two),
            'storage_dtype': self._counters.dtype.name,
            'words': np.array(self._counters.words),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> CountingBloomFilter:
        seed_one, seed_two = d['seeds']
        bloom = cls(d['address_width'], d['counter_width'], d['threshold'],
                    d['false_positive_rate'], HashConfig(seed_one, seed_two),
                    d['storage_dtype'])
        bloom._counters = PackedBitArray(bloom._counters.num_bits,
                                         bloom._counters.dtype, d['words'])
        return bloom

    def __repr__(self) -> str:
        return (f"CountingBloomFilter(entries={self.num_entries}, hashes={self.num_hashes}, "
                f"counter_width={self.counter_width}, threshold={self.threshold})")


@dataclass(frozen=True)
class CountingBloomFilterBuilder(FilterBuilder):
    """Builder for CountingBloomFilter; every filter shares the hash seeds."""
    address_width: int
    counter_width: int = DEFAULT_BLOOM_COUNTER_WIDTH
    threshold: int = DEFAULT_THRESHOLD
    false_positive_rate: float = DEFAULT_FALSE_POSITIVE_RATE
    hash_config: HashConfig = field(default_factory=HashConfig)
    storage_dtype: Any = DEFAULT_STORAGE_DTYPE

    def __post_init__(self):
        check_filter_config(self.address_width, self.counter_width, self.threshold)
        _check_rate(self.false_positive_rate)
        warn_filter_config(self.address_width, self.counter_width, self.threshold)

    @property
    def exact(self) -> bool:
        return False

    def build_filter(self) -> CountingBloomFilter:
        return CountingBloomFilter(self.address_width, self.counter_width, self.threshold,
                                   self.false_positive_rate, self.hash_config,
                                   self.storage_dtype)


__all__ = [
    'CountingBloomFilter',
    'CountingBloomFilterBuilder',
    'key_bytes',
    'needed_entries',
    'optimal_num_hashes',
]
