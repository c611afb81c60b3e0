"""
Lookup table filters - one saturating counter per address.

LUTFilter:        numpy array of 2^address_width counters. The array dtype
                  is the smallest unsigned type holding ``counter_width``
                  bits; the saturation point is 2^counter_width - 1, not the
                  dtype maximum.
PackedLUTFilter:  the same counters packed back to back in one bit vector,
                  ``counter_width`` bits each (1-bit counters for a classic
                  WiSARD RAM). Storage unit is configurable.

Both use the address itself as the index; no hashing.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from ..bits import PackedBitArray
from ..constants import (
    DEFAULT_COUNTER_WIDTH,
    DEFAULT_PACKED_COUNTER_WIDTH,
    DEFAULT_STORAGE_DTYPE,
    DEFAULT_THRESHOLD,
)
from .base import (
    CountingFilter,
    FilterBuilder,
    check_filter_config,
    counter_dtype,
    raw_index,
    warn_filter_config,
)


# =============================================================================
# DENSE LUT
# =============================================================================

class LUTFilter(CountingFilter):
    """
    Filter based on a dense, integer-aligned lookup table.

    Args:
        address_width: Bits per address; the table has 2^address_width cells
        threshold: An address is a member once its count exceeds this
        counter_width: Bits per counter (1..64)

    Example:
        >>> f = LUTFilter(address_width=2, threshold=0)
        >>> f.include(3)
        True
        >>> f.contains(3), f.contains(1), f.counter(3)
        (True, False, 1)
        >>> f.include(4)   # out of range
        False
    """

    kind = "lut"
    exact = True

    def __init__(self, address_width: int, threshold: int = DEFAULT_THRESHOLD,
                 counter_width: int = DEFAULT_COUNTER_WIDTH):
        check_filter_config(address_width, counter_width, threshold)
        self.address_width = int(address_width)
        self.counter_width = int(counter_width)
        self.threshold = int(threshold)
        self.max_count = (1 << self.counter_width) - 1
        self._table = np.zeros(1 << self.address_width, dtype=counter_dtype(self.counter_width))

    @property
    def table(self) -> np.ndarray:
        """Raw counter array."""
        return self._table

    def _index(self, address) -> Optional[int]:
        index = raw_index(address)
        if 0 <= index < len(self._table):
            return index
        return None

    def include(self, address) -> bool:
        index = self._index(address)
        if index is None:
            return False
        if self._table[index] < self.max_count:
            self._table[index] += 1
        return True

    def contains(self, address) -> bool:
        count = self.counter(address)
        return count is not None and count > self.threshold

    def counter(self, address) -> Optional[int]:
        index = self._index(address)
        if index is None:
            return None
        return int(self._table[index])

    def __len__(self) -> int:
        return len(self._table)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'address_width': self.address_width,
            'counter_width': self.counter_width,
            'threshold': self.threshold,
            'table': self._table.copy(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> LUTFilter:
        lut = cls(d['address_width'], d['threshold'], d['counter_width'])
        table = np.asarray(d['table'])
        if table.shape != lut._table.shape:
            raise ValueError(
                f"Counter table shape {table.shape} does not match "
                f"address_width={lut.address_width}"
            )
        lut._table = table.astype(lut._table.dtype, copy=True)
        return lut

    def __repr__(self) -> str:
        return (f"LUTFilter(address_width={self.address_width}, "
                f"threshold={self.threshold}, counter_width={self.counter_width})")


@dataclass(frozen=True)
class LUTFilterBuilder(FilterBuilder):
    """Builder for LUTFilter."""
    address_width: int
    threshold: int = DEFAULT_THRESHOLD
    counter_width: int = DEFAULT_COUNTER_WIDTH

    def __post_init__(self):
        check_filter_config(self.address_width, self.counter_width, self.threshold)
        warn_filter_config(self.address_width, self.counter_width, self.threshold)

    def build_filter(self) -> LUTFilter:
        return LUTFilter(self.address_width, self.threshold, self.counter_width)


# =============================================================================
# BIT-PACKED LUT
# =============================================================================

class PackedLUTFilter(CountingFilter):
    """
    Filter based on a dense, bit-packed lookup table.

    Counter ``a`` occupies bits [a * counter_width, (a + 1) * counter_width)
    of the storage vector. Incrementing it is a read-modify-write of that
    field only.

    Args:
        address_width: Bits per address
        counter_width: Bits per counter
        threshold: An address is a member once its count exceeds this
        storage_dtype: Unsigned word type of the underlying bit vector
    """

    kind = "packed_lut"
    exact = True

    def __init__(self, address_width: int,
                 counter_width: int = DEFAULT_PACKED_COUNTER_WIDTH,
                 threshold: int = DEFAULT_THRESHOLD,
                 storage_dtype=DEFAULT_STORAGE_DTYPE):
        check_filter_config(address_width, counter_width, threshold)
        self.address_width = int(address_width)
        self.counter_width = int(counter_width)
        self.threshold = int(threshold)
        self.max_count = (1 << self.counter_width) - 1
        self._size = 1 << self.address_width
        self._storage = PackedBitArray(self.counter_width * self._size, storage_dtype)

    @property
    def storage(self) -> PackedBitArray:
        return self._storage

    def _offset(self, address) -> Optional[int]:
        index = raw_index(address)
        if 0 <= index < self._size:
            return index * self.counter_width
        return None

    def include(self, address) -> bool:
        offset = self._offset(address)
        if offset is None:
            return False
        value = self._storage.read(offset, self.counter_width)
        if value < self.max_count:
            self._storage.write(offset, self.counter_width, value + 1)
        return True

    def contains(self, address) -> bool:
        count = self.counter(address)
        return count is not None and count > self.threshold

    def counter(self, address) -> Optional[int]:
        offset = self._offset(address)
        if offset is None:
            return None
        return self._storage.read(offset, self.counter_width)

    def __len__(self) -> int:
        return self._size

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'address_width': self.address_width,
            'counter_width': self.counter_width,
            'threshold': self.threshold,
            'storage_dtype': self._storage.dtype.name,
            'words': np.array(self._storage.words),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> PackedLUTFilter:
        lut = cls(d['address_width'], d['counter_width'], d['threshold'], d['storage_dtype'])
        lut._storage = PackedBitArray(lut._storage.num_bits, lut._storage.dtype, d['words'])
        return lut

    def __repr__(self) -> str:
        return (f"PackedLUTFilter(address_width={self.address_width}, "
                f"counter_width={self.counter_width}, threshold={self.threshold})")


@dataclass(frozen=True)
class PackedLUTFilterBuilder(FilterBuilder):
    """Builder for PackedLUTFilter."""
    address_width: int
    counter_width: int = DEFAULT_PACKED_COUNTER_WIDTH
    threshold: int = DEFAULT_THRESHOLD
    storage_dtype: Any = DEFAULT_STORAGE_DTYPE

    def __post_init__(self):
        check_filter_config(self.address_width, self.counter_width, self.threshold)
        warn_filter_config(self.address_width, self.counter_width, self.threshold)

    def build_filter(self) -> PackedLUTFilter:
        return PackedLUTFilter(self.address_width, self.counter_width,
                               self.threshold, self.storage_dtype)


__all__ = [
    'LUTFilter',
    'LUTFilterBuilder',
    'PackedLUTFilter',
    'PackedLUTFilterBuilder',
]
