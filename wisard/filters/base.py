"""
Filter capabilities - membership memories addressed by integers.

Filter:          include(address) -> bool, contains(address) -> bool
CountingFilter:  + counter(address) -> Optional[int]
FilterBuilder:   build_filter() -> fresh, independent Filter

Contract:
- include records one occurrence; returns False when the address is outside
  the backend's addressable space (nothing is recorded)
- contains is True once an address has been included more than
  ``threshold`` times
- counter is the exact (LUT) or estimated (Bloom) count, None when out of
  range
- counters saturate at 2^counter_width - 1
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, Optional
import logging

import numpy as np

from ..constants import LARGE_ADDRESS_WIDTH, MAX_COUNTER_WIDTH


logger = logging.getLogger(__name__)


class Filter(ABC):
    """Basic set membership filter."""

    kind: str = ""
    exact: bool = True

    @abstractmethod
    def include(self, address: Hashable) -> bool:
        """Record one occurrence of ``address``."""

    @abstractmethod
    def contains(self, address: Hashable) -> bool:
        """Membership test against the filter threshold."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration and raw counter storage."""


class CountingFilter(Filter):
    """Set membership filter backed by counters."""

    @abstractmethod
    def counter(self, address: Hashable) -> Optional[int]:
        """Number of times ``address`` was included (None if out of range)."""


class FilterBuilder(ABC):
    """Factory producing identically configured, independent filters."""

    address_width: int

    @property
    def exact(self) -> bool:
        return True

    @abstractmethod
    def build_filter(self) -> Filter:
        """Build a new filter."""


# =============================================================================
# SHARED VALIDATION
# =============================================================================

def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer))


def raw_index(address) -> int:
    """
    Use ``address`` itself as a table index.

    Only integers are accepted; anything else is a caller bug.
    """
    if not _is_int(address):
        raise TypeError(
            f"Lookup table filters only accept integer addresses, "
            f"got {type(address).__name__}"
        )
    return int(address)


def check_filter_config(address_width: int, counter_width: int, threshold: int) -> None:
    if not _is_int(address_width) or address_width < 0:
        raise ValueError(f"address_width must be a non-negative integer, got {address_width}")
    if not _is_int(counter_width) or not 1 <= counter_width <= MAX_COUNTER_WIDTH:
        raise ValueError(
            f"counter_width must be in [1, {MAX_COUNTER_WIDTH}], got {counter_width}"
        )
    if not _is_int(threshold) or threshold < 0:
        raise ValueError(f"threshold must be a non-negative integer, got {threshold}")


def warn_filter_config(address_width: int, counter_width: int, threshold: int) -> None:
    """Log configurations that are legal but probably unintended."""
    if address_width >= LARGE_ADDRESS_WIDTH:
        logger.warning("address_width=%d allocates 2^%d cells per filter",
                       address_width, address_width)
    if threshold >= (1 << counter_width) - 1:
        logger.warning("threshold=%d is unreachable with %d-bit counters",
                       threshold, counter_width)


def counter_dtype(counter_width: int) -> np.dtype:
    """Smallest unsigned numpy dtype holding ``counter_width`` bits."""
    for dtype in (np.uint8, np.uint16, np.uint32, np.uint64):
        if np.dtype(dtype).itemsize * 8 >= counter_width:
            return np.dtype(dtype)
    raise ValueError(f"No unsigned dtype holds {counter_width} bits")


__all__ = [
    'Filter',
    'CountingFilter',
    'FilterBuilder',
    'check_filter_config',
    'counter_dtype',
    'raw_index',
    'warn_filter_config',
]
