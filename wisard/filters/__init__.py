"""
Filters - counting membership memories addressed by chunk values.

- LUTFilter / LUTFilterBuilder: dense table, one counter per address
- PackedLUTFilter / PackedLUTFilterBuilder: bit-packed counters
- CountingBloomFilter / CountingBloomFilterBuilder: probabilistic counters

filter_from_dict() rebuilds any of them from its to_dict() state.
"""

from typing import Any, Dict

from .base import Filter, CountingFilter, FilterBuilder
from .lut import LUTFilter, LUTFilterBuilder, PackedLUTFilter, PackedLUTFilterBuilder
from .bloom import CountingBloomFilter, CountingBloomFilterBuilder


FILTER_KINDS = {
    cls.kind: cls for cls in (LUTFilter, PackedLUTFilter, CountingBloomFilter)
}


def filter_from_dict(d: Dict[str, Any]) -> Filter:
    """Deserialize a filter of any kind."""
    kind = d.get('kind')
    if kind not in FILTER_KINDS:
        raise ValueError(f"Unknown filter kind: {kind!r}")
    return FILTER_KINDS[kind].from_dict(d)


__all__ = [
    'Filter',
    'CountingFilter',
    'FilterBuilder',
    'LUTFilter',
    'LUTFilterBuilder',
    'PackedLUTFilter',
    'PackedLUTFilterBuilder',
    'CountingBloomFilter',
    'CountingBloomFilterBuilder',
    'FILTER_KINDS',
    'filter_from_dict',
]
