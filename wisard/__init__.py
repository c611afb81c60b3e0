"""
wisard - Weightless Neural Network Classification

WiSARD nets classify by memory, not by weights: feature bits are cut into
addresses, each address is recorded in a small counting memory, and a
sample belongs to the label whose memories recognise most of its addresses.

Layers:
1. Sample: labeled bit vector split into fixed-width values
2. Encoders: Permute, LogThermometer, LinearThermometer, Slice
3. Filters: LUTFilter, PackedLUTFilter, CountingBloomFilter (+ builders)
4. Models: Discriminator, WisardBase, BinaryWisard
"""

__version__ = "0.1.0"

from .bits import BitOrder, PackedBitArray
from .sample import Sample
from .dataset import Dataset
from .hashing import HashConfig, murmur_hash64a
from .encoders import (
    SampleEncoder,
    Compose,
    Permute,
    LogThermometer,
    LinearThermometer,
    Slice,
)
from .filters import (
    Filter,
    CountingFilter,
    FilterBuilder,
    LUTFilter,
    LUTFilterBuilder,
    PackedLUTFilter,
    PackedLUTFilterBuilder,
    CountingBloomFilter,
    CountingBloomFilterBuilder,
    filter_from_dict,
)
from .models import Discriminator, WisardBase, BinaryWisard

__all__ = [
    "BitOrder",
    "PackedBitArray",
    "Sample",
    "Dataset",
    "HashConfig",
    "murmur_hash64a",
    "SampleEncoder",
    "Compose",
    "Permute",
    "LogThermometer",
    "LinearThermometer",
    "Slice",
    "Filter",
    "CountingFilter",
    "FilterBuilder",
    "LUTFilter",
    "LUTFilterBuilder",
    "PackedLUTFilter",
    "PackedLUTFilterBuilder",
    "CountingBloomFilter",
    "CountingBloomFilterBuilder",
    "filter_from_dict",
    "Discriminator",
    "WisardBase",
    "BinaryWisard",
]
