"""
Encoders - bit-level transforms applied to samples before addressing.

- Permute: seeded permutation of all bits
- LogThermometer / LinearThermometer: unary requantization of each value
- Slice: keep a bit range of each value
- Compose: chain encoders
"""

from .base import SampleEncoder, Compose
from .permute import Permute, permutation_indices, random_seed
from .thermometer import LogThermometer, LinearThermometer, thermometer_bits
from .slice import Slice

__all__ = [
    'SampleEncoder',
    'Compose',
    'Permute',
    'permutation_indices',
    'random_seed',
    'LogThermometer',
    'LinearThermometer',
    'thermometer_bits',
    'Slice',
]
