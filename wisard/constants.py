# wisard/constants.py
"""
WiSARD Constants

This module defines the defaults used throughout the wisard package:

LAYER 1: Sample Constants (Bit Layer)
- NATIVE_INT_BITS: Widest value a thermometer encoder will requantize
- DEFAULT_BIT_ORDER: How a chunk of bits maps to an unsigned integer

LAYER 2: Filter Constants (Memory Layer)
- DEFAULT_COUNTER_WIDTH: Bits per saturating counter in a dense LUT
- DEFAULT_THRESHOLD: Membership requires count > threshold
- DEFAULT_FALSE_POSITIVE_RATE / DEFAULT_BLOOM_SEEDS: Counting Bloom setup
- DEFAULT_STORAGE_DTYPE: Word type backing bit-packed counters

LAYER 3: Model Constants (Discriminator Layer)
- BINARY_COUNTER_WIDTH: BinaryWisard stores one bit per address
- PERMUTATION_SEED_BYTES: Size of a generated permutation seed
"""
import numpy as np

from .bits import BitOrder


# =============================================================================
# LAYER 1: Sample Constants (Bit Layer)
# =============================================================================

NATIVE_INT_BITS = 64
DEFAULT_BIT_ORDER = BitOrder.LSB0


# =============================================================================
# LAYER 2: Filter Constants (Memory Layer)
# =============================================================================

DEFAULT_COUNTER_WIDTH = 8        # Dense LUT counters: uint8, saturate at 255
DEFAULT_PACKED_COUNTER_WIDTH = 1
DEFAULT_BLOOM_COUNTER_WIDTH = 4
DEFAULT_THRESHOLD = 0            # Seen at least once

MAX_COUNTER_WIDTH = 64

DEFAULT_FALSE_POSITIVE_RATE = 0.01
DEFAULT_BLOOM_SEEDS = (0x5EED0001, 0x5EED0002)

# Bloom filter hash count is clamped to this range
MIN_BLOOM_HASHES = 2
MAX_BLOOM_HASHES = 200

DEFAULT_STORAGE_DTYPE = np.uint64

# Builders for tables of 2^LARGE_ADDRESS_WIDTH cells or more log a warning
LARGE_ADDRESS_WIDTH = 24


# =============================================================================
# LAYER 3: Model Constants (Discriminator Layer)
# =============================================================================

BINARY_COUNTER_WIDTH = 1
BINARY_THRESHOLD = 0
PERMUTATION_SEED_BYTES = 32
