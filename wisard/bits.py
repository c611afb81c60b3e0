"""
Bit-level primitives shared by samples, encoders, filters and discriminators.

Design principles:
- Bit buffers are 1-D numpy ``bool`` arrays, one element per bit
- A chunk of bits becomes an unsigned integer according to a BitOrder
- Counters narrower than a machine word live in a PackedBitArray

Bit Order:
    LSB0: bit i of an n-bit chunk has weight 2^i        (default)
    MSB0: bit i of an n-bit chunk has weight 2^(n-1-i)

    bits = [1, 0, 1, 1]
    chunk_to_int(bits, BitOrder.LSB0)  # 0b1101 = 13
    chunk_to_int(bits, BitOrder.MSB0)  # 0b1011 = 11

Packed Storage:
    Fields of arbitrary width (1..64 bits) are laid out back to back in a
    buffer of unsigned words. Field k of width w occupies bits
    [k*w, (k+1)*w) of the buffer and may straddle two or more words.
    Within a word, bit 0 is the least significant bit.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence
from enum import Enum

import numpy as np


# Widest chunk converted with vectorized uint64 arithmetic
_VECTOR_WIDTH_LIMIT = 64


class BitOrder(Enum):
    """Mapping between bit positions inside a chunk and integer weights."""
    LSB0 = "lsb0"
    MSB0 = "msb0"


# =============================================================================
# SCALAR HELPERS
# =============================================================================

def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return n > 0 and (n & (n - 1)) == 0


def ceil_log2(x: int) -> int:
    """
    Smallest k with 2^k >= x, for x >= 1.

    ceil_log2(1) == 0, ceil_log2(2) == 1, ceil_log2(3) == 2, ceil_log2(4) == 2
    """
    if x < 1:
        raise ValueError(f"ceil_log2 is undefined for {x}")
    return (x - 1).bit_length()


def as_bit_array(bits: Iterable) -> np.ndarray:
    """Coerce any sequence of truthy values to a 1-D bool array."""
    arr = bits if isinstance(bits, np.ndarray) else np.asarray(list(bits))
    if arr.dtype != np.bool_:
        arr = arr.astype(np.bool_)
    if arr.ndim != 1:
        raise ValueError(f"Bit buffers must be one-dimensional, got shape {arr.shape}")
    return arr


# =============================================================================
# CHUNK <-> INTEGER CONVERSION
# =============================================================================

def _weights(width: int, order: BitOrder) -> np.ndarray:
    shifts = np.arange(width, dtype=np.uint64)
    if order is BitOrder.MSB0:
        shifts = shifts[::-1]
    return np.left_shift(np.uint64(1), shifts)


def chunk_to_int(chunk: Sequence, order: BitOrder = BitOrder.LSB0) -> int:
    """Interpret one chunk of bits as an unsigned integer."""
    chunk = np.asarray(chunk, dtype=np.bool_)
    n = len(chunk)
    value = 0
    for i in np.flatnonzero(chunk):
        pos = int(i) if order is BitOrder.LSB0 else n - 1 - int(i)
        value |= 1 << pos
    return value


def int_to_chunk(value: int, width: int, order: BitOrder = BitOrder.LSB0) -> np.ndarray:
    """
    Emit the low ``width`` bits of ``value`` as a bool array.

    Bits above ``width`` are dropped.
    """
    value = int(value)
    if value < 0:
        raise ValueError(f"Only unsigned values can be packed, got {value}")
    out = np.fromiter(((value >> i) & 1 for i in range(width)), dtype=np.bool_, count=width)
    if order is BitOrder.MSB0:
        out = out[::-1].copy()
    return out


def chunks_to_ints(bits: np.ndarray, width: int,
                   order: BitOrder = BitOrder.LSB0) -> List[int]:
    """
    Convert a buffer made of whole ``width``-bit chunks to integers.

    Args:
        bits: Bool array whose length is a multiple of ``width``
        width: Bits per chunk
        order: Bit order used for every chunk

    Returns:
        One Python int per chunk, in buffer order
    """
    if width < 1:
        raise ValueError(f"Chunk width must be positive, got {width}")
    if len(bits) % width != 0:
        raise ValueError(f"{len(bits)} bits do not split into {width}-bit chunks")
    if len(bits) == 0:
        return []

    if width <= _VECTOR_WIDTH_LIMIT:
        table = np.asarray(bits, dtype=np.uint64).reshape(-1, width)
        values = table @ _weights(width, order)
        return [int(v) for v in values]

    return [chunk_to_int(bits[i:i + width], order) for i in range(0, len(bits), width)]


def ints_to_chunks(values: Iterable[int], width: int,
                   order: BitOrder = BitOrder.LSB0) -> np.ndarray:
    """Inverse of chunks_to_ints: concatenate ``width``-bit codes of ``values``."""
    if width < 1:
        raise ValueError(f"Chunk width must be positive, got {width}")
    values = [int(v) for v in values]
    if not values:
        return np.zeros(0, dtype=np.bool_)
    if any(v < 0 for v in values):
        raise ValueError("Only unsigned values can be packed")

    if width <= _VECTOR_WIDTH_LIMIT:
        mask = (1 << width) - 1
        arr = np.array([v & mask for v in values], dtype=np.uint64)
        shifts = np.arange(width, dtype=np.uint64)
        table = ((arr[:, None] >> shifts) & np.uint64(1)).astype(np.bool_)
        if order is BitOrder.MSB0:
            table = table[:, ::-1]
        return table.reshape(-1)

    return np.concatenate([int_to_chunk(v, width, order) for v in values])


def chunk_addresses(bits: np.ndarray, width: int,
                    order: BitOrder = BitOrder.LSB0) -> List[int]:
    """
    Split ``bits`` into consecutive ``width``-bit chunks and convert each.

    Unlike chunks_to_ints, the last chunk may be shorter than ``width``;
    it is converted on its own length.
    """
    if width < 1:
        raise ValueError(f"Address width must be positive, got {width}")
    full = (len(bits) // width) * width
    addresses = chunks_to_ints(bits[:full], width, order)
    if full < len(bits):
        addresses.append(chunk_to_int(bits[full:], order))
    return addresses


# =============================================================================
# PACKED FIELD STORAGE
# =============================================================================

class PackedBitArray:
    """
    Contiguous bit vector with read/write access to arbitrary-width fields.

    The buffer is a numpy array of unsigned words (``dtype`` is the storage
    unit). Field widths are independent of the word width: writing one field
    rewrites only the bits it covers, leaving neighbouring fields intact.

    Example:
        >>> arr = PackedBitArray(12, dtype=np.uint8)
        >>> arr.write(6, 3, 0b101)   # straddles the two bytes
        >>> arr.read(6, 3)
        5
    """

    def __init__(self, num_bits: int, dtype=np.uint64,
                 words: Optional[np.ndarray] = None):
        if num_bits < 0:
            raise ValueError(f"num_bits must be non-negative, got {num_bits}")
        dtype = np.dtype(dtype)
        if dtype.kind != "u":
            raise ValueError(f"Storage unit must be an unsigned integer dtype, got {dtype}")

        self._num_bits = num_bits
        self._dtype = dtype
        self._word_bits = dtype.itemsize * 8
        num_words = -(-num_bits // self._word_bits)

        if words is None:
            self._words = np.zeros(num_words, dtype=dtype)
        else:
            words = np.asarray(words, dtype=dtype)
            if words.shape != (num_words,):
                raise ValueError(
                    f"Expected {num_words} words of {dtype} for {num_bits} bits, "
                    f"got shape {words.shape}"
                )
            self._words = words.copy()

    @property
    def num_bits(self) -> int:
        return self._num_bits

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def words(self) -> np.ndarray:
        """Raw storage words (read-only view)."""
        view = self._words.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return self._num_bits

    def _check(self, offset: int, width: int) -> None:
        if width < 1 or width > 64:
            raise ValueError(f"Field width must be in [1, 64], got {width}")
        if offset < 0 or offset + width > self._num_bits:
            raise IndexError(
                f"Field [{offset}, {offset + width}) outside {self._num_bits} bits"
            )

    def read(self, offset: int, width: int) -> int:
        """Read the unsigned field at bits [offset, offset + width)."""
        self._check(offset, width)
        value = 0
        done = 0
        while done < width:
            index, bit = divmod(offset + done, self._word_bits)
            take = min(width - done, self._word_bits - bit)
            word = int(self._words[index])
            value |= ((word >> bit) & ((1 << take) - 1)) << done
            done += take
        return value

    def write(self, offset: int, width: int, value: int) -> None:
        """Overwrite the field at bits [offset, offset + width) with ``value``."""
        self._check(offset, width)
        value = int(value) & ((1 << width) - 1)
        done = 0
        while done < width:
            index, bit = divmod(offset + done, self._word_bits)
            take = min(width - done, self._word_bits - bit)
            mask = ((1 << take) - 1) << bit
            piece = ((value >> done) & ((1 << take) - 1)) << bit
            word = int(self._words[index])
            self._words[index] = (word & ~mask) | piece
            done += take

    def to_bits(self) -> np.ndarray:
        """Unpack the whole buffer into a bool array of ``num_bits`` entries."""
        shifts = np.arange(self._word_bits, dtype=np.uint64)
        table = (self._words.astype(np.uint64)[:, None] >> shifts) & np.uint64(1)
        return table.astype(np.bool_).reshape(-1)[:self._num_bits]

    def copy(self) -> PackedBitArray:
        return PackedBitArray(self._num_bits, self._dtype, self._words)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PackedBitArray):
            return False
        return (self._num_bits == other._num_bits
                and self._dtype == other._dtype
                and np.array_equal(self._words, other._words))

    def __repr__(self) -> str:
        return f"PackedBitArray(bits={self._num_bits}, dtype={self._dtype.name})"


__all__ = [
    'BitOrder',
    'PackedBitArray',
    'as_bit_array',
    'ceil_log2',
    'chunk_addresses',
    'chunk_to_int',
    'chunks_to_ints',
    'int_to_chunk',
    'ints_to_chunks',
    'is_power_of_two',
]
