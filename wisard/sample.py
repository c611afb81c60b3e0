"""
Sample - labeled, bit-packed feature vector.

A Sample is a flat bit buffer partitioned into equal "values" of
``value_width`` bits each. Encoders rewrite the buffer (and possibly the
width) in place; discriminators read the buffer in ``address_width`` chunks.

Invariant:
    len(bits) % value_width == 0, checked whenever bits or width change.

    >>> s = Sample.from_values([2, 5], value_width=3, label="a")
    >>> s.values()
    [2, 5]
"""

from __future__ import annotations
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Tuple

import numpy as np

from .bits import BitOrder, as_bit_array, chunks_to_ints, ints_to_chunks
from .constants import DEFAULT_BIT_ORDER


def _check_width(num_bits: int, value_width: int) -> None:
    if not isinstance(value_width, (int, np.integer)) or isinstance(value_width, bool):
        raise TypeError(f"value_width must be an integer, got {type(value_width).__name__}")
    if value_width < 1:
        raise ValueError(f"value_width must be positive, got {value_width}")
    if num_bits % value_width != 0:
        raise ValueError(
            f"The bits are not divisible by value_width (bits: {num_bits}, "
            f"value_width: {value_width})"
        )


def _readonly(bits: np.ndarray) -> np.ndarray:
    view = bits.view()
    view.flags.writeable = False
    return view


class Sample:
    """
    Labeled bit vector with a declared value width.

    Attributes:
        bits: 1-D bool array, the serialized features
        value_width: Bits per value; divides len(bits)
        label: Hashable class tag
        bit_order: How each chunk of bits reads as an unsigned integer

    A Sample owns its buffer: incoming arrays are copied, bits and
    iter_values() hand out read-only views, into_raw_parts() a copy. Use
    copy() before handing it to code that encodes in place if the original
    must survive.
    """

    __slots__ = ("_bits", "_value_width", "_label", "_bit_order")

    def __init__(self, bits: Iterable, value_width: int, label: Hashable,
                 bit_order: BitOrder = DEFAULT_BIT_ORDER):
        bits = as_bit_array(bits).copy()
        _check_width(len(bits), value_width)
        self._bits = bits
        self._value_width = int(value_width)
        self._label = label
        self._bit_order = BitOrder(bit_order)

    # -------------------------------------------------------------------------
    # Raw parts
    # -------------------------------------------------------------------------

    @classmethod
    def from_raw_parts(cls, bits: Iterable, value_width: int, label: Hashable,
                       bit_order: BitOrder = DEFAULT_BIT_ORDER) -> Sample:
        """Create a Sample from its raw parts (fails if width does not divide bits)."""
        return cls(bits, value_width, label, bit_order)

    def into_raw_parts(self) -> Tuple[np.ndarray, int, Hashable, BitOrder]:
        """
        Break the sample into (bits, value_width, label, bit_order).

        from_raw_parts(*parts) rebuilds an equal sample.
        """
        return self._bits.copy(), self._value_width, self._label, self._bit_order

    @classmethod
    def from_values(cls, values: Iterable[int], value_width: int, label: Hashable,
                    bit_order: BitOrder = DEFAULT_BIT_ORDER) -> Sample:
        """
        Pack unsigned integers into a Sample, ``value_width`` bits each.

        Values wider than ``value_width`` are truncated to their low bits.
        """
        bits = ints_to_chunks(values, value_width, bit_order)
        return cls(bits, value_width, label, bit_order)

    # -------------------------------------------------------------------------
    # Iteration
    # -------------------------------------------------------------------------

    def iter_values(self) -> Iterator[np.ndarray]:
        """Yield each ``value_width``-bit slice of the buffer."""
        width = self._value_width
        bits = _readonly(self._bits)
        for start in range(0, len(bits), width):
            yield bits[start:start + width]

    def iter_bits(self) -> Iterator[bool]:
        """Yield the individual bits as Python bools."""
        for bit in self._bits:
            yield bool(bit)

    def values(self) -> List[int]:
        """Every value as an unsigned integer (honours bit_order)."""
        return chunks_to_ints(self._bits, self._value_width, self._bit_order)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def bits(self) -> np.ndarray:
        """The bit buffer (read-only view; use set_bits to change it)."""
        return _readonly(self._bits)

    def set_bits(self, bits: Iterable) -> None:
        """Replace the whole buffer; the current value width must still divide it."""
        bits = as_bit_array(bits).copy()
        _check_width(len(bits), self._value_width)
        self._bits = bits

    def replace(self, bits: Iterable, value_width: int) -> None:
        """Replace buffer and width together (used by width-changing encoders)."""
        bits = as_bit_array(bits).copy()
        _check_width(len(bits), value_width)
        self._bits = bits
        self._value_width = int(value_width)

    @property
    def value_width(self) -> int:
        return self._value_width

    @value_width.setter
    def value_width(self, value_width: int) -> None:
        self.set_value_width(value_width)

    def set_value_width(self, value_width: int) -> None:
        _check_width(len(self._bits), value_width)
        self._value_width = int(value_width)

    @property
    def label(self) -> Hashable:
        return self._label

    @label.setter
    def label(self, label: Hashable) -> None:
        self._label = label

    def set_label(self, label: Hashable) -> None:
        self._label = label

    @property
    def bit_order(self) -> BitOrder:
        return self._bit_order

    @property
    def num_values(self) -> int:
        return len(self._bits) // self._value_width

    def is_empty(self) -> bool:
        return len(self._bits) == 0

    def copy(self) -> Sample:
        return Sample(self._bits, self._value_width, self._label, self._bit_order)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict (bits packed eight per byte)."""
        return {
            'bits': np.packbits(self._bits, bitorder='little'),
            'num_bits': len(self._bits),
            'value_width': self._value_width,
            'label': self._label,
            'bit_order': self._bit_order.value,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> Sample:
        """Deserialize from dict."""
        packed = np.asarray(d['bits'], dtype=np.uint8)
        bits = np.unpackbits(packed, count=d['num_bits'], bitorder='little').astype(np.bool_)
        return cls(bits, d['value_width'], d['label'], BitOrder(d.get('bit_order', 'lsb0')))

    # -------------------------------------------------------------------------
    # Python Protocols
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._bits)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Sample):
            return NotImplemented
        return (self._value_width == other._value_width
                and self._label == other._label
                and self._bit_order is other._bit_order
                and np.array_equal(self._bits, other._bits))

    __hash__ = None

    def __repr__(self) -> str:
        shown = "".join("1" if b else "0" for b in self._bits[:32])
        if len(self._bits) > 32:
            shown += "..."
        return (f"Sample(bits={shown}, len={len(self._bits)}, "
                f"value_width={self._value_width}, label={self._label!r})")


__all__ = ['Sample']
