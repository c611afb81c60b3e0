"""
Thermometer encoders - requantize each value into a unary code.

A thermometer code of ``resolution`` bits with ``level`` set bits is the
integer ``(1 << level) - 1`` written in ``resolution`` bits. Larger inputs
never produce fewer set bits.

LogThermometer:     level = ceil_log2(v + 1), rescaled by resolution / width
LinearThermometer:  level = ((resolution + 1) * v + (width >> 1)) >> width

    width 2, values [0, 1, 2, 3]:
        LogThermometer(4)    -> 0000 1100 1111 1111
        LinearThermometer(4) -> 0000 1000 1100 1111
"""

from __future__ import annotations
from typing import List

import numpy as np

from ..bits import BitOrder, ceil_log2, is_power_of_two
from ..constants import NATIVE_INT_BITS
from ..sample import Sample
from .base import SampleEncoder, require_bits


def thermometer_bits(levels: List[int], resolution: int, order: BitOrder) -> np.ndarray:
    """Concatenated ``resolution``-bit thermometer codes for ``levels``."""
    levels = np.minimum(np.asarray(levels, dtype=np.int64), resolution)
    positions = np.arange(resolution)
    if order is BitOrder.MSB0:
        table = positions[None, :] >= (resolution - levels)[:, None]
    else:
        table = positions[None, :] < levels[:, None]
    return table.reshape(-1)


def _check_resolution(resolution: int, name: str) -> int:
    if isinstance(resolution, bool) or not isinstance(resolution, (int, np.integer)):
        raise TypeError(f"{name} resolution must be an integer")
    if resolution < 1:
        raise ValueError(f"{name} resolution must be positive, got {resolution}")
    return int(resolution)


def _check_native_width(sample: Sample, name: str) -> None:
    if sample.value_width > NATIVE_INT_BITS:
        raise ValueError(
            f"{name} can only encode values up to {NATIVE_INT_BITS} bits "
            f"(value_width: {sample.value_width})"
        )


class LogThermometer(SampleEncoder):
    """
    Logarithmic thermometer encoder.

    Args:
        resolution: Output bits per value; must be a power of two

    The source value width must also be a power of two, no wider than
    NATIVE_INT_BITS.
    """

    def __init__(self, resolution: int):
        resolution = _check_resolution(resolution, "LogThermometer")
        if not is_power_of_two(resolution):
            raise ValueError("LogThermometer only supports resolutions that are powers of two")
        self.resolution = resolution

    def level(self, value: int, width: int) -> int:
        level = ceil_log2(value + 1)
        if width < self.resolution:
            level *= self.resolution // width
        else:
            level //= width // self.resolution
        return level

    def encode_inplace(self, sample: Sample) -> None:
        require_bits(sample, "LogThermometer")
        _check_native_width(sample, "LogThermometer")
        width = sample.value_width
        if not is_power_of_two(width):
            raise ValueError(f"Sample value width must be a power of two, got {width}")

        levels = [self.level(v, width) for v in sample.values()]
        bits = thermometer_bits(levels, self.resolution, sample.bit_order)
        sample.replace(bits, self.resolution)

    def __repr__(self) -> str:
        return f"LogThermometer(resolution={self.resolution})"


class LinearThermometer(SampleEncoder):
    """
    Linear thermometer encoder.

    Args:
        resolution: Output bits per value (any positive integer)
    """

    def __init__(self, resolution: int):
        self.resolution = _check_resolution(resolution, "LinearThermometer")

    def level(self, value: int, width: int) -> int:
        level = ((self.resolution + 1) * value + (width >> 1)) >> width
        return min(level, self.resolution)

    def encode_inplace(self, sample: Sample) -> None:
        require_bits(sample, "LinearThermometer")
        _check_native_width(sample, "LinearThermometer")
        width = sample.value_width

        levels = [self.level(v, width) for v in sample.values()]
        bits = thermometer_bits(levels, self.resolution, sample.bit_order)
        sample.replace(bits, self.resolution)

    def __repr__(self) -> str:
        return f"LinearThermometer(resolution={self.resolution})"


__all__ = ['LogThermometer', 'LinearThermometer', 'thermometer_bits']
