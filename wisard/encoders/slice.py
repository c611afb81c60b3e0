"""Slice encoder - keep one bit range of every value."""

from __future__ import annotations

import numpy as np

from ..sample import Sample
from .base import SampleEncoder, require_bits


class Slice(SampleEncoder):
    """
    Keeps bits [start, end) of every value and drops the rest.

    The new value width is ``end - start``. With values [00, 10, 01, 11]
    (width 2), Slice(1, 2) yields [0, 0, 1, 1].
    """

    def __init__(self, start: int, end: int):
        if start < 0 or end <= start:
            raise ValueError(f"Invalid slice [{start}, {end})")
        self.start = int(start)
        self.end = int(end)

    @property
    def width(self) -> int:
        return self.end - self.start

    def encode_inplace(self, sample: Sample) -> None:
        require_bits(sample, "Slice")
        if self.end > sample.value_width:
            raise ValueError(
                f"Slice [{self.start}, {self.end}) exceeds value width {sample.value_width}"
            )
        table = sample.bits.reshape(-1, sample.value_width)
        bits = np.ascontiguousarray(table[:, self.start:self.end]).reshape(-1)
        sample.replace(bits, self.width)

    def __repr__(self) -> str:
        return f"Slice(start={self.start}, end={self.end})"


__all__ = ['Slice']
