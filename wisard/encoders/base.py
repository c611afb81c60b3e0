"""
Sample encoders - transformations over the bits of a Sample.

Every encoder implements encode_inplace(); encode() and calling the
encoder are derived from it. Encoders compose: the output of one is a
valid input for the next.

    pipeline = Compose([Permute(seed=7), LinearThermometer(4)])
    sample = pipeline.encode(sample)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, List

from ..sample import Sample


class SampleEncoder(ABC):
    """Bit-to-bit transform over a Sample."""

    @abstractmethod
    def encode_inplace(self, sample: Sample) -> None:
        """Rewrite the sample bits (and possibly its value width) in place."""

    def encode(self, sample: Sample) -> Sample:
        """Encode ``sample`` in place and return it."""
        self.encode_inplace(sample)
        return sample

    def __call__(self, sample: Sample) -> Sample:
        return self.encode(sample)


class Compose(SampleEncoder):
    """Apply several encoders left to right."""

    def __init__(self, encoders: Iterable[SampleEncoder]):
        self.encoders: List[SampleEncoder] = list(encoders)
        if not self.encoders:
            raise ValueError("Compose needs at least one encoder")

    def encode_inplace(self, sample: Sample) -> None:
        for encoder in self.encoders:
            encoder.encode_inplace(sample)

    def __repr__(self) -> str:
        return f"Compose({self.encoders!r})"


def require_bits(sample: Sample, encoder: str) -> None:
    if sample.is_empty():
        raise ValueError(f"{encoder} cannot encode an empty sample")


__all__ = ['SampleEncoder', 'Compose', 'require_bits']
