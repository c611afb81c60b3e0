"""
Dataset - ordered collection of samples.

Stores samples in insertion order and reports the distinct labels they
carry, which is what a model needs at construction time:

    data = Dataset.from_samples(samples)
    model = BinaryWisard(input_width, address_width, data.labels())
    model.fit_all(data)
"""

from __future__ import annotations
from typing import Hashable, Iterable, Iterator, List, Set

from .encoders import SampleEncoder
from .sample import Sample


class Dataset:
    """Ordered, indexable list of samples."""

    def __init__(self, samples: Iterable[Sample] = ()):
        self._samples: List[Sample] = list(samples)

    @classmethod
    def from_samples(cls, samples: Iterable[Sample]) -> Dataset:
        return cls(samples)

    def push(self, sample: Sample) -> None:
        self._samples.append(sample)

    def labels(self) -> Set[Hashable]:
        """Distinct labels present in the dataset."""
        return {sample.label for sample in self._samples}

    def encode_inplace(self, encoder: SampleEncoder) -> None:
        """Run ``encoder`` over every sample."""
        for sample in self._samples:
            encoder.encode_inplace(sample)

    def is_empty(self) -> bool:
        return not self._samples

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __getitem__(self, index: int) -> Sample:
        return self._samples[index]

    def __setitem__(self, index: int, sample: Sample) -> None:
        self._samples[index] = sample

    def __repr__(self) -> str:
        return f"Dataset({len(self._samples)} samples, {len(self.labels())} labels)"


__all__ = ['Dataset']
