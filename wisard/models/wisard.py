"""
WiSARD models.

WisardBase:    one Discriminator per label, all built from the same filter
               builder. fit() trains the sample's own discriminator;
               predict() returns the label with the highest score.
BinaryWisard:  the classic model. WisardBase over 1-bit packed LUTs
               (threshold 0, "seen at least once") plus a fixed Permute
               encoder whose seed is chosen once, at construction.

Tie-breaking:
    Labels are kept in sorted order (repr order for labels that do not
    compare with each other). predict() returns the first label, in that
    order, among those with the maximum score, so equal scores always
    resolve to the same label.

    model = BinaryWisard(input_width=8, address_width=2, labels={"cold", "hot"})
    for sample in dataset:
        model.fit(sample)
    model.predict(sample)
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple, Union
import logging
import os

from ..constants import BINARY_COUNTER_WIDTH, BINARY_THRESHOLD
from ..encoders import Permute
from ..filters import FilterBuilder, PackedLUTFilterBuilder
from ..sample import Sample
from .discriminator import Discriminator, check_widths


logger = logging.getLogger(__name__)


def ordered_labels(labels: Iterable[Hashable]) -> List[Hashable]:
    """Distinct labels in a deterministic order."""
    distinct = list(dict.fromkeys(labels))
    try:
        return sorted(distinct)
    except TypeError:
        return sorted(distinct, key=repr)


class WisardBase:
    """
    Base WiSARD model: a mapping from label to Discriminator.

    Args:
        input_width: Total number of input bits
        address_width: Bits per filter address
        labels: Every label that fit() will ever see
        builder: Filter builder shared by all discriminators
    """

    def __init__(self, input_width: int, address_width: int,
                 labels: Iterable[Hashable],
                 builder: Optional[FilterBuilder] = None,
                 _discriminators: Optional[Dict[Hashable, Discriminator]] = None):
        check_widths(input_width, address_width)
        self.input_width = int(input_width)
        self.address_width = int(address_width)

        label_order = ordered_labels(labels)
        if not label_order:
            raise ValueError("A WiSARD model needs at least one label")

        if _discriminators is not None:
            self._disc = {label: _discriminators[label] for label in label_order}
        else:
            self._disc = {
                label: Discriminator(self.input_width, self.address_width, builder)
                for label in label_order
            }
        logger.debug("WisardBase: %d labels, %d-bit input, %d-bit addresses",
                     len(self._disc), self.input_width, self.address_width)

    @classmethod
    def from_filter_builder(cls, input_width: int, address_width: int,
                            labels: Iterable[Hashable],
                            builder: FilterBuilder) -> WisardBase:
        return cls(input_width, address_width, labels, builder)

    @property
    def labels(self) -> List[Hashable]:
        return list(self._disc)

    @property
    def discriminators(self) -> Dict[Hashable, Discriminator]:
        return self._disc

    # -------------------------------------------------------------------------
    # Training and inference
    # -------------------------------------------------------------------------

    def fit(self, sample: Sample) -> None:
        """Train the discriminator of ``sample.label``."""
        try:
            disc = self._disc[sample.label]
        except KeyError:
            raise KeyError(f"Unknown label {sample.label!r}") from None
        disc.fit(sample)

    def fit_all(self, samples: Iterable[Sample]) -> None:
        for sample in samples:
            self.fit(sample)

    def scores(self, sample: Sample, parallel: bool = False,
               max_workers: Optional[int] = None) -> List[Tuple[int, Hashable]]:
        """
        Score ``sample`` against every discriminator.

        Args:
            sample: Input sample
            parallel: Evaluate labels on a thread pool (scoring is read-only)
            max_workers: Pool size (None = CPU count)

        Returns:
            (score, label) pairs, one per label, in label order
        """
        if parallel and len(self._disc) > 1:
            max_workers = max_workers or os.cpu_count()
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                values = list(executor.map(lambda d: d.score(sample), self._disc.values()))
        else:
            values = [disc.score(sample) for disc in self._disc.values()]
        return list(zip(values, self._disc))

    def predict(self, sample: Sample) -> Hashable:
        """Label with the highest score (first label in order on ties)."""
        return max(self.scores(sample), key=lambda pair: pair[0])[1]

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            'input_width': self.input_width,
            'address_width': self.address_width,
            'labels': list(self._disc),
            'discriminators': [disc.to_dict() for disc in self._disc.values()],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> WisardBase:
        labels = list(d['labels'])
        discs = {
            label: Discriminator.from_dict(state)
            for label, state in zip(labels, d['discriminators'])
        }
        return cls(d['input_width'], d['address_width'], labels, _discriminators=discs)

    def __repr__(self) -> str:
        return (f"WisardBase(input_width={self.input_width}, "
                f"address_width={self.address_width}, labels={self.labels!r})")


class BinaryWisard:
    """
    Traditional WiSARD model with boolean RAMs and a fixed input permutation.

    Args:
        input_width: Total number of input bits
        address_width: Bits per RAM address
        labels: Every label that fit() will ever see
        seed: Permutation seed (int or 32 bytes); None draws one now

    The same permutation is applied in fit(), scores() and predict(). The
    caller's sample is left untouched.
    """

    def __init__(self, input_width: int, address_width: int,
                 labels: Iterable[Hashable],
                 seed: Optional[Union[int, bytes]] = None,
                 _base: Optional[WisardBase] = None):
        self._encoder = Permute(seed)
        if _base is not None:
            self._base = _base
        else:
            check_widths(input_width, address_width)
            builder = PackedLUTFilterBuilder(address_width, BINARY_COUNTER_WIDTH,
                                             BINARY_THRESHOLD)
            self._base = WisardBase(input_width, address_width, labels, builder)

    @classmethod
    def with_seed(cls, input_width: int, address_width: int,
                  labels: Iterable[Hashable], seed: Union[int, bytes]) -> BinaryWisard:
        return cls(input_width, address_width, labels, seed)

    @property
    def seed(self) -> Union[int, bytes]:
        return self._encoder.seed

    @property
    def base(self) -> WisardBase:
        return self._base

    @property
    def labels(self) -> List[Hashable]:
        return self._base.labels

    @property
    def input_width(self) -> int:
        return self._base.input_width

    @property
    def address_width(self) -> int:
        return self._base.address_width

    def _encode(self, sample: Sample) -> Sample:
        return self._encoder.encode(sample.copy())

    def fit(self, sample: Sample) -> None:
        self._base.fit(self._encode(sample))

    def fit_all(self, samples: Iterable[Sample]) -> None:
        for sample in samples:
            self.fit(sample)

    def scores(self, sample: Sample, parallel: bool = False,
               max_workers: Optional[int] = None) -> List[Tuple[int, Hashable]]:
        return self._base.scores(self._encode(sample), parallel, max_workers)

    def predict(self, sample: Sample) -> Hashable:
        return self._base.predict(self._encode(sample))

    def to_dict(self) -> Dict[str, Any]:
        d = self._base.to_dict()
        d['seed'] = self.seed
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> BinaryWisard:
        base = WisardBase.from_dict(d)
        return cls(base.input_width, base.address_width, base.labels, d['seed'], _base=base)

    def __repr__(self) -> str:
        return (f"BinaryWisard(input_width={self.input_width}, "
                f"address_width={self.address_width}, labels={self.labels!r})")


__all__ = ['WisardBase', 'BinaryWisard', 'ordered_labels']
