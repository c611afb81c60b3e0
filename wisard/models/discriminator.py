"""
Discriminator - one label's bank of address-keyed filters.

The input bits are cut into consecutive ``address_width``-bit chunks (the
last chunk may be shorter). Chunk i is read as an unsigned integer using the
sample's bit order and addresses filter i, always the same filter.

    fit(sample):    filters[i].include(address_i) for every chunk
    score(sample):  sum(filters[i].contains(address_i)), in [0, num_filters]
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

from ..bits import chunk_addresses
from ..filters import Filter, FilterBuilder, filter_from_dict
from ..sample import Sample


logger = logging.getLogger(__name__)


def check_widths(input_width: int, address_width: int) -> None:
    if input_width < 1:
        raise ValueError(f"input_width must be positive, got {input_width}")
    if not 1 <= address_width <= input_width:
        raise ValueError(
            f"address_width must be in [1, input_width={input_width}], got {address_width}"
        )


class Discriminator:
    """
    WiSARD discriminator.

    Args:
        input_width: Total number of input bits
        address_width: Bits per filter address
        builder: Produces one fresh filter per chunk
    """

    def __init__(self, input_width: int, address_width: int,
                 builder: Optional[FilterBuilder] = None,
                 _filters: Optional[List[Filter]] = None):
        check_widths(input_width, address_width)
        self.input_width = int(input_width)
        self.address_width = int(address_width)
        num_filters = -(-self.input_width // self.address_width)

        if _filters is not None:
            if len(_filters) != num_filters:
                raise ValueError(f"Expected {num_filters} filters, got {len(_filters)}")
            self._filters = list(_filters)
            return

        if builder is None:
            raise ValueError("A filter builder is required")
        if builder.exact and builder.address_width < self.address_width:
            raise ValueError(
                f"Builder address_width={builder.address_width} cannot index "
                f"{self.address_width}-bit addresses"
            )
        self._filters = [builder.build_filter() for _ in range(num_filters)]
        logger.debug("Discriminator: %d filters for %d input bits",
                     num_filters, self.input_width)

    @classmethod
    def from_filter_builder(cls, input_width: int, address_width: int,
                            builder: FilterBuilder) -> Discriminator:
        return cls(input_width, address_width, builder)

    @property
    def filters(self) -> List[Filter]:
        return self._filters

    @property
    def num_filters(self) -> int:
        return len(self._filters)

    def addresses(self, sample: Sample) -> List[int]:
        """Per-chunk filter addresses of ``sample``."""
        if len(sample) != self.input_width:
            raise ValueError(
                f"Sample has {len(sample)} bits, discriminator expects {self.input_width}"
            )
        return chunk_addresses(sample.bits, self.address_width, sample.bit_order)

    def fit(self, sample: Sample) -> None:
        """Train the discriminator with ``sample``."""
        for filt, address in zip(self._filters, self.addresses(sample)):
            filt.include(address)

    def score(self, sample: Sample) -> int:
        """Number of chunks whose address is a member of its filter."""
        return sum(
            1 for filt, address in zip(self._filters, self.addresses(sample))
            if filt.contains(address)
        )

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            'input_width': self.input_width,
            'address_width': self.address_width,
            'filters': [f.to_dict() for f in self._filters],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> Discriminator:
        filters = [filter_from_dict(f) for f in d['filters']]
        return cls(d['input_width'], d['address_width'], _filters=filters)

    def __repr__(self) -> str:
        return (f"Discriminator(input_width={self.input_width}, "
                f"address_width={self.address_width}, filters={self.num_filters})")


__all__ = ['Discriminator', 'check_widths']
