"""
Tests for Discriminator addressing, training and scoring
"""

import pytest
import numpy as np

from wisard import BitOrder, Sample
from wisard.filters import (
    CountingBloomFilterBuilder,
    LUTFilterBuilder,
    PackedLUTFilterBuilder,
)
from wisard.models import Discriminator


def from_string(bits, value_width, label="a", order=BitOrder.LSB0):
    return Sample([c == "1" for c in bits], value_width, label, order)


def trained(input_width, address_width, samples):
    disc = Discriminator(input_width, address_width,
                         PackedLUTFilterBuilder(address_width, 4, 0))
    data = [from_string(s, address_width) for s in samples]
    for sample in data:
        disc.fit(sample)
    return disc, data


class TestScoring:
    def test_full_width_address(self):
        patterns = [format(i, "04b") for i in range(16)]
        disc, data = trained(4, 4, patterns)
        assert disc.num_filters == 1
        assert [disc.score(s) for s in data] == [1] * 16

    def test_two_bit_addresses(self):
        disc, data = trained(4, 2, ["0000", "1111"])
        assert [disc.score(s) for s in data] == [2, 2]

    def test_one_bit_addresses(self):
        disc, data = trained(4, 1, ["1100", "0110", "0011", "1001"])
        assert [disc.score(s) for s in data] == [4, 4, 4, 4]

    def test_untrained_scores_zero(self):
        disc = Discriminator(6, 2, LUTFilterBuilder(2))
        assert disc.score(from_string("101101", 2)) == 0

    def test_partial_match(self):
        disc, _ = trained(6, 2, ["110000"])
        assert disc.score(from_string("110011", 2)) == 2
        assert disc.score(from_string("001111", 2)) == 0

    def test_score_bounds(self):
        disc = Discriminator(9, 4, LUTFilterBuilder(4))
        rng = np.random.default_rng(0)
        samples = [Sample(rng.integers(0, 2, 9), 1, "a") for _ in range(20)]
        for s in samples[:10]:
            disc.fit(s)
        for s in samples:
            assert 0 <= disc.score(s) <= disc.num_filters


class TestAddressing:
    def test_filter_count_rounds_up(self):
        assert Discriminator(10, 4, LUTFilterBuilder(4)).num_filters == 3
        assert Discriminator(8, 4, LUTFilterBuilder(4)).num_filters == 2

    def test_short_last_chunk(self):
        disc = Discriminator(5, 2, LUTFilterBuilder(2))
        assert disc.addresses(from_string("11001", 1)) == [3, 0, 1]

    def test_bit_order_changes_addresses(self):
        disc = Discriminator(4, 2, LUTFilterBuilder(2))
        assert disc.addresses(from_string("1000", 2)) == [1, 0]
        assert disc.addresses(from_string("1000", 2, order=BitOrder.MSB0)) == [2, 0]

    def test_width_mismatch(self):
        disc = Discriminator(4, 2, LUTFilterBuilder(2))
        with pytest.raises(ValueError):
            disc.fit(from_string("000000", 2))
        with pytest.raises(ValueError):
            disc.score(from_string("00", 2))

    def test_builder_too_narrow(self):
        with pytest.raises(ValueError):
            Discriminator(8, 4, LUTFilterBuilder(2))

    def test_bloom_builder_any_width(self):
        disc = Discriminator(8, 4, CountingBloomFilterBuilder(2))
        s = from_string("10110010", 4)
        disc.fit(s)
        assert disc.score(s) == 2

    def test_invalid_widths(self):
        with pytest.raises(ValueError):
            Discriminator(0, 1, LUTFilterBuilder(1))
        with pytest.raises(ValueError):
            Discriminator(4, 0, LUTFilterBuilder(1))
        with pytest.raises(ValueError):
            Discriminator(4, 5, LUTFilterBuilder(5))

    def test_builder_required(self):
        with pytest.raises(ValueError):
            Discriminator(4, 2)


class TestSerialization:
    def test_round_trip(self):
        disc, data = trained(8, 2, ["11000011", "10101010"])
        restored = Discriminator.from_dict(disc.to_dict())
        assert restored.num_filters == disc.num_filters
        probe = from_string("11101011", 2)
        assert restored.score(probe) == disc.score(probe)
        assert [restored.score(s) for s in data] == [4, 4]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
