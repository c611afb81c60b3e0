"""
Tests for WisardBase and BinaryWisard
"""

import pytest
import numpy as np

from wisard import (
    BinaryWisard,
    CountingBloomFilterBuilder,
    Dataset,
    LUTFilterBuilder,
    PackedLUTFilterBuilder,
    Sample,
    WisardBase,
)
from wisard.models import ordered_labels


def from_string(bits, value_width, label):
    return Sample([c == "1" for c in bits], value_width, label)


def hot_cold():
    return [
        from_string("11100000", 2, "cold"),
        from_string("11110000", 2, "cold"),
        from_string("00001111", 2, "hot"),
        from_string("00000111", 2, "hot"),
    ]


class TestOrderedLabels:
    def test_sorted_and_distinct(self):
        assert ordered_labels(["b", "a", "b", "c"]) == ["a", "b", "c"]

    def test_mixed_types(self):
        labels = ordered_labels([1, "a", (2,)])
        assert sorted(labels, key=repr) == labels
        assert len(labels) == 3


class TestWisardBase:
    def test_hot_cold(self):
        model = WisardBase(8, 2, {"cold", "hot"}, PackedLUTFilterBuilder(2))
        model.fit_all(hot_cold())
        assert model.predict(from_string("11000000", 2, None)) == "cold"
        assert model.predict(from_string("00000011", 2, None)) == "hot"

    def test_scores_in_label_order(self):
        model = WisardBase(8, 2, ["hot", "cold"], LUTFilterBuilder(2))
        model.fit_all(hot_cold())
        scores = model.scores(from_string("11110000", 2, None))
        assert [label for _, label in scores] == ["cold", "hot"]
        assert scores[0][0] == 4

    def test_untrained_tie_break(self):
        model = WisardBase(4, 2, ["z", "m", "a"], LUTFilterBuilder(2))
        sample = from_string("1010", 2, None)
        assert [score for score, _ in model.scores(sample)] == [0, 0, 0]
        assert model.predict(sample) == "a"

    def test_unknown_label(self):
        model = WisardBase(4, 2, ["a"], LUTFilterBuilder(2))
        with pytest.raises(KeyError):
            model.fit(from_string("1010", 2, "b"))

    def test_no_labels(self):
        with pytest.raises(ValueError):
            WisardBase(4, 2, [], LUTFilterBuilder(2))

    def test_discriminators_do_not_share_filters(self):
        model = WisardBase(4, 2, ["a", "b"], LUTFilterBuilder(2))
        model.fit(from_string("1111", 2, "a"))
        scores = dict((label, score) for score, label in model.scores(from_string("1111", 2, None)))
        assert scores == {"a": 2, "b": 0}

    def test_parallel_scores_match(self):
        labels = list(range(6))
        model = WisardBase(16, 4, labels, LUTFilterBuilder(4))
        rng = np.random.default_rng(1)
        for label in labels:
            for _ in range(5):
                model.fit(Sample(rng.integers(0, 2, 16), 1, label))
        probe = Sample(rng.integers(0, 2, 16), 1, None)
        assert model.scores(probe, parallel=True, max_workers=3) == model.scores(probe)

    def test_bloom_backend(self):
        model = WisardBase(8, 2, {"cold", "hot"}, CountingBloomFilterBuilder(2))
        model.fit_all(hot_cold())
        assert model.predict(from_string("11100000", 2, None)) == "cold"
        assert model.predict(from_string("00001111", 2, None)) == "hot"

    def test_round_trip(self):
        model = WisardBase(8, 2, {"cold", "hot"}, PackedLUTFilterBuilder(2, 2))
        model.fit_all(hot_cold())
        restored = WisardBase.from_dict(model.to_dict())
        assert restored.labels == model.labels
        for sample in hot_cold():
            assert restored.scores(sample) == model.scores(sample)


class TestBinaryWisard:
    @pytest.mark.parametrize("seed", [0, 7, 2 ** 64 - 1, bytes(range(32))])
    def test_hot_cold(self, seed):
        model = BinaryWisard(8, 2, {"cold", "hot"}, seed=seed)
        model.fit_all(hot_cold())
        assert model.predict(from_string("11000000", 2, None)) == "cold"
        assert model.predict(from_string("00000011", 2, None)) == "hot"

    def test_hot_cold_from_dataset(self):
        data = Dataset.from_samples(hot_cold())
        model = BinaryWisard(8, 2, data.labels())
        model.fit_all(data)
        for sample in data:
            assert model.predict(sample) == sample.label

    def test_sample_not_mutated(self):
        model = BinaryWisard(8, 2, ["cold", "hot"], seed=3)
        sample = from_string("11100000", 2, "cold")
        before = sample.copy()
        model.fit(sample)
        model.predict(sample)
        assert sample == before

    def test_training_sample_scores_full(self):
        model = BinaryWisard(12, 3, ["a", "b"], seed=11)
        sample = from_string("101100111000", 3, "a")
        model.fit(sample)
        assert dict((l, s) for s, l in model.scores(sample)) == {"a": 4, "b": 0}

    def test_same_seed_same_model(self):
        a = BinaryWisard(8, 2, ["cold", "hot"], seed=5)
        b = BinaryWisard.with_seed(8, 2, ["cold", "hot"], 5)
        a.fit_all(hot_cold())
        b.fit_all(hot_cold())
        probe = from_string("01100110", 2, None)
        assert a.scores(probe) == b.scores(probe)

    def test_random_seed_drawn_once(self):
        model = BinaryWisard(8, 2, ["cold", "hot"])
        assert isinstance(model.seed, bytes)
        assert len(model.seed) == 32

    def test_boolean_rams(self):
        model = BinaryWisard(8, 4, ["a"], seed=1)
        for disc in model.base.discriminators.values():
            for f in disc.filters:
                assert f.counter_width == 1
                assert f.threshold == 0

    def test_unknown_label(self):
        model = BinaryWisard(8, 2, ["cold"], seed=1)
        with pytest.raises(KeyError):
            model.fit(from_string("11110000", 2, "hot"))

    def test_invalid_widths(self):
        with pytest.raises(ValueError):
            BinaryWisard(8, 9, ["a"], seed=1)

    def test_round_trip(self):
        model = BinaryWisard(8, 2, ["cold", "hot"], seed=bytes(range(32)))
        model.fit_all(hot_cold())
        restored = BinaryWisard.from_dict(model.to_dict())
        assert restored.seed == model.seed
        probe = from_string("01110000", 2, None)
        assert restored.scores(probe) == model.scores(probe)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
