"""
Tests for Sample construction, iteration and serialization
"""

import pytest
import numpy as np

from wisard import BitOrder, Sample


def bit_string(bits):
    return "".join("1" if b else "0" for b in bits)


class TestConstruction:
    def test_from_raw_parts(self):
        s = Sample.from_raw_parts([0, 1, 1, 0], 2, "x")
        assert len(s) == 4
        assert s.value_width == 2
        assert s.label == "x"
        assert s.num_values == 2

    def test_into_raw_parts(self):
        bits, width, label, order = Sample([1, 0, 1], 3, 7).into_raw_parts()
        assert bits.dtype == np.bool_
        assert bits.tolist() == [True, False, True]
        assert width == 3
        assert label == 7
        assert order is BitOrder.LSB0

    @pytest.mark.parametrize("order", list(BitOrder))
    def test_raw_parts_round_trip(self, order):
        s = Sample.from_values([1, 2, 3], 2, "a", order)
        restored = Sample.from_raw_parts(*s.into_raw_parts())
        assert restored == s
        assert restored.values() == [1, 2, 3]
        assert restored.bit_order is order

    def test_width_must_divide(self):
        with pytest.raises(ValueError):
            Sample([0, 1, 0], 2, "x")

    def test_width_must_be_positive(self):
        with pytest.raises(ValueError):
            Sample([0, 1], 0, "x")

    def test_width_must_be_integer(self):
        with pytest.raises(TypeError):
            Sample([0, 1], 1.0, "x")

    def test_empty_sample(self):
        s = Sample([], 4, None)
        assert s.is_empty()
        assert s.values() == []
        assert list(s.iter_values()) == []

    def test_from_values(self):
        s = Sample.from_values([2, 5], 3, "a")
        assert bit_string(s.bits) == "010101"
        assert s.values() == [2, 5]

    def test_from_values_msb0(self):
        s = Sample.from_values([1, 2], 2, "a", BitOrder.MSB0)
        assert bit_string(s.bits) == "0110"
        assert s.values() == [1, 2]
        assert s.bit_order is BitOrder.MSB0


class TestIteration:
    def test_iter_values_slices(self):
        s = Sample.from_values([0, 1, 2, 3], 2, "a")
        assert [bit_string(v) for v in s.iter_values()] == ["00", "10", "01", "11"]

    def test_iter_values_restartable(self):
        s = Sample.from_values([3, 1], 2, "a")
        first = [bit_string(v) for v in s.iter_values()]
        second = [bit_string(v) for v in s.iter_values()]
        assert first == second

    def test_values_concatenate_to_bits(self):
        s = Sample.from_values([6, 0, 7, 1], 3, "a")
        joined = np.concatenate(list(s.iter_values()))
        assert np.array_equal(joined, s.bits)

    def test_iter_bits(self):
        s = Sample([1, 0, 1, 1], 1, "a")
        assert list(s.iter_bits()) == [True, False, True, True]
        assert all(type(b) is bool for b in s.iter_bits())


class TestMutation:
    def test_set_value_width(self):
        s = Sample([0] * 12, 3, "a")
        s.set_value_width(4)
        assert s.value_width == 4
        s.value_width = 6
        assert s.num_values == 2

    def test_set_value_width_rejects_bad_width(self):
        s = Sample([0] * 12, 3, "a")
        with pytest.raises(ValueError):
            s.set_value_width(5)
        assert s.value_width == 3

    def test_set_bits_keeps_invariant(self):
        s = Sample([0] * 4, 2, "a")
        s.set_bits([1, 1, 1, 1, 0, 0])
        assert len(s) == 6
        with pytest.raises(ValueError):
            s.set_bits([1, 1, 1])

    def test_set_label(self):
        s = Sample([0, 1], 1, "a")
        s.set_label("b")
        assert s.label == "b"
        s.label = 3
        assert s.label == 3

    def test_copy_is_independent(self):
        s = Sample([0, 1, 0, 1], 2, "a")
        c = s.copy()
        assert c == s
        c.set_bits([1, 1, 0, 1])
        assert c != s
        assert s.bits.tolist() == [False, True, False, True]


class TestOwnership:
    def test_input_array_not_shared(self):
        arr = np.zeros(4, dtype=bool)
        s = Sample(arr, 2, "a")
        arr[0] = True
        assert not s.bits.any()

    def test_set_bits_copies(self):
        s = Sample([0, 0], 1, "a")
        arr = np.array([True, False])
        s.set_bits(arr)
        arr[1] = True
        assert s.bits.tolist() == [True, False]

    def test_views_are_read_only(self):
        s = Sample([0, 1, 1, 0], 2, "a")
        with pytest.raises(ValueError):
            s.bits[0] = True
        for value in s.iter_values():
            with pytest.raises(ValueError):
                value[0] = True
        assert s.values() == [2, 1]

    def test_raw_parts_are_detached(self):
        s = Sample([0, 1, 1, 0], 2, "a")
        bits, _, _, _ = s.into_raw_parts()
        bits[0] = True
        assert s.values() == [2, 1]


class TestSerialization:
    def test_dict_round_trip(self):
        s = Sample.from_values([5, 9, 1], 5, ("walk", 2), BitOrder.MSB0)
        restored = Sample.from_dict(s.to_dict())
        assert restored == s
        assert restored.values() == [5, 9, 1]

    def test_packed_size(self):
        d = Sample([1] * 17, 17, "a").to_dict()
        assert len(d['bits']) == 3
        assert d['num_bits'] == 17


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
