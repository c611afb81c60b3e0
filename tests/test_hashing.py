"""
Tests for the 64-bit hash function and pseudo-random generators
"""

import pytest

from wisard.hashing import (
    MASK64,
    HashConfig,
    SplitMix64,
    Xoshiro256PlusPlus,
    murmur_hash64a,
)


class TestMurmurHash:
    def test_empty_input_seed_zero(self):
        assert murmur_hash64a(b"", 0) == 0

    def test_deterministic(self):
        assert murmur_hash64a(b"wisard", 42) == murmur_hash64a(b"wisard", 42)

    def test_seed_changes_hash(self):
        assert murmur_hash64a(b"wisard", 1) != murmur_hash64a(b"wisard", 2)

    def test_tail_bytes_matter(self):
        hashes = {murmur_hash64a(bytes([0] * 8 + [i]), 0) for i in range(32)}
        assert len(hashes) == 32

    def test_fits_64_bits(self):
        for n in range(20):
            h = murmur_hash64a(bytes(range(n)), MASK64)
            assert 0 <= h <= MASK64


class TestHashConfig:
    def test_defaults_are_distinct(self):
        config = HashConfig()
        h1, h2 = config.hash_pair(b"\x01")
        assert h1 != h2

    def test_equal_seeds_rejected(self):
        with pytest.raises(ValueError):
            HashConfig(5, 5)

    def test_seed_range(self):
        with pytest.raises(ValueError):
            HashConfig(-1, 2)
        with pytest.raises(ValueError):
            HashConfig(1, MASK64 + 1)


class TestGenerators:
    def test_splitmix64_first_output(self):
        assert SplitMix64(0).next_u64() == 0xe220a8397b1dcdaf

    def test_xoshiro_seed_zero(self):
        rng = Xoshiro256PlusPlus.seed_from_u64(0)
        assert [rng.next_u64() for _ in range(3)] == [
            0x53175d61490b23df,
            0x61da6f3dc380d507,
            0x5c0fdf91ec9a7bfc,
        ]

    def test_xoshiro_seed_seven(self):
        rng = Xoshiro256PlusPlus.seed_from_u64(7)
        assert [rng.next_u64() for _ in range(3)] == [
            0x0e2c1a002aae913d,
            0x2c0fc8ddfa4e9e14,
            0xb7b311b3b0d45872,
        ]

    def test_zero_byte_seed_falls_back(self):
        a = Xoshiro256PlusPlus.from_seed(bytes(32))
        b = Xoshiro256PlusPlus.seed_from_u64(0)
        assert [a.next_u64() for _ in range(4)] == [b.next_u64() for _ in range(4)]

    def test_byte_seed_length(self):
        with pytest.raises(ValueError):
            Xoshiro256PlusPlus.from_seed(bytes(16))

    def test_all_zero_state_rejected(self):
        with pytest.raises(ValueError):
            Xoshiro256PlusPlus((0, 0, 0, 0))

    def test_from_any(self):
        a = Xoshiro256PlusPlus.from_any(7)
        b = Xoshiro256PlusPlus.seed_from_u64(7)
        assert a.next_u64() == b.next_u64()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
