"""
Example: Hot or Cold

A toy temperature reading is four 2-bit values. Cold readings light up the
low end of the buffer, hot readings the high end. The script shows:
- Building a Dataset and reading its labels
- Training a BinaryWisard with a fixed permutation seed
- Per-label scores for unseen readings
- Swapping in a counting Bloom filter backend
"""

from wisard import (
    BinaryWisard,
    CountingBloomFilterBuilder,
    Dataset,
    LinearThermometer,
    Sample,
    WisardBase,
)


def reading(bits, label=None):
    return Sample([c == "1" for c in bits], 2, label)


def print_section(title):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def binary_model_demo():
    print_section("BINARY WISARD")

    data = Dataset.from_samples([
        reading("11100000", "cold"),
        reading("11110000", "cold"),
        reading("00001111", "hot"),
        reading("00000111", "hot"),
    ])
    print(f"   {data!r}, labels: {sorted(data.labels())}")

    model = BinaryWisard(input_width=8, address_width=2, labels=data.labels(), seed=7)
    model.fit_all(data)

    for bits in ("11000000", "00000011", "01100000", "00001110"):
        probe = reading(bits)
        scores = ", ".join(f"{label}={score}" for score, label in model.scores(probe))
        print(f"   {bits} -> {model.predict(probe):<5} ({scores})")


def bloom_model_demo():
    print_section("THERMOMETER + COUNTING BLOOM FILTERS")

    encoder = LinearThermometer(4)
    data = Dataset.from_samples([
        Sample.from_values([0, 1], 2, "cold"),
        Sample.from_values([1, 0], 2, "cold"),
        Sample.from_values([3, 2], 2, "hot"),
        Sample.from_values([2, 3], 2, "hot"),
    ])
    data.encode_inplace(encoder)

    builder = CountingBloomFilterBuilder(address_width=4, counter_width=2)
    model = WisardBase(input_width=8, address_width=4, labels=data.labels(), builder=builder)
    model.fit_all(data)

    for values in ([0, 0], [3, 3], [1, 1], [2, 2]):
        probe = encoder.encode(Sample.from_values(values, 2, None))
        print(f"   {values} -> {model.predict(probe)}  {model.scores(probe)}")


if __name__ == "__main__":
    binary_model_demo()
    bloom_model_demo()
