import math

import pytest

from huff.analyzer import code_statistics, entropy
from huff.container import compress
from huff.huffman_codec import build_frequency_table


def test_statistics_for_simple_text():
    stats = code_statistics(b"AAAAABBBCC")
    assert stats["uniqueSymbols"] == 3
    assert stats["totalSymbols"] == 10
    # A=1 bit x5, B=2 x3, C=2 x2
    assert stats["averageCodeLength"] == pytest.approx(1.5)
    assert stats["minCodeLength"] == 1
    assert stats["maxCodeLength"] == 2
    assert stats["theoreticalCompressionRatio"] == pytest.approx(1.5 / 8)


def test_statistics_for_empty_data():
    stats = code_statistics(b"")
    assert stats["uniqueSymbols"] == 0
    assert stats["totalSymbols"] == 0
    assert stats["averageCodeLength"] == 0
    assert stats["maxCodeLength"] == 0
    assert stats["minCodeLength"] == 0
    assert stats["entropy"] == 0
    assert stats["theoreticalCompressionRatio"] == 1.0


def test_statistics_for_single_symbol():
    stats = code_statistics(b"Z" * 1000)
    assert stats["uniqueSymbols"] == 1
    assert stats["averageCodeLength"] == 1
    assert stats["minCodeLength"] == stats["maxCodeLength"] == 1


def test_statistics_are_idempotent(rng):
    data = bytes(rng.getrandbits(8) for _ in range(1000))
    assert code_statistics(data) == code_statistics(data)


def test_all_byte_values_need_eight_bits():
    stats = code_statistics(bytes(range(256)))
    assert stats["uniqueSymbols"] == 256
    assert stats["averageCodeLength"] == 8
    assert stats["theoreticalCompressionRatio"] == 1.0


@pytest.mark.parametrize(
    "data",
    [
        b"AAAAABBBCC",
        b"abracadabra",
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit".encode(),
        bytes([1, 1, 1, 1, 2, 2, 3, 4, 5, 6, 7, 8, 9]),
    ],
)
def test_average_code_length_is_bounded_by_entropy(data):
    stats = code_statistics(data)
    assert stats["averageCodeLength"] >= stats["entropy"] - 1e-9
    assert stats["averageCodeLength"] < stats["entropy"] + 1
    assert 0 < stats["averageCodeLength"] < 8


def test_entropy_of_uniform_distribution():
    assert entropy([1] * 4 + [0] * 252) == pytest.approx(2.0)
    assert entropy(build_frequency_table(bytes(range(256)))) == pytest.approx(math.log2(256))


def test_estimated_size_matches_real_container(rng):
    data = bytes(rng.choice(b"etaoin shrdlu") for _ in range(5000))
    assert code_statistics(data)["estimatedCompressedSize"] == len(compress(data))


def test_estimated_size_for_single_symbol_matches_real_container():
    data = b"q" * 77
    assert code_statistics(data)["estimatedCompressedSize"] == len(compress(data))
