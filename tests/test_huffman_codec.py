import pytest

from huff.huffman_codec import (
    ALPHABET_SIZE,
    build_frequency_table,
    build_tree,
    count_leaves,
    generate_codes,
    is_degenerate,
)


def _codes_for(data):
    return generate_codes(build_tree(build_frequency_table(data)))


def _assert_prefix_free(codes):
    values = list(codes.values())
    for i, a in enumerate(values):
        for j, b in enumerate(values):
            if i != j:
                assert not b.startswith(a), f"{a!r} is a prefix of {b!r}"


# ---------------------- Frequency table ----------------------

def test_frequency_table_simple_text():
    frequencies = build_frequency_table(b"AAAAABBBCC")
    assert frequencies[ord("A")] == 5
    assert frequencies[ord("B")] == 3
    assert frequencies[ord("C")] == 2
    assert sum(frequencies) == 10


def test_frequency_table_empty_input():
    frequencies = build_frequency_table(b"")
    assert len(frequencies) == ALPHABET_SIZE
    assert sum(frequencies) == 0


def test_frequency_table_all_byte_values():
    frequencies = build_frequency_table(bytes(range(256)))
    assert frequencies == [1] * 256


def test_frequency_table_high_bytes_are_unsigned():
    frequencies = build_frequency_table(bytes([0x80, 0xFF, 0xFF]))
    assert frequencies[0x80] == 1
    assert frequencies[0xFF] == 2


# ---------------------- Tree ----------------------

def test_tree_for_empty_table_is_none():
    assert build_tree([0] * 256) is None


def test_tree_root_frequency_is_total():
    root = build_tree(build_frequency_table(b"AAAAABBBCC"))
    assert root.freq == 10
    assert not root.is_leaf()
    assert count_leaves(root) == 3


def test_single_symbol_tree_is_degenerate():
    root = build_tree(build_frequency_table(b"A" * 5))
    assert root.freq == 5
    assert is_degenerate(root)
    assert count_leaves(root) == 1
    assert root.left.symbol == ord("A")
    assert root.right.symbol is None
    assert root.right.freq == 0


def test_single_zero_byte_still_gets_code_zero():
    codes = _codes_for(b"\x00" * 3)
    assert codes == {0: "0"}


def test_general_tree_is_not_degenerate():
    assert not is_degenerate(build_tree(build_frequency_table(b"AB")))


def test_tree_with_256_leaves():
    root = build_tree(build_frequency_table(bytes(range(256))))
    assert count_leaves(root) == 256


# ---------------------- Codes ----------------------

def test_codes_for_known_distribution():
    # C(2) and B(3) merge first; A(5) wins the tie with that node on byte value
    assert _codes_for(b"AAAAABBBCC") == {
        ord("A"): "0",
        ord("C"): "10",
        ord("B"): "11",
    }


def test_equal_frequencies_break_ties_on_byte_value():
    codes = generate_codes(build_tree([1, 1, 1, 1] + [0] * 252))
    assert codes == {0: "00", 1: "01", 2: "10", 3: "11"}


def test_codes_are_binary_and_non_empty(rng):
    data = bytes(rng.getrandbits(8) for _ in range(2000))
    for code in _codes_for(data).values():
        assert code
        assert set(code) <= {"0", "1"}


@pytest.mark.parametrize(
    "data",
    [
        b"AAAAABBBCC",
        bytes(range(256)),
        "The quick brown fox jumps over the lazy dog".encode(),
        bytes([0, 0, 0, 1, 1, 2, 3, 5, 8, 13, 21, 34]),
    ],
)
def test_codes_are_prefix_free(data):
    _assert_prefix_free(_codes_for(data))


def test_more_frequent_symbols_get_shorter_or_equal_codes():
    codes = _codes_for(b"A" * 50 + b"B" * 10 + b"C" * 5 + b"D")
    assert len(codes[ord("A")]) <= len(codes[ord("B")])
    assert len(codes[ord("B")]) <= len(codes[ord("C")])
    assert len(codes[ord("C")]) <= len(codes[ord("D")])


def test_codes_are_deterministic(rng):
    data = bytes(rng.choice(b"abcdefgh") for _ in range(500))
    assert _codes_for(data) == _codes_for(bytes(data))


def test_generate_codes_of_missing_tree_is_empty():
    assert generate_codes(None) == {}
