# huff/huffman_codec.py

import heapq
from collections import Counter

ALPHABET_SIZE = 256


class HuffmanNode:
    def __init__(self, symbol=None, freq=0, left=None, right=None, key=None):
        self.symbol = symbol
        self.freq = freq
        self.left = left
        self.right = right
        # smallest byte value in this subtree, breaks frequency ties
        self.key = symbol if key is None else key

    def is_leaf(self):
        return self.left is None and self.right is None

    def __lt__(self, other):
        return (self.freq, self.key) < (other.freq, other.key)

    def __repr__(self):
        if self.is_leaf():
            return f"Leaf(symbol={self.symbol}, freq={self.freq})"
        return f"Internal(freq={self.freq})"


def build_frequency_table(data):
    frequencies = [0] * ALPHABET_SIZE
    for symbol, count in Counter(data).items():
        frequencies[symbol] = count
    return frequencies


def build_tree(frequencies):
    """Build the Huffman tree for a 256-entry frequency table.

    Returns None when every count is zero. A table with a single non-zero
    count yields an internal root whose left child is the real leaf and whose
    right child is a zero-frequency placeholder with no symbol, so the real
    symbol still gets the one-bit code "0".
    """
    heap = [
        HuffmanNode(symbol, freq)
        for symbol, freq in enumerate(frequencies)
        if freq > 0
    ]
    if not heap:
        return None

    if len(heap) == 1:
        single = heap[0]
        return HuffmanNode(freq=single.freq, left=single, right=HuffmanNode(freq=0), key=single.key)

    heapq.heapify(heap)

    while len(heap) > 1:
        left = heapq.heappop(heap)
        right = heapq.heappop(heap)
        merged = HuffmanNode(
            freq=left.freq + right.freq,
            left=left,
            right=right,
            key=min(left.key, right.key),
        )
        heapq.heappush(heap, merged)

    return heap[0]


def is_degenerate(root):
    """True for the single-symbol tree produced by build_tree."""
    return (
        root is not None
        and not root.is_leaf()
        and root.right.is_leaf()
        and root.right.symbol is None
    )


def generate_codes(node, current="", codes=None):
    if codes is None:
        codes = {}

    if node is None:
        return codes

    if node.is_leaf():
        # placeholder leaves carry no symbol and get no code
        if node.symbol is not None:
            codes[node.symbol] = current or "0"
        return codes

    generate_codes(node.left, current + "0", codes)
    generate_codes(node.right, current + "1", codes)

    return codes


def count_leaves(node):
    if node is None:
        return 0
    if node.is_leaf():
        return 0 if node.symbol is None else 1
    return count_leaves(node.left) + count_leaves(node.right)
