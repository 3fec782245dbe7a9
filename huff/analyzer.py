# huff/analyzer.py

import math

from huff.container import HEADER_SIZE, TABLE_ENTRY
from huff.huffman_codec import build_frequency_table, build_tree, generate_codes


def entropy(frequencies):
    """Shannon entropy of the distribution, in bits per symbol."""
    total = sum(frequencies)
    if total == 0:
        return 0.0
    return -sum(
        (freq / total) * math.log2(freq / total) for freq in frequencies if freq
    )


def code_statistics(data):
    """Summarise the code Huffman would assign to ``data``, without compressing it."""
    frequencies = build_frequency_table(data)
    codes = generate_codes(build_tree(frequencies))

    total_symbols = sum(frequencies)
    total_bits = sum(frequencies[symbol] * len(code) for symbol, code in codes.items())
    lengths = [len(code) for code in codes.values()]

    if total_symbols:
        average = total_bits / total_symbols
        ratio = average / 8
        # single-symbol input stores no payload
        payload = 0 if len(codes) == 1 else math.ceil(total_bits / 8)
        estimated = HEADER_SIZE + TABLE_ENTRY.size * len(codes) + payload
    else:
        average = 0.0
        ratio = 1.0
        estimated = HEADER_SIZE

    return {
        "uniqueSymbols": len(codes),
        "totalSymbols": total_symbols,
        "averageCodeLength": average,
        "maxCodeLength": max(lengths, default=0),
        "minCodeLength": min(lengths, default=0),
        "theoreticalCompressionRatio": ratio,
        "entropy": entropy(frequencies),
        "estimatedCompressedSize": estimated,
    }
