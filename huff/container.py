# huff/container.py
"""Self-describing container around the Huffman payload.

Layout, all integers big-endian::

    magic        4 bytes   b"HUFF"
    version      4 bytes   1
    size         4 bytes   length of the original input
    count        2 bytes   number of (symbol, frequency) entries
    table        5 * count 1-byte symbol + 4-byte frequency, ascending symbol
    payload      rest      codes packed MSB-first, last byte zero-padded

Empty input is stored as the 14-byte header with size 0 and count 0.
Single-symbol input stores its one table entry and no payload.
"""

import logging
import struct

from huff.bitio import BitReader, BitWriter
from huff.exceptions import (
    BadMagicError,
    CorruptPayloadError,
    InvalidTreeStateError,
    TruncatedInputError,
    UnsupportedVersionError,
)
from huff.huffman_codec import (
    ALPHABET_SIZE,
    build_frequency_table,
    build_tree,
    generate_codes,
    is_degenerate,
)
from huff.progress import OperationStatus, ProgressNotifier

logger = logging.getLogger(__name__)

MAGIC_NUMBER = b"HUFF"
VERSION = 1

HEADER = struct.Struct(">4sIIH")
HEADER_SIZE = HEADER.size
TABLE_ENTRY = struct.Struct(">BI")
MAX_ORIGINAL_SIZE = 0xFFFFFFFF

# codec milestones, in percent
ENCODE_START = 35
ENCODE_SPAN = 60
FINALIZING = 95


def create_empty_container():
    return HEADER.pack(MAGIC_NUMBER, VERSION, 0, 0)


def write_header(original_size, frequencies):
    entries = [
        (symbol, freq) for symbol, freq in enumerate(frequencies) if freq > 0
    ]
    out = bytearray(HEADER.pack(MAGIC_NUMBER, VERSION, original_size, len(entries)))
    for symbol, freq in entries:
        out += TABLE_ENTRY.pack(symbol, freq)
    return out


def is_valid_compressed_file(data):
    if data is None or len(data) < len(MAGIC_NUMBER):
        return False
    return bytes(data[: len(MAGIC_NUMBER)]) == MAGIC_NUMBER


def compress(data, progress=None):
    """Compress ``data`` into a container.

    ``progress`` is an optional ``sink(status, phase, percent)`` callable.
    Its notifications are advisory and never change the output.
    """
    data = bytes(data)
    if len(data) > MAX_ORIGINAL_SIZE:
        raise ValueError(
            f"Input of {len(data)} bytes exceeds the {MAX_ORIGINAL_SIZE} byte limit"
        )

    notify = ProgressNotifier(progress)

    if not data:
        return create_empty_container()

    notify(OperationStatus.BUILDING_FREQUENCY_TABLE, "Building frequency table", 5)
    frequencies = build_frequency_table(data)

    notify(OperationStatus.BUILDING_HUFFMAN_TREE, "Building Huffman tree", 15)
    root = build_tree(frequencies)

    notify(OperationStatus.GENERATING_CODES, "Generating Huffman codes", 25)
    codes = generate_codes(root)

    notify(OperationStatus.ENCODING, "Encoding data", ENCODE_START)
    out = write_header(len(data), frequencies)

    # a single distinct symbol is fully described by its count
    if not is_degenerate(root):
        encode_payload(data, codes, out, notify)

    notify(OperationStatus.WRITING_OUTPUT, "Finalizing output", FINALIZING)
    logger.debug("Compressed %d bytes into %d", len(data), len(out))
    return bytes(out)


def encode_payload(data, codes, out, notify):
    table = [None] * ALPHABET_SIZE
    for symbol, code in codes.items():
        table[symbol] = (int(code, 2), len(code))

    writer = BitWriter(out)
    total = len(data)
    interval = max(1, total // 100)

    for processed, symbol in enumerate(data, 1):
        value, length = table[symbol]
        writer.write_bits(value, length)
        if processed % interval == 0:
            notify(
                OperationStatus.ENCODING,
                "Encoding data",
                ENCODE_START + processed * ENCODE_SPAN // total,
            )

    writer.flush()


def read_header(data):
    """Validate the fixed header and return ``(original_size, symbol_count)``.

    Checks run in a fixed order: length, magic, version.
    """
    if data is None or len(data) < HEADER_SIZE:
        raise TruncatedInputError("Invalid compressed data: too short")

    magic, version, original_size, symbol_count = HEADER.unpack_from(data)
    if magic != MAGIC_NUMBER:
        raise BadMagicError("Invalid file format: not a Huffman compressed file")
    if version != VERSION:
        raise UnsupportedVersionError(version)

    return original_size, symbol_count


def read_frequency_table(data, symbol_count):
    """Parse the frequency table that follows the header.

    Returns the 256-entry frequency list and the payload offset.
    """
    if symbol_count > ALPHABET_SIZE:
        raise CorruptPayloadError(
            f"Corrupt frequency table: {symbol_count} symbols declared"
        )

    end = HEADER_SIZE + symbol_count * TABLE_ENTRY.size
    if len(data) < end:
        raise CorruptPayloadError("Unexpected end of stream in frequency table")

    frequencies = [0] * ALPHABET_SIZE
    previous = -1
    for symbol, freq in TABLE_ENTRY.iter_unpack(data[HEADER_SIZE:end]):
        if symbol <= previous:
            raise CorruptPayloadError(
                f"Corrupt frequency table: symbol {symbol} out of order"
            )
        if freq == 0:
            raise CorruptPayloadError(
                f"Corrupt frequency table: zero frequency for symbol {symbol}"
            )
        frequencies[symbol] = freq
        previous = symbol

    return frequencies, end


def decompress(data, progress=None):
    """Reconstruct the original bytes from a container.

    Raises a ``HuffmanFormatError`` subclass when the container is malformed.
    """
    original_size, symbol_count = read_header(data)

    notify = ProgressNotifier(progress)
    notify(OperationStatus.READING_FILE, "Reading compressed data", 5)

    if original_size == 0:
        notify(OperationStatus.WRITING_OUTPUT, "Finalizing output", FINALIZING)
        return b""

    notify(OperationStatus.BUILDING_FREQUENCY_TABLE, "Reading frequency table", 15)
    frequencies, offset = read_frequency_table(data, symbol_count)

    notify(OperationStatus.BUILDING_HUFFMAN_TREE, "Rebuilding Huffman tree", 25)
    root = build_tree(frequencies)
    if root is None:
        raise InvalidTreeStateError("Failed to rebuild Huffman tree")

    if sum(frequencies) != original_size:
        raise CorruptPayloadError(
            f"Corrupt frequency table: counts sum to {sum(frequencies)}, "
            f"expected {original_size}"
        )

    notify(OperationStatus.DECODING, "Decoding data", ENCODE_START)
    if is_degenerate(root):
        result = bytes([root.left.symbol]) * original_size
    else:
        # every code is at least one bit long
        payload_bits = 8 * (len(data) - offset)
        if original_size > payload_bits:
            raise CorruptPayloadError(
                f"Unexpected end of stream: payload holds at most {payload_bits} "
                f"symbols, expected {original_size}"
            )
        result = decode_payload(data, offset, root, original_size, notify)

    notify(OperationStatus.WRITING_OUTPUT, "Finalizing output", FINALIZING)
    logger.debug("Decompressed %d bytes into %d", len(data), len(result))
    return result


def decode_payload(data, offset, root, original_size, notify):
    reader = BitReader(data, offset)
    result = bytearray()
    interval = max(1, original_size // 100)

    node = root
    decoded = 0
    try:
        while decoded < original_size:
            node = node.right if reader.read_bit() else node.left
            if node.is_leaf():
                result.append(node.symbol)
                decoded += 1
                node = root
                if decoded % interval == 0:
                    notify(
                        OperationStatus.DECODING,
                        "Decoding data",
                        ENCODE_START + decoded * ENCODE_SPAN // original_size,
                    )
    except EOFError as exc:
        raise CorruptPayloadError(
            f"Unexpected end of stream: decoded {decoded} of {original_size} bytes"
        ) from exc

    return bytes(result)
