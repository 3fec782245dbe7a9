# huff/bitio.py


class BitWriter:
    """Packs bits most-significant-bit first into a bytearray."""

    def __init__(self, out=None):
        self.out = out if out is not None else bytearray()
        self.accumulator = 0
        self.num_bits_filled = 0

    def write_bit(self, bit):
        self.write_bits(1 if bit else 0, 1)

    def write_bits(self, value, count):
        # value holds `count` bits, highest bit first
        self.accumulator = (self.accumulator << count) | value
        self.num_bits_filled += count
        while self.num_bits_filled >= 8:
            self.num_bits_filled -= 8
            self.out.append((self.accumulator >> self.num_bits_filled) & 0xFF)
        self.accumulator &= (1 << self.num_bits_filled) - 1

    def write_code(self, code):
        self.write_bits(int(code, 2), len(code))

    def flush(self):
        """Emit a trailing partial byte, zero-padded in its low-order bits."""
        if self.num_bits_filled > 0:
            self.out.append((self.accumulator << (8 - self.num_bits_filled)) & 0xFF)
            self.accumulator = 0
            self.num_bits_filled = 0
        return self.out


class BitReader:
    """Yields bits most-significant-bit first from a byte buffer."""

    def __init__(self, data, offset=0):
        self.data = data
        self.pos = offset
        self.current_byte = 0
        self.num_bits_remaining = 0

    def read_bit(self):
        if self.num_bits_remaining == 0:
            if self.pos >= len(self.data):
                raise EOFError("Unexpected end of stream")
            self.current_byte = self.data[self.pos]
            self.pos += 1
            self.num_bits_remaining = 8
        self.num_bits_remaining -= 1
        return (self.current_byte >> self.num_bits_remaining) & 1
