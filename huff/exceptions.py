# huff/exceptions.py


class HuffmanFormatError(ValueError):
    """Base class for every failure to decode a compressed container."""


class TruncatedInputError(HuffmanFormatError):
    pass


class BadMagicError(HuffmanFormatError):
    pass


class UnsupportedVersionError(HuffmanFormatError):
    def __init__(self, version):
        super().__init__(f"Unsupported file version: {version}")
        self.version = version


class CorruptPayloadError(HuffmanFormatError):
    pass


class InvalidTreeStateError(HuffmanFormatError):
    pass
