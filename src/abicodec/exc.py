"""Exception hierarchy for abicodec."""


class AbiError(Exception):
    """Base exception for all abicodec errors."""


class ValidationError(AbiError):
    """Malformed or unsupported interface descriptor.

    Raised while compiling codecs, before any value is encoded.
    """


class EncodingError(AbiError):
    """Failed to encode a Python value with a codec."""


class DecodingError(AbiError):
    """Failed to decode a binary payload with a codec."""


class BoundsError(EncodingError, DecodingError):
    """Integer value outside the bit width declared by its type."""

    def __init__(self, value: int, bits: int, signed: bool) -> None:
        self.value = value
        self.bits = bits
        self.signed = signed
        kind = 'int' if signed else 'uint'
        super().__init__(f"value {value} out of bounds for {kind}{bits}")


class StructuralError(AbiError):
    """Payload or call envelope does not have the expected shape."""
