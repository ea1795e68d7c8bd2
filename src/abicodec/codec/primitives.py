"""Single-word codecs: integers, addresses, booleans, fixed-size bytes."""

from __future__ import annotations

from typing import Any

from ..exc import BoundsError, DecodingError, EncodingError
from ..protocol.constants import ADDRESS_SIZE, WORD_SIZE
from ..protocol.deserializer import Reader
from ..utils import strip0x
from .base import Codec

_ADDRESS_PAD = WORD_SIZE - ADDRESS_SIZE


class IntegerCodec(Codec):
    """``uint<bits>`` / ``int<bits>`` stored as a 256-bit two's complement word.

    Both directions check the declared bit width; values are never
    truncated or wrapped.
    """

    size = WORD_SIZE

    def __init__(self, bits: int = 256, signed: bool = False) -> None:
        self.bits = bits
        self.signed = signed
        if signed:
            self.min_value = -(1 << (bits - 1))
            self.max_value = (1 << (bits - 1)) - 1
        else:
            self.min_value = 0
            self.max_value = (1 << bits) - 1

    def check_bounds(self, value: int) -> None:
        if not self.min_value <= value <= self.max_value:
            raise BoundsError(value, self.bits, self.signed)

    def encode(self, value: Any) -> bytes:
        if not isinstance(value, int):
            raise EncodingError(
                f"Expected int for {self._type_name}, got {type(value).__name__}"
            )
        self.check_bounds(value)
        return value.to_bytes(WORD_SIZE, 'big', signed=self.signed)

    def decode_from(self, reader: Reader) -> int:
        value = int.from_bytes(reader.read_word(), 'big', signed=self.signed)
        self.check_bounds(value)
        return value

    @property
    def _type_name(self) -> str:
        return f"{'int' if self.signed else 'uint'}{self.bits}"

    def __repr__(self) -> str:
        return f"IntegerCodec({self._type_name})"


class AddressCodec(Codec):
    """20-byte address, left-padded with 12 zero bytes."""

    size = WORD_SIZE

    def encode(self, value: Any) -> bytes:
        if isinstance(value, str):
            try:
                raw = bytes.fromhex(strip0x(value))
            except ValueError as e:
                raise EncodingError(f"Invalid address {value!r}: {e}") from e
        elif isinstance(value, (bytes, bytearray)):
            raw = bytes(value)
        else:
            raise EncodingError(f"Expected address, got {type(value).__name__}")
        if len(raw) != ADDRESS_SIZE:
            raise EncodingError(
                f"Invalid address {value!r}: expected {ADDRESS_SIZE} bytes, got {len(raw)}"
            )
        return b'\x00' * _ADDRESS_PAD + raw

    def decode_from(self, reader: Reader) -> str:
        word = reader.read_word()
        return '0x' + word[_ADDRESS_PAD:].hex()


class BoolCodec(Codec):
    """Boolean stored in the low byte of a word."""

    size = WORD_SIZE

    def encode(self, value: Any) -> bytes:
        if value not in (True, False):
            raise EncodingError(f"Expected bool, got {value!r}")
        return (1 if value else 0).to_bytes(WORD_SIZE, 'big')

    def decode_from(self, reader: Reader) -> bool:
        value = int.from_bytes(reader.read_word(), 'big')
        if value > 1:
            raise DecodingError(f"Invalid bool value: {value:#x}")
        return value == 1


class FixedBytesCodec(Codec):
    """``bytes<n>``: n raw bytes right-padded with zeros to one word."""

    size = WORD_SIZE

    def __init__(self, length: int) -> None:
        self.length = length

    def encode(self, value: Any) -> bytes:
        if not isinstance(value, (bytes, bytearray)):
            raise EncodingError(
                f"Expected bytes for bytes{self.length}, got {type(value).__name__}"
            )
        if len(value) != self.length:
            raise EncodingError(
                f"Expected {self.length} bytes for bytes{self.length}, got {len(value)}"
            )
        return bytes(value).ljust(WORD_SIZE, b'\x00')

    def decode_from(self, reader: Reader) -> bytes:
        return reader.read_word()[:self.length]

    def __repr__(self) -> str:
        return f"FixedBytesCodec(bytes{self.length})"
