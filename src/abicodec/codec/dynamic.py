"""Variable-length codecs: ``bytes``, ``string`` and arrays.

These produce the out-of-line encoding only; the compiler wraps them in a
:class:`~abicodec.codec.base.PointerCodec` whenever they are dynamic.
"""

from __future__ import annotations

from typing import Any, Sequence

from ..exc import DecodingError, EncodingError, ValidationError
from ..protocol.constants import WORD_SIZE, padded_length
from ..protocol.deserializer import Reader
from ..protocol.serializer import Writer
from .base import Codec


class BytesCodec(Codec):
    """Length word followed by the payload right-padded to a word boundary."""

    size = None

    def encode(self, value: Any) -> bytes:
        if not isinstance(value, (bytes, bytearray)):
            raise EncodingError(f"Expected bytes, got {type(value).__name__}")
        return self._encode_raw(bytes(value))

    @staticmethod
    def _encode_raw(raw: bytes) -> bytes:
        return len(raw).to_bytes(WORD_SIZE, 'big') + raw.ljust(padded_length(len(raw)), b'\x00')

    def decode_from(self, reader: Reader) -> bytes:
        length = reader.read_uint()
        if length > reader.remaining:
            raise DecodingError(
                f"bytes length {length} exceeds remaining data ({reader.remaining})"
            )
        return reader.read(padded_length(length))[:length]


class StringCodec(BytesCodec):
    """UTF-8 text with the ``bytes`` layout."""

    def encode(self, value: Any) -> bytes:
        if not isinstance(value, str):
            raise EncodingError(f"Expected str, got {type(value).__name__}")
        return self._encode_raw(value.encode('utf-8'))

    def decode_from(self, reader: Reader) -> str:
        raw = super().decode_from(reader)
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodingError(f"Invalid UTF-8 in string: {e}") from e


class ArrayCodec(Codec):
    """Fixed-length (``T[n]``) or dynamic-length (``T[]``) array.

    Fixed arrays are inlined when the element is static. Dynamic arrays
    write a count word first. Element pointers are relative to the first
    element.
    """

    def __init__(self, inner: Codec, length: int | None = None) -> None:
        if inner.size == 0:
            raise ValidationError(
                "Arrays of zero-size elements are not supported"
            )
        self.inner = inner
        self.length = length
        if length is not None and inner.size is not None:
            self.size = length * inner.size
        else:
            self.size = None

    def encode(self, value: Any) -> bytes:
        if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
            raise EncodingError(f"Expected a sequence, got {type(value).__name__}")
        if self.length is not None and len(value) != self.length:
            raise EncodingError(
                f"Expected {self.length} array elements, got {len(value)}"
            )
        writer = Writer(len(value) * self.inner.head_size)
        for item in value:
            self.inner.encode_into(writer, item)
        body = writer.finish()
        if self.length is None:
            return len(value).to_bytes(WORD_SIZE, 'big') + body
        return body

    def decode_from(self, reader: Reader) -> list:
        if self.length is None:
            count = reader.read_uint()
            # Reject counts the payload cannot possibly hold before allocating
            if count * self.inner.head_size > reader.remaining:
                raise DecodingError(
                    f"array length {count} exceeds remaining data ({reader.remaining})"
                )
        else:
            count = self.length
        region = reader.region()
        result = [self.inner.decode_from(region) for _ in range(count)]
        reader.pos = region.pos
        return result

    def __repr__(self) -> str:
        suffix = '' if self.length is None else self.length
        return f"ArrayCodec({self.inner!r}[{suffix}])"
