"""Codec base class and the pointer wrapper for dynamic values."""

from __future__ import annotations

from typing import Any

from ..protocol.constants import WORD_SIZE
from ..protocol.deserializer import Reader
from ..protocol.serializer import Writer


class Codec:
    """A compiled encoder/decoder for one ABI type.

    Attributes
    ----------
    size : int | None
        Encoded byte size (a multiple of 32) for static types, ``None``
        for dynamic types.
    """

    size: int | None = None

    @property
    def head_size(self) -> int | None:
        """Bytes occupied inside an enclosing head."""
        return self.size

    def encode(self, value: Any) -> bytes:
        """Encode ``value`` as a standalone payload."""
        raise NotImplementedError

    def encode_into(self, writer: Writer, value: Any) -> None:
        """Encode ``value`` into the head of an enclosing region."""
        writer.write(self.encode(value))

    def decode_from(self, reader: Reader) -> Any:
        raise NotImplementedError

    def decode(self, data: bytes | bytearray | memoryview) -> Any:
        """Decode a standalone payload; every byte must be consumed."""
        reader = Reader(data)
        value = self.decode_from(reader)
        reader.finish()
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size})"


class PointerCodec(Codec):
    """Stores the wrapped value out of line, behind a 32-byte offset word."""

    size = None

    def __init__(self, inner: Codec) -> None:
        self.inner = inner

    @property
    def head_size(self) -> int:
        return WORD_SIZE

    def encode(self, value: Any) -> bytes:
        writer = Writer(WORD_SIZE)
        self.encode_into(writer, value)
        return writer.finish()

    def encode_into(self, writer: Writer, value: Any) -> None:
        writer.write_pointer(self.inner.encode(value))

    def decode_from(self, reader: Reader) -> Any:
        offset = reader.read_uint()
        return self.inner.decode_from(reader.jump(offset))

    def __repr__(self) -> str:
        return f"PointerCodec({self.inner!r})"
