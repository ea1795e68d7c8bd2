"""Tuple codecs: positional sequences and keyed records."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..exc import EncodingError, ValidationError
from ..protocol.deserializer import Reader
from ..protocol.serializer import Writer
from .base import Codec


class TupleCodec(Codec):
    """Positional tuple; decodes to a Python ``tuple``.

    Static when every member is static. Dynamic members are written to
    the tail of the tuple's own region.
    """

    def __init__(self, members: Sequence[Codec]) -> None:
        self.members = tuple(members)
        sizes = [m.size for m in self.members]
        self.size = None if None in sizes else sum(sizes)
        self._head_size = sum(m.head_size for m in self.members)

    def _values(self, value: Any) -> Sequence[Any]:
        if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
            raise EncodingError(f"Expected a sequence, got {type(value).__name__}")
        if len(value) != len(self.members):
            raise EncodingError(
                f"Expected {len(self.members)} values, got {len(value)}"
            )
        return value

    def encode(self, value: Any) -> bytes:
        items = self._values(value)
        writer = Writer(self._head_size)
        for member, item in zip(self.members, items):
            member.encode_into(writer, item)
        return writer.finish()

    def _decode_members(self, reader: Reader) -> list[Any]:
        region = reader.region()
        values = [m.decode_from(region) for m in self.members]
        reader.pos = region.pos
        return values

    def decode_from(self, reader: Reader) -> tuple:
        return tuple(self._decode_members(reader))

    def __repr__(self) -> str:
        return f"TupleCodec({list(self.members)!r})"


class StructCodec(TupleCodec):
    """Tuple whose members are all named; decodes to a ``dict``."""

    def __init__(self, members: Mapping[str, Codec] | Sequence[tuple[str, Codec]]) -> None:
        items = list(members.items()) if isinstance(members, Mapping) else list(members)
        names = [name for name, _ in items]
        seen: set[str] = set()
        for name in names:
            if name in seen:
                raise ValidationError(f"Duplicate field name {name!r}")
            seen.add(name)
        self.names = tuple(names)
        super().__init__([codec for _, codec in items])

    def _values(self, value: Any) -> Sequence[Any]:
        if not isinstance(value, Mapping):
            raise EncodingError(f"Expected a mapping, got {type(value).__name__}")
        missing = [n for n in self.names if n not in value]
        if missing:
            raise EncodingError(f"Missing fields: {', '.join(missing)}")
        return [value[n] for n in self.names]

    def decode_from(self, reader: Reader) -> dict[str, Any]:
        return dict(zip(self.names, self._decode_members(reader)))

    def __repr__(self) -> str:
        return f"StructCodec({dict(zip(self.names, self.members))!r})"
