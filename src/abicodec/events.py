"""Event binder: decode logs and build topic filters.

Usage::

    from abicodec import events

    ev = events(ERC20_ABI)
    value = ev['Transfer'].decode(log['topics'], log['data'])
    flt = ev['Transfer'].topics({'from': None, 'to': my_address, 'value': None})
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Mapping, Sequence

from eth_utils import keccak

from .codec.base import Codec
from .codec.compiler import compile_fields, compile_type
from .exc import EncodingError, StructuralError
from .protocol.constants import TypeTag
from .signature import ev_sig_hash, fn_signature
from .types.base import AbiType, Field
from .types.parse import parse_fields
from .utils import add0x, bytes_to_hex, hex_to_bytes, strip0x


class EventMethod:
    """Decoder and topic builder for one event entry.

    Indexed inputs that fit a single word (integers, bool, address, fixed
    bytes) are ABI-encoded straight into their topic and decoded back.
    Every other indexed input is stored as the Keccak-256 hash of its
    encoding; decoding returns that raw topic since the value cannot be
    recovered.
    """

    def __init__(self, entry: Mapping[str, Any]) -> None:
        self.name: str = entry['name']
        self.signature = fn_signature(entry)
        self.topic = ev_sig_hash(entry)
        self.anonymous = bool(entry.get('anonymous', False))
        self.fields: tuple[Field, ...] = parse_fields(entry.get('inputs'))
        self.named = all(f.name for f in self.fields)

        plain = [f for f in self.fields if not f.indexed]
        if not self.named:
            plain = [Field(None, f.type) for f in plain]
        self._data_codec = compile_fields(plain)
        self._indexed: list[tuple[Field, Codec | None]] = [
            (f, compile_type(f.type) if f.type.is_word else None)
            for f in self.fields if f.indexed
        ]

    def decode(self, topics: Sequence[str], data: str | bytes) -> tuple | dict[str, Any]:
        """Decode a log entry back into the event's inputs.

        Returns a dict when every input is named, otherwise a tuple in
        declaration order.

        Raises
        ------
        StructuralError
            Missing or mismatched signature topic, or a wrong number of
            indexed topics.
        """
        topics = list(topics)
        if not self.anonymous:
            if not topics or not topics[0]:
                raise StructuralError(f"No signature topic for non-anonymous event {self.name}")
            if strip0x(topics[0]).lower() != self.topic:
                raise StructuralError(f"Wrong signature topic for event {self.signature}")
            topics = topics[1:]
        if len(topics) != len(self._indexed):
            raise StructuralError(
                f"Event {self.signature} expects {len(self._indexed)} indexed topics, "
                f"got {len(topics)}"
            )

        plain = self._data_codec.decode(hex_to_bytes(data))
        indexed = [
            codec.decode(hex_to_bytes(topic)) if codec is not None else topic
            for (_, codec), topic in zip(self._indexed, topics)
        ]

        if self.named:
            result = dict(plain)
            for (f, _), value in zip(self._indexed, indexed):
                result[f.name] = value
            return {f.name: result[f.name] for f in self.fields}

        plain_iter = iter(plain)
        indexed_iter = iter(indexed)
        return tuple(
            next(indexed_iter) if f.indexed else next(plain_iter)
            for f in self.fields
        )

    def topics(self, values: Sequence[Any] | Mapping[str, Any]) -> list[str | None]:
        """Topic filter for matching this event.

        ``values`` must hold one entry per declared input, indexed or not
        (``None`` matches anything). Non-indexed values are accepted but
        ignored.
        """
        if isinstance(values, Mapping):
            if not self.named:
                raise StructuralError(
                    f"Event {self.signature} has unnamed inputs; pass values positionally"
                )
            names = [f.name for f in self.fields]
            missing = [n for n in names if n not in values]
            unknown = [k for k in values if k not in names]
            if missing or unknown:
                raise StructuralError(
                    f"Event {self.signature} values do not match its inputs: "
                    f"missing {missing}, unknown {unknown}"
                )
        elif len(values) != len(self.fields):
            raise StructuralError(
                f"Event {self.signature} expects values for all {len(self.fields)} inputs, "
                f"got {len(values)}"
            )
        result: list[str | None] = []
        if not self.anonymous:
            result.append(add0x(self.topic))
        codecs = iter(self._indexed)
        for i, f in enumerate(self.fields):
            if not f.indexed:
                continue
            _, codec = next(codecs)
            value = values[f.name] if isinstance(values, Mapping) else values[i]
            if value is None:
                result.append(None)
            elif codec is not None:
                result.append(bytes_to_hex(codec.encode(value)))
            else:
                result.append(bytes_to_hex(keccak(_hashed_topic_preimage(f.type, value))))
        return result

    def __repr__(self) -> str:
        return f"EventMethod({self.signature!r})"


def _hashed_topic_preimage(abi_type: AbiType, value: Any) -> bytes:
    """Bytes hashed into the topic of an indexed non-word input."""
    tag = abi_type.tag
    if tag is TypeTag.STRING:
        if not isinstance(value, str):
            raise EncodingError(f"Expected str, got {type(value).__name__}")
        return value.encode('utf-8')
    if tag is TypeTag.BYTES:
        if not isinstance(value, (bytes, bytearray)):
            raise EncodingError(f"Expected bytes, got {type(value).__name__}")
        return bytes(value)
    if tag in (TypeTag.FIXED_ARRAY, TypeTag.DYN_ARRAY):
        inner = compile_type(abi_type.inner)
        return b''.join(inner.encode(item) for item in value)
    if tag is TypeTag.TUPLE:
        parts = []
        for i, f in enumerate(abi_type.fields):
            item = value[f.name] if isinstance(value, Mapping) else value[i]
            parts.append(compile_type(f.type).encode(item))
        return b''.join(parts)
    raise EncodingError(f"Unsupported indexed type {abi_type.canonical}")


def events(abi: Sequence[Mapping[str, Any]]) -> dict[str, EventMethod]:
    """Bind every named event entry of ``abi``.

    Overloaded event names are keyed by canonical signature.
    """
    entries = [e for e in abi if e.get('type') == 'event' and e.get('name')]
    name_counts = Counter(e['name'] for e in entries)
    result: dict[str, EventMethod] = {}
    for entry in entries:
        method = EventMethod(entry)
        key = method.signature if name_counts[method.name] > 1 else method.name
        result[key] = method
    return result
