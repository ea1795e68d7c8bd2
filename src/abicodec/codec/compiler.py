"""Compile type trees and interface descriptors into codecs."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..exc import ValidationError
from ..protocol.constants import TypeTag
from ..types.base import AbiType, Field
from ..types.parse import parse_field, parse_fields
from .base import Codec, PointerCodec
from .composite import StructCodec, TupleCodec
from .dynamic import ArrayCodec, BytesCodec, StringCodec
from .primitives import AddressCodec, BoolCodec, FixedBytesCodec, IntegerCodec


def compile_type(abi_type: AbiType) -> Codec:
    """Build the codec for one type tree node.

    Every dynamic result (strings, bytes, dynamic arrays, and tuples or
    fixed arrays holding a dynamic member) comes back pointer-wrapped,
    ready to be embedded in an enclosing head.
    """
    tag = abi_type.tag

    if tag is TypeTag.UINT:
        return IntegerCodec(abi_type.bits, signed=False)
    if tag is TypeTag.INT:
        return IntegerCodec(abi_type.bits, signed=True)
    if tag is TypeTag.ADDRESS:
        return AddressCodec()
    if tag is TypeTag.BOOL:
        return BoolCodec()
    if tag is TypeTag.FIXED_BYTES:
        return FixedBytesCodec(abi_type.size)
    if tag is TypeTag.BYTES:
        return PointerCodec(BytesCodec())
    if tag is TypeTag.STRING:
        return PointerCodec(StringCodec())

    if tag is TypeTag.FIXED_ARRAY:
        out: Codec = ArrayCodec(compile_type(abi_type.inner), abi_type.length)
        # Fixed arrays of dynamic elements are pointer-wrapped too, for
        # wire compatibility with deployed encoders.
        if out.size is None:
            out = PointerCodec(out)
        return out
    if tag is TypeTag.DYN_ARRAY:
        return PointerCodec(ArrayCodec(compile_type(abi_type.inner)))

    if tag is TypeTag.TUPLE:
        out = compile_fields(abi_type.fields)
        if out.size is None:
            out = PointerCodec(out)
        return out

    raise ValidationError(f"Unsupported type: {abi_type!r}")


def compile_fields(fields: Sequence[Field]) -> TupleCodec:
    """Tuple layout for ``fields``: keyed record when all are named."""
    if all(f.name for f in fields):
        return StructCodec([(f.name, compile_type(f.type)) for f in fields])
    return TupleCodec([compile_type(f.type) for f in fields])


def map_component(descriptor: Mapping[str, Any]) -> Codec:
    """Codec for a single component descriptor, e.g. ``{"type": "uint256[]"}``."""
    return compile_type(parse_field(descriptor).type)


def map_args(descriptors: Sequence[Mapping[str, Any]]) -> Codec:
    """Codec for a function's argument (or return value) list.

    A single argument is encoded as-is, so callers pass and receive the
    bare value. Several arguments form a top-level tuple (never
    pointer-wrapped): a dict when every argument is named, otherwise a
    positional tuple.
    """
    fields = parse_fields(descriptors)
    if len(fields) == 1:
        return compile_type(fields[0].type)
    return compile_fields(fields)
