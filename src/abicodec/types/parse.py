"""Descriptor -> type tree parsing.

Grammar::

    Type := Base | Type "[" [Digits] "]"
    Base := "string" | "bytes" | "bytes" Digits | "address" | "bool"
          | ("uint" | "int") [Digits] | "tuple"

Tuple children come from the descriptor's ``components`` list.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence

from ..exc import ValidationError
from ..protocol.constants import MAX_BITS, WORD_SIZE
from .base import (
    AbiType, Address, Bool, Bytes, DynArray, Field, FixedArray,
    FixedBytes, Int, String, Tuple, Uint,
)

_ARRAY_RE = re.compile(r'^(.+)\[(\d*)\]$')
_INT_RE = re.compile(r'^(u?)int(\d*)$')
_FIXED_BYTES_RE = re.compile(r'^bytes(\d+)$')

_SIMPLE: dict[str, AbiType] = {
    'address': Address(),
    'bool': Bool(),
    'bytes': Bytes(),
    'string': String(),
}


def parse_type(type_str: str, components: Sequence[Mapping[str, Any]] | None = None) -> AbiType:
    """Parse a type string into a type tree.

    Parameters
    ----------
    type_str : str
        Type descriptor, e.g. ``"uint256"``, ``"bytes32[2][]"`` or ``"tuple[]"``.
    components : Sequence[Mapping] | None
        Child descriptors; required when the base type is ``tuple``.

    Raises
    ------
    ValidationError
        If the descriptor is unknown or malformed.
    """
    if not isinstance(type_str, str) or not type_str:
        raise ValidationError(f"Invalid type descriptor: {type_str!r}")

    m = _ARRAY_RE.match(type_str)
    if m:
        inner = parse_type(m.group(1), components)
        if m.group(2) == '':
            return DynArray(inner)
        length = int(m.group(2))
        if length == 0:
            raise ValidationError(f"Zero-length array in type {type_str!r}")
        return FixedArray(inner, length)

    simple = _SIMPLE.get(type_str)
    if simple is not None:
        return simple

    if type_str == 'tuple':
        if components is None:
            raise ValidationError(f"Tuple type {type_str!r} has no components")
        return Tuple(tuple(parse_field(c) for c in components))

    m = _INT_RE.match(type_str)
    if m:
        bits = int(m.group(2)) if m.group(2) else MAX_BITS
        if bits <= 0 or bits > MAX_BITS or bits % 8:
            raise ValidationError(f"Invalid integer width in type {type_str!r}")
        return Int(bits) if m.group(1) == '' else Uint(bits)

    m = _FIXED_BYTES_RE.match(type_str)
    if m:
        size = int(m.group(1))
        if not 1 <= size <= WORD_SIZE:
            raise ValidationError(f"Invalid fixed bytes size in type {type_str!r}")
        return FixedBytes(size)

    raise ValidationError(f"Unknown type descriptor: {type_str!r}")


def parse_field(descriptor: Mapping[str, Any]) -> Field:
    """Parse one component descriptor (``{"name", "type", "components"}``)."""
    if not isinstance(descriptor, Mapping) or 'type' not in descriptor:
        raise ValidationError(f"Invalid component descriptor: {descriptor!r}")
    return Field(
        name=descriptor.get('name') or None,
        type=parse_type(descriptor['type'], descriptor.get('components')),
        indexed=bool(descriptor.get('indexed', False)),
    )


def parse_fields(descriptors: Sequence[Mapping[str, Any]] | None) -> tuple[Field, ...]:
    """Parse an argument list into fields."""
    return tuple(parse_field(d) for d in descriptors or ())
