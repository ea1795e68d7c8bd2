"""ABI type tree and descriptor parsing.

Usage::

    from abicodec.types import parse_type, DynArray, Address

    parse_type("address[]") == DynArray(Address())
"""

from __future__ import annotations

from .base import (
    AbiType, Uint, Int, Address, Bool, FixedBytes, Bytes, String,
    Field, Tuple, FixedArray, DynArray,
)
from .parse import parse_type, parse_field, parse_fields

__all__ = [
    # Tree nodes
    'AbiType', 'Uint', 'Int', 'Address', 'Bool', 'FixedBytes', 'Bytes', 'String',
    'Field', 'Tuple', 'FixedArray', 'DynArray',
    # Parsing
    'parse_type', 'parse_field', 'parse_fields',
]
