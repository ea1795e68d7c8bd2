"""Canonical signatures, function selectors and event topics."""

from __future__ import annotations

from typing import Any, Mapping

from .exc import ValidationError
from .protocol.constants import DEFAULT_FUNCTION_NAME, SELECTOR_SIZE
from .types.parse import parse_fields
from .utils import keccak_hex

_SIGNED_ENTRY_TYPES = ('function', 'event', 'error')


def fn_signature(entry: Mapping[str, Any]) -> str:
    """Canonical ``name(type,type,...)`` signature of an interface entry.

    Tuples expand to ``(t1,t2,...)`` followed by their array suffix, and
    integer aliases are normalised (``uint`` -> ``uint256``)::

        >>> fn_signature({"type": "function", "name": "transfer",
        ...               "inputs": [{"type": "address"}, {"type": "uint"}]})
        'transfer(address,uint256)'
    """
    kind = entry.get('type') if isinstance(entry, Mapping) else None
    if kind not in _SIGNED_ENTRY_TYPES:
        raise ValidationError(f"Cannot build a signature for entry: {entry!r}")
    name = entry.get('name') or DEFAULT_FUNCTION_NAME
    fields = parse_fields(entry.get('inputs'))
    return f"{name}({','.join(f.type.canonical for f in fields)})"


def ev_sig_hash(entry: Mapping[str, Any]) -> str:
    """Full Keccak-256 hash of the signature (64 hex chars, no prefix).

    Used unmodified as topic zero of non-anonymous events.
    """
    return keccak_hex(fn_signature(entry))


def fn_sig_hash(entry: Mapping[str, Any]) -> str:
    """4-byte function selector as 8 hex chars, no prefix."""
    return ev_sig_hash(entry)[:SELECTOR_SIZE * 2]


def selector(entry: Mapping[str, Any]) -> bytes:
    """4-byte function selector as raw bytes."""
    return bytes.fromhex(fn_sig_hash(entry))
