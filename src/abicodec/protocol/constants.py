"""Binary layout constants for the contract ABI."""

from __future__ import annotations

import enum

# ── Layout ─────────────────────────────────────────────────────────
WORD_SIZE = 32       # every head slot is one 32-byte word
SELECTOR_SIZE = 4    # function selector: first 4 bytes of the signature hash
ADDRESS_SIZE = 20

MAX_BITS = 256

# Name used for unnamed function entries in signatures.
DEFAULT_FUNCTION_NAME = 'function'


class TypeTag(enum.Enum):
    """Variant tags of the ABI type tree."""
    UINT = 'uint'
    INT = 'int'
    ADDRESS = 'address'
    BOOL = 'bool'
    FIXED_BYTES = 'fixed_bytes'
    BYTES = 'bytes'
    STRING = 'string'
    TUPLE = 'tuple'
    FIXED_ARRAY = 'fixed_array'
    DYN_ARRAY = 'dyn_array'


# Tags whose values always fit into a single 32-byte word.
WORD_TAGS = frozenset({
    TypeTag.UINT, TypeTag.INT, TypeTag.ADDRESS,
    TypeTag.BOOL, TypeTag.FIXED_BYTES,
})


def padded_length(n: int) -> int:
    """Round ``n`` up to the next multiple of :data:`WORD_SIZE`."""
    return (n + WORD_SIZE - 1) // WORD_SIZE * WORD_SIZE
