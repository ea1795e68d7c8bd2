"""Hex and fixed-point helpers shared across the package."""

from __future__ import annotations

import re

from eth_utils import keccak

PRECISION = 18  # default decimals of ether-denominated amounts

_PREFIX_RE = re.compile(r'^0x', re.IGNORECASE)
_DECIMAL_RE = re.compile(r'^(-?)(\d*)(?:\.(\d*))?$')


def add0x(value: str) -> str:
    """Prefix ``value`` with ``0x`` unless it already has one (any case)."""
    return value if _PREFIX_RE.match(value) else f"0x{value}"


def strip0x(value: str) -> str:
    """Remove a leading ``0x``/``0X`` prefix."""
    return _PREFIX_RE.sub('', value, count=1)


def hex_to_bytes(value: str | bytes | bytearray) -> bytes:
    """Convert a hex string (with or without prefix) to bytes.

    Bytes-like input is returned unchanged.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return bytes.fromhex(strip0x(value))


def bytes_to_hex(data: bytes | bytearray, prefix: bool = True) -> str:
    """Lower-case hex representation of ``data``."""
    h = bytes(data).hex()
    return f"0x{h}" if prefix else h


def keccak_hex(data: bytes | str) -> str:
    """Keccak-256 of ``data`` (UTF-8 for text) as 64 lower-case hex chars."""
    if isinstance(data, str):
        return keccak(text=data).hex()
    return keccak(data).hex()


def normalize_address(address: str) -> str:
    """Registry key for an address: no prefix, lower-case."""
    return strip0x(address).lower()


def format_units(amount: int, decimals: int = PRECISION) -> str:
    """Render an integer amount of base units as a decimal string.

    Trailing zeros of the fractional part are dropped::

        >>> format_units(1225724583682887052)
        '1.225724583682887052'
        >>> format_units(1500000, decimals=6)
        '1.5'
    """
    sign = '-' if amount < 0 else ''
    whole, frac = divmod(abs(amount), 10 ** decimals)
    if decimals == 0 or frac == 0:
        return f"{sign}{whole}"
    frac_str = str(frac).rjust(decimals, '0').rstrip('0')
    return f"{sign}{whole}.{frac_str}"


def parse_units(text: str, decimals: int = PRECISION) -> int:
    """Inverse of :func:`format_units`.

    Raises ``ValueError`` for malformed input or more fractional digits
    than ``decimals`` allows.
    """
    m = _DECIMAL_RE.match(text.strip())
    if not m or not (m.group(2) or m.group(3)):
        raise ValueError(f"Invalid decimal amount: {text!r}")
    sign, whole, frac = m.group(1), m.group(2) or '0', m.group(3) or ''
    if len(frac) > decimals:
        raise ValueError(
            f"Too many fractional digits in {text!r}: max {decimals}"
        )
    value = int(whole) * 10 ** decimals + int(frac.ljust(decimals, '0') or '0')
    return -value if sign else value
