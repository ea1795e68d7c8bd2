"""Built-in interface descriptors, addressable by name.

Usage::

    decoder.add(usdc_address, "ERC20")
"""

from __future__ import annotations

from typing import Any

from .erc20 import ERC20
from .multicall import MULTICALL

BUILTIN: dict[str, list[dict[str, Any]]] = {
    'ERC20': ERC20,
    'MULTICALL': MULTICALL,
}

__all__ = ['BUILTIN', 'ERC20', 'MULTICALL']
