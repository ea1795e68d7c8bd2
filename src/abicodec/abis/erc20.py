"""ERC-20 token interface with human-readable hints."""

from __future__ import annotations

from typing import Any

from ..decoder import ContractInfo, HintOptions
from ..utils import format_units

MAX_UINT256 = (1 << 256) - 1


def token_info(opts: HintOptions) -> ContractInfo:
    """Token metadata for the contract a hint is rendered for."""
    info = opts.contract_info
    if info is None and opts.contract is not None:
        info = opts.contracts.get(opts.contract.lower())
    if info is None or info.decimals is None:
        raise ValueError(f"No token metadata for {opts.contract}")
    return info


def _amount(value: int, info: ContractInfo) -> str:
    symbol = f" {info.symbol}" if info.symbol else ''
    return f"{format_units(value, info.decimals)}{symbol}"


def transfer_hint(v: dict[str, Any], opts: HintOptions) -> str:
    return f"Transfer {_amount(v['value'], token_info(opts))} to {v['to']}"


def transfer_from_hint(v: dict[str, Any], opts: HintOptions) -> str:
    return (
        f"Transfer {_amount(v['value'], token_info(opts))} "
        f"from {v['from']} to {v['to']}"
    )


def approve_hint(v: dict[str, Any], opts: HintOptions) -> str:
    info = token_info(opts)
    if v['value'] == MAX_UINT256:
        amount = f"unlimited {info.symbol}" if info.symbol else 'unlimited'
    else:
        amount = _amount(v['value'], info)
    return f"Allow {v['spender']} spending up to {amount}"


def approval_event_hint(v: dict[str, Any], opts: HintOptions) -> str:
    return (
        f"Allow {v['spender']} spending up to {_amount(v['value'], token_info(opts))} "
        f"from {v['owner']}"
    )


def _fn(name: str, inputs: list, outputs: list, **extra: Any) -> dict[str, Any]:
    return {'type': 'function', 'name': name, 'inputs': inputs, 'outputs': outputs, **extra}


ERC20: list[dict[str, Any]] = [
    _fn('name', [], [{'name': '', 'type': 'string'}]),
    _fn('symbol', [], [{'name': '', 'type': 'string'}]),
    _fn('decimals', [], [{'name': '', 'type': 'uint8'}]),
    _fn('totalSupply', [], [{'name': '', 'type': 'uint256'}]),
    _fn('balanceOf', [{'name': 'owner', 'type': 'address'}],
        [{'name': 'balance', 'type': 'uint256'}]),
    _fn('allowance',
        [{'name': 'owner', 'type': 'address'}, {'name': 'spender', 'type': 'address'}],
        [{'name': 'remaining', 'type': 'uint256'}]),
    _fn('transfer',
        [{'name': 'to', 'type': 'address'}, {'name': 'value', 'type': 'uint256'}],
        [{'name': 'success', 'type': 'bool'}],
        hint=transfer_hint),
    _fn('transferFrom',
        [{'name': 'from', 'type': 'address'}, {'name': 'to', 'type': 'address'},
         {'name': 'value', 'type': 'uint256'}],
        [{'name': 'success', 'type': 'bool'}],
        hint=transfer_from_hint),
    _fn('approve',
        [{'name': 'spender', 'type': 'address'}, {'name': 'value', 'type': 'uint256'}],
        [{'name': 'success', 'type': 'bool'}],
        hint=approve_hint),
    {
        'type': 'event', 'name': 'Transfer', 'anonymous': False,
        'inputs': [
            {'indexed': True, 'name': 'from', 'type': 'address'},
            {'indexed': True, 'name': 'to', 'type': 'address'},
            {'indexed': False, 'name': 'value', 'type': 'uint256'},
        ],
        'hint': transfer_from_hint,
    },
    {
        'type': 'event', 'name': 'Approval', 'anonymous': False,
        'inputs': [
            {'indexed': True, 'name': 'owner', 'type': 'address'},
            {'indexed': True, 'name': 'spender', 'type': 'address'},
            {'indexed': False, 'name': 'value', 'type': 'uint256'},
        ],
        'hint': approval_event_hint,
    },
]
