"""Shared fixtures: a fake network capability and real-world router interfaces."""

from __future__ import annotations

from typing import Any

import pytest

from abicodec.net import CallArgs, Web3API


class FakeWeb3(Web3API):
    """Records every envelope and answers with canned results."""

    def __init__(self, call_result: str = '0x', gas: int = 21000) -> None:
        self.call_result = call_result
        self.gas = gas
        self.calls: list[tuple[str, CallArgs]] = []

    async def eth_call(self, args: CallArgs) -> str:
        self.calls.append(('eth_call', args))
        return self.call_result

    async def estimate_gas(self, args: CallArgs) -> int:
        self.calls.append(('estimate_gas', args))
        return self.gas


def _fn(name: str, inputs: list[tuple[str, str]], outputs: list[tuple[str, str]] = ()) -> dict[str, Any]:
    return {
        'type': 'function',
        'name': name,
        'inputs': [{'name': n, 'type': t} for n, t in inputs],
        'outputs': [{'name': n, 'type': t} for n, t in outputs],
    }


_V2_SWAP = [('amountIn', 'uint256'), ('amountOutMin', 'uint256'), ('path', 'address[]'),
            ('to', 'address'), ('deadline', 'uint256')]
_V2_ETH_SWAP = [('amountOutMin', 'uint256'), ('path', 'address[]'),
                ('to', 'address'), ('deadline', 'uint256')]
_V2_ETH_SWAP_OUT = [('amountOut', 'uint256'), ('path', 'address[]'),
                    ('to', 'address'), ('deadline', 'uint256')]

UNISWAP_V2_ABI: list[dict[str, Any]] = [
    _fn('swapExactETHForTokens', _V2_ETH_SWAP, [('amounts', 'uint256[]')]),
    _fn('swapETHForExactTokens', _V2_ETH_SWAP_OUT, [('amounts', 'uint256[]')]),
    _fn('swapExactTokensForTokens', _V2_SWAP, [('amounts', 'uint256[]')]),
    _fn('swapExactTokensForETH', _V2_SWAP, [('amounts', 'uint256[]')]),
    _fn('getAmountsOut', [('amountIn', 'uint256'), ('path', 'address[]')],
        [('amounts', 'uint256[]')]),
]


def _params(*members: tuple[str, str]) -> list[dict[str, Any]]:
    return [{
        'name': 'params',
        'type': 'tuple',
        'components': [{'name': n, 'type': t} for n, t in members],
    }]


UNISWAP_V3_ABI: list[dict[str, Any]] = [
    {
        'type': 'function', 'name': 'exactInputSingle',
        'inputs': _params(
            ('tokenIn', 'address'), ('tokenOut', 'address'), ('fee', 'uint24'),
            ('recipient', 'address'), ('deadline', 'uint256'), ('amountIn', 'uint256'),
            ('amountOutMinimum', 'uint256'), ('sqrtPriceLimitX96', 'uint160'),
        ),
        'outputs': [{'name': 'amountOut', 'type': 'uint256'}],
    },
    {
        'type': 'function', 'name': 'exactInput',
        'inputs': _params(
            ('path', 'bytes'), ('recipient', 'address'), ('deadline', 'uint256'),
            ('amountIn', 'uint256'), ('amountOutMinimum', 'uint256'),
        ),
        'outputs': [{'name': 'amountOut', 'type': 'uint256'}],
    },
    {
        'type': 'function', 'name': 'exactOutput',
        'inputs': _params(
            ('path', 'bytes'), ('recipient', 'address'), ('deadline', 'uint256'),
            ('amountOut', 'uint256'), ('amountInMaximum', 'uint256'),
        ),
        'outputs': [{'name': 'amountIn', 'type': 'uint256'}],
    },
    _fn('unwrapWETH9', [('amountMinimum', 'uint256'), ('recipient', 'address')]),
    _fn('refundETH', []),
    {
        'type': 'function', 'name': 'multicall',
        'inputs': [{'name': 'data', 'type': 'bytes[]'}],
        'outputs': [{'name': 'results', 'type': 'bytes[]'}],
    },
]


@pytest.fixture
def fake_web3():
    return FakeWeb3()


@pytest.fixture
def v2_abi():
    return UNISWAP_V2_ABI


@pytest.fixture
def v3_abi():
    return UNISWAP_V3_ABI
