"""Batched-call interface whose hook unpacks the inner calls."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from ..decoder import HintOptions, SignatureInfo

if TYPE_CHECKING:
    from ..decoder import Decoder


def multicall_hook(
    decoder: Decoder,
    contract: str,
    info: SignatureInfo,
    opts: HintOptions,
) -> SignatureInfo:
    """Replace the raw ``bytes[]`` value with the decoding of each call.

    Inner calls are decoded against the same contract, so they may resolve
    to exact matches, fallback candidate lists, or ``None``.
    """
    calls = [decoder.decode(contract, data, opts) for data in info.value]
    return SignatureInfo(info.name, info.signature, calls)


MULTICALL: list[dict[str, Any]] = [
    {
        'type': 'function',
        'name': 'multicall',
        'stateMutability': 'payable',
        'inputs': [{'name': 'data', 'type': 'bytes[]'}],
        'outputs': [{'name': 'results', 'type': 'bytes[]'}],
        'hook': multicall_hook,
    },
]
