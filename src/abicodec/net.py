"""Network capability interface used by bound contract methods.

abicodec never talks to a node itself: callers supply an implementation
of :class:`Web3API` backed by whatever JSON-RPC client they use.
"""

from __future__ import annotations

import abc
from typing import Literal, TypedDict, Union

BlockTag = Union[int, Literal['latest', 'earliest', 'pending']]

# ``from`` is a keyword, hence the functional TypedDict syntax.
CallArgs = TypedDict('CallArgs', {
    'to': str,
    'from': str,
    'data': str,
    'nonce': str,
    'value': str,
    'gas': str,
    'gasPrice': str,
    'tag': BlockTag,
}, total=False)


class Web3API(abc.ABC):
    """Abstract async capability for read-only calls and gas estimation."""

    @abc.abstractmethod
    async def eth_call(self, args: CallArgs) -> str:
        """Execute a call without creating a transaction.

        Returns the hex-encoded return data.
        """

    @abc.abstractmethod
    async def estimate_gas(self, args: CallArgs) -> int:
        """Estimate the gas a transaction with ``args`` would use."""
