"""Contract binder: per-function encode/decode (and call) helpers.

Usage::

    from abicodec import contract

    erc20 = contract(ERC20_ABI)
    data = erc20.transfer.encode_input(("0x1111...", 10 ** 18))

    # With a network capability and a target address
    token = contract(ERC20_ABI, net=my_web3, address="0xa0b8...")
    balance = await token.balanceOf.call("0xd8da...")
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Iterator, Mapping, Sequence

from .codec.base import Codec
from .codec.compiler import map_args
from .exc import EncodingError, StructuralError
from .net import CallArgs, Web3API
from .protocol.constants import DEFAULT_FUNCTION_NAME
from .signature import fn_sig_hash, fn_signature
from .utils import add0x, bytes_to_hex, hex_to_bytes

log = logging.getLogger("abicodec.contract")

_MISSING: Any = object()


class ContractMethod:
    """Encoder/decoder pair for one function entry.

    Attributes
    ----------
    name : str
        Function name as declared.
    signature : str
        Canonical signature, e.g. ``"transfer(address,uint256)"``.
    selector : bytes
        First 4 bytes of the signature hash.
    """

    def __init__(self, entry: Mapping[str, Any]) -> None:
        self.name: str = entry.get('name') or DEFAULT_FUNCTION_NAME
        self.signature = fn_signature(entry)
        self.selector = bytes.fromhex(fn_sig_hash(entry))
        inputs = entry.get('inputs')
        outputs = entry.get('outputs')
        self.inputs: Codec | None = map_args(inputs) if inputs else None
        self.outputs: Codec | None = map_args(outputs) if outputs else None

    def encode_input(self, values: Any = _MISSING) -> bytes:
        """Selector followed by the encoded arguments.

        A single argument is passed bare; several arguments as a tuple or,
        when all are named, as a dict.
        """
        if self.inputs is None:
            return self.selector
        if values is _MISSING:
            raise EncodingError(f"{self.signature} requires input values")
        return self.selector + self.inputs.encode(values)

    def decode_output(self, data: bytes | str) -> Any:
        """Decode return data; ``None`` for functions without outputs."""
        if self.outputs is None:
            return None
        return self.outputs.decode(hex_to_bytes(data))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.signature!r})"


class NetContractMethod(ContractMethod):
    """ContractMethod bound to a :class:`~abicodec.net.Web3API` capability."""

    def __init__(
        self,
        entry: Mapping[str, Any],
        net: Web3API,
        address: str | None = None,
    ) -> None:
        super().__init__(entry)
        self.net = net
        self.address = address

    def _envelope(self, values: Any, overrides: CallArgs | None) -> CallArgs:
        overrides = overrides or {}
        if not self.address and not overrides.get('to'):
            raise StructuralError(f"No contract address for {self.signature}")
        args: CallArgs = {'data': bytes_to_hex(self.encode_input(values))}
        if self.address:
            args['to'] = self.address
        args.update(overrides)
        return args

    async def call(self, values: Any = _MISSING, overrides: CallArgs | None = None) -> Any:
        """Run the function read-only and decode its return data."""
        args = self._envelope(values, overrides)
        log.debug("call: %s to=%s", self.signature, args.get('to'))
        result = await self.net.eth_call(args)
        return self.decode_output(hex_to_bytes(result))

    async def estimate_gas(self, values: Any = _MISSING, overrides: CallArgs | None = None) -> int:
        """Estimate gas for calling the function with ``values``."""
        args = self._envelope(values, overrides)
        log.debug("estimate_gas: %s to=%s", self.signature, args.get('to'))
        return await self.net.estimate_gas(args)


class Contract(Mapping[str, ContractMethod]):
    """Read-only mapping of method key -> :class:`ContractMethod`.

    Methods are keyed by name; overloaded names are keyed by their
    canonical signatures instead. Keys are also reachable as attributes.
    """

    def __init__(self, methods: dict[str, ContractMethod], address: str | None = None) -> None:
        self._methods = methods
        self.address = address

    def __getitem__(self, key: str) -> ContractMethod:
        return self._methods[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)

    def __getattr__(self, name: str) -> ContractMethod:
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self._methods[name]
        except KeyError:
            raise AttributeError(
                f"Contract has no method {name!r}. Available: {', '.join(self._methods)}"
            ) from None

    def __repr__(self) -> str:
        names = ", ".join(self._methods)
        return f"Contract([{names}], address={self.address!r})"


def contract(
    abi: Sequence[Mapping[str, Any]],
    net: Web3API | None = None,
    address: str | None = None,
) -> Contract:
    """Bind every function entry of ``abi``.

    Parameters
    ----------
    abi : Sequence[Mapping]
        Interface descriptor (JSON ABI entries). Non-function entries are
        ignored.
    net : Web3API | None
        Network capability; when given, methods also get ``call`` and
        ``estimate_gas``.
    address : str | None
        Default target address for network calls.

    Raises
    ------
    ValidationError
        If any function entry has a malformed type descriptor.
    """
    if address is not None:
        address = add0x(address)
    functions = [e for e in abi if e.get('type') == 'function']
    name_counts = Counter(e.get('name') or DEFAULT_FUNCTION_NAME for e in functions)
    methods: dict[str, ContractMethod] = {}
    for entry in functions:
        name = entry.get('name') or DEFAULT_FUNCTION_NAME
        if net is None:
            method = ContractMethod(entry)
        else:
            method = NetContractMethod(entry, net, address)
        key = method.signature if name_counts[name] > 1 else name
        methods[key] = method
    return Contract(methods, address)
