"""abicodec: Ethereum contract ABI encoding and decoding.

Usage::

    from abicodec import contract, events, Decoder

    erc20 = contract(ERC20_ABI)
    calldata = erc20.transfer.encode_input({'to': recipient, 'value': 10**6})

    transfer = events(ERC20_ABI)['Transfer']
    value = transfer.decode(log['topics'], log['data'])

    decoder = Decoder()
    decoder.add(usdc_address, "ERC20")
    info = decoder.decode(usdc_address, calldata)
    print(info.signature, info.value)
"""

from .types import (
    AbiType, Uint, Int, Address, Bool, FixedBytes, Bytes, String,
    Field, Tuple, FixedArray, DynArray,
    parse_type, parse_field, parse_fields,
)
from .codec.base import Codec, PointerCodec
from .codec.primitives import IntegerCodec, AddressCodec, BoolCodec, FixedBytesCodec
from .codec.dynamic import BytesCodec, StringCodec, ArrayCodec
from .codec.composite import TupleCodec, StructCodec
from .codec.compiler import compile_type, compile_fields, map_component, map_args
from .signature import fn_signature, fn_sig_hash, ev_sig_hash, selector
from .contract import Contract, ContractMethod, NetContractMethod, contract
from .events import EventMethod, events
from .net import BlockTag, CallArgs, Web3API
from .decoder import (
    Decoder, ContractInfo, HintOptions, SignatureInfo, Hint, Hook,
    contract_infos,
)
from .abis import BUILTIN, ERC20, MULTICALL
from .abis.multicall import multicall_hook
from .config import load_config, decoder_from_config, contracts_from_config
from .utils import add0x, strip0x, format_units, parse_units
from .exc import (
    AbiError, ValidationError, EncodingError, DecodingError,
    BoundsError, StructuralError,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    'AbiType', 'Uint', 'Int', 'Address', 'Bool', 'FixedBytes', 'Bytes', 'String',
    'Field', 'Tuple', 'FixedArray', 'DynArray',
    'parse_type', 'parse_field', 'parse_fields',
    # Codecs
    'Codec', 'PointerCodec',
    'IntegerCodec', 'AddressCodec', 'BoolCodec', 'FixedBytesCodec',
    'BytesCodec', 'StringCodec', 'ArrayCodec',
    'TupleCodec', 'StructCodec',
    'compile_type', 'compile_fields', 'map_component', 'map_args',
    # Signatures
    'fn_signature', 'fn_sig_hash', 'ev_sig_hash', 'selector',
    # Binders
    'Contract', 'ContractMethod', 'NetContractMethod', 'contract',
    'EventMethod', 'events',
    'BlockTag', 'CallArgs', 'Web3API',
    # Decoder
    'Decoder', 'ContractInfo', 'HintOptions', 'SignatureInfo', 'Hint', 'Hook',
    'contract_infos', 'BUILTIN', 'ERC20', 'MULTICALL', 'multicall_hook',
    # Config
    'load_config', 'decoder_from_config', 'contracts_from_config',
    # Utilities
    'add0x', 'strip0x', 'format_units', 'parse_units',
    # Exceptions
    'AbiError', 'ValidationError', 'EncodingError', 'DecodingError',
    'BoundsError', 'StructuralError',
]
