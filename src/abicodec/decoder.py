"""Multi-contract decoder: selector/topic registry with best-effort dispatch.

Usage::

    decoder = Decoder()
    decoder.add("0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48", "ERC20")
    decoder.add(router_address, ROUTER_ABI)

    decoder.method(router_address, calldata)       # -> "swapExactETHForTokens"
    decoder.decode(router_address, calldata)       # -> SignatureInfo (exact match)
    decoder.decode(unknown_address, calldata)      # -> [SignatureInfo, ...] or None
"""

from __future__ import annotations

import dataclasses
import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, Protocol, Sequence

from .codec.base import Codec
from .codec.compiler import map_args
from .events import EventMethod
from .exc import ValidationError
from .protocol.constants import DEFAULT_FUNCTION_NAME, SELECTOR_SIZE
from .signature import fn_sig_hash, fn_signature
from .utils import add0x, hex_to_bytes, normalize_address, strip0x

log = logging.getLogger("abicodec.decoder")

AbiEntries = Sequence[Mapping[str, Any]]


@dataclasses.dataclass
class ContractInfo:
    """Well-known contract metadata used by hints.

    Attributes
    ----------
    abi : str | Sequence[Mapping]
        Interface entries, or the name of a built-in interface (``"ERC20"``).
    symbol, decimals, name : optional
        Token metadata for rendering amounts.
    price : float | None
        Price against USD for stable coins.
    """
    abi: str | AbiEntries
    symbol: str | None = None
    decimals: int | None = None
    name: str | None = None
    price: float | None = None


@dataclasses.dataclass
class HintOptions:
    """Context passed to hints and hooks."""
    contract: str | None = None
    amount: int | None = None
    contract_info: ContractInfo | None = None
    contracts: dict[str, ContractInfo] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class SignatureInfo:
    """One decoding result."""
    name: str
    signature: str
    value: Any
    hint: str | None = None


class Hint(Protocol):
    """Renders a human-readable annotation for a decoded value.

    May only produce a string; any exception it raises is discarded.
    """

    def __call__(self, value: Any, opts: HintOptions) -> str: ...


class Hook(Protocol):
    """Rewrites an exact-match call decoding (e.g. to unpack batched calls).

    May replace the value and the signature metadata.
    """

    def __call__(
        self, decoder: Decoder, contract: str, info: SignatureInfo, opts: HintOptions,
    ) -> SignatureInfo: ...


@dataclasses.dataclass(frozen=True)
class SignatureRecord:
    """Registered function: codec plus optional hint/hook."""
    name: str
    signature: str
    selector: str
    codec: Codec | None
    hint: Hint | None = None
    hook: Hook | None = None

    def decode(self, data: bytes) -> Any:
        return self.codec.decode(data) if self.codec is not None else None


@dataclasses.dataclass(frozen=True)
class EventRecord:
    """Registered event: bound event decoder plus optional hint."""
    name: str
    signature: str
    topic: str
    event: EventMethod
    hint: Hint | None = None

    def decode(self, topics: Sequence[str], data: str | bytes) -> Any:
        return self.event.decode(topics, data)


class RWLock:
    """Many concurrent readers or one writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class Decoder:
    """Registry of contract interfaces for decoding calldata and logs.

    Per contract address, each selector (topic for events) maps to exactly
    one record; the last registration wins. A global index keeps every
    record per selector across all contracts for fallback decoding when
    the address is unknown.

    Registration and decoding may run concurrently; an internal read-write
    lock guards the registry.
    """

    def __init__(self) -> None:
        self._contracts: dict[str, dict[str, SignatureRecord]] = {}
        self._sighashes: dict[str, list[SignatureRecord]] = {}
        self._ev_contracts: dict[str, dict[str, EventRecord]] = {}
        self._ev_sighashes: dict[str, list[EventRecord]] = {}
        self._lock = RWLock()

    # ── Registration ───────────────────────────────────────────────

    def add(self, address: str, abi: str | AbiEntries) -> None:
        """Register the functions and events of ``abi`` under ``address``.

        ``abi`` may also name a built-in interface, e.g. ``"ERC20"``.
        Anonymous and unnamed events are skipped.
        """
        entries = _resolve_abi(abi)
        contract = normalize_address(address)
        functions: list[SignatureRecord] = []
        evs: list[EventRecord] = []
        # Compile outside the lock; descriptor errors propagate before any
        # record of this interface is stored.
        for entry in entries:
            kind = entry.get('type')
            if kind == 'function':
                inputs = entry.get('inputs')
                functions.append(SignatureRecord(
                    name=entry.get('name') or DEFAULT_FUNCTION_NAME,
                    signature=fn_signature(entry),
                    selector=fn_sig_hash(entry),
                    codec=map_args(inputs) if inputs else None,
                    hint=entry.get('hint'),
                    hook=entry.get('hook'),
                ))
            elif kind == 'event':
                if entry.get('anonymous') or not entry.get('name'):
                    continue
                event = EventMethod(entry)
                evs.append(EventRecord(
                    name=event.name,
                    signature=event.signature,
                    topic=event.topic,
                    event=event,
                    hint=entry.get('hint'),
                ))

        with self._lock.write():
            by_selector = self._contracts.setdefault(contract, {})
            for rec in functions:
                by_selector[rec.selector] = rec
                self._sighashes.setdefault(rec.selector, []).append(rec)
            by_topic = self._ev_contracts.setdefault(contract, {})
            for ev in evs:
                by_topic[ev.topic] = ev
                self._ev_sighashes.setdefault(ev.topic, []).append(ev)
        log.debug(
            "Registered %d functions and %d events for 0x%s",
            len(functions), len(evs), contract,
        )

    @property
    def contracts(self) -> list[str]:
        """Registered addresses (normalised, without prefix)."""
        with self._lock.read():
            return sorted(set(self._contracts) | set(self._ev_contracts))

    # ── Lookup ─────────────────────────────────────────────────────

    def method(self, address: str, data: bytes | str) -> str | None:
        """Name of the function ``data`` calls on ``address``, if registered."""
        contract = normalize_address(address)
        try:
            selector = hex_to_bytes(data)[:SELECTOR_SIZE].hex()
        except ValueError:
            return None
        with self._lock.read():
            rec = self._contracts.get(contract, {}).get(selector)
        return rec.name if rec is not None else None

    def decode(
        self,
        address: str,
        data: bytes | str,
        opts: HintOptions | None = None,
    ) -> SignatureInfo | list[SignatureInfo] | None:
        """Decode calldata sent to ``address``.

        Returns a single :class:`SignatureInfo` on an exact (address,
        selector) match, otherwise a list of every registered signature
        with this selector that decodes the arguments, or ``None``.
        Decoding errors of an exact match propagate; failing fallback
        candidates are left out.
        """
        contract = normalize_address(address)
        raw = hex_to_bytes(data)
        selector, args = raw[:SELECTOR_SIZE].hex(), raw[SELECTOR_SIZE:]
        with self._lock.read():
            rec = self._contracts.get(contract, {}).get(selector)
            candidates = list(self._sighashes.get(selector, ()))

        if rec is not None:
            opts = _with_contract(opts, contract)
            value = rec.decode(args)
            info = SignatureInfo(rec.name, rec.signature, value)
            # Hint and hook apply to exact matches only. Hints render the
            # decoded arguments even when a hook replaced the value.
            if rec.hook is not None:
                info = rec.hook(self, contract, info, opts)
            self._attach_hint(info, rec.hint, value, opts)
            return info

        results = []
        for cand in candidates:
            try:
                results.append(SignatureInfo(cand.name, cand.signature, cand.decode(args)))
            except Exception as e:
                log.debug("Candidate %s rejected: %s", cand.signature, e)
        return results or None

    def decode_event(
        self,
        address: str,
        topics: Sequence[str],
        data: str | bytes,
        opts: HintOptions | None = None,
    ) -> SignatureInfo | list[SignatureInfo] | None:
        """Decode a log emitted by ``address``; same strategy as :meth:`decode`."""
        if not topics:
            return None
        contract = normalize_address(address)
        topic = strip0x(topics[0]).lower()
        with self._lock.read():
            rec = self._ev_contracts.get(contract, {}).get(topic)
            candidates = list(self._ev_sighashes.get(topic, ()))

        if rec is not None:
            info = SignatureInfo(rec.name, rec.signature, rec.decode(topics, data))
            self._attach_hint(info, rec.hint, info.value, _with_contract(opts, contract))
            return info

        results = []
        for cand in candidates:
            try:
                results.append(SignatureInfo(cand.name, cand.signature, cand.decode(topics, data)))
            except Exception as e:
                log.debug("Event candidate %s rejected: %s", cand.signature, e)
        return results or None

    @staticmethod
    def _attach_hint(
        info: SignatureInfo, hint: Hint | None, value: Any, opts: HintOptions,
    ) -> None:
        if hint is None:
            return
        try:
            info.hint = hint(value, opts)
        except Exception as e:
            log.debug("Hint for %s failed: %s", info.signature, e)

    # ── Construction ───────────────────────────────────────────────

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        base_dir: str | Path | None = None,
    ) -> Decoder:
        """Build a decoder from a config mapping.

        ::

            Decoder.from_config({
                "contracts": {
                    "0xa0b8...": {"abi": "ERC20", "symbol": "USDC", "decimals": 6},
                    "0x7a25...": {"abi": "abis/router.json"},
                },
            })

        ``abi`` is a built-in name, an inline list of entries, or a path to a
        JSON file (relative paths resolve against ``base_dir``).
        """
        decoder = cls()
        for address, info in contract_infos(config, base_dir).items():
            decoder.add(address, info.abi)
        return decoder

    def __repr__(self) -> str:
        return f"Decoder({len(self._contracts)} contracts, {len(self._sighashes)} selectors)"


def contract_infos(
    config: Mapping[str, Any],
    base_dir: str | Path | None = None,
) -> dict[str, ContractInfo]:
    """Parse the ``contracts`` section of a config mapping.

    Keys of the result are ``0x``-prefixed lower-case addresses.
    """
    section = config.get('contracts')
    if not isinstance(section, Mapping):
        raise ValidationError("Config must contain a 'contracts' mapping")
    result: dict[str, ContractInfo] = {}
    for address, params in section.items():
        if not isinstance(params, Mapping) or 'abi' not in params:
            raise ValidationError(f"Contract {address!r} has no 'abi' entry")
        abi = params['abi']
        if isinstance(abi, str) and abi.lower().endswith('.json'):
            path = Path(abi)
            if base_dir is not None and not path.is_absolute():
                path = Path(base_dir) / path
            with open(path) as f:
                abi = json.load(f)
        result[add0x(normalize_address(address))] = ContractInfo(
            abi=abi,
            symbol=params.get('symbol'),
            decimals=params.get('decimals'),
            name=params.get('name'),
            price=params.get('price'),
        )
    return result


def _resolve_abi(abi: str | AbiEntries) -> AbiEntries:
    if isinstance(abi, str):
        from .abis import BUILTIN
        try:
            return BUILTIN[abi.upper()]
        except KeyError:
            available = ", ".join(sorted(BUILTIN))
            raise ValidationError(
                f"Unknown built-in interface {abi!r}. Available: {available}"
            ) from None
    return abi


def _with_contract(opts: HintOptions | None, contract: str) -> HintOptions:
    """Fill in the ``0x``-prefixed contract address unless the caller set one."""
    if opts is None:
        return HintOptions(contract=add0x(contract))
    if opts.contract is None:
        return dataclasses.replace(opts, contract=add0x(contract))
    return opts
