"""Core type system: the tagged ABI type tree.

Descriptor strings are parsed once into these nodes (see
:mod:`abicodec.types.parse`); codecs are compiled by structural recursion
over the tree.
"""

from __future__ import annotations

import dataclasses

from ..protocol.constants import TypeTag, WORD_TAGS


class AbiType:
    """Base class of all type tree nodes."""

    tag: TypeTag

    @property
    def canonical(self) -> str:
        """Canonical type string used in signatures."""
        raise NotImplementedError

    @property
    def is_dynamic(self) -> bool:
        """Whether the encoded size depends on the value."""
        return False

    @property
    def is_word(self) -> bool:
        """Whether values always fit into one 32-byte word."""
        return self.tag in WORD_TAGS

    def __str__(self) -> str:
        return self.canonical


@dataclasses.dataclass(frozen=True, slots=True)
class Uint(AbiType):
    bits: int = 256
    tag = TypeTag.UINT

    @property
    def canonical(self) -> str:
        return f"uint{self.bits}"


@dataclasses.dataclass(frozen=True, slots=True)
class Int(AbiType):
    bits: int = 256
    tag = TypeTag.INT

    @property
    def canonical(self) -> str:
        return f"int{self.bits}"


@dataclasses.dataclass(frozen=True, slots=True)
class Address(AbiType):
    tag = TypeTag.ADDRESS

    @property
    def canonical(self) -> str:
        return "address"


@dataclasses.dataclass(frozen=True, slots=True)
class Bool(AbiType):
    tag = TypeTag.BOOL

    @property
    def canonical(self) -> str:
        return "bool"


@dataclasses.dataclass(frozen=True, slots=True)
class FixedBytes(AbiType):
    size: int
    tag = TypeTag.FIXED_BYTES

    @property
    def canonical(self) -> str:
        return f"bytes{self.size}"


@dataclasses.dataclass(frozen=True, slots=True)
class Bytes(AbiType):
    tag = TypeTag.BYTES

    @property
    def canonical(self) -> str:
        return "bytes"

    @property
    def is_dynamic(self) -> bool:
        return True


@dataclasses.dataclass(frozen=True, slots=True)
class String(AbiType):
    tag = TypeTag.STRING

    @property
    def canonical(self) -> str:
        return "string"

    @property
    def is_dynamic(self) -> bool:
        return True


@dataclasses.dataclass(frozen=True, slots=True)
class Field:
    """A named (or unnamed) member of a tuple, argument list or event.

    Attributes
    ----------
    name : str | None
        Member name; ``None`` or empty for positional members.
    type : AbiType
        The member's type.
    indexed : bool
        Event inputs only: whether the value is carried in a topic.
    """
    name: str | None
    type: AbiType
    indexed: bool = False


@dataclasses.dataclass(frozen=True, slots=True)
class Tuple(AbiType):
    fields: tuple[Field, ...] = ()
    tag = TypeTag.TUPLE

    @property
    def canonical(self) -> str:
        return "(" + ",".join(f.type.canonical for f in self.fields) + ")"

    @property
    def is_dynamic(self) -> bool:
        return any(f.type.is_dynamic for f in self.fields)

    @property
    def all_named(self) -> bool:
        return all(f.name for f in self.fields)


@dataclasses.dataclass(frozen=True, slots=True)
class FixedArray(AbiType):
    inner: AbiType
    length: int
    tag = TypeTag.FIXED_ARRAY

    @property
    def canonical(self) -> str:
        return f"{self.inner.canonical}[{self.length}]"

    @property
    def is_dynamic(self) -> bool:
        return self.inner.is_dynamic


@dataclasses.dataclass(frozen=True, slots=True)
class DynArray(AbiType):
    inner: AbiType
    tag = TypeTag.DYN_ARRAY

    @property
    def canonical(self) -> str:
        return f"{self.inner.canonical}[]"

    @property
    def is_dynamic(self) -> bool:
        return True
