#!/usr/bin/env python3

"""Attribute value model for DWARF v1 debug entries.

Attribute values form a small closed set of kinds. Each kind answers only
its own accessor; asking for another kind is a programming error and raises
WrongAttributeKindError instead of coercing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class AttributeKind(Enum):
    """Kinds of attribute values."""

    ADDRESS = "address"
    REFERENCE = "reference"
    STRING = "string"
    CONSTANT = "constant"
    BLOCK = "block"


class WrongAttributeKindError(TypeError):
    """Raised when an attribute is read through an accessor of another kind."""

    def __init__(self, expected: AttributeKind, actual: AttributeKind):
        super().__init__(f"Expected {expected.value} attribute, got {actual.value}")
        self.expected = expected
        self.actual = actual


@dataclass(frozen=True)
class AttributeValue:
    """Base class of all attribute values."""

    kind: ClassVar[AttributeKind]

    def _wrong_kind(self, expected: AttributeKind) -> WrongAttributeKindError:
        return WrongAttributeKindError(expected, self.kind)

    def as_address(self) -> int:
        raise self._wrong_kind(AttributeKind.ADDRESS)

    def as_ref(self) -> int:
        raise self._wrong_kind(AttributeKind.REFERENCE)

    def as_string(self) -> str:
        raise self._wrong_kind(AttributeKind.STRING)

    def as_const(self) -> int:
        raise self._wrong_kind(AttributeKind.CONSTANT)

    def as_block(self) -> bytes:
        raise self._wrong_kind(AttributeKind.BLOCK)


@dataclass(frozen=True)
class AddrAttributeValue(AttributeValue):
    """Target address (FORM_ADDR)."""

    kind: ClassVar[AttributeKind] = AttributeKind.ADDRESS
    value: int

    def as_address(self) -> int:
        return self.value


@dataclass(frozen=True)
class RefAttributeValue(AttributeValue):
    """Reference to another entry by its section offset (FORM_REF)."""

    kind: ClassVar[AttributeKind] = AttributeKind.REFERENCE
    ref: int

    def as_ref(self) -> int:
        return self.ref


@dataclass(frozen=True)
class StringAttributeValue(AttributeValue):
    """NUL-terminated string (FORM_STRING)."""

    kind: ClassVar[AttributeKind] = AttributeKind.STRING
    value: str

    def as_string(self) -> str:
        return self.value


@dataclass(frozen=True)
class ConstAttributeValue(AttributeValue):
    """Numeric literal (FORM_DATA2, FORM_DATA4, FORM_DATA8)."""

    kind: ClassVar[AttributeKind] = AttributeKind.CONSTANT
    value: int

    def as_const(self) -> int:
        return self.value


@dataclass(frozen=True)
class BlockAttributeValue(AttributeValue):
    """Raw block contents (FORM_BLOCK2, FORM_BLOCK4)."""

    kind: ClassVar[AttributeKind] = AttributeKind.BLOCK
    data: bytes

    def as_block(self) -> bytes:
        return self.data
