#!/usr/bin/env python3

"""Data type descriptions produced by the type resolution service.

Types are owned and cached by the TypeManager. Importers only read them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DataType:
    """Base class of all data types."""

    name: str

    @property
    def size(self) -> int:
        return 0

    def display_name(self) -> str:
        """C-like spelling of the type."""
        return self.name


@dataclass(eq=False)
class VoidType(DataType):
    name: str = "void"


@dataclass(eq=False)
class UndefinedType(DataType):
    """Opaque fallback for types that cannot be resolved."""

    name: str = "undefined"
    byte_size: int = 0

    @property
    def size(self) -> int:
        return self.byte_size


@dataclass(eq=False)
class BaseType(DataType):
    name: str
    byte_size: int
    signed: bool = True

    @property
    def size(self) -> int:
        return self.byte_size


@dataclass(eq=False)
class PointerType(DataType):
    data_type: DataType
    byte_size: int = 4

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"{self.data_type.display_name()} *"

    @property
    def size(self) -> int:
        return self.byte_size

    def display_name(self) -> str:
        return self.name


@dataclass(eq=False)
class ReferenceType(DataType):
    data_type: DataType
    byte_size: int = 4

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"{self.data_type.display_name()} &"

    @property
    def size(self) -> int:
        return self.byte_size

    def display_name(self) -> str:
        return self.name


@dataclass(eq=False)
class ConstType(DataType):
    data_type: DataType

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"const {self.data_type.display_name()}"

    @property
    def size(self) -> int:
        return self.data_type.size

    def display_name(self) -> str:
        return self.name


@dataclass(eq=False)
class VolatileType(DataType):
    data_type: DataType

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"volatile {self.data_type.display_name()}"

    @property
    def size(self) -> int:
        return self.data_type.size

    def display_name(self) -> str:
        return self.name


@dataclass(eq=False)
class ArrayType(DataType):
    element_type: DataType
    count: int

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"{self.element_type.display_name()}[{self.count}]"

    @property
    def size(self) -> int:
        return self.element_type.size * self.count

    def display_name(self) -> str:
        return self.name


class CompositeKind(Enum):
    CLASS = "class"
    STRUCT = "struct"
    UNION = "union"


@dataclass
class Member:
    name: str
    data_type: DataType
    offset: int | None = None


@dataclass(eq=False)
class StructureType(DataType):
    """Class, struct or union."""

    name: str
    kind: CompositeKind
    byte_size: int = 0
    members: list[Member] = field(default_factory=list)

    @property
    def size(self) -> int:
        return self.byte_size


@dataclass(eq=False)
class EnumType(DataType):
    name: str
    byte_size: int = 4
    values: dict[str, int] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return self.byte_size


@dataclass(eq=False)
class FunctionType(DataType):
    return_type: DataType
    parameters: list[DataType] = field(default_factory=list)
    byte_size: int = 4

    @property
    def name(self) -> str:  # type: ignore[override]
        params = ", ".join(p.display_name() for p in self.parameters) or "void"
        return f"{self.return_type.display_name()} (*)({params})"

    def display_name(self) -> str:
        return self.name


@dataclass(eq=False)
class TypedefType(DataType):
    name: str
    data_type: DataType

    @property
    def size(self) -> int:
        return self.data_type.size


VOID = VoidType()


def strip_qualifiers(data_type: DataType) -> DataType:
    """Remove const/volatile wrappers from the outside of a type."""
    while isinstance(data_type, (ConstType, VolatileType)):
        data_type = data_type.data_type
    return data_type
