#!/usr/bin/env python3

"""Data type models."""

from .data_types import (
    VOID,
    ArrayType,
    BaseType,
    CompositeKind,
    ConstType,
    DataType,
    EnumType,
    FunctionType,
    Member,
    PointerType,
    ReferenceType,
    StructureType,
    TypedefType,
    UndefinedType,
    VoidType,
    VolatileType,
    strip_qualifiers,
)

__all__ = [
    "VOID",
    "ArrayType",
    "BaseType",
    "CompositeKind",
    "ConstType",
    "DataType",
    "EnumType",
    "FunctionType",
    "Member",
    "PointerType",
    "ReferenceType",
    "StructureType",
    "TypedefType",
    "UndefinedType",
    "VoidType",
    "VolatileType",
    "strip_qualifiers",
]
