#!/usr/bin/env python3

"""Resolve the data type an entry declares through its type attributes."""

from __future__ import annotations

import struct
from collections.abc import Mapping
from typing import TYPE_CHECKING

from ....core.models import AttributeName, FundamentalType, TypeModifier
from ....infrastructure.logging import get_logger
from ...models.dwarf import AttributeValue, DebugInfoEntry
from ...models.types import (
    VOID,
    BaseType,
    ConstType,
    DataType,
    PointerType,
    ReferenceType,
    UndefinedType,
    VolatileType,
)

if TYPE_CHECKING:
    from .type_manager import TypeManager

logger = get_logger(__name__)

# name, size (0 = pointer size), signed
FUNDAMENTAL_TYPES: dict[FundamentalType, tuple[str, int, bool]] = {
    FundamentalType.CHAR: ("char", 1, True),
    FundamentalType.SIGNED_CHAR: ("signed char", 1, True),
    FundamentalType.UNSIGNED_CHAR: ("unsigned char", 1, False),
    FundamentalType.SHORT: ("short", 2, True),
    FundamentalType.SIGNED_SHORT: ("short", 2, True),
    FundamentalType.UNSIGNED_SHORT: ("unsigned short", 2, False),
    FundamentalType.INTEGER: ("int", 4, True),
    FundamentalType.SIGNED_INTEGER: ("int", 4, True),
    FundamentalType.UNSIGNED_INTEGER: ("unsigned int", 4, False),
    FundamentalType.LONG: ("long", 0, True),
    FundamentalType.SIGNED_LONG: ("long", 0, True),
    FundamentalType.UNSIGNED_LONG: ("unsigned long", 0, False),
    FundamentalType.FLOAT: ("float", 4, True),
    FundamentalType.DBL_PREC_FLOAT: ("double", 8, True),
    FundamentalType.EXT_PREC_FLOAT: ("long double", 8, True),
    FundamentalType.COMPLEX: ("complex", 8, True),
    FundamentalType.DBL_PREC_COMPLEX: ("double complex", 16, True),
    FundamentalType.EXT_PREC_COMPLEX: ("long double complex", 16, True),
    FundamentalType.BOOLEAN: ("bool", 1, False),
    FundamentalType.LONG_LONG: ("long long", 8, True),
    FundamentalType.SIGNED_LONG_LONG: ("long long", 8, True),
    FundamentalType.UNSIGNED_LONG_LONG: ("unsigned long long", 8, False),
}


class TypeExtractor:
    """Turns FUND_TYPE / MOD_FUND_TYPE / USER_DEF_TYPE / MOD_U_D_TYPE into data types.

    Never raises: anything it cannot decode becomes an UndefinedType.
    """

    def __init__(self, type_manager: TypeManager, pointer_size: int = 4):
        self.type_manager = type_manager
        self.pointer_size = pointer_size
        self._byte_order = type_manager.byte_order
        self._fundamental_cache: dict[int, DataType] = {}

    def extract_data_type(self, entry: DebugInfoEntry) -> DataType:
        """Return the type declared by ``entry``, void when it declares none."""
        return self.extract_from_attributes(entry.attributes)

    def extract_from_attributes(
        self, attributes: Mapping[AttributeName | int, AttributeValue]
    ) -> DataType:
        fund_type = attributes.get(AttributeName.FUND_TYPE)
        if fund_type is not None:
            return self.get_fundamental_type(fund_type.as_const())

        mod_fund_type = attributes.get(AttributeName.MOD_FUND_TYPE)
        if mod_fund_type is not None:
            return self._decode_modified(mod_fund_type.as_block(), 2)

        user_def_type = attributes.get(AttributeName.USER_DEF_TYPE)
        if user_def_type is not None:
            return self.type_manager.get_user_data_type(user_def_type.as_ref())

        mod_u_d_type = attributes.get(AttributeName.MOD_U_D_TYPE)
        if mod_u_d_type is not None:
            return self._decode_modified(mod_u_d_type.as_block(), 4)

        return VOID

    def get_fundamental_type(self, code: int) -> DataType:
        if code in self._fundamental_cache:
            return self._fundamental_cache[code]

        data_type: DataType
        if code == FundamentalType.VOID:
            data_type = VOID
        elif code == FundamentalType.POINTER:
            data_type = PointerType(VOID, self.pointer_size)
        elif code in FUNDAMENTAL_TYPES:
            name, size, signed = FUNDAMENTAL_TYPES[FundamentalType(code)]
            data_type = BaseType(name, size or self.pointer_size, signed)
        else:
            logger.warning(f"Unknown fundamental type 0x{code:x}")
            data_type = UndefinedType(f"undefined_ft_{code:x}")

        self._fundamental_cache[code] = data_type
        return data_type

    def _decode_modified(self, block: bytes, base_size: int) -> DataType:
        """Decode a modifier list followed by a fundamental type (2 bytes) or reference (4 bytes)."""
        if len(block) < base_size:
            logger.warning(f"Modified type block too short ({len(block)} bytes)")
            return UndefinedType()

        prefix = "<" if self._byte_order == "little" else ">"
        raw = block[-base_size:]
        data_type: DataType
        if base_size == 2:
            data_type = self.get_fundamental_type(struct.unpack(prefix + "H", raw)[0])
        else:
            data_type = self.type_manager.get_user_data_type(struct.unpack(prefix + "I", raw)[0])

        # The first modifier is the outermost one
        for modifier in reversed(block[:-base_size]):
            data_type = self._apply_modifier(modifier, data_type)
        return data_type

    def _apply_modifier(self, modifier: int, data_type: DataType) -> DataType:
        if modifier == TypeModifier.POINTER_TO:
            return PointerType(data_type, self.pointer_size)
        if modifier == TypeModifier.REFERENCE_TO:
            return ReferenceType(data_type, self.pointer_size)
        if modifier == TypeModifier.CONST:
            return ConstType(data_type)
        if modifier == TypeModifier.VOLATILE:
            return VolatileType(data_type)
        logger.warning(f"Ignoring unknown type modifier 0x{modifier:x}")
        return data_type
