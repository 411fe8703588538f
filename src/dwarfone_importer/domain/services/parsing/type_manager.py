#!/usr/bin/env python3

"""Registry of user-defined data types keyed by entry identity.

Each referenced type entry is converted once. Composite types are registered
before their members are converted so self-referencing structures resolve to
the same instance.
"""

from __future__ import annotations

import struct

from ....core.models import AttributeName, LocationAtom, SubscriptFormat, Tag
from ....infrastructure.logging import get_logger
from ...models.dwarf import (
    AttributeValue,
    BlockAttributeValue,
    ConstAttributeValue,
    DebugInfoEntry,
    DebugInfoTree,
    RefAttributeValue,
)
from ...models.types import (
    ArrayType,
    CompositeKind,
    DataType,
    EnumType,
    FunctionType,
    Member,
    PointerType,
    StructureType,
    TypedefType,
    UndefinedType,
)
from .type_extractor import TypeExtractor

logger = get_logger(__name__)

COMPOSITE_KINDS = {
    Tag.CLASS_TYPE: CompositeKind.CLASS,
    Tag.STRUCTURE_TYPE: CompositeKind.STRUCT,
    Tag.UNION_TYPE: CompositeKind.UNION,
}

# Subscript formats whose low / high bound is a constant (the others carry a location)
_LOW_CONSTANT = frozenset(
    {
        SubscriptFormat.FT_C_C,
        SubscriptFormat.FT_C_X,
        SubscriptFormat.UT_C_C,
        SubscriptFormat.UT_C_X,
    }
)
_HIGH_CONSTANT = frozenset(
    {
        SubscriptFormat.FT_C_C,
        SubscriptFormat.FT_X_C,
        SubscriptFormat.UT_C_C,
        SubscriptFormat.UT_X_C,
    }
)


class TypeManager:
    """Hands out data types for entry references, converting on first use."""

    def __init__(self, tree: DebugInfoTree, pointer_size: int = 4):
        self.tree = tree
        self.byte_order = tree.byte_order
        self.pointer_size = pointer_size
        self._prefix = "<" if self.byte_order == "little" else ">"
        self._types: dict[int, DataType] = {}
        self.type_extractor = TypeExtractor(self, pointer_size)

    def get_user_data_type(self, ref: int) -> DataType:
        """Return the data type registered for the entry at ``ref``."""
        data_type = self._types.get(ref)
        if data_type is not None:
            return data_type

        entry = self.tree.get(ref)
        if entry is None:
            logger.warning(f"Type reference 0x{ref:x} points to no entry")
            return self._register(ref, UndefinedType(f"undefined_{ref:x}"))

        return self._convert(entry)

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, ref: int) -> bool:
        return ref in self._types

    def _register(self, ref: int, data_type: DataType) -> DataType:
        self._types[ref] = data_type
        return data_type

    def _convert(self, entry: DebugInfoEntry) -> DataType:
        name = entry.get_string(AttributeName.NAME)

        if entry.tag in COMPOSITE_KINDS:
            return self._convert_composite(entry, COMPOSITE_KINDS[entry.tag], name)

        # Chains leading back to this entry resolve to the placeholder
        self._register(entry.ref, UndefinedType(name or f"undefined_{entry.ref:x}"))

        if entry.tag == Tag.ENUMERATION_TYPE:
            return self._register(entry.ref, self._convert_enum(entry, name))

        if entry.tag == Tag.ARRAY_TYPE:
            return self._register(entry.ref, self._convert_array(entry))

        if entry.tag == Tag.SUBROUTINE_TYPE:
            params = [
                self.type_extractor.extract_data_type(child)
                for child in entry.iter_children(Tag.FORMAL_PARAMETER)
            ]
            return self._register(
                entry.ref,
                FunctionType(self.type_extractor.extract_data_type(entry), params),
            )

        if entry.tag == Tag.TYPEDEF:
            target = self.type_extractor.extract_data_type(entry)
            return self._register(entry.ref, TypedefType(name or f"typedef_{entry.ref:x}", target))

        if entry.tag == Tag.POINTER_TYPE:
            target = self.type_extractor.extract_data_type(entry)
            return self._register(entry.ref, PointerType(target, self.pointer_size))

        logger.debug(f"Unsupported type entry {entry!r}, using undefined type")
        size = entry.get_const(AttributeName.BYTE_SIZE) or 0
        return self._register(entry.ref, UndefinedType(name or f"undefined_{entry.ref:x}", size))

    def _convert_composite(
        self, entry: DebugInfoEntry, kind: CompositeKind, name: str | None
    ) -> DataType:
        composite = StructureType(
            name=name or f"anon_{kind.value}_{entry.ref:x}",
            kind=kind,
            byte_size=entry.get_const(AttributeName.BYTE_SIZE) or 0,
        )
        self._register(entry.ref, composite)

        for child in entry.iter_children(Tag.MEMBER):
            location = child.get_block(AttributeName.LOCATION)
            composite.members.append(
                Member(
                    name=child.get_string(AttributeName.NAME) or "",
                    data_type=self.type_extractor.extract_data_type(child),
                    offset=self._evaluate_member_location(location) if location else None,
                )
            )
        return composite

    def _convert_enum(self, entry: DebugInfoEntry, name: str | None) -> EnumType:
        values: dict[str, int] = {}
        block = entry.get_block(AttributeName.ELEMENT_LIST) or b""
        pos = 0
        items = []
        while pos + 4 <= len(block):
            value = struct.unpack_from(self._prefix + "i", block, pos)[0]
            end = block.find(b"\0", pos + 4)
            if end < 0:
                logger.warning(f"Truncated element list in enum at 0x{entry.ref:x}")
                break
            items.append((block[pos + 4 : end].decode("latin-1"), value))
            pos = end + 1

        # Elements are listed last to first
        for item_name, value in reversed(items):
            values[item_name] = value

        return EnumType(
            name=name or f"anon_enum_{entry.ref:x}",
            byte_size=entry.get_const(AttributeName.BYTE_SIZE) or 4,
            values=values,
        )

    def _convert_array(self, entry: DebugInfoEntry) -> DataType:
        block = entry.get_block(AttributeName.SUBSCR_DATA)
        if block is None:
            return UndefinedType(f"array_{entry.ref:x}")

        counts: list[int] = []
        element_type: DataType | None = None
        pos = 0
        try:
            while pos < len(block):
                fmt = block[pos]
                pos += 1
                if fmt == SubscriptFormat.ET:
                    element_type, pos = self._read_element_type(block, pos)
                    break

                # Index type: fundamental (2 bytes) or user-defined (4 bytes)
                pos += 2 if fmt <= SubscriptFormat.FT_X_X else 4
                low, pos = self._read_bound(block, pos, constant=fmt in _LOW_CONSTANT)
                high, pos = self._read_bound(block, pos, constant=fmt in _HIGH_CONSTANT)
                counts.append(high - low + 1 if low is not None and high is not None else 0)
        except struct.error as e:
            logger.warning(f"Malformed subscript data in array at 0x{entry.ref:x}: {e}")

        if element_type is None:
            element_type = UndefinedType()

        data_type: DataType = element_type
        for count in reversed(counts):
            data_type = ArrayType(data_type, max(count, 0))
        return data_type

    def _read_bound(self, block: bytes, pos: int, constant: bool) -> tuple[int | None, int]:
        if constant:
            return struct.unpack_from(self._prefix + "i", block, pos)[0], pos + 4
        length = struct.unpack_from(self._prefix + "H", block, pos)[0]
        return None, pos + 2 + length

    def _read_element_type(self, block: bytes, pos: int) -> tuple[DataType, int]:
        raw_name = struct.unpack_from(self._prefix + "H", block, pos)[0]
        pos += 2
        attr_name = AttributeName.decode(raw_name)
        value: AttributeValue
        if attr_name == AttributeName.FUND_TYPE:
            value = ConstAttributeValue(struct.unpack_from(self._prefix + "H", block, pos)[0])
            pos += 2
        elif attr_name == AttributeName.USER_DEF_TYPE:
            value = RefAttributeValue(struct.unpack_from(self._prefix + "I", block, pos)[0])
            pos += 4
        elif attr_name in (AttributeName.MOD_FUND_TYPE, AttributeName.MOD_U_D_TYPE):
            length = struct.unpack_from(self._prefix + "H", block, pos)[0]
            value = BlockAttributeValue(block[pos + 2 : pos + 2 + length])
            pos += 2 + length
        else:
            logger.warning(f"Unexpected element type attribute 0x{raw_name:x}")
            return UndefinedType(), len(block)
        return self.type_extractor.extract_from_attributes({attr_name: value}), pos

    def _evaluate_member_location(self, block: bytes) -> int | None:
        """Evaluate a member location expression relative to the structure start."""
        stack = [0]
        pos = 0
        try:
            while pos < len(block):
                op = block[pos]
                pos += 1
                if op in (LocationAtom.CONST, LocationAtom.ADDR):
                    stack.append(struct.unpack_from(self._prefix + "I", block, pos)[0])
                    pos += 4
                elif op == LocationAtom.ADD:
                    right = stack.pop()
                    stack.append(stack.pop() + right)
                else:
                    # Registers and dereferences have no static value
                    return None
        except (struct.error, IndexError):
            return None
        return stack[-1]

