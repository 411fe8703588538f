"""Builders for debug entry trees and raw .debug sections used across tests."""

import struct

from dwarfone_importer.core.models import AttributeName, Tag
from dwarfone_importer.domain.models.dwarf import (
    AddrAttributeValue,
    AttributeValue,
    BlockAttributeValue,
    ConstAttributeValue,
    DebugInfoEntry,
    DebugInfoTree,
    RefAttributeValue,
    StringAttributeValue,
)


class EntryTreeBuilder:
    """Builds DebugInfoTree instances entry by entry.

    The tree keeps every entry alive, so parent back references stay valid
    for as long as the builder (or its tree) is referenced.
    """

    def __init__(self, byte_order: str = "little"):
        self.tree = DebugInfoTree(byte_order)
        self.prefix = "<" if byte_order == "little" else ">"
        self._next_ref = 0x100

    def entry(
        self,
        tag: Tag | int,
        parent: DebugInfoEntry | None = None,
        attributes: dict[AttributeName | int, AttributeValue] | None = None,
    ) -> DebugInfoEntry:
        entry = DebugInfoEntry(ref=self._next_ref, tag=tag, attributes=dict(attributes or {}))
        self._next_ref += 0x10
        return self.tree.add(entry, parent)

    def compile_unit(self, name: str = "main.cpp") -> DebugInfoEntry:
        return self.entry(Tag.COMPILE_UNIT, attributes={AttributeName.NAME: StringAttributeValue(name)})

    def class_type(
        self,
        name: str,
        parent: DebugInfoEntry | None = None,
        tag: Tag = Tag.CLASS_TYPE,
        byte_size: int = 8,
    ) -> DebugInfoEntry:
        return self.entry(
            tag,
            parent,
            {
                AttributeName.NAME: StringAttributeValue(name),
                AttributeName.BYTE_SIZE: ConstAttributeValue(byte_size),
            },
        )

    def subroutine(
        self,
        name: str | None,
        low: int | None,
        high: int | None,
        parent: DebugInfoEntry | None = None,
        member: DebugInfoEntry | None = None,
        fund_type: int | None = None,
        tag: Tag = Tag.GLOBAL_SUBROUTINE,
    ) -> DebugInfoEntry:
        attributes: dict[AttributeName | int, AttributeValue] = {}
        if name is not None:
            attributes[AttributeName.NAME] = StringAttributeValue(name)
        if low is not None:
            attributes[AttributeName.LOW_PC] = AddrAttributeValue(low)
        if high is not None:
            attributes[AttributeName.HIGH_PC] = AddrAttributeValue(high)
        if member is not None:
            attributes[AttributeName.MEMBER] = RefAttributeValue(member.ref)
        if fund_type is not None:
            attributes[AttributeName.FUND_TYPE] = ConstAttributeValue(fund_type)
        return self.entry(tag, parent, attributes)

    def parameter(
        self,
        parent: DebugInfoEntry,
        name: str | None,
        fund_type: int | None = None,
        user_type: DebugInfoEntry | None = None,
        modifiers: bytes = b"",
    ) -> DebugInfoEntry:
        attributes: dict[AttributeName | int, AttributeValue] = {}
        if name is not None:
            attributes[AttributeName.NAME] = StringAttributeValue(name)
        attributes.update(self.type_attributes(fund_type, user_type, modifiers))
        return self.entry(Tag.FORMAL_PARAMETER, parent, attributes)

    def type_attributes(
        self,
        fund_type: int | None = None,
        user_type: DebugInfoEntry | None = None,
        modifiers: bytes = b"",
    ) -> dict[AttributeName | int, AttributeValue]:
        if user_type is not None:
            if modifiers:
                block = modifiers + struct.pack(self.prefix + "I", user_type.ref)
                return {AttributeName.MOD_U_D_TYPE: BlockAttributeValue(block)}
            return {AttributeName.USER_DEF_TYPE: RefAttributeValue(user_type.ref)}
        if fund_type is not None:
            if modifiers:
                block = modifiers + struct.pack(self.prefix + "H", fund_type)
                return {AttributeName.MOD_FUND_TYPE: BlockAttributeValue(block)}
            return {AttributeName.FUND_TYPE: ConstAttributeValue(fund_type)}
        return {}


class DebugSectionWriter:
    """Encodes DWARF v1 entries into raw section bytes."""

    def __init__(self, byte_order: str = "little"):
        self.prefix = "<" if byte_order == "little" else ">"
        self.data = bytearray()
        self._sibling_slots: dict[int, int] = {}

    def tell(self) -> int:
        return len(self.data)

    def entry(self, tag: int, *attributes: bytes, sibling: bool = False) -> int:
        """Append an entry; with ``sibling`` a patchable AT_sibling comes first."""
        offset = self.tell()
        body = bytearray(struct.pack(self.prefix + "H", tag))
        if sibling:
            self._sibling_slots[offset] = offset + 4 + len(body) + 2
            body += self.ref(AttributeName.SIBLING, 0)
        for attribute in attributes:
            body += attribute
        self.data += struct.pack(self.prefix + "I", 4 + len(body)) + body
        return offset

    def null(self) -> int:
        offset = self.tell()
        self.data += struct.pack(self.prefix + "I", 4)
        return offset

    def set_sibling(self, entry_offset: int, target: int) -> None:
        slot = self._sibling_slots[entry_offset]
        struct.pack_into(self.prefix + "I", self.data, slot, target)

    def _name(self, name: int) -> bytes:
        return struct.pack(self.prefix + "H", name)

    def string(self, name: int, text: str) -> bytes:
        return self._name(name) + text.encode("latin-1") + b"\0"

    def addr(self, name: int, value: int) -> bytes:
        return self._name(name) + struct.pack(self.prefix + "I", value)

    def ref(self, name: int, value: int) -> bytes:
        return self._name(name) + struct.pack(self.prefix + "I", value)

    def data2(self, name: int, value: int) -> bytes:
        return self._name(name) + struct.pack(self.prefix + "H", value)

    def data4(self, name: int, value: int) -> bytes:
        return self._name(name) + struct.pack(self.prefix + "I", value)

    def block2(self, name: int, block: bytes) -> bytes:
        return self._name(name) + struct.pack(self.prefix + "H", len(block)) + block

    def raw_attribute(self, name: int, form: int, payload: bytes) -> bytes:
        return self._name((name & ~0xF) | form) + payload

    def to_bytes(self) -> bytes:
        return bytes(self.data)
