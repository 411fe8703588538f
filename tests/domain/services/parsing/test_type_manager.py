#!/usr/bin/env python3

"""Unit tests for TypeManager conversions of user-defined type entries."""

import struct

import pytest

from dwarfone_importer.core.models import (
    AttributeName,
    FundamentalType,
    LocationAtom,
    SubscriptFormat,
    Tag,
)
from dwarfone_importer.domain.models.dwarf import (
    BlockAttributeValue,
    ConstAttributeValue,
    RefAttributeValue,
    StringAttributeValue,
)
from dwarfone_importer.domain.models.types import (
    ArrayType,
    CompositeKind,
    EnumType,
    FunctionType,
    PointerType,
    StructureType,
    TypedefType,
    UndefinedType,
)
from dwarfone_importer.domain.services.parsing import TypeManager

from tests.helpers import EntryTreeBuilder


def member_location(offset: int) -> BlockAttributeValue:
    """Location expression 'CONST offset; ADD' as emitted for structure members."""
    return BlockAttributeValue(
        bytes([LocationAtom.CONST]) + struct.pack("<I", offset) + bytes([LocationAtom.ADD])
    )


def subscript(low: int, high: int) -> bytes:
    return (
        bytes([SubscriptFormat.FT_C_C])
        + struct.pack("<H", FundamentalType.INTEGER)
        + struct.pack("<ii", low, high)
    )


def element_fund_type(code: int) -> bytes:
    return bytes([SubscriptFormat.ET]) + struct.pack("<HH", AttributeName.FUND_TYPE, code)


class TestComposites:
    """Tests for class, struct and union conversion."""

    @pytest.mark.unit
    def test_class_with_members(self, builder: EntryTreeBuilder, type_manager: TypeManager) -> None:
        cls = builder.class_type("Foo", byte_size=8)
        builder.entry(
            Tag.MEMBER,
            cls,
            {
                AttributeName.NAME: StringAttributeValue("x"),
                AttributeName.FUND_TYPE: ConstAttributeValue(FundamentalType.INTEGER),
                AttributeName.LOCATION: member_location(0),
            },
        )
        builder.entry(
            Tag.MEMBER,
            cls,
            {
                AttributeName.NAME: StringAttributeValue("y"),
                AttributeName.FUND_TYPE: ConstAttributeValue(FundamentalType.FLOAT),
                AttributeName.LOCATION: member_location(4),
            },
        )

        data_type = type_manager.get_user_data_type(cls.ref)

        assert isinstance(data_type, StructureType)
        assert data_type.kind == CompositeKind.CLASS
        assert data_type.size == 8
        assert [(m.name, m.data_type.name, m.offset) for m in data_type.members] == [
            ("x", "int", 0),
            ("y", "float", 4),
        ]

    @pytest.mark.unit
    def test_same_instance_for_same_ref(self, builder: EntryTreeBuilder, type_manager: TypeManager) -> None:
        """Test that each entry is converted once."""
        cls = builder.class_type("Foo")

        first = type_manager.get_user_data_type(cls.ref)

        assert type_manager.get_user_data_type(cls.ref) is first
        assert cls.ref in type_manager
        assert len(type_manager) == 1

    @pytest.mark.unit
    def test_self_referencing_struct(self, builder: EntryTreeBuilder, type_manager: TypeManager) -> None:
        """Test that a struct pointing to itself resolves to one instance."""
        node = builder.class_type("Node", tag=Tag.STRUCTURE_TYPE)
        builder.entry(
            Tag.MEMBER,
            node,
            {
                AttributeName.NAME: StringAttributeValue("next"),
                **builder.type_attributes(user_type=node, modifiers=b"\x01"),
            },
        )

        data_type = type_manager.get_user_data_type(node.ref)

        assert data_type.kind == CompositeKind.STRUCT
        next_type = data_type.members[0].data_type
        assert isinstance(next_type, PointerType)
        assert next_type.data_type is data_type
        assert data_type.members[0].offset is None

    @pytest.mark.unit
    def test_anonymous_union(self, builder: EntryTreeBuilder, type_manager: TypeManager) -> None:
        union = builder.entry(Tag.UNION_TYPE, attributes={AttributeName.BYTE_SIZE: ConstAttributeValue(4)})

        data_type = type_manager.get_user_data_type(union.ref)

        assert data_type.kind == CompositeKind.UNION
        assert data_type.name == f"anon_union_{union.ref:x}"

    @pytest.mark.unit
    def test_register_based_location_has_no_offset(
        self, builder: EntryTreeBuilder, type_manager: TypeManager
    ) -> None:
        cls = builder.class_type("Foo")
        builder.entry(
            Tag.MEMBER,
            cls,
            {
                AttributeName.NAME: StringAttributeValue("r"),
                AttributeName.LOCATION: BlockAttributeValue(bytes([LocationAtom.REG]) + b"\0\0\0\0"),
            },
        )

        assert type_manager.get_user_data_type(cls.ref).members[0].offset is None


class TestOtherTypes:
    """Tests for enum, array, typedef, pointer and subroutine types."""

    @pytest.mark.unit
    def test_enum_elements_in_declaration_order(
        self, builder: EntryTreeBuilder, type_manager: TypeManager
    ) -> None:
        """Test that the reversed element list is restored to source order."""
        element_list = b"".join(
            struct.pack("<i", value) + name + b"\0"
            for value, name in ((2, b"BLUE"), (1, b"GREEN"), (-1, b"RED"))
        )
        enum = builder.entry(
            Tag.ENUMERATION_TYPE,
            attributes={
                AttributeName.NAME: StringAttributeValue("Color"),
                AttributeName.BYTE_SIZE: ConstAttributeValue(4),
                AttributeName.ELEMENT_LIST: BlockAttributeValue(element_list),
            },
        )

        data_type = type_manager.get_user_data_type(enum.ref)

        assert isinstance(data_type, EnumType)
        assert list(data_type.values.items()) == [("RED", -1), ("GREEN", 1), ("BLUE", 2)]

    @pytest.mark.unit
    def test_two_dimensional_array(self, builder: EntryTreeBuilder, type_manager: TypeManager) -> None:
        block = subscript(0, 2) + subscript(0, 3) + element_fund_type(FundamentalType.SHORT)
        array = builder.entry(
            Tag.ARRAY_TYPE, attributes={AttributeName.SUBSCR_DATA: BlockAttributeValue(block)}
        )

        data_type = type_manager.get_user_data_type(array.ref)

        assert isinstance(data_type, ArrayType)
        assert data_type.count == 3
        assert isinstance(data_type.element_type, ArrayType)
        assert data_type.element_type.count == 4
        assert data_type.element_type.element_type.name == "short"
        assert data_type.size == 24

    @pytest.mark.unit
    def test_array_with_unknown_bound(self, builder: EntryTreeBuilder, type_manager: TypeManager) -> None:
        """Test that a bound given as location expression yields a zero count."""
        block = (
            bytes([SubscriptFormat.FT_C_X])
            + struct.pack("<H", FundamentalType.INTEGER)
            + struct.pack("<i", 0)
            + struct.pack("<H", 1)
            + b"\x01"
            + element_fund_type(FundamentalType.CHAR)
        )
        array = builder.entry(
            Tag.ARRAY_TYPE, attributes={AttributeName.SUBSCR_DATA: BlockAttributeValue(block)}
        )

        data_type = type_manager.get_user_data_type(array.ref)

        assert data_type.count == 0
        assert data_type.element_type.name == "char"

    @pytest.mark.unit
    def test_array_without_subscripts(self, builder: EntryTreeBuilder, type_manager: TypeManager) -> None:
        array = builder.entry(Tag.ARRAY_TYPE)

        assert isinstance(type_manager.get_user_data_type(array.ref), UndefinedType)

    @pytest.mark.unit
    def test_typedef_and_pointer_type(self, builder: EntryTreeBuilder, type_manager: TypeManager) -> None:
        typedef = builder.entry(
            Tag.TYPEDEF,
            attributes={
                AttributeName.NAME: StringAttributeValue("u32"),
                AttributeName.FUND_TYPE: ConstAttributeValue(FundamentalType.UNSIGNED_INTEGER),
            },
        )
        pointer = builder.entry(Tag.POINTER_TYPE, attributes=builder.type_attributes(user_type=typedef))

        typedef_type = type_manager.get_user_data_type(typedef.ref)
        pointer_type = type_manager.get_user_data_type(pointer.ref)

        assert isinstance(typedef_type, TypedefType)
        assert typedef_type.data_type.name == "unsigned int"
        assert isinstance(pointer_type, PointerType)
        assert pointer_type.display_name() == "u32 *"

    @pytest.mark.unit
    def test_subroutine_type(self, builder: EntryTreeBuilder, type_manager: TypeManager) -> None:
        callback = builder.entry(
            Tag.SUBROUTINE_TYPE,
            attributes={AttributeName.FUND_TYPE: ConstAttributeValue(FundamentalType.INTEGER)},
        )
        builder.parameter(callback, None, fund_type=FundamentalType.FLOAT)

        data_type = type_manager.get_user_data_type(callback.ref)

        assert isinstance(data_type, FunctionType)
        assert data_type.display_name() == "int (*)(float)"

    @pytest.mark.unit
    def test_dangling_reference(self, type_manager: TypeManager) -> None:
        data_type = type_manager.get_user_data_type(0xDEAD)

        assert isinstance(data_type, UndefinedType)
        assert data_type.name == "undefined_dead"
        assert type_manager.get_user_data_type(0xDEAD) is data_type

    @pytest.mark.unit
    def test_unsupported_entry_keeps_name_and_size(
        self, builder: EntryTreeBuilder, type_manager: TypeManager
    ) -> None:
        entry = builder.entry(
            Tag.SET_TYPE,
            attributes={
                AttributeName.NAME: StringAttributeValue("Flags"),
                AttributeName.BYTE_SIZE: ConstAttributeValue(2),
            },
        )

        data_type = type_manager.get_user_data_type(entry.ref)

        assert isinstance(data_type, UndefinedType)
        assert (data_type.name, data_type.size) == ("Flags", 2)


class TestReferenceCycles:
    """Entries whose type chain leads back to themselves."""

    @pytest.mark.unit
    def test_typedef_naming_itself(self, builder: EntryTreeBuilder, type_manager: TypeManager) -> None:
        typedef = builder.entry(Tag.TYPEDEF, attributes={AttributeName.NAME: StringAttributeValue("loop_t")})
        typedef.attributes[AttributeName.USER_DEF_TYPE] = RefAttributeValue(typedef.ref)

        data_type = type_manager.get_user_data_type(typedef.ref)

        assert isinstance(data_type, TypedefType)
        assert data_type.name == "loop_t"
        assert isinstance(data_type.data_type, UndefinedType)
        assert type_manager.get_user_data_type(typedef.ref) is data_type

    @pytest.mark.unit
    def test_pointer_to_itself(self, builder: EntryTreeBuilder, type_manager: TypeManager) -> None:
        pointer = builder.entry(Tag.POINTER_TYPE)
        pointer.attributes[AttributeName.USER_DEF_TYPE] = RefAttributeValue(pointer.ref)

        data_type = type_manager.get_user_data_type(pointer.ref)

        assert isinstance(data_type, PointerType)
        assert isinstance(data_type.data_type, UndefinedType)

    @pytest.mark.unit
    def test_typedef_pointer_cycle(self, builder: EntryTreeBuilder, type_manager: TypeManager) -> None:
        """Test that a typedef and a pointer naming each other both resolve."""
        typedef = builder.entry(Tag.TYPEDEF, attributes={AttributeName.NAME: StringAttributeValue("list_t")})
        pointer = builder.entry(Tag.POINTER_TYPE, attributes=builder.type_attributes(user_type=typedef))
        typedef.attributes.update(builder.type_attributes(user_type=pointer))

        typedef_type = type_manager.get_user_data_type(typedef.ref)

        assert isinstance(typedef_type, TypedefType)
        assert isinstance(typedef_type.data_type, PointerType)
        assert type_manager.get_user_data_type(pointer.ref) is typedef_type.data_type
        assert typedef_type.data_type.display_name() == "list_t *"
