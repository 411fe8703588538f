#!/usr/bin/env python3

"""Unit tests for the C-style function listing."""

import pytest

from dwarfone_importer.domain.models.program import (
    AddressSet,
    Function,
    FunctionUpdateType,
    Parameter,
    Program,
    ReturnParameter,
    SourceType,
)
from dwarfone_importer.domain.models.types import BaseType, CompositeKind, PointerType, StructureType
from dwarfone_importer.domain.services.generation import ListingGenerator


@pytest.fixture
def generator() -> ListingGenerator:
    return ListingGenerator()


def add_function(program: Program, name: str, start: int, end: int) -> Function:
    return program.function_manager.create_function(
        name, start, AddressSet([(start, end)]), SourceType.IMPORTED
    )


class TestListingGenerator:
    """Tests for ListingGenerator output."""

    @pytest.mark.unit
    def test_member_function_prototype(self, generator: ListingGenerator, program: Program) -> None:
        """Test a method with a receiver and a named parameter."""
        widget = StructureType("Widget", CompositeKind.CLASS, 8)
        function = add_function(program, "Widget::resize", 0x1000, 0x1040)
        function.update_function(
            None,
            ReturnParameter(BaseType("bool", 1, False)),
            [Parameter("this", PointerType(widget)), Parameter("w", BaseType("int", 4))],
            FunctionUpdateType.DYNAMIC_STORAGE_FORMAL_PARAMS,
            True,
            SourceType.IMPORTED,
        )

        line = generator.format_function(function)

        assert line == "/* 0x00001000-0x00001040 */ bool Widget::resize(Widget * this, int w);"

    @pytest.mark.unit
    def test_function_without_signature(self, generator: ListingGenerator, program: Program) -> None:
        function = add_function(program, "FUN_00002000", 0x2000, 0x2004)

        assert generator.format_function(function) == (
            "/* 0x00002000-0x00002004 */ undefined FUN_00002000(void);"
        )

    @pytest.mark.unit
    def test_listing_is_ordered_by_address(self, generator: ListingGenerator) -> None:
        program = Program(AddressSet([(0, 0x10000)]), name="game.elf")
        add_function(program, "second", 0x2000, 0x2010)
        add_function(program, "first", 0x1000, 0x1010)

        listing = generator.generate(program)

        assert listing.splitlines() == [
            "// Functions imported from game.elf",
            "",
            "/* 0x00001000-0x00001010 */ undefined first(void);",
            "/* 0x00002000-0x00002010 */ undefined second(void);",
        ]
        assert listing.endswith("\n")

    @pytest.mark.unit
    def test_empty_program(self, generator: ListingGenerator, program: Program) -> None:
        assert generator.generate(program) == "// Functions imported from program\n\n"
