#!/usr/bin/env python3

"""Function table of a program."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from ....infrastructure.logging import get_logger
from .address_set import AddressSet
from .exceptions import DuplicateNameError, InvalidInputError, OverlappingFunctionError
from .function import Function, SourceType

if TYPE_CHECKING:
    from .program import Program

logger = get_logger(__name__)


class FunctionManager:
    """Creates, finds and validates functions.

    Function bodies never overlap. Names are unique unless the program allows
    duplicate names.
    """

    def __init__(self, program: Program, allow_duplicate_names: bool = False):
        self.program = program
        self.allow_duplicate_names = allow_duplicate_names
        self._functions: dict[int, Function] = {}

    def get_function_at(self, entry_point: int) -> Function | None:
        return self._functions.get(entry_point)

    def get_function_containing(self, address: int) -> Function | None:
        for function in self._functions.values():
            if function.body.contains(address):
                return function
        return None

    def create_function(
        self, name: str, entry_point: int, body: AddressSet, source: SourceType
    ) -> Function:
        """Create a function whose body must contain its entry point.

        Raises:
            InvalidInputError: For a bad name or a body missing the entry point
            DuplicateNameError: If the name is taken
            OverlappingFunctionError: If the body intersects another function
        """
        self.check_name(name)
        if not body.contains(entry_point):
            raise InvalidInputError(
                f"Body of {name} does not contain its entry point 0x{entry_point:x}"
            )

        for existing in self._functions.values():
            if existing.entry_point == entry_point or existing.body.intersects(body):
                raise OverlappingFunctionError(
                    f"{name} at 0x{entry_point:x} overlaps {existing.name} "
                    f"at 0x{existing.entry_point:x}"
                )

        function = Function(self, name, entry_point, body, source)
        self._functions[entry_point] = function
        logger.debug(f"Created function {name} at 0x{entry_point:x} ({body})")
        return function

    def check_name(self, name: str, exclude: Function | None = None) -> None:
        """Validate a function name.

        Raises:
            InvalidInputError: If the name is empty or contains whitespace/control characters
            DuplicateNameError: If another function already uses it
        """
        if not name:
            raise InvalidInputError("Function name must not be empty")
        if any(c.isspace() or not c.isprintable() for c in name):
            raise InvalidInputError(f"Invalid characters in function name {name!r}")

        if self.allow_duplicate_names:
            return
        for function in self._functions.values():
            if function is not exclude and function.name == name:
                raise DuplicateNameError(
                    f"Function name {name} already used at 0x{function.entry_point:x}"
                )

    def iter_functions(self) -> Iterator[Function]:
        """Yield functions ordered by entry point."""
        for entry_point in sorted(self._functions):
            yield self._functions[entry_point]

    def __len__(self) -> int:
        return len(self._functions)
