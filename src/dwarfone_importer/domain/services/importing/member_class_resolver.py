#!/usr/bin/env python3

"""Find the class owning a subroutine entry.

No single attribute tells reliably across compilers which class a method
belongs to, so three independent heuristics are tried in order and the first
one that answers wins:

1. lexical nesting: the subroutine is a child of a class entry
2. an AT_member reference on the subroutine (out-of-line definitions)
3. an implicit ``this`` parameter whose type points to the class
"""

from collections.abc import Callable

from ....core.models import AttributeName, Tag
from ...models.dwarf import DebugInfoEntry
from ...models.types import DataType, PointerType, strip_qualifiers
from ..parsing import TypeExtractor, TypeManager
from .import_utils import extract_name

ClassHeuristic = Callable[[DebugInfoEntry], DataType | None]

THIS_PARAMETER_NAME = "this"


class MemberClassResolver:
    """Resolves the owning class of a subroutine, or None for free functions."""

    def __init__(self, type_manager: TypeManager, type_extractor: TypeExtractor):
        self.type_manager = type_manager
        self.type_extractor = type_extractor
        self.heuristics: tuple[ClassHeuristic, ...] = (
            self.from_lexical_parent,
            self.from_member_attribute,
            self.from_this_parameter,
        )

    def determine_member_class(self, entry: DebugInfoEntry) -> DataType | None:
        for heuristic in self.heuristics:
            class_type = heuristic(entry)
            if class_type is not None:
                return class_type
        return None

    def from_lexical_parent(self, entry: DebugInfoEntry) -> DataType | None:
        parent = entry.parent
        if parent is not None and parent.tag == Tag.CLASS_TYPE:
            return self.type_manager.get_user_data_type(parent.ref)
        return None

    def from_member_attribute(self, entry: DebugInfoEntry) -> DataType | None:
        class_ref = entry.get_ref(AttributeName.MEMBER)
        if class_ref is not None:
            return self.type_manager.get_user_data_type(class_ref)
        return None

    def from_this_parameter(self, entry: DebugInfoEntry) -> DataType | None:
        # Some compilers (PS2 toolchains for one) emit neither of the above
        for child in entry.iter_children(Tag.FORMAL_PARAMETER):
            if extract_name(child) != THIS_PARAMETER_NAME:
                continue
            data_type = strip_qualifiers(self.type_extractor.extract_data_type(child))
            if isinstance(data_type, PointerType):
                data_type = strip_qualifiers(data_type.data_type)
            return data_type
        return None
