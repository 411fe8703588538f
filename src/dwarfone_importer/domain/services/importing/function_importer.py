#!/usr/bin/env python3

"""Import subroutine entries into the program's function table."""

from enum import Enum

from ....core.models import AttributeName, Tag
from ....infrastructure.logging import MessageLog, get_logger
from ...models.dwarf import DebugInfoEntry
from ...models.program import (
    FunctionUpdateType,
    Parameter,
    Program,
    ProgramModelError,
    ReturnParameter,
    SourceType,
)
from ..parsing import TypeExtractor, TypeManager
from .import_utils import extract_name
from .member_class_resolver import MemberClassResolver

logger = get_logger(__name__)


class ImportOutcome(Enum):
    """What happened to one subroutine entry."""

    SKIPPED = "skipped"
    CREATED = "created"
    RENAMED = "renamed"
    FAILED = "failed"


class FunctionImporter:
    """Creates or updates one function per subroutine entry.

    Entries without a name, low pc or high pc are skipped silently. Program
    model errors are reported to the message log and abort only the entry
    being processed.
    """

    def __init__(
        self,
        program: Program,
        log: MessageLog,
        type_manager: TypeManager,
        type_extractor: TypeExtractor | None = None,
        force_signature: bool = True,
    ):
        self.program = program
        self.log = log
        self.type_manager = type_manager
        self.type_extractor = type_extractor or type_manager.type_extractor
        self.force_signature = force_signature
        self.function_manager = program.function_manager
        self.class_resolver = MemberClassResolver(type_manager, self.type_extractor)

    def process_subroutine(self, entry: DebugInfoEntry) -> ImportOutcome:
        name = extract_name(entry)
        low_pc = entry.get_address(AttributeName.LOW_PC)
        high_pc = entry.get_address(AttributeName.HIGH_PC)

        if name is None or low_pc is None or high_pc is None:
            return ImportOutcome.SKIPPED

        low_addr = self.program.to_addr(low_pc)
        high_addr = self.program.to_addr(high_pc)

        # Prefix the name with the class name for member functions
        class_type = self.class_resolver.determine_member_class(entry)
        if class_type is not None and class_type.name not in name:
            name = f"{class_type.name}::{name}"

        return_type = self.type_extractor.extract_data_type(entry)

        function = self.function_manager.get_function_at(low_addr)
        try:
            if function is None:
                body = self.program.get_set().intersect_range(low_addr, high_addr)
                function = self.function_manager.create_function(
                    name, low_addr, body, SourceType.IMPORTED
                )
                outcome = ImportOutcome.CREATED
            else:
                function.set_name(name, SourceType.IMPORTED)
                outcome = ImportOutcome.RENAMED

            params = [
                Parameter(extract_name(child), self.type_extractor.extract_data_type(child))
                for child in entry.iter_children(Tag.FORMAL_PARAMETER)
            ]
            function.update_function(
                None,
                ReturnParameter(return_type),
                params,
                FunctionUpdateType.DYNAMIC_STORAGE_FORMAL_PARAMS,
                self.force_signature,
                SourceType.IMPORTED,
            )
        except ProgramModelError as e:
            self.log.append_exception(e)
            return ImportOutcome.FAILED

        logger.debug(f"{outcome.value} {name} at 0x{low_addr:x}-0x{high_addr:x}")
        return outcome
