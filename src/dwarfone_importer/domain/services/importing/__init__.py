#!/usr/bin/env python3

"""Services importing debug entries into the program model."""

from .function_importer import FunctionImporter, ImportOutcome
from .import_utils import extract_name
from .member_class_resolver import MemberClassResolver
from .program_importer import ImportSummary, ProgramImporter

__all__ = [
    "FunctionImporter",
    "ImportOutcome",
    "ImportSummary",
    "MemberClassResolver",
    "ProgramImporter",
    "extract_name",
]
