#!/usr/bin/env python3

"""In-memory program model."""

from .address_set import AddressRange, AddressSet
from .exceptions import (
    DuplicateNameError,
    InvalidInputError,
    OverlappingFunctionError,
    ProgramModelError,
)
from .function import Function, FunctionUpdateType, Parameter, ReturnParameter, SourceType
from .function_manager import FunctionManager
from .program import Program

__all__ = [
    "AddressRange",
    "AddressSet",
    "DuplicateNameError",
    "Function",
    "FunctionManager",
    "FunctionUpdateType",
    "InvalidInputError",
    "OverlappingFunctionError",
    "Parameter",
    "Program",
    "ProgramModelError",
    "ReturnParameter",
    "SourceType",
]
