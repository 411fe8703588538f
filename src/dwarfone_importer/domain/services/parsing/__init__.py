#!/usr/bin/env python3

"""Type resolution services for DWARF v1 debug information."""

from .type_extractor import FUNDAMENTAL_TYPES, TypeExtractor
from .type_manager import TypeManager

__all__ = [
    "FUNDAMENTAL_TYPES",
    "TypeExtractor",
    "TypeManager",
]
