#!/usr/bin/env python3

"""DWARF v1 debug entry models."""

from .attribute_value import (
    AddrAttributeValue,
    AttributeKind,
    AttributeValue,
    BlockAttributeValue,
    ConstAttributeValue,
    RefAttributeValue,
    StringAttributeValue,
    WrongAttributeKindError,
)
from .debug_info_entry import DebugInfoEntry, DebugInfoTree

__all__ = [
    "AddrAttributeValue",
    "AttributeKind",
    "AttributeValue",
    "BlockAttributeValue",
    "ConstAttributeValue",
    "DebugInfoEntry",
    "DebugInfoTree",
    "RefAttributeValue",
    "StringAttributeValue",
    "WrongAttributeKindError",
]
