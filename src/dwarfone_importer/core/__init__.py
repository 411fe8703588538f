"""Core module initialization."""

from .debug_info_parser import DebugInfoParser, parse_debug_section
from .models import (
    AttributeForm,
    AttributeName,
    FundamentalType,
    LocationAtom,
    SubscriptFormat,
    Tag,
    TypeModifier,
)

__all__ = [
    "AttributeForm",
    "AttributeName",
    "DebugInfoParser",
    "FundamentalType",
    "LocationAtom",
    "SubscriptFormat",
    "Tag",
    "TypeModifier",
    "parse_debug_section",
]
