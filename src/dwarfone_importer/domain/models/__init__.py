#!/usr/bin/env python3

"""Domain models."""

from . import dwarf, program, types

__all__ = [
    "dwarf",
    "program",
    "types",
]
