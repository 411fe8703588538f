#!/usr/bin/env python3

"""Domain services layer."""

from . import generation, importing, parsing

__all__ = [
    "generation",
    "importing",
    "parsing",
]
