#!/usr/bin/env python3

"""Errors raised by the program model when a function cannot be committed."""


class ProgramModelError(Exception):
    """Base class of recoverable program model errors."""


class DuplicateNameError(ProgramModelError):
    """Another function already uses the requested name."""


class InvalidInputError(ProgramModelError):
    """A name or signature is not acceptable to the program model."""


class OverlappingFunctionError(ProgramModelError):
    """A function body collides with an existing function."""
