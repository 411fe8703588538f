"""Utilities module initialization."""

from .path_utils import create_listing_filename, sanitize_for_filesystem

__all__ = [
    "create_listing_filename",
    "sanitize_for_filesystem",
]
