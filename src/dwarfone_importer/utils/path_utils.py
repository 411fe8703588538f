"""Path utilities for cross-platform file operations."""

import re
import string
from pathlib import Path

VALID_CHARS = frozenset(string.ascii_letters + string.digits + "_-.")


def sanitize_for_filesystem(name: str, replacement: str = "_") -> str:
    """Sanitize a string to be safe for use as a filename.

    Scope separators (``::``) become ``__``; other invalid characters become
    ``replacement``, with runs of it collapsed.
    """
    if not name:
        return "unnamed"

    parts = []
    for part in name.split("::"):
        part = "".join(c if c in VALID_CHARS else replacement for c in part)
        if replacement:
            part = re.sub(re.escape(replacement) + "{2,}", replacement, part)
            part = part.strip(replacement)
        if part:
            parts.append(part)

    return "__".join(parts)[:200] or "unnamed"


def create_listing_filename(elf_path: Path, suffix: str = "functions") -> str:
    """Name of the listing written for ``elf_path`` (``<stem>_<suffix>.txt``)."""
    base_name = sanitize_for_filesystem(elf_path.stem)
    return f"{base_name}_{sanitize_for_filesystem(suffix)}.txt"
