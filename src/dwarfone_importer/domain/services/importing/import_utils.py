#!/usr/bin/env python3

"""Small helpers shared by the importers."""

from ....core.models import AttributeName
from ...models.dwarf import DebugInfoEntry


def extract_name(entry: DebugInfoEntry) -> str | None:
    """Return the entry's name attribute, or None when it is absent or empty.

    The name is returned verbatim: no normalization and no demangling.
    """
    name = entry.get_string(AttributeName.NAME)
    return name or None
