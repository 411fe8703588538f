#!/usr/bin/env python3

"""Debug information entry and entry tree models."""

from __future__ import annotations

import weakref
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ....core.models import AttributeName, Tag
from .attribute_value import AttributeValue


@dataclass(eq=False)
class DebugInfoEntry:
    """One node of the parsed debug information tree.

    The tree owns entries top-down through ``children``. The parent link is a
    weak back reference used for upward lookups only.
    """

    ref: int
    """Offset of the entry in the debug section; unique within the tree."""

    tag: Tag | int
    attributes: dict[AttributeName | int, AttributeValue] = field(default_factory=dict)
    children: list[DebugInfoEntry] = field(default_factory=list)
    _parent: weakref.ReferenceType[DebugInfoEntry] | None = field(
        default=None, repr=False
    )

    @property
    def parent(self) -> DebugInfoEntry | None:
        if self._parent is None:
            return None
        return self._parent()

    def add_child(self, child: DebugInfoEntry) -> None:
        child._parent = weakref.ref(self)
        self.children.append(child)

    def iter_children(self, tag: Tag | int | None = None) -> Iterator[DebugInfoEntry]:
        """Yield direct children, optionally restricted to one tag."""
        for child in self.children:
            if tag is None or child.tag == tag:
                yield child

    def has_attribute(self, name: AttributeName | int) -> bool:
        return name in self.attributes

    def get_attribute(self, name: AttributeName | int) -> AttributeValue | None:
        return self.attributes.get(name)

    def get_address(self, name: AttributeName | int) -> int | None:
        value = self.attributes.get(name)
        return value.as_address() if value is not None else None

    def get_ref(self, name: AttributeName | int) -> int | None:
        value = self.attributes.get(name)
        return value.as_ref() if value is not None else None

    def get_string(self, name: AttributeName | int) -> str | None:
        value = self.attributes.get(name)
        return value.as_string() if value is not None else None

    def get_const(self, name: AttributeName | int) -> int | None:
        value = self.attributes.get(name)
        return value.as_const() if value is not None else None

    def get_block(self, name: AttributeName | int) -> bytes | None:
        value = self.attributes.get(name)
        return value.as_block() if value is not None else None

    def __repr__(self) -> str:
        tag = self.tag.name if isinstance(self.tag, Tag) else f"0x{self.tag:x}"
        return f"DebugInfoEntry(ref=0x{self.ref:x}, tag={tag})"


class DebugInfoTree:
    """Owns every entry of one debug section and indexes them by offset."""

    def __init__(self, byte_order: str = "little"):
        self.byte_order = byte_order
        self.roots: list[DebugInfoEntry] = []
        self._entries: dict[int, DebugInfoEntry] = {}

    def add(self, entry: DebugInfoEntry, parent: DebugInfoEntry | None = None) -> DebugInfoEntry:
        """Register an entry, attaching it under ``parent`` or as a root."""
        if entry.ref in self._entries:
            raise ValueError(f"Duplicate entry offset 0x{entry.ref:x}")
        self._entries[entry.ref] = entry
        if parent is None:
            self.roots.append(entry)
        else:
            parent.add_child(entry)
        return entry

    def get(self, ref: int) -> DebugInfoEntry | None:
        return self._entries.get(ref)

    def iter_entries(
        self,
        tags: Iterable[Tag | int] | None = None,
        root: DebugInfoEntry | None = None,
    ) -> Iterator[DebugInfoEntry]:
        """Yield entries depth-first in section order.

        Args:
            tags: Only yield entries with one of these tags
            root: Walk only this entry and its descendants
        """
        wanted = frozenset(tags) if tags is not None else None
        stack = [root] if root is not None else list(reversed(self.roots))
        while stack:
            entry = stack.pop()
            if wanted is None or entry.tag in wanted:
                yield entry
            stack.extend(reversed(entry.children))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, ref: int) -> bool:
        return ref in self._entries
