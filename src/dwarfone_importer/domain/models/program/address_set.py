#!/usr/bin/env python3

"""Sets of target addresses made of half-open ranges."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class AddressRange:
    """Half-open address range [start, end)."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Invalid range 0x{self.start:x}-0x{self.end:x}")

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, address: int) -> bool:
        return self.start <= address < self.end

    def intersects(self, other: AddressRange) -> bool:
        return self.start < other.end and other.start < self.end


class AddressSet:
    """Normalized (sorted, merged) collection of address ranges."""

    def __init__(self, ranges: Iterable[AddressRange | tuple[int, int]] = ()):
        self._ranges: list[AddressRange] = self._normalize(ranges)

    @staticmethod
    def _normalize(ranges: Iterable[AddressRange | tuple[int, int]]) -> list[AddressRange]:
        items = sorted(
            r if isinstance(r, AddressRange) else AddressRange(*r) for r in ranges
        )
        merged: list[AddressRange] = []
        for item in items:
            if item.length == 0:
                continue
            if merged and item.start <= merged[-1].end:
                last = merged.pop()
                item = AddressRange(last.start, max(last.end, item.end))
            merged.append(item)
        return merged

    def add_range(self, start: int, end: int) -> None:
        self._ranges = self._normalize([*self._ranges, AddressRange(start, end)])

    def intersect_range(self, start: int, end: int) -> AddressSet:
        """Return the part of this set that lies within [start, end)."""
        clipped = []
        for item in self._ranges:
            low = max(item.start, start)
            high = min(item.end, end)
            if low < high:
                clipped.append(AddressRange(low, high))
        return AddressSet(clipped)

    def intersects(self, other: AddressSet) -> bool:
        return any(a.intersects(b) for a in self._ranges for b in other._ranges)

    def contains(self, address: int) -> bool:
        return any(item.contains(address) for item in self._ranges)

    def is_empty(self) -> bool:
        return not self._ranges

    @property
    def min_address(self) -> int | None:
        return self._ranges[0].start if self._ranges else None

    @property
    def max_address(self) -> int | None:
        """Exclusive upper bound of the set."""
        return self._ranges[-1].end if self._ranges else None

    def __iter__(self) -> Iterator[AddressRange]:
        return iter(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AddressSet):
            return NotImplemented
        return self._ranges == other._ranges

    def __repr__(self) -> str:
        ranges = ", ".join(f"[0x{r.start:x}, 0x{r.end:x})" for r in self._ranges)
        return f"AddressSet({ranges})"
