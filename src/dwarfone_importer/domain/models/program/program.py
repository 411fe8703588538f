#!/usr/bin/env python3

"""Program model: address space and function table."""

from .address_set import AddressSet
from .function_manager import FunctionManager


class Program:
    """Destination of the import.

    Raw debug addresses are relative to ``image_base``; ``address_set`` holds
    the addresses that are backed by the loaded image.
    """

    def __init__(
        self,
        address_set: AddressSet,
        image_base: int = 0,
        pointer_size: int = 4,
        allow_duplicate_names: bool = False,
        name: str = "program",
    ):
        self.name = name
        self.image_base = image_base
        self.pointer_size = pointer_size
        self._address_set = address_set
        self.function_manager = FunctionManager(self, allow_duplicate_names)

    def to_addr(self, offset: int) -> int:
        """Translate a raw debug-info address into a program address."""
        return self.image_base + offset

    def get_set(self) -> AddressSet:
        return self._address_set
