#!/usr/bin/env python3

"""Function model: name, body, return value and parameters."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..types import DataType
from .address_set import AddressSet
from .exceptions import InvalidInputError

if TYPE_CHECKING:
    from .function_manager import FunctionManager


class SourceType(Enum):
    """Provenance of a name or signature."""

    DEFAULT = "default"
    ANALYSIS = "analysis"
    IMPORTED = "imported"
    USER_DEFINED = "user_defined"


class FunctionUpdateType(Enum):
    """How parameter storage is decided when a signature is replaced."""

    CUSTOM_STORAGE = "custom_storage"
    DYNAMIC_STORAGE_FORMAL_PARAMS = "dynamic_storage_formal_params"


@dataclass
class Parameter:
    """Formal parameter. ``stack_offset`` is filled in by the program model."""

    name: str | None
    data_type: DataType
    ordinal: int = -1
    stack_offset: int | None = None


@dataclass
class ReturnParameter:
    data_type: DataType


class Function:
    """A function stored in the program's function table."""

    def __init__(
        self,
        manager: FunctionManager,
        name: str,
        entry_point: int,
        body: AddressSet,
        source: SourceType,
    ):
        self._manager = manager
        self._name = name
        self.entry_point = entry_point
        self.body = body
        self.name_source = source
        self.signature_source = SourceType.DEFAULT
        self.calling_convention: str | None = None
        self.return_parameter: ReturnParameter | None = None
        self.parameters: list[Parameter] = []

    @property
    def name(self) -> str:
        return self._name

    def set_name(self, name: str, source: SourceType) -> None:
        """Rename the function in place.

        Raises:
            InvalidInputError: If the name is not a valid identifier
            DuplicateNameError: If another function already uses the name
        """
        self._manager.check_name(name, exclude=self)
        self._name = name
        self.name_source = source

    def update_function(
        self,
        calling_convention: str | None,
        return_param: ReturnParameter,
        params: Sequence[Parameter],
        update_type: FunctionUpdateType,
        force: bool,
        source: SourceType,
    ) -> None:
        """Replace the return value and parameter list.

        Args:
            calling_convention: Calling convention name, None keeps the current one
            return_param: New return value
            params: New formal parameters in order
            update_type: Storage assignment mode
            force: Overwrite a user-defined signature
            source: Provenance recorded for the new signature

        Raises:
            InvalidInputError: If the signature is user-defined and force is not set
        """
        if self.signature_source == SourceType.USER_DEFINED and not force:
            raise InvalidInputError(
                f"Signature of {self._name} is user-defined; refusing to replace it"
            )

        new_params = []
        for ordinal, param in enumerate(params):
            name = param.name or f"param_{ordinal + 1}"
            new_params.append(
                Parameter(name, param.data_type, ordinal, param.stack_offset)
            )

        if update_type == FunctionUpdateType.DYNAMIC_STORAGE_FORMAL_PARAMS:
            self._assign_stack_storage(new_params)

        if calling_convention is not None:
            self.calling_convention = calling_convention
        self.return_parameter = return_param
        self.parameters = new_params
        self.signature_source = source

    def _assign_stack_storage(self, params: list[Parameter]) -> None:
        # Arguments are pushed right to left; the first one sits just above the return address
        slot = self._manager.program.pointer_size
        offset = slot
        for param in params:
            param.stack_offset = offset
            size = max(param.data_type.size, slot)
            offset += (size + slot - 1) // slot * slot

    def __repr__(self) -> str:
        return f"Function({self._name!r} @ 0x{self.entry_point:x})"
