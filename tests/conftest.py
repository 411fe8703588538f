"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dwarfone_importer.domain.models.program import AddressSet, Program
from dwarfone_importer.domain.services.parsing import TypeManager
from dwarfone_importer.infrastructure.logging import MessageLog

from tests.helpers import DebugSectionWriter, EntryTreeBuilder


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def builder() -> EntryTreeBuilder:
    """Fresh entry tree builder."""
    return EntryTreeBuilder()


@pytest.fixture
def section_writer() -> DebugSectionWriter:
    """Little-endian .debug section writer."""
    return DebugSectionWriter()


@pytest.fixture
def program() -> Program:
    """Program whose address space covers 0x0-0x10000."""
    return Program(AddressSet([(0x0, 0x10000)]), pointer_size=4)


@pytest.fixture
def message_log() -> MessageLog:
    return MessageLog()


@pytest.fixture
def type_manager(builder: EntryTreeBuilder) -> TypeManager:
    """Type manager bound to the builder's tree."""
    return TypeManager(builder.tree, pointer_size=4)
