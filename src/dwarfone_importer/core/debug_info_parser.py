"""Parser building the debug entry tree from a DWARF v1 ``.debug`` section."""

import struct
from pathlib import Path
from typing import BinaryIO

from elftools.elf.elffile import ELFFile

from ..domain.models.dwarf import (
    AddrAttributeValue,
    AttributeValue,
    BlockAttributeValue,
    ConstAttributeValue,
    DebugInfoEntry,
    DebugInfoTree,
    RefAttributeValue,
    StringAttributeValue,
)
from ..infrastructure.logging import get_logger, log_timing
from .models import AttributeForm, AttributeName, Tag

logger = get_logger(__name__)

# Entries shorter than this carry no tag and only pad the section
MIN_ENTRY_LENGTH = 8


class DebugSectionError(ValueError):
    """The section contents do not follow the DWARF v1 entry layout."""


class _SectionReader:
    """Fixed-width integer reads in the section's byte order."""

    def __init__(self, data: bytes, byte_order: str, address_size: int):
        self.data = data
        prefix = "<" if byte_order == "little" else ">"
        self._u16 = struct.Struct(prefix + "H")
        self._u32 = struct.Struct(prefix + "I")
        self._u64 = struct.Struct(prefix + "Q")
        self._addr = self._u64 if address_size == 8 else self._u32

    def _unpack(self, fmt: struct.Struct, offset: int, limit: int) -> int:
        if offset + fmt.size > limit:
            raise DebugSectionError(f"Read past end of entry at 0x{offset:x}")
        return fmt.unpack_from(self.data, offset)[0]

    def u16(self, offset: int, limit: int) -> int:
        return self._unpack(self._u16, offset, limit)

    def u32(self, offset: int, limit: int) -> int:
        return self._unpack(self._u32, offset, limit)

    def u64(self, offset: int, limit: int) -> int:
        return self._unpack(self._u64, offset, limit)

    def address(self, offset: int, limit: int) -> tuple[int, int]:
        return self._unpack(self._addr, offset, limit), offset + self._addr.size

    def block(self, offset: int, length: int, limit: int) -> bytes:
        if offset + length > limit:
            raise DebugSectionError(f"Block at 0x{offset:x} runs past end of entry")
        return self.data[offset : offset + length]

    def string(self, offset: int, limit: int) -> tuple[str, int]:
        end = self.data.find(b"\0", offset, limit)
        if end < 0:
            raise DebugSectionError(f"Unterminated string at 0x{offset:x}")
        return self.data[offset:end].decode("latin-1"), end + 1


def _read_value(
    reader: _SectionReader, form: int, pos: int, limit: int
) -> tuple[AttributeValue, int]:
    """Decode one attribute value, returning it with the position after it."""
    if form == AttributeForm.ADDR:
        address, pos = reader.address(pos, limit)
        return AddrAttributeValue(address), pos
    if form == AttributeForm.REF:
        return RefAttributeValue(reader.u32(pos, limit)), pos + 4
    if form == AttributeForm.BLOCK2:
        length = reader.u16(pos, limit)
        return BlockAttributeValue(reader.block(pos + 2, length, limit)), pos + 2 + length
    if form == AttributeForm.BLOCK4:
        length = reader.u32(pos, limit)
        return BlockAttributeValue(reader.block(pos + 4, length, limit)), pos + 4 + length
    if form == AttributeForm.DATA2:
        return ConstAttributeValue(reader.u16(pos, limit)), pos + 2
    if form == AttributeForm.DATA4:
        return ConstAttributeValue(reader.u32(pos, limit)), pos + 4
    if form == AttributeForm.DATA8:
        return ConstAttributeValue(reader.u64(pos, limit)), pos + 8
    if form == AttributeForm.STRING:
        text, pos = reader.string(pos, limit)
        return StringAttributeValue(text), pos
    raise DebugSectionError(f"Unknown attribute form 0x{form:x} at 0x{pos:x}")


def _parse_entry(reader: _SectionReader, offset: int, end: int) -> DebugInfoEntry:
    tag = Tag.decode(reader.u16(offset + 4, end))
    entry = DebugInfoEntry(ref=offset, tag=tag)

    pos = offset + 6
    while pos < end:
        raw_name = reader.u16(pos, end)
        value, pos = _read_value(reader, raw_name & 0xF, pos + 2, end)
        entry.attributes[AttributeName.decode(raw_name)] = value

    return entry


def parse_debug_section(
    data: bytes, byte_order: str = "little", address_size: int = 4
) -> DebugInfoTree:
    """Build the entry tree of a ``.debug`` section.

    An entry whose sibling lies beyond the next entry owns everything up to
    that sibling. Parsing stops at the first malformed entry; entries read
    before it are kept.

    Args:
        data: Raw section contents
        byte_order: "little" or "big"
        address_size: Size of FORM_ADDR values (4 or 8)

    Returns:
        DebugInfoTree with compile units as roots
    """
    reader = _SectionReader(data, byte_order, address_size)
    tree = DebugInfoTree(byte_order)
    scopes: list[tuple[DebugInfoEntry, int]] = []

    offset = 0
    while offset + 4 <= len(data):
        length = reader.u32(offset, len(data))
        if length < MIN_ENTRY_LENGTH:
            offset += max(length, 4)
            continue

        end = offset + length
        if end > len(data):
            logger.warning(
                f"Entry at 0x{offset:x} claims {length} bytes, section has "
                f"{len(data) - offset} left; stopping"
            )
            break

        try:
            entry = _parse_entry(reader, offset, end)
        except DebugSectionError as e:
            logger.warning(f"Malformed entry at 0x{offset:x}: {e}; stopping")
            break

        if entry.tag == Tag.COMPILE_UNIT:
            # Compile units never nest
            scopes.clear()
        while scopes and offset >= scopes[-1][1]:
            scopes.pop()
        tree.add(entry, scopes[-1][0] if scopes else None)

        sibling = entry.get_attribute(AttributeName.SIBLING)
        if isinstance(sibling, RefAttributeValue):
            if sibling.ref > end:
                scopes.append((entry, sibling.ref))
        elif entry.tag == Tag.COMPILE_UNIT:
            scopes.append((entry, len(data)))

        offset = end

    logger.debug(f"Parsed {len(tree)} entries ({len(tree.roots)} compile units)")
    return tree


class DebugInfoParser:
    """Reads DWARF v1 debug information from an ELF file."""

    def __init__(self, elf_path: Path, section_name: str = ".debug") -> None:
        """
        Initialize the parser.

        Args:
            elf_path: Path to the ELF file
            section_name: Name of the section holding DWARF v1 entries
        """
        self.elf_path = elf_path
        self.section_name = section_name
        self.elf_file: ELFFile | None = None
        self._file_handle: BinaryIO | None = None

    def open(self) -> None:
        """Open and validate the ELF file."""
        if not self.elf_path.exists():
            raise FileNotFoundError(f"ELF file not found: {self.elf_path}")

        if not self.elf_path.is_file():
            raise ValueError(f"Not a file: {self.elf_path}")

        self._file_handle = open(self.elf_path, "rb")
        try:
            self.elf_file = ELFFile(self._file_handle)
        except Exception as e:
            self.close()
            raise RuntimeError(f"Failed to open ELF file: {e}") from e

        logger.debug(
            f"Opened ELF file: {self.elf_path} ({self.elf_file.get_machine_arch()}, "
            f"{'little' if self.elf_file.little_endian else 'big'} endian)"
        )

    def close(self) -> None:
        if self._file_handle is not None:
            self._file_handle.close()
            self._file_handle = None
        self.elf_file = None

    def __enter__(self) -> "DebugInfoParser":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore[no-untyped-def]
        self.close()

    @log_timing
    def parse(self) -> DebugInfoTree:
        """Parse the debug section into an entry tree.

        Raises:
            RuntimeError: If the file is not open
            ValueError: If the ELF has no DWARF v1 section
        """
        if self.elf_file is None:
            raise RuntimeError("ELF file not opened. Call open() first.")

        section = self.elf_file.get_section_by_name(self.section_name)
        if section is None:
            raise ValueError(
                f"No {self.section_name} section found in {self.elf_path}; "
                "the file carries no DWARF v1 debug information"
            )

        byte_order = "little" if self.elf_file.little_endian else "big"
        address_size = 8 if self.elf_file.elfclass == 64 else 4
        tree = parse_debug_section(section.data(), byte_order, address_size)
        logger.info(f"Read {len(tree)} debug entries from {self.section_name}")
        return tree
