#!/usr/bin/env python3

"""Build the program model for an ELF file.

The address set covers the loadable segments (or, for relocatable objects
without program headers, the allocated sections), shifted by the image base.
"""

from elftools.elf.constants import SH_FLAGS
from elftools.elf.elffile import ELFFile

from ..domain.models.program import AddressSet, Program
from .logging import get_logger

logger = get_logger(__name__)


class ELFProgramLoader:
    """Creates a Program describing the address space of an ELF file."""

    @staticmethod
    def load(
        elf: ELFFile,
        image_base: int = 0,
        allow_duplicate_names: bool = False,
        name: str = "program",
    ) -> Program:
        """Create an empty program for ``elf``.

        Args:
            elf: Opened ELF file
            image_base: Offset added to every address
            allow_duplicate_names: Let several functions share one name
            name: Program name used in reports

        Returns:
            Program with address set and pointer size taken from the ELF
        """
        address_set = ELFProgramLoader.loaded_address_set(elf, image_base)
        pointer_size = 8 if elf.elfclass == 64 else 4

        logger.debug(
            f"ELF characteristics: machine={elf.header['e_machine']}, "
            f"class={elf.elfclass}, little_endian={elf.little_endian}"
        )
        logger.info(f"Program {name}: {address_set}")

        return Program(
            address_set,
            image_base=image_base,
            pointer_size=pointer_size,
            allow_duplicate_names=allow_duplicate_names,
            name=name,
        )

    @staticmethod
    def loaded_address_set(elf: ELFFile, image_base: int = 0) -> AddressSet:
        """Collect the address ranges backed by the image."""
        address_set = AddressSet()

        for segment in elf.iter_segments():
            if segment["p_type"] == "PT_LOAD" and segment["p_memsz"] > 0:
                start = image_base + segment["p_vaddr"]
                address_set.add_range(start, start + segment["p_memsz"])

        if address_set.is_empty():
            for section in elf.iter_sections():
                if section["sh_flags"] & SH_FLAGS.SHF_ALLOC and section["sh_size"] > 0:
                    start = image_base + section["sh_addr"]
                    address_set.add_range(start, start + section["sh_size"])

        if address_set.is_empty():
            logger.warning("ELF file has no loadable segments or allocated sections")

        return address_set
