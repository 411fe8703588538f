"""Main entry point for the DWARF v1 function importer."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from .core import DebugInfoParser
from .domain.services.generation import ListingGenerator
from .domain.services.importing import ProgramImporter
from .infrastructure.config import Config, get_config
from .infrastructure.elf_program import ELFProgramLoader
from .infrastructure.logging import LoggerSetup, MessageLog, get_logger, log_timing
from .utils.path_utils import create_listing_filename


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Import functions from DWARF v1 (.debug section) debug information "
        "and write them out as C-style prototypes",
        epilog="""
Examples:
  # Import and write output/<name>_functions.txt
  dwarfone-import game.elf

  # Debug logging and a custom output directory
  dwarfone-import game.elf -o listings/ --verbose

  # Fail when any subroutine could not be imported
  dwarfone-import game.elf --strict

  # Using .env file for configuration
  echo 'ELF_FILE_PATH=game.elf' > .env
  dwarfone-import
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "elf_file",
        type=Path,
        nargs="?",
        help="Path to the ELF file to import (optional if using .env)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output directory for the function listing (default: ./output)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output with debug logs",
    )
    parser.add_argument(
        "--listing",
        type=str,
        metavar="SUFFIX",
        default="functions",
        help="Suffix of the listing file name (default: functions)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any subroutine failed to import",
    )
    return parser.parse_args(argv)


@log_timing
def run(config: Config, listing_suffix: str, strict: bool) -> int:
    """Import one ELF file and write its listing. Returns the exit status."""
    logger = get_logger(__name__)
    settings = get_config()

    with DebugInfoParser(config.elf_file_path, settings["DEBUG_SECTION"]) as parser:
        tree = parser.parse()
        program = ELFProgramLoader.load(
            parser.elf_file,
            image_base=settings["IMAGE_BASE"],
            allow_duplicate_names=settings["ALLOW_DUPLICATE_NAMES"],
            name=config.elf_file_path.name,
        )

    log = MessageLog(logger)
    summary = ProgramImporter(tree, program, log, settings).import_functions()

    config.ensure_output_dir()
    output_file = config.output_dir / create_listing_filename(config.elf_file_path, listing_suffix)
    output_file.write_text(ListingGenerator().generate(program), encoding="utf-8")

    logger.info("=" * 70)
    logger.info("IMPORT SUMMARY")
    logger.info("=" * 70)
    logger.info(f"Subroutine entries: {summary.entries}")
    logger.info(f"Functions created: {summary.created}")
    logger.info(f"Functions renamed: {summary.renamed}")
    logger.info(f"Skipped (incomplete): {summary.skipped}")
    logger.info(f"Failed: {summary.failed}")
    logger.info(f"Listing: {output_file}")

    if strict and log.error_count:
        logger.error(f"{log.error_count} subroutines could not be imported")
        return 1
    return 0


def main(argv: list[str] | None = None) -> NoReturn:
    """Command line entry point."""
    args = parse_args(argv)

    try:
        config = Config.from_args(
            elf_file_path=args.elf_file,
            output_dir=args.output,
            verbose=args.verbose,
        )
        config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    LoggerSetup.initialize(config.log_dir, verbose=config.verbose)
    logger = get_logger(__name__)
    logger.debug(f"ELF file: {config.elf_file_path}")
    logger.debug(f"Output directory: {config.output_dir}")

    try:
        status = run(config, args.listing, args.strict)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error(f"Import failed: {e}")
        sys.exit(1)

    sys.exit(status)


if __name__ == "__main__":
    main()
