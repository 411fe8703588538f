#!/usr/bin/env python3

"""Batch driver importing every subroutine of a debug entry tree."""

from collections import Counter
from dataclasses import dataclass
from typing import Any

from ....core.models import AttributeName, Tag
from ....infrastructure.config import get_config
from ....infrastructure.logging import MessageLog, ProgressTracker, get_logger, log_timing
from ...models.dwarf import DebugInfoTree
from ...models.program import Program
from ..parsing import TypeManager
from .function_importer import FunctionImporter, ImportOutcome

logger = get_logger(__name__)


@dataclass
class ImportSummary:
    """Counts of what happened during one import pass."""

    entries: int = 0
    created: int = 0
    renamed: int = 0
    skipped: int = 0
    failed: int = 0

    def __str__(self) -> str:
        return (
            f"{self.entries} subroutines: {self.created} created, {self.renamed} renamed, "
            f"{self.skipped} skipped, {self.failed} failed"
        )


class ProgramImporter:
    """Feeds subroutine entries to the FunctionImporter one at a time, in section order."""

    def __init__(
        self,
        tree: DebugInfoTree,
        program: Program,
        log: MessageLog,
        settings: dict[str, Any] | None = None,
    ):
        self.tree = tree
        self.program = program
        self.log = log
        self.settings = settings if settings is not None else get_config()
        self.type_manager = TypeManager(tree, program.pointer_size)
        self.function_importer = FunctionImporter(
            program,
            log,
            self.type_manager,
            force_signature=self.settings["FORCE_SIGNATURE_UPDATE"],
        )

    @property
    def subroutine_tags(self) -> frozenset[Tag]:
        if self.settings["IMPORT_STATIC_SUBROUTINES"]:
            return frozenset({Tag.GLOBAL_SUBROUTINE, Tag.SUBROUTINE})
        return frozenset({Tag.GLOBAL_SUBROUTINE})

    @log_timing
    def import_functions(self) -> ImportSummary:
        """Import all subroutines; one failing entry never stops the pass."""
        tracker = ProgressTracker(logger, self.settings["PROGRESS_INTERVAL"])
        outcomes: Counter[ImportOutcome] = Counter()
        tags = self.subroutine_tags

        with tracker.track_operation("import functions"):
            for unit in self.tree.roots:
                unit_name = unit.get_string(AttributeName.NAME) or "<unnamed>"
                with tracker.track_unit(unit_name, unit.ref):
                    for entry in self.tree.iter_entries(tags, root=unit):
                        outcomes[self.function_importer.process_subroutine(entry)] += 1
                        tracker.count_entry()

        summary = ImportSummary(
            entries=sum(outcomes.values()),
            created=outcomes[ImportOutcome.CREATED],
            renamed=outcomes[ImportOutcome.RENAMED],
            skipped=outcomes[ImportOutcome.SKIPPED],
            failed=outcomes[ImportOutcome.FAILED],
        )
        tracker.report_summary()
        logger.info(f"Function import finished: {summary}")
        return summary
