#!/usr/bin/env python3

"""Progress tracking for debug entry import passes."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from time import time


class ProgressTracker:
    """
    Track and report import progress with per-unit statistics.

    Provides contextual timing, compile unit tracking, and entry counting
    for performance analysis and debugging.
    """

    def __init__(self, logger: logging.Logger, report_every: int = 1000):
        """
        Initialize progress tracker.

        Args:
            logger: Logger instance for progress reporting
            report_every: Emit an INFO progress line every N counted entries (0 disables)
        """
        self.logger = logger
        self.report_every = report_every
        self.start_time = time()
        self.unit_count = 0
        self.entry_count = 0
        self.operation_stack: list[tuple[str, float]] = []

    @contextmanager
    def track_operation(self, operation_name: str) -> Iterator[None]:
        """
        Track a high-level operation with timing.

        Args:
            operation_name: Name of the operation being tracked

        Yields:
            None
        """
        start_time = time()
        self.operation_stack.append((operation_name, start_time))

        self.logger.debug(f"Starting operation: {operation_name}")

        try:
            yield
            elapsed = time() - start_time
            self.logger.debug(f"Completed operation: {operation_name} in {elapsed:.3f}s")
        except Exception as e:
            elapsed = time() - start_time
            self.logger.error(f"Failed operation: {operation_name} after {elapsed:.3f}s: {e}")
            raise
        finally:
            self.operation_stack.pop()

    @contextmanager
    def track_unit(self, name: str, offset: int) -> Iterator[None]:
        """
        Track processing of one compile unit.

        Args:
            name: Compile unit name (source file)
            offset: Section offset of the compile unit entry

        Yields:
            None
        """
        self.unit_count += 1
        unit_start = time()
        initial_entry_count = self.entry_count

        self.logger.debug(f"Processing unit #{self.unit_count} {name} at 0x{offset:x}")

        try:
            yield

            elapsed = time() - unit_start
            entries_processed = self.entry_count - initial_entry_count
            self.logger.debug(
                f"Unit #{self.unit_count} completed in {elapsed:.3f}s "
                f"({entries_processed} entries processed)"
            )

        except Exception as e:
            elapsed = time() - unit_start
            self.logger.error(f"Unit #{self.unit_count} failed after {elapsed:.3f}s: {e}")
            raise

    def count_entry(self) -> None:
        """Increment entry counter for statistics."""
        self.entry_count += 1
        if self.report_every and self.entry_count % self.report_every == 0:
            self.logger.info(f"Processed {self.entry_count} entries")

    def report_summary(self) -> None:
        """Report final processing statistics."""
        total_time = time() - self.start_time
        rate = self.entry_count / total_time if total_time > 0 else 0

        self.logger.info(
            f"Processing complete: {self.unit_count} units, {self.entry_count} entries "
            f"in {total_time:.2f}s ({rate:.1f} entries/s)"
        )

    def get_current_context(self) -> str:
        """
        Get current operation context for logging.

        Returns:
            String describing current operation stack
        """
        if not self.operation_stack:
            return "idle"

        return " > ".join(op[0] for op in self.operation_stack)
