#!/usr/bin/env python3

"""Progress tracking for the one-shot type database load."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from time import time
from typing import Any

import psutil


class ProgressTracker:
    """
    Track and report load progress across DWARF units.

    Counts units, DIEs visited and type entries kept, and times named
    operations for the debug log.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize progress tracker.

        Args:
            logger: Logger instance for progress reporting
        """
        self.logger = logger
        self.start_time = time()
        self.unit_count = 0
        self.die_count = 0
        self.type_count = 0
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
    def track_unit(self, unit: Any, section: str) -> Iterator[None]:
        """
        Track one compilation or type unit.

        Args:
            unit: pyelftools unit being decoded
            section: Section name the unit lives in

        Yields:
            None
        """
        self.unit_count += 1
        unit_start = time()
        unit_offset = getattr(unit, "cu_offset", 0)
        initial_types = self.type_count

        self.logger.debug(f"Decoding unit #{self.unit_count} at {section}+0x{unit_offset:x}")

        try:
            yield
        except Exception as e:
            elapsed = time() - unit_start
            self.logger.error(f"Unit #{self.unit_count} failed after {elapsed:.3f}s: {e}")
            raise

        elapsed = time() - unit_start
        self.logger.debug(
            f"Unit #{self.unit_count} done in {elapsed:.3f}s "
            f"({self.type_count - initial_types} types kept)"
        )

    def count_die(self) -> None:
        """Increment the DIE counter."""
        self.die_count += 1

    def count_type(self) -> None:
        """Increment the kept-type counter."""
        self.type_count += 1

    def report_summary(self) -> None:
        """Report final load statistics."""
        total_time = time() - self.start_time
        die_rate = self.die_count / total_time if total_time > 0 else 0

        self.logger.info(
            f"Load complete: {self.unit_count} units, {self.die_count} DIEs, "
            f"{self.type_count} types in {total_time:.2f}s ({die_rate:.1f} DIEs/s)"
        )

    def log_memory_usage(self) -> None:
        """Log the resident set size of this process."""
        try:
            memory_mb = psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.debug(f"Could not get memory usage: {e}")
            return
        self.logger.debug(f"Memory usage: {memory_mb:.1f} MB")
