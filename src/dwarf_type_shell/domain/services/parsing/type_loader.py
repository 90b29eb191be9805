#!/usr/bin/env python3

"""One-shot loader turning an ELF file's DWARF into a TypeDatabase.

The loader walks every compilation unit in ``.debug_info`` (and, when
present, every type unit in ``.debug_types``), decodes type DIEs into
entries, collects the line programs, and freezes the result. Nothing is
read from the file after ``load_type_database`` returns.
"""

from pathlib import Path
from typing import Any

from elftools.common.exceptions import DWARFError, ELFError
from elftools.dwarf.dwarfinfo import DWARFInfo
from elftools.elf.elffile import ELFFile

from ....infrastructure.config import get_config
from ....infrastructure.logging import ProgressTracker, get_logger, log_timing
from ...models.dwarf import DebugSection, LineRow
from ...repositories import DEFAULT_POINTER_SIZE, LineTable, TypeDatabase
from .line_table_builder import build_line_ranges
from .type_graph_builder import TypeGraphBuilder

logger = get_logger(__name__)


class TypeLoadError(RuntimeError):
    """The binary could not be opened or its DWARF could not be decoded."""


class TypeLoader:
    """Context manager owning the ELF file handle for the duration of a load."""

    def __init__(self, elf_path: Path, config: dict[str, Any] | None = None):
        """Initialize loader with ELF file path.

        Args:
            elf_path: Path to ELF file containing DWARF information
            config: Loader tunables (defaults to ``get_config()``)
        """
        self.elf_path = elf_path
        self.config = config if config is not None else get_config()
        self.elf_file: ELFFile | None = None
        self.dwarf_info: DWARFInfo | None = None

    def __enter__(self) -> "TypeLoader":
        """Open the ELF file and its DWARF info.

        Raises:
            TypeLoadError: If the file is unreadable or carries no DWARF
        """
        logger.debug(f"Opening ELF file: {self.elf_path}")
        try:
            self.file_handle = open(self.elf_path, "rb")
        except OSError as e:
            raise TypeLoadError(f"cannot open {self.elf_path}: {e}") from e

        try:
            self.elf_file = ELFFile(self.file_handle)  # type: ignore[no-untyped-call]
            if not self.elf_file.has_dwarf_info():  # type: ignore[no-untyped-call]
                raise TypeLoadError(f"no DWARF info found in {self.elf_path}")
            self.dwarf_info = self.elf_file.get_dwarf_info()  # type: ignore[no-untyped-call]
        except (ELFError, DWARFError) as e:
            self.file_handle.close()
            raise TypeLoadError(f"cannot read {self.elf_path}: {e}") from e
        except TypeLoadError:
            self.file_handle.close()
            raise

        logger.info(f"DWARF info loaded from {self.elf_path}")
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: Exception | None, exc_tb: object | None
    ) -> None:
        """Close the ELF file handle."""
        if hasattr(self, "file_handle"):
            self.file_handle.close()
            logger.debug("ELF file closed")

    def pointer_size(self) -> int:
        """Pointer width: configured override, else the DWARF address size."""
        configured = self.config.get("POINTER_SIZE", 0)
        if configured:
            return int(configured)
        if self.dwarf_info is not None:
            address_size = getattr(self.dwarf_info.config, "default_address_size", None)
            if address_size:
                return int(address_size)
        return DEFAULT_POINTER_SIZE

    def load(self) -> TypeDatabase:
        """Decode every unit and freeze the snapshot.

        Returns:
            The loaded TypeDatabase

        Raises:
            TypeLoadError: If decoding fails part way through
        """
        if self.dwarf_info is None:
            raise TypeLoadError("loader used outside of its context")

        tracker = ProgressTracker(logger)
        builder = TypeGraphBuilder(tracker)
        ranges: list[tuple[int, int, LineRow]] = []

        try:
            with tracker.track_operation("compilation units"):
                for cu in self.dwarf_info.iter_CUs():
                    with tracker.track_unit(cu, str(DebugSection.DEBUG_INFO)):
                        builder.add_unit(cu, DebugSection.DEBUG_INFO)
                        ranges.extend(self._line_ranges(cu))

            if self.config.get("LOAD_TYPE_UNITS", True) and self._has_type_units():
                with tracker.track_operation("type units"):
                    for tu in self.dwarf_info.iter_TUs():
                        with tracker.track_unit(tu, str(DebugSection.DEBUG_TYPES)):
                            builder.add_unit(tu, DebugSection.DEBUG_TYPES)
        except (ELFError, DWARFError) as e:
            raise TypeLoadError(f"malformed DWARF in {self.elf_path}: {e}") from e

        tracker.report_summary()
        tracker.log_memory_usage()
        if builder.skipped:
            logger.info(f"Skipped {builder.skipped} type DIEs without usable layout")

        return TypeDatabase(
            builder.entries,
            line_table=LineTable(ranges),
            pointer_size=self.pointer_size(),
        )

    def _has_type_units(self) -> bool:
        return (
            getattr(self.dwarf_info, "debug_types_sec", None) is not None
            and hasattr(self.dwarf_info, "iter_TUs")
        )

    def _line_ranges(self, cu: Any) -> list[tuple[int, int, LineRow]]:
        assert self.dwarf_info is not None
        line_program = self.dwarf_info.line_program_for_CU(cu)
        if line_program is None:
            return []
        return build_line_ranges(line_program)


@log_timing
def load_type_database(elf_path: Path, config: dict[str, Any] | None = None) -> TypeDatabase:
    """Load the type database of one binary.

    Args:
        elf_path: Path to the ELF file
        config: Loader tunables (defaults to ``get_config()``)

    Returns:
        The frozen TypeDatabase

    Raises:
        TypeLoadError: If the binary cannot be read or decoded
    """
    with TypeLoader(elf_path, config) as loader:
        return loader.load()
