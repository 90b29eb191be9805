#!/usr/bin/env python3

"""Unit tests for flattening line programs into address ranges."""

from types import SimpleNamespace

import pytest

from dwarf_type_shell.domain.models.dwarf import LineRow
from dwarf_type_shell.domain.services.parsing import build_line_ranges, resolve_file_name


def state(address, file=1, line=1, column=0, end_sequence=False):
    return SimpleNamespace(
        address=address, file=file, line=line, column=column, end_sequence=end_sequence
    )


def line_program(states, version=4, files=None, directories=None):
    header = {
        "version": version,
        "file_entry": files
        if files is not None
        else [SimpleNamespace(name=b"main.rs", dir_index=1)],
        "include_directory": directories if directories is not None else [b"src"],
    }
    entries = [SimpleNamespace(state=s) for s in states]
    return SimpleNamespace(header=header, get_entries=lambda: entries)


class TestResolveFileName:
    """Test file index resolution across DWARF versions."""

    @pytest.mark.unit
    def test_dwarf4_indexes_from_one(self) -> None:
        """Test DWARF 4 file and directory indexes are one-based."""
        program = line_program([])
        assert resolve_file_name(program, 1) == "src/main.rs"
        assert resolve_file_name(program, 0) is None
        assert resolve_file_name(program, 2) is None

    @pytest.mark.unit
    def test_dwarf5_indexes_from_zero(self) -> None:
        """Test DWARF 5 file and directory indexes are zero-based."""
        files = [
            SimpleNamespace(name=b"lib.rs", dir_index=0),
            SimpleNamespace(name=b"util.rs", dir_index=1),
        ]
        program = line_program([], version=5, files=files, directories=[b"/work", b"src"])
        assert resolve_file_name(program, 0) == "/work/lib.rs"
        assert resolve_file_name(program, 1) == "src/util.rs"

    @pytest.mark.unit
    def test_compilation_directory_and_absolute_names(self) -> None:
        """Test directory 0 in DWARF 4 and absolute names are used as-is."""
        files = [
            SimpleNamespace(name=b"main.c", dir_index=0),
            SimpleNamespace(name=b"/usr/include/stdio.h", dir_index=1),
        ]
        program = line_program([], files=files, directories=[b"include"])
        assert resolve_file_name(program, 1) == "main.c"
        assert resolve_file_name(program, 2) == "/usr/include/stdio.h"


class TestBuildLineRanges:
    """Test row to range conversion."""

    @pytest.mark.unit
    def test_rows_cover_until_next_row(self) -> None:
        """Test each row spans up to the next row and end_sequence closes the last."""
        program = line_program(
            [
                state(0x1000, line=3, column=5),
                None,
                state(0x1008, line=4),
                state(0x1010, end_sequence=True),
            ]
        )

        assert build_line_ranges(program) == [
            (0x1000, 0x1008, LineRow("src/main.rs", 3, 5)),
            (0x1008, 0x1010, LineRow("src/main.rs", 4, None)),
        ]

    @pytest.mark.unit
    def test_sequences_do_not_join(self) -> None:
        """Test a new sequence does not extend the previous sequence's last row."""
        program = line_program(
            [
                state(0x1000, line=1),
                state(0x1004, end_sequence=True),
                state(0x2000, line=0),
                state(0x2008, end_sequence=True),
            ]
        )

        assert build_line_ranges(program) == [
            (0x1000, 0x1004, LineRow("src/main.rs", 1, None)),
            (0x2000, 0x2008, LineRow("src/main.rs", None, None)),
        ]

    @pytest.mark.unit
    def test_rows_at_same_address_keep_the_last(self) -> None:
        """Test rows that do not advance the address produce no empty range."""
        program = line_program(
            [
                state(0x1000, line=1),
                state(0x1000, line=2),
                state(0x1004, end_sequence=True),
            ]
        )
        assert build_line_ranges(program) == [(0x1000, 0x1004, LineRow("src/main.rs", 2, None))]

    @pytest.mark.unit
    def test_unknown_file(self) -> None:
        """Test rows naming a missing file get a placeholder name."""
        program = line_program([state(0x10, file=9), state(0x20, end_sequence=True)])
        assert build_line_ranges(program)[0][2].file == "<unknown>"
