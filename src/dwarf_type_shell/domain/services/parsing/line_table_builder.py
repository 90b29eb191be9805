#!/usr/bin/env python3

"""Address ranges from DWARF line programs."""

import posixpath
from typing import Any

from ....infrastructure.logging import get_logger
from ...models.dwarf import LineRow

logger = get_logger(__name__)


def _decode(value: bytes | str) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def resolve_file_name(line_program: Any, file_index: int) -> str | None:
    """Resolve a line-program file index to a path.

    DWARF 5 numbers files and directories from 0; earlier versions number
    files from 1 and use directory 0 for the compilation directory, which is
    not listed in the header.

    Args:
        line_program: pyelftools LineProgram
        file_index: ``file`` register of a line state row

    Returns:
        The file path (joined with its include directory when it has one),
        or None if the index is out of range
    """
    version = line_program.header["version"]
    files = line_program.header["file_entry"]
    index = file_index if version >= 5 else file_index - 1
    if index < 0 or index >= len(files):
        return None

    entry = files[index]
    name = _decode(entry.name)
    directories = line_program.header["include_directory"]
    dir_index = entry.dir_index if version >= 5 else entry.dir_index - 1
    if posixpath.isabs(name) or dir_index < 0 or dir_index >= len(directories):
        return name
    return posixpath.join(_decode(directories[dir_index]), name)


def build_line_ranges(line_program: Any) -> list[tuple[int, int, LineRow]]:
    """Turn one line program into ``[start, end)`` ranges.

    Each state row covers the addresses up to the next row of the same
    sequence. The row that ends a sequence only closes the previous range.

    Args:
        line_program: pyelftools LineProgram for one compilation unit

    Returns:
        (start, end, row) triples in program order
    """
    ranges: list[tuple[int, int, LineRow]] = []
    previous: Any = None

    for entry in line_program.get_entries():
        state = entry.state
        if state is None:
            continue

        if previous is not None and state.address > previous.address:
            ranges.append((previous.address, state.address, _row(line_program, previous)))

        previous = None if state.end_sequence else state

    return ranges


def _row(line_program: Any, state: Any) -> LineRow:
    file_name = resolve_file_name(line_program, state.file)
    if file_name is None:
        logger.debug(f"Line row at 0x{state.address:x} names unknown file {state.file}")
        file_name = "<unknown>"
    return LineRow(
        file=file_name,
        line=state.line or None,
        column=state.column or None,
    )
