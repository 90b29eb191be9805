#!/usr/bin/env python3

"""Shell command table.

Each command takes the snapshot, the raw argument text and the output
stream. The table is an ordered tuple built at import time and never
mutated; ``help`` and the shell's dispatcher both read it.
"""

from collections.abc import Callable
from typing import TextIO

from ..domain.models.dwarf import Goff, TypeInfo, type_name
from ..domain.repositories import TypeDatabase
from ..domain.services.generation import DefinitionRenderer, InfoRenderer, RenderError
from ..domain.services.layout import LayoutCalculator
from ..domain.services.resolution import (
    AddressParseError,
    GoffParseError,
    format_line_row,
    lookup_address,
    named_goff,
    parse_address,
    resolve_query,
)
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)

Command = Callable[[TypeDatabase, str, TextIO], None]

# Produces the output lines for one resolved match
QueryBody = Callable[[TypeDatabase, Goff, TypeInfo], list[str]]

EXIT_DESCRIPTION = "exit the shell"


def _write_lines(out: TextIO, lines: list[str]) -> None:
    for line in lines:
        out.write(line + "\n")


def simple_query_cmd(db: TypeDatabase, args: str, out: TextIO, body: QueryBody) -> None:
    """Resolve ``args`` to types and print ``body`` for each match.

    Every match is introduced by its ``Name <goff>: `` header, which shares a
    line with the first line of the body. Several matches are announced by a
    note and separated by single blank lines.

    Args:
        db: Snapshot to query
        args: A type name or textual goff
        out: Output stream
        body: Renders one match
    """
    try:
        matches = resolve_query(db, args)
    except GoffParseError as e:
        out.write(f"{e}\n")
        return

    if not matches:
        out.write("No types found.\n")
        return

    if len(matches) > 1:
        out.write(f"note: {len(matches)} types found with that name:\n")

    for index, (goff, entry) in enumerate(matches):
        if index > 0:
            out.write("\n")
        out.write(f"{named_goff(db, goff)}: ")
        try:
            lines = body(db, goff, entry)
        except RenderError as e:
            out.write(f"error: {e}\n")
            continue
        if not lines:
            out.write("\n")
            continue
        _write_lines(out, lines)


def list_cmd(db: TypeDatabase, args: str, out: TextIO) -> None:
    """Print every type, or only those whose name contains ``args``.

    Anonymous entries have nothing to match against and are always listed.
    """
    needle = args.strip()
    shown = 0
    for goff, entry in db.types():
        name = type_name(entry)
        if needle and name is not None and needle not in name:
            continue
        out.write(f"{named_goff(db, goff)}\n")
        shown += 1
    logger.debug(f"list {needle!r}: {shown} of {db.type_count()} types shown")


def info_cmd(db: TypeDatabase, args: str, out: TextIO) -> None:
    renderer = InfoRenderer(db)
    simple_query_cmd(db, args, out, lambda _db, _goff, entry: renderer.render(entry))


def def_cmd(db: TypeDatabase, args: str, out: TextIO) -> None:
    renderer = DefinitionRenderer(db)
    # The definition starts on the line after the header
    simple_query_cmd(db, args, out, lambda _db, _goff, entry: ["", *renderer.render(entry)])


def sizeof_cmd(db: TypeDatabase, args: str, out: TextIO) -> None:
    calculator = LayoutCalculator(db)

    def body(_db: TypeDatabase, _goff: Goff, entry: TypeInfo) -> list[str]:
        size = calculator.byte_size(entry)
        return [f"{size} bytes" if size is not None else "unsized"]

    simple_query_cmd(db, args, out, body)


def alignof_cmd(db: TypeDatabase, args: str, out: TextIO) -> None:
    calculator = LayoutCalculator(db)

    def body(_db: TypeDatabase, _goff: Goff, entry: TypeInfo) -> list[str]:
        alignment = calculator.alignment(entry)
        if alignment is None:
            return ["no alignment information"]
        return [f"align to {alignment} bytes"]

    simple_query_cmd(db, args, out, body)


def addr2line_cmd(db: TypeDatabase, args: str, out: TextIO) -> None:
    try:
        address = parse_address(args.strip())
    except AddressParseError as e:
        out.write(f"{e}\n")
        return

    row = lookup_address(db, address)
    if row is None:
        out.write("no line number information available for address\n")
        return
    out.write(f"{format_line_row(row)}\n")


def help_cmd(db: TypeDatabase, args: str, out: TextIO) -> None:
    out.write("commands:\n")
    for name, _, description in COMMANDS:
        out.write(f"{name:12} {description}\n")
    out.write(f"{'exit':12} {EXIT_DESCRIPTION}\n")


COMMANDS: tuple[tuple[str, Command, str], ...] = (
    ("list", list_cmd, "print names of ALL types, or types containing a string"),
    ("info", info_cmd, "print a summary of a type"),
    ("def", def_cmd, "print a type as a pseudo-Rust definition"),
    ("sizeof", sizeof_cmd, "print size of type in bytes"),
    ("alignof", alignof_cmd, "print alignment of type in bytes"),
    ("addr2line", addr2line_cmd, "look up line number information"),
    ("help", help_cmd, "print this helpful message"),
)


def find_command(name: str) -> Command | None:
    """Look up a command by exact name."""
    for command_name, command, _ in COMMANDS:
        if command_name == name:
            return command
    return None
