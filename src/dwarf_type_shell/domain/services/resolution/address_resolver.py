#!/usr/bin/env python3

"""Address parsing and line-table lookups for ``addr2line``."""

import re

from ...models.dwarf import LineRow
from ...repositories import TypeDatabase

U64_MAX = (1 << 64) - 1

_HEX_ADDRESS = re.compile(r"0x([0-9a-fA-F]+)")
_DEC_ADDRESS = re.compile(r"[0-9]+")


class AddressParseError(ValueError):
    """The argument is not a 64-bit address."""


def parse_address(text: str) -> int:
    """Parse ``0x``-prefixed hexadecimal or plain decimal into an address.

    Raises:
        AddressParseError: If the text is neither, or does not fit in 64 bits
    """
    hex_match = _HEX_ADDRESS.fullmatch(text)
    if hex_match:
        address = int(hex_match.group(1), 16)
    elif _DEC_ADDRESS.fullmatch(text):
        address = int(text)
    else:
        raise AddressParseError(f"can't parse {text} as an address")

    if address > U64_MAX:
        raise AddressParseError(f"can't parse {text} as an address")
    return address


def format_line_row(row: LineRow) -> str:
    """Render ``file:line:column`` with ``?`` for unknown coordinates."""
    line = str(row.line) if row.line is not None else "?"
    column = str(row.column) if row.column is not None else "?"
    return f"{row.file}:{line}:{column}"


def lookup_address(db: TypeDatabase, address: int) -> LineRow | None:
    """Return the source row covering ``address``; a thin pass-through to the line table."""
    return db.lookup_line_row(address)
