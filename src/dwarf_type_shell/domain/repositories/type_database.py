#!/usr/bin/env python3

"""Immutable type database snapshot and its query operations."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from ...infrastructure.logging import get_logger
from ..models.dwarf import Goff, LineRow, TypeInfo, type_name
from .line_table import LineTable

logger = get_logger(__name__)

DEFAULT_POINTER_SIZE = 8


class TypeDatabase:
    """A read-only snapshot of every decoded type entry in one binary.

    The loader builds the snapshot once; every query afterwards is a pure
    lookup. Entry order is the order the loader discovered them in, and all
    multi-result queries preserve it.

    Attributes:
        pointer_size: Byte size and alignment of pointers on the target
        line_table: Address-to-source table used by ``lookup_line_row``
    """

    def __init__(
        self,
        entries: Mapping[Goff, TypeInfo],
        line_table: LineTable | None = None,
        pointer_size: int = DEFAULT_POINTER_SIZE,
    ) -> None:
        """Freeze the given entries into a snapshot.

        Args:
            entries: Goff to type entry mapping, in discovery order
            line_table: Line table for address lookups (empty when omitted)
            pointer_size: Target pointer width in bytes
        """
        self._entries: Mapping[Goff, TypeInfo] = MappingProxyType(dict(entries))
        self.line_table = line_table if line_table is not None else LineTable()
        self.pointer_size = pointer_size

        # Name index, built once
        self._by_name: dict[str, list[Goff]] = {}
        for goff, entry in self._entries.items():
            name = type_name(entry)
            if name is not None:
                self._by_name.setdefault(name, []).append(goff)

        logger.debug(
            f"TypeDatabase snapshot: {len(self._entries)} types, "
            f"{len(self._by_name)} distinct names, {len(self.line_table)} line ranges"
        )

    def type_count(self) -> int:
        """Return the number of type entries in the snapshot."""
        return len(self._entries)

    def types(self) -> Iterator[tuple[Goff, TypeInfo]]:
        """Iterate every (goff, entry) pair in snapshot order."""
        return iter(self._entries.items())

    def type_from_goff(self, goff: Goff) -> TypeInfo | None:
        """Look up the entry at ``goff``; None when it names no live entry."""
        return self._entries.get(goff)

    def name_from_goff(self, goff: Goff) -> str | None:
        """Return the declared name at ``goff``, or None for anonymous/missing entries."""
        entry = self._entries.get(goff)
        if entry is None:
            return None
        return type_name(entry)

    def types_by_name(self, name: str) -> list[tuple[Goff, TypeInfo]]:
        """Return every entry whose declared name equals ``name`` exactly."""
        return [(goff, self._entries[goff]) for goff in self._by_name.get(name, [])]

    def lookup_line_row(self, address: int) -> LineRow | None:
        """Return the line-table row covering ``address``, if any."""
        return self.line_table.lookup(address)
