#!/usr/bin/env python3

"""Byte size and alignment computation for type entries.

Sizes come straight from the debug information wherever the producer
records them (base types, structs, enums). Arrays are the only entries
whose size depends on another entry; pointers never recurse into their
pointee, which keeps self-referential graphs finite. A depth limit still
guards against malformed array chains.
"""

from ....infrastructure.config import get_config
from ....infrastructure.logging import get_logger
from ...models.dwarf import (
    ArrayInfo,
    BaseTypeInfo,
    CEnumInfo,
    EnumInfo,
    PointerInfo,
    StructInfo,
    SubroutineInfo,
    TypeInfo,
    UnionInfo,
)
from ...repositories import TypeDatabase

logger = get_logger(__name__)


class LayoutCalculator:
    """Computes optional byte sizes and alignments against a snapshot.

    Every method returns None for "unknown"; None is never replaced by a
    numeric default on its way up.
    """

    def __init__(self, db: TypeDatabase, max_depth: int | None = None):
        """Initialize the calculator.

        Args:
            db: Snapshot used to resolve element types
            max_depth: Recursion limit (defaults to DWARF_MAX_LAYOUT_DEPTH)
        """
        self.db = db
        self.max_depth = max_depth if max_depth is not None else get_config()["MAX_LAYOUT_DEPTH"]

    def byte_size(self, entry: TypeInfo) -> int | None:
        """Return the size of ``entry`` in bytes, or None if unsized/unknown."""
        return self._byte_size(entry, 0)

    def alignment(self, entry: TypeInfo) -> int | None:
        """Return the alignment of ``entry`` in bytes, or None if unknown."""
        return self._alignment(entry, 0)

    def _byte_size(self, entry: TypeInfo, depth: int) -> int | None:
        if isinstance(entry, BaseTypeInfo):
            return entry.byte_size
        if isinstance(entry, PointerInfo):
            return self.db.pointer_size
        if isinstance(entry, ArrayInfo):
            if entry.count is None:
                return None
            element = self._element(entry, depth)
            if element is None:
                return None
            element_size = self._byte_size(element, depth + 1)
            if element_size is None:
                return None
            return element_size * entry.count
        if isinstance(entry, (StructInfo, EnumInfo, CEnumInfo)):
            return entry.byte_size
        if isinstance(entry, (UnionInfo, SubroutineInfo)):
            return None

        logger.warning(f"No size rule for {type(entry).__name__}")
        return None

    def _alignment(self, entry: TypeInfo, depth: int) -> int | None:
        if isinstance(entry, BaseTypeInfo):
            return entry.alignment if entry.alignment is not None else entry.byte_size
        if isinstance(entry, PointerInfo):
            return self.db.pointer_size
        if isinstance(entry, ArrayInfo):
            element = self._element(entry, depth)
            if element is None:
                return None
            return self._alignment(element, depth + 1)
        if isinstance(entry, (StructInfo, EnumInfo, CEnumInfo)):
            return entry.alignment
        if isinstance(entry, (UnionInfo, SubroutineInfo)):
            return None

        logger.warning(f"No alignment rule for {type(entry).__name__}")
        return None

    def _element(self, array: ArrayInfo, depth: int) -> TypeInfo | None:
        """Resolve an array's element entry, honouring the depth limit."""
        if depth >= self.max_depth:
            logger.warning(
                f"Layout recursion limit ({self.max_depth}) hit at {array.element_type_goff}"
            )
            return None
        element = self.db.type_from_goff(array.element_type_goff)
        if element is None:
            logger.debug(f"Array element {array.element_type_goff} not in snapshot")
        return element
