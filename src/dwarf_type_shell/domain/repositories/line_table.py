#!/usr/bin/env python3

"""Address-range line table built from DWARF line programs."""

from bisect import bisect_right
from collections.abc import Iterable

from ...infrastructure.logging import get_logger
from ..models.dwarf import LineRow

logger = get_logger(__name__)


class LineTable:
    """Maps program addresses to source rows.

    Rows are stored as half-open ``[start, end)`` ranges sorted by start.
    Overlapping ranges keep the first one seen; later overlaps are dropped.
    """

    def __init__(self, ranges: Iterable[tuple[int, int, LineRow]] = ()) -> None:
        """Build the table.

        Args:
            ranges: (start, end, row) triples in any order
        """
        self._starts: list[int] = []
        self._ends: list[int] = []
        self._rows: list[LineRow] = []

        dropped = 0
        for start, end, row in sorted(ranges, key=lambda r: (r[0], r[1])):
            if end <= start:
                dropped += 1
                continue
            if self._ends and start < self._ends[-1]:
                dropped += 1
                continue
            self._starts.append(start)
            self._ends.append(end)
            self._rows.append(row)

        if dropped:
            logger.debug(f"Dropped {dropped} empty or overlapping line ranges")

    def __len__(self) -> int:
        return len(self._rows)

    def lookup(self, address: int) -> LineRow | None:
        """Return the row covering ``address``, or None when no range does."""
        index = bisect_right(self._starts, address) - 1
        if index < 0 or address >= self._ends[index]:
            return None
        return self._rows[index]
