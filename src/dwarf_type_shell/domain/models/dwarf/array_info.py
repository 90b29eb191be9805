#!/usr/bin/env python3

"""Array type model for DWARF type entries."""

from dataclasses import dataclass

from .goff import Goff


@dataclass(frozen=True)
class ArrayInfo:
    """A fixed or unknown-length array of a single element type."""

    element_type_goff: Goff
    lower_bound: int = 0
    count: int | None = None  # None when the subrange gives no length
