#!/usr/bin/env python3

"""Pointer type model for DWARF type entries."""

from dataclasses import dataclass

from .goff import Goff


@dataclass(frozen=True)
class PointerInfo:
    """A pointer or reference type.

    The display name already encodes the pointee (``&str``, ``*const u8``),
    so renderers print it verbatim.
    """

    name: str
    type_goff: Goff | None  # None for untyped (void) pointers
