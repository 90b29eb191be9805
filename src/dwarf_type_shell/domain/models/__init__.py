#!/usr/bin/env python3

"""Domain models for the DWARF type shell."""

from . import dwarf

__all__ = [
    "dwarf",
]
