#!/usr/bin/env python3

"""Template parameter information model for DWARF parsing."""

from dataclasses import dataclass

from .goff import Goff


@dataclass(frozen=True)
class TemplateTypeParam:
    """Template type parameter (``T`` in ``Option<T>``).

    Example: ``Vec<u8>`` carries ``T = <goff of u8>``.
    """

    name: str
    """Name of the type parameter (e.g., 'T', 'A')"""

    type_goff: Goff
    """Goff of the type bound to the parameter"""
