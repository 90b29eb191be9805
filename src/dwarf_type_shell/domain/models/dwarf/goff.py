#!/usr/bin/env python3

"""Global offsets: stable addresses of type entries in the debug information."""

from dataclasses import dataclass
from enum import Enum


class DebugSection(Enum):
    """Debug-information sections a type entry can live in."""

    DEBUG_INFO = ".debug_info"
    DEBUG_TYPES = ".debug_types"

    def __str__(self) -> str:
        """Return the section name as it appears in the ELF file."""
        return self.value


@dataclass(frozen=True)
class Goff:
    """Global offset of a DIE, tagged with the section it originates from.

    Two goffs are equal iff they name the same entry. Goffs are back-references
    used for lookup only; the database owns the entries.
    """

    section: DebugSection
    offset: int

    def __str__(self) -> str:
        """Render the canonical textual form, e.g. ``<.debug_info+0x0000002a>``."""
        return f"<{self.section.value}+0x{self.offset:08x}>"

    @classmethod
    def info(cls, offset: int) -> "Goff":
        """Create a goff into ``.debug_info``."""
        return cls(DebugSection.DEBUG_INFO, offset)

    @classmethod
    def types(cls, offset: int) -> "Goff":
        """Create a goff into ``.debug_types``."""
        return cls(DebugSection.DEBUG_TYPES, offset)
