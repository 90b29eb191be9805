#!/usr/bin/env python3

"""Base (primitive) type model for DWARF type entries."""

from dataclasses import dataclass
from enum import Enum


class Encoding(Enum):
    """Primitive encodings the renderer knows how to name.

    Values are the ``DW_ATE_*`` names they are decoded from; anything else
    collapses into ``OTHER``.
    """

    UNSIGNED = "DW_ATE_unsigned"
    SIGNED = "DW_ATE_signed"
    FLOAT = "DW_ATE_float"
    BOOLEAN = "DW_ATE_boolean"
    UNSIGNED_CHAR = "DW_ATE_unsigned_char"
    SIGNED_CHAR = "DW_ATE_signed_char"
    OTHER = "other"

    def __str__(self) -> str:
        """Return a CamelCase label, e.g. ``UnsignedChar``."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    @classmethod
    def from_dwarf(cls, ate_name: str | None) -> "Encoding":
        """Map a ``DW_ATE_*`` name onto an encoding, defaulting to ``OTHER``."""
        for encoding in cls:
            if encoding.value == ate_name:
                return encoding
        return cls.OTHER


@dataclass(frozen=True)
class BaseTypeInfo:
    """A primitive type (integer, float, bool, char, unit)."""

    name: str
    encoding: Encoding
    byte_size: int
    alignment: int | None = None  # DW_AT_alignment when the producer emits it
