#!/usr/bin/env python3

"""Enum information models for DWARF parsing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .template_param_info import TemplateTypeParam
from .variant_info import VariantPart


@dataclass(frozen=True)
class EnumInfo:
    """A sum type lowered into a discriminant plus per-variant payloads."""

    name: str
    byte_size: int
    variant_part: VariantPart
    alignment: int | None = None
    template_type_params: tuple[TemplateTypeParam, ...] = ()


@dataclass(frozen=True)
class EnumeratorInfo:
    """Information about a C-style enum value."""

    name: str
    value: int


@dataclass(frozen=True)
class CEnumInfo:
    """A C-style enumeration; enumerators are keyed by value in ascending order."""

    name: str
    byte_size: int
    alignment: int
    enumerators: Mapping[int, EnumeratorInfo] = field(default_factory=dict)
