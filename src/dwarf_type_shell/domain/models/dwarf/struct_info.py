#!/usr/bin/env python3

"""Struct information model for DWARF parsing."""

from __future__ import annotations

from dataclasses import dataclass, field

from .member_info import MemberInfo
from .template_param_info import TemplateTypeParam


@dataclass(frozen=True)
class StructInfo:
    """A product type with named or positional members.

    Members are kept in ascending offset order. Offsets only repeat when the
    struct describes overlapping storage, so a tuple is used instead of a
    mapping keyed by offset.
    """

    name: str
    byte_size: int
    alignment: int | None = None
    tuple_like: bool = False
    template_type_params: tuple[TemplateTypeParam, ...] = ()
    members: tuple[MemberInfo, ...] = field(default_factory=tuple)
