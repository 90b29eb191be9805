#!/usr/bin/env python3

"""DWARF type graph domain models."""

from .array_info import ArrayInfo
from .base_type_info import BaseTypeInfo, Encoding
from .enum_info import CEnumInfo, EnumeratorInfo, EnumInfo
from .goff import DebugSection, Goff
from .line_row import LineRow
from .member_info import MemberInfo
from .pointer_info import PointerInfo
from .struct_info import StructInfo
from .subroutine_info import SubroutineInfo
from .tag_constants import POINTER_TAGS, STRUCT_TAGS, TRANSPARENT_TAGS, TYPE_ENTRY_TAGS
from .template_param_info import TemplateTypeParam
from .type_info import TypeInfo, type_name
from .union_info import UnionInfo
from .variant_info import (
    ManyVariants,
    OneVariant,
    VariantInfo,
    VariantPart,
    VariantShape,
    ZeroVariants,
)

__all__ = [
    "ArrayInfo",
    "BaseTypeInfo",
    "CEnumInfo",
    "DebugSection",
    "Encoding",
    "EnumInfo",
    "EnumeratorInfo",
    "Goff",
    "LineRow",
    "ManyVariants",
    "MemberInfo",
    "OneVariant",
    "POINTER_TAGS",
    "PointerInfo",
    "STRUCT_TAGS",
    "StructInfo",
    "SubroutineInfo",
    "TRANSPARENT_TAGS",
    "TYPE_ENTRY_TAGS",
    "TemplateTypeParam",
    "TypeInfo",
    "UnionInfo",
    "VariantInfo",
    "VariantPart",
    "VariantShape",
    "ZeroVariants",
    "type_name",
]
