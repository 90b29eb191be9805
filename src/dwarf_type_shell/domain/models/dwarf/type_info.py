#!/usr/bin/env python3

"""The closed union of type entry variants held by the type database."""

from .array_info import ArrayInfo
from .base_type_info import BaseTypeInfo
from .enum_info import CEnumInfo, EnumInfo
from .pointer_info import PointerInfo
from .struct_info import StructInfo
from .subroutine_info import SubroutineInfo
from .union_info import UnionInfo

TypeInfo = (
    BaseTypeInfo
    | PointerInfo
    | ArrayInfo
    | StructInfo
    | EnumInfo
    | CEnumInfo
    | UnionInfo
    | SubroutineInfo
)


def type_name(entry: TypeInfo) -> str | None:
    """Return the declared name of an entry, or None for anonymous kinds.

    Array and Subroutine entries never carry a name; the aggregate kinds may
    carry an empty one, which is treated as anonymous.
    """
    if isinstance(entry, (ArrayInfo, SubroutineInfo)):
        return None
    return entry.name or None
