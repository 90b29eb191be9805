#!/usr/bin/env python3

"""DIE classification helpers for the type loader.

All checks go through here so that tag and attribute tests stay
consistent between the loader's passes.
"""

import re

from elftools.dwarf.die import DIE

from ...models.dwarf.tag_constants import (
    MEMBER_TAG,
    STRUCT_TAGS,
    TRANSPARENT_TAGS,
    TYPE_ENTRY_TAGS,
    VARIANT_PART_TAG,
)

# rustc names positional fields __0, __1, ...
TUPLE_FIELD_NAME = re.compile(r"__\d+")


class DIETypeClassifier:
    """Classifies DIEs for the type loader.

    All methods are static; they inspect a DIE without keeping state.
    """

    @staticmethod
    def is_type_entry(die: DIE) -> bool:
        """Check if the DIE's tag produces a type entry.

        Args:
            die: DIE to check

        Returns:
            True for base, pointer, array, struct/class, enum, union and
            subroutine types
        """
        return die.tag in TYPE_ENTRY_TAGS

    @staticmethod
    def is_declaration(die: DIE) -> bool:
        """Check if the DIE is only a declaration (no layout information)."""
        attr = die.attributes.get("DW_AT_declaration")
        return attr is not None and bool(attr.value)

    @staticmethod
    def is_transparent(die: DIE) -> bool:
        """Check if the DIE only qualifies or renames another type.

        Examples:
            - DW_TAG_const_type: True
            - DW_TAG_typedef: True
            - DW_TAG_pointer_type: False (pointers have their own layout)
        """
        return die.tag in TRANSPARENT_TAGS

    @staticmethod
    def find_variant_part(die: DIE) -> DIE | None:
        """Return the variant part child of a struct DIE, if it has one.

        A structure owning a ``DW_TAG_variant_part`` is how compilers encode
        sum types, so its presence turns a Struct into an Enum.
        """
        if die.tag not in STRUCT_TAGS or not die.has_children:
            return None
        for child in die.iter_children():
            if child.tag == VARIANT_PART_TAG:
                return child
        return None

    @staticmethod
    def is_static_member(die: DIE) -> bool:
        """Check if a member DIE is a static (non-layout) member.

        Static data members are declarations without a data member location.
        """
        if die.tag != MEMBER_TAG:
            return False
        if "DW_AT_data_member_location" in die.attributes:
            return False
        return "DW_AT_external" in die.attributes or "DW_AT_declaration" in die.attributes

    @staticmethod
    def is_tuple_like(member_names: list[str | None]) -> bool:
        """Check if a struct's members are positional (``__0``, ``__1``, ...).

        Args:
            member_names: Names of the struct's members, in any order

        Returns:
            True if there is at least one member and every name is positional
        """
        if not member_names:
            return False
        return all(
            name is not None and TUPLE_FIELD_NAME.fullmatch(name) for name in member_names
        )
