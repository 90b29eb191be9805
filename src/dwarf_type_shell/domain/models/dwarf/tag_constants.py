#!/usr/bin/env python3

"""DWARF tag constants and type classification.

Groups the DIE tags the loader turns into type entries, and the tags it
looks straight through when following a ``DW_AT_type`` reference.
"""

BASE_TYPE_TAG = "DW_TAG_base_type"
ARRAY_TYPE_TAG = "DW_TAG_array_type"
ENUMERATION_TYPE_TAG = "DW_TAG_enumeration_type"
UNION_TYPE_TAG = "DW_TAG_union_type"
SUBROUTINE_TYPE_TAG = "DW_TAG_subroutine_type"

# Pointer-like types: fixed size regardless of pointee
POINTER_TAGS = frozenset(
    {
        "DW_TAG_pointer_type",  # *
        "DW_TAG_reference_type",  # &
        "DW_TAG_rvalue_reference_type",  # &&
    }
)

# Aggregates that become a Struct, or an Enum when they own a variant part
STRUCT_TAGS = frozenset(
    {
        "DW_TAG_structure_type",
        "DW_TAG_class_type",
    }
)

# Every tag that produces a type entry
TYPE_ENTRY_TAGS = frozenset(
    {
        BASE_TYPE_TAG,
        ARRAY_TYPE_TAG,
        ENUMERATION_TYPE_TAG,
        UNION_TYPE_TAG,
        SUBROUTINE_TYPE_TAG,
    }
    | POINTER_TAGS
    | STRUCT_TAGS
)

# Wrappers without a layout of their own; references are followed through them
TRANSPARENT_TAGS = frozenset(
    {
        "DW_TAG_const_type",
        "DW_TAG_volatile_type",
        "DW_TAG_restrict_type",
        "DW_TAG_atomic_type",
        "DW_TAG_typedef",
    }
)

# Children of aggregates
MEMBER_TAG = "DW_TAG_member"
TEMPLATE_TYPE_PARAM_TAG = "DW_TAG_template_type_param"
VARIANT_PART_TAG = "DW_TAG_variant_part"
VARIANT_TAG = "DW_TAG_variant"
ENUMERATOR_TAG = "DW_TAG_enumerator"
FORMAL_PARAMETER_TAG = "DW_TAG_formal_parameter"
SUBRANGE_TYPE_TAG = "DW_TAG_subrange_type"

# Reference forms relative to the start of the containing unit
UNIT_RELATIVE_REF_FORMS = frozenset(
    {
        "DW_FORM_ref1",
        "DW_FORM_ref2",
        "DW_FORM_ref4",
        "DW_FORM_ref8",
        "DW_FORM_ref_udata",
    }
)
