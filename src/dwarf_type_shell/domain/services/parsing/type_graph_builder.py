#!/usr/bin/env python3

"""Translation of pyelftools DIEs into type graph entries.

This module handles the per-DIE half of the load:
- Mapping each type-producing tag onto one TypeInfo variant
- Following DW_AT_type references (through const/volatile/typedef) into goffs
- Rebuilding sum types from DW_TAG_variant_part encodings
"""

from elftools.dwarf.die import DIE
from elftools.dwarf.enums import ENUM_DW_ATE

from ....infrastructure.logging import ProgressTracker, get_logger
from ...models.dwarf import (
    ArrayInfo,
    BaseTypeInfo,
    CEnumInfo,
    DebugSection,
    Encoding,
    EnumeratorInfo,
    EnumInfo,
    Goff,
    ManyVariants,
    MemberInfo,
    OneVariant,
    PointerInfo,
    StructInfo,
    SubroutineInfo,
    TemplateTypeParam,
    TypeInfo,
    UnionInfo,
    VariantInfo,
    VariantPart,
    VariantShape,
    ZeroVariants,
)
from ...models.dwarf.tag_constants import (
    ARRAY_TYPE_TAG,
    BASE_TYPE_TAG,
    ENUMERATION_TYPE_TAG,
    ENUMERATOR_TAG,
    FORMAL_PARAMETER_TAG,
    MEMBER_TAG,
    POINTER_TAGS,
    STRUCT_TAGS,
    SUBROUTINE_TYPE_TAG,
    TEMPLATE_TYPE_PARAM_TAG,
    UNION_TYPE_TAG,
    UNIT_RELATIVE_REF_FORMS,
    VARIANT_TAG,
)
from .die_type_classifier import DIETypeClassifier
from .dwarf_location_parser import parse_location_offset
from .subrange_parser import parse_array_bounds

logger = get_logger(__name__)

# DW_ATE_* numeric value -> name
ATE_NAMES: dict[int, str] = {
    value: name for name, value in ENUM_DW_ATE.items() if name.startswith("DW_ATE_")
}

# Longest const/typedef chain followed before giving up on a reference
MAX_REFERENCE_CHAIN = 32


def _die_name(die: DIE) -> str | None:
    """Decode DW_AT_name, or None if the DIE has none."""
    attr = die.attributes.get("DW_AT_name")
    if attr is None:
        return None
    if isinstance(attr.value, bytes):
        return attr.value.decode("utf-8", errors="replace")
    return str(attr.value)


def _int_attr(die: DIE, name: str) -> int | None:
    attr = die.attributes.get(name)
    if attr is None or isinstance(attr.value, bool) or not isinstance(attr.value, int):
        return None
    return attr.value


def _flag_attr(die: DIE, name: str) -> bool:
    attr = die.attributes.get(name)
    return attr is not None and bool(attr.value)


def _discr_value(die: DIE) -> int | None:
    """Decode DW_AT_discr_value; DW_FORM_data16 arrives as little-endian bytes."""
    attr = die.attributes.get("DW_AT_discr_value")
    if attr is not None and isinstance(attr.value, bytes):
        return int.from_bytes(attr.value, "little")
    return _int_attr(die, "DW_AT_discr_value")


def _is_reference_form(form: str) -> bool:
    return form in UNIT_RELATIVE_REF_FORMS or form in ("DW_FORM_ref_addr", "DW_FORM_ref_sig8")


def _reference_section(form: str, section: DebugSection) -> DebugSection:
    """Section a reference of ``form`` lands in, given the referencing section."""
    if form == "DW_FORM_ref_addr":
        return DebugSection.DEBUG_INFO
    if form == "DW_FORM_ref_sig8":
        return DebugSection.DEBUG_TYPES
    return section


class TypeGraphBuilder:
    """Accumulates type entries from the DIEs of one binary.

    Feed every unit through ``add_unit``; ``entries`` then holds the graph in
    discovery order, ready to be frozen into a TypeDatabase.
    """

    def __init__(self, tracker: ProgressTracker | None = None):
        """Initialize an empty builder.

        Args:
            tracker: Optional progress tracker counting DIEs and kept types
        """
        self.tracker = tracker
        self.entries: dict[Goff, TypeInfo] = {}
        self.skipped = 0

    def add_unit(self, unit: object, section: DebugSection) -> None:
        """Decode every type DIE of one compilation or type unit.

        Args:
            unit: pyelftools CompileUnit (or type unit)
            section: Section the unit's DIE offsets are relative to
        """
        for die in unit.iter_DIEs():  # type: ignore[attr-defined]
            if die.is_null():
                continue
            if self.tracker is not None:
                self.tracker.count_die()
            if not DIETypeClassifier.is_type_entry(die):
                continue

            entry = self.build_entry(die, section)
            if entry is None:
                self.skipped += 1
                continue

            self.entries[Goff(section, die.offset)] = entry
            if self.tracker is not None:
                self.tracker.count_type()

    def build_entry(self, die: DIE, section: DebugSection) -> TypeInfo | None:
        """Build the entry for one type DIE.

        Args:
            die: DIE whose tag is in TYPE_ENTRY_TAGS
            section: Section the DIE lives in

        Returns:
            The entry, or None if the DIE is a declaration or lacks a required
            attribute
        """
        if DIETypeClassifier.is_declaration(die):
            logger.debug(f"Skipping declaration {die.tag} at 0x{die.offset:x}")
            return None

        tag = die.tag
        if tag == BASE_TYPE_TAG:
            return self._build_base(die)
        if tag in POINTER_TAGS:
            return self._build_pointer(die, section)
        if tag == ARRAY_TYPE_TAG:
            return self._build_array(die, section)
        if tag in STRUCT_TAGS:
            variant_part = DIETypeClassifier.find_variant_part(die)
            if variant_part is not None:
                return self._build_enum(die, variant_part, section)
            return self._build_struct(die, section)
        if tag == ENUMERATION_TYPE_TAG:
            return self._build_c_enum(die)
        if tag == UNION_TYPE_TAG:
            return UnionInfo(
                name=_die_name(die) or "",
                members=self._members(die, section),
            )
        if tag == SUBROUTINE_TYPE_TAG:
            return self._build_subroutine(die, section)

        logger.debug(f"Unhandled type tag {tag} at 0x{die.offset:x}")
        return None

    # ------------------------------------------------------------------
    # References

    def resolve_reference(
        self, die: DIE, section: DebugSection, attr_name: str = "DW_AT_type"
    ) -> Goff | None:
        """Turn a type reference into the goff of the entry it denotes.

        const/volatile/restrict/atomic wrappers and typedefs carry no layout,
        so the reference is followed through them to the underlying type.

        Args:
            die: DIE holding the reference
            section: Section of the DIE's unit
            attr_name: Reference attribute to follow

        Returns:
            Goff of the referenced type entry, or None for void/unresolvable
        """
        for _ in range(MAX_REFERENCE_CHAIN):
            attr = die.attributes.get(attr_name)
            if attr is None:
                return None

            if not _is_reference_form(attr.form):
                logger.warning(
                    f"{attr_name} of DIE at 0x{die.offset:x} has non-reference form {attr.form}"
                )
                return None

            try:
                target = die.get_DIE_from_attribute(attr_name)
            except Exception as e:
                logger.warning(f"Dangling {attr_name} reference at 0x{die.offset:x}: {e}")
                return None
            section = _reference_section(attr.form, section)

            if not DIETypeClassifier.is_transparent(target):
                return Goff(section, target.offset)

            die = target
            attr_name = "DW_AT_type"

        logger.warning(f"Reference chain from 0x{die.offset:x} is too long")
        return None

    # ------------------------------------------------------------------
    # Per-tag builders

    def _build_base(self, die: DIE) -> BaseTypeInfo | None:
        byte_size = _int_attr(die, "DW_AT_byte_size")
        if byte_size is None:
            logger.debug(f"Base type at 0x{die.offset:x} has no byte size")
            return None

        ate = _int_attr(die, "DW_AT_encoding")
        return BaseTypeInfo(
            name=_die_name(die) or "",
            encoding=Encoding.from_dwarf(ATE_NAMES.get(ate) if ate is not None else None),
            byte_size=byte_size,
            alignment=_int_attr(die, "DW_AT_alignment"),
        )

    def _build_pointer(self, die: DIE, section: DebugSection) -> PointerInfo:
        type_goff = self.resolve_reference(die, section)
        name = _die_name(die)
        if name is None:
            name = "*" + self._pointee_name(die, section)
        return PointerInfo(name=name, type_goff=type_goff)

    def _pointee_name(self, die: DIE, section: DebugSection) -> str:
        """Derive the name of what a pointer DIE points at.

        Walks the DW_AT_type chain to the first named DIE. Anonymous pointers
        along the way add one ``*`` each; any other anonymous pointee is named
        by its goff text. A chain that ends without a type is ``void``.
        """
        stars = ""
        for _ in range(MAX_REFERENCE_CHAIN):
            attr = die.attributes.get("DW_AT_type")
            if attr is None:
                return stars + "void"
            try:
                target = die.get_DIE_from_attribute("DW_AT_type")
            except Exception as e:
                logger.debug(f"Cannot follow pointee of 0x{die.offset:x}: {e}")
                return stars + "void"
            section = _reference_section(attr.form, section)

            name = _die_name(target)
            if name is not None:
                return stars + name
            if target.tag in POINTER_TAGS:
                stars += "*"
            elif not DIETypeClassifier.is_transparent(target):
                return stars + str(Goff(section, target.offset))
            die = target

        logger.warning(f"Pointee chain from 0x{die.offset:x} is too long")
        return stars + "void"

    def _build_array(self, die: DIE, section: DebugSection) -> ArrayInfo | None:
        element = self.resolve_reference(die, section)
        if element is None:
            logger.debug(f"Array at 0x{die.offset:x} has no element type")
            return None

        lower_bound, count = parse_array_bounds(die)
        return ArrayInfo(element_type_goff=element, lower_bound=lower_bound, count=count)

    def _build_struct(self, die: DIE, section: DebugSection) -> StructInfo | None:
        byte_size = _int_attr(die, "DW_AT_byte_size")
        if byte_size is None:
            logger.debug(f"Struct at 0x{die.offset:x} has no byte size")
            return None

        members = self._members(die, section)
        return StructInfo(
            name=_die_name(die) or "",
            byte_size=byte_size,
            alignment=_int_attr(die, "DW_AT_alignment"),
            tuple_like=DIETypeClassifier.is_tuple_like([m.name for m in members]),
            template_type_params=self._template_params(die, section),
            members=members,
        )

    def _build_enum(self, die: DIE, variant_part: DIE, section: DebugSection) -> EnumInfo | None:
        byte_size = _int_attr(die, "DW_AT_byte_size")
        if byte_size is None:
            logger.debug(f"Enum at 0x{die.offset:x} has no byte size")
            return None

        shape = self._variant_shape(variant_part, section)
        if shape is None:
            return None

        return EnumInfo(
            name=_die_name(die) or "",
            byte_size=byte_size,
            variant_part=VariantPart(shape),
            alignment=_int_attr(die, "DW_AT_alignment"),
            template_type_params=self._template_params(die, section),
        )

    def _variant_shape(self, variant_part: DIE, section: DebugSection) -> VariantShape | None:
        """Decode a DW_TAG_variant_part into Zero, One or Many."""
        discriminant: MemberInfo | None = None
        discr_attr = variant_part.attributes.get("DW_AT_discr")
        if discr_attr is not None:
            discriminant = self._discriminant(variant_part, section)
            if discriminant is None:
                return None

        variants: dict[int | None, VariantInfo] = {}
        for child in variant_part.iter_children():
            if child.tag != VARIANT_TAG:
                continue

            member = next(
                (
                    self._member(grandchild, section)
                    for grandchild in child.iter_children()
                    if grandchild.tag == MEMBER_TAG
                ),
                None,
            )
            if member is None:
                logger.warning(f"Variant at 0x{child.offset:x} has no payload member")
                continue

            value = _discr_value(child)
            if value in variants:
                logger.warning(
                    f"Duplicate discriminant {value if value is not None else 'default'} "
                    f"in variant part at 0x{variant_part.offset:x}; keeping the first"
                )
                continue
            variants[value] = VariantInfo(member)

        if discriminant is not None:
            return ManyVariants(discriminant=discriminant, variants=variants)
        if not variants:
            return ZeroVariants()
        if len(variants) == 1:
            return OneVariant(next(iter(variants.values())))

        logger.warning(
            f"Variant part at 0x{variant_part.offset:x} has {len(variants)} variants "
            "but no discriminant"
        )
        return None

    def _discriminant(self, variant_part: DIE, section: DebugSection) -> MemberInfo | None:
        """Find the member DIE that DW_AT_discr points at."""
        try:
            target = variant_part.get_DIE_from_attribute("DW_AT_discr")
        except Exception as e:
            logger.warning(f"Dangling DW_AT_discr at 0x{variant_part.offset:x}: {e}")
            return None

        member = self._member(target, section) if target.tag == MEMBER_TAG else None
        if member is None:
            logger.warning(
                f"DW_AT_discr at 0x{variant_part.offset:x} does not name a usable member"
            )
        return member

    def _build_c_enum(self, die: DIE) -> CEnumInfo | None:
        byte_size = _int_attr(die, "DW_AT_byte_size")
        if byte_size is None:
            logger.debug(f"C enum at 0x{die.offset:x} has no byte size")
            return None

        enumerators: dict[int, EnumeratorInfo] = {}
        for child in die.iter_children():
            if child.tag != ENUMERATOR_TAG:
                continue
            name = _die_name(child)
            value = _int_attr(child, "DW_AT_const_value")
            if name is None or value is None:
                continue
            if value in enumerators:
                logger.debug(f"Enumerator {name} aliases {enumerators[value].name}")
                continue
            enumerators[value] = EnumeratorInfo(name=name, value=value)

        alignment = _int_attr(die, "DW_AT_alignment")
        return CEnumInfo(
            name=_die_name(die) or "",
            byte_size=byte_size,
            alignment=alignment if alignment is not None else byte_size,
            enumerators=dict(sorted(enumerators.items())),
        )

    def _build_subroutine(self, die: DIE, section: DebugSection) -> SubroutineInfo:
        parameters: list[Goff] = []
        for child in die.iter_children():
            if child.tag != FORMAL_PARAMETER_TAG:
                continue
            goff = self.resolve_reference(child, section)
            if goff is None:
                logger.debug(f"Formal parameter at 0x{child.offset:x} has no type")
                continue
            parameters.append(goff)

        return SubroutineInfo(
            formal_parameters=tuple(parameters),
            return_type_goff=self.resolve_reference(die, section),
        )

    # ------------------------------------------------------------------
    # Children

    def _members(self, die: DIE, section: DebugSection) -> tuple[MemberInfo, ...]:
        """Collect data members, ordered by offset (stable for equal offsets)."""
        members = []
        for child in die.iter_children():
            if child.tag != MEMBER_TAG or DIETypeClassifier.is_static_member(child):
                continue
            member = self._member(child, section)
            if member is not None:
                members.append(member)
        return tuple(sorted(members, key=lambda m: m.offset))

    def _member(self, die: DIE, section: DebugSection) -> MemberInfo | None:
        type_goff = self.resolve_reference(die, section)
        if type_goff is None:
            logger.warning(f"Member at 0x{die.offset:x} has no type; skipped")
            return None

        location = die.attributes.get("DW_AT_data_member_location")
        offset = parse_location_offset(location.value if location is not None else None)

        return MemberInfo(
            name=_die_name(die),
            type_goff=type_goff,
            offset=offset if offset is not None else 0,
            alignment=_int_attr(die, "DW_AT_alignment"),
            artificial=_flag_attr(die, "DW_AT_artificial"),
        )

    def _template_params(self, die: DIE, section: DebugSection) -> tuple[TemplateTypeParam, ...]:
        params = []
        for child in die.iter_children():
            if child.tag != TEMPLATE_TYPE_PARAM_TAG:
                continue
            name = _die_name(child)
            type_goff = self.resolve_reference(child, section)
            if name is None or type_goff is None:
                continue
            params.append(TemplateTypeParam(name=name, type_goff=type_goff))
        return tuple(params)
