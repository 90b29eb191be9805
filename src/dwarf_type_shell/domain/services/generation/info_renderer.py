#!/usr/bin/env python3

"""Human-readable structural summaries of type entries (the ``info`` view)."""

from ...models.dwarf import (
    ArrayInfo,
    BaseTypeInfo,
    CEnumInfo,
    EnumInfo,
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
    ZeroVariants,
)
from ...repositories import TypeDatabase
from ..resolution import named_goff
from .definition_renderer import format_enumerator_value


class InfoRenderer:
    """Summarizes entries field by field, as opposed to ``DefinitionRenderer``."""

    def __init__(self, db: TypeDatabase) -> None:
        self.db = db

    def render(self, entry: TypeInfo) -> list[str]:
        """Return the summary lines for one entry."""
        if isinstance(entry, BaseTypeInfo):
            return ["base type", f"- encoding: {entry.encoding}", f"- byte size: {entry.byte_size}"]
        if isinstance(entry, PointerInfo):
            target = named_goff(self.db, entry.type_goff) if entry.type_goff else "void"
            return ["pointer type", f"- points to: {target}"]
        if isinstance(entry, ArrayInfo):
            return self._array(entry)
        if isinstance(entry, StructInfo):
            return self._struct(entry)
        if isinstance(entry, EnumInfo):
            return self._enum(entry)
        if isinstance(entry, CEnumInfo):
            return self._c_enum(entry)
        # Unions and subroutines print only their kind
        if isinstance(entry, UnionInfo):
            return ["union type"]
        if isinstance(entry, SubroutineInfo):
            return ["subroutine type"]
        return []

    def _array(self, entry: ArrayInfo) -> list[str]:
        lines = [
            "array type",
            f"- element type: {named_goff(self.db, entry.element_type_goff)}",
            f"- lower bound: {entry.lower_bound}",
        ]
        lines.append(f"- count: {entry.count}" if entry.count is not None else "- size not given")
        return lines

    def _struct(self, entry: StructInfo) -> list[str]:
        lines = ["struct type (tuple-like)" if entry.tuple_like else "struct type"]
        lines.extend(self._size_and_alignment(entry.byte_size, entry.alignment))
        lines.extend(self._params("- template type parameters:", entry.template_type_params))

        if not entry.members:
            lines.append("- no members")
            return lines

        lines.append("- members:")
        for member in entry.members:
            label = member.name if member.name is not None else "<unnamed>"
            lines.append(f"  - {label}: {named_goff(self.db, member.type_goff)}")
            lines.append(f"    - offset: {member.offset} bytes")
            if member.alignment is not None:
                lines.append(f"    - aligned: {member.alignment} bytes")
            if member.artificial:
                lines.append("    - artificial")
        return lines

    def _enum(self, entry: EnumInfo) -> list[str]:
        lines = ["enum type"]
        lines.extend(self._size_and_alignment(entry.byte_size, entry.alignment))
        lines.extend(self._params("- type parameters:", entry.template_type_params))

        shape = entry.variant_part.shape
        if isinstance(shape, ZeroVariants):
            lines.append("- empty (uninhabited) enum")
        elif isinstance(shape, OneVariant):
            member = shape.variant.member
            lines.append("- single variant enum w/o discriminator")
            lines.append(f"  - content type: {named_goff(self.db, member.type_goff)}")
            lines.append(f"  - offset: {member.offset} bytes")
            if member.alignment is not None:
                lines.append(f"  - aligned: {member.alignment} bytes")
            if not member.artificial:
                lines.append("  - not artificial, oddly")
        elif isinstance(shape, ManyVariants):
            lines.extend(self._discriminated(shape))
        return lines

    def _discriminated(self, shape: ManyVariants) -> list[str]:
        discriminant = shape.discriminant
        by = self.db.name_from_goff(discriminant.type_goff) or "an anonymous type"
        lines = [
            f"- {len(shape.variants)} variants discriminated by {by} "
            f"at offset {discriminant.offset}"
        ]
        if not discriminant.artificial:
            lines.append("  - not artificial, oddly")

        for value, variant in shape.ordered_variants():
            if value is not None:
                lines.append(f"- when discriminator == {value}")
            else:
                lines.append("- any other discriminator value")
            lines.extend(self._arm(variant))
        return lines

    def _arm(self, variant: VariantInfo) -> list[str]:
        member: MemberInfo = variant.member
        lines = [
            f"  - contains type: {named_goff(self.db, member.type_goff)}",
            f"  - at offset: {member.offset} bytes",
        ]
        if member.alignment is not None:
            lines.append(f"  - aligned: {member.alignment} bytes")
        return lines

    def _c_enum(self, entry: CEnumInfo) -> list[str]:
        lines = [
            "C-like enum type",
            f"- byte size: {entry.byte_size}",
            f"- alignment: {entry.alignment}",
            f"- {len(entry.enumerators)} values defined",
        ]
        for value, enumerator in entry.enumerators.items():
            rendered = format_enumerator_value(value, entry.byte_size)
            lines.append(f"  - {enumerator.name} = {rendered}")
        return lines

    @staticmethod
    def _size_and_alignment(byte_size: int, alignment: int | None) -> list[str]:
        return [
            f"- byte size: {byte_size}",
            f"- alignment: {alignment}" if alignment is not None else "- not aligned",
        ]

    def _params(self, title: str, params: tuple[TemplateTypeParam, ...]) -> list[str]:
        if not params:
            return []
        return [title] + [f"  - {p.name} = {named_goff(self.db, p.type_goff)}" for p in params]
