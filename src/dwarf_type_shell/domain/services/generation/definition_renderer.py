#!/usr/bin/env python3

"""Pseudo-source definitions reconstructed from type entries.

The output reads like Rust: primitives map to their Rust names, structs
keep their tuple or braced shape, and sum types are rebuilt from the
discriminant/variant encoding the compiler lowered them into.
"""

from collections.abc import Iterable

from ....infrastructure.logging import get_logger, log_timing
from ...models.dwarf import (
    ArrayInfo,
    BaseTypeInfo,
    CEnumInfo,
    Encoding,
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
from ..resolution import name_or_goff

logger = get_logger(__name__)

INDENT = "    "
ANON_MEMBER = "ANON"
UNEXPECTED_PAYLOAD = "(unexpected weirdness)"

# (encoding, byte size) -> primitive name; byte size 0 is always the unit type
PRIMITIVE_NAMES: dict[tuple[Encoding, int], str] = {
    (Encoding.UNSIGNED, 1): "u8",
    (Encoding.UNSIGNED, 2): "u16",
    (Encoding.UNSIGNED, 4): "u32",
    (Encoding.UNSIGNED, 8): "u64",
    (Encoding.UNSIGNED, 16): "u128",
    (Encoding.SIGNED, 1): "i8",
    (Encoding.SIGNED, 2): "i16",
    (Encoding.SIGNED, 4): "i32",
    (Encoding.SIGNED, 8): "i64",
    (Encoding.SIGNED, 16): "i128",
    (Encoding.FLOAT, 4): "f32",
    (Encoding.FLOAT, 8): "f64",
    (Encoding.BOOLEAN, 1): "bool",
    (Encoding.UNSIGNED_CHAR, 4): "char",
    (Encoding.UNSIGNED_CHAR, 1): "c_uchar",
    (Encoding.SIGNED_CHAR, 1): "c_schar",
}


class RenderError(ValueError):
    """A definition cannot be rendered from the snapshot."""


def primitive_name(encoding: Encoding, byte_size: int) -> str:
    """Name a primitive, or return an ``Unhandled<Encoding><size>`` marker.

    Examples:
        >>> primitive_name(Encoding.UNSIGNED, 4)
        'u32'
        >>> primitive_name(Encoding.FLOAT, 2)
        'UnhandledFloat2'
    """
    if byte_size == 0:
        return "()"
    return PRIMITIVE_NAMES.get((encoding, byte_size), f"Unhandled{encoding}{byte_size}")


def format_enumerator_value(value: int, byte_size: int) -> str:
    """Hex-format an enumerator value; negatives wrap to the enum's width."""
    if value < 0:
        bits = 8 * byte_size if byte_size > 0 else 64
        value &= (1 << bits) - 1
    return f"0x{value:x}"


class DefinitionRenderer:
    """Renders type entries as lists of pseudo-source lines."""

    def __init__(self, db: TypeDatabase) -> None:
        """Initialize renderer.

        Args:
            db: Snapshot used to resolve member and parameter type names
        """
        self.db = db

    @log_timing
    def render(self, entry: TypeInfo) -> list[str]:
        """Render one type entry.

        Args:
            entry: Entry to render

        Returns:
            Output lines, without trailing newlines

        Raises:
            RenderError: If an array's element type has no name
        """
        if isinstance(entry, BaseTypeInfo):
            return [f"type _ = {primitive_name(entry.encoding, entry.byte_size)};"]
        if isinstance(entry, PointerInfo):
            return [entry.name]
        if isinstance(entry, ArrayInfo):
            return self._render_array(entry)
        if isinstance(entry, StructInfo):
            return self._render_struct(entry)
        if isinstance(entry, EnumInfo):
            return self._render_enum(entry)
        if isinstance(entry, CEnumInfo):
            return self._render_c_enum(entry)
        if isinstance(entry, UnionInfo):
            logger.debug(f"Union {entry.name} has no definition rendering")
            return [f"// union {entry.name}: definition rendering is not supported"]
        if isinstance(entry, SubroutineInfo):
            return self._render_subroutine(entry)

        logger.warning(f"Cannot render {type(entry).__name__}")
        return []

    def _render_array(self, entry: ArrayInfo) -> list[str]:
        element = self.db.name_from_goff(entry.element_type_goff)
        if element is None:
            raise RenderError(f"array element type {entry.element_type_goff} has no name")
        if entry.count is not None:
            return [f"[{element}; {entry.count}]"]
        return [f"[{element}]"]

    def _render_struct(self, entry: StructInfo) -> list[str]:
        head = f"struct {entry.name}{self._type_params(entry.template_type_params)}"

        if not entry.members:
            return [head + ";"]
        if entry.tuple_like:
            return [head + "(", *self._positional(entry.members, INDENT), ");"]
        return [head + " {", *self._named(entry.members, INDENT), "}"]

    def _render_enum(self, entry: EnumInfo) -> list[str]:
        lines = [f"enum {entry.name}{self._type_params(entry.template_type_params)} {{"]

        shape = entry.variant_part.shape
        if isinstance(shape, ZeroVariants):
            pass
        elif isinstance(shape, OneVariant):
            lines.extend(self._variant(shape.variant))
        elif isinstance(shape, ManyVariants):
            # The discriminant itself is not part of the source-level definition
            for _, variant in shape.ordered_variants():
                lines.extend(self._variant(variant))

        lines.append("}")
        return lines

    def _variant(self, variant: VariantInfo) -> list[str]:
        """Render one enum arm with its payload struct's members inline."""
        label = INDENT + (variant.member.name or ANON_MEMBER)
        payload = self.db.type_from_goff(variant.member.type_goff)

        if not isinstance(payload, StructInfo):
            logger.warning(
                f"Variant {variant.member.name} payload at {variant.member.type_goff} "
                f"is {type(payload).__name__}, not a struct"
            )
            return [f"{label}{UNEXPECTED_PAYLOAD},"]

        if not payload.members:
            return [f"{label},"]
        inner = INDENT * 2
        if payload.tuple_like:
            return [label + "(", *self._positional(payload.members, inner), INDENT + "),"]
        return [label + " {", *self._named(payload.members, inner), INDENT + "},"]

    def _render_c_enum(self, entry: CEnumInfo) -> list[str]:
        lines = [f"enum {entry.name} {{"]
        for value, enumerator in entry.enumerators.items():
            rendered = format_enumerator_value(value, entry.byte_size)
            lines.append(f"{INDENT}{enumerator.name} = {rendered},")
        lines.append("}")
        return lines

    def _render_subroutine(self, entry: SubroutineInfo) -> list[str]:
        lines = ["fn("]
        lines.extend(f"{INDENT}{name_or_goff(self.db, p)}," for p in entry.formal_parameters)
        if entry.return_type_goff is not None:
            lines.append(f") -> {name_or_goff(self.db, entry.return_type_goff)} {{")
        else:
            lines.append(") {")
        lines.extend(
            [
                f"{INDENT}// code goes here",
                f"{INDENT}// (this is a subroutine type, _not_ a fn ptr)",
                f"{INDENT}unimplemented!();",
                "}",
            ]
        )
        return lines

    def _positional(self, members: Iterable[MemberInfo], indent: str) -> list[str]:
        return [f"{indent}{name_or_goff(self.db, m.type_goff)}," for m in members]

    def _named(self, members: Iterable[MemberInfo], indent: str) -> list[str]:
        return [
            f"{indent}{m.name or ANON_MEMBER}: {name_or_goff(self.db, m.type_goff)},"
            for m in members
        ]

    @staticmethod
    def _type_params(params: tuple[TemplateTypeParam, ...]) -> str:
        if not params:
            return ""
        return "<" + ",".join(p.name for p in params) + ">"
