#!/usr/bin/env python3

"""Unit tests for DIE to type entry translation.

DIEs are Mock doubles carrying just the attributes, children and
references the builder reads.
"""

import pytest
from elftools.dwarf.enums import ENUM_DW_ATE

from dwarf_type_shell.domain.models.dwarf import (
    ArrayInfo,
    BaseTypeInfo,
    CEnumInfo,
    DebugSection,
    Encoding,
    EnumInfo,
    Goff,
    ManyVariants,
    OneVariant,
    PointerInfo,
    StructInfo,
    SubroutineInfo,
    UnionInfo,
    ZeroVariants,
)
from dwarf_type_shell.domain.services.parsing import TypeGraphBuilder

from tests.test_utils import make_die, make_unit

INFO = DebugSection.DEBUG_INFO
TYPES = DebugSection.DEBUG_TYPES


@pytest.fixture
def builder() -> TypeGraphBuilder:
    return TypeGraphBuilder()


@pytest.fixture
def u32_die():
    return make_die(
        "DW_TAG_base_type",
        0x10,
        name="u32",
        attrs={"DW_AT_byte_size": 4, "DW_AT_encoding": ENUM_DW_ATE["DW_ATE_unsigned"]},
    )


@pytest.fixture
def bool_die():
    return make_die(
        "DW_TAG_base_type",
        0x18,
        name="bool",
        attrs={"DW_AT_byte_size": 1, "DW_AT_encoding": ENUM_DW_ATE["DW_ATE_boolean"]},
    )


def member(name, offset, type_die, location=None, **attrs):
    attrs["DW_AT_data_member_location"] = offset if location is None else location
    return make_die("DW_TAG_member", 0x1000 + offset, name=name, type_die=type_die, attrs=attrs)


class TestBaseAndPointer:
    """Test base type and pointer decoding."""

    @pytest.mark.unit
    def test_base_type(self, builder: TypeGraphBuilder, u32_die) -> None:
        """Test DW_ATE encodings decode into Encoding values."""
        assert builder.build_entry(u32_die, INFO) == BaseTypeInfo("u32", Encoding.UNSIGNED, 4)

    @pytest.mark.unit
    def test_unknown_encoding_is_other(self, builder: TypeGraphBuilder) -> None:
        """Test encodings without a primitive mapping collapse into OTHER."""
        die = make_die(
            "DW_TAG_base_type",
            attrs={"DW_AT_byte_size": 16, "DW_AT_encoding": ENUM_DW_ATE["DW_ATE_complex_float"]},
        )
        assert builder.build_entry(die, INFO).encoding is Encoding.OTHER

    @pytest.mark.unit
    def test_base_type_without_size_is_skipped(self, builder: TypeGraphBuilder) -> None:
        """Test base types lacking DW_AT_byte_size produce no entry."""
        assert builder.build_entry(make_die("DW_TAG_base_type", name="x"), INFO) is None

    @pytest.mark.unit
    def test_pointer_through_qualifiers(self, builder: TypeGraphBuilder, u32_die) -> None:
        """Test pointer references skip const and typedef wrappers."""
        typedef = make_die("DW_TAG_typedef", 0x20, name="Word", type_die=u32_die)
        const = make_die("DW_TAG_const_type", 0x28, type_die=typedef)
        pointer = make_die("DW_TAG_pointer_type", 0x30, type_die=const)

        entry = builder.build_entry(pointer, INFO)

        assert entry == PointerInfo("*Word", Goff.info(0x10))

    @pytest.mark.unit
    def test_named_pointer_keeps_its_name(self, builder: TypeGraphBuilder, u32_die) -> None:
        """Test a pointer with DW_AT_name keeps it verbatim."""
        pointer = make_die("DW_TAG_pointer_type", 0x30, name="&u32", type_die=u32_die)
        assert builder.build_entry(pointer, INFO).name == "&u32"

    @pytest.mark.unit
    def test_void_pointer(self, builder: TypeGraphBuilder) -> None:
        """Test a pointer without DW_AT_type points to void."""
        entry = builder.build_entry(make_die("DW_TAG_pointer_type", 0x30), INFO)
        assert entry == PointerInfo("*void", None)

    @pytest.mark.unit
    def test_pointer_to_anonymous_pointer(self, builder: TypeGraphBuilder) -> None:
        """Test anonymous pointees that are pointers add one star each."""
        char = make_die("DW_TAG_base_type", 0x08, name="char", attrs={"DW_AT_byte_size": 1})
        inner = make_die("DW_TAG_pointer_type", 0x30, type_die=char)
        outer = make_die("DW_TAG_pointer_type", 0x38, type_die=inner)

        assert builder.build_entry(outer, INFO) == PointerInfo("**char", Goff.info(0x30))

    @pytest.mark.unit
    def test_function_pointer_named_by_goff(self, builder: TypeGraphBuilder, u32_die) -> None:
        """Test an anonymous non-pointer pointee is named by its goff text."""
        subroutine = make_die("DW_TAG_subroutine_type", 0x40, type_die=u32_die)
        pointer = make_die("DW_TAG_pointer_type", 0x48, type_die=subroutine)

        entry = builder.build_entry(pointer, INFO)

        assert entry == PointerInfo("*<.debug_info+0x00000040>", Goff.info(0x40))

    @pytest.mark.unit
    def test_anonymous_pointee_in_type_unit(self, builder: TypeGraphBuilder) -> None:
        """Test the goff text of an anonymous pointee follows the reference form."""
        struct = make_die("DW_TAG_structure_type", 0x50, attrs={"DW_AT_byte_size": 4})
        pointer = make_die(
            "DW_TAG_pointer_type", 0x58, type_die=struct, type_form="DW_FORM_ref_sig8"
        )

        assert builder.build_entry(pointer, INFO).name == "*<.debug_types+0x00000050>"

    @pytest.mark.unit
    def test_pointer_to_const_void(self, builder: TypeGraphBuilder) -> None:
        """Test a qualifier chain ending without a type still names void."""
        const = make_die("DW_TAG_const_type", 0x28)
        pointer = make_die("DW_TAG_pointer_type", 0x30, type_die=const)
        assert builder.build_entry(pointer, INFO) == PointerInfo("*void", None)


class TestReferences:
    """Test reference forms map onto the right section."""

    @pytest.mark.unit
    def test_unit_relative_reference_stays_in_section(
        self, builder: TypeGraphBuilder, u32_die
    ) -> None:
        """Test unit-relative references inherit the unit's section."""
        die = make_die("DW_TAG_pointer_type", type_die=u32_die)
        assert builder.resolve_reference(die, TYPES) == Goff.types(0x10)

    @pytest.mark.unit
    def test_ref_addr_targets_debug_info(self, builder: TypeGraphBuilder, u32_die) -> None:
        """Test DW_FORM_ref_addr always points into .debug_info."""
        die = make_die("DW_TAG_pointer_type", type_die=u32_die, type_form="DW_FORM_ref_addr")
        assert builder.resolve_reference(die, TYPES) == Goff.info(0x10)

    @pytest.mark.unit
    def test_ref_sig8_targets_debug_types(self, builder: TypeGraphBuilder, u32_die) -> None:
        """Test DW_FORM_ref_sig8 always points into .debug_types."""
        die = make_die("DW_TAG_pointer_type", type_die=u32_die, type_form="DW_FORM_ref_sig8")
        assert builder.resolve_reference(die, INFO) == Goff.types(0x10)

    @pytest.mark.unit
    def test_non_reference_form(self, builder: TypeGraphBuilder, u32_die) -> None:
        """Test a DW_AT_type in a data form is ignored."""
        die = make_die("DW_TAG_pointer_type", type_die=u32_die, type_form="DW_FORM_data4")
        assert builder.resolve_reference(die, INFO) is None

    @pytest.mark.unit
    def test_dangling_reference(self, builder: TypeGraphBuilder, u32_die) -> None:
        """Test a reference pyelftools cannot follow resolves to None."""
        die = make_die("DW_TAG_pointer_type", type_die=u32_die)
        die.get_DIE_from_attribute.side_effect = KeyError("gone")
        assert builder.resolve_reference(die, INFO) is None


class TestAggregates:
    """Test struct, union and array decoding."""

    @pytest.mark.unit
    def test_tuple_struct_members_sorted_by_offset(
        self, builder: TypeGraphBuilder, u32_die, bool_die
    ) -> None:
        """Test members are ordered by offset and positional names make a tuple."""
        die = make_die(
            "DW_TAG_structure_type",
            0x40,
            name="Pair",
            attrs={"DW_AT_byte_size": 8, "DW_AT_alignment": 4},
            children=[member("__1", 4, bool_die), member("__0", 0, u32_die)],
        )

        entry = builder.build_entry(die, INFO)

        assert isinstance(entry, StructInfo)
        assert entry.tuple_like
        assert [m.name for m in entry.members] == ["__0", "__1"]
        assert [m.type_goff for m in entry.members] == [Goff.info(0x10), Goff.info(0x18)]
        assert entry.alignment == 4

    @pytest.mark.unit
    def test_member_location_expression(self, builder: TypeGraphBuilder, u32_die) -> None:
        """Test DW_OP_plus_uconst member locations decode to offsets."""
        die = make_die(
            "DW_TAG_structure_type",
            name="Old",
            attrs={"DW_AT_byte_size": 24},
            children=[member("far", 0, u32_die, location=[0x23, 20], DW_AT_artificial=True)],
        )
        only = builder.build_entry(die, INFO).members[0]
        assert only.offset == 20
        assert only.artificial

    @pytest.mark.unit
    def test_static_members_and_template_params(
        self, builder: TypeGraphBuilder, u32_die
    ) -> None:
        """Test static members are skipped and template parameters kept in order."""
        static = make_die(
            "DW_TAG_member", name="COUNT", type_die=u32_die, attrs={"DW_AT_external": True}
        )
        param = make_die("DW_TAG_template_type_param", name="T", type_die=u32_die)
        die = make_die(
            "DW_TAG_structure_type",
            name="Vec<u32>",
            attrs={"DW_AT_byte_size": 24},
            children=[param, static, member("len", 16, u32_die)],
        )

        entry = builder.build_entry(die, INFO)

        assert [m.name for m in entry.members] == ["len"]
        assert not entry.tuple_like
        assert [(p.name, p.type_goff) for p in entry.template_type_params] == [
            ("T", Goff.info(0x10))
        ]

    @pytest.mark.unit
    def test_declarations_are_skipped(self, builder: TypeGraphBuilder) -> None:
        """Test forward declarations produce no entry."""
        die = make_die("DW_TAG_structure_type", name="Opaque", attrs={"DW_AT_declaration": True})
        assert builder.build_entry(die, INFO) is None

    @pytest.mark.unit
    def test_union(self, builder: TypeGraphBuilder, u32_die, bool_die) -> None:
        """Test unions keep their name and members."""
        die = make_die(
            "DW_TAG_union_type",
            name="Bits",
            attrs={"DW_AT_byte_size": 4},
            children=[member("raw", 0, u32_die), member("flag", 0, bool_die)],
        )
        entry = builder.build_entry(die, INFO)
        assert isinstance(entry, UnionInfo)
        assert [m.name for m in entry.members] == ["raw", "flag"]

    @pytest.mark.unit
    def test_array_bounds(self, builder: TypeGraphBuilder, u32_die) -> None:
        """Test array element and count come from the type and subrange."""
        subrange = make_die("DW_TAG_subrange_type", attrs={"DW_AT_upper_bound": 7})
        die = make_die("DW_TAG_array_type", type_die=u32_die, children=[subrange])
        assert builder.build_entry(die, INFO) == ArrayInfo(Goff.info(0x10), 0, 8)


class TestVariantParts:
    """Test sum type reconstruction from DW_TAG_variant_part."""

    def _enum_die(self, variant_part):
        return make_die(
            "DW_TAG_structure_type",
            0x80,
            name="Result",
            attrs={"DW_AT_byte_size": 8, "DW_AT_alignment": 4},
            children=[variant_part],
        )

    def _variant(self, payload_name, payload_die, discr_value=None):
        attrs = {} if discr_value is None else {"DW_AT_discr_value": discr_value}
        return make_die(
            "DW_TAG_variant",
            attrs=attrs,
            children=[make_die("DW_TAG_member", name=payload_name, type_die=payload_die)],
        )

    @pytest.mark.unit
    def test_discriminated_variants(self, builder: TypeGraphBuilder, u32_die, bool_die) -> None:
        """Test DW_AT_discr gives many variants keyed by value, None for the default."""
        discr = member("__discr", 0, u32_die, DW_AT_artificial=True)
        part = make_die(
            "DW_TAG_variant_part",
            refs={"DW_AT_discr": discr},
            children=[
                discr,
                self._variant("Ok", u32_die, 0),
                self._variant("Err", bool_die),
                self._variant("Dup", bool_die, 0),
            ],
        )

        entry = builder.build_entry(self._enum_die(part), INFO)

        assert isinstance(entry, EnumInfo)
        shape = entry.variant_part.shape
        assert isinstance(shape, ManyVariants)
        assert shape.discriminant.artificial
        assert {value: v.member.name for value, v in shape.variants.items()} == {
            0: "Ok",
            None: "Err",
        }

    @pytest.mark.unit
    def test_single_variant(self, builder: TypeGraphBuilder, u32_die) -> None:
        """Test one variant without a discriminant is a OneVariant shape."""
        part = make_die("DW_TAG_variant_part", children=[self._variant("Some", u32_die)])
        shape = builder.build_entry(self._enum_die(part), INFO).variant_part.shape
        assert isinstance(shape, OneVariant)
        assert shape.variant.member.name == "Some"

    @pytest.mark.unit
    def test_no_variants(self, builder: TypeGraphBuilder) -> None:
        """Test an empty variant part is uninhabited."""
        part = make_die("DW_TAG_variant_part")
        entry = builder.build_entry(self._enum_die(part), INFO)
        assert isinstance(entry.variant_part.shape, ZeroVariants)

    @pytest.mark.unit
    def test_many_variants_without_discriminant(
        self, builder: TypeGraphBuilder, u32_die, bool_die
    ) -> None:
        """Test several variants without DW_AT_discr cannot be encoded and are skipped."""
        part = make_die(
            "DW_TAG_variant_part",
            children=[self._variant("A", u32_die, 0), self._variant("B", bool_die, 1)],
        )
        assert builder.build_entry(self._enum_die(part), INFO) is None

    @pytest.mark.unit
    def test_data16_discriminant_values(self, builder: TypeGraphBuilder, u32_die, bool_die) -> None:
        """Test 16-byte discriminant values decode little-endian instead of as the default."""
        discr = member("__discr", 0, u32_die, DW_AT_artificial=True)
        big = (1 << 100).to_bytes(16, "little")
        part = make_die(
            "DW_TAG_variant_part",
            refs={"DW_AT_discr": discr},
            children=[
                discr,
                self._variant("Small", u32_die, (7).to_bytes(16, "little")),
                self._variant("Big", bool_die, big),
            ],
        )

        shape = builder.build_entry(self._enum_die(part), INFO).variant_part.shape

        assert {value: v.member.name for value, v in shape.variants.items()} == {
            7: "Small",
            1 << 100: "Big",
        }
        assert shape.default_variant() is None


class TestCEnumAndSubroutine:
    """Test C enums and subroutine types."""

    @pytest.mark.unit
    def test_c_enum(self, builder: TypeGraphBuilder) -> None:
        """Test enumerators are sorted by value, aliases dropped, alignment defaulted."""
        enumerators = [
            make_die("DW_TAG_enumerator", name="Green", attrs={"DW_AT_const_value": 1}),
            make_die("DW_TAG_enumerator", name="Red", attrs={"DW_AT_const_value": 0}),
            make_die("DW_TAG_enumerator", name="Verde", attrs={"DW_AT_const_value": 1}),
        ]
        die = make_die(
            "DW_TAG_enumeration_type",
            name="Color",
            attrs={"DW_AT_byte_size": 1},
            children=enumerators,
        )

        entry = builder.build_entry(die, INFO)

        assert isinstance(entry, CEnumInfo)
        assert entry.alignment == 1
        assert [(v, e.name) for v, e in entry.enumerators.items()] == [(0, "Red"), (1, "Green")]

    @pytest.mark.unit
    def test_subroutine(self, builder: TypeGraphBuilder, u32_die, bool_die) -> None:
        """Test parameter and return types become goffs."""
        params = [
            make_die("DW_TAG_formal_parameter", type_die=u32_die),
            make_die("DW_TAG_formal_parameter", type_die=bool_die),
        ]
        die = make_die("DW_TAG_subroutine_type", type_die=bool_die, children=params)

        assert builder.build_entry(die, INFO) == SubroutineInfo(
            formal_parameters=(Goff.info(0x10), Goff.info(0x18)),
            return_type_goff=Goff.info(0x18),
        )


class TestAddUnit:
    """Test whole-unit accumulation."""

    @pytest.mark.unit
    def test_collects_type_entries(self, builder: TypeGraphBuilder, u32_die) -> None:
        """Test only type DIEs become entries, keyed by section and offset."""
        null = make_die("DW_TAG_null", 0x5)
        null.is_null.return_value = True
        variable = make_die("DW_TAG_variable", 0x50, name="COUNTER", type_die=u32_die)
        opaque = make_die("DW_TAG_structure_type", 0x60, attrs={"DW_AT_declaration": True})

        builder.add_unit(make_unit([u32_die, null, variable, opaque]), TYPES)

        assert list(builder.entries) == [Goff.types(0x10)]
        assert builder.skipped == 1
