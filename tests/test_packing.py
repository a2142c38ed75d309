"""Tests for field partitioning and container width selection."""

import pytest

from boolpack.errors import OutOfRangeError, SourceLocation
from boolpack.model import (
    PACKED_TYPES,
    U8,
    U16,
    U32,
    U64,
    U128,
    Auto,
    FieldSchema,
    Fixed,
    Inline,
    LocalConfig,
    NewType,
    NewTypeDecl,
)
from boolpack.packing import (
    container_declaration,
    partition_fields,
    select_packed_type,
    smallest_fitting,
)


def _fields(*spec: tuple[str, bool]) -> list[FieldSchema]:
    return [
        FieldSchema(name=name, is_boolean=is_bool, declaration_index=i)
        for i, (name, is_bool) in enumerate(spec)
    ]


# ---------------------------------------------------------------------------
# partition_fields()
# ---------------------------------------------------------------------------


class TestPartition:
    def test_bools_packed_others_retained(self) -> None:
        fields = _fields(("name", False), ("a", True), ("count", False), ("b", True))
        part = partition_fields(fields, {})
        assert [f.name for f in part.packable] == ["a", "b"]
        assert [f.name for f in part.retained] == ["name", "count"]

    def test_skipped_bool_is_retained_in_place(self) -> None:
        fields = _fields(("x", False), ("a", True), ("keep", True), ("y", False))
        part = partition_fields(fields, {"keep": LocalConfig(target="keep", skip=True)})
        assert [f.name for f in part.packable] == ["a"]
        assert [f.name for f in part.retained] == ["x", "keep", "y"]

    def test_no_fields(self) -> None:
        part = partition_fields([], {})
        assert part.packable == ()
        assert part.retained == ()


# ---------------------------------------------------------------------------
# Width selection
# ---------------------------------------------------------------------------


class TestSmallestFitting:
    @pytest.mark.parametrize(
        "count,expected",
        [(0, U8), (1, U8), (8, U8), (9, U16), (16, U16), (17, U32), (33, U64), (65, U128), (128, U128)],
    )
    def test_boundaries(self, count: int, expected) -> None:
        assert smallest_fitting(count) == expected

    def test_too_many(self) -> None:
        assert smallest_fitting(129) is None

    def test_table_is_ordered(self) -> None:
        widths = [t.bit_width for t in PACKED_TYPES]
        assert widths == sorted(widths) == [8, 16, 32, 64, 128]


class TestSelectPackedType:
    def test_auto_nine_flags_needs_u16(self) -> None:
        assert select_packed_type(Auto(), 9) == U16

    def test_auto_overflow(self) -> None:
        loc = SourceLocation("Big")
        with pytest.raises(OutOfRangeError, match="more than fit") as exc_info:
            select_packed_type(Auto(), 129, loc)
        assert exc_info.value.location == loc

    def test_fixed_fits(self) -> None:
        assert select_packed_type(Fixed(U32), 9) == U32

    def test_fixed_exact_fit(self) -> None:
        assert select_packed_type(Fixed(U8), 8) == U8

    def test_fixed_too_small(self) -> None:
        with pytest.raises(OutOfRangeError, match="declared width too small"):
            select_packed_type(Fixed(U8), 9)

    def test_fixed_keeps_wider_type_for_few_flags(self) -> None:
        assert select_packed_type(Fixed(U64), 1) == U64


# ---------------------------------------------------------------------------
# Container shape
# ---------------------------------------------------------------------------


class TestContainerDeclaration:
    def test_inline_has_no_declaration(self) -> None:
        assert container_declaration(Inline(), "Config", U8) is None

    def test_newtype_default_name(self) -> None:
        decl = container_declaration(NewType(), "Config", U16)
        assert decl == NewTypeDecl(name="ConfigPackedBools", inner_type=U16, default_value=0)

    def test_newtype_explicit_name(self) -> None:
        decl = container_declaration(NewType("Flags"), "Config", U8, default_value=5)
        assert decl is not None
        assert decl.name == "Flags"
        assert decl.default_value == 5
