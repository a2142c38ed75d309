"""model.py – Data types shared by the planners.

Inputs (:class:`FieldSchema`, :class:`GlobalConfig`, :class:`LocalConfig`)
come from a front-end; the output (:class:`TransformPlan`) goes to a back-end
that emits the rewritten struct.  Everything here is frozen: entities are
built once per struct transform and never mutated.

Tagged variants are one small frozen dataclass per case, joined into a type
alias.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from boolpack.template import DEFAULT_GETTER_TEMPLATE, DEFAULT_SETTER_TEMPLATE, Template

# ---------------------------------------------------------------------------
# Packed integer widths
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PackedType:
    """One unsigned integer type able to hold packed flags."""

    name: str
    bit_width: int

    @property
    def max_value(self) -> int:
        return (1 << self.bit_width) - 1


U8 = PackedType("u8", 8)
U16 = PackedType("u16", 16)
U32 = PackedType("u32", 32)
U64 = PackedType("u64", 64)
U128 = PackedType("u128", 128)

# Ordered smallest to largest; width selection scans it front to back.
PACKED_TYPES: tuple[PackedType, ...] = (U8, U16, U32, U64, U128)

PACKED_TYPES_BY_NAME: dict[str, PackedType] = {t.name: t for t in PACKED_TYPES}
PACKED_TYPES_BY_WIDTH: dict[int, PackedType] = {t.bit_width: t for t in PACKED_TYPES}


# ---------------------------------------------------------------------------
# Visibility
# ---------------------------------------------------------------------------


class VisibilityKind(Enum):
    INHERIT = "inherit"
    PUBLIC = "public"
    PRIVATE = "private"
    RESTRICTED = "restricted"


@dataclass(frozen=True)
class Visibility:
    """Visibility requested for a generated accessor.

    ``INHERIT`` is resolved against the visibility token of the field the
    accessor was generated for, passed in explicitly by the caller.
    """

    kind: VisibilityKind
    scope: str | None = None

    @classmethod
    def inherit(cls) -> Visibility:
        return cls(VisibilityKind.INHERIT)

    @classmethod
    def public(cls) -> Visibility:
        return cls(VisibilityKind.PUBLIC)

    @classmethod
    def private(cls) -> Visibility:
        return cls(VisibilityKind.PRIVATE)

    @classmethod
    def restricted(cls, scope: str) -> Visibility:
        return cls(VisibilityKind.RESTRICTED, scope)

    def resolve(self, inherited: str) -> str:
        """Return the concrete visibility token ("" means private)."""
        if self.kind is VisibilityKind.INHERIT:
            return inherited
        if self.kind is VisibilityKind.PUBLIC:
            return "pub"
        if self.kind is VisibilityKind.RESTRICTED:
            return f"pub({self.scope})"
        return ""


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldSchema:
    """One source field, in declaration order."""

    name: str
    is_boolean: bool
    declared_visibility: str = ""
    declaration_index: int = 0
    type_name: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "type": self.type_name or ("bool" if self.is_boolean else ""),
            "visibility": self.declared_visibility,
            "index": self.declaration_index,
        }


@dataclass(frozen=True)
class NamingPolicy:
    """Struct-wide accessor naming: a visibility plus a name template."""

    visibility: Visibility
    template: Template


@dataclass(frozen=True)
class NamingOverride:
    """Per-field custom accessor; the name is synthesised when absent."""

    visibility: Visibility
    explicit_name: str | None = None


@dataclass(frozen=True)
class UseDefault:
    """Defer to the struct-wide policy."""


@dataclass(frozen=True)
class Suppressed:
    """Generate no accessor for this field."""


AccessorOverride = UseDefault | NamingOverride | Suppressed


@dataclass(frozen=True)
class Auto:
    """Pick the smallest supported width that fits every flag."""


@dataclass(frozen=True)
class Fixed:
    """Use the given width; fail if the flags do not fit."""

    packed_type: PackedType


PackingStrategy = Auto | Fixed


@dataclass(frozen=True)
class Inline:
    """Type the container field directly as the packed integer."""


@dataclass(frozen=True)
class NewType:
    """Wrap the packed integer in a dedicated single-field type."""

    name: str | None = None


ContainerMode = Inline | NewType

DEFAULT_CONTAINER_FIELD = "packed_bools"


@dataclass(frozen=True)
class GlobalConfig:
    """Struct-wide configuration; the defaults mirror an unconfigured struct."""

    getter_policy: NamingPolicy | None = NamingPolicy(Visibility.inherit(), DEFAULT_GETTER_TEMPLATE)
    setter_policy: NamingPolicy | None = NamingPolicy(Visibility.inherit(), DEFAULT_SETTER_TEMPLATE)
    packing_strategy: PackingStrategy = Auto()
    container_mode: ContainerMode = Inline()
    container_field_name: str = DEFAULT_CONTAINER_FIELD


@dataclass(frozen=True)
class LocalConfig:
    """Per-field configuration block attached to the field named *target*."""

    target: str
    getter: AccessorOverride = UseDefault()
    setter: AccessorOverride = UseDefault()
    skip: bool = False
    default_value: bool = False


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccessorSignature:
    name: str
    visibility: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "visibility": self.visibility}


@dataclass(frozen=True)
class AccessorSpec:
    """Getter/setter plan for one packed flag.

    The back-end must generate exactly this bit arithmetic:

    * getter: ``(container & (1 << bit_position)) != 0``
    * setter: ``container = container | (1 << bit_position)`` when the value
      is true, else ``container = container & ~(1 << bit_position)``
    """

    flag_index: int
    field_name: str
    bit_position: int
    getter: AccessorSignature | None = None
    setter: AccessorSignature | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "flag_index": self.flag_index,
            "field": self.field_name,
            "bit": self.bit_position,
            "getter": self.getter.to_dict() if self.getter else None,
            "setter": self.setter.to_dict() if self.setter else None,
        }


@dataclass(frozen=True)
class NewTypeDecl:
    """Wrapper type declaration; ``default_value`` is its default bit pattern."""

    name: str
    inner_type: PackedType
    default_value: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "inner_type": self.inner_type.name,
            "default": self.default_value,
        }


@dataclass(frozen=True)
class TransformPlan:
    """Everything a back-end needs to emit the rewritten struct."""

    struct_name: str
    retained_fields: tuple[FieldSchema, ...]
    container_field: str
    packed_type: PackedType
    container_decl: NewTypeDecl | None = None
    accessors: tuple[AccessorSpec, ...] = field(default_factory=tuple)
    default_bitmask: int | None = None

    @property
    def container_type_name(self) -> str:
        """Type of the container field: the wrapper if any, else the integer."""
        if self.container_decl is not None:
            return self.container_decl.name
        return self.packed_type.name

    @property
    def container_path(self) -> str:
        """Expression reaching the packed integer from the struct value."""
        if self.container_decl is not None:
            return f"{self.container_field}.0"
        return self.container_field

    @property
    def flag_count(self) -> int:
        return len(self.accessors)

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dict for JSON output."""
        return {
            "struct": self.struct_name,
            "retained_fields": [f.to_dict() for f in self.retained_fields],
            "container": {
                "field": self.container_field,
                "type": self.container_type_name,
                "path": self.container_path,
                "packed_type": self.packed_type.name,
                "bit_width": self.packed_type.bit_width,
            },
            "newtype": self.container_decl.to_dict() if self.container_decl else None,
            "accessors": [a.to_dict() for a in self.accessors],
            "default_bitmask": self.default_bitmask,
        }
