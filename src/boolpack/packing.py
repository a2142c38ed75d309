"""packing.py – Split fields into retained vs. packable and size the container.

A field is packable when it is a boolean and its config does not ask to skip
it.  The container width comes from the ordered ``u8 .. u128`` table: either
the smallest that fits (``Auto``) or a declared one (``Fixed``), which must be
wide enough.  Flags are never silently dropped.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from boolpack.errors import OutOfRangeError, SourceLocation
from boolpack.model import (
    PACKED_TYPES,
    Auto,
    ContainerMode,
    FieldSchema,
    Fixed,
    Inline,
    LocalConfig,
    NewType,
    NewTypeDecl,
    PackedType,
    PackingStrategy,
)

NEWTYPE_SUFFIX = "PackedBools"


@dataclass(frozen=True)
class Partition:
    """Fields in declaration order, split by whether they get packed."""

    retained: tuple[FieldSchema, ...]
    packable: tuple[FieldSchema, ...]


def is_packable(field: FieldSchema, local: LocalConfig | None) -> bool:
    return field.is_boolean and not (local is not None and local.skip)


def partition_fields(
    fields: Sequence[FieldSchema],
    locals_by_field: Mapping[str, LocalConfig],
) -> Partition:
    retained: list[FieldSchema] = []
    packable: list[FieldSchema] = []
    for f in fields:
        if is_packable(f, locals_by_field.get(f.name)):
            packable.append(f)
        else:
            retained.append(f)
    return Partition(retained=tuple(retained), packable=tuple(packable))


def smallest_fitting(count: int) -> PackedType | None:
    """Return the smallest supported type with at least *count* bits."""
    for packed_type in PACKED_TYPES:
        if packed_type.bit_width >= count:
            return packed_type
    return None


def select_packed_type(
    strategy: PackingStrategy,
    count: int,
    location: SourceLocation | None = None,
) -> PackedType:
    """Pick the container integer for *count* flags under *strategy*."""
    if isinstance(strategy, Auto):
        packed_type = smallest_fitting(count)
        if packed_type is None:
            largest = PACKED_TYPES[-1]
            raise OutOfRangeError(
                f"struct contains {count} bools, more than fit in a {largest.name} "
                f"({largest.bit_width} bits)",
                location,
            )
        return packed_type

    if isinstance(strategy, Fixed):
        packed_type = strategy.packed_type
        if packed_type.bit_width < count:
            raise OutOfRangeError(
                f"declared width too small: struct contains {count} bools but "
                f"{packed_type.name} holds only {packed_type.bit_width}",
                location,
            )
        return packed_type

    raise TypeError(f"unsupported packing strategy: {strategy!r}")


def newtype_name(mode: NewType, struct_name: str) -> str:
    return mode.name if mode.name else f"{struct_name}{NEWTYPE_SUFFIX}"


def container_declaration(
    mode: ContainerMode,
    struct_name: str,
    packed_type: PackedType,
    default_value: int = 0,
) -> NewTypeDecl | None:
    """Return the wrapper type to declare, or ``None`` for an inline container."""
    if isinstance(mode, Inline):
        return None
    if isinstance(mode, NewType):
        return NewTypeDecl(
            name=newtype_name(mode, struct_name),
            inner_type=packed_type,
            default_value=default_value,
        )
    raise TypeError(f"unsupported container mode: {mode!r}")
