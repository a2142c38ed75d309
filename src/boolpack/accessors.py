"""accessors.py – Bit assignment and accessor signatures for packed flags.

Flags get bit positions ``0, 1, 2, ...`` in declaration order, counting only
packable fields.  :func:`read_flag` and :func:`write_flag` are the reference
arithmetic every generated getter/setter must reproduce.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from boolpack.model import AccessorSpec, FieldSchema, GlobalConfig, LocalConfig
from boolpack.resolver import resolve_field


def plan_accessors(
    packable: Sequence[FieldSchema],
    global_cfg: GlobalConfig,
    locals_by_field: Mapping[str, LocalConfig],
) -> tuple[AccessorSpec, ...]:
    """Return one :class:`AccessorSpec` per packable field, in bit order.

    A spec carries zero, one or two signatures depending on what the
    configuration asks for; its bit is reserved either way.
    """
    specs: list[AccessorSpec] = []
    for bit, field in enumerate(packable):
        getter, setter = resolve_field(global_cfg, locals_by_field.get(field.name), field)
        specs.append(
            AccessorSpec(
                flag_index=field.declaration_index,
                field_name=field.name,
                bit_position=bit,
                getter=getter,
                setter=setter,
            )
        )
    return tuple(specs)


def read_flag(container: int, bit_position: int) -> bool:
    return (container & (1 << bit_position)) != 0


def write_flag(container: int, bit_position: int, value: bool) -> int:
    """Return the whole new container value with one flag set or cleared."""
    if value:
        return container | (1 << bit_position)
    return container & ~(1 << bit_position)
