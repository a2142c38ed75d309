"""defaults.py – Default bit pattern of the packed container.

Only a wrapper type can carry a non-zero default, since an inline integer
field has nowhere to hang a custom default.  Asking for ``default = true``
under an inline container is an error attributed to the field.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from boolpack.errors import InvalidDefaultError, SourceLocation
from boolpack.model import ContainerMode, FieldSchema, Inline, LocalConfig, PackedType


def compute_default_mask(
    struct_name: str,
    packable: Sequence[FieldSchema],
    locals_by_field: Mapping[str, LocalConfig],
    mode: ContainerMode,
    packed_type: PackedType,
) -> int | None:
    """Return the default container value, or ``None`` for inline containers.

    Bits follow the same declaration-order numbering as the accessors.
    """
    mask = 0
    for bit, field in enumerate(packable):
        local = locals_by_field.get(field.name)
        if local is None or not local.default_value:
            continue
        if isinstance(mode, Inline):
            raise InvalidDefaultError(
                "default = true is only available with a newtype container; "
                "set `newtype` on the struct",
                SourceLocation(struct_name, field.name, field.declaration_index),
            )
        mask |= 1 << bit

    if isinstance(mode, Inline):
        return None
    return mask & packed_type.max_value
