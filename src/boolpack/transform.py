"""transform.py – Resolve one struct description into a :class:`TransformPlan`.

Pipeline, aborting on the first error:

1. attach per-field config blocks (one per field, bool fields only)
2. partition fields and pick the container width
3. assign bits and resolve accessors
4. compute the default bit pattern (newtype containers only)

Each struct is independent, so :func:`transform_many` can plan a batch on a
thread pool without any coordination.
"""

from __future__ import annotations

import warnings
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from boolpack.accessors import plan_accessors
from boolpack.defaults import compute_default_mask
from boolpack.errors import (
    AmbiguousConfigError,
    BoolPackError,
    InvalidFieldTypeError,
    SourceLocation,
)
from boolpack.model import FieldSchema, GlobalConfig, LocalConfig, TransformPlan
from boolpack.packing import container_declaration, partition_fields, select_packed_type


@dataclass(frozen=True)
class StructRequest:
    """Front-end output for one struct: fields plus both config levels."""

    name: str
    fields: tuple[FieldSchema, ...]
    global_config: GlobalConfig = field(default_factory=GlobalConfig)
    local_configs: tuple[LocalConfig, ...] = ()


@dataclass(frozen=True)
class TransformOutcome:
    """Result of planning one struct in a batch: a plan or the error that stopped it."""

    struct_name: str
    plan: TransformPlan | None = None
    error: BoolPackError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def attach_local_configs(
    struct_name: str,
    fields: Sequence[FieldSchema],
    local_configs: Sequence[LocalConfig],
) -> dict[str, LocalConfig]:
    """Map field name to its config block, validating the attachment."""
    by_target: dict[str, list[LocalConfig]] = {}
    for local in local_configs:
        by_target.setdefault(local.target, []).append(local)

    attached: dict[str, LocalConfig] = {}
    for f in fields:
        blocks = by_target.pop(f.name, [])
        if not blocks:
            continue
        loc = SourceLocation(struct_name, f.name, f.declaration_index)
        if not f.is_boolean:
            raise InvalidFieldTypeError("pack_bools options can only be used on bools", loc)
        if len(blocks) > 1:
            raise AmbiguousConfigError(
                f"at most one pack_bools block allowed per field, found {len(blocks)}", loc
            )
        attached[f.name] = blocks[0]

    # Anything left over names a field the struct does not have.
    if by_target:
        target = next(iter(by_target))
        raise InvalidFieldTypeError(
            f"pack_bools options target unknown field {target!r}",
            SourceLocation(struct_name, target),
        )
    return attached


def transform_struct(
    struct_name: str,
    fields: Sequence[FieldSchema],
    global_config: GlobalConfig | None = None,
    local_configs: Sequence[LocalConfig] = (),
) -> TransformPlan:
    """Plan the packed layout and accessors for one struct.

    Raises a :class:`~boolpack.errors.BoolPackError` subclass on the first
    problem found; no partial plan is ever returned.
    """
    cfg = global_config if global_config is not None else GlobalConfig()
    locals_by_field = attach_local_configs(struct_name, fields, local_configs)

    partition = partition_fields(fields, locals_by_field)
    count = len(partition.packable)
    packed_type = select_packed_type(cfg.packing_strategy, count, SourceLocation(struct_name))
    if count == 0:
        warnings.warn(
            f"{struct_name}: no bools to pack, emitting an empty {packed_type.name} container",
            stacklevel=2,
        )

    accessors = plan_accessors(partition.packable, cfg, locals_by_field)
    default_mask = compute_default_mask(
        struct_name, partition.packable, locals_by_field, cfg.container_mode, packed_type
    )
    decl = container_declaration(
        cfg.container_mode, struct_name, packed_type, default_mask or 0
    )

    return TransformPlan(
        struct_name=struct_name,
        retained_fields=partition.retained,
        container_field=cfg.container_field_name,
        packed_type=packed_type,
        container_decl=decl,
        accessors=accessors,
        default_bitmask=default_mask,
    )


def transform_request(request: StructRequest) -> TransformPlan:
    return transform_struct(
        request.name, request.fields, request.global_config, request.local_configs
    )


def _outcome(request: StructRequest) -> TransformOutcome:
    try:
        plan = transform_request(request)
    except BoolPackError as exc:
        return TransformOutcome(struct_name=request.name, error=exc)
    return TransformOutcome(struct_name=request.name, plan=plan)


def transform_many(requests: Sequence[StructRequest], jobs: int = 1) -> list[TransformOutcome]:
    """Plan every request, returning outcomes in request order.

    One struct failing does not stop the others.
    """
    if jobs <= 1 or len(requests) <= 1:
        return [_outcome(r) for r in requests]
    with ThreadPoolExecutor(max_workers=jobs) as executor:
        return list(executor.map(_outcome, requests))
