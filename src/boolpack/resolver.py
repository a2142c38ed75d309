"""resolver.py – Merge struct-wide accessor policy with per-field overrides.

Resolution is a pure function of (override, policy, field).  The field's own
visibility token is always passed in so ``inherit`` resolves against the
field that generated the accessor, never against the struct.
"""

from __future__ import annotations

from boolpack.model import (
    AccessorOverride,
    AccessorSignature,
    FieldSchema,
    GlobalConfig,
    LocalConfig,
    NamingOverride,
    NamingPolicy,
    Suppressed,
    UseDefault,
)
from boolpack.template import DEFAULT_GETTER_TEMPLATE, DEFAULT_SETTER_TEMPLATE, Template


def resolve_accessor(
    override: AccessorOverride,
    policy: NamingPolicy | None,
    field: FieldSchema,
    fallback_template: Template,
) -> AccessorSignature | None:
    """Decide one accessor (getter or setter) for *field*.

    - ``Suppressed`` always wins.
    - ``NamingOverride`` keeps its visibility; a missing name is synthesised
      from the struct-wide template, or *fallback_template* when there is none.
    - ``UseDefault`` follows *policy*, and generates nothing without one.
    """
    inherited = field.declared_visibility

    if isinstance(override, Suppressed):
        return None

    if isinstance(override, NamingOverride):
        name = override.explicit_name
        if name is None:
            template = policy.template if policy is not None else fallback_template
            name = template.format(field.name)
        return AccessorSignature(name=name, visibility=override.visibility.resolve(inherited))

    if isinstance(override, UseDefault):
        if policy is None:
            return None
        return AccessorSignature(
            name=policy.template.format(field.name),
            visibility=policy.visibility.resolve(inherited),
        )

    raise TypeError(f"unsupported accessor override: {override!r}")


def resolve_field(
    global_cfg: GlobalConfig,
    local: LocalConfig | None,
    field: FieldSchema,
) -> tuple[AccessorSignature | None, AccessorSignature | None]:
    """Return ``(getter, setter)`` for a packable field."""
    getter_override: AccessorOverride = local.getter if local is not None else UseDefault()
    setter_override: AccessorOverride = local.setter if local is not None else UseDefault()
    getter = resolve_accessor(
        getter_override, global_cfg.getter_policy, field, DEFAULT_GETTER_TEMPLATE
    )
    setter = resolve_accessor(
        setter_override, global_cfg.setter_policy, field, DEFAULT_SETTER_TEMPLATE
    )
    return getter, setter
