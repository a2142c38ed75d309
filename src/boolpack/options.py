"""options.py – Build configs from already-tokenised ``pack_bools`` options.

A front-end (or a ``boolpack.toml`` file) hands over options as a mapping of
key to value.  Struct-level keys::

    get / getter / getters = "[vis] [template]"    no_get / no_getter / no_getters
    set / setter / setters = "[vis] [template]"    no_set / no_setter / no_setters
    type = "auto" | "u8" | "u16" | "u32" | "u64" | "u128"
    inline = true        newtype = true | "Name"        field = "name"

Field-level keys::

    skip                     default = true | false
    get / getter = "[vis] name"     no_get / no_getter
    set / setter = "[vis] name"     no_set / no_setter

Visibility keywords are ``pub``, ``pub(crate)``, ``pub(super)``,
``pub(self)``, ``pub(in path)`` and ``inherit``.  A value without one is
private, as in the attribute syntax.  Options apply in mapping order, so a
later key overrides an earlier one.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from boolpack.errors import SourceLocation, UnknownOptionError
from boolpack.model import (
    PACKED_TYPES_BY_NAME,
    Auto,
    Fixed,
    GlobalConfig,
    Inline,
    LocalConfig,
    NamingOverride,
    NamingPolicy,
    NewType,
    Suppressed,
    Visibility,
)
from boolpack.template import parse_template

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_VIS_RE = re.compile(r"^(?P<vis>inherit|pub(?:\s*\(\s*(?P<scope>[^)]*?)\s*\))?)(?:\s+|$)")

GLOBAL_KEYS_HELP = (
    "Valid struct options: 'get'/'getter'/'getters', 'no_get'/'no_getter'/'no_getters', "
    "'set'/'setter'/'setters', 'no_set'/'no_setter'/'no_setters', "
    "'type', 'inline', 'newtype', 'field'"
)
LOCAL_KEYS_HELP = (
    "Valid field options: 'skip', 'get'/'getter', 'no_get'/'no_getter', "
    "'set'/'setter', 'no_set'/'no_setter', 'default'"
)

_GETTER_KEYS = {"get", "getter", "getters"}
_SETTER_KEYS = {"set", "setter", "setters"}
_NO_GETTER_KEYS = {"no_get", "no_getter", "no_getters"}
_NO_SETTER_KEYS = {"no_set", "no_setter", "no_setters"}


def is_identifier(text: str) -> bool:
    return bool(_IDENT_RE.match(text))


def split_visibility(text: str) -> tuple[Visibility | None, str]:
    """Split a leading visibility keyword off *text*.

    Returns ``(None, text)`` when *text* starts with no keyword.
    """
    text = text.strip()
    m = _VIS_RE.match(text)
    if not m:
        return None, text
    rest = text[m.end() :].strip()
    if m.group("vis") == "inherit":
        return Visibility.inherit(), rest
    scope = m.group("scope")
    if scope is None:
        return Visibility.public(), rest
    if scope == "self":
        return Visibility.private(), rest
    return Visibility.restricted(scope), rest


def _expect_bool(key: str, value: Any, loc: SourceLocation | None) -> bool:
    if not isinstance(value, bool):
        raise UnknownOptionError(f"option {key!r} expects true/false, got {value!r}", loc)
    return value


def _expect_str(key: str, value: Any, loc: SourceLocation | None) -> str:
    if not isinstance(value, str):
        raise UnknownOptionError(f"option {key!r} expects a string, got {value!r}", loc)
    return value


def _expect_ident(key: str, value: Any, loc: SourceLocation | None) -> str:
    text = _expect_str(key, value, loc).strip()
    if not is_identifier(text):
        raise UnknownOptionError(f"option {key!r} expects an identifier, got {text!r}", loc)
    return text


def _update_policy(
    current: NamingPolicy | None,
    fallback: NamingPolicy,
    key: str,
    value: Any,
    loc: SourceLocation | None,
) -> NamingPolicy:
    """Apply ``getters = "[vis] [template]"`` on top of *current*.

    Omitting the template keeps the current one (or the library default).
    """
    vis, rest = split_visibility(_expect_str(key, value, loc))
    visibility = vis if vis is not None else Visibility.private()
    if not rest:
        base = current if current is not None else fallback
        return NamingPolicy(visibility=visibility, template=base.template)
    return NamingPolicy(visibility=visibility, template=parse_template(rest, loc))


def _parse_packing(key: str, value: Any, loc: SourceLocation | None) -> Auto | Fixed:
    name = _expect_str(key, value, loc).strip()
    if name == "auto":
        return Auto()
    packed_type = PACKED_TYPES_BY_NAME.get(name)
    if packed_type is None:
        raise UnknownOptionError("type must be auto, u8, u16, u32, u64 or u128", loc)
    return Fixed(packed_type)


def parse_global_options(
    options: Mapping[str, Any],
    location: SourceLocation | None = None,
) -> GlobalConfig:
    """Build a :class:`GlobalConfig` from struct-level *options*."""
    defaults = GlobalConfig()
    cfg = defaults
    for key, value in options.items():
        if key in _GETTER_KEYS:
            policy = _update_policy(cfg.getter_policy, defaults.getter_policy, key, value, location)
            cfg = replace(cfg, getter_policy=policy)
        elif key in _SETTER_KEYS:
            policy = _update_policy(cfg.setter_policy, defaults.setter_policy, key, value, location)
            cfg = replace(cfg, setter_policy=policy)
        elif key in _NO_GETTER_KEYS:
            if _expect_bool(key, value, location):
                cfg = replace(cfg, getter_policy=None)
        elif key in _NO_SETTER_KEYS:
            if _expect_bool(key, value, location):
                cfg = replace(cfg, setter_policy=None)
        elif key == "type":
            cfg = replace(cfg, packing_strategy=_parse_packing(key, value, location))
        elif key == "inline":
            if _expect_bool(key, value, location):
                cfg = replace(cfg, container_mode=Inline())
        elif key == "newtype":
            if isinstance(value, bool):
                if value:
                    cfg = replace(cfg, container_mode=NewType())
            else:
                cfg = replace(cfg, container_mode=NewType(_expect_ident(key, value, location)))
        elif key == "field":
            cfg = replace(cfg, container_field_name=_expect_ident(key, value, location))
        else:
            raise UnknownOptionError(f"unknown option {key!r}. {GLOBAL_KEYS_HELP}", location)
    return cfg


def _parse_override(key: str, value: Any, loc: SourceLocation | None) -> NamingOverride:
    """Parse ``getter = "[vis] name"``; an empty name is synthesised later."""
    vis, rest = split_visibility(_expect_str(key, value, loc))
    visibility = vis if vis is not None else Visibility.private()
    if rest and not is_identifier(rest):
        raise UnknownOptionError(f"option {key!r} expects an accessor name, got {rest!r}", loc)
    return NamingOverride(visibility=visibility, explicit_name=rest or None)


def parse_local_options(
    target: str,
    options: Mapping[str, Any],
    location: SourceLocation | None = None,
) -> LocalConfig:
    """Build the :class:`LocalConfig` for the field named *target*."""
    cfg = LocalConfig(target=target)
    for key, value in options.items():
        if key == "skip":
            cfg = replace(cfg, skip=_expect_bool(key, value, location))
        elif key in ("get", "getter"):
            cfg = replace(cfg, getter=_parse_override(key, value, location))
        elif key in ("set", "setter"):
            cfg = replace(cfg, setter=_parse_override(key, value, location))
        elif key in ("no_get", "no_getter"):
            if _expect_bool(key, value, location):
                cfg = replace(cfg, getter=Suppressed())
        elif key in ("no_set", "no_setter"):
            if _expect_bool(key, value, location):
                cfg = replace(cfg, setter=Suppressed())
        elif key == "default":
            cfg = replace(cfg, default_value=_expect_bool(key, value, location))
        else:
            raise UnknownOptionError(f"unknown option {key!r}. {LOCAL_KEYS_HELP}", location)
    return cfg
