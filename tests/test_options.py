"""Tests for turning pack_bools option mappings into configs."""

import pytest

from boolpack.errors import MalformedTemplateError, SourceLocation, UnknownOptionError
from boolpack.model import (
    U16,
    Auto,
    Fixed,
    GlobalConfig,
    Inline,
    LocalConfig,
    NamingOverride,
    NewType,
    Suppressed,
    UseDefault,
    Visibility,
)
from boolpack.options import parse_global_options, parse_local_options, split_visibility
from boolpack.template import Template

# ---------------------------------------------------------------------------
# split_visibility()
# ---------------------------------------------------------------------------


class TestSplitVisibility:
    @pytest.mark.parametrize(
        "text,vis,rest",
        [
            ("pub get_%", Visibility.public(), "get_%"),
            ("pub(crate) get_%", Visibility.restricted("crate"), "get_%"),
            ("pub( super ) x", Visibility.restricted("super"), "x"),
            ("pub(in crate::a) x", Visibility.restricted("in crate::a"), "x"),
            ("pub(self) x", Visibility.private(), "x"),
            ("inherit %_flag", Visibility.inherit(), "%_flag"),
            ("pub", Visibility.public(), ""),
        ],
    )
    def test_keywords(self, text: str, vis: Visibility, rest: str) -> None:
        assert split_visibility(text) == (vis, rest)

    def test_no_keyword(self) -> None:
        assert split_visibility("get_%") == (None, "get_%")

    def test_identifier_starting_with_pub(self) -> None:
        assert split_visibility("public_flag") == (None, "public_flag")


# ---------------------------------------------------------------------------
# Struct-level options
# ---------------------------------------------------------------------------


class TestGlobalOptions:
    def test_empty_gives_library_defaults(self) -> None:
        assert parse_global_options({}) == GlobalConfig()

    @pytest.mark.parametrize("key", ["get", "getter", "getters"])
    def test_getter_aliases(self, key: str) -> None:
        cfg = parse_global_options({key: "pub is_%"})
        assert cfg.getter_policy is not None
        assert cfg.getter_policy.visibility == Visibility.public()
        assert cfg.getter_policy.template == Template(prefix="is_")

    def test_template_without_visibility_is_private(self) -> None:
        cfg = parse_global_options({"set": "s%"})
        assert cfg.setter_policy is not None
        assert cfg.setter_policy.visibility == Visibility.private()

    def test_visibility_only_keeps_template(self) -> None:
        cfg = parse_global_options({"getters": "pub"})
        assert cfg.getter_policy is not None
        assert cfg.getter_policy.template == Template(prefix="get_")
        assert cfg.getter_policy.visibility == Visibility.public()

    def test_empty_value_makes_default_private(self) -> None:
        cfg = parse_global_options({"get": ""})
        assert cfg.getter_policy is not None
        assert cfg.getter_policy.visibility == Visibility.private()

    @pytest.mark.parametrize("key", ["no_get", "no_getter", "no_getters"])
    def test_no_getters(self, key: str) -> None:
        assert parse_global_options({key: True}).getter_policy is None

    def test_no_setters(self) -> None:
        assert parse_global_options({"no_set": True}).setter_policy is None

    def test_no_getters_false_is_noop(self) -> None:
        assert parse_global_options({"no_get": False}).getter_policy is not None

    def test_type(self) -> None:
        assert parse_global_options({"type": "u16"}).packing_strategy == Fixed(U16)
        assert parse_global_options({"type": "auto"}).packing_strategy == Auto()

    def test_bad_type(self) -> None:
        with pytest.raises(UnknownOptionError, match="auto, u8"):
            parse_global_options({"type": "u7"})

    def test_newtype(self) -> None:
        assert parse_global_options({"newtype": True}).container_mode == NewType()
        assert parse_global_options({"newtype": "Flags"}).container_mode == NewType("Flags")

    def test_later_option_wins(self) -> None:
        cfg = parse_global_options({"newtype": True, "inline": True})
        assert cfg.container_mode == Inline()

    def test_field(self) -> None:
        assert parse_global_options({"field": "bits"}).container_field_name == "bits"

    def test_field_must_be_identifier(self) -> None:
        with pytest.raises(UnknownOptionError, match="identifier"):
            parse_global_options({"field": "not a name"})

    def test_malformed_template(self) -> None:
        with pytest.raises(MalformedTemplateError):
            parse_global_options({"getters": "pub getter"})

    def test_unknown_key(self) -> None:
        loc = SourceLocation("Config")
        with pytest.raises(UnknownOptionError, match="Valid struct options") as exc_info:
            parse_global_options({"colour": "red"}, loc)
        assert exc_info.value.location == loc

    def test_wrong_value_shape(self) -> None:
        with pytest.raises(UnknownOptionError, match="true/false"):
            parse_global_options({"inline": "yes"})


# ---------------------------------------------------------------------------
# Field-level options
# ---------------------------------------------------------------------------


class TestLocalOptions:
    def test_empty(self) -> None:
        assert parse_local_options("a", {}) == LocalConfig(target="a")

    def test_skip_and_default(self) -> None:
        cfg = parse_local_options("a", {"skip": True, "default": True})
        assert cfg.skip is True
        assert cfg.default_value is True

    def test_getter_with_visibility(self) -> None:
        cfg = parse_local_options("debug", {"getter": "pub debug_mode"})
        assert cfg.getter == NamingOverride(Visibility.public(), "debug_mode")
        assert cfg.setter == UseDefault()

    def test_getter_without_visibility_is_private(self) -> None:
        cfg = parse_local_options("b", {"get": "get_b"})
        assert cfg.getter == NamingOverride(Visibility.private(), "get_b")

    def test_visibility_only_synthesises_name(self) -> None:
        cfg = parse_local_options("b", {"set": "pub(crate)"})
        assert cfg.setter == NamingOverride(Visibility.restricted("crate"), None)

    def test_suppression(self) -> None:
        cfg = parse_local_options("b", {"no_get": True, "no_setter": True})
        assert cfg.getter == Suppressed()
        assert cfg.setter == Suppressed()

    def test_struct_only_key_rejected(self) -> None:
        with pytest.raises(UnknownOptionError, match="Valid field options"):
            parse_local_options("b", {"getters": "pub"})

    def test_default_must_be_bool(self) -> None:
        with pytest.raises(UnknownOptionError):
            parse_local_options("b", {"default": "yes"})

    def test_accessor_name_must_be_identifier(self) -> None:
        with pytest.raises(UnknownOptionError, match="accessor name"):
            parse_local_options("b", {"get": "pub get-b"})
