"""Tests for the boolpack.toml struct description loader."""

import os
from pathlib import Path

import pytest

from boolpack.config import _find_root, load_config, load_schema
from boolpack.errors import AmbiguousConfigError, UnknownOptionError
from boolpack.model import NewType
from boolpack.transform import transform_request

# ---------------------------------------------------------------------------
# Helper: create a temp boolpack.toml and return the root dir
# ---------------------------------------------------------------------------

_CONFIG_TOML = """\
[structs.Config]
options = { newtype = true, getters = "pub get_%" }

[[structs.Config.fields]]
name = "output_name"
type = "String"

[[structs.Config.fields]]
name = "verbose"
type = "bool"
vis = "pub(crate)"
pack_bools = { default = true }

[[structs.Config.fields]]
name = "legacy"
type = "bool"
pack_bools = { skip = true }

[structs.Plain]

[[structs.Plain.fields]]
name = "a"
type = "bool"
"""


def _make_project(tmp_path: Path, toml_content: str) -> Path:
    """Write a boolpack.toml and return the directory."""
    (tmp_path / "boolpack.toml").write_text(toml_content, encoding="utf-8")
    return tmp_path


# ---------------------------------------------------------------------------
# _find_root()
# ---------------------------------------------------------------------------


class TestFindRoot:
    def test_explicit_root(self, tmp_path: Path) -> None:
        assert _find_root(tmp_path) == tmp_path

    def test_auto_detect_from_subdir(self, tmp_path: Path) -> None:
        _make_project(tmp_path, _CONFIG_TOML)
        sub = tmp_path / "a" / "b"
        sub.mkdir(parents=True)
        old_cwd = os.getcwd()
        try:
            os.chdir(sub)
            root = _find_root()
            assert (root / "boolpack.toml").exists()
        finally:
            os.chdir(old_cwd)


# ---------------------------------------------------------------------------
# load_schema()
# ---------------------------------------------------------------------------


class TestLoadSchema:
    def test_structs_in_file_order(self, tmp_path: Path) -> None:
        schema = load_config(_make_project(tmp_path, _CONFIG_TOML))
        assert schema.struct_names == ["Config", "Plain"]
        assert schema.failures == {}

    def test_fields_parsed(self, tmp_path: Path) -> None:
        schema = load_config(_make_project(tmp_path, _CONFIG_TOML))
        req = schema.get("Config")
        assert [f.name for f in req.fields] == ["output_name", "verbose", "legacy"]
        assert [f.is_boolean for f in req.fields] == [False, True, True]
        assert req.fields[1].declared_visibility == "pub(crate)"
        assert [f.declaration_index for f in req.fields] == [0, 1, 2]
        assert req.global_config.container_mode == NewType()

    def test_local_configs_attached_by_name(self, tmp_path: Path) -> None:
        req = load_config(_make_project(tmp_path, _CONFIG_TOML)).get("Config")
        assert {c.target for c in req.local_configs} == {"verbose", "legacy"}

    def test_plans_from_file(self, tmp_path: Path) -> None:
        req = load_config(_make_project(tmp_path, _CONFIG_TOML)).get("Config")
        plan = transform_request(req)
        assert [f.name for f in plan.retained_fields] == ["output_name", "legacy"]
        assert plan.default_bitmask == 1
        getter = plan.accessors[0].getter
        assert getter is not None
        assert (getter.name, getter.visibility) == ("get_verbose", "pub")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_schema(tmp_path / "nope.toml")

    def test_no_structs_section(self, tmp_path: Path) -> None:
        with pytest.raises(KeyError):
            load_config(_make_project(tmp_path, "[other]\nx = 1\n"))

    def test_field_without_name(self, tmp_path: Path) -> None:
        toml = '[structs.S]\n[[structs.S.fields]]\ntype = "bool"\n'
        with pytest.raises(ValueError, match="valid 'name'"):
            load_config(_make_project(tmp_path, toml))

    def test_unknown_struct(self, tmp_path: Path) -> None:
        schema = load_config(_make_project(tmp_path, _CONFIG_TOML))
        with pytest.raises(KeyError, match="Available structs"):
            schema.get("Missing")


class TestOptionFailures:
    def test_bad_option_recorded_per_struct(self, tmp_path: Path) -> None:
        toml = _CONFIG_TOML + '\n[structs.Broken]\noptions = { colour = "red" }\n'
        schema = load_config(_make_project(tmp_path, toml))
        assert schema.struct_names == ["Config", "Plain", "Broken"]
        assert isinstance(schema.failures["Broken"], UnknownOptionError)
        with pytest.raises(UnknownOptionError):
            schema.get("Broken")

    def test_list_of_blocks_is_ambiguous(self, tmp_path: Path) -> None:
        toml = (
            "[structs.S]\n"
            "[[structs.S.fields]]\n"
            'name = "a"\n'
            'type = "bool"\n'
            "pack_bools = [{ skip = true }, { default = false }]\n"
        )
        req = load_config(_make_project(tmp_path, toml)).get("S")
        assert len(req.local_configs) == 2
        with pytest.raises(AmbiguousConfigError):
            transform_request(req)
