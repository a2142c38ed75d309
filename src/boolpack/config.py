"""Struct description loader for boolpack.

Reads ``boolpack.toml`` and turns every ``[structs.<Name>]`` table into a
:class:`~boolpack.transform.StructRequest`, ready for planning::

    [structs.Config]
    options = { newtype = true, getters = "pub get_%" }

    [[structs.Config.fields]]
    name = "output_name"
    type = "String"

    [[structs.Config.fields]]
    name = "verbose"
    type = "bool"
    vis = "pub"
    pack_bools = { default = true }

A ``pack_bools`` value that is a list of tables declares several config
blocks for one field, which planning reports as ambiguous.

Usage::

    from boolpack.config import load_config
    schema = load_config()
    for request in schema.structs:
        ...
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import,no-redef]

from boolpack.errors import BoolPackError, SourceLocation
from boolpack.model import FieldSchema, LocalConfig
from boolpack.options import is_identifier, parse_global_options, parse_local_options
from boolpack.transform import StructRequest

CONFIG_FILENAME = "boolpack.toml"

# Type names treated as flags.
BOOL_TYPES = {"bool"}


@dataclass
class SchemaFile:
    """Parsed ``boolpack.toml`` with the structs it describes."""

    path: Path
    structs: list[StructRequest] = field(default_factory=list)
    # Structs whose options failed to parse, by name.
    failures: dict[str, BoolPackError] = field(default_factory=dict)
    # Every struct name in file order, parsed or not.
    order: list[str] = field(default_factory=list)

    @property
    def struct_names(self) -> list[str]:
        if self.order:
            return list(self.order)
        return [s.name for s in self.structs] + list(self.failures)

    def get(self, name: str) -> StructRequest:
        if name in self.failures:
            raise self.failures[name]
        for request in self.structs:
            if request.name == name:
                return request
        raise KeyError(
            f"Struct '{name}' not found in {self.path.name}.  "
            f"Available structs: {self.struct_names}"
        )


def _find_root(start: Path | None = None) -> Path:
    """Walk up from *start* (or cwd) to find boolpack.toml."""
    if start is not None:
        return start
    candidate = Path.cwd().resolve()
    while candidate != candidate.parent:
        if (candidate / CONFIG_FILENAME).exists():
            return candidate
        candidate = candidate.parent
    raise FileNotFoundError(
        f"Could not find {CONFIG_FILENAME} in any parent of the current directory. "
        f"Pass the file explicitly or run from a directory that contains {CONFIG_FILENAME}."
    )


def _parse_field(struct_name: str, index: int, raw: Any) -> tuple[FieldSchema, list[LocalConfig]]:
    """Parse one ``[[structs.X.fields]]`` entry and its config blocks."""
    if not isinstance(raw, dict):
        raise ValueError(f"{struct_name}: field #{index} must be a table")
    name = raw.get("name")
    if not isinstance(name, str) or not is_identifier(name):
        raise ValueError(f"{struct_name}: field #{index} needs a valid 'name'")

    type_name = str(raw.get("type", ""))
    schema = FieldSchema(
        name=name,
        is_boolean=type_name.strip() in BOOL_TYPES,
        declared_visibility=str(raw.get("vis", "")).strip(),
        declaration_index=index,
        type_name=type_name,
    )

    blocks = raw.get("pack_bools")
    if blocks is None:
        return schema, []
    if isinstance(blocks, dict):
        blocks = [blocks]
    if not isinstance(blocks, list) or not all(isinstance(b, dict) for b in blocks):
        raise ValueError(f"{struct_name}.{name}: 'pack_bools' must be a table or list of tables")

    loc = SourceLocation(struct_name, name, index)
    return schema, [parse_local_options(name, b, loc) for b in blocks]


def parse_struct(name: str, raw: dict[str, Any]) -> StructRequest:
    """Turn one ``[structs.<name>]`` table into a request."""
    options = raw.get("options", {})
    if not isinstance(options, dict):
        raise ValueError(f"{name}: 'options' must be a table")
    global_cfg = parse_global_options(options, SourceLocation(name))

    fields: list[FieldSchema] = []
    local_configs: list[LocalConfig] = []
    for index, raw_field in enumerate(raw.get("fields", [])):
        schema, blocks = _parse_field(name, index, raw_field)
        fields.append(schema)
        local_configs.extend(blocks)

    return StructRequest(
        name=name,
        fields=tuple(fields),
        global_config=global_cfg,
        local_configs=tuple(local_configs),
    )


def load_schema(path: Path) -> SchemaFile:
    """Load and parse an explicit struct description file."""
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    with open(path, "rb") as f:
        raw = tomllib.load(f)

    structs = raw.get("structs")
    if not isinstance(structs, dict) or not structs:
        raise KeyError(f"{path.name} has no [structs.<Name>] section")

    schema = SchemaFile(path=path)
    for name, table in structs.items():
        if not isinstance(table, dict):
            raise ValueError(f"{name}: [structs.{name}] must be a table")
        schema.order.append(name)
        try:
            schema.structs.append(parse_struct(name, table))
        except BoolPackError as exc:
            schema.failures[name] = exc
    return schema


def load_config(root: Path | None = None) -> SchemaFile:
    """Locate ``boolpack.toml`` from *root* (or the cwd upward) and load it."""
    root = _find_root(root)
    return load_schema(root / CONFIG_FILENAME)
