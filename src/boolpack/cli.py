"""Shared CLI utilities for boolpack tools.

Provides the common ``--file`` option, schema-loading helper, and standardised
output / error helpers so every command reports errors and JSON the same way.

Usage in a tool::

    import typer
    from boolpack.cli import SchemaOption, error_exit, get_schema, json_print

    app = typer.Typer()

    @app.command()
    def main(schema_file: str | None = SchemaOption) -> None:
        schema = get_schema(schema_file)
        ...
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from boolpack.config import SchemaFile, load_config, load_schema
from boolpack.errors import BoolPackError
from boolpack.transform import TransformOutcome, transform_many

# Re-usable Typer option for --file
SchemaOption: str | None = typer.Option(
    None,
    "--file",
    "-f",
    help="Struct description file (default: boolpack.toml found from the cwd upward).",
)


def get_schema(schema_file: str | None = None, *, json_mode: bool = False) -> SchemaFile:
    """Load the struct descriptions, exiting with an error message on failure."""
    try:
        if schema_file is not None:
            return load_schema(Path(schema_file))
        return load_config()
    except (FileNotFoundError, KeyError, ValueError) as exc:
        msg = exc.args[0] if isinstance(exc, KeyError) and exc.args else str(exc)
        error_exit(str(msg), json_mode=json_mode)


# ---------------------------------------------------------------------------
# Standardised output helpers
# ---------------------------------------------------------------------------

_err_console = Console(stderr=True)


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(f"[red bold]error:[/red bold] {escape(msg)}", highlight=False)
    raise typer.Exit(code=code)


def print_diagnostic(err: BoolPackError) -> None:
    """Print a located resolution error to stderr without exiting."""
    _err_console.print(
        f"[red bold]error {err.kind}:[/red bold] {escape(str(err))}", highlight=False
    )


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))


def plan_schema(
    schema: SchemaFile,
    names: list[str] | None = None,
    jobs: int = 1,
    *,
    json_mode: bool = False,
) -> list[TransformOutcome]:
    """Plan the selected structs (all when *names* is empty), in file order.

    Structs whose options already failed to parse are reported as failed
    outcomes alongside the planned ones.
    """
    wanted = names or schema.struct_names
    unknown = [n for n in wanted if n not in schema.struct_names]
    if unknown:
        error_exit(
            f"Unknown struct(s) {unknown}.  Available structs: {schema.struct_names}",
            json_mode=json_mode,
        )

    requests = [r for r in schema.structs if r.name in wanted]
    planned = {o.struct_name: o for o in transform_many(requests, jobs=jobs)}
    outcomes: list[TransformOutcome] = []
    for name in schema.struct_names:
        if name not in wanted:
            continue
        if name in schema.failures:
            outcomes.append(TransformOutcome(struct_name=name, error=schema.failures[name]))
        else:
            outcomes.append(planned[name])
    return outcomes
