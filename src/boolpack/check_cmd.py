"""check_cmd.py – Validate struct descriptions without printing plans.

Resolves every struct in the file and reports one line per struct.  Exits
with status 1 when any struct fails, which makes it usable as a build gate.
"""

import typer
from rich.console import Console
from rich.markup import escape

from boolpack.cli import SchemaOption, get_schema, json_print, plan_schema, print_diagnostic

app = typer.Typer(
    help="Validate packed-bool configuration for every struct.",
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def main(
    json_output: bool = typer.Option(False, "--json", help="Output structured JSON"),
    schema_file: str | None = SchemaOption,
) -> None:
    """Check every struct in the description file."""
    schema = get_schema(schema_file, json_mode=json_output)
    outcomes = plan_schema(schema, json_mode=json_output)
    ok = all(o.ok for o in outcomes)

    if json_output:
        results = []
        for o in outcomes:
            entry: dict[str, object] = {"struct": o.struct_name, "ok": o.ok}
            if o.error is not None:
                entry["error"] = o.error.to_dict()
            if o.plan is not None:
                entry["flags"] = o.plan.flag_count
                entry["packed_type"] = o.plan.packed_type.name
            results.append(entry)
        json_print({"ok": ok, "results": results})
    else:
        console = Console()
        for o in outcomes:
            if o.plan is not None:
                console.print(
                    f"[green]OK[/]   {escape(o.struct_name)}: "
                    f"{o.plan.flag_count} flags in {o.plan.packed_type.name}",
                    highlight=False,
                )
            elif o.error is not None:
                print_diagnostic(o.error)
        passed = sum(1 for o in outcomes if o.ok)
        console.print(f"{passed}/{len(outcomes)} structs OK", highlight=False)

    if not ok:
        raise typer.Exit(code=1)


def main_entry() -> None:
    """Package entry point for ``boolpack-check``."""
    app()
