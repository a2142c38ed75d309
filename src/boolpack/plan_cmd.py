"""plan_cmd.py – Show the packed layout and accessors planned for each struct.

Prints one Rich panel per struct: the retained fields, the container field
and its type, and a row per flag with its bit, getter and setter.  With
``--json`` the plans are emitted in the hand-off format a code generator
consumes.
"""

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from boolpack.cli import SchemaOption, get_schema, json_print, plan_schema, print_diagnostic
from boolpack.model import AccessorSignature, TransformPlan

app = typer.Typer(
    help="Plan packed-bool layouts and accessors.",
    rich_markup_mode="rich",
)


def _signature(sig: AccessorSignature | None) -> str:
    if sig is None:
        return "[dim]-[/]"
    vis = sig.visibility or "private"
    return f"{escape(sig.name)} [dim]({escape(vis)})[/]"


def _render_plan(console: Console, plan: TransformPlan) -> None:
    """Print a Rich panel for a single struct plan."""
    title = Text(f"  {plan.struct_name}  ", style="bold white on blue")

    tbl = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    tbl.add_column("Bit", justify="right")
    tbl.add_column("Field")
    tbl.add_column("Getter")
    tbl.add_column("Setter")
    tbl.add_column("Default", justify="center")

    for spec in plan.accessors:
        default = ""
        if plan.default_bitmask is not None and plan.default_bitmask >> spec.bit_position & 1:
            default = "[green]true[/]"
        tbl.add_row(
            str(spec.bit_position),
            escape(spec.field_name),
            _signature(spec.getter),
            _signature(spec.setter),
            default,
        )

    retained = ", ".join(f.name for f in plan.retained_fields) or "none"
    subtitle_parts = [
        f"[bold]{plan.flag_count}[/] flags",
        f"{escape(plan.container_field)}: [bold]{escape(plan.container_type_name)}[/]",
        f"retained: {escape(retained)}",
    ]
    if plan.container_decl is not None:
        subtitle_parts.append(
            f"newtype {escape(plan.container_decl.name)}({plan.packed_type.name}) "
            f"default {plan.container_decl.default_value:#x}"
        )
    subtitle = "  ·  ".join(subtitle_parts)

    console.print(Panel(tbl, title=title, subtitle=subtitle, border_style="blue"))


@app.callback(invoke_without_command=True)
def main(
    structs: list[str] | None = typer.Option(
        None, "--struct", "-s", help="Struct to plan (repeatable; default: all)"
    ),
    jobs: int = typer.Option(1, "--jobs", "-j", help="Plan structs on N threads"),
    json_output: bool = typer.Option(False, "--json", help="Output structured JSON"),
    schema_file: str | None = SchemaOption,
) -> None:
    """Plan every (or each named) struct and print the result."""
    schema = get_schema(schema_file, json_mode=json_output)
    outcomes = plan_schema(schema, structs or None, jobs, json_mode=json_output)
    failed = [o for o in outcomes if not o.ok]

    if json_output:
        json_print(
            {
                "structs": [o.plan.to_dict() for o in outcomes if o.plan is not None],
                "errors": [
                    {"struct": o.struct_name, **o.error.to_dict()}
                    for o in failed
                    if o.error is not None
                ],
            }
        )
    else:
        console = Console()
        for outcome in outcomes:
            if outcome.plan is not None:
                _render_plan(console, outcome.plan)
            elif outcome.error is not None:
                print_diagnostic(outcome.error)

    if failed:
        raise typer.Exit(code=1)


def main_entry() -> None:
    """Package entry point for ``boolpack-plan``."""
    app()
