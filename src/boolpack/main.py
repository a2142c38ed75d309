"""main.py – Umbrella CLI entry point for boolpack.

Lazily imports and registers the subcommand typer apps so a broken optional
module cannot prevent the whole CLI from loading.  Each module exposes a
single ``main`` callback, registered as a flat ``app.command()`` entry.
"""

import importlib
import sys
from collections.abc import Callable

import typer

app = typer.Typer(
    help="Pack boolean struct fields into bit containers and plan their accessors.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Typical workflow:[/bold]
  boolpack check               Validate every struct in boolpack.toml
  boolpack plan                Show bit layout and accessors per struct
  boolpack plan -s Config --json   Emit the plan for a code generator

[dim]Commands read struct descriptions from boolpack.toml (searched upward
from the current directory) or from the file given with --file.[/dim]""",
)

# ---------------------------------------------------------------------------
# Subcommand registry
# ---------------------------------------------------------------------------

_SINGLE_COMMANDS: list[tuple[str, str, str]] = [
    ("plan", "boolpack.plan_cmd", "Plan packed-bool layouts and accessors."),
    ("check", "boolpack.check_cmd", "Validate packed-bool configuration."),
]


def _make_stub_cmd(mod_name: str, err: ImportError) -> Callable[[], None]:
    """Create a stub command function that reports a missing dependency."""

    def _stub() -> None:
        print(f"Error: could not load '{mod_name}': {err}", file=sys.stderr)
        raise typer.Exit(code=1)

    return _stub


for _name, _module, _help in _SINGLE_COMMANDS:
    try:
        _mod = importlib.import_module(_module)
        app.command(name=_name, help=_help)(_mod.main)
    except ImportError as _exc:
        app.command(name=_name, help=f"[unavailable] {_help}")(_make_stub_cmd(_module, _exc))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
