"""CLI entry point — registers the lookup command."""

import typer
from rich.console import Console

app = typer.Typer(
    name="outcomes-lookup",
    help="Look up outcomes for an event from the outcomes dataset",
    add_completion=False,
    rich_markup_mode="rich",
)

# Diagnostics go to stderr; stdout carries only outcome rows.
console = Console(stderr=True)


def main() -> None:
    app()


# Import subcommands to register them
from .lookup import lookup as _lookup  # noqa: F401, E402
