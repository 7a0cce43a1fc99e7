"""Lookup command — resolve filters, query the datastore, print outcomes."""

from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from .. import __version__
from ..config import load_config
from ..exceptions import OutcomesLookupError
from ..logging_config import setup_logging
from ..models import LookupFilter
from ..query import execute
from ..resolver import resolve
from . import app, console
from ._output import FORMATS, print_records


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise typer.BadParameter(f"expected an ISO-8601 timestamp, got '{value}'") from None


def _parse_day(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise typer.BadParameter(f"expected a YYYY-MM-DD date, got '{value}'") from None


def _show_version(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]outcomes-lookup[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.command()
def lookup(
    event_id: int = typer.Argument(..., help="The event ID to look up"),
    project_id: int = typer.Option(
        ...,
        "--project",
        "-p",
        help="The project ID to scope the search down to",
        min=0,
    ),
    org_id: Optional[int] = typer.Option(
        None,
        "--org",
        "-o",
        help="The org ID to scope the search down to (looked up from the project if omitted)",
        min=0,
    ),
    day: Optional[str] = typer.Option(
        None,
        "--day",
        help="The UTC day to narrow the search down to (alternative to --from/--to)",
        metavar="DATE",
    ),
    from_: Optional[str] = typer.Option(
        None,
        "--from",
        help="Start time to narrow down the search (ISO-8601)",
        metavar="TIMESTAMP",
    ),
    to: Optional[str] = typer.Option(
        None,
        "--to",
        help="End time to narrow down the search (ISO-8601, exclusive)",
        metavar="TIMESTAMP",
    ),
    dsn: Optional[str] = typer.Option(
        None,
        "--dsn",
        help="DuckDB database holding the outcomes table [env: OUTCOMES_LOOKUP_DSN]",
    ),
    table: Optional[str] = typer.Option(
        None,
        "--table",
        help="Outcomes table name [env: OUTCOMES_LOOKUP_TABLE]",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    fmt: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: text (default), json",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress all but ERROR logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_show_version,
        is_eager=True,
    ),
):
    """
    Look up the outcomes recorded for an event.

    Narrowing the time window with --day or --from/--to makes the lookup
    much faster; without one the whole table is scanned.

    [bold cyan]Examples:[/bold cyan]

      outcomes-lookup 7 -p 42 --day 2024-01-15

      outcomes-lookup 7 -p 42 --from 2024-01-15T10:00:00 --to 2024-01-15T12:00:00

      outcomes-lookup 7 -p 42 --format json | jq .outcome
    """
    if verbose and quiet:
        console.print("[red]Error:[/red] --verbose and --quiet are mutually exclusive")
        raise typer.Exit(1)

    if fmt not in FORMATS:
        console.print(f"[red]Error:[/red] --format must be one of: {', '.join(FORMATS)}")
        raise typer.Exit(1)

    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        lookup_filter = LookupFilter(
            project_id=project_id,
            event_id=event_id,
            day=_parse_day(day),
            from_=_parse_timestamp(from_),
            to=_parse_timestamp(to),
            org_id=org_id,
        )
        time_range = resolve(lookup_filter)
        logger.debug("Resolved time range: [%s, %s)", time_range.start, time_range.end)

        settings = load_config(config_file=config, dsn=dsn, table=table)
        logger.debug("Loaded settings: %s", settings)

        with execute(
            settings,
            lookup_filter.project_id,
            lookup_filter.event_id,
            time_range,
            org_id=lookup_filter.org_id,
        ) as rows:
            print_records(rows, fmt=fmt)

    except OutcomesLookupError as e:
        logger.debug("%s: %s", e.__class__.__name__, e)
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(e.exit_code)

    except KeyboardInterrupt:
        logger.info("Lookup interrupted by user")
        console.print("\n[yellow]Lookup interrupted[/yellow]")
        raise typer.Exit(130)
