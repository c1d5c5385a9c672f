"""Typer console interface for ``days``.

The root callback loads ``.env`` from the working directory, configures
logging, resolves :class:`~days.config.Settings` and samples the current date
once. Each subcommand turns its options into an immutable command value from
:mod:`days.models` and hands it to :func:`days.api.run`; business logic lives
in ``days.api`` and below.

Errors raised by the core (:class:`~days.errors.DaysError`) are printed to
stderr as ``Error: ...`` and end the process with exit status 1.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .api import run
from .codec import parse_date
from .config import load_settings
from .display import render_outcome
from .errors import DaysError, UsageError
from .logging_setup import configure_logging
from .models import AddCommand, Command, DeleteCommand, EventFilter, ListCommand
from .predicates import parse_category_set

app = typer.Typer(
    name="days",
    no_args_is_help=True,
    add_completion=False,
    help="Track dated events in ~/.days/events.csv and list them relative to today.",
)
console = Console(soft_wrap=True, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, emoji=False)


# ---- Small helpers -----------------------------------------------------------


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    return typer.Exit(1)


def _date_opt(value: str | None, flag: str) -> dt.date | None:
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        raise UsageError(f"{flag}: {e}") from e


def _categories_opt(value: str | None) -> frozenset[str] | None:
    if value is None:
        return None
    return parse_category_set(value)


def _execute(ctx: typer.Context, build: Callable[[], Command]) -> None:
    """Build a command with ``build()`` and run it, mapping errors to exit 1."""

    obj = ctx.ensure_object(dict)
    current: dt.date = obj["current"]
    try:
        command = build()
        outcome = run(command, settings=obj["settings"], current=current)
    except DaysError as e:
        raise _fail(str(e)) from e
    render_outcome(outcome, current=current, console=console)


# ---- Commands ----------------------------------------------------------------


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    today: Annotated[bool, typer.Option("--today", help="Only events dated today.")] = False,
    date: Annotated[
        Optional[str], typer.Option("--date", metavar="YYYY-MM-DD", help="Only events on this date.")
    ] = None,
    before_date: Annotated[
        Optional[str],
        typer.Option("--before-date", metavar="YYYY-MM-DD", help="Events strictly before this date."),
    ] = None,
    after_date: Annotated[
        Optional[str],
        typer.Option("--after-date", metavar="YYYY-MM-DD", help="Events strictly after this date."),
    ] = None,
    outside: Annotated[
        bool,
        typer.Option(
            "--outside",
            help="With both --before-date and --after-date: match either side instead of between.",
        ),
    ] = False,
    range_from: Annotated[
        Optional[str],
        typer.Option("--from", metavar="YYYY-MM-DD", help="Inclusive range start (needs --to)."),
    ] = None,
    range_to: Annotated[
        Optional[str],
        typer.Option("--to", metavar="YYYY-MM-DD", help="Inclusive range end (needs --from)."),
    ] = None,
    categories: Annotated[
        Optional[str],
        typer.Option("--categories", metavar="CAT1,CAT2", help="Only events in these categories."),
    ] = None,
    exclude: Annotated[
        Optional[str],
        typer.Option("--exclude", metavar="CAT1,CAT2", help="Skip events in these categories."),
    ] = None,
    no_category: Annotated[
        bool, typer.Option("--no-category", help="Only events without a category.")
    ] = False,
    description_prefix: Annotated[
        Optional[str],
        typer.Option("--description-prefix", help="Only events whose description starts with this."),
    ] = None,
) -> None:
    """List events, optionally filtered. Filters combine with AND."""

    def build() -> ListCommand:
        return ListCommand(
            filter=EventFilter(
                today=today,
                on_date=_date_opt(date, "--date"),
                before=_date_opt(before_date, "--before-date"),
                after=_date_opt(after_date, "--after-date"),
                outside=outside,
                range_start=_date_opt(range_from, "--from"),
                range_end=_date_opt(range_to, "--to"),
                categories=_categories_opt(categories),
                exclude=_categories_opt(exclude),
                no_category=no_category,
                description_prefix=description_prefix,
            )
        )

    _execute(ctx, build)


@app.command("add")
def add_cmd(
    ctx: typer.Context,
    description: Annotated[str, typer.Option("--description", help="What happens (required).")],
    category: Annotated[str, typer.Option("--category", help="Optional category label.")] = "",
    date: Annotated[
        Optional[str],
        typer.Option("--date", metavar="YYYY-MM-DD", help="Event date (defaults to today)."),
    ] = None,
) -> None:
    """Append one event to the backing file."""

    def build() -> AddCommand:
        return AddCommand(
            description=description,
            category=category,
            date=_date_opt(date, "--date"),
        )

    _execute(ctx, build)


@app.command("delete")
def delete_cmd(
    ctx: typer.Context,
    description: Annotated[
        Optional[str],
        typer.Option("--description", help="Delete events whose description starts with this."),
    ] = None,
    category: Annotated[
        Optional[str], typer.Option("--category", help="Delete events in exactly this category.")
    ] = None,
    date: Annotated[
        Optional[str],
        typer.Option(
            "--date",
            metavar="YYYY-MM-DD",
            help="Delete events on this date (combine with --category [--description]).",
        ),
    ] = None,
    delete_all: Annotated[bool, typer.Option("--all", help="Delete every event.")] = False,
    range_from: Annotated[
        Optional[str],
        typer.Option("--from", metavar="YYYY-MM-DD", help="Inclusive range start (needs --to)."),
    ] = None,
    range_to: Annotated[
        Optional[str],
        typer.Option("--to", metavar="YYYY-MM-DD", help="Inclusive range end (needs --from)."),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show what would be deleted without changing anything.")
    ] = False,
) -> None:
    """Delete matching events. There is no undo; try --dry-run first.

    Accepted forms: --description P | --category C | --date D |
    --date D --category C | --date D --category C --description P |
    --all | --from D1 --to D2.
    """

    def build() -> DeleteCommand:
        return DeleteCommand(
            filter=EventFilter(
                on_date=_date_opt(date, "--date"),
                range_start=_date_opt(range_from, "--from"),
                range_end=_date_opt(range_to, "--to"),
                category=category,
                description_prefix=description,
                match_all=delete_all,
            ),
            dry_run=dry_run,
        )

    _execute(ctx, build)


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    data_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--data-dir",
            file_okay=False,
            dir_okay=True,
            help="Directory holding events.csv (default: $DAYS_HOME or ~/.days).",
        ),
    ] = None,
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables), configures logging, and samples the
    current date once for the whole run.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    try:
        settings = load_settings(data_dir=data_dir)
    except DaysError as e:
        raise _fail(str(e)) from e

    configure_logging(settings.log_level)

    obj = ctx.ensure_object(dict)
    obj["settings"] = settings
    obj["current"] = dt.date.today()


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    main()
