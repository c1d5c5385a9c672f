"""Console rendering of events and command outcomes."""

from __future__ import annotations

import datetime as dt

from rich.console import Console
from rich.markup import escape

from .codec import format_date
from .models import AddCommand, DeleteCommand, Event, ListCommand, Outcome


def format_delta(days: int) -> str:
    if days < 0:
        return f"{abs(days)} days ago"
    if days > 0:
        return f"in {days} days"
    return "today"


def format_event(event: Event, *, current: dt.date) -> str:
    """``YYYY-MM-DD: description (category) - <relative day>``."""

    delta = (event.date - current).days
    return (
        f"{format_date(event.date)}: {event.description} ({event.category}) - "
        f"{format_delta(delta)}"
    )


def render_outcome(outcome: Outcome, *, current: dt.date, console: Console) -> None:
    """Print the result of one command."""

    command = outcome.command
    if isinstance(command, ListCommand):
        if outcome.empty_store:
            console.print("No events found")
            return
        for event in outcome.events:
            console.print(escape(format_event(event, current=current)), highlight=False)
        return

    if isinstance(command, AddCommand):
        for event in outcome.events:
            console.print(
                "[green]Added:[/green] " + escape(format_event(event, current=current)),
                highlight=False,
            )
        return

    if isinstance(command, DeleteCommand):
        prefix = "[yellow]Would delete:[/yellow] " if command.dry_run else "[red]Deleted:[/red] "
        for event in outcome.events:
            console.print(prefix + escape(format_event(event, current=current)), highlight=False)
        n = len(outcome.events)
        noun = "event" if n == 1 else "events"
        if command.dry_run:
            console.print(f"{n} {noun} would be deleted (dry run, nothing changed)")
        else:
            console.print(f"Deleted {n} {noun}")


__all__ = ["format_delta", "format_event", "render_outcome"]
