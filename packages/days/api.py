"""Public operations for the ``days`` package.

Each operation takes the backing-file path and the run's single "current
date" explicitly; nothing in here samples the clock. :func:`run` dispatches a
parsed command (see :mod:`days.models`) to the matching operation.

A run performs at most one mutation and never reuses a collection it loaded
before mutating.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import fields
from pathlib import Path

from pydantic import ValidationError

from . import store
from .config import Settings
from .errors import UsageError
from .logging_setup import get_logger
from .models import (
    AddCommand,
    Command,
    DeleteCommand,
    Event,
    EventFilter,
    ListCommand,
    NewEvent,
    Outcome,
)
from .predicates import build_predicate, select

_logger = get_logger("days.api")

# Filter shapes ``delete`` accepts. Each is a complete, exclusive form; any
# other combination is refused before the file is touched.
_DELETE_FORMS: tuple[frozenset[str], ...] = (
    frozenset({"description_prefix"}),
    frozenset({"category"}),
    frozenset({"on_date"}),
    frozenset({"on_date", "category"}),
    frozenset({"on_date", "category", "description_prefix"}),
    frozenset({"match_all"}),
    frozenset({"range_start", "range_end"}),
)


def _specified_clauses(f: EventFilter) -> frozenset[str]:
    default = EventFilter()
    return frozenset(
        fld.name for fld in fields(f) if getattr(f, fld.name) != getattr(default, fld.name)
    )


def validate_delete_filter(f: EventFilter) -> None:
    """Raise :class:`UsageError` unless ``f`` is one of the supported delete forms."""

    given = _specified_clauses(f)
    if not given:
        raise UsageError("delete needs a filter; pass --all to delete every event")
    # An empty prefix matches every event; --all is the only way to ask for that.
    # An empty --category is kept: it selects events that have no category.
    if f.description_prefix == "":
        raise UsageError("--description must not be empty; pass --all to delete every event")
    if given == {"range_start"} or given == {"range_end"}:
        raise UsageError("an inclusive range needs both --from and --to")
    if given not in _DELETE_FORMS:
        raise UsageError(
            "unsupported delete filter combination: "
            + ", ".join(sorted(given))
            + " (see 'days delete --help')"
        )


def list_events(path: Path, f: EventFilter, *, current: dt.date) -> Outcome:
    """Return events matching ``f`` in file order.

    An empty backing file yields ``Outcome.empty_store``; a filter that matches
    nothing yields an outcome with no events.
    """

    predicate = build_predicate(f, current=current)
    loaded = store.load(path)
    command = ListCommand(filter=f)
    if loaded.is_empty:
        return Outcome(command=command, empty_store=True)
    return Outcome(command=command, events=tuple(select(loaded.events, predicate)))


def add_event(
    path: Path,
    *,
    description: str,
    category: str = "",
    date: dt.date | None = None,
    current: dt.date,
) -> Event:
    """Validate and append one event; the date defaults to ``current``."""

    try:
        new = NewEvent(date=date or current, category=category, description=description)
    except ValidationError as e:
        err = e.errors()[0]
        where = ".".join(str(p) for p in err.get("loc", ()))
        raise UsageError(f"invalid {where or 'event'}: {err.get('msg', e)}") from e

    event = new.to_event()
    store.append(path, event)
    return event


def delete_events(
    path: Path,
    f: EventFilter,
    *,
    current: dt.date,
    dry_run: bool = False,
) -> list[Event]:
    """Delete (or, with ``dry_run``, preview) every event matching ``f``.

    Dry-run and real deletion build the same predicate and walk the file
    through the same selection, so the preview lists exactly what a real run
    removes, in the same order.
    """

    validate_delete_filter(f)
    predicate = build_predicate(f, current=current)
    if dry_run:
        matched = store.scan(path, predicate)
        _logger.debug("dry-run matched=%d", len(matched))
        return matched
    return store.rewrite(path, predicate)


def run(command: Command, *, settings: Settings, current: dt.date) -> Outcome:
    """Execute one parsed command against the configured backing file."""

    path = settings.events_path
    if isinstance(command, ListCommand):
        return list_events(path, command.filter, current=current)
    if isinstance(command, AddCommand):
        event = add_event(
            path,
            description=command.description,
            category=command.category,
            date=command.date,
            current=current,
        )
        return Outcome(command=command, events=(event,))
    if isinstance(command, DeleteCommand):
        matched = delete_events(path, command.filter, current=current, dry_run=command.dry_run)
        return Outcome(command=command, events=tuple(matched))
    raise TypeError(f"unknown command type: {type(command).__name__}")


__all__ = ["add_event", "delete_events", "list_events", "run", "validate_delete_filter"]
