"""Data models and command types for ``days``.

The backing file holds one :class:`Event` per line. Everything above the store
works on these immutable values; commands are produced once by the CLI and
handed to :func:`days.api.run` unchanged.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, field_validator

# Field separator of the on-disk format. There is no quoting or escaping, so
# neither category nor description may contain it.
DELIMITER = ","


# ---------------------------------------------------------------------------
# Stored records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Event:
    """A single dated event.

    Attributes
    ----------
    date:
        Calendar date, no time component or timezone.
    category:
        Free-text label. ``""`` means "no category" and is a meaningful value,
        not a missing field.
    description:
        Free-text label.
    """

    date: dt.date
    category: str
    description: str


class ParseFailure(NamedTuple):
    """A data line that could not be decoded into an :class:`Event`."""

    line_number: int
    """1-based line number within the backing file (header is line 1)."""

    line: str
    """The raw line without its terminator."""

    reason: str


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Everything a load produced, in file order."""

    events: tuple[Event, ...]
    failures: tuple[ParseFailure, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True for the "no events found" outcome (not an error)."""

        return not self.events


# ---------------------------------------------------------------------------
# Validated input for ``add``
# ---------------------------------------------------------------------------


class NewEvent(BaseModel):
    """Validated input for appending one event.

    Rejects an empty description and any field containing the delimiter, so
    the tool never writes a line it could not read back.
    """

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    date: dt.date
    category: str = ""
    description: str

    @field_validator("description")
    @classmethod
    def _description_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description must be non-empty")
        return v

    @field_validator("category", "description")
    @classmethod
    def _no_delimiter(cls, v: str) -> str:
        if DELIMITER in v or "\n" in v or "\r" in v:
            raise ValueError(f"must not contain {DELIMITER!r} or line breaks")
        return v

    def to_event(self) -> Event:
        return Event(date=self.date, category=self.category, description=self.description)


# ---------------------------------------------------------------------------
# Filters and commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EventFilter:
    """Declarative description of which events a command targets.

    Every clause left at its default imposes no constraint; the specified
    clauses are combined with AND by :func:`days.predicates.build_predicate`.

    ``before``/``after`` are exclusive bounds. Given together they select the
    open interval between them, or, with ``outside=True``, everything before
    ``before`` OR after ``after``. ``range_start``/``range_end`` form the
    separate inclusive range and must be given together.
    """

    today: bool = False
    on_date: dt.date | None = None
    before: dt.date | None = None
    after: dt.date | None = None
    outside: bool = False
    range_start: dt.date | None = None
    range_end: dt.date | None = None
    categories: frozenset[str] | None = None
    exclude: frozenset[str] | None = None
    no_category: bool = False
    category: str | None = None
    description_prefix: str | None = None
    match_all: bool = False


@dataclass(frozen=True, slots=True)
class ListCommand:
    filter: EventFilter = field(default_factory=EventFilter)


@dataclass(frozen=True, slots=True)
class AddCommand:
    description: str
    category: str = ""
    date: dt.date | None = None


@dataclass(frozen=True, slots=True)
class DeleteCommand:
    filter: EventFilter
    dry_run: bool = False


type Command = ListCommand | AddCommand | DeleteCommand
"""The three things a single invocation can do."""


@dataclass(frozen=True, slots=True)
class Outcome:
    """Result of running one command, for display by the caller.

    ``events`` holds the listed, added, deleted or would-be-deleted events in
    file order. ``empty_store`` is set when the backing file held no events.
    """

    command: Command
    events: tuple[Event, ...] = ()
    empty_store: bool = False


__all__ = [
    "DELIMITER",
    "AddCommand",
    "Command",
    "DeleteCommand",
    "Event",
    "EventFilter",
    "ListCommand",
    "LoadResult",
    "NewEvent",
    "Outcome",
    "ParseFailure",
]
