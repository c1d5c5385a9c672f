"""Public interface for the ``days`` package.

Re-exports the operations and models that make up the event store; the
Typer application lives in :mod:`days.cli`.
"""

from .api import add_event, delete_events, list_events, run
from .codec import decode, encode, parse_date
from .models import (
    AddCommand,
    DeleteCommand,
    Event,
    EventFilter,
    ListCommand,
    LoadResult,
    NewEvent,
    Outcome,
    ParseFailure,
)

__version__ = "0.1.0"

__all__ = [
    # API
    "add_event",
    "delete_events",
    "list_events",
    "run",
    # Codec
    "decode",
    "encode",
    "parse_date",
    # Models / commands
    "AddCommand",
    "DeleteCommand",
    "Event",
    "EventFilter",
    "ListCommand",
    "LoadResult",
    "NewEvent",
    "Outcome",
    "ParseFailure",
]
