"""Line codec for the backing file.

On-disk format (one header line, then one event per line)::

    date,category,description
    2024-01-01,work,standup
    2024-06-01,,trip

Fields are positional and unquoted. A delimiter inside a field shifts the
columns of that row and makes it undecodable; :class:`~days.models.NewEvent`
keeps the tool itself from writing such rows.
"""

from __future__ import annotations

import datetime as dt
import re

from .models import DELIMITER, Event, ParseFailure

HEADER = DELIMITER.join(("date", "category", "description"))
DATE_FORMAT = "%Y-%m-%d"

# ASCII digits only.
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_date(text: str) -> dt.date:
    """Parse ``YYYY-MM-DD`` exactly; raise ``ValueError`` on anything else.

    ``strptime`` alone accepts single-digit months and days, so the shape is
    checked first.
    """

    s = text.strip()
    if not _DATE_RE.fullmatch(s):
        raise ValueError(f"invalid date {text!r}: expected YYYY-MM-DD")
    try:
        return dt.datetime.strptime(s, DATE_FORMAT).date()
    except ValueError as e:
        raise ValueError(f"invalid date {text!r}: {e}") from e


def format_date(value: dt.date) -> str:
    # Always a four-digit year, e.g. 0999-01-01.
    return value.isoformat()


def encode(event: Event) -> str:
    """Return the canonical line for ``event`` (no trailing newline)."""

    return DELIMITER.join((format_date(event.date), event.category, event.description))


def decode(line: str, *, line_number: int = 0) -> Event | ParseFailure:
    """Decode one data line.

    Returns a :class:`~days.models.ParseFailure` instead of raising so that a
    load can report the line and carry on with the rest of the file.
    """

    raw = line.rstrip("\r\n")
    fields = raw.split(DELIMITER)
    if len(fields) != 3:
        return ParseFailure(line_number, raw, f"expected 3 fields, got {len(fields)}")

    date_str, category, description = fields
    try:
        date = parse_date(date_str)
    except ValueError:
        return ParseFailure(line_number, raw, f"bad date: {date_str}")
    return Event(date=date, category=category, description=description)


__all__ = ["DATE_FORMAT", "HEADER", "decode", "encode", "format_date", "parse_date"]
