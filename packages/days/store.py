"""Backing-file I/O: load, append, and the atomic delete rewrite.

Layout::

    <data_dir>/events.csv       header line, then one event per line
    <data_dir>/events.csv.tmp   only exists while a rewrite is in progress

Atomicity: a rewrite streams into the ``.tmp`` sibling, fsyncs it, then
``os.replace``s it over the original. Any failure removes the temp file and
leaves the original untouched.

Deletion selects lines by decoding each raw line and testing the decoded event
against the predicate. Kept lines are copied byte-for-byte, and lines that do
not decode (including the header) are always kept. :func:`scan` walks the
file through the same selection as :func:`rewrite` without writing, which is
what dry-run reports.
"""

from __future__ import annotations

import contextlib
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from . import codec
from .errors import MutationError, StoreDirectoryMissingError, StoreOpenError
from .logging_setup import get_logger
from .models import Event, LoadResult, ParseFailure
from .predicates import Predicate

_logger = get_logger("days.store")


def temp_path_for(path: Path) -> Path:
    return path.with_suffix(path.suffix + ".tmp")


def _require_directory(path: Path) -> None:
    if not path.parent.is_dir():
        raise StoreDirectoryMissingError(f"{path.parent} does not exist, please create it")


def _open_for_read(path: Path):
    # newline="" keeps "\r\n" intact so kept lines are copied verbatim.
    return path.open("r", encoding="utf-8", newline="")


# ---- Load --------------------------------------------------------------------


def load(path: Path) -> LoadResult:
    """Read and decode the whole backing file.

    The first line is the header and is never decoded. Blank lines are
    ignored; every other line that fails to decode is logged and skipped.
    An empty result is returned as such (``LoadResult.is_empty``), not raised.
    """

    _require_directory(path)

    events: list[Event] = []
    failures: list[ParseFailure] = []
    try:
        with _open_for_read(path) as f:
            for n, line in enumerate(f, start=1):
                if n == 1 or not line.strip():
                    continue
                decoded = codec.decode(line, line_number=n)
                if isinstance(decoded, ParseFailure):
                    _logger.warning("%s line %d skipped: %s", path.name, n, decoded.reason)
                    failures.append(decoded)
                    continue
                events.append(decoded)
    except (OSError, UnicodeError) as e:
        raise StoreOpenError(f"Error reading {path}: {e}") from e

    _logger.debug("loaded events=%d skipped=%d path=%s", len(events), len(failures), path)
    return LoadResult(events=tuple(events), failures=tuple(failures))


# ---- Append ------------------------------------------------------------------


def _needs_leading_newline(path: Path) -> bool:
    with path.open("rb") as f:
        f.seek(0, os.SEEK_END)
        if f.tell() == 0:
            return False
        f.seek(-1, os.SEEK_END)
        return f.read(1) != b"\n"


def append(path: Path, event: Event) -> None:
    """Append one encoded event as a single write followed by flush + fsync.

    A missing or empty file gets the header first. A file whose last line
    lacks a terminator gets one so the new record starts on its own line.
    """

    _require_directory(path)

    payload = codec.encode(event) + "\n"
    try:
        if not path.exists() or path.stat().st_size == 0:
            payload = codec.HEADER + "\n" + payload
        elif _needs_leading_newline(path):
            payload = "\n" + payload
        with path.open("a", encoding="utf-8", newline="") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
    except (OSError, UnicodeError) as e:
        raise MutationError(f"Failed to append to {path}: {e}") from e

    _logger.info("appended %s", codec.encode(event))


# ---- Delete ------------------------------------------------------------------


def _walk(
    lines: Iterable[str], predicate: Predicate, *, name: str
) -> Iterator[tuple[str, Event | None]]:
    """Yield ``(raw_line, matched_event)`` for every line, in file order.

    ``matched_event`` is ``None`` for lines that are kept. Lines that do not
    decode are kept and reported the same way :func:`load` reports them.
    """

    for n, line in enumerate(lines, start=1):
        if n == 1:
            yield line, None
            continue
        decoded = codec.decode(line, line_number=n)
        if isinstance(decoded, ParseFailure):
            if line.strip():
                _logger.warning("%s line %d skipped: %s", name, n, decoded.reason)
            yield line, None
        elif predicate(decoded):
            yield line, decoded
        else:
            yield line, None


def scan(path: Path, predicate: Predicate) -> list[Event]:
    """Return the events :func:`rewrite` would remove, without touching the file."""

    _require_directory(path)
    try:
        with _open_for_read(path) as f:
            return [hit for _line, hit in _walk(f, predicate, name=path.name) if hit is not None]
    except (OSError, UnicodeError) as e:
        raise StoreOpenError(f"Error reading {path}: {e}") from e


def rewrite(path: Path, predicate: Predicate) -> list[Event]:
    """Drop every line whose event matches ``predicate``; return what was dropped.

    When nothing matches the original is left as is and no rename happens.
    Raises :class:`~days.errors.MutationError` on any I/O failure, after
    removing the temp file; the original file is unchanged in that case.
    """

    _require_directory(path)
    tmp = temp_path_for(path)

    removed: list[Event] = []
    try:
        with _open_for_read(path) as src, tmp.open("w", encoding="utf-8", newline="") as dst:
            for line, hit in _walk(src, predicate, name=path.name):
                if hit is not None:
                    removed.append(hit)
                    continue
                dst.write(line)
            dst.flush()
            os.fsync(dst.fileno())

        if not removed:
            tmp.unlink()
            return removed

        os.replace(tmp, path)
    except (OSError, UnicodeError) as e:
        with contextlib.suppress(FileNotFoundError):
            tmp.unlink()
        raise MutationError(f"Failed to rewrite {path}: {e}") from e
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            tmp.unlink()
        raise

    _logger.info("rewrote %s removed=%d", path.name, len(removed))
    return removed


__all__ = ["append", "load", "rewrite", "scan", "temp_path_for"]
