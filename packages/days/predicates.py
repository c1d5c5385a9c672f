"""Filter predicates shared by ``list`` and ``delete``.

A predicate is a pure ``Callable[[Event], bool]``. Builders return closures
over their arguments; combinators compose them. Evaluation order never
matters, and :func:`select` keeps the input (file) order of whatever passes.

:func:`build_predicate` turns a declarative :class:`~days.models.EventFilter`
into one predicate so that listing, dry-run and real deletion all evaluate the
exact same function.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable, Iterable

from .errors import UsageError
from .models import DELIMITER, Event, EventFilter

type Predicate = Callable[[Event], bool]


# ---- Builders ----------------------------------------------------------------


def match_all(event: Event) -> bool:
    return True


def today(current: dt.date) -> Predicate:
    return on_date(current)


def on_date(d: dt.date) -> Predicate:
    def _pred(event: Event) -> bool:
        return event.date == d

    return _pred


def before(d: dt.date) -> Predicate:
    def _pred(event: Event) -> bool:
        return event.date < d

    return _pred


def after(d: dt.date) -> Predicate:
    def _pred(event: Event) -> bool:
        return event.date > d

    return _pred


def between(start: dt.date, end: dt.date) -> Predicate:
    """Inclusive range ``start <= date <= end``."""

    def _pred(event: Event) -> bool:
        return start <= event.date <= end

    return _pred


def category_in(categories: Iterable[str]) -> Predicate:
    wanted = frozenset(categories)

    def _pred(event: Event) -> bool:
        return event.category in wanted

    return _pred


def category_not_in(categories: Iterable[str]) -> Predicate:
    excluded = frozenset(categories)

    def _pred(event: Event) -> bool:
        return event.category not in excluded

    return _pred


def no_category(event: Event) -> bool:
    return event.category == ""


def category_equals(category: str) -> Predicate:
    def _pred(event: Event) -> bool:
        return event.category == category

    return _pred


def description_prefix(prefix: str) -> Predicate:
    """Case-sensitive prefix match on the description."""

    def _pred(event: Event) -> bool:
        return event.description.startswith(prefix)

    return _pred


# ---- Combinators -------------------------------------------------------------


def all_of(*preds: Predicate) -> Predicate:
    """Logical AND; with no arguments this matches everything."""

    if not preds:
        return match_all
    if len(preds) == 1:
        return preds[0]

    def _pred(event: Event) -> bool:
        return all(p(event) for p in preds)

    return _pred


def any_of(*preds: Predicate) -> Predicate:
    """Logical OR; with no arguments this matches nothing."""

    def _pred(event: Event) -> bool:
        return any(p(event) for p in preds)

    return _pred


def select(events: Iterable[Event], predicate: Predicate) -> list[Event]:
    """Return the events that satisfy ``predicate`` in their original order."""

    return [e for e in events if predicate(e)]


# ---- Argument helpers --------------------------------------------------------


def parse_category_set(raw: str) -> frozenset[str]:
    """Split a comma-joined argument into trimmed category names.

    ``"work, home"`` becomes ``{"work", "home"}``. Commas cannot be escaped.
    Empty tokens are dropped; an argument with no names at all is a usage
    error.
    """

    tokens = [t.strip() for t in raw.split(DELIMITER)]
    names = frozenset(t for t in tokens if t)
    if not names:
        raise UsageError(f"no category names in {raw!r}")
    return names


def build_predicate(f: EventFilter, *, current: dt.date) -> Predicate:
    """Compile ``f`` into a single predicate (AND of every specified clause).

    ``current`` is the run's single notion of "today"; callers sample it once.
    """

    clauses: list[Predicate] = []

    if f.today:
        clauses.append(today(current))
    if f.on_date is not None:
        clauses.append(on_date(f.on_date))

    if f.outside and (f.before is None or f.after is None):
        raise UsageError("--outside needs both --before-date and --after-date")
    if f.before is not None and f.after is not None:
        if f.outside:
            clauses.append(any_of(before(f.before), after(f.after)))
        else:
            clauses.append(all_of(before(f.before), after(f.after)))
    elif f.before is not None:
        clauses.append(before(f.before))
    elif f.after is not None:
        clauses.append(after(f.after))

    if (f.range_start is None) != (f.range_end is None):
        raise UsageError("an inclusive range needs both --from and --to")
    if f.range_start is not None and f.range_end is not None:
        if f.range_start > f.range_end:
            raise UsageError(
                f"range start {f.range_start.isoformat()} is after end {f.range_end.isoformat()}"
            )
        clauses.append(between(f.range_start, f.range_end))

    if f.categories is not None:
        clauses.append(category_in(f.categories))
    if f.exclude is not None:
        clauses.append(category_not_in(f.exclude))
    if f.no_category:
        clauses.append(no_category)
    if f.category is not None:
        clauses.append(category_equals(f.category))
    if f.description_prefix is not None:
        clauses.append(description_prefix(f.description_prefix))

    # ``match_all`` adds nothing beyond the empty conjunction.
    return all_of(*clauses)


__all__ = [
    "Predicate",
    "after",
    "all_of",
    "any_of",
    "before",
    "between",
    "build_predicate",
    "category_equals",
    "category_in",
    "category_not_in",
    "description_prefix",
    "match_all",
    "no_category",
    "on_date",
    "parse_category_set",
    "select",
    "today",
]
