import datetime as dt
from pathlib import Path

import pytest

from days import api, store
from days.config import load_settings
from days.errors import UsageError
from days.models import AddCommand, DeleteCommand, Event, EventFilter, ListCommand
from tests.helpers.events_file import HEADER, SAMPLE_LINES, read_lines, write_events_file

D = dt.date
TODAY = D(2024, 6, 1)


# ---- list ----------------------------------------------------------------------


def test_list_events_filters_in_file_order(events_path: Path):
    write_events_file(events_path, ["2024-06-01,,trip", "2024-01-01,work,standup", "2024-06-01,work,demo"])
    out = api.list_events(events_path, EventFilter(today=True), current=TODAY)
    assert [e.description for e in out.events] == ["trip", "demo"]
    assert not out.empty_store


def test_list_events_on_empty_store_is_distinguished(events_path: Path):
    write_events_file(events_path, [])
    out = api.list_events(events_path, EventFilter(), current=TODAY)
    assert out.empty_store
    assert out.events == ()


def test_list_events_no_match_is_not_empty_store(events_path: Path):
    write_events_file(events_path, SAMPLE_LINES)
    out = api.list_events(events_path, EventFilter(category="nope"), current=TODAY)
    assert not out.empty_store
    assert out.events == ()


# ---- add -----------------------------------------------------------------------


def test_add_event_defaults_date_to_current(events_path: Path):
    write_events_file(events_path, SAMPLE_LINES)
    event = api.add_event(events_path, description="dentist", category="health", current=TODAY)
    assert event == Event(TODAY, "health", "dentist")
    assert read_lines(events_path)[-1] == "2024-06-01,health,dentist"


def test_add_event_then_load_counts_one_more(events_path: Path):
    write_events_file(events_path, SAMPLE_LINES)
    api.add_event(events_path, description="x", date=D(2020, 1, 1), current=TODAY)
    loaded = store.load(events_path)
    assert len(loaded.events) == len(SAMPLE_LINES) + 1
    assert loaded.events[-1] == Event(D(2020, 1, 1), "", "x")


@pytest.mark.parametrize(
    ("description", "category"),
    [("", "work"), ("   ", "work"), ("a,b", "work"), ("ok", "a,b"), ("two\nlines", "")],
)
def test_add_event_rejects_invalid_input(events_path: Path, description: str, category: str):
    write_events_file(events_path, SAMPLE_LINES)
    before = events_path.read_bytes()
    with pytest.raises(UsageError):
        api.add_event(events_path, description=description, category=category, current=TODAY)
    assert events_path.read_bytes() == before


# ---- delete --------------------------------------------------------------------


@pytest.mark.parametrize(
    "f",
    [
        EventFilter(description_prefix="st"),
        EventFilter(category="work"),
        EventFilter(on_date=D(2024, 1, 1)),
        EventFilter(on_date=D(2024, 1, 1), category="work"),
        EventFilter(on_date=D(2024, 1, 1), category="work", description_prefix="st"),
        EventFilter(match_all=True),
        EventFilter(range_start=D(2024, 1, 1), range_end=D(2024, 1, 31)),
    ],
)
def test_supported_delete_forms_validate(f: EventFilter):
    api.validate_delete_filter(f)


@pytest.mark.parametrize(
    "f",
    [
        EventFilter(),
        EventFilter(range_start=D(2024, 1, 1)),
        EventFilter(on_date=D(2024, 1, 1), description_prefix="st"),
        EventFilter(match_all=True, category="work"),
        EventFilter(today=True),
        EventFilter(no_category=True),
    ],
)
def test_unsupported_delete_forms_are_usage_errors(events_path: Path, f: EventFilter):
    write_events_file(events_path, SAMPLE_LINES)
    before = events_path.read_bytes()
    with pytest.raises(UsageError):
        api.delete_events(events_path, f, current=TODAY)
    assert events_path.read_bytes() == before


def test_dry_run_reports_exactly_what_real_delete_removes(events_path: Path):
    lines = [
        "2024-01-01,work,standup",
        "2024-01-01,work,retro",
        "2024-01-01,home,standing desk",
        "2024-01-02,work,standup",
    ]
    write_events_file(events_path, lines)
    f = EventFilter(on_date=D(2024, 1, 1), category="work", description_prefix="stand")

    preview = api.delete_events(events_path, f, current=TODAY, dry_run=True)
    assert read_lines(events_path)[1:] == lines

    removed = api.delete_events(events_path, f, current=TODAY)
    assert preview == removed == [Event(D(2024, 1, 1), "work", "standup")]
    assert read_lines(events_path)[1:] == lines[1:]


def test_delete_inclusive_range(events_path: Path):
    write_events_file(
        events_path, ["2023-12-31,a,x", "2024-01-01,a,y", "2024-01-31,a,z", "2024-02-01,a,w"]
    )
    f = EventFilter(range_start=D(2024, 1, 1), range_end=D(2024, 1, 31))
    removed = api.delete_events(events_path, f, current=TODAY)
    assert [e.description for e in removed] == ["y", "z"]
    assert read_lines(events_path) == [HEADER, "2023-12-31,a,x", "2024-02-01,a,w"]


# ---- run -----------------------------------------------------------------------


def test_run_dispatches_each_command(data_dir: Path, events_path: Path):
    settings = load_settings()
    assert settings.events_path == events_path
    write_events_file(events_path, SAMPLE_LINES)

    added = api.run(AddCommand(description="gig", category="music"), settings=settings, current=TODAY)
    assert added.events == (Event(TODAY, "music", "gig"),)

    listed = api.run(ListCommand(EventFilter(today=True)), settings=settings, current=TODAY)
    assert [e.description for e in listed.events] == ["trip", "gig"]

    deleted = api.run(
        DeleteCommand(EventFilter(category="music"), dry_run=False), settings=settings, current=TODAY
    )
    assert deleted.events == (Event(TODAY, "music", "gig"),)
    assert read_lines(events_path)[1:] == list(SAMPLE_LINES)


def test_run_rejects_unknown_command():
    with pytest.raises(TypeError):
        api.run(object(), settings=load_settings(), current=TODAY)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "f",
    [
        EventFilter(description_prefix=""),
        EventFilter(on_date=D(2024, 1, 1), category="work", description_prefix=""),
    ],
)
def test_empty_description_prefix_is_rejected(events_path: Path, f: EventFilter):
    write_events_file(events_path, SAMPLE_LINES)
    before = events_path.read_bytes()
    with pytest.raises(UsageError, match="--all"):
        api.delete_events(events_path, f, current=TODAY)
    assert events_path.read_bytes() == before


def test_empty_category_deletes_only_uncategorized_events(events_path: Path):
    write_events_file(events_path, SAMPLE_LINES)
    outcome = api.delete_events(events_path, EventFilter(category=""), current=TODAY)
    assert [e.description for e in outcome.events] == ["trip"]
    assert read_lines(events_path) == [HEADER, "2024-01-01,work,standup"]
