# tests/test_codec.py

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from cadence.domain.task import (
    MAX_INTERVAL,
    TaskCloned,
    TaskCreated,
    TaskPaused,
    TodoDone,
    TodoPostponed,
    interval_to_json,
    parse_duration,
    parse_timestamp,
)
from cadence.infrastructure.eventlog import decode_line, encode_line


def test_encode_create_task() -> None:
    event = TaskCreated(title="Water plants", due_every=timedelta(weeks=1), task_id=1, todo_id=1)
    assert encode_line(event) == 'create_task1: ["Water plants", 604800, 1, 1]\n'


def test_encode_create_task_without_interval_and_unicode_title() -> None:
    event = TaskCreated(title="Blumen gießen", due_every=None, task_id=3, todo_id=4)
    assert encode_line(event) == 'create_task1: ["Blumen gießen", null, 3, 4]\n'


def test_encode_complete_todo_uses_canonical_date() -> None:
    event = TodoDone(todo_id=3, completed=datetime(2024, 3, 1, 8, 30))
    assert encode_line(event) == 'complete_todo1: [3, "2024-03-01T08:30:00.000000"]\n'


def test_encode_clone_argument_order() -> None:
    event = TaskCloned(source_task_id=1, title="Copy", new_task_id=2, todo_id=5)
    assert encode_line(event) == 'clone_task1: [1, "Copy", 2, 5]\n'


def test_decode_round_trips_prefix_and_fields() -> None:
    event = decode_line('pause_task1: [4]')
    assert event == TaskPaused(task_id=4)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-03-01T08:30:00.123456", datetime(2024, 3, 1, 8, 30, 0, 123456)),
        ("2019-01-02T03:04:05.123456789", datetime(2019, 1, 2, 3, 4, 5, 123456)),
        ("2019-01-02T03:04:05", datetime(2019, 1, 2, 3, 4, 5)),
        ("2019-01-02 03:04:05.5", datetime(2019, 1, 2, 3, 4, 5, 500000)),
        ("2019-01-02 03:04:05", datetime(2019, 1, 2, 3, 4, 5)),
    ],
)
def test_decode_legacy_completion_dates(raw: str, expected: datetime) -> None:
    event = decode_line(f'complete_todo1: [7, "{raw}"]')
    assert isinstance(event, TodoDone)
    assert event.completed == expected


def test_decode_legacy_interval_object() -> None:
    event = decode_line('create_task1: ["Water", {"secs": 86400, "nanos": 500000000}, 1, 1]')
    assert isinstance(event, TaskCreated)
    assert event.due_every == timedelta(days=1, milliseconds=500)


def test_decode_tolerates_whitespace_and_colons_in_titles() -> None:
    assert decode_line("todo_later1:[2]") == TodoPostponed(todo_id=2)
    assert decode_line("todo_later1: \t [2]") == TodoPostponed(todo_id=2)

    event = decode_line('create_task1: ["Read: chapter 2", 3600.5, 1, 1]')
    assert isinstance(event, TaskCreated)
    assert event.title == "Read: chapter 2"
    assert event.due_every == timedelta(seconds=3600.5)


@pytest.mark.parametrize(
    "line",
    [
        "",
        "no separator here",
        "delete_task1: [1]",
        "pause_task2: [1]",
        "pause_task1: not json",
        "pause_task1: [1, 2]",
        "pause_task1: {}",
        "pause_task1: [true]",
        "pause_task1: [0]",
        'pause_task1: ["1"]',
        'complete_todo1: [1, "yesterday"]',
        'complete_todo1: [1, 20240301]',
        'create_task1: ["Water", -5, 1, 1]',
        'create_task1: ["Water", {"secs": 1}, 1, 1]',
        'create_task1: ["Water", 1e20, 1, 1]',
        'create_task1: ["Water", 3155760001, 1, 1]',
        'create_task1: ["Water", {"secs": 100000000000000000000, "nanos": 0}, 1, 1]',
    ],
)
def test_decode_rejects_malformed_lines(line: str) -> None:
    with pytest.raises(ValueError):
        decode_line(line)


def test_parse_timestamp_rejects_unknown_format() -> None:
    with pytest.raises(ValueError):
        parse_timestamp("01/02/2019")


def test_interval_json_is_integer_when_whole() -> None:
    assert interval_to_json(timedelta(days=30)) == 2592000
    assert isinstance(interval_to_json(timedelta(days=30)), int)
    assert interval_to_json(timedelta(seconds=1.5)) == 1.5
    assert interval_to_json(None) is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("30days", timedelta(days=30)),
        ("2w", timedelta(weeks=2)),
        ("1d 12h", timedelta(days=1, hours=12)),
        ("90m", timedelta(minutes=90)),
        ("45 s", timedelta(seconds=45)),
        ("1.5 weeks", timedelta(days=10, hours=12)),
    ],
)
def test_parse_duration(text: str, expected: timedelta) -> None:
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "  ", "abc", "5 parsecs", "3", "d3", "2w x"])
def test_parse_duration_rejects_garbage(text: str) -> None:
    with pytest.raises(ValueError):
        parse_duration(text)


@pytest.mark.parametrize("text", ["2000000w", "36501d", "9" * 400 + "w"])
def test_parse_duration_rejects_intervals_past_the_limit(text: str) -> None:
    with pytest.raises(ValueError, match="too large"):
        parse_duration(text)


def test_parse_duration_accepts_the_limit() -> None:
    assert parse_duration("36500d") == MAX_INTERVAL
